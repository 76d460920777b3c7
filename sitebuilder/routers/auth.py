"""
Login, callback and logout.

With local auth (development, or no OpenID client configured) these are
redirects that sign the demo user in and out. Otherwise they run the OpenID
Connect authorization-code flow with PKCE.
"""
import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from sitebuilder.config import settings
from sitebuilder.auth.oidc import OIDCClient, new_pkce_pair, new_state
from sitebuilder.auth.session import (
    DEMO_CLAIMS,
    SESSION_STATE_KEY,
    SESSION_USER_KEY,
    SESSION_VERIFIER_KEY,
    build_session_user,
    user_data_from_claims,
)
from sitebuilder.dependencies import get_current_user, get_oidc_client
from sitebuilder.domain.entities import UserEntity
from sitebuilder.domain.errors import AuthenticationError, ValidationError
from sitebuilder.schemas.api_schemas import UserResponse
from sitebuilder.storage import ProjectStorage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


def _callback_url(request: Request) -> str:
    """Callback on the host the user came in on; only configured domains are allowed."""
    host = request.url.hostname
    if host not in settings.auth_domains:
        raise ValidationError(f"Unknown authentication domain: {host}")
    return f"https://{host}/api/callback"


@router.get("/auth/user", response_model=UserResponse)
def get_user(user: UserEntity = Depends(get_current_user)):
    return user


@router.get("/login")
async def login(request: Request, oidc: Optional[OIDCClient] = Depends(get_oidc_client)):
    if oidc is None:
        request.session[SESSION_USER_KEY] = build_session_user(DEMO_CLAIMS)
        return RedirectResponse("/", status_code=302)

    redirect_uri = _callback_url(request)
    state = new_state()
    verifier, challenge = new_pkce_pair()
    request.session[SESSION_STATE_KEY] = state
    request.session[SESSION_VERIFIER_KEY] = verifier
    return RedirectResponse(await oidc.authorization_url(redirect_uri, state, challenge), status_code=302)


@router.get("/callback")
async def callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    oidc: Optional[OIDCClient] = Depends(get_oidc_client),
    storage: ProjectStorage = Depends(get_storage),
):
    """
    Finish the login: exchange the code, load the user's claims, store the
    user and the session. Any failure sends the browser back to /api/login.
    """
    if oidc is None:
        return RedirectResponse("/", status_code=302)

    expected_state = request.session.pop(SESSION_STATE_KEY, None)
    verifier = request.session.pop(SESSION_VERIFIER_KEY, None)
    if not code or not state or state != expected_state or not verifier:
        logger.warning("Rejected OpenID callback with missing or mismatched state")
        return RedirectResponse("/api/login", status_code=302)

    try:
        tokens = await oidc.exchange_code(code, _callback_url(request), verifier)
        claims = await oidc.fetch_userinfo(tokens["access_token"])
    except (httpx.HTTPError, AuthenticationError) as exc:
        logger.warning("OpenID callback failed: %s", exc)
        return RedirectResponse("/api/login", status_code=302)

    storage.upsert_user(user_data_from_claims(claims))
    request.session[SESSION_USER_KEY] = build_session_user(claims, tokens)
    logger.info("User %s signed in", claims["sub"])
    return RedirectResponse("/", status_code=302)


@router.get("/logout")
async def logout(request: Request, oidc: Optional[OIDCClient] = Depends(get_oidc_client)):
    request.session.clear()
    if oidc is None:
        return RedirectResponse("/", status_code=302)

    post_logout = f"{request.url.scheme}://{request.url.hostname}"
    return RedirectResponse(await oidc.end_session_url(post_logout), status_code=302)
