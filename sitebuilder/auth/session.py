"""The signed-in user as kept in the session cookie, and how it is resolved per request."""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, MutableMapping, Optional

import httpx

from sitebuilder.auth.oidc import OIDCClient
from sitebuilder.domain.entities import UserEntity
from sitebuilder.domain.errors import AuthenticationError
from sitebuilder.storage.interface import ProjectStorage
from sitebuilder.storage.memory import DEMO_USER_ID

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"
SESSION_STATE_KEY = "oidc_state"
SESSION_VERIFIER_KEY = "oidc_code_verifier"

DEMO_CLAIMS: Dict[str, Any] = {
    "sub": DEMO_USER_ID,
    "email": "demo@example.com",
    "first_name": "Demo",
    "last_name": "User",
}


def build_session_user(claims: Dict[str, Any], tokens: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Session payload: claims plus tokens.

    ``expires_at`` is an epoch second taken from ``expires_in`` of the token
    response, else from the ``exp`` claim.
    """
    tokens = tokens or {}
    expires_at = claims.get("exp")
    if tokens.get("expires_in"):
        expires_at = int(time.time()) + int(tokens["expires_in"])
    return {
        "claims": dict(claims),
        "access_token": tokens.get("access_token"),
        "refresh_token": tokens.get("refresh_token"),
        "expires_at": expires_at,
    }


def user_data_from_claims(claims: Dict[str, Any]) -> Dict[str, Any]:
    """Map OpenID claims onto the fields ``ProjectStorage.upsert_user`` takes."""
    return {
        "id": claims["sub"],
        "email": claims.get("email"),
        "first_name": claims.get("first_name") or claims.get("given_name"),
        "last_name": claims.get("last_name") or claims.get("family_name"),
        "profile_image_url": claims.get("profile_image_url") or claims.get("picture"),
    }


def is_expired(session_user: Dict[str, Any], now: Optional[int] = None) -> bool:
    now = int(time.time()) if now is None else now
    return now > int(session_user["expires_at"])


async def resolve_user(
    session: MutableMapping[str, Any],
    storage: ProjectStorage,
    oidc: Optional[OIDCClient],
    local_auth: bool,
) -> UserEntity:
    """
    Return the stored user behind the current session.

    In local development every request is the demo user. Otherwise the
    session must hold a user with an expiry; an expired one is refreshed
    with its refresh token and the session rewritten.

    Raises:
        AuthenticationError: no user, no expiry, or the refresh failed
    """
    if local_auth:
        return storage.get_user(DEMO_USER_ID) or storage.upsert_user(user_data_from_claims(DEMO_CLAIMS))

    session_user = session.get(SESSION_USER_KEY)
    if not session_user or not session_user.get("expires_at"):
        raise AuthenticationError("Unauthorized")

    if is_expired(session_user):
        refresh_token = session_user.get("refresh_token")
        if not refresh_token or oidc is None:
            raise AuthenticationError("Unauthorized")
        try:
            tokens = await oidc.refresh(refresh_token)
        except (httpx.HTTPError, AuthenticationError) as exc:
            logger.info("Token refresh failed: %s", exc)
            raise AuthenticationError("Unauthorized") from exc
        tokens.setdefault("refresh_token", refresh_token)
        session_user = build_session_user(session_user["claims"], tokens)
        session[SESSION_USER_KEY] = session_user

    claims = session_user["claims"]
    return storage.get_user(claims["sub"]) or storage.upsert_user(user_data_from_claims(claims))
