"""Async OpenID Connect client for the authorization-code flow.

Covers discovery (cached for ``config_ttl`` seconds), PKCE authorization
URLs, code and refresh-token grants, userinfo and end-session URLs against
any standards-compliant issuer.
"""
from __future__ import annotations

import base64
import hashlib
import secrets
import time
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, Field

from sitebuilder.domain.errors import AuthenticationError

SCOPES = "openid email profile offline_access"


class ProviderMetadata(BaseModel):
    """The parts of ``/.well-known/openid-configuration`` the flow uses."""

    issuer: str = Field(..., description="Issuer identifier")
    authorization_endpoint: str = Field(..., description="Where users are sent to log in")
    token_endpoint: str = Field(..., description="Code and refresh grants")
    userinfo_endpoint: Optional[str] = Field(None, description="Claims about the signed-in user")
    end_session_endpoint: Optional[str] = Field(None, description="RP-initiated logout")


def new_state() -> str:
    return secrets.token_urlsafe(32)


def new_pkce_pair() -> Tuple[str, str]:
    """Return (code_verifier, S256 code_challenge)."""
    verifier = secrets.token_urlsafe(64)
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    challenge = base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
    return verifier, challenge


class OIDCClient:
    """Talks to one OpenID provider with ``httpx.AsyncClient``."""

    def __init__(
        self,
        issuer_url: str,
        client_id: str,
        client_secret: str = "",
        config_ttl: int = 3600,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.issuer_url = issuer_url.rstrip("/")
        self.client_id = client_id
        self.client_secret = client_secret
        self.config_ttl = config_ttl
        self.timeout = timeout
        self._transport = transport
        self._metadata: Optional[ProviderMetadata] = None
        self._fetched_at = 0.0

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=httpx.Timeout(self.timeout), transport=self._transport)

    async def discover(self) -> ProviderMetadata:
        """Provider metadata, re-fetched once the cached copy is older than ``config_ttl``."""
        if self._metadata is not None and time.monotonic() - self._fetched_at < self.config_ttl:
            return self._metadata

        url = f"{self.issuer_url}/.well-known/openid-configuration"
        async with self._client() as client:
            response = await client.get(url)
            response.raise_for_status()
            self._metadata = ProviderMetadata(**response.json())
        self._fetched_at = time.monotonic()
        return self._metadata

    async def authorization_url(self, redirect_uri: str, state: str, code_challenge: str) -> str:
        metadata = await self.discover()
        query = urlencode({
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "scope": SCOPES,
            "state": state,
            "code_challenge": code_challenge,
            "code_challenge_method": "S256",
            "prompt": "login consent",
        })
        return f"{metadata.authorization_endpoint}?{query}"

    async def _token_request(self, data: Dict[str, str]) -> Dict[str, Any]:
        metadata = await self.discover()
        async with self._client() as client:
            response = await client.post(
                metadata.token_endpoint,
                data=data,
                auth=(self.client_id, self.client_secret),
            )
        if response.status_code != 200:
            raise AuthenticationError(f"Token endpoint returned {response.status_code}")
        tokens = response.json()
        if "access_token" not in tokens:
            raise AuthenticationError("Token response has no access_token")
        return tokens

    async def exchange_code(self, code: str, redirect_uri: str, code_verifier: str) -> Dict[str, Any]:
        return await self._token_request({
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
            "code_verifier": code_verifier,
        })

    async def refresh(self, refresh_token: str) -> Dict[str, Any]:
        return await self._token_request({
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
        })

    async def fetch_userinfo(self, access_token: str) -> Dict[str, Any]:
        metadata = await self.discover()
        if not metadata.userinfo_endpoint:
            raise AuthenticationError("Provider does not expose a userinfo endpoint")
        async with self._client() as client:
            response = await client.get(
                metadata.userinfo_endpoint,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        if response.status_code != 200:
            raise AuthenticationError(f"Userinfo endpoint returned {response.status_code}")
        claims = response.json()
        if not claims.get("sub"):
            raise AuthenticationError("Userinfo response has no subject")
        return claims

    async def end_session_url(self, post_logout_redirect_uri: str) -> str:
        metadata = await self.discover()
        if not metadata.end_session_endpoint:
            return post_logout_redirect_uri
        query = urlencode({
            "client_id": self.client_id,
            "post_logout_redirect_uri": post_logout_redirect_uri,
        })
        return f"{metadata.end_session_endpoint}?{query}"
