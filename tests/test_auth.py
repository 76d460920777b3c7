"""Tests for OpenID Connect login, session users and the auth routes."""
import asyncio
import time
from urllib.parse import parse_qs, urlparse

import httpx
import pytest
from unittest.mock import Mock, patch

from sitebuilder.auth import (
    OIDCClient,
    SESSION_USER_KEY,
    build_session_user,
    new_pkce_pair,
    resolve_user,
    user_data_from_claims,
)
from sitebuilder.dependencies import get_current_user, get_oidc_client
from sitebuilder.domain.errors import AuthenticationError
from sitebuilder.main import app

ISSUER = "https://issuer.example/oidc"
DISCOVERY = {
    "issuer": ISSUER,
    "authorization_endpoint": f"{ISSUER}/auth",
    "token_endpoint": f"{ISSUER}/token",
    "userinfo_endpoint": f"{ISSUER}/userinfo",
    "end_session_endpoint": f"{ISSUER}/logout",
}
CLAIMS = {"sub": "user-42", "email": "ada@example.com", "first_name": "Ada", "last_name": "Lovelace"}


class FakeProvider:
    """Answers OpenID requests in-process and records them."""

    def __init__(self):
        self.requests = []
        self.token_status = 200

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/.well-known/openid-configuration"):
            return httpx.Response(200, json=DISCOVERY)
        if path.endswith("/token"):
            if self.token_status != 200:
                return httpx.Response(self.token_status, json={"error": "invalid_grant"})
            return httpx.Response(200, json={"access_token": "at-1", "refresh_token": "rt-1", "expires_in": 3600})
        if path.endswith("/userinfo"):
            return httpx.Response(200, json=CLAIMS)
        return httpx.Response(404)

    def count(self, suffix):
        return sum(1 for r in self.requests if r.url.path.endswith(suffix))


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def oidc(provider):
    return OIDCClient(ISSUER, "client-id", "secret", transport=httpx.MockTransport(provider))


class TestOIDCClient:
    """Test the protocol client."""

    def test_discovery_is_cached(self, oidc, provider):
        asyncio.run(oidc.discover())
        asyncio.run(oidc.discover())
        assert provider.count("openid-configuration") == 1

    def test_discovery_refetched_after_ttl(self, provider):
        client = OIDCClient(ISSUER, "client-id", config_ttl=0, transport=httpx.MockTransport(provider))
        asyncio.run(client.discover())
        asyncio.run(client.discover())
        assert provider.count("openid-configuration") == 2

    def test_authorization_url(self, oidc):
        url = asyncio.run(oidc.authorization_url("https://app.example/api/callback", "st", "ch"))
        parsed = urlparse(url)
        query = parse_qs(parsed.query)

        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == DISCOVERY["authorization_endpoint"]
        assert query["scope"] == ["openid email profile offline_access"]
        assert query["state"] == ["st"]
        assert query["code_challenge_method"] == ["S256"]
        assert query["redirect_uri"] == ["https://app.example/api/callback"]

    def test_exchange_and_userinfo(self, oidc, provider):
        tokens = asyncio.run(oidc.exchange_code("code-1", "https://app.example/api/callback", "verifier"))
        claims = asyncio.run(oidc.fetch_userinfo(tokens["access_token"]))

        assert tokens["refresh_token"] == "rt-1"
        assert claims["sub"] == "user-42"
        token_request = next(r for r in provider.requests if r.url.path.endswith("/token"))
        body = parse_qs(token_request.content.decode())
        assert body["grant_type"] == ["authorization_code"]
        assert body["code_verifier"] == ["verifier"]

    def test_token_error_raises(self, oidc, provider):
        provider.token_status = 400
        with pytest.raises(AuthenticationError):
            asyncio.run(oidc.refresh("rt-old"))

    def test_end_session_url(self, oidc):
        url = asyncio.run(oidc.end_session_url("https://app.example"))
        query = parse_qs(urlparse(url).query)
        assert url.startswith(DISCOVERY["end_session_endpoint"])
        assert query == {"client_id": ["client-id"], "post_logout_redirect_uri": ["https://app.example"]}

    def test_pkce_pair(self):
        verifier, challenge = new_pkce_pair()
        assert verifier != challenge
        assert "=" not in challenge
        assert len(challenge) == 43


class TestSessionUser:
    """Test session payload helpers."""

    def test_build_session_user_uses_expires_in(self):
        before = int(time.time())
        session_user = build_session_user(CLAIMS, {"access_token": "a", "refresh_token": "r", "expires_in": 60})

        assert session_user["claims"] == CLAIMS
        assert before + 60 <= session_user["expires_at"] <= int(time.time()) + 60

    def test_build_session_user_falls_back_to_exp(self):
        assert build_session_user({**CLAIMS, "exp": 123})["expires_at"] == 123

    def test_user_data_from_standard_claims(self):
        data = user_data_from_claims({"sub": "x", "given_name": "G", "family_name": "F", "picture": "p.png"})
        assert data == {"id": "x", "email": None, "first_name": "G", "last_name": "F", "profile_image_url": "p.png"}


class TestResolveUser:
    """Test per-request user resolution."""

    def test_local_auth_is_demo_user(self, storage):
        user = asyncio.run(resolve_user({}, storage, None, local_auth=True))
        assert user["id"] == "local_user_123"

    def test_no_session_is_401(self, storage):
        with pytest.raises(AuthenticationError):
            asyncio.run(resolve_user({}, storage, None, local_auth=False))

    def test_valid_session(self, storage):
        session = {SESSION_USER_KEY: {**build_session_user(CLAIMS), "expires_at": int(time.time()) + 60}}
        user = asyncio.run(resolve_user(session, storage, None, local_auth=False))

        assert user["id"] == "user-42"
        assert storage.get_user("user-42")["email"] == "ada@example.com"

    def test_expired_session_is_refreshed(self, storage, oidc, provider):
        session_user = {**build_session_user(CLAIMS), "expires_at": 1, "refresh_token": "rt-old"}
        session = {SESSION_USER_KEY: session_user}

        user = asyncio.run(resolve_user(session, storage, oidc, local_auth=False))

        assert user["id"] == "user-42"
        assert session[SESSION_USER_KEY]["access_token"] == "at-1"
        assert session[SESSION_USER_KEY]["expires_at"] > time.time()
        assert provider.count("/token") == 1

    def test_expired_without_refresh_token_is_401(self, storage, oidc):
        session = {SESSION_USER_KEY: {**build_session_user(CLAIMS), "expires_at": 1}}
        with pytest.raises(AuthenticationError):
            asyncio.run(resolve_user(session, storage, oidc, local_auth=False))

    def test_failed_refresh_is_401(self, storage, oidc, provider):
        provider.token_status = 401
        session = {SESSION_USER_KEY: {**build_session_user(CLAIMS), "expires_at": 1, "refresh_token": "rt"}}
        with pytest.raises(AuthenticationError):
            asyncio.run(resolve_user(session, storage, oidc, local_auth=False))


class TestLocalAuthRoutes:
    """Test the mock login flow used in development."""

    @pytest.fixture(autouse=True)
    def local_auth(self, client):
        app.dependency_overrides[get_oidc_client] = lambda: None

    @pytest.mark.parametrize("path", ["/api/login", "/api/callback", "/api/logout"])
    def test_redirects_home(self, client, path):
        response = client.get(path, follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/"

    def test_current_user(self, client):
        response = client.get("/api/auth/user")
        assert response.status_code == 200
        assert response.json()["id"] == "local_user_123"
        assert response.json()["email"] == "demo@example.com"
        assert response.json()["firstName"] == "Demo"


class TestOpenIDRoutes:
    """Test the full OpenID flow against the fake provider."""

    @pytest.fixture(autouse=True)
    def openid(self, client, oidc):
        app.dependency_overrides[get_oidc_client] = lambda: oidc
        app.dependency_overrides.pop(get_current_user, None)
        route_settings = Mock(auth_domains=["testserver"])
        dependency_settings = Mock(is_local_auth=False)
        with patch("sitebuilder.routers.auth.settings", route_settings), \
                patch("sitebuilder.dependencies.settings", dependency_settings):
            yield

    def test_unauthenticated_is_401(self, client):
        response = client.get("/api/auth/user")
        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized"}

    def test_login_callback_logout(self, client, storage):
        login = client.get("/api/login", follow_redirects=False)
        assert login.status_code == 302
        query = parse_qs(urlparse(login.headers["location"]).query)
        assert query["redirect_uri"] == ["https://testserver/api/callback"]

        callback = client.get(
            "/api/callback", params={"code": "code-1", "state": query["state"][0]}, follow_redirects=False
        )
        assert callback.status_code == 302
        assert callback.headers["location"] == "/"
        assert storage.get_user("user-42")["first_name"] == "Ada"

        me = client.get("/api/auth/user")
        assert me.status_code == 200
        assert me.json()["id"] == "user-42"

        logout = client.get("/api/logout", follow_redirects=False)
        assert logout.headers["location"].startswith(DISCOVERY["end_session_endpoint"])
        assert client.get("/api/auth/user").status_code == 401

    def test_callback_with_wrong_state_goes_back_to_login(self, client):
        client.get("/api/login", follow_redirects=False)
        response = client.get("/api/callback", params={"code": "c", "state": "forged"}, follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/api/login"

    def test_callback_token_failure_goes_back_to_login(self, client, provider):
        login = client.get("/api/login", follow_redirects=False)
        state = parse_qs(urlparse(login.headers["location"]).query)["state"][0]
        provider.token_status = 400

        response = client.get("/api/callback", params={"code": "c", "state": state}, follow_redirects=False)
        assert response.headers["location"] == "/api/login"

    def test_login_from_unknown_domain_is_400(self, client):
        with patch("sitebuilder.routers.auth.settings", Mock(auth_domains=["app.example"])):
            response = client.get("/api/login", follow_redirects=False)
        assert response.status_code == 400
