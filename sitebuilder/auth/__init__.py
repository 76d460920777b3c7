from sitebuilder.auth.oidc import OIDCClient, ProviderMetadata, new_pkce_pair, new_state
from sitebuilder.auth.session import (
    DEMO_CLAIMS,
    SESSION_STATE_KEY,
    SESSION_USER_KEY,
    SESSION_VERIFIER_KEY,
    build_session_user,
    resolve_user,
    user_data_from_claims,
)

__all__ = [
    "OIDCClient",
    "ProviderMetadata",
    "new_pkce_pair",
    "new_state",
    "DEMO_CLAIMS",
    "SESSION_STATE_KEY",
    "SESSION_USER_KEY",
    "SESSION_VERIFIER_KEY",
    "build_session_user",
    "resolve_user",
    "user_data_from_claims",
]
