from pydantic_settings import BaseSettings
from pathlib import Path
from typing import Dict, List, Optional
from sqlalchemy.engine import make_url

# Get the repository root directory (parent of sitebuilder directory)
REPO_ROOT = Path(__file__).parent.parent.absolute()

# Values shipped in example .env files; treated as "no key configured"
PLACEHOLDER_API_KEYS = {"", "dummy_key", "your_gemini_api_key_here"}
PLACEHOLDER_CLIENT_IDS = {"", "dummy_client_id"}


class Settings(BaseSettings):
    """Application settings."""

    # API settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 5000
    API_RELOAD: bool = False
    CORS_ORIGINS: List[str] = ["*"]

    # Version and environment
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Storage settings
    STORAGE_TYPE: str = "auto"  # "auto", "memory" or "database"
    DATABASE_URL: Optional[str] = None

    # Generative AI settings
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-1.5-flash"

    # Session / OpenID Connect settings
    SESSION_SECRET: str = "this_is_a_very_long_and_secure_session_secret_for_development_1234567890"
    SESSION_MAX_AGE: int = 7 * 24 * 60 * 60
    ISSUER_URL: str = "https://replit.com/oidc"
    OIDC_CLIENT_ID: str = ""
    OIDC_CLIENT_SECRET: str = ""
    AUTH_DOMAINS: str = ""  # comma separated host names allowed as callback hosts
    OIDC_CONFIG_TTL: int = 3600

    class Config:
        env_file = ".env"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "development"

    @property
    def has_valid_ai_key(self) -> bool:
        return self.GEMINI_API_KEY.strip() not in PLACEHOLDER_API_KEYS

    @property
    def use_database(self) -> bool:
        storage_type = self.STORAGE_TYPE.lower()
        if storage_type == "memory":
            return False
        if storage_type == "database":
            return True
        return bool(self.DATABASE_URL) and not self.is_development

    @property
    def auth_domains(self) -> List[str]:
        return [d.strip() for d in self.AUTH_DOMAINS.split(",") if d.strip()]

    @property
    def is_local_auth(self) -> bool:
        """Mock login is used unless a real OpenID client is configured."""
        return (
            self.is_development
            or not self.auth_domains
            or self.OIDC_CLIENT_ID.strip() in PLACEHOLDER_CLIENT_IDS
        )


def get_db_components(database_url: Optional[str] = None) -> Dict[str, str]:
    """
    Split the configured database URL into the pieces the init/reset scripts need.

    Returns:
        db_url: full SQLAlchemy URL
        db_name: database name
        db_url_without_name: URL of the server's maintenance database ("postgres")
    """
    raw_url = database_url or settings.DATABASE_URL
    if not raw_url:
        raise ValueError("DATABASE_URL must be set to use database storage")

    url = make_url(raw_url)
    if not url.database:
        raise ValueError(f"DATABASE_URL does not name a database: {url.render_as_string()}")
    if not url.database.replace("_", "").replace("-", "").isalnum():
        raise ValueError(f"Unsupported database name: {url.database}")

    server_url = url.set(drivername=url.get_backend_name(), database="postgres")
    return {
        "db_url": url.render_as_string(hide_password=False),
        "db_name": url.database,
        "db_url_without_name": server_url.render_as_string(hide_password=False),
    }


settings = Settings()
