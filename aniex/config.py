from functools import lru_cache
from pathlib import Path
from typing import ClassVar, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_comma_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    app_name: ClassVar[str] = "AniEx"
    version: ClassVar[str] = "0.1.0"

    # --- REQUIRED ---
    # No defaults on purpose: a missing value must stop the server at startup.
    database_url: str = Field(..., alias="DATABASE_URL")
    secret_key: str = Field(..., alias="SECRET_KEY")

    environment: Literal["development", "production"] = "development"

    # --- SESSION ---
    session_cookie_name: str = "aniex_session"
    session_max_age_days: int = 30
    algorithm: str = "HS256"

    # --- SEEDING ---
    # Optional first-run admin. Applied on every startup (idempotent).
    admin_username: Optional[str] = None
    admin_password: Optional[str] = None
    seed_default_servers: bool = False

    # --- LOGGING ---
    log_level: str = "INFO"
    log_dir: Path = Path("storage/logs")
    cache_dir: Path = Path("storage/cache")

    # --- ALLOWED ORIGINS ---
    # Comma-separated list of domains (e.g., "http://localhost:3000,http://localhost:8000")
    # "*" is for local development only; production must list its frontend origins
    allowed_origins_raw: str = Field(default="*", alias="ALLOWED_ORIGINS")

    # --- PROXY SETTINGS ---
    # Comma-separated list of proxy IPs (e.g., "127.0.0.1,172.18.0.1")
    trusted_proxies_raw: str = Field(default="127.0.0.1", alias="TRUSTED_PROXIES")

    model_config = SettingsConfigDict(env_file=".env",
                                      extra="ignore",
                                      env_ignore_empty=True,
                                      case_sensitive=False,
                                      populate_by_name=True,
                                      )

    @property
    def allowed_origins(self) -> list[str]:
        return _split_comma_list(self.allowed_origins_raw)

    @property
    def trusted_proxies(self) -> list[str]:
        return _split_comma_list(self.trusted_proxies_raw)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def credentialed_wildcard_cors(self) -> bool:
        # CORS is set up with allow_credentials, so "*" reflects any caller's origin
        return self.is_production and "*" in self.allowed_origins

    @property
    def session_max_age_seconds(self) -> int:
        return self.session_max_age_days * 24 * 60 * 60


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
