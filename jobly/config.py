"""Jobly configuration via pydantic-settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings

DEV_AUTH_SECRET = "secret-dev"


class JoblySettings(BaseSettings):
    environment: str = "development"
    database_url: str = "sqlite+aiosqlite:///jobly.db"
    echo_sql: bool = False
    app_title: str = "Jobly"
    log_level: str = "INFO"

    auth_secret: str = DEV_AUTH_SECRET
    auth_token_ttl_seconds: int = 86400
    password_hash_iterations: int = 200_000

    model_config = {"env_prefix": "JOBLY_", "env_file": ".env", "extra": "ignore"}

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() in {"prod", "production"}

    @property
    def uses_dev_secret(self) -> bool:
        secret = self.auth_secret.strip()
        return not secret or secret == DEV_AUTH_SECRET

    @property
    def is_sqlite(self) -> bool:
        return "sqlite" in self.database_url


settings = JoblySettings()
