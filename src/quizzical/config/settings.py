from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache
from ..validators.config_validators import to_uppercase, to_lowercase, blank_to_none


class ConfigurationError(RuntimeError):
    """Required configuration is missing or unusable. Raised at bootstrap only."""


class Settings(BaseSettings):
    """
    Application settings loaded from environment.
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration.
    # CONN_STRING (a full URL) wins; otherwise the URL is assembled from POSTGRES_*.
    CONN_STRING: str | None = None
    POSTGRES_DRIVER: str = "psycopg"
    POSTGRES_USERNAME: str | None = None
    POSTGRES_PASSWORD: str | None = None
    POSTGRES_HOST: str | None = None
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str | None = None

    # Test database configuration
    TEST_POSTGRES_DB: str | None = None
    TESTING: bool = False

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # Pagination defaults for list endpoints
    DEFAULT_PAGE: int = 1
    DEFAULT_PAGE_SIZE: int = 10

    # Question reads: match categories by name only (False) or require an active category (True)
    ACTIVE_CATEGORIES_ONLY: bool = False

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/quizzical")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    def _with_driver(self, url: str) -> str:
        # Plain postgres:// URLs (as handed out by most hosting providers) carry no async driver
        for prefix in ("postgres://", "postgresql://"):
            if url.startswith(prefix):
                return f"postgresql+{self.POSTGRES_DRIVER}://" + url[len(prefix):]
        return url

    @property
    def DATABASE_URL(self) -> str:
        """
        Return the database URL for the current environment.

        - CONN_STRING, when set, is used as-is (a bare postgres:// scheme gets the
          configured async driver added).
        - Otherwise the URL is built from POSTGRES_*; with `TESTING=True` and
          `TEST_POSTGRES_DB` set, the test database name replaces POSTGRES_DB so
          tests never touch the regular database.

        Raises:
            ConfigurationError: when neither CONN_STRING nor the POSTGRES_* triple
            (username, host, database) is available.
        """
        if self.CONN_STRING:
            return self._with_driver(self.CONN_STRING)

        database = self.TEST_POSTGRES_DB if (self.TESTING and self.TEST_POSTGRES_DB) else self.POSTGRES_DB
        if not (self.POSTGRES_USERNAME and self.POSTGRES_HOST and database):
            raise ConfigurationError(
                "No database configured: set CONN_STRING or POSTGRES_USERNAME, POSTGRES_HOST and POSTGRES_DB"
            )

        credentials = self.POSTGRES_USERNAME
        if self.POSTGRES_PASSWORD:
            credentials = f"{credentials}:{self.POSTGRES_PASSWORD}"

        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{credentials}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{database}"
        )

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """
        Normalize LOG_LEVEL to uppercase before the Literal check runs, so
        `LOG_LEVEL=debug` is accepted.
        """
        return to_uppercase(v)

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        """
        Normalize the LOG_FORMAT environment variable value to lowercase.
        """
        return to_lowercase(v)

    @field_validator("CONN_STRING", "POSTGRES_PASSWORD", "TEST_POSTGRES_DB", mode="before")
    def empty_as_unset(cls, v: str | None) -> str | None:
        return blank_to_none(v)

    model_config = SettingsConfigDict(
        # .env next to the package root (src/quizzical/.env)
        env_file=str(Path(__file__).parent.parent / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


# get_settings() takes no arguments and always returns the same settings from the environment,
# so caching it with @lru_cache() avoids re-reading the environment on every request.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
