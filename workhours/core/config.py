"""Configuration system for the work-hours service."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

_FALSE_VALUES = {"0", "false", "False", "no", ""}


@dataclass(slots=True)
class DatabaseSettings:
    """Connection details for the record store."""

    driver: str
    host: str
    port: int
    user: str
    password: str
    name: str
    url: str | None = None

    @property
    def sqlalchemy_url(self) -> str:
        """Build a SQLAlchemy compatible URL."""

        if self.url:
            return self.url
        if self.driver.startswith("sqlite"):
            return f"{self.driver}:///{self.name}"
        if self.password:
            credentials = f"{self.user}:{self.password}"
        else:
            credentials = self.user
        return f"{self.driver}://{credentials}@{self.host}:{self.port}/{self.name}"


@dataclass(slots=True)
class AuthSettings:
    """Session token settings loaded from environment variables."""

    secret_key: str
    algorithm: str
    access_token_expire_minutes: int
    cookie_name: str = "access_token"


@dataclass(slots=True)
class TimesheetSettings:
    """Policy switches for the timesheet engine."""

    restrict_to_today: bool = False


@dataclass(slots=True)
class Settings:
    """Top-level application configuration container."""

    database: DatabaseSettings
    auth: AuthSettings
    timesheet: TimesheetSettings
    sqlalchemy_echo: bool = False
    log_level: str = "INFO"
    log_dir: Path | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Load configuration values from environment variables."""

        def _get_env(name: str, default: str) -> str:
            return os.getenv(name, default)

        def _get_flag(name: str, default: str) -> bool:
            return _get_env(name, default) not in _FALSE_VALUES

        db = DatabaseSettings(
            driver=_get_env("DB_DRIVER", "sqlite"),
            host=_get_env("DB_HOST", "127.0.0.1"),
            port=int(_get_env("DB_PORT", "5432")),
            user=_get_env("DB_USER", "workhours"),
            password=_get_env("DB_PASSWORD", ""),
            name=_get_env("DB_NAME", "workhours.db"),
            url=os.getenv("DATABASE_URL") or None,
        )
        auth = AuthSettings(
            secret_key=_get_env("JWT_SECRET_KEY", "change-me"),
            algorithm=_get_env("JWT_ALGORITHM", "HS256"),
            access_token_expire_minutes=int(_get_env("JWT_EXPIRE_MINUTES", "120")),
        )
        timesheet = TimesheetSettings(
            restrict_to_today=_get_flag("RESTRICT_TO_TODAY", "0"),
        )
        log_dir = os.getenv("LOG_DIR")
        return cls(
            database=db,
            auth=auth,
            timesheet=timesheet,
            sqlalchemy_echo=_get_flag("SQLALCHEMY_ECHO", "0"),
            log_level=_get_env("LOG_LEVEL", "INFO"),
            log_dir=Path(log_dir) if log_dir else None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    settings = Settings.from_env()

    # Import locally to avoid circular dependencies during module import time.
    from .logger import get_logger

    logger = get_logger(__name__)
    logger.debug(
        "Settings initialised",
        extra={
            "sqlalchemy_echo": settings.sqlalchemy_echo,
            "database": {
                "driver": settings.database.driver,
                "host": settings.database.host,
                "port": settings.database.port,
                "name": settings.database.name,
            },
            "auth": {
                "token_ttl": settings.auth.access_token_expire_minutes,
                "cookie": settings.auth.cookie_name,
            },
            "restrict_to_today": settings.timesheet.restrict_to_today,
        },
    )
    return settings
