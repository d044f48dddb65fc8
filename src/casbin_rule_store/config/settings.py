"""
Configuration settings for the Casbin rule store.

Settings can be configured via environment variables or .env file.
"""

from pathlib import Path
from typing import Literal, Optional
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class AdapterSettings(BaseSettings):
    # Using a plain dict for model_config to avoid ConfigDict typing/overload issues
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "populate_by_name": True,
    }

    # Database Settings
    database_url: Optional[str] = Field(
        default=None,
        description="Full SQLAlchemy async DSN, overrides the individual db_* fields",
        alias="CASBIN_DATABASE_URL",
    )
    db_driver: str = Field(
        default="sqlite+aiosqlite",
        description="SQLAlchemy async driver",
        alias="CASBIN_DB_DRIVER",
    )
    db_path: str = Field(
        default="data/casbin.db", description="SQLite database path", alias="CASBIN_DB_PATH"
    )
    db_host: Optional[str] = Field(
        default=None, description="Database host", alias="CASBIN_DB_HOST"
    )
    db_port: Optional[int] = Field(
        default=None, description="Database port", alias="CASBIN_DB_PORT"
    )
    db_user: Optional[str] = Field(
        default=None, description="Database user", alias="CASBIN_DB_USER"
    )
    db_password: Optional[str] = Field(
        default=None, description="Database password", alias="CASBIN_DB_PASSWORD"
    )
    db_name: Optional[str] = Field(
        default=None, description="Database name", alias="CASBIN_DB_NAME"
    )
    db_echo: bool = Field(
        default=False, description="Enable SQLAlchemy echo logging", alias="CASBIN_DB_ECHO"
    )
    sqlite_busy_timeout_seconds: int = Field(
        default=30,
        description="SQLite busy timeout (seconds) when the database is locked",
        alias="CASBIN_SQLITE_BUSY_TIMEOUT_SECONDS",
    )
    sqlite_journal_mode: str = Field(
        default="WAL",
        description="SQLite journal mode (e.g. DELETE, WAL, MEMORY)",
        alias="CASBIN_SQLITE_JOURNAL_MODE",
    )
    sqlite_synchronous: str = Field(
        default="NORMAL",
        description="SQLite synchronous setting (e.g. FULL, NORMAL, OFF)",
        alias="CASBIN_SQLITE_SYNCHRONOUS",
    )

    # Rule table Settings
    create_table: bool = Field(
        default=True,
        description="Create the rule table on open if it does not exist",
        alias="CASBIN_CREATE_TABLE",
    )
    rule_key: Literal["integer", "uuid"] = Field(
        default="integer",
        description="Surrogate key kind of the rule row",
        alias="CASBIN_RULE_KEY",
    )

    # logging
    log_file: Optional[str] = Field(default=None, description="Log file path", alias="CASBIN_LOG_FILE")
    log_level: str = Field(default="INFO", description="Log level", alias="CASBIN_LOG_LEVEL")

    @field_validator("rule_key", mode="before")
    @classmethod
    def normalize_rule_key(cls, value):
        """Accept mixed case and surrounding whitespace from the environment."""
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def is_sqlite(self) -> bool:
        return self.database_dsn.startswith("sqlite")

    @property
    def database_dsn(self) -> str:
        if self.database_url:
            return self.database_url

        driver = (self.db_driver or "sqlite+aiosqlite").lower()
        if driver.startswith("sqlite"):
            db_path = Path(self.db_path)
            db_path.parent.mkdir(parents=True, exist_ok=True)
            return f"{driver}:///{db_path.as_posix()}"

        return self._build_sql_dsn(driver)

    def _build_sql_dsn(self, driver: str) -> str:
        host = self.db_host or "localhost"
        port = self.db_port or (5432 if "postgres" in driver else None)
        username = quote_plus(self.db_user) if self.db_user else ""
        password = quote_plus(self.db_password) if self.db_password else ""
        auth = ""
        if username:
            auth = username
            if password:
                auth += f":{password}"
            auth += "@"

        if port:
            host_part = f"{host}:{port}"
        else:
            host_part = host

        database = self.db_name or ""
        return f"{driver}://{auth}{host_part}/{database}"
