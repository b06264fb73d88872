from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

SSL_MODES = ("disable", "prefer", "require", "verify-ca", "verify-full")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Todo API"
    debug: bool = False

    # HTTP listener
    http_host: str = "0.0.0.0"
    http_port: int = 3000

    # Database
    database_dialect: str = "postgresql+asyncpg"
    database_host: str = "localhost"
    database_port: int = 5432
    database_name: str = "todoapp"
    database_user: str = "postgres"
    database_password: str = ""
    database_ssl_mode: str = "disable"  # disable, prefer, require, verify-ca, verify-full
    database_url: str | None = None  # Overrides the individual parameters above
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Startup
    database_connect_attempts: int = 5
    database_connect_retry_delay: float = 5.0  # seconds, fixed between attempts
    run_migrations_on_startup: bool = True
    alembic_config: str | None = None  # Path to alembic.ini, defaults to the project root

    @field_validator("database_ssl_mode")
    @classmethod
    def validate_ssl_mode(cls, v: str) -> str:
        if v not in SSL_MODES:
            raise ValueError(f"DATABASE_SSL_MODE must be one of: {', '.join(SSL_MODES)}")
        return v

    @field_validator("database_connect_attempts")
    @classmethod
    def validate_connect_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("DATABASE_CONNECT_ATTEMPTS must be at least 1")
        return v

    def sqlalchemy_url(self) -> URL:
        """Build the async database URL from the individual connection parameters.

        DATABASE_URL, when set, wins over the individual parameters.
        """
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            drivername=self.database_dialect,
            username=self.database_user,
            password=self.database_password or None,
            host=self.database_host,
            port=self.database_port,
            database=self.database_name,
        )

    def migration_url(self) -> URL:
        """Sync URL for Alembic (asyncpg -> psycopg2, aiosqlite -> pysqlite).

        libpq takes the SSL mode from the ``sslmode`` query parameter. An
        explicit DATABASE_URL is used as given.
        """
        url = self.sqlalchemy_url()
        url = url.set(drivername=url.get_backend_name())
        if not self.database_url and url.get_backend_name() == "postgresql":
            url = url.update_query_dict({"sslmode": self.database_ssl_mode})
        return url


@lru_cache
def get_settings() -> Settings:
    return Settings()
