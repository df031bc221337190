"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database settings
    db_server: str = "localhost"
    db_name: str = "opsroomdb"
    db_user: str = "opsroom"
    db_password: str = ""
    db_port: int = 5432
    db_pool_size: int = 20
    db_max_overflow: int = 40
    sql_echo: bool = False
    # Create tables on startup instead of relying on Alembic (local runs only)
    db_create_all: bool = False

    # Full SQLAlchemy URL; takes precedence over the db_* parts when set
    # (e.g. "sqlite+aiosqlite:///./opsroom.db" for local runs)
    db_url: str = ""

    # JWT settings (tokens are issued by the identity provider)
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_expiration_minutes: int = 1440
    identity_token_url: str = "/auth/token"

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: str = "*"

    # Resample budget when a generated room code collides
    room_code_max_attempts: int = 64

    # Comma-separated caller ids treated as admin until an explicit
    # operator role is assigned to them
    bootstrap_admin_ids: str = ""

    @property
    def database_url(self) -> str:
        """Build the async connection string."""
        if self.db_url:
            return self.db_url
        from urllib.parse import quote_plus
        return (
            f"postgresql+asyncpg://{self.db_user}:{quote_plus(self.db_password)}"
            f"@{self.db_server}:{self.db_port}/{self.db_name}"
        )

    @property
    def sync_database_url(self) -> str:
        """Build the sync connection string for Alembic."""
        if self.db_url:
            return self.db_url.replace("+aiosqlite", "").replace("+asyncpg", "+psycopg2")
        from urllib.parse import quote_plus
        return (
            f"postgresql+psycopg2://{self.db_user}:{quote_plus(self.db_password)}"
            f"@{self.db_server}:{self.db_port}/{self.db_name}"
        )

    @property
    def bootstrap_admins(self) -> frozenset[str]:
        """Parsed set of bootstrap admin caller ids."""
        return frozenset(
            caller.strip()
            for caller in self.bootstrap_admin_ids.split(",")
            if caller.strip()
        )

    @property
    def cors_origin_list(self) -> list[str]:
        """Parsed list of allowed CORS origins."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
