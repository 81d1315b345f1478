"""Application configuration management."""

from sqlalchemy.engine import URL
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # MySQL
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "entregas"

    # Connection pool
    db_pool_size: int = 10
    db_pool_timeout: float = 30.0  # Seconds to wait for a free connection

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    port: int = 3000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment.lower() == "production"

    @property
    def database_url(self) -> URL:
        """SQLAlchemy URL for the async MySQL driver."""
        return URL.create(
            "mysql+aiomysql",
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


# Global settings instance
settings = Settings()
