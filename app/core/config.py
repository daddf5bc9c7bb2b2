"""
Application configuration.
Values are read from environment variables or a local .env file.
"""

from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the catalog admin service"""

    # =========================================================================
    # Application
    # =========================================================================
    APP_NAME: str = Field(default="Catalog Admin API")
    APP_VERSION: str = Field(default="1.0.0")
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # =========================================================================
    # Database
    # =========================================================================
    DATABASE_URL: str = Field(default="sqlite:///./catalog_admin.db")
    DB_ECHO: bool = Field(default=False)

    # =========================================================================
    # Logging
    # =========================================================================
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # =========================================================================
    # HTTP server / CORS
    # =========================================================================
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)
    RELOAD: bool = Field(default=False)
    CORS_ORIGINS: str = Field(default="*", description="Comma-separated list of allowed origins")
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True)

    # =========================================================================
    # Catalog import limits
    # =========================================================================
    MAX_UPLOAD_BYTES: int = Field(default=10 * 1024 * 1024)
    MAX_IMPORT_ROWS: int = Field(default=10000)

    # Recorded on audit entries when the request carries no X-Actor header
    DEFAULT_AUDIT_ACTOR: str = Field(default="system")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def app_name(self) -> str:
        return self.APP_NAME

    @property
    def app_version(self) -> str:
        return self.APP_VERSION

    @property
    def debug(self) -> bool:
        return self.DEBUG

    @property
    def log_format(self) -> str:
        return self.LOG_FORMAT

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def cors_allow_credentials(self) -> bool:
        return self.CORS_ALLOW_CREDENTIALS

    @property
    def host(self) -> str:
        return self.HOST

    @property
    def port(self) -> int:
        return self.PORT

    @property
    def reload(self) -> bool:
        return self.RELOAD


settings = Settings()
