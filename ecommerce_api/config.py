"""
Application configuration via Pydantic Settings
"""
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings read from environment variables"""

    # Application Settings
    APP_NAME: str = "ecommerce-api"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS Settings
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Metrics Settings
    METRICS_NAMESPACE: Optional[str] = None
    CURRENCY: str = "USD"
    ENABLE_METRICS: bool = True

    # OpenTelemetry Settings
    ENABLE_TELEMETRY: bool = False
    OTLP_ENDPOINT: str = "http://localhost:4317"
    METRICS_EXPORT_INTERVAL_MS: int = 10000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse CORS origins from a comma-separated string"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def metrics_namespace(self) -> str:
        """Measurement namespace, "<service>.ecommerce" unless overridden"""
        return self.METRICS_NAMESPACE or f"{self.APP_NAME}.ecommerce"


# Singleton instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get settings (singleton)"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
