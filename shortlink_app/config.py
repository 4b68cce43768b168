from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """
    
    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    
    # Application
    app_name: str = "Shortlink"
    app_version: str = "1.0.0"
    
    # Storage settings (shared by the URL store and the click store)
    storage_backend: Literal["memory", "redis"] = "memory"
    redis_url: str = "redis://localhost:6379/0"
    redis_socket_timeout: float = 2.0
    
    # Short code generation
    short_code_length: int = 6
    short_code_max_retries: Optional[int] = None  # None = retry until a free code is found
    
    # Click notification (redirect -> analytics)
    click_notifier: Literal["local", "http"] = "local"
    analytics_service_url: str = "http://localhost:8081"
    click_notify_timeout: float = 5.0
    
    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
