from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database (local record cache)
    database_url: str = "sqlite:///./directory.db"
    auto_create_db: bool = True
    cache_key: str = "volunteers"

    # Remote directory API
    directory_api_url: str = "http://localhost:5000/api/volunteers"
    request_timeout: float = 10.0

    # Image hosting
    image_upload_url: Optional[str] = None
    image_upload_preset: Optional[str] = None
    avatar_background: str = "4f46e5"

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Environment
    environment: str = "development"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
