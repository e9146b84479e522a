# core/config.py

from pydantic_settings import BaseSettings, NoDecode
from pydantic import validator
from typing import Annotated, Optional, List

class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Application settings
    app_name: str = "MediTranslate Speech Pipeline"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"  # development, staging, production

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = True

    # CORS settings
    cors_origins: Annotated[List[str], NoDecode] = ["http://localhost:3000", "http://localhost:5173"]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]

    # Remote translation (MyMemory)
    translation_api_url: str = "https://api.mymemory.translated.net/get"
    translation_contact_email: str = "your-email@example.com"
    api_request_timeout: float = 10.0

    # Session defaults
    default_source_language_tag: str = "en-US"
    default_target_language_code: str = "en"
    inactivity_timeout_seconds: float = 300.0  # 5 minutes
    max_session_segments: Optional[int] = None  # None keeps every segment

    # Speech output / clipboard
    speech_rate: float = 0.9  # slightly slower for clarity
    clipboard_timeout_seconds: float = 5.0

    # Transport security
    insecure_transport_hosts: Annotated[List[str], NoDecode] = ["localhost", "127.0.0.1"]

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None

    @validator("cors_origins", "insecure_transport_hosts", pre=True)
    def validate_string_lists(cls, v):
        """Accept a single comma-separated string as well as a list"""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @validator("environment")
    def validate_environment(cls, v):
        """Validate environment setting"""
        allowed_envs = ["development", "staging", "production"]
        if v not in allowed_envs:
            raise ValueError(f"Environment must be one of: {allowed_envs}")
        return v

    @validator("inactivity_timeout_seconds", "api_request_timeout", "clipboard_timeout_seconds")
    def validate_positive_durations(cls, v):
        if v <= 0:
            raise ValueError("Durations must be greater than zero")
        return v

    @validator("speech_rate")
    def validate_speech_rate(cls, v):
        """Synthesis engines accept rates between 0.1 and 10"""
        if not 0.1 <= v <= 10:
            raise ValueError("Speech rate must be between 0.1 and 10")
        return v

    @validator("max_session_segments")
    def validate_max_segments(cls, v):
        if v is not None and v < 1:
            raise ValueError("max_session_segments must be at least 1 when set")
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

# Global settings instance
settings = Settings()
