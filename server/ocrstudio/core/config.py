from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import List, Optional
import os
from dotenv import load_dotenv
import logging

logger = logging.getLogger(__name__)

# Load environment variables from .env file with error handling
try:
    load_dotenv(encoding='utf-8')
except UnicodeDecodeError:
    logger.warning(".env file encoding error, trying without encoding specification")
    try:
        load_dotenv()
    except Exception as e:
        logger.warning(f"Could not load .env file: {e}")
except FileNotFoundError:
    logger.warning(".env file not found, using environment variables only")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "OCR Studio Task API"
    VERSION: str = "0.0.1"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # MongoDB Database
    MONGODB_URL: Optional[str] = None
    MONGODB_HOST: str = "localhost"
    MONGODB_PORT: int = 27017
    MONGODB_DATABASE: str = "ocr_studio"
    MONGODB_USERNAME: Optional[str] = None
    MONGODB_PASSWORD: Optional[str] = None

    # File Storage
    OCR_ROOT_PATH: str = "./ocr-data"
    MAX_FILE_SIZE: int = 100  # MB
    SNIFF_BYTES: int = 8192  # bytes inspected when the declared type is generic

    # Paging
    DEFAULT_PAGE_SIZE: int = 20

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        """Parse CORS origins from string if needed."""
        if isinstance(v, str) and v:
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, list):
            return v
        production_origins = os.getenv("PRODUCTION_ORIGINS", "").split(",")
        return [origin.strip() for origin in production_origins if origin.strip()]

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


# Create global settings instance
settings = Settings()
