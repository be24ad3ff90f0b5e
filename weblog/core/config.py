import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_SQLITE_URL = "sqlite:///./weblog.db"


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    if os.getenv("DB_NAME"):
        return (
            f"postgresql://{os.getenv('DB_USER')}:{os.getenv('DB_PASS')}"
            f"@{os.getenv('DB_HOST')}:{os.getenv('DB_PORT', '5432')}/{os.getenv('DB_NAME')}"
        )
    return DEFAULT_SQLITE_URL


class Settings:
    """Process-wide configuration, read from the environment once at startup."""

    def __init__(
        self,
        database_url: Optional[str] = None,
        secret_key: Optional[str] = None,
        algorithm: str = "HS256",
        access_token_expire_days: Optional[int] = None,
        cloudinary_cloud_name: Optional[str] = None,
        cloudinary_api_key: Optional[str] = None,
        cloudinary_api_secret: Optional[str] = None,
        media_base_url: Optional[str] = None,
        max_image_size: int = 5 * 1024 * 1024,  # 5MB
        cors_origins: Optional[List[str]] = None,
        log_level: Optional[str] = None,
    ):
        self.database_url = database_url or _database_url()
        self.secret_key = secret_key or os.getenv("SECRET_KEY", "supersecretkey")
        self.algorithm = os.getenv("ALGORITHM", algorithm)
        self.access_token_expire_days = access_token_expire_days or int(
            os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", "30")
        )
        self.cloudinary_cloud_name = cloudinary_cloud_name or os.getenv("CLOUDINARY_CLOUD_NAME")
        self.cloudinary_api_key = cloudinary_api_key or os.getenv("CLOUDINARY_API_KEY")
        self.cloudinary_api_secret = cloudinary_api_secret or os.getenv("CLOUDINARY_API_SECRET")
        self.media_base_url = media_base_url or os.getenv("MEDIA_BASE_URL", "")
        self.max_image_size = int(os.getenv("MAX_IMAGE_SIZE", max_image_size))
        if cors_origins is None:
            raw = os.getenv("CORS_ORIGINS", "http://localhost:5173")
            cors_origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
        self.cors_origins = cors_origins
        self.log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
