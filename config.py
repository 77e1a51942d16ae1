import os
from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    # Database. Likes use multi-document transactions, so MONGO_URL must point
    # at a replica set or mongos (e.g. mongodb://localhost:27017/?replicaSet=rs0).
    mongo_url: str = os.getenv("MONGO_URL", "mongodb://localhost:27017")
    mongo_db_name: str = os.getenv("MONGO_DB_NAME", "readlogdb")

    # Identity tokens
    secret_key: str = os.getenv("SECRET_KEY", "change-me-in-production")
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7)))  # 7 days

    # Aladin catalog search
    aladin_api_key: Optional[str] = os.getenv("ALADIN_API_KEY")
    aladin_api_base_url: str = os.getenv("ALADIN_API_BASE_URL", "http://www.aladin.co.kr/ttb/api/ItemSearch.aspx")
    aladin_timeout: float = float(os.getenv("ALADIN_TIMEOUT", "10"))

    # Uploads
    public_base_url: str = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000")
    max_profile_image_size: int = int(os.getenv("MAX_PROFILE_IMAGE_SIZE", str(5 * 1024 * 1024)))  # 5MB

    # Application
    app_name: str = os.getenv("APP_NAME", "ReadLog API")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: List[str] = field(default_factory=lambda: _split(os.getenv("CORS_ORIGINS", "*")))


settings = Settings()
