import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()

DEV_JWT_SECRET = "dev-only-change-me"


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    app_env: str = "development"
    database_url: str = "sqlite:///./events.db"

    # -------- JWT --------
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7

    # -------- CLOUDINARY --------
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None
    cloudinary_folder: str = "events"
    max_image_size_mb: int = 5

    # -------- LOGGING --------
    log_dir: str = "logs"
    log_level: str = "INFO"

    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def max_image_size_bytes(self) -> int:
        return self.max_image_size_mb * 1024 * 1024

    @property
    def signing_key(self) -> str:
        """Secret used to sign tokens. Production refuses to run without one."""
        if self.jwt_secret:
            return self.jwt_secret
        if self.is_production:
            raise RuntimeError("JWT_SECRET environment variable not found!")
        return DEV_JWT_SECRET

    def validate(self):
        if self.is_production and not self.jwt_secret:
            raise RuntimeError("JWT_SECRET environment variable not found!")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            app_env=os.getenv("APP_ENV", "development"),
            database_url=os.getenv("DATABASE_URL", "sqlite:///./events.db"),
            jwt_secret=os.getenv("JWT_SECRET"),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7)),
            cloudinary_cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME"),
            cloudinary_api_key=os.getenv("CLOUDINARY_API_KEY"),
            cloudinary_api_secret=os.getenv("CLOUDINARY_API_SECRET"),
            cloudinary_folder=os.getenv("CLOUDINARY_FOLDER", "events"),
            max_image_size_mb=int(os.getenv("MAX_IMAGE_SIZE_MB", 5)),
            log_dir=os.getenv("LOG_DIR", "logs"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            cors_origins=_split_csv(os.getenv("CORS_ORIGINS", "*")),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
