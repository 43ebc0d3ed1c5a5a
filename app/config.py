"""Application configuration."""
from pathlib import Path
from typing import List

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve paths from the package location so the working directory does not matter
_BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "Notes API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/notes.db"

    # CORS
    cors_origins: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    # Media storage
    media_backend: str = "local"  # local or cloudinary
    upload_dir: Path = _BASE_DIR / "static" / "uploads"
    public_base_url: str = ""
    max_upload_size: int = 10 * 1024 * 1024  # 10MB
    cloudinary_cloud_name: str = ""
    cloudinary_api_key: str = ""
    cloudinary_api_secret: str = ""
    cloudinary_folder: str = "notes-app"

    # JWT
    jwt_secret_key: str = "dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 1440  # 24 hours

    # Sharing
    share_path_prefix: str = "/view/note/"

    # Stats
    default_satisfaction_rate: float = 90.0

    @model_validator(mode="after")
    def resolve_paths(self):
        """Resolve a relative upload dir against the project root."""
        if self.upload_dir and not self.upload_dir.is_absolute():
            self.upload_dir = (_BASE_DIR / self.upload_dir).resolve()
        return self

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.upload_dir.mkdir(parents=True, exist_ok=True)


settings = Settings()
