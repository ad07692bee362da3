from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    app_name: str = "Canhotos API"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False

    database_url: str = "sqlite:///./canhotos.db"

    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 8
    bcrypt_rounds: int = 12

    master_admin_email: str = "admin@canhotos.example.com"
    master_admin_name: str = "Master Admin"
    master_admin_initial_password: str = "admin12345"
    seed_master_admin: bool = True

    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:4000", "http://127.0.0.1:4000"])
    upload_dir: str = "data/uploads"
    max_upload_size_mb: int = 5
    default_page_size: int = 30
    max_page_size: int = 100
    auto_create_tables: bool = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
