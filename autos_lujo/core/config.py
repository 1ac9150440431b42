from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


# project root (one level above the autos_lujo package)
BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    app_name: str = "Autos de Lujo API"
    app_env: str = "dev"
    log_level: str = "INFO"

    # server
    host: str = "0.0.0.0"
    port: int = 5000

    # security / JWT / DB
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    database_url: str

    # profile images
    media_root: Path = BASE_DIR / "media"
    media_url: str = "/media"

    # Stripe
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    stripe_currency: str = "mxn"

    # frontend used for checkout redirects
    frontend_url: str = "http://localhost:3000"

    # comma separated list of CORS origins
    allowed_origins: str = "http://localhost:3000,https://grovecustom.vercel.app"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
