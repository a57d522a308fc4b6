from enum import Enum
from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "app" / "templates"


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: Env = Env.local
    templates_dir: Path = TEMPLATES_DIR
    db_url: str = "sqlite+aiosqlite:///recipe_database.db"
    api_base_url: str = "https://openrouter.ai/api/v1/"
    openrouter_api_key: SecretStr | None = None
    text_model: str = "mistralai/mistral-small-3.1-24b-instruct:free"
    image_model: str = "gpt-4o-mini"
    timeout: float = 60 * 2
    app_referer: str | None = None
    app_title: str | None = "Reseptimasiina"
    log_level: str = "INFO"
