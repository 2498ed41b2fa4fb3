from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_STORAGE_ROOT = PROJECT_ROOT / "storage"
DEFAULT_PROP_FILE = DEFAULT_STORAGE_ROOT / "ga_properties.json"


class Settings(BaseSettings):
    app_name: str = "Intelligent Dashboard Renderer"

    storage_root: Path = DEFAULT_STORAGE_ROOT
    input_dir: Path = DEFAULT_STORAGE_ROOT / "inputs"
    prop_file: Path = DEFAULT_PROP_FILE
    prop_webhook_url: str = ""
    prop_timeout: int = 30

    render_key: str | None = None
    selection_cookie: str = "ga_property"
    selection_cookie_max_age: int = 60 * 60 * 24 * 365

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()

for folder in [
    settings.storage_root,
    settings.input_dir,
]:
    folder.mkdir(parents=True, exist_ok=True)
