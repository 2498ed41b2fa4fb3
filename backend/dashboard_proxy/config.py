from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Intelligent Dashboard Proxy"

    n8n_webhook: str = ""
    renderer_url: str = ""
    render_key: str | None = None

    timeout_sec: int = 180
    ssl_verify: bool = True
    debug_browser: bool = True
    user_agent: str = "DashProxy/1.1"
    selection_cookie: str = "ga_property"

    log_level: str = "INFO"
    log_preview_chars: int = 300

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
