from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    VERIFY_TOKEN: str = ""
    WA_ACCESS_TOKEN: str | None = None
    WA_GRAPH_BASE_URL: str = "https://graph.facebook.com"
    WA_GRAPH_API_VERSION: str = "v20.0"

    CLIENTS_CONFIG_PATH: str = "clients.json"
    GOOGLE_APPLICATION_CREDENTIALS: str | None = None

    RATE_LIMIT_SECONDS: float = 2.0

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    @property
    def is_dev(self) -> bool:
        return self.ENV.lower() in {"dev", "local"}


settings = Settings()
