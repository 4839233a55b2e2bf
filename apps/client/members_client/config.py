from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    api_base_url: str = "http://localhost:5001"
    http_timeout_seconds: float = 20.0

    model_config = SettingsConfigDict(env_prefix="MEMBERS_", env_file=".env", extra="ignore")


settings = ClientSettings()
