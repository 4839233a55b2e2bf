from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = "dev"
    root_path: str = ""
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 5001
    cors_origins: str = "*"  # comma separated

    postgres_db: str = "gym_db"
    postgres_user: str = "gym_user"
    postgres_password: str = "gym_pass"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    database_url_override: str = ""

    # Bounded pool: requests past db_pool_size wait up to db_pool_timeout seconds.
    db_pool_size: int = 10
    db_pool_timeout: float = 30.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def all_cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
