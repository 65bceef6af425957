from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    mongo_uri: str = "mongodb://localhost:27017"
    database_name: str = "users_api"
    users_collection: str = "users"
    cors_origins: list[str] = ["http://localhost:3000"]
    server_selection_timeout_ms: int = 5000


settings = Settings()
