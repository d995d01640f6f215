from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    project_name: str = "Vehicle Registry API"
    version: str = "0.1.0"
    database_url: str = "sqlite+aiosqlite:///./vehicles.sqlite3"
    sql_echo: bool = False
    api_key: str = ""  # empty = no auth check (local dev)
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["http://localhost:8000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
