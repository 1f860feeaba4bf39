"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Customer Tracker"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Key/value store
    database_url: str = "sqlite:///./customer_tracker.db"

    # Import/export
    import_max_bytes: int = 50 * 1024 * 1024
    export_filename: str = "customer-database-export.json"

    # Records
    join_id_prefix: str = "CUS"
    default_template_name: str = "Default Template"


settings = Settings()
