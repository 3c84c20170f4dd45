"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # so DB_HOST works regardless of case
        extra="ignore",
    )

    # Database fields (read from .env)
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "leads"
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_url: str | None = None  # full URL override, e.g. sqlite+aiosqlite:///./leads.db

    # Construct database URL dynamically
    @property
    def database_url(self) -> str:
        if self.db_url:
            return self.db_url
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    # AnyMail Finder (real enrichment). Empty key means simulated enrichment.
    anymail_finder_api_key: str = ""
    anymail_finder_base_url: str = "https://api.anymailfinder.com/v5.0"
    enrichment_timeout_seconds: float = 10.0

    # Simulated enrichment latency window
    simulated_delay_min_ms: int = 400
    simulated_delay_max_ms: int = 800

    # Dashboard auth
    jwt_secret: str = ""
    dashboard_username: str = "admin"
    dashboard_password: str = "admin123"

    # App
    environment: str = "development"
    max_payload_bytes: int = 65536
    log_level: str = "INFO"


settings = Settings()
