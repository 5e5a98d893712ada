"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database (key-value snapshot store)
    database_url: str = "sqlite:///./finplan.db"

    # Service
    service_name: str = "finplan"
    log_level: str = "INFO"
    environment: str = "development"  # "production" disables output integrity guards

    # Planning defaults
    default_forecast_months: int = 12
    store_key: str = "finance-app-store"
    goal_summary_limit: int = 3
    recommendation_limit: int = 2

    @property
    def integrity_checks_enabled(self) -> bool:
        return self.environment.lower() != "production"


settings = Settings()
