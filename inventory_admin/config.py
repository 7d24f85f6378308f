# inventory_admin/config.py
"""
Application settings, loaded from environment variables (or a .env file)
using Pydantic Settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database
    DATABASE_URL: str = "sqlite:///db.sqlite"  # file in project root
    SQL_ECHO: bool = False

    # Application
    APP_NAME: str = "Hardware Shop Management System"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Business rules
    # default for new items; each item can still override it
    ALLOW_NEGATIVE_STOCK: bool = False

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    def summary(self) -> dict:
        """Settings that are safe to write to the log."""
        return {
            "app_name": self.APP_NAME,
            "environment": self.ENVIRONMENT,
            "allow_negative_stock": self.ALLOW_NEGATIVE_STOCK,
        }

    class Config:
        env_file = ".env"
        case_sensitive = True


# Singleton instance - import this in other modules
settings = Settings()
