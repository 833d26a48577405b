"""
Bootstrap configuration loaded from environment variables.
"""
from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

from vnf_schema.database.databases.vnf_config_db import DB_NAME

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class Settings(BaseSettings):
    """Bootstrap settings from environment variables."""
    
    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_database: str = DB_NAME
    server_selection_timeout_ms: int = 10000
    
    # Application credential provisioned in the target database
    app_user_name: str = "app_user"
    app_user_password: str = "app_password"
    app_user_role: str = "readWrite"
    
    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    
    class Config:
        env_file = ".env"
        extra = "ignore"
    
    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
