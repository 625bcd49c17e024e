"""
Configuration package - picks the settings class from APP_ENV
"""

import os

from coachvision.config.base import Settings
from coachvision.config.development import DevelopmentSettings
from coachvision.config.production import ProductionSettings


def get_settings(app_env: str = None) -> Settings:
    """
    Build the settings object for an environment
    
    Args:
        app_env: Environment name, defaults to the APP_ENV variable
        
    Returns:
        Settings instance for development, production or the base profile
    """
    env = (app_env or os.getenv("APP_ENV", "")).strip().lower()
    if env == "development":
        return DevelopmentSettings()
    if env == "production":
        return ProductionSettings()
    return Settings()


settings = get_settings()

__all__ = ["Settings", "DevelopmentSettings", "ProductionSettings", "get_settings", "settings"]
