from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Application
    app_env: str = "local"
    log_level: str = "DEBUG"

    # Data paths
    data_dir: str = "sample_data"

    # Report settings
    default_display_summary_row: bool = True
    default_display_header_row: bool = False
    total_label: str = "TOTAL"
    units_precision: int = 3
    money_precision: int = 2
    date_format: str = "%Y-%m-%d %H:%M"

    # Seed data settings
    default_seed_scale: str = "small"
    default_seed_days: int = 14
    default_seed_value: int = 42

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
