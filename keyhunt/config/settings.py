"""
keyhunt configuration

Values come from the environment (prefix ``KEYHUNT_``) or a ``.env`` file.
Command line flags override them for a single run.
"""

from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from keyhunt import __version__

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

class Settings(BaseSettings):
    """Runtime configuration for the hunt"""

    model_config = SettingsConfigDict(
        env_prefix="KEYHUNT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Basic
    app_name: str = "keyhunt"
    version: str = __version__
    debug: bool = Field(default=False)

    # Logging (stderr only unless log_file is set)
    log_level: str = Field(default="WARNING")
    log_file: str = Field(default="")
    log_max_size: int = Field(default=2 * 1024 * 1024)  # 2MB
    log_backup_count: int = Field(default=2)
    log_json: bool = Field(default=False)

    # Source discovery
    source_extensions: List[str] = Field(default=["js", "jsx", "ts", "tsx"])
    extra_ignore_patterns: List[str] = Field(default=[])
    follow_links: bool = Field(default=False)

    # Console
    show_progress: bool = Field(default=True)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            self.log_level = "WARNING"

        # Extensions are compared without the leading dot
        self.source_extensions = [
            ext.strip().lstrip(".").lower()
            for ext in self.source_extensions
            if ext.strip().lstrip(".")
        ]

        if self.debug:
            self.log_level = "DEBUG"

# Global settings instance
settings = Settings()
