import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class HotclassSettings(BaseSettings):
    PROJECT_NAME: str = "hotclass"

    # Logging
    LOG_LEVEL: str = "INFO"
    SWEEP_LOG_TRACEBACKS: bool = True

    # Observability
    METRICS_ENABLED: bool = True

    model_config = SettingsConfigDict(
        env_prefix="HOTCLASS_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}")
        return level


def configure_logging(config: HotclassSettings | None = None) -> None:
    """Apply LOG_LEVEL to the package logger."""
    config = config or settings
    logging.getLogger("hotclass").setLevel(config.LOG_LEVEL)


settings = HotclassSettings()
