# core/logging_config.py

import logging
from logging.handlers import RotatingFileHandler

from .config import Settings, settings as default_settings
from .exceptions import ConfigurationError

def configure_logging(settings: Settings = default_settings) -> None:
    """Configure root logging from settings, with optional file rotation"""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {settings.log_level}")

    handlers = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(RotatingFileHandler(
            settings.log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8"
        ))

    logging.basicConfig(
        level=level,
        format=settings.log_format,
        handlers=handlers,
        force=True
    )
