"""Application-wide configuration, logging and message localization."""

from .config import Config, ServerConfig, StoreConfig
from .i18n import Translator
from .logger import setup_logger

__all__ = ["Config", "ServerConfig", "StoreConfig", "Translator", "setup_logger"]
