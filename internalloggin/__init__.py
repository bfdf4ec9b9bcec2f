"""
internalloggin/
Logging interno do JsonBridge_FLS (console + arquivo rotativo).
"""

from .logger import logger, setup_logger

__all__ = ["logger", "setup_logger"]
