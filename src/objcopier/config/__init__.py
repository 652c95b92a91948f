"""Configuration module using Pydantic Settings and structlog.

Usage:
    from objcopier.config import CopierSettings, configure_logging

    settings = CopierSettings(ignore_empty=True)
    configure_logging(verbose=True)
"""

from objcopier.config.logging import configure_logging
from objcopier.config.settings import CopierSettings

__all__ = [
    "CopierSettings",
    "configure_logging",
]
