"""Configuration settings using Pydantic Settings.

Provides process-wide defaults for copy options with environment variable
support. Per-call options are expressed with CopyConfiguration.

Usage:
    from objcopier.config import CopierSettings

    # Load from environment variables (OBJCOPIER_*)
    settings = CopierSettings()

    # Or override with explicit values
    settings = CopierSettings(deep_copy=True)
    copier = Copier(settings=settings)
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from objcopier.registry import DEFAULT_MAX_ENTRIES


class CopierSettings(BaseSettings):  # type: ignore[misc]
    """Default copy options for a Copier.

    Attributes:
        ignore_empty: Skip source values that are empty (None, 0, "", empty
            containers, structs whose fields are all empty).
        deep_copy: Detach nested structs, dicts and lists from the source.
        ignore_private_fields: Skip fields whose name starts with an underscore.
        registry_size: Maximum type pairs kept by a default ConverterRegistry.

    Environment Variables:
        OBJCOPIER_IGNORE_EMPTY
        OBJCOPIER_DEEP_COPY
        OBJCOPIER_IGNORE_PRIVATE_FIELDS
        OBJCOPIER_REGISTRY_SIZE
    """

    model_config = SettingsConfigDict(
        env_prefix="OBJCOPIER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    ignore_empty: bool = False
    deep_copy: bool = False
    ignore_private_fields: bool = False
    registry_size: int = Field(default=DEFAULT_MAX_ENTRIES, gt=0)
