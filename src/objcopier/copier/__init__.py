"""Copy engine: configuration, obligation checks and the recursive Copier."""

from objcopier.copier.copier import Copier, copy, copy_with_configuration
from objcopier.copier.models import CopyConfiguration
from objcopier.copier.obligations import check_obligations, track_obligations

__all__ = [
    "Copier",
    "CopyConfiguration",
    "copy",
    "copy_with_configuration",
    "check_obligations",
    "track_obligations",
]
