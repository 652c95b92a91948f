"""Tag functionality: parsing, alias mappings and name resolution."""

from objcopier.core.tags.core import (
    build_name_mapping,
    build_tag_index,
    parse_tag,
    resolve_names,
)
from objcopier.core.tags.models import FieldTag, NameMapping, ObligationState, TagIndex

__all__ = [
    # Models
    "FieldTag",
    "NameMapping",
    "TagIndex",
    "ObligationState",
    # Core
    "parse_tag",
    "build_tag_index",
    "build_name_mapping",
    "resolve_names",
]
