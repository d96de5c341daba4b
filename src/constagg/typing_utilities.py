"""
Re-export utilities module for cleaner imports.

This allows: from constagg.typing_utilities import is_union
Instead of: from constagg.meta.typing.utilities import is_union
"""

from .meta.typing.scalars import is_scalar, scalar_types
from .meta.typing.utilities import (
    annotation_metadata,
    is_annotated,
    is_final,
    is_optional,
    is_qualifier,
    is_union,
    unwrap_annotation,
)

__all__ = [
    "is_union",
    "is_optional",
    "is_annotated",
    "is_qualifier",
    "is_final",
    "annotation_metadata",
    "unwrap_annotation",
    "is_scalar",
    "scalar_types",
]
