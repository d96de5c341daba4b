"""
Re-export type token modules for cleaner imports.

This allows: from constagg.tokens import TypeToken, capture
Instead of: from constagg.meta.typing.tokens import TypeToken, capture
"""

from .meta.typing import wildcards
from .meta.typing.cast import as_instance, caster, unsafe_generic, unsafe_generic_caster
from .meta.typing.tokens import (
    TypeCompatible,
    TypeToken,
    any_type,
    capture,
    generic_arguments_of,
    matches_instance,
    object_type,
    raw_type_of,
)

__all__ = [
    "TypeToken",
    "TypeCompatible",
    "capture",
    "any_type",
    "object_type",
    "raw_type_of",
    "generic_arguments_of",
    "matches_instance",
    # Casting
    "as_instance",
    "caster",
    "unsafe_generic",
    "unsafe_generic_caster",
    "wildcards",
]
