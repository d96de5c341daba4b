"""Constants and utilities for the built-in scalar types."""
from typing import Annotated, Any, Final

from ...config.settings import ConstaggSettings
from ..aggregation.builder import from_this_scope
from ..aggregation.markers import AggregatedResult
from ..aggregation.rules import MatchRules
from . import wildcards

NUMBERS: Final = (int, float, complex)

BOOLEAN: Final = bool

TEXT: Final = (str, bytes)

_SCALARS: Annotated[frozenset[type[Any]], AggregatedResult] = (
    from_this_scope(settings=ConstaggSettings(uppercase_constants=True))
    .constants_of_type(wildcards.TYPE)
    .matching(MatchRules.of().with_container_expansion())
    .to_set()
)


def scalar_types() -> frozenset[type[Any]]:
    """Return every built-in scalar type: numbers, booleans and text."""
    return _SCALARS


def is_scalar(obj: Any) -> bool:
    """Check if an object is exactly of a built-in scalar type (subclasses excluded).

    Args:
        obj (Any): The object to check.

    Returns:
        bool: True if obj is not None and its type is a scalar type.
    """
    return obj is not None and type(obj) in _SCALARS
