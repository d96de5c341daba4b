"""Marker metadata attached to constants to keep them out of aggregations.

Markers are attached with ``Annotated``::

    FAKE_NAME: Annotated[str, NotAggregated] = "Dummy"
    NAMES: Annotated[tuple[str, ...], AggregatedResult] = from_this_scope()...

or, where annotations are not available, through an ``__aggregation_markers__`` side table on the
source mapping member names to markers.
"""
from collections.abc import Iterable
from enum import Enum
from typing import Any, Final

from ..typing.utilities import Annotation, annotation_metadata


class Aggregated(Enum):
    """Closed set of markers recognized by the member scanner."""

    SKIP = "skip"
    """Explicitly opt a constant out of any aggregation."""

    RESULT = "result"
    """The constant holds an aggregation's own result and must not feed a later pass."""


NotAggregated: Final = Aggregated.SKIP
AggregatedResult: Final = Aggregated.RESULT

EXCLUDING_MARKERS: Final[frozenset[Aggregated]] = frozenset(Aggregated)

MARKERS_ATTRIBUTE: Final = "__aggregation_markers__"


def markers_of(annotation: Annotation) -> frozenset[Aggregated]:
    """Extract the markers from the ``Annotated`` metadata of an annotation."""
    return frozenset(m for m in annotation_metadata(annotation) if isinstance(m, Aggregated))


def side_table_markers(table: Any, name: str) -> frozenset[Aggregated]:
    """Extract the markers registered for ``name`` in an ``__aggregation_markers__`` table."""
    if not table:
        return frozenset()
    entry: Aggregated | Iterable[Aggregated] = table.get(name, ())
    if isinstance(entry, Aggregated):
        return frozenset((entry,))
    return frozenset(m for m in entry if isinstance(m, Aggregated))
