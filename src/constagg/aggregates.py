"""
Re-export aggregation modules for cleaner imports.

This allows: from constagg.aggregates import from_source, MatchRules
Instead of: from constagg.meta.aggregation.builder import from_source
"""

from .meta.aggregation.aggregator import (
    Constant,
    is_container,
    iter_constants,
    to_collection,
    to_list,
    to_set,
    visit,
)
from .meta.aggregation.builder import (
    PendingAggregate,
    TypedAggregate,
    from_module,
    from_source,
    from_this_scope,
)
from .meta.aggregation.errors import AggregationError, IllegalUsageError
from .meta.aggregation.markers import (
    Aggregated,
    AggregatedResult,
    NotAggregated,
)
from .meta.aggregation.rules import MatchRules, matching
from .meta.aggregation.scanner import ConstantMember, NamespaceSource, constants_of

__all__ = [
    # Fluent API
    "from_source",
    "from_module",
    "from_this_scope",
    "PendingAggregate",
    "TypedAggregate",
    # Rules and markers
    "MatchRules",
    "matching",
    "Aggregated",
    "AggregatedResult",
    "NotAggregated",
    # Functional API
    "Constant",
    "iter_constants",
    "visit",
    "to_list",
    "to_set",
    "to_collection",
    "is_container",
    # Scanning
    "ConstantMember",
    "NamespaceSource",
    "constants_of",
    # Errors
    "AggregationError",
    "IllegalUsageError",
]
