"""
Re-export exceptions module for cleaner imports.

This allows: from constagg.exceptions import TracedException
Instead of: from constagg.abstract.exceptions.traced_exceptions import TracedException
"""

from .abstract.exceptions.traced_exceptions import TracedException, format_exception
from .meta.aggregation.errors import AggregationError, IllegalUsageError
from .meta.typing.errors import TypingError, UnsupportedTypeError

__all__ = [
    "TracedException",
    "format_exception",
    "TypingError",
    "UnsupportedTypeError",
    "AggregationError",
    "IllegalUsageError",
]
