"""Errors raised while aggregating constants."""
from typing import Any

from ...abstract.exceptions.traced_exceptions import TracedException


class AggregationError(TracedException):
    """A constant's value could not be resolved during a scan. The whole aggregation is aborted.

    The original exception is available as ``__cause__`` (and through ``root_cause()``).
    """

    def __init__(self, source: Any, name: str, cause: BaseException) -> None:
        self.source = source
        self.name = name
        super().__init__(
            f"Failed to resolve constant '{name}' of {source!r}: "
            f"{type(cause).__name__}: {cause}"
        )


class IllegalUsageError(TracedException):
    """The aggregation API was used out of order or with an unusable argument."""
