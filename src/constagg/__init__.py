"""
constagg: Aggregation of the constants declared by classes and modules.

This library provides:
- TypeToken to capture (possibly generic) types as values
- MatchRules and a fluent builder to aggregate constants by type and name
- Aggregation markers to keep constants out of aggregations
- ConstantNamespace for immutable, type-checked class-level constants
- TracedException for enhanced exception formatting
- structlog logging and environment settings
"""

__version__ = "0.1.0"
__author__ = "Sébastien Gachoud"
__license__ = "MIT"

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",
]
