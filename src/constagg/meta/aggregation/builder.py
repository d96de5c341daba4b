"""Fluent aggregation API: ``source -> type -> rules -> materialize``.

Examples:
    >>> class Words:
    ...     HELLO = "hello"
    ...     BYE = "bye"
    ...     COUNT = 2
    >>> from_source(Words).constants_of_type(str).to_list()
    ('hello', 'bye')

Inside a class (or module) body, :func:`from_this_scope` aggregates what has been declared so
far::

    class Example:
        STRING_CONSTANT = ComplexObject("abc")
        INTEGER_CONSTANT = ComplexObject(1)
        VALUES: Annotated[tuple[ComplexObject, ...], AggregatedResult] = (
            from_this_scope().constants_of_type(ComplexObject).to_list()
        )
"""
import importlib
import sys
from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace
from types import ModuleType
from typing import Any, NoReturn

from ...config.settings import ConstaggSettings
from ..typing.tokens import TypeToken, capture
from . import aggregator
from .aggregator import Constant, TypeLike
from .errors import IllegalUsageError
from .rules import DEFAULT_RULES, MatchRules
from .scanner import NamespaceSource, as_source


@dataclass(frozen=True, slots=True)
class PendingAggregate:
    """An aggregation whose source is known but whose type is not chosen yet."""

    source: Any
    rules: MatchRules = DEFAULT_RULES
    settings: ConstaggSettings | None = None

    def matching(self, rules: MatchRules) -> "PendingAggregate":
        """Replace the rules of the aggregation."""
        return replace(self, rules=rules)

    def constants_of_type[T](self, type_: TypeLike[T]) -> "TypedAggregate[T]":
        """Choose the type of the constants to aggregate."""
        return TypedAggregate(self.source, capture(type_), self.rules, self.settings)

    def _missing_type(self, operation: str) -> NoReturn:
        raise IllegalUsageError(
            f"Cannot call {operation} on an aggregation of {self.source!r} before choosing a "
            "type with constants_of_type()."
        )

    def to_list(self) -> NoReturn:
        self._missing_type("to_list()")

    def to_set(self) -> NoReturn:
        self._missing_type("to_set()")

    def to_collection(self, factory: Callable[[], Any]) -> NoReturn:
        self._missing_type("to_collection()")

    def constants(self) -> NoReturn:
        self._missing_type("constants()")

    def visit(self, consumer: Callable[[str, Any], Any]) -> NoReturn:
        self._missing_type("visit()")

    def __iter__(self) -> NoReturn:
        self._missing_type("iter()")


@dataclass(frozen=True, slots=True)
class TypedAggregate[T]:
    """An aggregation ready to be materialized. Every materialization runs a fresh scan."""

    source: Any
    type: TypeToken[T]
    rules: MatchRules = DEFAULT_RULES
    settings: ConstaggSettings | None = None

    def matching(self, rules: MatchRules) -> "TypedAggregate[T]":
        """Replace the rules of the aggregation. Successive calls do not combine."""
        return replace(self, rules=rules)

    def constants(self) -> Iterator[Constant[T]]:
        """Lazily iterate over the matched constants with their names and origins."""
        return aggregator.iter_constants(self.source, self.type, self.rules, settings=self.settings)

    def __iter__(self) -> Iterator[T]:
        return (constant.value for constant in self.constants())

    def visit(self, consumer: Callable[[str, T], Any]) -> None:
        aggregator.visit(
            self.source, self.type, self.rules, consumer=consumer, settings=self.settings
        )

    def to_list(self) -> tuple[T, ...]:
        return aggregator.to_list(self.source, self.type, self.rules, settings=self.settings)

    def to_set(self) -> frozenset[T]:
        """Aggregate into a frozenset. See :func:`constagg.aggregates.to_set` for hashability."""
        return aggregator.to_set(self.source, self.type, self.rules, settings=self.settings)

    def to_collection[C](self, factory: Callable[[], C]) -> C:
        return aggregator.to_collection(
            self.source, self.type, self.rules, factory=factory, settings=self.settings
        )


def from_source(source: Any, *, settings: ConstaggSettings | None = None) -> PendingAggregate:
    """Start an aggregation over a class, a module or a namespace mapping."""
    return PendingAggregate(as_source(source), settings=settings)


def from_module(
    module: str | ModuleType, *, settings: ConstaggSettings | None = None
) -> PendingAggregate:
    """Start an aggregation over a module, importing it by name if needed."""
    if isinstance(module, str):
        module = importlib.import_module(module)
    return PendingAggregate(module, settings=settings)


def from_this_scope(
    *, depth: int = 0, settings: ConstaggSettings | None = None
) -> PendingAggregate:
    """Start an aggregation over the namespace of the calling class or module body.

    Only the members declared before the call are visible, which keeps the constant receiving
    the result out of its own aggregation.

    Args:
        depth (int): Extra frames to skip, for helpers wrapping this function.
        settings (ConstaggSettings | None): Scan settings.
    """
    frame = sys._getframe(depth + 1)
    try:
        code = frame.f_code
        if code.co_name == "<module>":
            name = str(frame.f_globals.get("__name__", "<module>"))
        else:
            name = code.co_qualname
        return PendingAggregate(NamespaceSource(name, frame.f_locals), settings=settings)
    finally:
        del frame
