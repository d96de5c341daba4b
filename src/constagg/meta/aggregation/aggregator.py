"""
MIT License

Copyright (c) 2025 Sébastien Gachoud

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

-------------------------------------------------------------------------------

Author: Sébastien Gachoud
Created: 2026-10-19
Description: Aggregation of constants. Scans a source, keeps the members whose name matches
            the rules and that carry no excluding marker, resolves their values, optionally
            expands container-valued constants, keeps what matches the type token and
            materializes the result into a tuple, a frozenset or a caller-provided collection.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from collections.abc import Callable, Collection, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from ...config.logging import get_logger
from ...config.settings import ConstaggSettings
from ..typing.tokens import TypeToken, capture
from ..typing.utilities import Annotation
from .errors import AggregationError, IllegalUsageError
from .markers import EXCLUDING_MARKERS, Aggregated
from .rules import DEFAULT_RULES, MatchRules
from .scanner import as_source, constants_of, declares

logger = get_logger(__name__)

type TypeLike[T] = TypeToken[T] | Annotation

# Collections whose elements are not constants on their own.
_NOT_CONTAINERS = (str, bytes, bytearray, memoryview, Mapping)


@dataclass(frozen=True, slots=True)
class Constant[T]:
    """A matched constant value.

    Attributes:
        source: The class, module or namespace the constant was declared in.
        name: The declared name of the constant.
        value: The non-None value, an instance of the requested raw type.
        is_from_container: Whether the value was extracted from a container-valued constant
            rather than being the constant's own value.
    """

    source: Any
    name: str
    value: T
    is_from_container: bool = False


def is_container(value: Any) -> bool:
    """Check if a value is an ordered or unordered collection whose elements can be aggregated.

    Strings, bytes and mappings are not containers in that sense.
    """
    return isinstance(value, Collection) and not isinstance(value, _NOT_CONTAINERS)


def iter_constants[T](
    source: Any,
    type_: TypeLike[T],
    rules: MatchRules | None = None,
    *,
    markers: Iterable[Aggregated] = EXCLUDING_MARKERS,
    settings: ConstaggSettings | None = None,
) -> Iterator[Constant[T]]:
    """Lazily aggregate the constants of a source matching a type.

    The type and the source are checked right away, the members are scanned and resolved while
    iterating. Emission order is the declaration order of the members, then the iteration order
    of the container for expanded constants.

    Args:
        source (Any): A class, a module or a namespace mapping.
        type_ (TypeToken | Any): The type to match. Only its raw type is checked.
        rules (MatchRules | None): Name filters and container expansion. Defaults to
            :meth:`MatchRules.of`.
        markers (Iterable[Aggregated]): Markers excluding a constant. Defaults to all of them.
        settings (ConstaggSettings | None): Scan settings.

    Raises:
        UnsupportedTypeError: Raised when ``type_`` cannot be captured.
        IllegalUsageError: Raised when the source cannot be scanned.
        AggregationError: Raised while iterating when the value of a constant cannot be
            resolved. Nothing is retried and the aggregation stops there.

    Returns:
        Iterator[Constant]: The matched constants.
    """
    token = capture(type_)
    rules = DEFAULT_RULES if rules is None else rules
    return _iter_constants(as_source(source), token, rules, frozenset(markers), settings)


def _iter_constants[T](
    source: Any,
    token: TypeToken[T],
    rules: MatchRules,
    excluding: frozenset[Aggregated],
    settings: ConstaggSettings | None,
) -> Iterator[Constant[T]]:
    logger.debug("aggregation_started", source=source, type=token, rules=rules)
    matched = 0
    for member in constants_of(source, settings=settings):
        if not rules.matches(member.name):
            continue
        if member.markers & excluding:
            logger.debug("constant_skipped", name=member.name, reason="marker")
            continue

        try:
            value = member.value()
        except AttributeError as e:
            if declares(source, member.name):
                logger.debug("constant_resolution_failed", name=member.name, error=e)
                raise AggregationError(source, member.name, e) from e
            logger.debug("constant_skipped", name=member.name, reason="not found")
            continue
        except Exception as e:
            logger.debug("constant_resolution_failed", name=member.name, error=e)
            raise AggregationError(source, member.name, e) from e

        if value is None:
            continue

        if not (rules.should_expand_containers() and is_container(value)):
            if token.matches_instance(value):
                matched += 1
                yield Constant(source, member.name, value, False)
            continue

        try:
            elements = list(value)
        except Exception as e:
            logger.debug("constant_resolution_failed", name=member.name, error=e)
            raise AggregationError(source, member.name, e) from e

        for element in elements:
            if element is not None and token.matches_instance(element):
                matched += 1
                yield Constant(source, member.name, element, True)

    logger.debug("aggregation_finished", source=source, matched=matched)


def visit[T](
    source: Any,
    type_: TypeLike[T],
    rules: MatchRules | None = None,
    *,
    consumer: Callable[[str, T], Any],
    **kwargs: Any,
) -> None:
    """Call ``consumer(name, value)`` for every matched constant. See :func:`iter_constants`."""
    for constant in iter_constants(source, type_, rules, **kwargs):
        consumer(constant.name, constant.value)


def to_collection[T, C](
    source: Any,
    type_: TypeLike[T],
    rules: MatchRules | None = None,
    *,
    factory: Callable[[], C],
    **kwargs: Any,
) -> C:
    """Fill a collection created by ``factory`` with the matched values.

    The collection is filled through ``append`` (sequences) or ``add`` (sets) and returned as
    is: freezing it is up to the caller.

    Raises:
        IllegalUsageError: Raised when the factory returns None or a collection that supports
            neither ``append`` nor ``add``.
    """
    collection = factory()
    if collection is None:
        raise IllegalUsageError(f"Collection factory {factory!r} returned None.")
    add = getattr(collection, "append", None) or getattr(collection, "add", None)
    if not callable(add):
        raise IllegalUsageError(
            f"Cannot fill {type(collection).__name__!r}: it has neither 'append' nor 'add'."
        )
    for constant in iter_constants(source, type_, rules, **kwargs):
        add(constant.value)
    return collection


def to_list[T](
    source: Any, type_: TypeLike[T], rules: MatchRules | None = None, **kwargs: Any
) -> tuple[T, ...]:
    """Aggregate the matched values into an immutable ordered sequence (a tuple)."""
    return tuple(constant.value for constant in iter_constants(source, type_, rules, **kwargs))


def to_set[T](
    source: Any, type_: TypeLike[T], rules: MatchRules | None = None, **kwargs: Any
) -> frozenset[T]:
    """Aggregate the matched values into an immutable set. Equal values collapse into one.

    The matched values must be hashable: aggregate lists or dicts with :func:`to_list`, or
    expand them with :meth:`MatchRules.with_container_expansion`.

    Raises:
        IllegalUsageError: Raised when a matched value is not hashable.
    """
    values: set[T] = set()
    for constant in iter_constants(source, type_, rules, **kwargs):
        try:
            values.add(constant.value)
        except TypeError as e:
            raise IllegalUsageError(
                f"Cannot aggregate constant '{constant.name}' of {constant.source!r} into a set:"
                f" its value {constant.value!r} is not hashable."
            ) from e
    return frozenset(values)
