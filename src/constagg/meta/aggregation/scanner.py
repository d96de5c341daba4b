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
Description: Enumerates the constant members declared by a source (class, module or raw
            namespace), in declaration order, with their markers. Values are not resolved
            here: each member carries a thunk the aggregator calls when it needs the value.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

import inspect
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import partial
from types import ModuleType
from typing import Any

from ...config.logging import get_logger
from ...config.settings import ConstaggSettings, get_settings
from ..typing.utilities import Annotation, is_final, source_annotations
from .errors import IllegalUsageError
from .markers import MARKERS_ATTRIBUTE, Aggregated, markers_of, side_table_markers

logger = get_logger(__name__)

# PEP 8 constant names: MAX_SIZE, _CACHE_KEY, HTTP2.
_CONSTANT_NAME = re.compile(r"_*[A-Z][A-Z0-9_]*")

_NEVER_CONSTANTS = (staticmethod, classmethod, property, ModuleType)


@dataclass(frozen=True, slots=True, eq=False)
class NamespaceSource:
    """A raw name -> value mapping used as an aggregation source.

    Wraps the namespace of a class or module body that is still executing, or an explicit
    registration table built by hand. Markers are read from its ``__annotations__`` entry,
    which only exists while the body runs on interpreters that evaluate annotations eagerly,
    and from its ``__aggregation_markers__`` side table.
    """

    name: str
    namespace: Mapping[str, Any]

    def __repr__(self) -> str:
        return f"<namespace {self.name}>"


@dataclass(frozen=True, slots=True)
class ConstantMember:
    """A constant declared by a source, its value not resolved yet."""

    name: str
    markers: frozenset[Aggregated] = frozenset()
    annotation: Annotation = field(default=None, compare=False)
    resolve: Callable[[], Any] = field(default=lambda: None, compare=False, repr=False)

    def value(self) -> Any:
        """Resolve the current value of the constant."""
        return self.resolve()


def as_source(source: Any) -> Any:
    """Normalize a source: classes, modules and NamespaceSource are kept, mappings are wrapped.

    Raises:
        IllegalUsageError: Raised when the source cannot be scanned.
    """
    if isinstance(source, (type, ModuleType, NamespaceSource)):
        return source
    if isinstance(source, Mapping):
        name = source.get("__qualname__") or source.get("__name__") or "<mapping>"
        return NamespaceSource(str(name), source)
    raise IllegalUsageError(
        f"Cannot scan {source!r}: a source must be a class, a module or a mapping."
    )


def declares(source: Any, name: str) -> bool:
    """Check if ``name`` is currently bound in the own namespace of a source."""
    source = as_source(source)
    if isinstance(source, NamespaceSource):
        return name in source.namespace
    return name in vars(source)


def _lookup(namespace: Mapping[str, Any], name: str) -> Any:
    try:
        return namespace[name]
    except KeyError as e:
        raise AttributeError(name) from e


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _is_nested_definition(source: Any, name: str, value: Any) -> bool:
    # A class statement in the source body binds a class whose qualified name is derived from
    # the body it was written in.
    if not isinstance(value, type):
        return False
    if isinstance(source, ModuleType):
        return value.__module__ == source.__name__ and value.__qualname__ == name
    if isinstance(source, NamespaceSource):
        owner = source.name
        if value.__module__ == owner and value.__qualname__ == name:
            return True
    else:
        owner = source.__qualname__
    return value.__qualname__ in (f"{owner}.{name}", f"{owner}.<locals>.{name}")


def _is_member_like(value: Any) -> bool:
    return (
        isinstance(value, _NEVER_CONSTANTS)
        or inspect.ismemberdescriptor(value)
        or inspect.isgetsetdescriptor(value)
    )


def _is_constant(
    name: str,
    value: Any,
    annotation: Annotation,
    declared: tuple[str, ...] | None,
    settings: ConstaggSettings,
) -> bool:
    if declared is not None:
        # Constant namespaces declare their constants explicitly.
        return name in declared
    if name.startswith("_") and not settings.include_private:
        return False
    if _is_member_like(value):
        return False
    if annotation is not None and is_final(annotation):
        return True
    return (
        settings.uppercase_constants
        and _CONSTANT_NAME.fullmatch(name) is not None
        and not inspect.isfunction(value)
    )


def constants_of(
    source: Any, *, settings: ConstaggSettings | None = None
) -> tuple[ConstantMember, ...]:
    """Enumerate the constants declared directly by a source, in declaration order.

    A member is a constant when it is declared in the source's own namespace (inherited members
    are not scanned), is not a method-like object or a slot, and either:
      - is listed in ``__constants__`` for constant namespaces (see ConstantNamespace), or
      - is annotated ``Final``, or
      - follows the upper-case naming convention (``settings.uppercase_constants``).

    Classes defined by a class statement in the source body are never constants, whatever their
    name. A class bound to an upper-case name by assignment is.

    Args:
        source (Any): A class, a module, a NamespaceSource or a mapping.
        settings (ConstaggSettings | None): Scan settings. Defaults to the process-wide ones.

    Raises:
        IllegalUsageError: Raised when the source cannot be scanned.
        UnsupportedTypeError: Raised when the source's annotations cannot be resolved.

    Returns:
        tuple[ConstantMember, ...]: The constant members.
    """
    settings = get_settings() if settings is None else settings
    source = as_source(source)

    if isinstance(source, NamespaceSource):
        namespace = source.namespace
        annotations = dict(namespace.get("__annotations__") or {})
        resolver: Callable[[str], Callable[[], Any]] = partial(partial, _lookup, namespace)
    else:
        namespace = vars(source)
        annotations = source_annotations(source)
        resolver = partial(partial, getattr, source)

    declared = namespace.get("__constants__") if isinstance(source, type) else None
    if not isinstance(declared, tuple):
        declared = None
    side_table = namespace.get(MARKERS_ATTRIBUTE)

    members: list[ConstantMember] = []
    for name, value in list(namespace.items()):
        if _is_dunder(name) or _is_nested_definition(source, name, value):
            continue
        annotation = annotations.get(name)
        if not _is_constant(name, value, annotation, declared, settings):
            continue
        members.append(
            ConstantMember(
                name=name,
                markers=markers_of(annotation) | side_table_markers(side_table, name),
                annotation=annotation,
                resolve=resolver(name),
            )
        )

    logger.debug("constants_scanned", source=source, count=len(members))
    return tuple(members)
