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
Description: Type tokens. A TypeToken keeps a (possibly generic) type as a comparable value:
            its raw class, its generic arguments (as tokens) and whether it is a wildcard.
            Instance checks only ever look at the raw class since generic parameters do not
            exist at runtime: a token for list[str] accepts any list. This is by contract, not
            a shortcoming to work around.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from functools import cache
from types import EllipsisType, NoneType, UnionType
from typing import (
    Any,
    Literal,
    NewType,
    ParamSpec,
    Protocol,
    TypeAliasType,
    TypeVar,
    TypeVarTuple,
    get_args,
    get_origin,
    runtime_checkable,
)

from .errors import UnsupportedTypeError
from .utilities import Annotation, is_annotated, is_qualifier, is_union


@runtime_checkable
class TypeCompatible(Protocol):
    """Anything exposing a type descriptor can be turned into a TypeToken.

    This lets other type token implementations be used wherever constagg expects a type.
    """

    @property
    def represented_type(self) -> Annotation: ...


type Resolved = tuple[Any, tuple["TypeToken[Any]", ...], bool]


def _is_non_runtime_protocol(cls: type) -> bool:
    return bool(getattr(cls, "_is_protocol", False)) and not getattr(
        cls, "_is_runtime_protocol", False
    )


def _checked_class(cls: type, descriptor: Annotation) -> type:
    if _is_non_runtime_protocol(cls):
        raise UnsupportedTypeError(
            descriptor, "Protocols must be runtime_checkable to test instances against them."
        )
    return cls


def _resolve(descriptor: Annotation) -> Resolved:
    """Decompose a type descriptor into (raw type, generic arguments, is wildcard)."""
    if isinstance(descriptor, TypeAliasType):
        return _resolve(descriptor.__value__)
    if descriptor is None or descriptor is NoneType:
        return NoneType, (), False
    if descriptor is Any or isinstance(descriptor, EllipsisType):
        return object, (), True
    if isinstance(descriptor, TypeVar):
        if descriptor.__constraints__:
            raise UnsupportedTypeError(
                descriptor, "Constrained type variables have no single raw type."
            )
        bound = descriptor.__bound__
        return (object if bound is None else _resolve(bound)[0]), (), True
    if isinstance(descriptor, (ParamSpec, TypeVarTuple)):
        raise UnsupportedTypeError(descriptor)
    if isinstance(descriptor, NewType):
        return _resolve(descriptor.__supertype__)
    if is_union(descriptor):
        return UnionType, tuple(capture(arg) for arg in get_args(descriptor)), False
    if is_annotated(descriptor):
        return _resolve(descriptor.__origin__)
    if is_qualifier(descriptor):
        raise UnsupportedTypeError(descriptor, "Qualifiers are not types.")

    origin = get_origin(descriptor)
    if origin is Literal:
        raise UnsupportedTypeError(descriptor, "Literal values are not types.")
    if isinstance(origin, type):
        # __args__ keeps Callable[[int], str] flat as (int, str).
        arguments = getattr(descriptor, "__args__", ())
        return (
            _checked_class(origin, descriptor),
            tuple(capture(arg) for arg in arguments),
            False,
        )
    if isinstance(descriptor, type):
        return _checked_class(descriptor, descriptor), (), False

    raise UnsupportedTypeError(descriptor)


def _qualified_name(cls: Any) -> str:
    if cls is UnionType:
        return "Union"
    if cls is NoneType:
        return "None"
    module = getattr(cls, "__module__", None)
    name = getattr(cls, "__qualname__", None) or repr(cls)
    if module in (None, "builtins"):
        return name
    return f"{module}.{name}"


class TypeToken[T]:
    """A so-called "super" type token: a (possibly generic) type captured as a value.

    Tokens are built from explicit type descriptors since Python keeps parameterized aliases
    (``list[str]``, ``dict[str, list[int]]``) as runtime objects. Prefer :func:`capture`, which
    reuses tokens that are already tokens and returns shared instances for ``Any`` and
    ``object``.

    Examples:
        >>> STRING_LIST = TypeToken(list[str])
        >>> STRING_LIST.raw_type
        <class 'list'>
        >>> STRING_LIST.generic_arguments == (TypeToken(str),)
        True
        >>> STRING_LIST.matches_instance([1, 2])  # raw type only!
        True
    """

    __slots__ = ("_represented", "_raw", "_generics", "_wildcard")

    _represented: Annotation
    _raw: Any
    _generics: tuple["TypeToken[Any]", ...]
    _wildcard: bool

    def __init__(self, type_descriptor: Annotation) -> None:
        raw, generics, wildcard = _resolve(type_descriptor)
        object.__setattr__(self, "_represented", type_descriptor)
        object.__setattr__(self, "_raw", raw)
        object.__setattr__(self, "_generics", generics)
        object.__setattr__(self, "_wildcard", wildcard)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"TypeToken is immutable, cannot set '{name}'.")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"TypeToken is immutable, cannot delete '{name}'.")

    @property
    def represented_type(self) -> Annotation:
        """The descriptor this token was captured from."""
        return self._represented

    @property
    def raw_type(self) -> Any:
        """The erased class. ``types.UnionType`` for unions."""
        return self._raw

    @property
    def generic_arguments(self) -> tuple["TypeToken[Any]", ...]:
        """The captured generic arguments, or an empty tuple."""
        return self._generics

    @property
    def is_generic(self) -> bool:
        return bool(self._generics)

    @property
    def is_wildcard(self) -> bool:
        """Whether the token stands for an unknown type (``Any``, ``...`` or a type variable)."""
        return self._wildcard

    @property
    def is_union(self) -> bool:
        return self._raw is UnionType

    def matches_instance(self, value: Any) -> bool:
        """Check ``value`` against the raw type. Generic arguments are NOT inspected.

        Args:
            value (Any): The value to test.

        Returns:
            bool: Whether value is an instance of the raw type (of any member for unions).
        """
        if self.is_union:
            return any(member.matches_instance(value) for member in self._generics)
        return isinstance(value, self._raw)

    def _key(self) -> tuple[Any, ...]:
        key: tuple[Any, ...] = (self._raw, self._generics, self._wildcard)
        if self._wildcard and self._represented is not Any:
            key += (self._represented,)
        return key

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, TypeToken):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        if self._wildcard:
            if self._represented is Any:
                return "typing.Any"
            if isinstance(self._represented, EllipsisType):
                return "..."
            return repr(self._represented)
        if self.is_union:
            return " | ".join(str(member) for member in self._generics)
        name = _qualified_name(self._raw)
        if not self._generics:
            return name
        return f"{name}[{', '.join(str(argument) for argument in self._generics)}]"

    def __repr__(self) -> str:
        return f"TypeToken({self})"


@cache
def any_type() -> TypeToken[Any]:
    """The shared wildcard token for ``Any``."""
    return TypeToken(Any)


@cache
def object_type() -> TypeToken[object]:
    """The shared token for ``object``."""
    return TypeToken(object)


def capture(type_descriptor: Annotation | TypeToken[Any] | TypeCompatible) -> TypeToken[Any]:
    """Capture a type descriptor into a TypeToken.

    Args:
        type_descriptor: A class, a parameterized alias, a union, ``Any``, a type variable, a
            TypeToken or anything exposing ``represented_type``.

    Raises:
        UnsupportedTypeError: Raised when the descriptor cannot be decomposed.

    Returns:
        TypeToken: The token describing the type.
    """
    if isinstance(type_descriptor, TypeToken):
        return type_descriptor
    if not isinstance(type_descriptor, type) and isinstance(type_descriptor, TypeCompatible):
        return capture(type_descriptor.represented_type)
    if type_descriptor is Any:
        return any_type()
    if type_descriptor is object:
        return object_type()
    return TypeToken(type_descriptor)


def raw_type_of(token: TypeToken[Any]) -> Any:
    """Return the raw (erased) type of a token."""
    return token.raw_type


def generic_arguments_of(token: TypeToken[Any]) -> tuple[TypeToken[Any], ...]:
    """Return the generic arguments of a token, empty when the type is not parameterized."""
    return token.generic_arguments


def matches_instance(token: TypeToken[Any], value: Any) -> bool:
    """Check a value against the raw type of a token. See :meth:`TypeToken.matches_instance`."""
    return token.matches_instance(value)
