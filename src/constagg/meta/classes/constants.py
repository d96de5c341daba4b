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
Created: 2025-07-11
Updated: 2026-10-19
Description: This module provides tools to create namespaces (class) of constants whose values
            are checked against their annotations and that can be aggregated by type.
🦙
"""

__author__ = "Sébastien Gachoud"
__license__ = "MIT"

from collections.abc import Iterator
from typing import Any, NoReturn, Callable, ClassVar

from ...abstract.exceptions.traced_exceptions import TracedException
from ...config.logging import get_logger
from ..aggregation.builder import TypedAggregate, from_source
from ..aggregation.aggregator import TypeLike
from ..aggregation.rules import MatchRules
from ..typing.errors import UnsupportedTypeError
from ..typing.tokens import capture
from ..typing.utilities import Annotation, source_annotations, unwrap_annotation

logger = get_logger(__name__)

# Numeric promotions accepted when checking a value against its annotation.
_PROMOTIONS: dict[type, tuple[type, ...]] = {
    float: (int,),
    complex: (int, float),
}


class ConstantsInstantiationError(TracedException):
    """Instantiation error of a Constants class."""


class ConstantsCompositionError(TracedException):
    """Composition error of a Constants class."""


class ConstantsModificationError(TracedException):
    """Modification error of a Constants class."""


def _verify_functions(name: str, namespace: dict[str, Any]) -> None:
    """Verify that no disalowed function is added.
    Disallowed functions are __new__ and __init__.

    Args:
        name (str): name of the class.
        namespace (dict[str, Any]): namespace of the class.

    Raises:
        ConstantsCompositionError: Raised when a disallowed function is added.
    """
    if "__init__" in namespace or "__new__" in namespace:
        raise ConstantsCompositionError(
            f"Constant class '{name}' is disallowed to have __new__ or __init__"
            " method since it shall never be instantiated."
        )


def _instantiation_error(name: str) -> Callable[..., NoReturn]:
    """Helper to format an error message when trying to instantiate a Constants class.

    Args:
        name (str): name of the class.

    Returns:
        Callable[..., NoReturn]: A callable that throws an instantiation error when called.
    """

    def f(*_: Any, **__: Any) -> NoReturn:
        raise ConstantsInstantiationError(
            f"Cannot instantiate constant class '{name}'. Constant class cannot be instantiated."
        )

    return f


def _own_constants(annotations: dict[str, Annotation], allow_private: bool) -> list[str]:
    return [
        k
        for k in annotations
        if not (k.startswith("__") and k.endswith("__"))
        and (allow_private or not k.startswith("_"))
    ]


def _verify_value(name: str, key: str, annotation: Annotation, value: Any) -> None:
    """Verify that the value of a constant is an instance of its annotation's raw type.

    String annotations and annotations that have no raw type are not checked.

    Raises:
        ConstantsCompositionError: Raised when the value does not match.
    """
    annotation = unwrap_annotation(annotation)
    if isinstance(annotation, str):
        return
    try:
        token = capture(annotation)
    except UnsupportedTypeError:
        logger.debug(
            "constant_check_skipped", cls=name, constant=key, annotation=repr(annotation)
        )
        return

    if token.matches_instance(value):
        return
    if isinstance(value, _PROMOTIONS.get(token.raw_type, ())) and not isinstance(value, bool):
        return
    raise ConstantsCompositionError(
        f"Value {value!r} of constant '{key}' in class '{name}' is not an instance of {token}."
    )


def _collect_and_verify(cls: type, name: str, allow_private: bool) -> tuple[str, ...]:
    """Collect the constant names of a class, inherited ones first, and verify their values.

    Raises:
        ConstantsCompositionError: Raised when an annotated member value is missing or does not
            match its annotation, or when the annotations cannot be resolved.
    """
    try:
        annotations = source_annotations(cls)
    except UnsupportedTypeError as e:
        raise ConstantsCompositionError(
            f"Annotations of constant class '{name}' cannot be resolved."
        ) from e

    own = _own_constants(annotations, allow_private)
    namespace = vars(cls)
    for key in own:
        # Ensure that any annotated member has a value.
        if key not in namespace:
            raise ConstantsCompositionError(
                f"Attribute '{key}' needs a value in constant class '{name}'."
            )
        _verify_value(name, key, annotations[key], namespace[key])

    constants_names: list[str] = []
    for base in cls.__bases__:
        if isinstance(base, ConstantsMetaclass):
            constants_names.extend(k for k in base.__constants__ if k not in constants_names)
    constants_names.extend(k for k in own if k not in constants_names)
    return tuple(constants_names)


class ConstantsMetaclass(type):
    __constants__: tuple[str, ...]

    def __new__(
        mcs,
        name: str,
        bases: tuple[type, ...],
        namespace: dict[str, Any],
        /,
        allow_private: bool = False,
        **kwargs: Any,
    ) -> Any:

        # verify that no function is added.
        _verify_functions(name, namespace)

        # add an __new__ method that throws an error.
        namespace["__new__"] = _instantiation_error(name)

        # annotations may be evaluated lazily, they are read from the created class.
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)

        # create a tuple of constant names for introspection.
        type.__setattr__(cls, "__constants__", _collect_and_verify(cls, name, allow_private))
        return cls

    def __setattr__(cls, name: str, value: Any) -> NoReturn:
        raise ConstantsModificationError(
            f"Attribute '{name}' of class '{cls.__name__}' cannot be modified. Reason: Constant"
            " class cannot be modified."
        )

    def __delattr__(cls, name: str) -> NoReturn:
        raise ConstantsModificationError(
            f"Attribute '{name}' of class '{cls.__name__}' cannot be deleted. Reason: Constant"
            " class cannot be modified."
        )

    def __repr__(cls) -> str:
        """Returns a string representation of the class."""
        constants = ", ".join(f"{k}={getattr(cls, k)!r}" for k in cls.__constants__)
        return f"<ConstantNamespace {cls.__name__}({constants})>"

    def __iter__(cls) -> Iterator[str]:
        return iter(cls.__constants__)

    def __contains__(cls, name: str) -> bool:
        """Check if a constant name exists."""
        return name in cls.__constants__

    def __len__(cls) -> int:
        """Return the number of constants."""
        return len(cls.__constants__)

    def items(cls) -> list[tuple[str, Any]]:
        """Return all constants as (name, value) pairs."""
        return [(k, getattr(cls, k)) for k in cls.__constants__]

    def keys(cls) -> tuple[str, ...]:
        """Return all constant names."""
        return cls.__constants__

    def values(cls) -> tuple[Any, ...]:
        """Return all constant values."""
        return tuple(getattr(cls, k) for k in cls.__constants__)

    def get(cls, name: str, default: Any = None) -> Any:
        """Get a constant value with optional default."""
        if name not in cls.__constants__:
            return default
        return getattr(cls, name, default)

    def has_constant(cls, name: str) -> bool:
        """Check if a constant exists."""
        return name in cls.__constants__

    def aggregate[T](
        cls, type_: TypeLike[T], rules: MatchRules | None = None
    ) -> TypedAggregate[T]:
        """Aggregate the constants declared by this class that are instances of ``type_``.

        Only the constants declared by the class itself are aggregated, not the inherited ones.

        Examples:
            >>> class Limits(ConstantNamespace):
            ...     LOW: int = 1
            ...     HIGH: int = 10
            ...     UNIT: str = "ms"
            >>> Limits.aggregate(int).to_list()
            (1, 10)
        """
        aggregate = from_source(cls).constants_of_type(type_)
        return aggregate if rules is None else aggregate.matching(rules)


class ConstantNamespace(metaclass=ConstantsMetaclass, allow_private=False):
    """Base class to create namespaces (class) of constants.
    Examples:
        >>> class MyConstants(ConstantNamespace):
        ...    A = 1 # this is not a constant. It needs annotation.
        ...    _A: int = 1 # this is not a constant unless allow_private=True.
        ...    B: int = 2 # this is a constant.
        ...    C: float = 3 # accepted, an int is a valid float.
        ...    l: tuple[int, ...] = (1, 2) # checked as a tuple, elements are not.

        >>> MyConstants.B
        2

        >>> MyConstants.B = 3 # raises ConstantsModificationError.

        >>> MyConstants.aggregate(int).to_list() # B and C, A is not a constant.
        (2, 3)

        >>> class Broken(ConstantNamespace):
        ...    D: int = "4" # raises ConstantsCompositionError.
    """

    __constants__: ClassVar[tuple[str, ...]]
