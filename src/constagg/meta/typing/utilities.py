"""Type annotation utility functions.

This module provides helper functions for working with Python type annotations:
checking union and optional types, peeling qualifiers (``Final``, ``ClassVar``) and
``Annotated`` metadata off an annotation, and reading the annotations declared by a
class or a module.
"""
import inspect
from typing import Annotated, Any, ClassVar, Final, Union, get_args, get_origin
from types import UnionType, NoneType

from .errors import UnsupportedTypeError

type Annotation = Any

_QUALIFIERS = (Final, ClassVar)


def is_union(annotation: Annotation) -> bool:
    """Check if an annotation is a union. A union is a Union or UnionType type.

    Args:
        annotation (Any): The annotation to check.

    Returns:
        bool: Whether the annotation is a union.
    """
    o = get_origin(annotation) or annotation
    return o in (Union, UnionType)


def is_optional(annotation: Annotation) -> bool:
    """Check if an annotation is an optional. An optional is a Union with NoneType.

    Args:
        annotation (Any): The annotation to check.

    Returns:
        bool: Whether the annotation is an optional.
    """
    return is_union(annotation) and NoneType in get_args(annotation)


def is_annotated(annotation: Annotation) -> bool:
    """Check if an annotation is an ``Annotated[T, ...]`` form."""
    return get_origin(annotation) is Annotated


def is_qualifier(annotation: Annotation) -> bool:
    """Check if an annotation is a bare or parameterized ``Final``/``ClassVar`` qualifier."""
    return annotation in _QUALIFIERS or get_origin(annotation) in _QUALIFIERS


def is_final(annotation: Annotation) -> bool:
    """Check if an annotation declares a ``Final`` binding, looking through ``Annotated`` and
    ``ClassVar`` layers.

    Args:
        annotation (Any): The annotation to check.

    Returns:
        bool: Whether the annotation contains the ``Final`` qualifier.
    """
    while True:
        if annotation is Final or get_origin(annotation) is Final:
            return True
        if is_annotated(annotation):
            annotation = annotation.__origin__
        elif get_origin(annotation) is ClassVar and get_args(annotation):
            annotation = get_args(annotation)[0]
        else:
            return False


def annotation_metadata(annotation: Annotation) -> tuple[Any, ...]:
    """Collect every ``Annotated`` metadata element attached to an annotation, outermost first.

    Metadata nested inside qualifiers (``Final[Annotated[int, ...]]``) is collected as well.
    """
    found: list[Any] = []
    while True:
        if is_annotated(annotation):
            found.extend(annotation.__metadata__)
            annotation = annotation.__origin__
        elif is_qualifier(annotation) and get_args(annotation):
            annotation = get_args(annotation)[0]
        else:
            return tuple(found)


def unwrap_annotation(annotation: Annotation) -> Annotation:
    """Strip ``Annotated`` metadata and ``Final``/``ClassVar`` qualifiers off an annotation.

    A bare qualifier (``X: Final = 3``) carries no type and unwraps to ``Any``.

    Examples:
        >>> unwrap_annotation(Final[Annotated[list[int], "meta"]])
        list[int]
    """
    while True:
        if is_annotated(annotation):
            annotation = annotation.__origin__
        elif is_qualifier(annotation):
            args = get_args(annotation)
            if not args:
                return Any
            annotation = args[0]
        else:
            return annotation


def source_annotations(source: Any) -> dict[str, Annotation]:
    """Read the annotations declared directly by a class or a module.

    Args:
        source (Any): A class or a module.

    Raises:
        UnsupportedTypeError: Raised when the annotations reference names that cannot be
            resolved.

    Returns:
        dict[str, Any]: The annotations by member name. Inherited annotations are not included.
    """
    try:
        return dict(inspect.get_annotations(source))
    except NameError as e:
        raise UnsupportedTypeError(source, f"Its annotations cannot be resolved: {e}") from e
