"""Casting helpers. A cast never raises on mismatch: it returns ``None`` instead.

The ``unsafe_*`` helpers check the raw type of a token only. Casting a list of integers with a
``list[str]`` token "succeeds".
"""
from collections.abc import Callable
from typing import Any, cast

from .tokens import TypeToken, capture
from .utilities import Annotation


def as_instance[T](cls: type[T], obj: Any) -> T | None:
    """Return ``obj`` when it is an instance of ``cls``, ``None`` otherwise."""
    return obj if isinstance(obj, cls) else None


def caster[T](cls: type[T]) -> Callable[[Any], T | None]:
    """Create a function casting objects into ``cls``. See :func:`as_instance`."""

    def f(obj: Any) -> T | None:
        return as_instance(cls, obj)

    return f


def unsafe_generic(type_: TypeToken[Any] | Annotation, obj: Any) -> Any | None:
    """Cast an object into a possibly generic type, checking its raw type only.

    Args:
        type_ (TypeToken | Any): The token (or type descriptor) to cast into.
        obj (Any): The object to cast.

    Returns:
        Any | None: The object when its raw type matches, otherwise None.
    """
    token = capture(type_)
    return obj if token.matches_instance(obj) else None


def unsafe_generic_caster[T](type_: TypeToken[T]) -> Callable[[Any], T | None]:
    """Create a function casting into a possibly generic type. See :func:`unsafe_generic`."""
    token = capture(type_)

    def f(obj: Any) -> T | None:
        return cast("T | None", obj if token.matches_instance(obj) else None)

    return f
