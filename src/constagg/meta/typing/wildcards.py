"""Shared tokens for common wildcard types. Each one accepts any instance of its raw type."""
from collections.abc import Collection, Mapping, Sequence
from typing import Any, Final

from .tokens import TypeToken, any_type, capture, object_type

ANY: Final[TypeToken[Any]] = any_type()
OBJECT: Final[TypeToken[object]] = object_type()

TYPE: Final[TypeToken[type[Any]]] = capture(type[Any])
LIST: Final[TypeToken[list[Any]]] = capture(list[Any])
TUPLE: Final[TypeToken[tuple[Any, ...]]] = capture(tuple[Any, ...])
SET: Final[TypeToken[set[Any]]] = capture(set[Any])
FROZENSET: Final[TypeToken[frozenset[Any]]] = capture(frozenset[Any])
DICT: Final[TypeToken[dict[Any, Any]]] = capture(dict[Any, Any])
COLLECTION: Final[TypeToken[Collection[Any]]] = capture(Collection[Any])
SEQUENCE: Final[TypeToken[Sequence[Any]]] = capture(Sequence[Any])
MAPPING: Final[TypeToken[Mapping[Any, Any]]] = capture(Mapping[Any, Any])
