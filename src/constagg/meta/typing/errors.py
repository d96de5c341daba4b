"""Errors raised while turning type descriptors into type tokens."""

from ...abstract.exceptions.traced_exceptions import TracedException


class TypingError(TracedException):
    """General Error for the typing tools of constagg."""


class UnsupportedTypeError(TypingError):
    """Signals a type descriptor that cannot be decomposed into a raw type and generic arguments."""

    def __init__(self, descriptor: object, reason: str = "") -> None:
        self.descriptor = descriptor
        message = f"Unsupported type: {descriptor!r} ({type(descriptor).__qualname__})"
        if reason:
            message = f"{message}. {reason}"
        super().__init__(message)
