"""Typed exceptions raised while generating random instances."""

from __future__ import annotations

from typing import Any


class RandomizationError(Exception):
    """Base class for randomization related errors."""


class ObjectGenerationError(RandomizationError):
    """Raised when an instance, a field value or a randomizer call fails.

    The failing type, the field being populated (if any) and the underlying
    exception are kept on the error so callers can report them.
    """

    def __init__(
        self,
        message: str,
        *,
        type_: Any = None,
        field: Any = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.type_ = type_
        self.field = field
        self.cause = cause


class NoConcreteSubtypeError(RandomizationError):
    """Raised when an abstract type cannot be resolved to a concrete one."""

    def __init__(self, type_: Any, *, scanned: bool = False) -> None:
        if scanned:
            message = f"No public concrete subtype found for {type_!r}"
        else:
            message = (
                f"Cannot instantiate abstract type {type_!r}: "
                "scanning for concrete types is disabled"
            )
        super().__init__(message)
        self.type_ = type_
        self.scanned = scanned


class EmptyEnumError(RandomizationError):
    """Raised when a random member is requested from an enum without members."""

    def __init__(self, type_: Any) -> None:
        super().__init__(f"Enum {type_!r} declares no members")
        self.type_ = type_


__all__ = [
    "RandomizationError",
    "ObjectGenerationError",
    "NoConcreteSubtypeError",
    "EmptyEnumError",
]
