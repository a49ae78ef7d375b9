"""Core randomizer protocol.

A randomizer produces one random value of an associated type each time it is
asked.  Randomizers are leaves of the population algorithm: when one is
registered for a type or a field, the engine returns its value as-is and does
not recurse any further.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Randomizer(Protocol[T_co]):
    """Protocol for random value producers."""

    def get_random_value(self) -> T_co:
        """Return a new random value."""

        ...


class FunctionRandomizer(Generic[T]):
    """Adapt a zero-argument callable to the :class:`Randomizer` protocol."""

    def __init__(self, func: Callable[[], T]) -> None:
        self._func = func

    def get_random_value(self) -> T:
        return self._func()

    def __repr__(self) -> str:
        return f"FunctionRandomizer({self._func!r})"


def as_randomizer(obj: Any) -> Randomizer[Any]:
    """Return ``obj`` as a randomizer, wrapping plain callables.

    Raises
    ------
    TypeError
        If ``obj`` is neither a randomizer nor callable.
    """

    if isinstance(obj, Randomizer):
        return obj
    if callable(obj):
        return FunctionRandomizer(obj)
    raise TypeError(f"{obj!r} is neither a Randomizer nor a callable")


__all__ = ["Randomizer", "FunctionRandomizer", "as_randomizer"]
