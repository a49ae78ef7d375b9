"""Numeric randomizers: booleans, integers, floats, decimals and UUIDs."""

from __future__ import annotations

import random
import uuid
from decimal import Decimal

__all__ = [
    "INT_MIN",
    "INT_MAX",
    "BooleanRandomizer",
    "IntegerRandomizer",
    "FloatRandomizer",
    "ComplexRandomizer",
    "DecimalRandomizer",
    "UUIDRandomizer",
]

# Python ints are unbounded; keep values in the signed 32-bit range.
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


class BooleanRandomizer:
    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def get_random_value(self) -> bool:
        return self._rng.random() < 0.5


class IntegerRandomizer:
    """Uniform integers within ``[min_value, max_value]``."""

    def __init__(
        self, rng: random.Random, min_value: int = INT_MIN, max_value: int = INT_MAX
    ) -> None:
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        self._rng = rng
        self.min_value = min_value
        self.max_value = max_value

    def get_random_value(self) -> int:
        return self._rng.randint(self.min_value, self.max_value)


class FloatRandomizer:
    """Uniform floats within ``[0.0, 1.0)``."""

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def get_random_value(self) -> float:
        return self._rng.random()


class ComplexRandomizer:
    """Complex numbers whose real and imaginary parts are uniform floats."""

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def get_random_value(self) -> complex:
        return complex(self._rng.random(), self._rng.random())


class DecimalRandomizer:
    """Decimals with ``scale`` fractional digits built from a random integer."""

    def __init__(self, rng: random.Random, scale: int = 2) -> None:
        self._rng = rng
        self._scale = scale

    def get_random_value(self) -> Decimal:
        unscaled = self._rng.randint(INT_MIN, INT_MAX)
        return Decimal(unscaled).scaleb(-self._scale)


class UUIDRandomizer:
    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def get_random_value(self) -> uuid.UUID:
        return uuid.UUID(int=self._rng.getrandbits(128), version=4)
