"""Built-in randomizers for scalar and common standard library types.

:func:`default_randomizers` builds the catalog used as the registry's fallback.
Every randomizer shares the engine's :class:`random.Random`, so a fixed seed
reproduces the whole generated object graph.
"""

from __future__ import annotations

import random
import uuid
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any

from randfill.config.schema import RandomizationParameters

from .base import FunctionRandomizer, Randomizer, as_randomizer
from .numbers import (
    BooleanRandomizer,
    ComplexRandomizer,
    DecimalRandomizer,
    FloatRandomizer,
    IntegerRandomizer,
    UUIDRandomizer,
)
from .temporal import DateRandomizer, DateTimeRandomizer, TimeDeltaRandomizer, TimeRandomizer
from .text import BytesRandomizer, Char, CharacterRandomizer, StringRandomizer, alphabetic_characters


def default_randomizers(
    params: RandomizationParameters, rng: random.Random
) -> dict[Any, Randomizer[Any]]:
    """Return the built-in randomizers keyed by the type they produce."""

    characters = CharacterRandomizer(rng, params.charset)
    dates = DateRandomizer(rng, params.date_range)
    times = TimeRandomizer(rng, params.time_range)
    return {
        bool: BooleanRandomizer(rng),
        int: IntegerRandomizer(rng),
        float: FloatRandomizer(rng),
        complex: ComplexRandomizer(rng),
        Decimal: DecimalRandomizer(rng),
        uuid.UUID: UUIDRandomizer(rng),
        Char: characters,
        str: StringRandomizer(
            rng, characters, params.min_string_length, params.max_string_length
        ),
        bytes: BytesRandomizer(rng, params.min_string_length, params.max_string_length),
        bytearray: BytesRandomizer(
            rng, params.min_string_length, params.max_string_length, mutable=True
        ),
        date: dates,
        time: times,
        datetime: DateTimeRandomizer(dates, times),
        timedelta: TimeDeltaRandomizer(rng),
    }


__all__ = [
    "Char",
    "Randomizer",
    "FunctionRandomizer",
    "as_randomizer",
    "alphabetic_characters",
    "default_randomizers",
]
