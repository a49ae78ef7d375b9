"""Character, string and byte randomizers.

Characters are drawn only from the *alphabetic* characters that the configured
charset can encode.  With the default ``ascii`` charset this is ``a-z`` and
``A-Z``; wider charsets such as ``latin-1`` add accented Latin letters.  Strings
are built from the character randomizer so that the same constraint applies to
every generated string.
"""

from __future__ import annotations

import random
from functools import lru_cache
from typing import NewType

from .base import Randomizer

__all__ = [
    "Char",
    "alphabetic_characters",
    "CharacterRandomizer",
    "StringRandomizer",
    "BytesRandomizer",
]

Char = NewType("Char", str)
"""A single character; arrays of ``Char`` hold alphabetic characters only."""

# End of the Latin Extended-B block.
_MAX_SCANNED_CODE_POINT = 0x250


@lru_cache(maxsize=None)
def alphabetic_characters(charset: str) -> tuple[str, ...]:
    """Return the alphabetic characters encodable in ``charset``, in code point order."""

    letters: list[str] = []
    for code_point in range(_MAX_SCANNED_CODE_POINT):
        ch = chr(code_point)
        if not ch.isalpha():
            continue
        try:
            ch.encode(charset)
        except UnicodeEncodeError:
            continue
        letters.append(ch)
    if not letters:
        raise ValueError(f"charset {charset!r} has no alphabetic characters")
    return tuple(letters)


class CharacterRandomizer:
    def __init__(self, rng: random.Random, charset: str = "ascii") -> None:
        self._rng = rng
        self._alphabet = alphabetic_characters(charset)

    def get_random_value(self) -> Char:
        return Char(self._rng.choice(self._alphabet))


class StringRandomizer:
    """Strings of length ``[min_length, max_length]`` made of random characters."""

    def __init__(
        self,
        rng: random.Random,
        characters: Randomizer[str],
        min_length: int = 1,
        max_length: int = 32,
    ) -> None:
        self._rng = rng
        self._characters = characters
        self.min_length = min_length
        self.max_length = max_length

    def get_random_value(self) -> str:
        length = self._rng.randint(self.min_length, self.max_length)
        return "".join(self._characters.get_random_value() for _ in range(length))


class BytesRandomizer:
    """Random byte strings sized like strings; ``mutable`` yields ``bytearray``."""

    def __init__(
        self,
        rng: random.Random,
        min_length: int = 1,
        max_length: int = 32,
        *,
        mutable: bool = False,
    ) -> None:
        self._rng = rng
        self.min_length = min_length
        self.max_length = max_length
        self._mutable = mutable

    def get_random_value(self) -> bytes | bytearray:
        length = self._rng.randint(self.min_length, self.max_length)
        data = self._rng.randbytes(length)
        return bytearray(data) if self._mutable else data
