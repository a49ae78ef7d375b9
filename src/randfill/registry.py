"""Type and field based registry of randomizers.

Two kinds of keys are supported:

* a type (``int``, ``Char``, ``Address`` or any hashable type hint such as
  ``list[int]``), and
* a ``(declaring type, field name)`` pair overriding a single field.

Field registrations win over type registrations.  Type lookups fall back to the
built-in catalog from :func:`randfill.randomizers.default_randomizers` and
finally to ``None``, which tells the engine to introspect the type instead.
Registration is additive and the last registration for a key wins; there is no
removal.
"""

from __future__ import annotations

import random
from typing import Any, Callable

from randfill.config.schema import RandomizationParameters

from .introspection import FieldInfo
from .randomizers import default_randomizers
from .randomizers.base import Randomizer, as_randomizer

RandomizerLike = Randomizer[Any] | Callable[[], Any]


class RandomizerRegistry:
    """Resolve randomizers for types and fields."""

    def __init__(self, params: RandomizationParameters, rng: random.Random) -> None:
        self._defaults: dict[Any, Randomizer[Any]] = default_randomizers(params, rng)
        self._by_type: dict[Any, Randomizer[Any]] = {}
        self._by_field: dict[tuple[type, str], Randomizer[Any]] = {}

    def register(self, type_: Any, randomizer: RandomizerLike) -> None:
        """Register ``randomizer`` for every value of ``type_``.

        Parameters
        ----------
        type_:
            Hashable type or type hint.
        randomizer:
            A :class:`Randomizer` or a zero-argument callable.
        """

        self._by_type[type_] = as_randomizer(randomizer)

    def register_field(
        self, declaring_type: type, field_name: str, randomizer: RandomizerLike
    ) -> None:
        """Register ``randomizer`` for field ``field_name`` declared on ``declaring_type``."""

        self._by_field[(declaring_type, field_name)] = as_randomizer(randomizer)

    def get_randomizer_for_type(self, type_: Any) -> Randomizer[Any] | None:
        """Return the randomizer for ``type_`` or ``None`` when there is none."""

        try:
            registered = self._by_type.get(type_)
            if registered is None:
                registered = self._defaults.get(type_)
        except TypeError:
            # Unhashable hints, e.g. Annotated metadata holding a list.
            return None
        return registered

    def get_randomizer_for_field(self, field: FieldInfo) -> Randomizer[Any] | None:
        """Return the field override registered for ``field``, if any."""

        return self._by_field.get(field.key)

    def get_randomizer(self, type_: Any, field: FieldInfo | None = None) -> Randomizer[Any] | None:
        """Return the randomizer to use for ``type_`` populated as ``field``."""

        if field is not None:
            randomizer = self.get_randomizer_for_field(field)
            if randomizer is not None:
                return randomizer
        return self.get_randomizer_for_type(type_)

    def __contains__(self, type_: Any) -> bool:
        return self.get_randomizer_for_type(type_) is not None


__all__ = ["RandomizerLike", "RandomizerRegistry"]
