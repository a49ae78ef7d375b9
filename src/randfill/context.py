"""Per-call state of a population run.

A :class:`RandomizationContext` is created for every top-level call to the
engine and is never shared between calls.  It tracks:

* the current randomization *depth*, i.e. how many composite objects are being
  populated on the current branch;
* the *path* of fields under construction, keyed by ``(declaring type, field
  name)``.  A key that shows up twice on the path means the branch is cyclic;
* an *object pool* of already generated instances per type.  At most
  ``max_object_pool_size`` instances are kept per type; once the bound is
  reached the pooled instances are reused instead of building new ones.
  Entries are never evicted during a call;
* the dotted paths of fields that must be left alone.
"""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

from randfill.config.schema import RandomizationParameters

from .introspection import FieldInfo


class RandomizationContext:
    """Mutable depth, path and pool state for one population call."""

    def __init__(
        self,
        params: RandomizationParameters,
        rng: random.Random,
        *,
        excluded_fields: Iterable[str] = (),
    ) -> None:
        self.params = params
        self.excluded_fields: frozenset[str] = frozenset(excluded_fields)
        self.depth = 0
        self._rng = rng
        self._path: Counter[tuple[type, str]] = Counter()
        self._stack: list[FieldInfo] = []
        self._pool: dict[Any, list[Any]] = {}

    # -- depth and path ---------------------------------------------------

    @contextmanager
    def descending(self) -> Iterator[None]:
        """Count one more level of composite population for the block."""

        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    @contextmanager
    def visiting(self, field: FieldInfo) -> Iterator[None]:
        """Keep ``field`` on the in-progress path for the block."""

        self._path[field.key] += 1
        self._stack.append(field)
        try:
            yield
        finally:
            self._stack.pop()
            self._path[field.key] -= 1
            if not self._path[field.key]:
                del self._path[field.key]

    @property
    def current_field(self) -> FieldInfo | None:
        return self._stack[-1] if self._stack else None

    def has_exceeded_depth(self) -> bool:
        return self.depth >= self.params.max_randomization_depth

    def is_in_cycle(self) -> bool:
        """Return ``True`` when the field being populated is already on the path."""

        field = self.current_field
        return field is not None and self._path[field.key] > 1

    def should_stop(self) -> bool:
        return self.has_exceeded_depth() or self.is_in_cycle()

    def field_path(self, field: FieldInfo | None = None) -> str:
        """Return the dotted path of ``field`` below the fields on the stack."""

        names = [f.name for f in self._stack]
        if field is not None:
            names.append(field.name)
        return ".".join(names)

    def is_excluded(self, field: FieldInfo) -> bool:
        return bool(self.excluded_fields) and self.field_path(field) in self.excluded_fields

    # -- object pool ------------------------------------------------------

    def pool_size(self, type_: Any) -> int:
        return len(self._pool.get(type_, ()))

    def has_pooled(self, type_: Any) -> bool:
        return self.pool_size(type_) > 0

    def is_pool_full(self, type_: Any) -> bool:
        return self.pool_size(type_) >= self.params.max_object_pool_size

    def offer(self, type_: Any, instance: Any) -> bool:
        """Add ``instance`` to the pool of ``type_`` unless the pool is full."""

        if self.is_pool_full(type_):
            return False
        self._pool.setdefault(type_, []).append(instance)
        return True

    def pooled(self, type_: Any) -> Any:
        """Return a random pooled instance of ``type_``.

        Raises
        ------
        KeyError
            If nothing is pooled for ``type_``.
        """

        pool = self._pool.get(type_)
        if not pool:
            raise KeyError(type_)
        return self._rng.choice(pool)


__all__ = ["RandomizationContext"]
