"""Discovery of concrete subtypes for abstract classes and protocols.

Python has no classpath to scan; the classes that exist are the ones already
imported.  :class:`SubtypeScanner` walks ``type.__subclasses__()`` transitively
from an abstract base and keeps the *public concrete* subtypes: classes that
:func:`inspect.isabstract` does not report, that are not protocols themselves
and whose name does not start with an underscore.

Results are memoized per base type.  The computation is idempotent, so
concurrent first calls at worst compute the same tuple twice.  Classes defined
after the first lookup are only seen after :meth:`SubtypeScanner.clear`.
"""

from __future__ import annotations

import inspect
from typing import Any

from .introspection import is_protocol, raw_type
from .utils.logging import get_logger

logger = get_logger(__name__)


def _is_public_concrete(cls: type) -> bool:
    return not inspect.isabstract(cls) and not is_protocol(cls) and not cls.__name__.startswith("_")


class SubtypeScanner:
    """Find and cache public concrete subtypes of a base type."""

    def __init__(self) -> None:
        self._cache: dict[type, tuple[type, ...]] = {}

    def get_public_concrete_subtypes(self, base: Any) -> tuple[type, ...]:
        """Return the public concrete subtypes of ``base`` in discovery order."""

        raw = raw_type(base)
        cached = self._cache.get(raw)
        if cached is None:
            cached = tuple(self._scan(raw))
            self._cache[raw] = cached
            logger.debug("Found %d concrete subtypes of %s", len(cached), raw.__qualname__)
        return cached

    def clear(self) -> None:
        """Forget every cached scan result."""

        self._cache.clear()

    @staticmethod
    def _scan(base: type) -> list[type]:
        found: list[type] = []
        seen: set[type] = set()
        pending = list(base.__subclasses__())
        while pending:
            cls = pending.pop(0)
            if cls in seen:
                continue
            seen.add(cls)
            if _is_public_concrete(cls):
                found.append(cls)
            pending.extend(cls.__subclasses__())
        return found


__all__ = ["SubtypeScanner"]
