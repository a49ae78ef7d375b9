"""Array, collection and map population strategies.

Each populator draws one size uniformly from ``[min_collection_size,
max_collection_size]`` per container and fills the container by asking the
engine for every element, key and value.  Nested containers therefore draw
their own sizes.

* Arrays are tuples.  ``Char`` arrays take every slot from the registry's
  ``Char`` randomizer so they only ever hold alphabetic characters of the
  configured charset.
* Collections keep generation order for sequences; sets silently absorb
  duplicates, so a set may end up smaller than the drawn size.
* Maps insert key/value pairs in generation order; key collisions overwrite
  earlier pairs and shrink the map.  Neither case is retried.

Elements that are wildcards or nested collections are not populated and the
container is returned empty.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .context import RandomizationContext
from .introspection import (
    FieldInfo,
    array_element_type,
    collection_element_type,
    concrete_collection_type,
    concrete_map_type,
    fixed_tuple_slot_types,
    is_populatable,
    map_key_value_types,
    raw_type,
    zero_value,
)
from .randomizers.text import Char
from .utils.errors import ObjectGenerationError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .engine import RandomizationEngine


class ContainerPopulator:
    """Base class holding the engine and the container size policy."""

    def __init__(self, engine: "RandomizationEngine") -> None:
        self._engine = engine

    def random_size(self) -> int:
        params = self._engine.params
        return self._engine.rng.randint(params.min_collection_size, params.max_collection_size)

    @staticmethod
    def _build(container_type: Any, build: Any, *args: Any) -> Any:
        try:
            return build(*args)
        except Exception as exc:
            raise ObjectGenerationError(
                f"Cannot create container of type {container_type!r}: {exc}",
                type_=container_type,
                cause=exc,
            ) from exc


class ArrayPopulator(ContainerPopulator):
    """Populate ``tuple[T, ...]`` arrays and fixed-shape tuples."""

    def populate(self, array_type: Any, context: RandomizationContext) -> tuple[Any, ...]:
        element_type = array_element_type(array_type)
        if not is_populatable(element_type):
            return ()
        size = self.random_size()
        if element_type is Char:
            return self._populate_characters(size)
        return tuple(self._engine.populate(element_type, context) for _ in range(size))

    def _populate_characters(self, size: int) -> tuple[str, ...]:
        randomizer = self._engine.registry.get_randomizer_for_type(Char)
        if randomizer is None:
            raise ObjectGenerationError("No randomizer registered for Char", type_=Char)
        return tuple(self._engine.invoke(randomizer, Char) for _ in range(size))

    def populate_fixed(self, tuple_type: Any, context: RandomizationContext) -> tuple[Any, ...]:
        """Populate every slot of ``tuple[A, B]`` or of a named tuple.

        Named tuples are records: like composite objects they count towards
        the randomization depth, take part in cycle detection through their
        field names and are pooled.
        """

        raw = raw_type(tuple_type)
        if raw is tuple:
            return tuple(
                self._engine.populate(slot, context) for slot in fixed_tuple_slot_types(tuple_type)
            )

        if context.should_stop():
            if context.has_pooled(tuple_type):
                return context.pooled(tuple_type)
            return self._build(tuple_type, zero_value, tuple_type)
        if context.is_pool_full(tuple_type):
            return context.pooled(tuple_type)

        values: list[Any] = []
        with context.descending():
            for name, slot in zip(raw._fields, fixed_tuple_slot_types(tuple_type)):
                field = FieldInfo(name=name, type=slot, declaring_type=raw)
                with context.visiting(field):
                    values.append(self._engine.populate(slot, context, field=field))
        instance = self._build(tuple_type, raw, *values)
        context.offer(tuple_type, instance)
        return instance


class CollectionPopulator(ContainerPopulator):
    """Populate lists, sets, deques and abstract collections."""

    def populate(self, collection_type: Any, context: RandomizationContext) -> Any:
        implementation = concrete_collection_type(collection_type)
        element_type = collection_element_type(collection_type)
        items: list[Any] = []
        if is_populatable(element_type):
            size = self.random_size()
            items = [self._engine.populate(element_type, context) for _ in range(size)]
        return self._build(collection_type, implementation, items)


class MapPopulator(ContainerPopulator):
    """Populate dicts and other mappings."""

    def populate(self, map_type: Any, context: RandomizationContext) -> Any:
        implementation = concrete_map_type(map_type)
        mapping = self._build(map_type, implementation)
        key_type, value_type = map_key_value_types(map_type)
        if not (is_populatable(key_type) and is_populatable(value_type)):
            return mapping
        for _ in range(self.random_size()):
            key = self._engine.populate(key_type, context)
            value = self._engine.populate(value_type, context)
            self._build(map_type, mapping.__setitem__, key, value)
        return mapping


__all__ = ["ContainerPopulator", "ArrayPopulator", "CollectionPopulator", "MapPopulator"]
