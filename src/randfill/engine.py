"""Recursive population of arbitrary types with random values.

:class:`RandomizationEngine` turns a type hint into a populated value.  The
decision for a requested type follows a fixed precedence:

1. A randomizer registered for the field being populated, or for the type
   itself, produces the value directly.  This is where recursion stops for
   scalars, strings, dates and anything the caller registered.
2. ``Annotated``/``NewType`` wrappers are unwrapped, one member of a union is
   chosen, and literals pick one of their values.
3. Arrays, collections and maps are handed to their populators, which call
   back into the engine for every element.
4. Enums yield a uniformly chosen member (:class:`EmptyEnumError` when there
   is none).
5. Abstract classes and protocols are swapped for a concrete subtype found by
   the :class:`~randfill.scanning.SubtypeScanner` when scanning is enabled
   (:class:`NoConcreteSubtypeError` otherwise), then handled as composites.
6. Composite classes are instantiated and each field is populated in turn.
7. Anything left over (``Any``, unresolved annotations) gets its zero value.

Depth and cycle control
-----------------------
Before a composite is built the engine checks the context: when the depth
limit is reached, or when the field being populated already appears earlier
on the current path, the branch is cut.  The engine then returns a pooled
instance of the type if one exists and an empty instance otherwise; cutting a
branch never raises.  Finished composites are offered to the per-type pool,
and once a pool holds ``max_object_pool_size`` instances they are reused
instead of building new ones.

Failures while invoking a randomizer, instantiating a type, building a
container or assigning a field are raised as :class:`ObjectGenerationError`
and abort the whole call.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Iterable, Iterator
from typing import Any, TypeVar, get_args

from randfill.config.schema import RandomizationParameters

from .context import RandomizationContext
from .introspection import (
    FieldInfo,
    TypeKind,
    empty_instance,
    filter_same_parameterized_types,
    get_fields,
    has_initialized_value,
    kind_of,
    new_instance,
    raw_type,
    set_field_value,
    union_members,
    unwrap,
    zero_value,
)
from .populators import ArrayPopulator, CollectionPopulator, MapPopulator
from .randomizers.base import Randomizer
from .registry import RandomizerLike, RandomizerRegistry
from .scanning import SubtypeScanner
from .utils.errors import (
    EmptyEnumError,
    NoConcreteSubtypeError,
    ObjectGenerationError,
    RandomizationError,
)
from .utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def _describe(type_: Any, field: FieldInfo | None) -> str:
    if field is None:
        return repr(type_)
    return f"field '{field.name}' of {field.declaring_type.__qualname__}"


class RandomizationEngine:
    """Generate populated instances of arbitrary types.

    Parameters
    ----------
    params:
        Randomization parameters; defaults to ``RandomizationParameters()``.
    registry:
        Optional pre-built registry.  By default a registry seeded from this
        engine's random generator is created.
    scanner:
        Optional subtype scanner, e.g. to share its cache between engines.
    """

    def __init__(
        self,
        params: RandomizationParameters | None = None,
        *,
        registry: RandomizerRegistry | None = None,
        scanner: SubtypeScanner | None = None,
    ) -> None:
        self.params = params if params is not None else RandomizationParameters()
        self.rng = random.Random(self.params.seed)
        self.registry = registry if registry is not None else RandomizerRegistry(self.params, self.rng)
        self.scanner = scanner if scanner is not None else SubtypeScanner()
        self.array_populator = ArrayPopulator(self)
        self.collection_populator = CollectionPopulator(self)
        self.map_populator = MapPopulator(self)

    # -- registration -----------------------------------------------------

    def register_randomizer(self, type_: Any, randomizer: RandomizerLike) -> "RandomizationEngine":
        self.registry.register(type_, randomizer)
        return self

    def register_field_randomizer(
        self, declaring_type: type, field_name: str, randomizer: RandomizerLike
    ) -> "RandomizationEngine":
        self.registry.register_field(declaring_type, field_name, randomizer)
        return self

    # -- public entry points ----------------------------------------------

    def new_context(self, excluded_fields: Iterable[str] = ()) -> RandomizationContext:
        """Return a fresh context for one top-level population call."""

        return RandomizationContext(self.params, self.rng, excluded_fields=excluded_fields)

    def next_object(self, type_: type[T], *excluded_fields: str) -> T:
        """Return a random instance of ``type_``, leaving ``excluded_fields`` alone.

        Excluded fields are dotted paths from the root object, e.g.
        ``"address.street"``.
        """

        return self.populate(type_, self.new_context(excluded_fields))

    def objects(self, type_: type[T], amount: int, *excluded_fields: str) -> Iterator[T]:
        """Return an iterator over ``amount`` independently generated instances."""

        if amount < 0:
            raise ValueError(f"amount must be non-negative, got {amount}")
        return (self.next_object(type_, *excluded_fields) for _ in range(amount))

    def populate(
        self,
        type_: Any,
        context: RandomizationContext | None = None,
        *,
        field: FieldInfo | None = None,
    ) -> Any:
        """Return a random value of ``type_``.

        ``field`` is the field the value is generated for, if any; it enables
        field-level randomizer overrides.  A new context is created when none
        is given.
        """

        if context is None:
            context = self.new_context()

        randomizer = self.registry.get_randomizer(type_, field)
        if randomizer is not None:
            return self.invoke(randomizer, type_, field)

        kind = kind_of(type_)
        if kind is TypeKind.WRAPPER:
            return self.populate(unwrap(type_), context, field=field)
        if kind is TypeKind.UNION:
            members = union_members(type_)
            if not members:
                return None
            return self.populate(self.rng.choice(members), context, field=field)
        if kind is TypeKind.LITERAL:
            return self.rng.choice(get_args(type_))
        if kind is TypeKind.ARRAY:
            return self.array_populator.populate(type_, context)
        if kind is TypeKind.FIXED_TUPLE:
            return self.array_populator.populate_fixed(type_, context)
        if kind is TypeKind.COLLECTION:
            return self.collection_populator.populate(type_, context)
        if kind is TypeKind.MAP:
            return self.map_populator.populate(type_, context)
        if kind is TypeKind.ENUM:
            return self._random_enum_member(type_)
        if kind is TypeKind.ABSTRACT:
            return self._populate_composite(self._resolve_concrete_type(type_), context)
        if kind is TypeKind.COMPOSITE:
            return self._populate_composite(type_, context)
        return zero_value(type_)

    def invoke(self, randomizer: Randomizer[Any], type_: Any, field: FieldInfo | None = None) -> Any:
        """Return ``randomizer``'s next value, wrapping failures."""

        try:
            return randomizer.get_random_value()
        except RandomizationError:
            raise
        except Exception as exc:
            raise ObjectGenerationError(
                f"Randomizer {randomizer!r} failed for {_describe(type_, field)}: {exc}",
                type_=type_,
                field=field,
                cause=exc,
            ) from exc

    # -- composite objects ------------------------------------------------

    def _populate_composite(self, type_: Any, context: RandomizationContext) -> Any:
        if context.should_stop():
            logger.debug(
                "Cutting branch at %s (depth=%d, cycle=%s)",
                context.field_path() or repr(type_),
                context.depth,
                context.is_in_cycle(),
            )
            if context.has_pooled(type_):
                return context.pooled(type_)
            return self._instantiate(empty_instance, type_)

        if context.is_pool_full(type_):
            logger.debug("Reusing pooled instance of %r", type_)
            return context.pooled(type_)

        instance = self._instantiate(new_instance, type_)
        with context.descending():
            for field in get_fields(type_):
                if field.is_static:
                    continue
                if context.is_excluded(field):
                    if not hasattr(instance, field.name):
                        self._assign(instance, field, zero_value(field.type))
                    continue
                if not self.params.override_default_initialization and has_initialized_value(
                    instance, field
                ):
                    continue
                with context.visiting(field):
                    value = self.populate(field.type, context, field=field)
                self._assign(instance, field, value)
        context.offer(type_, instance)
        return instance

    def _instantiate(self, factory: Callable[[Any], Any], type_: Any) -> Any:
        try:
            return factory(type_)
        except RandomizationError:
            raise
        except Exception as exc:
            raise ObjectGenerationError(
                f"Cannot create an instance of {type_!r}: {exc}", type_=type_, cause=exc
            ) from exc

    def _assign(self, instance: Any, field: FieldInfo, value: Any) -> None:
        try:
            set_field_value(instance, field, value)
        except Exception as exc:
            raise ObjectGenerationError(
                f"Cannot set {_describe(field.type, field)}: {exc}",
                type_=field.declaring_type,
                field=field,
                cause=exc,
            ) from exc

    # -- enums and abstract types -----------------------------------------

    def _random_enum_member(self, type_: Any) -> Any:
        members = list(raw_type(type_))
        if not members:
            raise EmptyEnumError(type_)
        return self.rng.choice(members)

    def _resolve_concrete_type(self, type_: Any) -> type:
        if not self.params.scan_for_concrete_types:
            raise NoConcreteSubtypeError(type_)
        candidates = filter_same_parameterized_types(
            self.scanner.get_public_concrete_subtypes(type_), type_
        )
        if not candidates:
            raise NoConcreteSubtypeError(type_, scanned=True)
        chosen = self.rng.choice(candidates)
        logger.debug("Resolved %r to concrete type %s", type_, chosen.__qualname__)
        return chosen


def random_object(
    type_: type[T], *excluded_fields: str, params: RandomizationParameters | None = None
) -> T:
    """Return a random instance of ``type_`` from a throwaway engine."""

    return RandomizationEngine(params).next_object(type_, *excluded_fields)


__all__ = ["RandomizationEngine", "random_object"]
