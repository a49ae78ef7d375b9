"""Type introspection helpers used by the randomization engine.

Type hints are the engine's type descriptors: a plain class, a parameterized
generic such as ``dict[str, list[int]]`` or a typing construct such as
``Optional[Address]``.  This module classifies them into a closed set of
:class:`TypeKind` values, enumerates the fields of composite classes and
provides the small amount of reflection the engine needs (instantiation,
zero values and attribute assignment).

All functions are pure queries except :func:`new_instance`,
:func:`empty_instance` and :func:`set_field_value`.

Mapping of Python types to kinds
--------------------------------
* ``tuple[T, ...]`` and bare ``tuple`` are *arrays*; ``tuple[A, B]`` and
  named tuples are *fixed tuples*.
* ``list``, ``set``, ``frozenset``, ``deque`` and abstract collections from
  :mod:`collections.abc` are *collections*.
* ``dict`` and other :class:`~collections.abc.Mapping` types are *maps*.
* Classes that :func:`inspect.isabstract` reports, and protocols, are
  *abstract*.
* ``Any``, ``object``, unbound ``TypeVar``, ``NoneType``, ``Callable`` and
  annotations that could not be evaluated are *unresolved*.
* Every other class is *composite*.
"""

from __future__ import annotations

import collections
import collections.abc as abc
import dataclasses
import inspect
import types
import typing
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, ClassVar, Literal, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel

from .utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ELEMENT_TYPE: Any = str

_STRING_LIKE = (str, bytes, bytearray, memoryview)
_SCALAR_TYPES = (bool, int, float, complex)
_ZERO_CONSTRUCTIBLE = (bool, int, float, complex, str, bytes, bytearray)
_BUILTIN_CONTAINER_MODULES = frozenset({"builtins", "collections", "collections.abc", "typing"})
_SKIPPED_MRO_MODULES = frozenset({"builtins", "abc", "typing", "typing_extensions"})

_COLLECTION_IMPLEMENTATIONS: dict[Any, type] = {
    abc.Iterable: list,
    abc.Collection: list,
    abc.Reversible: list,
    abc.Sequence: list,
    abc.MutableSequence: list,
    abc.Set: set,
    abc.MutableSet: set,
}

_MAP_IMPLEMENTATIONS: dict[Any, type] = {
    abc.Mapping: dict,
    abc.MutableMapping: dict,
}


class TypeKind(Enum):
    """Closed set of shapes the engine dispatches on."""

    WRAPPER = "wrapper"
    UNION = "union"
    LITERAL = "literal"
    ARRAY = "array"
    FIXED_TUPLE = "fixed_tuple"
    COLLECTION = "collection"
    MAP = "map"
    ENUM = "enum"
    ABSTRACT = "abstract"
    COMPOSITE = "composite"
    UNRESOLVED = "unresolved"


@dataclass(slots=True, frozen=True)
class FieldInfo:
    """A field of a composite type.

    ``type`` is the resolved annotation with type variables of a parameterized
    owner already substituted.  ``accessible`` is ``False`` for names with a
    leading underscore; such fields are still populated.
    """

    name: str
    type: Any
    declaring_type: type
    accessible: bool = True
    is_static: bool = False

    @property
    def key(self) -> tuple[type, str]:
        """Return the ``(declaring type, field name)`` pair identifying the field."""

        return (self.declaring_type, self.name)


# ---------------------------------------------------------------------------
# Basic accessors
# ---------------------------------------------------------------------------


def raw_type(tp: Any) -> Any:
    """Return the unparameterized origin of ``tp`` (``list`` for ``list[int]``)."""

    origin = get_origin(tp)
    return origin if origin is not None else tp


def is_new_type(tp: Any) -> bool:
    return isinstance(tp, typing.NewType)


def unwrap(tp: Any) -> Any:
    """Return the type wrapped by an ``Annotated`` hint or a ``NewType``."""

    if get_origin(tp) is Annotated:
        return get_args(tp)[0]
    if is_new_type(tp):
        return tp.__supertype__
    return tp


def union_members(tp: Any) -> tuple[Any, ...]:
    """Return the non-``None`` members of a union."""

    return tuple(arg for arg in get_args(tp) if arg is not type(None))


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_wildcard_type(tp: Any) -> bool:
    return tp is Any or tp is object or isinstance(tp, TypeVar)


def is_array_type(tp: Any) -> bool:
    if raw_type(tp) is not tuple:
        return False
    args = get_args(tp)
    return not args or (len(args) == 2 and args[1] is Ellipsis)


def is_fixed_tuple_type(tp: Any) -> bool:
    raw = raw_type(tp)
    if raw is tuple:
        return not is_array_type(tp)
    return isinstance(raw, type) and issubclass(raw, tuple) and hasattr(raw, "_fields")


def is_map_type(tp: Any) -> bool:
    raw = raw_type(tp)
    return isinstance(raw, type) and (raw in _MAP_IMPLEMENTATIONS or issubclass(raw, abc.Mapping))


def is_collection_type(tp: Any) -> bool:
    raw = raw_type(tp)
    if not isinstance(raw, type) or issubclass(raw, _STRING_LIKE + (tuple,)):
        return False
    if is_map_type(raw):
        return False
    return raw in _COLLECTION_IMPLEMENTATIONS or issubclass(raw, abc.Collection)


def is_enum_type(tp: Any) -> bool:
    raw = raw_type(tp)
    return isinstance(raw, type) and issubclass(raw, Enum)


def is_protocol(tp: Any) -> bool:
    return bool(getattr(raw_type(tp), "_is_protocol", False))


def is_abstract(tp: Any) -> bool:
    """Return ``True`` for abstract classes and protocols."""

    raw = raw_type(tp)
    return isinstance(raw, type) and (inspect.isabstract(raw) or is_protocol(raw))


def is_builtin_container(tp: Any) -> bool:
    """Return ``True`` for collections and maps shipped with the standard library."""

    raw = raw_type(tp)
    return isinstance(raw, type) and raw.__module__ in _BUILTIN_CONTAINER_MODULES


def is_introspectable(tp: Any) -> bool:
    """Return ``True`` when the fields of ``tp`` should be populated one by one.

    User subclasses of built-in collections and maps are introspected like any
    other class; the built-in containers themselves are not.
    """

    if is_enum_type(tp) or is_array_type(tp) or is_fixed_tuple_type(tp):
        return False
    if (is_collection_type(tp) or is_map_type(tp)) and is_builtin_container(tp):
        return False
    return True


def is_populatable(tp: Any) -> bool:
    """Return ``True`` when container elements of type ``tp`` can be generated.

    Wildcards and nested collections are not populated; containers holding
    them stay empty.
    """

    return not is_wildcard_type(tp) and not is_collection_type(tp)


def is_pydantic_model(tp: Any) -> bool:
    raw = raw_type(tp)
    return isinstance(raw, type) and issubclass(raw, BaseModel)


def kind_of(tp: Any) -> TypeKind:
    """Classify ``tp`` into a :class:`TypeKind`."""

    if is_wildcard_type(tp) or tp is type(None) or isinstance(tp, (str, typing.ForwardRef)):
        return TypeKind.UNRESOLVED
    origin = get_origin(tp)
    if origin is Annotated or is_new_type(tp):
        return TypeKind.WRAPPER
    if origin is Union or origin is types.UnionType:
        return TypeKind.UNION
    if origin is Literal:
        return TypeKind.LITERAL
    raw = raw_type(tp)
    if not isinstance(raw, type) or raw is abc.Callable:
        return TypeKind.UNRESOLVED
    if is_enum_type(raw):
        return TypeKind.ENUM
    if issubclass(raw, _STRING_LIKE):
        return TypeKind.UNRESOLVED
    if is_array_type(tp):
        return TypeKind.ARRAY
    if is_fixed_tuple_type(tp):
        return TypeKind.FIXED_TUPLE
    if is_map_type(raw) and not is_introspectable(raw):
        return TypeKind.MAP
    if is_collection_type(raw) and not is_introspectable(raw):
        return TypeKind.COLLECTION
    if is_abstract(raw):
        return TypeKind.ABSTRACT
    return TypeKind.COMPOSITE


# ---------------------------------------------------------------------------
# Generic arguments
# ---------------------------------------------------------------------------


def array_element_type(tp: Any) -> Any:
    args = get_args(tp)
    return args[0] if args else DEFAULT_ELEMENT_TYPE


def collection_element_type(tp: Any) -> Any:
    args = get_args(tp)
    return args[0] if args else DEFAULT_ELEMENT_TYPE


def map_key_value_types(tp: Any) -> tuple[Any, Any]:
    args = get_args(tp)
    if len(args) == 2:
        return args[0], args[1]
    if raw_type(tp) is collections.Counter:
        return (args[0] if args else DEFAULT_ELEMENT_TYPE), int
    return DEFAULT_ELEMENT_TYPE, DEFAULT_ELEMENT_TYPE


def fixed_tuple_slot_types(tp: Any) -> list[Any]:
    """Return the slot types of ``tuple[A, B]`` or of a named tuple class."""

    raw = raw_type(tp)
    if raw is tuple:
        return list(get_args(tp))
    hints = dict(_own_annotations(raw))
    return [hints.get(name, Any) for name in raw._fields]


def concrete_collection_type(tp: Any) -> type:
    """Return an instantiable implementation for the collection ``tp``."""

    raw = raw_type(tp)
    implementation = _COLLECTION_IMPLEMENTATIONS.get(raw)
    if implementation is not None:
        return implementation
    if inspect.isabstract(raw):
        return set if issubclass(raw, abc.Set) else list
    return raw


def concrete_map_type(tp: Any) -> type:
    """Return an instantiable implementation for the map ``tp``."""

    raw = raw_type(tp)
    implementation = _MAP_IMPLEMENTATIONS.get(raw)
    if implementation is not None:
        return implementation
    return dict if inspect.isabstract(raw) else raw


def type_var_bindings(tp: Any) -> dict[Any, Any]:
    """Map the type parameters of a parameterized class to its arguments."""

    origin = get_origin(tp)
    if not isinstance(origin, type):
        return {}
    parameters = getattr(origin, "__parameters__", ())
    return dict(zip(parameters, get_args(tp)))


def substitute_type_vars(tp: Any, bindings: dict[Any, Any]) -> Any:
    """Replace type variables in ``tp`` using ``bindings``."""

    if not bindings:
        return tp
    if isinstance(tp, TypeVar):
        return bindings.get(tp, tp)
    parameters = getattr(tp, "__parameters__", ())
    if parameters and get_origin(tp) is not None:
        try:
            return tp[tuple(bindings.get(p, p) for p in parameters)]
        except TypeError:
            return tp
    return tp


def mro_type_var_bindings(tp: Any) -> dict[type, dict[Any, Any]]:
    """Return the type variable bindings of every generic class in the MRO of ``tp``.

    ``IntBox(Box[int])`` binds ``T`` of ``Box`` to ``int`` even though
    ``IntBox`` itself is not parameterized.  Bindings of a parameterized
    ``tp`` flow down to the bases that reuse its type variables.
    """

    raw = raw_type(tp)
    if not isinstance(raw, type):
        return {}
    bindings: dict[type, dict[Any, Any]] = {raw: type_var_bindings(tp)}
    for cls in raw.__mro__:
        own = bindings.get(cls, {})
        for base in cls.__dict__.get("__orig_bases__", ()):
            origin = get_origin(base)
            if not isinstance(origin, type) or origin in bindings:
                continue
            parameters = getattr(origin, "__parameters__", ())
            arguments = [substitute_type_vars(arg, own) for arg in get_args(base)]
            bindings[origin] = dict(zip(parameters, arguments))
    return bindings


def filter_same_parameterized_types(candidates: typing.Iterable[type], tp: Any) -> list[type]:
    """Keep candidates whose generic bases are parameterized like ``tp``.

    When ``tp`` is not parameterized every candidate is kept.
    """

    args = get_args(tp)
    if not args:
        return list(candidates)
    raw = raw_type(tp)
    matching: list[type] = []
    for candidate in candidates:
        for base in getattr(candidate, "__orig_bases__", ()):
            base_origin = get_origin(base)
            if (
                isinstance(base_origin, type)
                and issubclass(base_origin, raw)
                and get_args(base) == args
            ):
                matching.append(candidate)
                break
    return matching


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


def _class_namespace(cls: type) -> dict[str, Any]:
    # Only nested classes; field defaults must not shadow module level names.
    namespace = {name: value for name, value in vars(cls).items() if isinstance(value, type)}
    namespace[cls.__name__] = cls
    return namespace


def _resolve_annotation(name: str, hint: Any, cls: type) -> Any:
    """Evaluate one annotation of ``cls`` the way ``get_type_hints`` would.

    The annotation is moved onto a bare class from the same module so that the
    base classes of ``cls`` take no part in the evaluation.
    """

    if not isinstance(hint, str):
        return hint
    holder = type(cls.__name__, (), {"__annotations__": {name: hint}, "__module__": cls.__module__})
    try:
        return typing.get_type_hints(holder, localns=_class_namespace(cls), include_extras=True)[name]
    except (NameError, AttributeError, SyntaxError, TypeError) as exc:
        logger.warning("Cannot resolve annotation %r on %s: %s", hint, cls.__qualname__, exc)
        return hint


@lru_cache(maxsize=None)
def _own_annotations(cls: type) -> tuple[tuple[str, Any], ...]:
    """Return the resolved annotations declared directly on ``cls``."""

    try:
        annotations = inspect.get_annotations(cls)
    except NameError as exc:
        logger.warning("Cannot read annotations of %s: %s", cls.__qualname__, exc)
        return ()
    names = [name for name in annotations if not (name.startswith("__") and name.endswith("__"))]
    if not names:
        return ()
    try:
        hints = typing.get_type_hints(cls, localns=_class_namespace(cls), include_extras=True)
    except (NameError, AttributeError, SyntaxError, TypeError) as exc:
        # Some base class in the MRO has annotations that do not evaluate;
        # resolve this class's own annotations one by one instead.
        logger.debug("get_type_hints failed for %s: %s", cls.__qualname__, exc)
        hints = {name: _resolve_annotation(name, annotations[name], cls) for name in names}
    return tuple((name, hints.get(name, annotations[name])) for name in names)


def _is_static_annotation(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.startswith(("ClassVar", "typing.ClassVar", "InitVar", "dataclasses.InitVar"))
    return (
        hint is ClassVar
        or get_origin(hint) is ClassVar
        or hint is dataclasses.InitVar
        or isinstance(hint, dataclasses.InitVar)
    )


def _skip_in_mro(cls: type) -> bool:
    module = cls.__module__ or ""
    return module in _SKIPPED_MRO_MODULES or module.split(".", 1)[0] == "pydantic"


def get_fields(tp: Any) -> list[FieldInfo]:
    """Return the fields of ``tp``: declared fields first, then inherited ones.

    A field re-declared in a subclass is reported once, by the subclass.
    """

    raw = raw_type(tp)
    if not isinstance(raw, type):
        return []
    bindings = mro_type_var_bindings(tp)
    seen: set[str] = set()
    fields: list[FieldInfo] = []
    for cls in raw.__mro__:
        if _skip_in_mro(cls):
            continue
        for name, hint in _own_annotations(cls):
            if name in seen:
                continue
            seen.add(name)
            fields.append(
                FieldInfo(
                    name=name,
                    type=substitute_type_vars(hint, bindings.get(cls, {})),
                    declaring_type=cls,
                    accessible=not name.startswith("_"),
                    is_static=_is_static_annotation(hint),
                )
            )
    return fields


# ---------------------------------------------------------------------------
# Instances and values
# ---------------------------------------------------------------------------


def new_instance(tp: Any) -> Any:
    """Create an instance of ``tp`` without populating it.

    Pydantic models are built with ``model_construct``.  Other classes are
    called without arguments; when the constructor requires arguments the
    instance is allocated with ``__new__`` instead.
    """

    raw = raw_type(tp)
    if is_pydantic_model(raw):
        return raw.model_construct()
    try:
        return raw()
    except TypeError:
        return raw.__new__(raw)


def zero_value(tp: Any, _enclosing: frozenset[Any] = frozenset()) -> Any:
    """Return the default, empty-but-valid value of ``tp``.

    A named tuple slot typed as an enclosing named tuple is ``None``.
    """

    kind = kind_of(tp)
    if kind is TypeKind.WRAPPER:
        return zero_value(unwrap(tp), _enclosing)
    if kind is TypeKind.ARRAY:
        return ()
    if kind is TypeKind.FIXED_TUPLE:
        raw = raw_type(tp)
        if raw in _enclosing:
            return None
        inner = _enclosing if raw is tuple else _enclosing | {raw}
        zeros = [zero_value(slot, inner) for slot in fixed_tuple_slot_types(tp)]
        return tuple(zeros) if raw is tuple else raw(*zeros)
    if kind is TypeKind.COLLECTION:
        return concrete_collection_type(tp)()
    if kind is TypeKind.MAP:
        return concrete_map_type(tp)()
    raw = raw_type(tp)
    if raw in _ZERO_CONSTRUCTIBLE:
        return raw()
    return None


def has_initialized_value(instance: Any, field: FieldInfo) -> bool:
    """Return ``True`` when construction already gave ``field`` a value.

    ``None`` and zero-valued scalars count as not initialized.
    """

    value = getattr(instance, field.name, None)
    if value is None:
        return False
    if type(value) in _SCALAR_TYPES and not value:
        return False
    return True


def set_field_value(instance: Any, field: FieldInfo, value: Any) -> None:
    """Assign ``value`` to ``field`` on ``instance``.

    Frozen dataclasses and frozen pydantic models reject ``setattr``; the
    assignment then goes through ``object.__setattr__``.
    """

    try:
        setattr(instance, field.name, value)
    except (AttributeError, TypeError, ValueError):
        object.__setattr__(instance, field.name, value)


def empty_instance(tp: Any) -> Any:
    """Return an instance of ``tp`` whose unset fields hold zero values."""

    instance = new_instance(tp)
    for field in get_fields(tp):
        if field.is_static or hasattr(instance, field.name):
            continue
        set_field_value(instance, field, zero_value(field.type))
    return instance


__all__ = [
    "DEFAULT_ELEMENT_TYPE",
    "TypeKind",
    "FieldInfo",
    "raw_type",
    "is_new_type",
    "unwrap",
    "union_members",
    "is_wildcard_type",
    "is_array_type",
    "is_fixed_tuple_type",
    "is_map_type",
    "is_collection_type",
    "is_enum_type",
    "is_protocol",
    "is_abstract",
    "is_builtin_container",
    "is_introspectable",
    "is_populatable",
    "is_pydantic_model",
    "kind_of",
    "array_element_type",
    "collection_element_type",
    "map_key_value_types",
    "fixed_tuple_slot_types",
    "concrete_collection_type",
    "concrete_map_type",
    "type_var_bindings",
    "substitute_type_vars",
    "mro_type_var_bindings",
    "filter_same_parameterized_types",
    "get_fields",
    "new_instance",
    "zero_value",
    "has_initialized_value",
    "set_field_value",
    "empty_instance",
]
