"""Tests for the population engine: dispatch, overrides and parameters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, ClassVar, Generic, Literal, NewType, Optional, Protocol, TypeVar

import pytest
from pydantic import BaseModel

from randfill import (
    EmptyEnumError,
    NoConcreteSubtypeError,
    RandomizationEngine,
    RandomizationParameters,
    random_object,
)

T = TypeVar("T")

UserId = NewType("UserId", int)


class Status(Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"


class NoMembers(Enum):
    pass


@dataclass
class Address:
    street: str
    city: str
    zip_code: int


@dataclass
class Person:
    name: str
    age: int
    email: Optional[str]
    address: Address
    tags: list[str]
    scores: dict[str, float]
    nicknames: tuple[str, ...]
    status: Status
    created: date


@dataclass
class Pairing:
    first: Address
    second: Address


@dataclass
class Defaults:
    label: str = "fixed"
    count: int = 0
    tags: list[str] = field(default_factory=list)


@dataclass
class WithStatic:
    kind: ClassVar[str] = "static"
    value: int = 0


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float


class Legacy:
    name: str
    count: int

    def __init__(self, name: str, count: int) -> None:
        self.name = name
        self.count = count


class Item(BaseModel):
    sku: str
    qty: int
    price: Decimal
    labels: list[str] = []


@dataclass
class Box(Generic[T]):
    item: T
    items: list[T]


@dataclass
class IntBox(Box[int]):
    pass


class Crate(Box[T]):
    pass


class Payment(ABC):
    amount: int

    @abstractmethod
    def describe(self) -> str: ...


class CardPayment(Payment):
    card_number: str

    def describe(self) -> str:
        return f"card {self.card_number}"


@dataclass
class Wallet:
    payment: Payment


class Orphan(ABC):
    @abstractmethod
    def run(self) -> None: ...


class Repo(ABC, Generic[T]):
    @abstractmethod
    def get(self) -> T: ...


class IntRepo(Repo[int]):
    def get(self) -> int:
        return 0


class StrRepo(Repo[str]):
    def get(self) -> str:
        return ""


@dataclass
class Service:
    repo: Repo[int]


class Greeter(Protocol):
    def greet(self) -> str: ...


class EnglishGreeter(Greeter):
    def greet(self) -> str:
        return "hello"


def _engine(**overrides: Any) -> RandomizationEngine:
    return RandomizationEngine(RandomizationParameters(seed=42, **overrides))


# -- registry precedence ----------------------------------------------------


def test_registered_type_returned_as_is() -> None:
    engine = _engine().register_randomizer(int, lambda: 10)
    assert engine.populate(int) == 10
    assert engine.next_object(Address).zip_code == 10


def test_field_override_on_nested_type() -> None:
    engine = _engine().register_field_randomizer(Address, "city", lambda: "Paris")
    person = engine.next_object(Person)
    assert person.address.city == "Paris"
    assert person.name != "Paris"


def test_field_override_ignores_declared_type() -> None:
    engine = _engine().register_field_randomizer(Person, "age", lambda: "unknown")
    assert engine.next_object(Person).age == "unknown"


def test_field_override_stops_recursion() -> None:
    home = Address("Main Street", "Springfield", 12345)
    engine = _engine().register_field_randomizer(Person, "address", lambda: home)
    assert engine.next_object(Person).address is home


def test_registered_new_type_wins_over_supertype() -> None:
    engine = _engine().register_randomizer(UserId, lambda: 5)
    assert engine.populate(UserId) == 5
    assert isinstance(_engine().populate(UserId), int)


# -- composites ---------------------------------------------------------------


def test_person_fully_populated() -> None:
    params = RandomizationParameters(seed=42, min_string_length=3, max_string_length=6)
    person = RandomizationEngine(params).next_object(Person)
    assert isinstance(person, Person)
    assert 3 <= len(person.name) <= 6
    assert isinstance(person.age, int)
    assert isinstance(person.email, str)
    assert isinstance(person.address, Address)
    assert 3 <= len(person.address.street) <= 6
    assert person.tags and all(isinstance(t, str) for t in person.tags)
    assert person.scores and all(isinstance(v, float) for v in person.scores.values())
    assert person.nicknames and all(isinstance(n, str) for n in person.nicknames)
    assert person.status in Status
    assert params.date_range.min <= person.created <= params.date_range.max


def test_frozen_dataclass_populated() -> None:
    coords = _engine().next_object(Coordinates)
    assert isinstance(coords.lat, float)
    assert isinstance(coords.lon, float)


def test_class_with_required_constructor_arguments() -> None:
    legacy = _engine().next_object(Legacy)
    assert isinstance(legacy.name, str) and legacy.name
    assert isinstance(legacy.count, int)


def test_pydantic_model_populated() -> None:
    item = _engine().next_object(Item)
    assert isinstance(item, Item)
    assert isinstance(item.sku, str) and item.sku
    assert isinstance(item.qty, int)
    assert isinstance(item.price, Decimal)
    assert item.labels == []


def test_generic_dataclass_parameterized() -> None:
    box = _engine().populate(Box[int])
    assert isinstance(box.item, int)
    assert box.items and all(isinstance(i, int) for i in box.items)


def test_generic_base_bound_by_subclass() -> None:
    box = _engine().populate(IntBox)
    assert isinstance(box.item, int)
    assert box.items and all(isinstance(i, int) for i in box.items)


def test_generic_subclass_passes_arguments_to_base() -> None:
    crate = _engine().populate(Crate[Decimal])
    assert isinstance(crate.item, Decimal)


def test_complex_values_are_random() -> None:
    values = list(_engine().objects(complex, 5))
    assert all(isinstance(v, complex) for v in values)
    assert any(v != 0j for v in values)


def test_static_fields_left_alone() -> None:
    instance = _engine().next_object(WithStatic)
    assert instance.kind == "static"
    assert WithStatic.kind == "static"


def test_initialized_fields_kept_by_default() -> None:
    instance = _engine().next_object(Defaults)
    assert instance.label == "fixed"
    assert instance.tags == []
    assert isinstance(instance.count, int)


def test_override_default_initialization() -> None:
    instance = _engine(override_default_initialization=True).next_object(Defaults)
    assert instance.label != "fixed"
    assert instance.tags


def test_excluded_fields_keep_zero_values() -> None:
    person = _engine().next_object(Person, "age", "address.street")
    assert person.age == 0
    assert person.address.street == ""
    assert person.address.city
    assert person.name


def test_excluded_fields_keep_constructed_values() -> None:
    instance = _engine(override_default_initialization=True).next_object(Defaults, "label")
    assert instance.label == "fixed"


# -- typing constructs --------------------------------------------------------


def test_union_members() -> None:
    engine = _engine()
    for _ in range(20):
        assert isinstance(engine.populate(int | str), (int, str))
        assert isinstance(engine.populate(Optional[int]), int)


def test_literal_and_annotated() -> None:
    engine = _engine()
    assert engine.populate(Literal["a", "b"]) in {"a", "b"}
    assert isinstance(engine.populate(Annotated[int, "meta"]), int)


def test_unresolved_types_give_none() -> None:
    assert _engine().populate(Any) is None


def test_enum_member() -> None:
    assert _engine().populate(Status) in set(Status)


def test_empty_enum_raises() -> None:
    with pytest.raises(EmptyEnumError):
        _engine().populate(NoMembers)


# -- abstract types -----------------------------------------------------------


def test_abstract_without_scanning_raises() -> None:
    with pytest.raises(NoConcreteSubtypeError) as excinfo:
        _engine().next_object(Wallet)
    assert excinfo.value.scanned is False


def test_abstract_resolved_when_scanning() -> None:
    wallet = _engine(scan_for_concrete_types=True).next_object(Wallet)
    assert isinstance(wallet.payment, CardPayment)
    assert isinstance(wallet.payment.amount, int)
    assert wallet.payment.describe().startswith("card ")


def test_abstract_without_subtypes_raises_when_scanning() -> None:
    with pytest.raises(NoConcreteSubtypeError) as excinfo:
        _engine(scan_for_concrete_types=True).populate(Orphan)
    assert excinfo.value.scanned is True


def test_parameterized_abstract_matches_type_arguments() -> None:
    engine = _engine(scan_for_concrete_types=True)
    for _ in range(10):
        assert isinstance(engine.next_object(Service).repo, IntRepo)


def test_protocol_resolved_to_explicit_implementation() -> None:
    greeter = _engine(scan_for_concrete_types=True).populate(Greeter)
    assert isinstance(greeter, EnglishGreeter)


# -- pool -----------------------------------------------------------------------


def test_full_pool_reuses_instances() -> None:
    pairing = _engine(max_object_pool_size=1).next_object(Pairing)
    assert pairing.first is pairing.second


def test_pre_seeded_context_pool() -> None:
    engine = _engine(max_object_pool_size=1)
    context = engine.new_context()
    home = Address("Main Street", "Springfield", 12345)
    context.offer(Address, home)
    assert engine.populate(Person, context).address is home


# -- entry points and determinism ---------------------------------------------


def test_objects() -> None:
    engine = _engine()
    addresses = list(engine.objects(Address, 3))
    assert len(addresses) == 3
    assert all(isinstance(a, Address) for a in addresses)
    assert list(engine.objects(Address, 0)) == []
    with pytest.raises(ValueError):
        engine.objects(Address, -1)


def test_same_seed_same_objects() -> None:
    first = RandomizationEngine(RandomizationParameters(seed=7))
    second = RandomizationEngine(RandomizationParameters(seed=7))
    assert first.next_object(Person) == second.next_object(Person)
    assert list(first.objects(Address, 3)) == list(second.objects(Address, 3))


def test_different_seeds_differ() -> None:
    first = RandomizationEngine(RandomizationParameters(seed=1)).next_object(Person)
    second = RandomizationEngine(RandomizationParameters(seed=2)).next_object(Person)
    assert first != second


def test_random_object_helper() -> None:
    params = RandomizationParameters(seed=3)
    assert random_object(Address, params=params) == random_object(Address, params=params)
    assert random_object(Address, "city", params=params).city == ""
