"""Tests for concrete subtype discovery."""

from __future__ import annotations

from abc import ABC, abstractmethod

from randfill.scanning import SubtypeScanner


class Animal(ABC):
    @abstractmethod
    def sound(self) -> str: ...


class Dog(Animal):
    def sound(self) -> str:
        return "woof"


class _Hidden(Animal):
    def sound(self) -> str:
        return ""


class Mammal(Animal):
    pass


class Cat(Mammal):
    def sound(self) -> str:
        return "meow"


class Vehicle(ABC):
    @abstractmethod
    def wheels(self) -> int: ...


def test_public_concrete_subtypes_found_transitively() -> None:
    found = SubtypeScanner().get_public_concrete_subtypes(Animal)
    assert set(found) == {Dog, Cat}


def test_private_and_abstract_subtypes_skipped() -> None:
    found = SubtypeScanner().get_public_concrete_subtypes(Animal)
    assert _Hidden not in found
    assert Mammal not in found


def test_results_are_cached_until_cleared() -> None:
    scanner = SubtypeScanner()
    assert scanner.get_public_concrete_subtypes(Vehicle) == ()

    class Bike(Vehicle):
        def wheels(self) -> int:
            return 2

    assert scanner.get_public_concrete_subtypes(Vehicle) == ()
    scanner.clear()
    assert scanner.get_public_concrete_subtypes(Vehicle) == (Bike,)
