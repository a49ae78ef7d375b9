import pytest

from randfill.randomizers import FunctionRandomizer, Randomizer, as_randomizer


class ConstantRandomizer:
    def get_random_value(self) -> int:
        return 42


def test_constant_randomizer_runtime_checkable() -> None:
    randomizer = ConstantRandomizer()
    assert isinstance(randomizer, Randomizer)
    assert as_randomizer(randomizer) is randomizer


def test_callables_are_wrapped() -> None:
    randomizer = as_randomizer(lambda: "value")
    assert isinstance(randomizer, FunctionRandomizer)
    assert isinstance(randomizer, Randomizer)
    assert randomizer.get_random_value() == "value"


def test_non_callables_rejected() -> None:
    with pytest.raises(TypeError):
        as_randomizer(42)
