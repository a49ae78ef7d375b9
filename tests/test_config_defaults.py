from datetime import date, time

import pytest
from pydantic import ValidationError

from randfill.config import Range, RandomizationParameters, load_parameters
from randfill.config.schema import load_defaults


def test_default_values() -> None:
    params = load_parameters(env={})
    assert params.seed is None
    assert params.min_collection_size == 1
    assert params.max_collection_size == 100
    assert params.min_string_length == 1
    assert params.max_string_length == 32
    assert params.max_object_pool_size == 10
    assert params.max_randomization_depth == 10
    assert params.charset == "ascii"
    assert params.scan_for_concrete_types is False
    assert params.override_default_initialization is False


def test_packaged_defaults_match_model_defaults() -> None:
    model_defaults = RandomizationParameters().model_dump(exclude={"date_range", "time_range"})
    assert load_defaults() == model_defaults


def test_default_temporal_ranges() -> None:
    params = RandomizationParameters()
    today = date.today()
    assert params.date_range.min < today < params.date_range.max
    assert params.time_range.min == time.min
    assert params.time_range.max == time.max


def test_collection_bounds_validated() -> None:
    with pytest.raises(ValidationError):
        RandomizationParameters(min_collection_size=5, max_collection_size=2)
    with pytest.raises(ValidationError):
        RandomizationParameters(min_string_length=10, max_string_length=3)
    with pytest.raises(ValidationError):
        RandomizationParameters(max_object_pool_size=0)


def test_charset_validated_and_normalized() -> None:
    assert RandomizationParameters(charset="ASCII").charset == "ascii"
    with pytest.raises(ValidationError):
        RandomizationParameters(charset="no-such-charset")


def test_unknown_keys_rejected() -> None:
    with pytest.raises(ValidationError):
        RandomizationParameters.model_validate({"max_depth": 3})


def test_parameters_are_frozen() -> None:
    params = RandomizationParameters()
    with pytest.raises(ValidationError):
        params.seed = 3  # type: ignore[misc]


def test_range_order_validated() -> None:
    assert Range[int](min=1, max=1).max == 1
    with pytest.raises(ValidationError):
        Range[int](min=3, max=1)
