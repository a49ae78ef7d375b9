"""Typed randomization parameters and their loader."""

from __future__ import annotations

import codecs
import os
from collections.abc import Mapping
from datetime import date, time, timedelta
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Generic, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, conint, field_validator, model_validator

T = TypeVar("T")

SEED_ENV_VAR = "RANDFILL_SEED"

# About ten years either side of today.
_DATE_SPAN = timedelta(days=3652)

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class Range(BaseModel, Generic[T]):
    """Inclusive ``[min, max]`` bounds over an ordered value type."""

    min: T
    max: T

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def check_order(self) -> "Range[T]":
        if self.min > self.max:  # type: ignore[operator]
            raise ValueError(f"range min {self.min!r} is greater than max {self.max!r}")
        return self


def _default_date_range() -> Range[date]:
    today = date.today()
    return Range[date](min=today - _DATE_SPAN, max=today + _DATE_SPAN)


def _default_time_range() -> Range[time]:
    return Range[time](min=time.min, max=time.max)


class RandomizationParameters(BaseModel):
    """Configuration of one randomization engine.

    The model is frozen: parameters are read-only once an engine is built.
    ``seed=None`` asks for a fresh, non-reproducible seed.
    """

    seed: int | None = None
    min_collection_size: conint(ge=0) = 1  # type: ignore[valid-type]
    max_collection_size: conint(ge=0) = 100  # type: ignore[valid-type]
    min_string_length: conint(ge=0) = 1  # type: ignore[valid-type]
    max_string_length: conint(ge=0) = 32  # type: ignore[valid-type]
    max_object_pool_size: conint(ge=1) = 10  # type: ignore[valid-type]
    max_randomization_depth: conint(ge=0) = 10  # type: ignore[valid-type]
    charset: str = "ascii"
    scan_for_concrete_types: bool = False
    override_default_initialization: bool = False
    date_range: Range[date] = Field(default_factory=_default_date_range)
    time_range: Range[time] = Field(default_factory=_default_time_range)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("charset")
    @classmethod
    def known_codec(cls, value: str) -> str:
        try:
            return codecs.lookup(value).name
        except LookupError as exc:
            raise ValueError(f"unknown charset: {value!r}") from exc

    @model_validator(mode="after")
    def check_bounds(self) -> "RandomizationParameters":
        if self.min_collection_size > self.max_collection_size:
            raise ValueError("min_collection_size must not exceed max_collection_size")
        if self.min_string_length > self.max_string_length:
            raise ValueError("min_string_length must not exceed max_string_length")
        return self


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def load_defaults() -> dict[str, Any]:
    """Return the packaged ``defaults.yml`` as a plain mapping."""

    with (
        importlib_resources.files("randfill.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        return yaml.safe_load(f) or {}


def load_parameters(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> RandomizationParameters:
    """Load parameters from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    the ``RANDFILL_SEED`` environment variable.
    """

    merged = load_defaults()
    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = deep_merge_dicts(merged, overrides)

    environ = env if env is not None else os.environ
    if SEED_ENV_VAR in environ:
        merged = deep_merge_dicts(merged, {"seed": environ[SEED_ENV_VAR]})

    return RandomizationParameters.model_validate(merged)


__all__ = [
    "SEED_ENV_VAR",
    "Range",
    "RandomizationParameters",
    "deep_merge_dicts",
    "load_defaults",
    "load_parameters",
]
