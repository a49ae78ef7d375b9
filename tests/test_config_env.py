from datetime import date, time
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from randfill.config import load_parameters


def test_env_seed(monkeypatch: Any) -> None:
    monkeypatch.setenv("RANDFILL_SEED", "1234")
    params = load_parameters()
    assert params.seed == 1234


def test_user_yaml_override(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text("max_collection_size: 5\nscan_for_concrete_types: true\n")
    params = load_parameters(cfg_file, env={})
    assert params.max_collection_size == 5
    assert params.min_collection_size == 1
    assert params.scan_for_concrete_types is True


def test_env_seed_wins_over_yaml(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text("seed: 1\n")
    assert load_parameters(cfg_file, env={}).seed == 1
    assert load_parameters(cfg_file, env={"RANDFILL_SEED": "2"}).seed == 2


def test_invalid_env_seed() -> None:
    with pytest.raises(ValidationError):
        load_parameters(env={"RANDFILL_SEED": "not-a-number"})


def test_yaml_temporal_ranges(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text(
        "date_range:\n  min: 2020-01-01\n  max: 2020-12-31\n"
        'time_range:\n  min: "08:00:00"\n  max: "18:00:00"\n'
    )
    params = load_parameters(cfg_file, env={})
    assert params.date_range.min == date(2020, 1, 1)
    assert params.date_range.max == date(2020, 12, 31)
    assert params.time_range.min == time(8, 0)
    assert params.time_range.max == time(18, 0)


def test_invalid_yaml_bounds(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text("min_collection_size: 50\nmax_collection_size: 10\n")
    with pytest.raises(ValidationError):
        load_parameters(cfg_file, env={})
