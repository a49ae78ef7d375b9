"""Tests for depth, cycle, pool and exclusion bookkeeping."""

from __future__ import annotations

import random
from dataclasses import dataclass

import pytest

from randfill.config import RandomizationParameters
from randfill.context import RandomizationContext
from randfill.introspection import FieldInfo


@dataclass
class Node:
    value: int
    next: Node | None = None


NEXT = FieldInfo(name="next", type=Node, declaring_type=Node)
VALUE = FieldInfo(name="value", type=int, declaring_type=Node)


def _context(**overrides: object) -> RandomizationContext:
    params = RandomizationParameters(seed=1, **overrides)  # type: ignore[arg-type]
    return RandomizationContext(params, random.Random(1))


def test_depth_limit() -> None:
    ctx = _context(max_randomization_depth=2)
    assert not ctx.has_exceeded_depth()
    with ctx.descending():
        assert ctx.depth == 1
        assert not ctx.should_stop()
        with ctx.descending():
            assert ctx.has_exceeded_depth()
            assert ctx.should_stop()
    assert ctx.depth == 0


def test_cycle_detected_on_repeated_field() -> None:
    ctx = _context()
    assert not ctx.is_in_cycle()
    with ctx.visiting(NEXT):
        assert ctx.current_field is NEXT
        assert not ctx.is_in_cycle()
        with ctx.visiting(VALUE):
            assert not ctx.is_in_cycle()
        with ctx.visiting(NEXT):
            assert ctx.is_in_cycle()
        assert not ctx.is_in_cycle()
    assert ctx.current_field is None


def test_field_path_and_exclusion() -> None:
    params = RandomizationParameters(seed=1)
    ctx = RandomizationContext(params, random.Random(1), excluded_fields=["next.value"])
    assert ctx.field_path(VALUE) == "value"
    assert not ctx.is_excluded(VALUE)
    with ctx.visiting(NEXT):
        assert ctx.field_path() == "next"
        assert ctx.field_path(VALUE) == "next.value"
        assert ctx.is_excluded(VALUE)


def test_pool_is_bounded_per_type() -> None:
    ctx = _context(max_object_pool_size=2)
    first, second, third = Node(1), Node(2), Node(3)
    assert not ctx.has_pooled(Node)
    assert ctx.offer(Node, first)
    assert ctx.offer(Node, second)
    assert ctx.is_pool_full(Node)
    assert not ctx.offer(Node, third)
    assert ctx.pool_size(Node) == 2
    assert ctx.pooled(Node) in (first, second)
    assert ctx.pool_size(int) == 0


def test_pooled_without_instances_raises() -> None:
    with pytest.raises(KeyError):
        _context().pooled(Node)
