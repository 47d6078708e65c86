"""Tests for the terminal operations of the functional API."""

from typing import Any

import pytest

import pyostream as ps


def test_each() -> None:
    """Test that each visits every element in order."""
    seen: list[int] = []
    ps.fn.each([1, 2, 3], seen.append)
    assert seen == [1, 2, 3]


def test_reduce() -> None:
    """Test a left fold."""
    assert ps.fn.reduce([1, 2, 3], "", lambda acc, x: f"({acc}{x})") == "(((1)2)3)"


def test_reduce_empty() -> None:
    """Test that the seed is returned for no elements."""
    seed = object()
    assert ps.fn.reduce(None, seed, lambda acc, _: acc) is seed


def test_count() -> None:
    """Test count."""
    assert ps.fn.count("hello") == 5
    assert ps.fn.count(None) == 0


def test_any_short_circuits(counting: Any) -> None:
    """Test that any stops at the first match."""
    source = counting(10)
    assert ps.fn.any(source, lambda x: x == 2) is True
    assert source.pulls == 3


def test_all_short_circuits(counting: Any) -> None:
    """Test that all stops at the first mismatch."""
    source = counting(10)
    assert ps.fn.all(source, lambda x: x < 1) is False
    assert source.pulls == 2


def test_any_all_defaults() -> None:
    """Test truthiness as the default predicate."""
    assert ps.fn.any([0, "", 3]) is True
    assert ps.fn.all([1, "a", 0]) is False


def test_any_all_empty() -> None:
    """Test the empty cases."""
    assert ps.fn.any([]) is False
    assert ps.fn.all([]) is True


def test_first(counting: Any) -> None:
    """Test that first pulls exactly once."""
    source = counting(3)
    assert ps.fn.first(source) == ps.Some(0)
    assert source.pulls == 1
    assert ps.fn.first([]) is ps.NONE


def test_user_exception_propagates() -> None:
    """Test that errors from user callables are not swallowed."""

    def boom(x: int) -> int:
        raise ZeroDivisionError(x)

    puller = ps.fn.map([1, 2], boom)
    with pytest.raises(ZeroDivisionError, match="1"):
        ps.fn.collect(puller)
    with pytest.raises(ZeroDivisionError, match="2"):
        ps.fn.collect(puller)
    assert puller.pull() is ps.NONE
