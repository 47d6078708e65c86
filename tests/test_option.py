"""Tests for the Option type used as the pull result."""

import pytest

import pyostream as ps


def _describe(option: ps.Option[object]) -> str:
    match option:
        case ps.Some(value):
            return f"some {value!r}"
        case _:
            return "none"


def test_pattern_matching() -> None:
    """Test matching Some and NONE, including falsy payloads."""
    assert _describe(ps.Some(42)) == "some 42"
    assert _describe(ps.Some(False)) == "some False"
    assert _describe(ps.Some(None)) == "some None"
    assert _describe(ps.NONE) == "none"


def test_unwrap_none() -> None:
    """Test that unwrapping NONE raises."""
    with pytest.raises(ps.OptionUnwrapError):
        ps.NONE.unwrap()


def test_expect() -> None:
    """Test expect with a custom message."""
    assert ps.Some(1).expect("missing") == 1
    with pytest.raises(ps.OptionUnwrapError, match="missing"):
        ps.NONE.expect("missing")


def test_defaults() -> None:
    """Test unwrap_or and unwrap_or_else."""
    assert ps.NONE.unwrap_or(3) == 3
    assert ps.Some(0).unwrap_or(3) == 0
    assert ps.NONE.unwrap_or_else(lambda: "x") == "x"


def test_combinators() -> None:
    """Test map, and_then, filter and or_else."""
    assert ps.Some(2).map(lambda x: x * 3) == ps.Some(6)
    assert ps.NONE.map(lambda x: x * 3) is ps.NONE
    assert ps.Some(2).and_then(lambda x: ps.NONE) is ps.NONE
    assert ps.Some(2).filter(lambda x: x > 5) is ps.NONE
    assert ps.NONE.or_else(lambda: ps.Some(1)) == ps.Some(1)


def test_repr() -> None:
    """Test reprs."""
    assert repr(ps.Some("a")) == "Some(value='a')"
    assert repr(ps.NONE) == "NONE"


def test_predicates() -> None:
    """Test is_some and is_none."""
    assert ps.Some(0).is_some()
    assert not ps.Some(0).is_none()
    assert ps.NONE.is_none()
