"""Tests for batch and window gatherers."""

import logging
from typing import Any

import pytest

import pyostream as ps
from pyostream import gatherers


def test_batch() -> None:
    """Test batches with a short last group."""
    assert list(gatherers.batch(3)(ps.fn.range(1, 7))) == [(1, 2, 3), (4, 5, 6), (7,)]


def test_batch_exact() -> None:
    """Test batches dividing the source exactly."""
    assert ps.Stream("abcd").batch(2).collect() == [("a", "b"), ("c", "d")]


def test_batch_empty() -> None:
    """Test that an empty source gives no groups."""
    assert ps.Stream().batch(3).collect() == []


def test_window() -> None:
    """Test that windows grow then slide."""
    assert list(gatherers.window(3)(ps.fn.range(1, 4))) == [(1,), (1, 2), (1, 2, 3), (2, 3, 4)]


def test_window_of_one() -> None:
    """Test a window of size 1."""
    assert ps.Stream([1, 2]).window(1).collect() == [(1,), (2,)]


def test_batch_lazy(counting: Any) -> None:
    """Test that a batch only pulls the elements it needs."""
    source = counting(10)
    puller = gatherers.batch(3)(source)
    assert source.pulls == 0
    assert puller.pull() == ps.Some((0, 1, 2))
    assert source.pulls == 3


@pytest.mark.parametrize("size", [0, -1])
@pytest.mark.parametrize("gatherer", [gatherers.batch, gatherers.window])
def test_invalid_size(gatherer: Any, size: int) -> None:
    """Test that non-positive sizes are rejected at construction."""
    with pytest.raises(ps.InvalidConfigurationError, match="positive integer"):
        gatherer(size)


def test_invalid_size_on_stream(counting: Any) -> None:
    """Test that the stream shorthand fails before pulling anything."""
    source = counting(3)
    with pytest.raises(ValueError):  # noqa: PT011
        ps.Stream(source).window(0)
    assert source.pulls == 0


def test_construction_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Test that building a gatherer is logged at debug level."""
    with caplog.at_level(logging.DEBUG, logger="pyostream"):
        gatherers.window(4)
    assert "Built window gatherer of size 4" in caplog.text
