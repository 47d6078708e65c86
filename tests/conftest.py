"""Shared fixtures for pyostream tests."""

from collections.abc import Iterator
from dataclasses import dataclass

import pytest

import pyostream as ps


@dataclass(slots=True, eq=False, repr=False)
class CountingSource(ps.traits.Puller[int]):
    """Yields `0..size-1`, recording how many times it was pulled."""

    size: int
    pulls: int = 0

    def pull(self) -> ps.Option[int]:
        self.pulls += 1
        if self.pulls > self.size:
            return ps.NONE
        return ps.Some(self.pulls - 1)


@pytest.fixture
def counting() -> type[CountingSource]:
    return CountingSource


@pytest.fixture
def restore_config() -> Iterator[None]:
    previous = ps.get_config()
    yield
    ps.set_config(
        repr_max_items=previous.repr_max_items,
        repr_depth=previous.repr_depth,
        strict_callables=previous.strict_callables,
    )
