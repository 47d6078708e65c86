"""Gatherers: adapters producing groups of elements.

A gatherer is a function taking a size and returning an adapter, i.e. a function wrapping a puller into another one.

They are meant to be given to `Stream.apply`, or called directly on a puller:

```python
>>> import pyostream as ps
>>> ps.Stream.range(1, 7).apply(ps.gatherers.batch(3)).collect()
[(1, 2, 3), (4, 5, 6), (7,)]
>>> list(ps.gatherers.window(2)(ps.into_puller("abc")))
[('a',), ('a', 'b'), ('b', 'c')]

```
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING, Any

from ._errors import InvalidConfigurationError
from ._option import NONE, Option, Some
from .traits import Puller

if TYPE_CHECKING:
    from ._types import Adapter

__all__ = ["Batch", "Window", "batch", "window"]

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False, repr=False)
class Batch[T](Puller[tuple[T, ...]]):
    """Groups consecutive elements into tuples of `size`. The last tuple may be shorter."""

    source: Puller[T]
    size: int
    done: bool = False

    def pull(self) -> Option[tuple[T, ...]]:
        if self.done:
            return NONE
        group: list[T] = []
        while len(group) < self.size:
            item = self.source.pull()
            if item.is_none():
                self.done = True
                break
            group.append(item.unwrap())
        if not group:
            return NONE
        return Some(tuple(group))


@dataclass(slots=True, eq=False, repr=False)
class Window[T](Puller[tuple[T, ...]]):
    """Yields the sliding window ending at each upstream element.

    The first windows grow from 1 to `size` elements, then the window slides by one.
    """

    source: Puller[T]
    size: int
    buffer: deque[T] = field(init=False)

    def __post_init__(self) -> None:
        self.buffer = deque(maxlen=self.size)

    def pull(self) -> Option[tuple[T, ...]]:
        item = self.source.pull()
        if item.is_none():
            return NONE
        self.buffer.append(item.unwrap())
        return Some(tuple(self.buffer))


def _check_size(name: str, size: int) -> None:
    if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
        msg = f"{name} size must be a positive integer, got {size!r}"
        raise InvalidConfigurationError(msg)


def batch(size: int) -> Adapter[Any, tuple[Any, ...]]:
    """Create an adapter grouping elements into tuples of **size**.

    Args:
        size (int): Maximum number of elements per group.

    Returns:
        Adapter[T, tuple[T, ...]]: A function wrapping a puller into a `Batch`.

    Raises:
        InvalidConfigurationError: If **size** is not a positive integer.

    Example:
    ```python
    >>> import pyostream as ps
    >>> ps.Stream([1, 2, 3, 4]).apply(ps.gatherers.batch(2)).collect()
    [(1, 2), (3, 4)]
    >>> ps.Stream([]).apply(ps.gatherers.batch(2)).collect()
    []
    >>> ps.gatherers.batch(0)
    Traceback (most recent call last):
        ...
    pyostream._errors.InvalidConfigurationError: batch size must be a positive integer, got 0

    ```
    """
    _check_size("batch", size)
    logger.debug("Built batch gatherer of size %d", size)
    return partial(Batch, size=size)


def window(size: int) -> Adapter[Any, tuple[Any, ...]]:
    """Create an adapter yielding the sliding window of at most **size** elements ending at each element.

    Example:
    ```python
    >>> import pyostream as ps
    >>> ps.Stream.range(1, 4).apply(ps.gatherers.window(3)).collect()
    [(1,), (1, 2), (1, 2, 3), (2, 3, 4)]

    ```
    """
    _check_size("window", size)
    logger.debug("Built window gatherer of size %d", size)
    return partial(Window, size=size)
