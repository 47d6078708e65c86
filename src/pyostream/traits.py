"""Public base classes and protocols of pyostream.

`Puller` is the iterator protocol every source, adapter and `Stream` implements.

`CollectorInstance` is the protocol of the objects built by collector factories, see `pyostream.collectors`.

`Pipeable` is a mixin that can be added to any class to get `into()` and `inspect()`.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterator
from typing import Protocol, Self

from ._core import Pipeable
from ._option import Option, Some

__all__ = ["CollectorInstance", "Pipeable", "Puller"]


class Puller[T](Iterator[T]):
    """A stateful, repeatedly callable producer of elements.

    Each call to `pull()` returns `Some(element)`, or `NONE` once the puller is exhausted.

    Pullers provided by pyostream never produce an element again after returning `NONE`.

    A puller exclusively owns its cursor, buffers and latches: sharing one instance between independent consumers
    means each of them only sees part of the elements. This is the caller's responsibility, nothing guards against it.

    Pullers also implement the Python `Iterator` protocol, so they can be used in `for` loops, or given to `list()`,
    `itertools`, `cytoolz` and friends.

    Subclasses only need to implement `pull()`.

    Example:
    ```python
    >>> from dataclasses import dataclass
    >>> import pyostream as ps
    >>> @dataclass(slots=True, eq=False, repr=False)
    ... class Countdown(ps.traits.Puller[int]):
    ...     current: int
    ...
    ...     def pull(self) -> ps.Option[int]:
    ...         if self.current <= 0:
    ...             return ps.NONE
    ...         self.current -= 1
    ...         return ps.Some(self.current + 1)
    >>> list(Countdown(3))
    [3, 2, 1]
    >>> ps.Stream(Countdown(3)).map(lambda x: x * 10).collect()
    [30, 20, 10]

    ```
    """

    __slots__ = ()

    @abstractmethod
    def pull(self) -> Option[T]:
        """Produce the next element, or `NONE` when exhausted."""
        ...

    def __call__(self) -> Option[T]:
        return self.pull()

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> T:
        match self.pull():
            case Some(value):
                return value
            case _:
                raise StopIteration

    def __repr__(self) -> str:
        source = getattr(self, "source", None)
        if source is None:
            return f"{self.__class__.__name__}()"
        return f"{self.__class__.__name__}({source!r})"


class CollectorInstance[T, R](Protocol):
    """A stateful aggregator, created fresh for every aggregation run.

    `accept` is called once per element, in iteration order, then `finalize` is called exactly once.
    """

    def accept(self, item: T, /) -> None: ...

    def finalize(self) -> R: ...
