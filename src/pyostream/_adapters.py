"""Transform adapters.

Each adapter is a small slotted dataclass owning its cursor, latch or buffer fields, and wrapping one or more upstream pullers.

Building an adapter never pulls from upstream. Only `Cycle` and `Reversed` materialize their whole source,
and they do so on their first pull.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ._option import NONE, Option, Some
from ._source import into_puller
from ._terminal import collect
from .collectors import ToList
from .traits import Puller

if TYPE_CHECKING:
    from ._types import IntoPuller, Predicate

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False, repr=False)
class Filter[T](Puller[T]):
    source: Puller[T]
    predicate: Predicate[T] = bool

    def pull(self) -> Option[T]:
        while True:
            item = self.source.pull()
            match item:
                case Some(value) if self.predicate(value):
                    return item
                case Some(_):
                    continue
                case _:
                    return NONE


@dataclass(slots=True, eq=False, repr=False)
class FilterFalse[T](Puller[T]):
    source: Puller[T]
    predicate: Predicate[T] = bool

    def pull(self) -> Option[T]:
        while True:
            item = self.source.pull()
            match item:
                case Some(value) if not self.predicate(value):
                    return item
                case Some(_):
                    continue
                case _:
                    return NONE


@dataclass(slots=True, eq=False, repr=False)
class Map[T, R](Puller[R]):
    source: Puller[T]
    func: Callable[[T], R]

    def pull(self) -> Option[R]:
        return self.source.pull().map(self.func)


@dataclass(slots=True, eq=False, repr=False)
class FlatMap[T, R](Puller[R]):
    """Drains the iterable returned by `func` for each upstream element, before pulling the next one."""

    source: Puller[T]
    func: Callable[[T], IntoPuller[R]]
    inner: Puller[R] | None = None
    done: bool = False

    def pull(self) -> Option[R]:
        while not self.done:
            if self.inner is not None:
                item = self.inner.pull()
                if item.is_some():
                    return item
                self.inner = None
            outer = self.source.pull()
            if outer.is_none():
                self.done = True
                break
            self.inner = into_puller(self.func(outer.unwrap()))
        return NONE


@dataclass(slots=True, eq=False, repr=False)
class Limit[T](Puller[T]):
    """Yields at most `remaining` elements, never pulling upstream past that point."""

    source: Puller[T]
    remaining: int

    def pull(self) -> Option[T]:
        if self.remaining <= 0:
            return NONE
        item = self.source.pull()
        if item.is_none():
            self.remaining = 0
            return NONE
        self.remaining -= 1
        return item


@dataclass(slots=True, eq=False, repr=False)
class Skip[T](Puller[T]):
    """Discards the first `amount` elements, on the first pull only."""

    source: Puller[T]
    amount: int
    skipped: bool = False
    done: bool = False

    def pull(self) -> Option[T]:
        if not self.skipped:
            self.skipped = True
            for _ in range(self.amount):
                if self.source.pull().is_none():
                    self.done = True
                    break
        if self.done:
            return NONE
        item = self.source.pull()
        if item.is_none():
            self.done = True
        return item


@dataclass(slots=True, eq=False, repr=False)
class TakeWhile[T](Puller[T]):
    source: Puller[T]
    predicate: Predicate[T]
    done: bool = False

    def pull(self) -> Option[T]:
        if self.done:
            return NONE
        item = self.source.pull()
        match item:
            case Some(value) if self.predicate(value):
                return item
            case _:
                self.done = True
                return NONE


@dataclass(slots=True, eq=False, repr=False)
class DropWhile[T](Puller[T]):
    source: Puller[T]
    predicate: Predicate[T]
    started: bool = False

    def pull(self) -> Option[T]:
        while True:
            item = self.source.pull()
            match item:
                case Some(value) if not self.started and self.predicate(value):
                    continue
                case Some(_):
                    self.started = True
                    return item
                case _:
                    return NONE


@dataclass(slots=True, eq=False, repr=False)
class Distinct[T](Puller[T]):
    """Drops elements equal to one already produced.

    Hashable elements are remembered in a set, unhashable ones in a list scanned linearly.
    Memory grows with the number of distinct elements.
    """

    source: Puller[T]
    seen: set[Any] = field(default_factory=set)
    seen_unhashable: list[Any] = field(default_factory=list)

    def _is_new(self, value: T) -> bool:
        try:
            if value in self.seen:
                return False
            self.seen.add(value)
        except TypeError:
            if value in self.seen_unhashable:
                return False
            self.seen_unhashable.append(value)
        return True

    def pull(self) -> Option[T]:
        while True:
            item = self.source.pull()
            if item.is_none() or self._is_new(item.unwrap()):
                return item


@dataclass(slots=True, eq=False, repr=False)
class Peek[T](Puller[T]):
    source: Puller[T]
    consumer: Callable[[T], object]

    def pull(self) -> Option[T]:
        item = self.source.pull()
        if item.is_some():
            self.consumer(item.unwrap())
        return item


@dataclass(slots=True, eq=False, repr=False)
class Cycle[T](Puller[T]):
    """Repeats its source, forever or `repeats` times.

    Eager: the whole source is collected into a buffer on the first pull, an infinite source never returns.
    """

    source: Puller[T]
    repeats: int | None = None
    buffer: tuple[T, ...] | None = None
    position: int = 0
    remaining: int | None = None

    def _materialize(self) -> tuple[T, ...]:
        buffer: tuple[T, ...] = tuple(collect(self.source, ToList))
        logger.debug("Cycle buffered %d element(s), repeats=%r", len(buffer), self.repeats)
        if self.repeats is not None:
            self.remaining = max(self.repeats, 0) * len(buffer)
        return buffer

    def pull(self) -> Option[T]:
        if self.buffer is None:
            self.buffer = self._materialize()
        if not self.buffer or self.remaining == 0:
            return NONE
        value = self.buffer[self.position]
        self.position = (self.position + 1) % len(self.buffer)
        if self.remaining is not None:
            self.remaining -= 1
        return Some(value)


@dataclass(slots=True, eq=False, repr=False)
class Reversed[T](Puller[T]):
    """Yields its source from the last element to the first.

    Eager: the whole source is collected on the first pull.
    """

    source: Puller[T]
    buffer: list[T] | None = None
    index: int = 0

    def pull(self) -> Option[T]:
        if self.buffer is None:
            self.buffer = collect(self.source, ToList)
            self.index = len(self.buffer)
            logger.debug("Reversed buffered %d element(s)", self.index)
        if self.index <= 0:
            return NONE
        self.index -= 1
        return Some(self.buffer[self.index])


@dataclass(slots=True, eq=False, repr=False)
class Zip(Puller[tuple[Any, ...]]):
    """Pulls one element from each source, left to right, and stops at the first exhausted one."""

    sources: tuple[Puller[Any], ...]
    done: bool = False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({', '.join(map(repr, self.sources))})"

    def pull(self) -> Option[tuple[Any, ...]]:
        if self.done or not self.sources:
            self.done = True
            return NONE
        values: list[Any] = []
        for source in self.sources:
            item = source.pull()
            if item.is_none():
                self.done = True
                return NONE
            values.append(item.unwrap())
        return Some(tuple(values))


@dataclass(slots=True, eq=False, repr=False)
class MultiCollect(Puller[tuple[Any, ...]]):
    """Boxes every element into a tuple group: tuples pass through, anything else becomes a 1-tuple."""

    source: Puller[Any]

    def pull(self) -> Option[tuple[Any, ...]]:
        return self.source.pull().map(
            lambda value: value if isinstance(value, tuple) else (value,)
        )


@dataclass(slots=True, eq=False, repr=False)
class Concat[T](Puller[T]):
    """Drains each source in turn."""

    sources: tuple[Puller[T], ...]
    index: int = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({', '.join(map(repr, self.sources))})"

    def pull(self) -> Option[T]:
        while self.index < len(self.sources):
            item = self.sources[self.index].pull()
            if item.is_some():
                return item
            self.index += 1
        return NONE


@dataclass(slots=True, eq=False, repr=False)
class Enumerate[T](Puller[tuple[int, T]]):
    source: Puller[T]
    counter: int = 0

    def pull(self) -> Option[tuple[int, T]]:
        item = self.source.pull()
        if item.is_none():
            return NONE
        index = self.counter
        self.counter += 1
        return Some((index, item.unwrap()))


@dataclass(slots=True, eq=False, repr=False)
class Interpose[T](Puller[T]):
    """Yields `element` between each pair of upstream elements.

    An upstream element is held back until the separator before it has been pulled.
    """

    source: Puller[T]
    element: T
    started: bool = False
    pending: Option[T] = field(default_factory=lambda: NONE)

    def pull(self) -> Option[T]:
        if self.pending.is_some():
            item, self.pending = self.pending, NONE
            return item
        item = self.source.pull()
        if item.is_none() or not self.started:
            self.started = True
            return item
        self.pending = item
        return Some(self.element)
