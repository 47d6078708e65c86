"""Built-in collector factories.

A collector factory is any zero-argument callable returning a fresh object with `accept(item)` and `finalize()`
(see `pyostream.traits.CollectorInstance`).

Every class below is its own factory: `ps.collectors.Sum` and its alias `ps.collectors.sum` can be given as is to
`collect()`. `join(delimiter)` returns a factory bound to the given delimiter.

Collectors of aggregates that may not exist (`min`, `max`, `last`, `average`) finalize to an `Option`.

Example:
```python
>>> import pyostream as ps
>>> ps.fn.collect(ps.fn.range(1, 5), ps.collectors.sum)
15
>>> ps.fn.collect(ps.fn.range(1, 6), ps.collectors.average)
Some(value=3.5)
>>> ps.fn.collect([], ps.collectors.max)
NONE
>>> ps.fn.collect("abc", ps.collectors.join(";"))
'a;b;c'

```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
from typing import TYPE_CHECKING, Any

from ._core import deprecated
from ._option import NONE, Option, Some

if TYPE_CHECKING:
    from ._types import Collector

__all__ = [
    "Average",
    "Count",
    "Join",
    "Last",
    "Max",
    "Min",
    "Sum",
    "ToList",
    "ToSet",
    "ToTuple",
    "average",
    "count",
    "join",
    "last",
    "max",
    "min",
    "sum",
    "table",
    "to_list",
    "to_set",
    "to_tuple",
]


@dataclass(slots=True)
class ToList[T]:
    """Collect elements into a `list`, in iteration order."""

    items: list[T] = field(default_factory=list)

    def accept(self, item: T) -> None:
        self.items.append(item)

    def finalize(self) -> list[T]:
        return self.items


@dataclass(slots=True)
class ToTuple[T]:
    """Collect elements into a `tuple`."""

    items: list[T] = field(default_factory=list)

    def accept(self, item: T) -> None:
        self.items.append(item)

    def finalize(self) -> tuple[T, ...]:
        return tuple(self.items)


@dataclass(slots=True)
class ToSet[T]:
    """Collect elements into a `set`, dropping duplicates."""

    items: set[T] = field(default_factory=set)

    def accept(self, item: T) -> None:
        self.items.add(item)

    def finalize(self) -> set[T]:
        return self.items


@dataclass(slots=True)
class Count:
    """Count elements."""

    total: int = 0

    def accept(self, item: object) -> None:  # noqa: ARG002
        self.total += 1

    def finalize(self) -> int:
        return self.total


@dataclass(slots=True)
class Sum:
    """Add elements together, starting from `0`."""

    total: Any = 0

    def accept(self, item: Any) -> None:
        self.total = self.total + item

    def finalize(self) -> Any:
        return self.total


@dataclass(slots=True)
class Min[T]:
    """Keep the smallest element. The first element seeds the state, ties keep the earliest one."""

    current: Option[T] = field(default_factory=lambda: NONE)

    def accept(self, item: T) -> None:
        if self.current.is_none() or item < self.current.unwrap():  # type: ignore[operator]
            self.current = Some(item)

    def finalize(self) -> Option[T]:
        return self.current


@dataclass(slots=True)
class Max[T]:
    """Keep the largest element. The first element seeds the state, ties keep the earliest one."""

    current: Option[T] = field(default_factory=lambda: NONE)

    def accept(self, item: T) -> None:
        if self.current.is_none() or item > self.current.unwrap():  # type: ignore[operator]
            self.current = Some(item)

    def finalize(self) -> Option[T]:
        return self.current


@dataclass(slots=True)
class Last[T]:
    """Keep the last element."""

    current: Option[T] = field(default_factory=lambda: NONE)

    def accept(self, item: T) -> None:
        self.current = Some(item)

    def finalize(self) -> Option[T]:
        return self.current


@dataclass(slots=True)
class Average:
    """Arithmetic mean of the elements, `NONE` if there were none."""

    total: Any = 0
    count: int = 0

    def accept(self, item: Any) -> None:
        self.total = self.total + item
        self.count += 1

    def finalize(self) -> Option[float]:
        if self.count == 0:
            return NONE
        return Some(self.total / self.count)


@dataclass(slots=True)
class Join:
    """Concatenate the string form of the elements, separated by `delimiter`."""

    delimiter: str = ""
    parts: list[str] = field(default_factory=list)

    def accept(self, item: object) -> None:
        self.parts.append(str(item))

    def finalize(self) -> str:
        return self.delimiter.join(self.parts)


def join(delimiter: str = "") -> Collector[object, str]:
    """Create a `Join` factory bound to **delimiter**.

    Args:
        delimiter (str): Separator placed between elements. Defaults to an empty string.

    Returns:
        Collector[object, str]: A zero-argument factory.

    Example:
    ```python
    >>> import pyostream as ps
    >>> ps.Stream([1, 2, 3]).collect(ps.collectors.join(", "))
    '1, 2, 3'
    >>> ps.Stream([]).collect(ps.collectors.join(";"))
    ''

    ```
    """
    return partial(Join, delimiter)


@deprecated("`collectors.table` is deprecated, use `collectors.to_list` instead")
def table() -> ToList[Any]:
    return ToList()


to_list = ToList
to_tuple = ToTuple
to_set = ToSet
count = Count
sum = Sum  # noqa: A001
min = Min  # noqa: A001
max = Max  # noqa: A001
last = Last
average = Average
