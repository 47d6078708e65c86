"""Functional API.

One plain function per operation, taking its source as first argument.

Sources are normalized with `into_puller`, and every function returning elements returns a `Puller`,
so calls can be nested, or their results given to a `Stream`, a `for` loop or any function expecting an iterable.

Some names shadow builtins (`iter`, `range`, `filter`, `map`, `zip`...). Import the module, not its members:

```python
>>> import pyostream as ps
>>> ps.fn.collect(ps.fn.map(ps.fn.filter([1, 2, 3, 4], lambda x: x % 2 == 0), str))
['2', '4']

```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ._adapters import (
    Concat,
    Cycle,
    Distinct,
    DropWhile,
    Enumerate,
    Filter,
    FilterFalse,
    FlatMap,
    Limit,
    Map,
    MultiCollect,
    Peek,
    Reversed,
    Skip,
    TakeWhile,
    Zip,
)
from ._source import RangeSource, UnfoldSource, into_puller, items, keys, values
from ._stream import Stream
from ._terminal import all_match, any_match, collect, count, each, first, reduce

if TYPE_CHECKING:
    from ._option import Option
    from ._types import IntoPuller, Predicate
    from .traits import Puller

__all__ = [
    "all",
    "any",
    "collect",
    "concat",
    "count",
    "cycle",
    "distinct",
    "drop_while",
    "each",
    "enumerate",
    "filter",
    "filter_false",
    "first",
    "flat_map",
    "flatten",
    "items",
    "iter",
    "keys",
    "limit",
    "map",
    "multicollect",
    "peek",
    "range",
    "reduce",
    "reversed",
    "skip",
    "stream",
    "take_while",
    "unfold",
    "values",
    "zip",
]

stream = Stream.from_
any = any_match  # noqa: A001
all = all_match  # noqa: A001


def iter[T](source: IntoPuller[T] = None) -> Puller[T]:  # noqa: A001
    """Normalize a source into a puller.

    Example:
    ```python
    >>> import pyostream as ps
    >>> ps.fn.iter(False)
    Traceback (most recent call last):
        ...
    pyostream._errors.UnsupportedSourceKindError: Cannot convert object of type 'bool' to an iterator!
    >>> ps.fn.collect(ps.fn.iter())
    []

    ```
    """
    return into_puller(source)


def range(start: float, stop: float, step: float = 1) -> Puller[Any]:  # noqa: A001
    """Count from **start** to **stop**, both inclusive, see `Stream.range`."""
    return RangeSource(start, stop, step)


def unfold[S, V](seed: S, generator: Callable[[S], Option[tuple[V, S]]]) -> Puller[V]:
    """Produce values from a state-transition function, see `Stream.unfold`."""
    return UnfoldSource(seed, generator)


def filter[T](source: IntoPuller[T], predicate: Predicate[T] | None = None) -> Puller[T]:  # noqa: A001
    """Keep the elements for which **predicate** is truthy, the truthy ones without a predicate."""
    return Filter(into_puller(source), predicate or bool)


def filter_false[T](source: IntoPuller[T], predicate: Predicate[T] | None = None) -> Puller[T]:
    return FilterFalse(into_puller(source), predicate or bool)


def map[T, R](source: IntoPuller[T], func: Callable[[T], R]) -> Puller[R]:  # noqa: A001
    """Apply **func** to every element.

    Example:
    ```python
    >>> import pyostream as ps
    >>> ps.fn.collect(ps.fn.map([0, 1], bool))
    [False, True]

    ```
    """
    return Map(into_puller(source), func)


def flat_map[T, R](source: IntoPuller[T], func: Callable[[T], IntoPuller[R]]) -> Puller[R]:
    return FlatMap(into_puller(source), func)


def flatten[T](source: IntoPuller[IntoPuller[T]]) -> Puller[T]:
    return FlatMap(into_puller(source), _identity)


def limit[T](source: IntoPuller[T], n: int) -> Puller[T]:
    """Yield at most **n** elements, without pulling upstream past them.

    Example:
    ```python
    >>> import pyostream as ps
    >>> ps.fn.collect(ps.fn.limit(ps.fn.range(1, 1, 0), 2))
    [1, 1]

    ```
    """
    return Limit(into_puller(source), n)


def skip[T](source: IntoPuller[T], n: int) -> Puller[T]:
    return Skip(into_puller(source), n)


def take_while[T](source: IntoPuller[T], predicate: Predicate[T]) -> Puller[T]:
    return TakeWhile(into_puller(source), predicate)


def drop_while[T](source: IntoPuller[T], predicate: Predicate[T]) -> Puller[T]:
    return DropWhile(into_puller(source), predicate)


def distinct[T](source: IntoPuller[T]) -> Puller[T]:
    return Distinct(into_puller(source))


def peek[T](source: IntoPuller[T], consumer: Callable[[T], object]) -> Puller[T]:
    return Peek(into_puller(source), consumer)


def cycle[T](source: IntoPuller[T], repeats: int | None = None) -> Puller[T]:
    """Repeat the elements, forever or **repeats** times.

    The source is buffered on the first pull: an infinite source never returns.
    """
    return Cycle(into_puller(source), repeats)


def reversed[T](source: IntoPuller[T]) -> Puller[T]:  # noqa: A001
    """Yield the elements from the last to the first, buffering them all on the first pull."""
    return Reversed(into_puller(source))


def zip(*sources: IntoPuller[Any]) -> Puller[tuple[Any, ...]]:  # noqa: A001
    """Yield tuples of one element from each source, stopping at the shortest one.

    Example:
    ```python
    >>> import pyostream as ps
    >>> ps.fn.collect(ps.fn.zip([1, 2, 3], "ab"))
    [(1, 'a'), (2, 'b')]
    >>> ps.fn.collect(ps.fn.zip())
    []

    ```
    """
    return Zip(tuple(into_puller(source) for source in sources))


def multicollect(source: IntoPuller[Any]) -> Puller[tuple[Any, ...]]:
    """Box every element into a tuple group, keeping tuples as they are.

    Example:
    ```python
    >>> import pyostream as ps
    >>> ps.fn.collect(ps.fn.multicollect(ps.fn.zip([1, 2, 3], [3, 5, 7])))
    [(1, 3), (2, 5), (3, 7)]
    >>> ps.fn.collect(ps.fn.multicollect([1, 2, 3]))
    [(1,), (2,), (3,)]

    ```
    """
    return MultiCollect(into_puller(source))


def concat[T](*sources: IntoPuller[T]) -> Puller[T]:
    return Concat(tuple(into_puller(source) for source in sources))


def enumerate[T](source: IntoPuller[T], start: int = 0) -> Puller[tuple[int, T]]:  # noqa: A001
    return Enumerate(into_puller(source), start)


def _identity[T](value: T) -> T:
    return value

