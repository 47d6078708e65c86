from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, Concatenate, cast, overload

import cytoolz as cz
import more_itertools as mit

from . import _terminal, collectors, gatherers
from ._adapters import (
    Concat,
    Cycle,
    Distinct,
    DropWhile,
    Enumerate,
    Filter,
    FilterFalse,
    FlatMap,
    Interpose,
    Limit,
    Map,
    MultiCollect,
    Peek,
    Reversed,
    Skip,
    TakeWhile,
    Zip,
)
from ._core import CommonBase
from ._source import (
    RangeSource,
    UnfoldSource,
    convert_data,
    into_puller,
    items,
    keys,
    values,
)
from .traits import Puller

if TYPE_CHECKING:
    from ._option import Option
    from ._types import Collector, IntoPuller, Predicate


class Stream[T](CommonBase[Puller[T]], Puller[T]):
    """A fluent, lazy chain of pull-based adapters.

    A `Stream` wraps the puller at the end of a pipeline.

    Every transition (`map`, `filter`, `limit`...) wraps that puller into a new adapter, stores it, and returns the same `Stream` instance.

    Nothing is pulled until a terminal operation (`collect`, `each`, `sum`...) or a direct `pull()` is made.

    Since a `Stream` is itself a `Puller`, it can be given anywhere a source is expected, including to another `Stream`.

    Keep in mind that a `Stream` is single-use and stateful: transitions mutate it, and pulled elements are gone.

    Args:
        source (IntoPuller[T]): Any supported source. Defaults to `None`, giving an empty stream.

    Example:
    ```python
    >>> import pyostream as ps
    >>> s = ps.Stream([1, 2, 3, 4]).filter(lambda x: x % 2 == 0).map(lambda x: x * 10)
    >>> s
    Stream(Map(Filter(SequenceSource([1, 2, 3, 4]))))
    >>> s.collect()
    [20, 40]

    ```
    """

    __slots__ = ()

    def __init__(self, source: IntoPuller[T] = None) -> None:
        super().__init__(into_puller(source))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._inner!r})"

    def _chain[R](self, puller: Puller[R]) -> Stream[R]:
        self._inner = cast("Puller[T]", puller)
        return cast("Stream[R]", self)

    def pull(self) -> Option[T]:
        """Pull the next element from the current end of the chain.

        Returns:
            Option[T]: `Some(element)`, or `NONE` once exhausted.

        Example:
        ```python
        >>> import pyostream as ps
        >>> s = ps.Stream.from_([1, 2])
        >>> s.pull(), s(), s.pull()
        (Some(value=1), Some(value=2), NONE)

        ```
        """
        return self._inner.pull()

    def next(self) -> Option[T]:
        """Alias of `pull()`."""
        return self._inner.pull()

    @overload
    @staticmethod
    def from_[U](data: Iterable[U]) -> Stream[U]: ...
    @overload
    @staticmethod
    def from_[U](data: U, *more_data: U) -> Stream[U]: ...
    @staticmethod
    def from_[U](data: Iterable[U] | U, *more_data: U) -> Stream[U]:
        """Create a stream from any supported source, or from unpacked values.

        Args:
            data (Iterable[U] | U): Source to stream, or a first value.
            *more_data (U): Additional values, used when **data** is a value.

        Returns:
            Stream[U]: A new stream.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream.from_((1, 2, 3)).collect()
        [1, 2, 3]
        >>> ps.Stream.from_(1, 2, 3).collect()
        [1, 2, 3]
        >>> ps.Stream.from_(42).collect()
        [42]

        ```
        """
        return Stream(convert_data(data, *more_data))

    @staticmethod
    def range(start: float, stop: float, step: float = 1) -> Stream[Any]:
        """Create a stream counting from **start** to **stop**, both inclusive.

        A negative **step** counts down. A **step** of 0 repeats **start** forever, unless it is greater than **stop**.

        Args:
            start (float): First value.
            stop (float): Last value, included when reached exactly.
            step (float): Difference between consecutive values. Defaults to 1.

        Returns:
            Stream[float]: A new stream.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream.range(1, 5).collect()
        [1, 2, 3, 4, 5]
        >>> ps.Stream.range(10, 0, -4).collect()
        [10, 6, 2]
        >>> ps.Stream.range(0, 1, 0.5).collect()
        [0, 0.5, 1.0]
        >>> ps.Stream.range(3, 1).collect()
        []

        ```
        """
        return Stream(RangeSource(start, stop, step))

    @staticmethod
    def concat[U](*iterables: IntoPuller[U]) -> Stream[U]:
        """Create a stream draining each source in turn.

        `None` sources contribute nothing.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream.concat([1], ps.Stream.from_([2, 3]), None, "ab").collect()
        [1, 2, 3, 'a', 'b']

        ```
        """
        return Stream(Concat(tuple(into_puller(source) for source in iterables)))

    @staticmethod
    def unfold[S, V](seed: S, generator: Callable[[S], Option[tuple[V, S]]]) -> Stream[V]:
        """Create a stream from a state-transition function.

        **generator** receives the current state and returns `Some((value, next_state))`, or `NONE` to stop.

        **Warning** ⚠️
            If **generator** never returns `NONE`, the stream is infinite.

        Example:
        ```python
        >>> import pyostream as ps
        >>> def halve(n: int) -> ps.Option[tuple[int, int]]:
        ...     return ps.Some((n, n // 2)) if n > 0 else ps.NONE
        >>> ps.Stream.unfold(20, halve).collect()
        [20, 10, 5, 2, 1]

        ```
        """
        return Stream(UnfoldSource(seed, generator))

    @staticmethod
    def keys[K](data: Mapping[K, Any]) -> Stream[K]:
        """Create a stream over the keys of a mapping, in unspecified order."""
        return Stream(keys(data))

    @staticmethod
    def values[V](data: Mapping[Any, V]) -> Stream[V]:
        """Create a stream over the values of a mapping, in unspecified order."""
        return Stream(values(data))

    @staticmethod
    def items[K, V](data: Mapping[K, V]) -> Stream[tuple[K, V]]:
        """Create a stream over the `(key, value)` pairs of a mapping, in unspecified order.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream.items({"a": 1, "b": 2}).map(lambda kv: kv[1]).sum()
        3

        ```
        """
        return Stream(items(data))

    def apply[**P, R](
        self,
        func: Callable[Concatenate[Puller[T], P], IntoPuller[R]],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Stream[R]:
        """Wrap the current puller with any function, and continue the chain with its result.

        The result is normalized with `into_puller`, so **func** can return a puller, a generator or any other supported source.

        Args:
            func (Callable[Concatenate[Puller[T], P], IntoPuller[R]]): Function taking the current puller.
            *args (P.args): Positional arguments to pass to **func**.
            **kwargs (P.kwargs): Keyword arguments to pass to **func**.

        Returns:
            Stream[R]: The same stream, transformed.

        Example:
        ```python
        >>> import pyostream as ps
        >>> def doubled(puller):
        ...     for x in puller:
        ...         yield x
        ...         yield x
        >>> ps.Stream([1, 2]).apply(doubled).collect()
        [1, 1, 2, 2]
        >>> ps.Stream.range(1, 5).apply(ps.gatherers.batch(2)).collect()
        [(1, 2), (3, 4), (5,)]

        ```
        """
        return self._chain(into_puller(func(self._inner, *args, **kwargs)))

    def filter(self, predicate: Predicate[T] | None = None) -> Stream[T]:
        """Keep the elements for which **predicate** is truthy.

        Without a predicate, keep the truthy elements.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([0, 1, None, 2, ""]).filter().collect()
        [1, 2]
        >>> ps.Stream.range(1, 6).filter(lambda x: x % 2).collect()
        [1, 3, 5]

        ```
        """
        return self._chain(Filter(self._inner, predicate or bool))

    def filter_false(self, predicate: Predicate[T] | None = None) -> Stream[T]:
        """Keep the elements for which **predicate** is falsy.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream.range(1, 6).filter_false(lambda x: x % 2).collect()
        [2, 4, 6]

        ```
        """
        return self._chain(FilterFalse(self._inner, predicate or bool))

    def map[R](self, func: Callable[[T], R]) -> Stream[R]:
        """Apply **func** to every element.

        Falsy results such as `False` or `0` are kept as elements.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([1, 2, 3]).map(lambda x: x > 1).collect()
        [False, True, True]

        ```
        """
        return self._chain(Map(self._inner, func))

    def flat_map[R](self, func: Callable[[T], IntoPuller[R]]) -> Stream[R]:
        """Apply **func** to every element and yield the elements of each result in turn.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([1, 2, 3]).flat_map(lambda x: [x] * x).collect()
        [1, 2, 2, 3, 3, 3]

        ```
        """
        return self._chain(FlatMap(self._inner, func))

    def flatten[R](self: Stream[IntoPuller[R]]) -> Stream[R]:
        """Yield the elements of each element.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([[1, 2], [], "ab"]).flatten().collect()
        [1, 2, 'a', 'b']

        ```
        """
        return self._chain(FlatMap(self._inner, _identity))

    def limit(self, n: int) -> Stream[T]:
        """Yield at most **n** elements.

        Upstream is never pulled past the **n**-th element, so this is the way to bound an infinite stream.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream.range(1, 1, 0).limit(3).collect()
        [1, 1, 1]

        ```
        """
        return self._chain(Limit(self._inner, n))

    def skip(self, n: int) -> Stream[T]:
        """Discard the first **n** elements.

        Nothing is discarded until the first pull.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([1, 2, 3]).skip(1).collect()
        [2, 3]
        >>> ps.Stream([1, 2, 3]).skip(5).collect()
        []

        ```
        """
        return self._chain(Skip(self._inner, n))

    def take_while(self, predicate: Predicate[T]) -> Stream[T]:
        """Yield elements while **predicate** holds, then stop for good.

        The first failing element is consumed and dropped.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([1, 2, 5, 1]).take_while(lambda x: x < 3).collect()
        [1, 2]

        ```
        """
        return self._chain(TakeWhile(self._inner, predicate))

    def drop_while(self, predicate: Predicate[T]) -> Stream[T]:
        """Drop elements while **predicate** holds, then yield everything.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([1, 2, 5, 1]).drop_while(lambda x: x < 3).collect()
        [5, 1]

        ```
        """
        return self._chain(DropWhile(self._inner, predicate))

    def distinct(self) -> Stream[T]:
        """Drop elements equal to an element already yielded.

        Unhashable elements are supported, at the cost of a linear scan.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([1, 2, 1, 3, 2]).distinct().collect()
        [1, 2, 3]
        >>> ps.Stream([[1], [1], [2]]).distinct().collect()
        [[1], [2]]

        ```
        """
        return self._chain(Distinct(self._inner))

    def peek(self, consumer: Callable[[T], object]) -> Stream[T]:
        """Call **consumer** on every element just before it is yielded.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([1, 2]).peek(print).map(lambda x: x * 10).collect()
        1
        2
        [10, 20]

        ```
        """
        return self._chain(Peek(self._inner, consumer))

    def cycle(self, repeats: int | None = None) -> Stream[T]:
        """Repeat the elements, forever or **repeats** times.

        **Warning** ⚠️
            This is eager: the whole source is buffered on the first pull.
            An infinite source never returns.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([1, 2, 3]).cycle().limit(7).collect()
        [1, 2, 3, 1, 2, 3, 1]
        >>> ps.Stream("ab").cycle(2).collect()
        ['a', 'b', 'a', 'b']

        ```
        """
        return self._chain(Cycle(self._inner, repeats))

    def reversed(self) -> Stream[T]:
        """Yield the elements from the last one to the first one.

        **Warning** ⚠️
            This is eager: the whole source is buffered on the first pull.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([1, 2, 3]).reversed().collect()
        [3, 2, 1]

        ```
        """
        return self._chain(Reversed(self._inner))

    def zip(self, *others: IntoPuller[Any]) -> Stream[tuple[Any, ...]]:
        """Yield tuples made of one element of this stream and of each of **others**.

        Stops as soon as any of them is exhausted.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([1, 2, 3]).zip("ab", [True, False, True]).collect()
        [(1, 'a', True), (2, 'b', False)]

        ```
        """
        return self._chain(Zip((self._inner, *(into_puller(other) for other in others))))

    def multicollect(self) -> Stream[tuple[Any, ...]]:
        """Box every element into a tuple group.

        Tuples are kept as they are, any other element becomes a 1-tuple.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([1, (2, 3)]).multicollect().collect()
        [(1,), (2, 3)]

        ```
        """
        return self._chain(MultiCollect(self._inner))

    def chain(self, *others: IntoPuller[T]) -> Stream[T]:
        """Yield the elements of **others** after the elements of this stream.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([1]).chain([2], (3, 4)).collect()
        [1, 2, 3, 4]

        ```
        """
        return self._chain(Concat((self._inner, *(into_puller(other) for other in others))))

    def enumerate(self, start: int = 0) -> Stream[tuple[int, T]]:
        """Yield `(index, element)` pairs, counting from **start**.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream("ab").enumerate(1).collect()
        [(1, 'a'), (2, 'b')]

        ```
        """
        return self._chain(Enumerate(self._inner, start))

    def batch(self, size: int) -> Stream[tuple[T, ...]]:
        """Group elements into tuples of **size**, the last one possibly shorter.

        Shorthand for `apply(gatherers.batch(size))`.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream.range(1, 7).batch(3).collect()
        [(1, 2, 3), (4, 5, 6), (7,)]

        ```
        """
        return self.apply(gatherers.batch(size))

    def window(self, size: int) -> Stream[tuple[T, ...]]:
        """Yield the sliding window of at most **size** elements ending at each element.

        Shorthand for `apply(gatherers.window(size))`.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream.range(1, 4).window(3).collect()
        [(1,), (1, 2), (1, 2, 3), (2, 3, 4)]

        ```
        """
        return self.apply(gatherers.window(size))

    def interpose(self, element: T) -> Stream[T]:
        """Insert **element** between each pair of elements.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([1, 2, 3]).interpose(0).collect()
        [1, 0, 2, 0, 3]

        ```
        """
        return self._chain(Interpose(self._inner, element))

    def accumulate(self, func: Callable[[T, T], T]) -> Stream[T]:
        """Yield the running results of a binary **func**.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([1, 2, 3, 4]).accumulate(lambda a, b: a + b).collect()
        [1, 3, 6, 10]

        ```
        """
        return self._chain(into_puller(cz.itertoolz.accumulate(func, self._inner)))

    def pairwise(self) -> Stream[tuple[T, T]]:
        """Yield overlapping pairs of consecutive elements.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream("abc").pairwise().collect()
        [('a', 'b'), ('b', 'c')]

        ```
        """
        return self._chain(into_puller(mit.pairwise(self._inner)))

    def each(self, consumer: Callable[[T], object]) -> None:
        """Pull every element, passing each one to **consumer**."""
        _terminal.each(self._inner, consumer)

    @overload
    def collect(self) -> list[T]: ...
    @overload
    def collect[R](self, collector: Collector[T, R]) -> R: ...
    def collect(self, collector: Collector[T, Any] | None = None) -> Any:
        """Drain the stream into a collector, a list by default.

        **Warning** ⚠️
            An infinite stream never returns here.

        Args:
            collector (Collector[T, R] | None): Zero-argument collector factory, see `pyostream.collectors`.

        Returns:
            R: The finalized result of the collector.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream("abca").collect(ps.collectors.to_set) == {"a", "b", "c"}
        True
        >>> ps.Stream([]).collect()
        []

        ```
        """
        return _terminal.collect(self._inner, collector or collectors.ToList)

    def reduce[U](self, seed: U, func: Callable[[U, T], U]) -> U:
        """Left-fold the elements into **seed**.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream("abc").reduce("", lambda acc, c: c + acc)
        'cba'

        ```
        """
        return _terminal.reduce(self._inner, seed, func)

    def count(self) -> int:
        """Count the remaining elements."""
        return _terminal.count(self._inner)

    def any(self, predicate: Predicate[T] | None = None) -> bool:
        """Check whether any element satisfies **predicate**, stopping at the first one that does.

        Example:
        ```python
        >>> import pyostream as ps
        >>> s = ps.Stream([1, 2, 3, 4])
        >>> s.any(lambda x: x == 2)
        True
        >>> s.collect()
        [3, 4]

        ```
        """
        return _terminal.any_match(self._inner, predicate)

    def all(self, predicate: Predicate[T] | None = None) -> bool:
        """Check whether every element satisfies **predicate**, stopping at the first one that does not."""
        return _terminal.all_match(self._inner, predicate)

    def first(self) -> Option[T]:
        """Pull a single element."""
        return _terminal.first(self._inner)

    def sum(self) -> Any:
        """Sum the elements, `0` for an empty stream."""
        return _terminal.collect(self._inner, collectors.Sum)

    def min(self) -> Option[T]:
        """Smallest element, `NONE` for an empty stream.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream([3, 1, 2]).min()
        Some(value=1)
        >>> ps.Stream([]).min()
        NONE

        ```
        """
        return _terminal.collect(self._inner, collectors.Min)

    def max(self) -> Option[T]:
        """Largest element, `NONE` for an empty stream."""
        return _terminal.collect(self._inner, collectors.Max)

    def average(self) -> Option[float]:
        """Arithmetic mean of the elements, `NONE` for an empty stream."""
        return _terminal.collect(self._inner, collectors.Average)

    def join(self, delimiter: str = "") -> str:
        """Join the string form of the elements with **delimiter**.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.Stream.range(1, 3).join("-")
        '1-2-3'

        ```
        """
        return _terminal.collect(self._inner, collectors.join(delimiter))

    def last(self) -> Option[T]:
        """Last element, `NONE` for an empty stream."""
        return _terminal.collect(self._inner, collectors.Last)


def _identity[T](value: T) -> T:
    return value
