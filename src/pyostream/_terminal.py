from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, overload

from ._option import Option
from ._source import into_puller
from .collectors import Count, ToList

if TYPE_CHECKING:
    from ._types import Collector, IntoPuller, Predicate


def each[T](source: IntoPuller[T], consumer: Callable[[T], object]) -> None:
    """Pull every element, passing each one to **consumer**.

    Args:
        source (IntoPuller[T]): The elements to consume.
        consumer (Callable[[T], object]): Function called once per element.

    Example:
    ```python
    >>> import pyostream as ps
    >>> ps.fn.each("ab", print)
    a
    b

    ```
    """
    for value in into_puller(source):
        consumer(value)


def reduce[T, U](source: IntoPuller[T], seed: U, func: Callable[[U, T], U]) -> U:
    """Left-fold the elements into **seed**.

    Returns **seed** unchanged when there are no elements.

    Example:
    ```python
    >>> import pyostream as ps
    >>> ps.fn.reduce(ps.fn.range(1, 5), 1, lambda acc, x: acc * x)
    120
    >>> ps.fn.reduce([], 0, lambda acc, x: acc + x)
    0

    ```
    """
    accumulated = seed
    for value in into_puller(source):
        accumulated = func(accumulated, value)
    return accumulated


@overload
def collect[T](source: IntoPuller[T]) -> list[T]: ...
@overload
def collect[T, R](source: IntoPuller[T], collector: Collector[T, R]) -> R: ...
def collect(source: IntoPuller[Any], collector: Collector[Any, Any] = ToList) -> Any:
    """Drain the source into a fresh collector instance and return its result.

    Note:
        An infinite source never terminates here. Limit it first.

    Args:
        source (IntoPuller[T]): The elements to aggregate.
        collector (Collector[T, R]): Zero-argument collector factory. Defaults to `collectors.to_list`.

    Returns:
        R: Whatever the collector finalizes to.

    Example:
    ```python
    >>> import pyostream as ps
    >>> ps.fn.collect([False])
    [False]
    >>> ps.fn.collect(None)
    []

    ```
    """
    instance = collector()
    each(source, instance.accept)
    return instance.finalize()


def count(source: IntoPuller[Any]) -> int:
    """Count the elements."""
    return collect(source, Count)


def any_match[T](source: IntoPuller[T], predicate: Predicate[T] | None = None) -> bool:
    """Return `True` as soon as an element satisfies **predicate** (truthiness by default).

    Elements after the first match are left unconsumed.
    """
    check = predicate or bool
    for value in into_puller(source):
        if check(value):
            return True
    return False


def all_match[T](source: IntoPuller[T], predicate: Predicate[T] | None = None) -> bool:
    """Return `False` as soon as an element fails **predicate** (truthiness by default).

    Elements after the first mismatch are left unconsumed.
    """
    check = predicate or bool
    for value in into_puller(source):
        if not check(value):
            return False
    return True


def first[T](source: IntoPuller[T]) -> Option[T]:
    """Pull a single element."""
    return into_puller(source).pull()
