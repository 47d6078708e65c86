from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, cast

import cytoolz as cz

from ._core import get_config
from ._errors import UnsupportedSourceKindError
from ._option import NONE, Option, Some
from .traits import Puller

if TYPE_CHECKING:
    from ._types import IntoPuller, PullFn


class SourceKind(Enum):
    """The closed set of source kinds `into_puller` knows how to handle."""

    ABSENT = auto()
    PULLER = auto()
    TEXT = auto()
    MAPPING = auto()
    SEQUENCE = auto()
    ITERABLE = auto()
    CALLABLE = auto()
    UNSUPPORTED = auto()

    @classmethod
    def of(cls, source: object) -> SourceKind:
        """Classify a source.

        Example:
        ```python
        >>> import pyostream as ps
        >>> ps.SourceKind.of("abc")
        <SourceKind.TEXT: 3>
        >>> ps.SourceKind.of({1, 2})
        <SourceKind.ITERABLE: 6>
        >>> ps.SourceKind.of(False)
        <SourceKind.UNSUPPORTED: 8>

        ```
        """
        match source:
            case None:
                return cls.ABSENT
            case Puller():
                return cls.PULLER
            case str():
                return cls.TEXT
            case Mapping():
                return cls.MAPPING
            case Sequence():
                return cls.SEQUENCE
            case _ if cz.itertoolz.isiterable(source):
                return cls.ITERABLE
            case _ if callable(source):
                return cls.CALLABLE
            case _:
                return cls.UNSUPPORTED


@dataclass(slots=True, eq=False, repr=False)
class Empty(Puller[Any]):
    """A puller that is exhausted from the start."""

    def pull(self) -> Option[Any]:
        return NONE


@dataclass(slots=True, eq=False, repr=False)
class SequenceSource[T](Puller[T]):
    """Walks a sequence by index.

    The sequence is read live on every pull, so elements appended during the iteration are produced too.
    """

    data: Sequence[T]
    index: int = 0
    done: bool = False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({get_config().iter_repr(self.data)})"

    def pull(self) -> Option[T]:
        if self.done or self.index >= len(self.data):
            self.done = True
            return NONE
        value = self.data[self.index]
        self.index += 1
        return Some(value)


@dataclass(slots=True, eq=False, repr=False)
class TextSource(Puller[str]):
    """Yields the characters of a string, one at a time."""

    data: str
    index: int = 0

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({get_config().iter_repr(self.data)})"

    def pull(self) -> Option[str]:
        if self.index >= len(self.data):
            return NONE
        char = self.data[self.index]
        self.index += 1
        return Some(char)


@dataclass(slots=True, eq=False, repr=False)
class IteratorSource[T](Puller[T]):
    """Adapts a Python `Iterator` to the pull contract."""

    iterator: Iterator[T]
    done: bool = False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.iterator.__class__.__name__})"

    def pull(self) -> Option[T]:
        if self.done:
            return NONE
        try:
            return Some(next(self.iterator))
        except StopIteration:
            self.done = True
            return NONE


@dataclass(slots=True, eq=False, repr=False)
class CallableSource[T](Puller[T]):
    """Forwards every pull to a bare callable already following the pull contract.

    The callable is not called again once it returned `NONE`.
    """

    func: PullFn[T]
    done: bool = False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({getattr(self.func, '__name__', self.func)!r})"

    def _call(self) -> Option[T]:
        return self.func()

    def pull(self) -> Option[T]:
        if self.done:
            return NONE
        result = self._call()
        if isinstance(result, Option) and result.is_none():
            self.done = True
        return result


@dataclass(slots=True, eq=False, repr=False)
class CheckedCallableSource[T](CallableSource[T]):
    """A `CallableSource` verifying that the callable returns an `Option`.

    Used instead of `CallableSource` when `strict_callables` is enabled in the configuration.
    """

    def _call(self) -> Option[T]:
        result = self.func()
        if not isinstance(result, Option):
            msg = (
                f"Callable source {getattr(self.func, '__name__', self.func)!r} returned "
                f"{type(result).__name__!r} instead of an Option"
            )
            raise UnsupportedSourceKindError(msg)
        return result


@dataclass(slots=True, eq=False, repr=False)
class RangeSource(Puller[float]):
    """Counts from `start` to `stop`, both inclusive.

    A `step` of 0 repeats `start` forever, unless `start` is already past `stop`.
    """

    start: float
    stop: float
    step: float = 1
    current: float = field(init=False)
    done: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.current = self.start

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.start!r}, {self.stop!r}, {self.step!r})"

    def pull(self) -> Option[float]:
        if self.done:
            return NONE
        value = self.current
        past_stop = value < self.stop if self.step < 0 else value > self.stop
        if past_stop:
            self.done = True
            return NONE
        self.current = value + self.step
        return Some(value)


@dataclass(slots=True, eq=False, repr=False)
class UnfoldSource[S, V](Puller[V]):
    """Produces values from a state-transition function, until it returns `NONE`."""

    state: S
    generator: Callable[[S], Option[tuple[V, S]]]
    done: bool = False

    def pull(self) -> Option[V]:
        if self.done:
            return NONE
        match self.generator(self.state):
            case Some((value, next_state)):
                self.state = next_state
                return Some(value)
            case _:
                self.done = True
                return NONE


def into_puller[T](source: IntoPuller[T] = None) -> Puller[T]:
    """Normalize any supported source into a `Puller`.

    This is the single admission point of the library: every adapter, terminal operation and `Stream` goes through it.

    - `None` gives an empty puller.
    - A `Puller` (including a `Stream`) is returned unchanged.
    - A `str` yields its characters.
    - A `Sequence` is walked by index, read live.
    - Any other Python iterable (set, generator, file...) is iterated with `iter()`.
    - A bare callable is assumed to follow the pull contract, returning `Option` values.

    Mappings are rejected, use `keys()`, `values()` or `items()` instead.

    Args:
        source (IntoPuller[T]): The source to normalize.

    Returns:
        Puller[T]: A puller over the source.

    Raises:
        UnsupportedSourceKindError: If the source kind is not supported.

    Example:
    ```python
    >>> import pyostream as ps
    >>> puller = ps.into_puller([False, 0])
    >>> puller.pull(), puller.pull(), puller.pull()
    (Some(value=False), Some(value=0), NONE)
    >>> ps.into_puller(puller) is puller
    True
    >>> ps.into_puller(3)
    Traceback (most recent call last):
        ...
    pyostream._errors.UnsupportedSourceKindError: Cannot convert object of type 'int' to an iterator!

    ```
    """
    kind = SourceKind.of(source)
    match kind:
        case SourceKind.ABSENT:
            return Empty()
        case SourceKind.PULLER:
            return cast("Puller[T]", source)
        case SourceKind.TEXT:
            return cast("Puller[T]", TextSource(cast("str", source)))
        case SourceKind.SEQUENCE:
            return SequenceSource(cast("Sequence[T]", source))
        case SourceKind.ITERABLE:
            return IteratorSource(iter(cast("Iterable[T]", source)))
        case SourceKind.CALLABLE:
            func = cast("PullFn[T]", source)
            if get_config().strict_callables:
                return CheckedCallableSource(func)
            return CallableSource(func)
        case SourceKind.MAPPING:
            msg = (
                f"Cannot convert object of type '{type(source).__name__}' to an iterator! "
                "Use keys(), values() or items() to traverse a mapping."
            )
            raise UnsupportedSourceKindError(msg)
        case SourceKind.UNSUPPORTED:
            msg = f"Cannot convert object of type '{type(source).__name__}' to an iterator!"
            raise UnsupportedSourceKindError(msg)


def convert_data[T](data: Iterable[T] | T, *more_data: T) -> IntoPuller[T]:
    if more_data:
        return (data, *more_data)  # type: ignore[return-value]
    if data is None or isinstance(data, Puller) or cz.itertoolz.isiterable(data):
        return data  # type: ignore[return-value]
    return (data,)  # type: ignore[return-value]


def _check_mapping(data: object) -> Mapping[Any, Any]:
    if not isinstance(data, Mapping):
        msg = f"Expected a mapping, got object of type '{type(data).__name__}'"
        raise UnsupportedSourceKindError(msg)
    return data


def keys[K](data: Mapping[K, Any]) -> Puller[K]:
    """Pull the keys of a mapping.

    The traversal order is unspecified and should not be relied upon.

    Args:
        data (Mapping[K, Any]): The mapping to traverse.

    Returns:
        Puller[K]: A puller over the keys.

    Example:
    ```python
    >>> import pyostream as ps
    >>> sorted(ps.fn.keys({"b": 1, "a": 2}))
    ['a', 'b']

    ```
    """
    return IteratorSource(iter(_check_mapping(data).keys()))


def values[V](data: Mapping[Any, V]) -> Puller[V]:
    """Pull the values of a mapping, in unspecified order.

    Example:
    ```python
    >>> import pyostream as ps
    >>> sorted(ps.fn.values({"b": 1, "a": 2}))
    [1, 2]

    ```
    """
    return IteratorSource(iter(_check_mapping(data).values()))


def items[K, V](data: Mapping[K, V]) -> Puller[tuple[K, V]]:
    """Pull the `(key, value)` pairs of a mapping, in unspecified order.

    Example:
    ```python
    >>> import pyostream as ps
    >>> sorted(ps.fn.items({"b": 1, "a": 2}))
    [('a', 2), ('b', 1)]

    ```
    """
    return IteratorSource(iter(_check_mapping(data).items()))
