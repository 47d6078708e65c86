from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Never

if TYPE_CHECKING:
    from typing import TypeIs


class OptionUnwrapError(RuntimeError): ...


class Option[T](ABC):
    """The result of a single pull: either `Some(value)`, or `NONE` once a puller is exhausted.

    Wrapping every element keeps "no more elements" apart from legitimate falsy payloads,
    so `Some(False)`, `Some(0)`, `Some("")` and even `Some(None)` are all regular values.
    """

    __slots__ = ()

    @abstractmethod
    def is_some(self) -> TypeIs[Some[T]]:  # type: ignore[misc]
        """
        Returns `True` if the option is a `Some` value.

        Returns:
            `True` if the option is a `Some` variant, `False` otherwise.

        Example:
            ```python
            >>> import pyostream as ps
            >>> ps.Some(2).is_some()
            True
            >>> ps.Some(False).is_some()
            True
            >>> ps.NONE.is_some()
            False

            ```
        """
        ...

    @abstractmethod
    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        """
        Returns `True` if the option is the `NONE` value.

        Returns:
            `True` if the option is a `NoneOption` variant, `False` otherwise.

        Example:
            ```python
            >>> import pyostream as ps
            >>> ps.Some(None).is_none()
            False
            >>> ps.NONE.is_none()
            True

            ```
        """
        ...

    @abstractmethod
    def unwrap(self) -> T:
        """
        Returns the contained `Some` value.

        Returns:
            The contained `Some` value.

        Raises:
            OptionUnwrapError: If the option is `NONE`.

        Example:
            ```python
            >>> import pyostream as ps
            >>> ps.Some("car").unwrap()
            'car'
            >>> ps.NONE.unwrap()
            Traceback (most recent call last):
                ...
            pyostream._option.OptionUnwrapError: called `unwrap` on a `None`

            ```
        """
        ...

    def expect(self, msg: str) -> T:
        """
        Returns the contained `Some` value.
        Raises an exception with a provided message if the value is `NONE`.

        Args:
            msg: The message to include in the exception if the result is `NONE`.

        Returns:
            The contained `Some` value.

        Raises:
            OptionUnwrapError: If the result is `NONE`.

        Example:
            ```python
            >>> import pyostream as ps
            >>> ps.Some("value").expect("stream should not be empty")
            'value'
            >>> ps.NONE.expect("stream should not be empty")
            Traceback (most recent call last):
                ...
            pyostream._option.OptionUnwrapError: stream should not be empty (called `expect` on a `None`)

            ```
        """
        if self.is_some():
            return self.unwrap()
        msg = f"{msg} (called `expect` on a `None`)"
        raise OptionUnwrapError(msg)

    def unwrap_or(self, default: T) -> T:
        """
        Returns the contained `Some` value or a provided default.

        Args:
            default: The value to return if the result is `NONE`.

        Returns:
            The contained `Some` value or the provided default.

        Example:
            ```python
            >>> import pyostream as ps
            >>> ps.Some(0).unwrap_or(10)
            0
            >>> ps.NONE.unwrap_or(10)
            10

            ```
        """
        return self.unwrap() if self.is_some() else default

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        """
        Returns the contained `Some` value or computes it from a function.

        Args:
            f: A function that returns a default value if the result is `NONE`.

        Returns:
            The contained `Some` value or the result of the function.
        """
        return self.unwrap() if self.is_some() else f()

    def map[U](self, f: Callable[[T], U]) -> Option[U]:
        """
        Maps an `Option[T]` to `Option[U]` by applying a function to a contained `Some` value,
        leaving a `NONE` value untouched.

        Args:
            f: The function to apply to the `Some` value.

        Returns:
            A new `Option` with the mapped value if `Some`, otherwise `NONE`.

        Example:
            ```python
            >>> import pyostream as ps
            >>> ps.Some("Hello, World!").map(len)
            Some(value=13)
            >>> ps.Some(1).map(lambda x: x - 1)
            Some(value=0)
            >>> ps.NONE.map(len)
            NONE

            ```
        """
        if self.is_some():
            return Some(f(self.unwrap()))
        return NONE

    def and_then[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """
        Calls a function if the option is `Some`, otherwise returns `NONE`.

        Args:
            f: The function to call with the `Some` value.

        Returns:
            The result of the function if `Some`, otherwise `NONE`.
        """
        if self.is_some():
            return f(self.unwrap())
        return NONE

    def filter(self, predicate: Callable[[T], object]) -> Option[T]:
        """
        Returns the option unchanged if it is `Some` and the predicate holds, `NONE` otherwise.

        Args:
            predicate: Function to test the contained value.

        Returns:
            `Option[T]`

        Example:
            ```python
            >>> import pyostream as ps
            >>> ps.Some(4).filter(lambda x: x % 2 == 0)
            Some(value=4)
            >>> ps.Some(3).filter(lambda x: x % 2 == 0)
            NONE

            ```
        """
        if self.is_some() and predicate(self.unwrap()):
            return self
        return NONE

    def or_else(self, f: Callable[[], Option[T]]) -> Option[T]:
        """
        Returns the option if it contains a value, otherwise calls a function and returns the result.

        Args:
            f: The function to call if the option is `NONE`.

        Returns:
            The original `Option` if it is `Some`, otherwise the result of the function.
        """
        return self if self.is_some() else f()


@dataclass(slots=True)
class Some[T](Option[T]):
    """Option variant representing a pulled element.

    Args:
        value (T): The contained value.
    """

    value: T

    def is_some(self) -> TypeIs[Some[T]]:  # type: ignore[misc]
        return True

    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(slots=True)
class NoneOption(Option[Any]):
    """Option variant signalling exhaustion."""

    def __repr__(self) -> str:
        return "NONE"

    def is_some(self) -> TypeIs[Some[Any]]:  # type: ignore[misc]
        return False

    def is_none(self) -> TypeIs[NoneOption]:  # type: ignore[misc]
        return True

    def unwrap(self) -> Never:
        raise OptionUnwrapError("called `unwrap` on a `None`")


NONE: Option[Any] = NoneOption()
"""Singleton instance representing exhaustion."""
