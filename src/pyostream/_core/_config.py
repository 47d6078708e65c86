from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from .._errors import InvalidConfigurationError
from ._format import data_repr


@dataclass(slots=True, frozen=True)
class PyostreamConfig:
    """Process-wide settings for pyostream.

    Use `get_config()` to read the active configuration and `set_config()` to change it.

    Args:
        repr_max_items (int): Number of source elements shown by `repr()` before truncating.
        repr_depth (int): Nesting depth shown by `repr()` for nested source data.
        strict_callables (bool): Check that bare callable sources return an `Option` on every pull.
    """

    repr_max_items: int = 20
    repr_depth: int = 3
    strict_callables: bool = False

    def iter_repr(self, data: Any) -> str:
        """Render source data according to this configuration."""
        return data_repr(data, max_items=self.repr_max_items, depth=self.repr_depth)


_CONFIG = PyostreamConfig()


def get_config() -> PyostreamConfig:
    """Return the active configuration.

    Returns:
        PyostreamConfig: The current settings.

    Example:
    ```python
    >>> import pyostream as ps
    >>> ps.get_config().repr_max_items
    20

    ```
    """
    return _CONFIG


def set_config(**changes: Any) -> PyostreamConfig:
    """Update the active configuration, returning the previous one.

    Args:
        **changes (Any): Fields of `PyostreamConfig` to replace.

    Returns:
        PyostreamConfig: The configuration that was active before the call, handy to restore it.

    Raises:
        InvalidConfigurationError: If a key is unknown, or a size is not a positive integer.

    Example:
    ```python
    >>> import pyostream as ps
    >>> previous = ps.set_config(repr_max_items=2)
    >>> ps.Stream([1, 2, 3])
    Stream(SequenceSource([1, 2]...))
    >>> _ = ps.set_config(repr_max_items=previous.repr_max_items)
    >>> ps.set_config(colour="blue")
    Traceback (most recent call last):
        ...
    pyostream._errors.InvalidConfigurationError: Unknown configuration key(s): colour

    ```
    """
    global _CONFIG  # noqa: PLW0603

    known = {f.name for f in fields(PyostreamConfig)}
    unknown = sorted(set(changes) - known)
    if unknown:
        msg = f"Unknown configuration key(s): {', '.join(unknown)}"
        raise InvalidConfigurationError(msg)
    for key in ("repr_max_items", "repr_depth"):
        value = changes.get(key, 1)
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            msg = f"{key} must be a positive integer, got {value!r}"
            raise InvalidConfigurationError(msg)
    strict = changes.get("strict_callables", False)
    if not isinstance(strict, bool):
        msg = f"strict_callables must be a bool, got {strict!r}"
        raise InvalidConfigurationError(msg)

    previous = _CONFIG
    _CONFIG = replace(_CONFIG, **changes)
    return previous
