from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._option import Option
    from .traits import CollectorInstance, Puller

type PullFn[T] = Callable[[], Option[T]]
"""A bare zero-argument callable following the pull contract."""
type IntoPuller[T] = Puller[T] | Iterable[T] | PullFn[T] | None
"""Anything `into_puller` accepts."""
type Predicate[T] = Callable[[T], object]
"""A function whose result is tested for truthiness."""
type Collector[T, R] = Callable[[], CollectorInstance[T, R]]
"""A zero-argument factory creating a fresh collector instance."""
type Adapter[T, R] = Callable[[Puller[T]], Puller[R]]
"""A function wrapping a puller into another one, as returned by gatherers."""
