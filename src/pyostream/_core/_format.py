from collections.abc import Sequence
from pprint import pformat
from typing import Any


def data_repr(
    v: Any,
    max_items: int = 20,
    depth: int = 3,
    width: int = 80,
    *,
    compact: bool = True,
) -> str:
    """Render source data for a puller repr, truncated to `max_items` elements."""
    match v:
        case str():
            suffix = "..." if len(v) > max_items else ""
            return repr(v[:max_items]) + suffix
        case list() | tuple():
            truncated: Sequence[Any] = v[:max_items]
            suffix = "..." if len(v) > max_items else ""
            return pformat(truncated, depth=depth, width=width, compact=compact) + suffix
        case _:
            return pformat(v, depth=depth, width=width, compact=compact)
