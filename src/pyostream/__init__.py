import logging

from . import collectors, fn, gatherers, traits
from ._core import PyostreamConfig, get_config, set_config
from ._errors import InvalidConfigurationError, PyostreamError, UnsupportedSourceKindError
from ._option import NONE, NoneOption, Option, OptionUnwrapError, Some
from ._source import SourceKind, into_puller
from ._stream import Stream

__all__ = [
    "NONE",
    "InvalidConfigurationError",
    "NoneOption",
    "Option",
    "OptionUnwrapError",
    "PyostreamConfig",
    "PyostreamError",
    "SourceKind",
    "Some",
    "Stream",
    "UnsupportedSourceKindError",
    "collectors",
    "fn",
    "gatherers",
    "get_config",
    "into_puller",
    "set_config",
    "traits",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
