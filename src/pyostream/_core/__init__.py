from ._config import PyostreamConfig, get_config, set_config
from ._depreciation import deprecated
from ._main import CommonBase, Pipeable

__all__ = [
    "CommonBase",
    "Pipeable",
    "PyostreamConfig",
    "deprecated",
    "get_config",
    "set_config",
]
