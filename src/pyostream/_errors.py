class PyostreamError(Exception): ...


class UnsupportedSourceKindError(PyostreamError, TypeError):
    """Raised when a value cannot be turned into a puller."""


class InvalidConfigurationError(PyostreamError, ValueError):
    """Raised for invalid gatherer sizes and configuration values."""
