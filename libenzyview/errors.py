"""Exception types raised by libenzyview."""


class EnzyViewError(Exception):
    """Base class for all libenzyview errors."""


class ConfigurationError(EnzyViewError, ValueError):
    """Unknown mechanism key or a missing mechanism parameter."""


class UnsupportedModelError(EnzyViewError):
    """The CSTR design function is not monotonic for this model/parameter combination."""
