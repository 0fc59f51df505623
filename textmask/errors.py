"""Exception types raised by the masking core."""


class MaskError(Exception):
    """Base class for all masking errors."""


class ConfigurationError(MaskError, ValueError):
    """Mask, delimiters or text do not fit together."""


class ReentrantEditError(MaskError, RuntimeError):
    """An edit was dispatched from inside a change notification."""
