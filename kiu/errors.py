"""Errors that stop a kiu run before any prediction is printed."""


class KiuError(Exception):
    """Base class for fatal, user-facing errors."""


class ConfigError(KiuError):
    """Configuration file missing, unparseable, or holding bad values."""


class CorpusSourceError(KiuError):
    """Chat export archive missing, unreadable, or lacking a page."""


class EmptyInputError(KiuError):
    """The message to attribute is absent or blank."""
