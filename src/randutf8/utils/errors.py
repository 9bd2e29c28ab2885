"""Typed exceptions raised by the generator and its configuration layer."""


class RandUtf8Error(Exception):
    """Base class for package errors."""


class InvalidLengthError(RandUtf8Error, ValueError):
    """Raised when a requested byte length is negative."""


class ConfigError(RandUtf8Error):
    """Raised when a configuration source cannot be read or interpreted."""
