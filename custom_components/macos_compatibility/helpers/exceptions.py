"""Errors raised by the compatibility pipeline."""


class MacOSCompatibilityError(Exception):
    """Base class for all pipeline errors."""


class StorageError(MacOSCompatibilityError):
    """Cache directory or artifact could not be created, read or written."""


class NetworkError(MacOSCompatibilityError):
    """Feed request failed before any HTTP response was received."""


class NoDataError(MacOSCompatibilityError):
    """Neither the network nor the cache produced a feed body."""


class ParseError(MacOSCompatibilityError):
    """Feed body is not a well-formed SOFA document."""


class ConfigError(MacOSCompatibilityError):
    """Feed configuration file is invalid."""
