"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class EchoTuneError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(EchoTuneError):
    """Raised for issues related to configuration loading or validation."""


class DataDirectoryError(EchoTuneError):
    """Raised when the per-user data directory cannot be resolved or created."""


class FetchError(EchoTuneError):
    """Raised when a remote dataset cannot be downloaded due to a transport failure."""


class CatalogParseError(EchoTuneError):
    """Raised when a cached dataset is missing or does not match the expected shape."""


class PlayerNotFoundError(EchoTuneError):
    """Raised when no usable media player binary can be located."""


class SpawnError(EchoTuneError):
    """Raised when the external player process fails to start."""


class PlaybackError(EchoTuneError):
    """Raised when waiting on the running player process fails."""
