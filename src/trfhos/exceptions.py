"""Custom exceptions for trf-hos-finder."""


class TrfHosError(Exception):
    """Base exception for all trf-hos-finder errors."""

    pass


class ConfigurationError(TrfHosError):
    """Raised when configuration is invalid or missing."""

    pass


class InputError(TrfHosError):
    """Raised when the TRF .dat input cannot be opened or read."""

    def __init__(self, message="", path=None):
        """Initialize InputError with the offending path.

        Args:
            message: Error message
            path: Input path that failed to open
        """
        super().__init__(message)
        self.path = path
