class MarketPulseError(Exception):
    """Base exception for application-level errors."""


class SourceUnavailableError(MarketPulseError):
    """Raised when a feed source fails, times out or returns a non-2xx status."""


class UpstreamNotFoundError(MarketPulseError):
    """Raised when the quote provider reports that a symbol does not exist."""


class UpstreamError(MarketPulseError):
    """Raised when the quote provider fails for any other reason."""


class ProviderNotFoundError(MarketPulseError):
    """Raised when a provider id cannot be resolved."""


class ValidationError(MarketPulseError):
    """Raised when request input fails domain-level validation."""
