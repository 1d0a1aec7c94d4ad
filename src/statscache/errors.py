"""Exception hierarchy for the stats cache proxy."""


class StatsCacheError(Exception):
    """Base class for all statscache errors."""

    pass


class ConfigError(StatsCacheError):
    """Raised when required configuration is missing or invalid."""

    pass


class FetchError(StatsCacheError):
    """
    Raised when the upstream stats API could not be fetched.

    The underlying httpx exception is chained as ``__cause__``.
    """

    pass


class TransportError(FetchError):
    """Upstream unreachable: DNS failure, refused connection or timeout."""

    pass


class BodyReadError(FetchError):
    """Connection succeeded but the response body could not be read or decoded."""

    pass
