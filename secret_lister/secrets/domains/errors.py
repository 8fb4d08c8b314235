"""Error taxonomy for secret listing.

Every failure a run can hit is terminal. SDK exceptions are chained onto these
so the CLI can report one message and exit non-zero.
"""


class ListerError(Exception):
    """Base class for all secret-lister errors."""
    pass


class ConfigError(ListerError):
    """Configuration file is unreadable or invalid."""
    pass


class MissingConfiguration(ListerError):
    """No endpoint was given on the command line, in the environment or in config."""
    pass


class AuthenticationError(ListerError):
    """Credential could not be acquired or was rejected by the service."""
    pass


class ClientConstructionError(ListerError):
    """Secret store client could not be built for the endpoint."""
    pass


class RequestError(ListerError):
    """Listing request or a page fetch failed."""
    pass


class MalformedResponseError(ListerError):
    """A listed item did not carry a usable resource identifier."""
    pass
