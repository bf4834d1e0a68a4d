"""
Exceptions raised by the client metadata package.

Only two things can actually fail here:
 - opening the GeoIP database at startup (ResourceUnavailable)
 - writing a login tracking row (PersistenceFailure)
Everything else on the request path falls back to "Unknown" or "".
"""


class ClientMetaError(Exception):
    """Base class for errors raised by clientmeta."""


class ResourceUnavailable(ClientMetaError):
    """The GeoIP database file could not be opened or is not a MaxMind DB."""

    def __init__(self, path, cause=None):
        self.path = path
        self.cause = cause
        message = f"GeoIP database unavailable at {path!r}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class PersistenceFailure(ClientMetaError):
    """The login tracking insert did not complete."""

    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"Failed to insert login tracking: {cause}")
