"""Error taxonomy for the presence subsystem.

Every error carries the HTTP status it maps to so that the web adapter can
render it without knowing the concrete type.
"""


class DogParkError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(DogParkError):
    """Malformed or missing input."""

    status_code = 400


class NotFoundError(DogParkError):
    """A park or dog id does not resolve."""

    status_code = 404


class AuthorizationError(DogParkError):
    """Missing or invalid credentials (401/403), or a dog not owned by the caller (403)."""

    status_code = 403


class TransientIOError(DogParkError):
    """Store or network failure during a read or write. Not retried."""

    status_code = 500


class BroadcastDeliveryError(DogParkError):
    """Failure to push a payload to a single subscriber handle.

    Never surfaced to the caller of a mutating endpoint.
    """

    status_code = 500
