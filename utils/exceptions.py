"""
Error taxonomy shared by the models, the notification dispatcher and the API.

Every error carries a user-facing ``message``. The application error
handlers in app.py map each class to an HTTP status.
"""


class ReservationSystemError(Exception):
    """Base class for all domain errors."""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ReservationSystemError, ValueError):
    """Malformed or missing input; rejected before any mutation."""


class InvalidStateTransitionError(ValidationError):
    """A status or attendance change the lifecycle does not allow."""


class ConflictError(ReservationSystemError):
    """Duplicate block, duplicate username, blocked slot or concurrent edit."""

    status_code = 409


class NotFoundError(ReservationSystemError, LookupError):
    """Referenced record does not exist."""

    status_code = 404


class AuthorizationError(ReservationSystemError):
    """Action attempted without the required permission."""

    status_code = 403


class NotificationError(ReservationSystemError):
    """Base class for channel adapter failures."""

    def __init__(self, message: str, provider: str = 'unknown'):
        self.provider = provider
        super().__init__(message)


class ConfigurationError(NotificationError):
    """A channel has no provider or the provider lacks credentials."""


class DeliveryError(NotificationError):
    """The provider was invoked but the send failed."""
