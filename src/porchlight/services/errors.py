"""Domain errors raised by the service layer.

Endpoints translate these into HTTP responses; services stay unaware of HTTP.
"""


class ServiceError(Exception):
    """Base class for service-level failures."""


class NotFoundError(ServiceError):
    """Raised when a requested record does not exist."""


class PermissionDeniedError(ServiceError):
    """Raised when the caller may not act on a record."""


class InvalidRequestError(ServiceError):
    """Raised when a request is well-formed but cannot be honored."""
