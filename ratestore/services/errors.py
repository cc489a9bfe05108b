"""Service-layer error taxonomy; each error maps onto one HTTP status."""


class ServiceError(Exception):
    """Base for errors reported to API callers as {"error": message}."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ServiceError):
    """Malformed or out-of-range input."""

    status_code = 400


class Unauthenticated(ServiceError):
    """No session, an invalid or expired token, or bad credentials."""

    status_code = 401


class Forbidden(ServiceError):
    """Valid session whose role does not match the route's requirement."""

    status_code = 403


class NotFound(ServiceError):
    """Referenced entity does not exist."""

    status_code = 404


class Conflict(ServiceError):
    """Duplicate value for a unique field."""

    status_code = 409


class InternalError(ServiceError):
    """Unexpected persistence or runtime failure; message is safe to show."""

    status_code = 500
