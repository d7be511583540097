"""
Error hierarchy shared by all Celestia modules.

Module exceptions subclass one of the categories below. Each category
carries the HTTP status used when a route lets the error escape to the
application-level handler.
"""

from typing import Optional, Any


class CelestiaError(Exception):
    """Root of every domain error raised by the backend."""

    http_status: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Body in the shape of ``api.models.ErrorResponse``."""
        return {
            "error": self.code,
            "detail": self.message,
            "code": self.code,
        }


class NotFoundError(CelestiaError):
    """A profile or stored object does not exist."""

    http_status = 404


class ConflictError(CelestiaError):
    """A write collided with existing state."""

    http_status = 409


class ValidationError(CelestiaError):
    """Caller-supplied data was rejected."""

    http_status = 400


class AuthenticationError(CelestiaError):
    """Missing, expired or unverifiable credentials."""

    http_status = 401


class AuthorizationError(CelestiaError):
    """The caller is signed in but not allowed to do this."""

    http_status = 403


class ExternalServiceError(CelestiaError):
    """A dependency outside the process misbehaved."""

    http_status = 502

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class UpstreamFailureError(ExternalServiceError):
    """
    A store or network call failed.

    Single-shot reads and writes are not retried; the caller surfaces a
    generic failure and the user repeats the action.
    """

    def __init__(
        self,
        message: str,
        service: str = "supabase",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, service, code="UPSTREAM_FAILURE", details=details)
