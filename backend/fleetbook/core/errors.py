"""Problem+JSON (RFC 7807) error responses for the booking API."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from fleetbook.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"
RATE_LIMITED_MESSAGE = "Too many requests, please try again later."

# Stable machine codes for the statuses this API emits
STATUS_CODES: dict[int, str] = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    413: "payload_too_large",
    415: "unsupported_media_type",
    429: "too_many_requests",
    500: "internal_server_error",
    503: "service_unavailable",
}


def code_for_status(status: int) -> str:
    return STATUS_CODES.get(status, "error")


def build_problem(
    status: int,
    message: str,
    *,
    code: str | None = None,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Assemble a problem document for the current request.

    The human-readable text is exposed twice: as ``detail`` (RFC 7807) and as
    ``message``, the key the booking clients read.

    :param status: HTTP status code.
    :param message: Client-safe summary.
    :param code: Machine code; derived from ``status`` when omitted.
    :param details: Optional structured context (validation messages).
    :returns: JSON-serializable problem document.
    """
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": message,
        "message": message,
        "instance": request.path if request else None,
        "code": code or code_for_status(status),
        "request_id": ensure_request_id(),
    }
    if details:
        problem["details"] = details
    return problem


def problem_response(
    status: int,
    message: str,
    *,
    code: str | None = None,
    details: dict[str, Any] | None = None,
    exc_info: bool = False,
) -> tuple[Response, int]:
    """Log and render a problem; 5xx at error level, everything else as a warning."""
    problem = build_problem(status, message, code=code, details=details)
    level = logging.ERROR if status >= 500 else logging.WARNING
    log.log(
        level,
        "request.failed code=%s status=%s msg=%s",
        problem["code"],
        status,
        message,
        exc_info=exc_info,
    )
    response = jsonify(problem)
    response.mimetype = PROBLEM_MIMETYPE
    return response, status


class APIError(Exception):
    """
    An error that already knows its HTTP shape.

    Parameters
    ----------
    message : str
        Client-safe description.
    status_code : int, optional
        HTTP status, ``400`` by default.
    code : str, optional
        Machine code; derived from ``status_code`` when omitted.
    details : dict[str, Any] | None, optional
        Structured context rendered under ``details``.
    """

    def __init__(
        self,
        message: str,
        status_code: int = HTTPStatus.BAD_REQUEST,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code or code_for_status(self.status_code)
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        return build_problem(
            self.status_code, self.message, code=self.code, details=self.details or None
        )


class BadRequest(APIError):
    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(message, HTTPStatus.BAD_REQUEST)


class Unauthorized(APIError):
    def __init__(self, message: str = "Not authorized") -> None:
        super().__init__(message, HTTPStatus.UNAUTHORIZED)


class Forbidden(APIError):
    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, HTTPStatus.FORBIDDEN)


class NotFound(APIError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, HTTPStatus.NOT_FOUND)


class Conflict(APIError):
    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, HTTPStatus.CONFLICT)


class ServiceUnavailable(APIError):
    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(message, HTTPStatus.SERVICE_UNAVAILABLE)


def init_app(app: Flask) -> None:
    """
    Register the problem+JSON handlers.

    Notes
    -----
    - Service errors go through
      :func:`fleetbook.services._shared.base.translate_service_error`.
    - Database and unexpected errors never leak their text to clients.
    """
    from fleetbook.services._shared.base import translate_service_error
    from fleetbook.services._shared.errors import ServiceError

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return problem_response(
            err.status_code, err.message, code=err.code, details=err.details or None
        )

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        return handle_api_error(translate_service_error(err))

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        elif status == HTTPStatus.TOO_MANY_REQUESTS:
            message = RATE_LIMITED_MESSAGE
        else:
            # werkzeug descriptions are prose; fall back to the status phrase
            message = (err.description or HTTPStatus(status).phrase).strip()
        return problem_response(status, message)

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: MarshmallowValidationError):
        return problem_response(
            HTTPStatus.BAD_REQUEST,
            "Validation failed",
            code="validation_error",
            details={"errors": err.normalized_messages()},
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        return problem_response(HTTPStatus.CONFLICT, "Resource conflict", exc_info=True)

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        return problem_response(
            HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable", exc_info=True
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        return problem_response(
            HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error", exc_info=True
        )
