"""Error taxonomy shared by the services and the HTTP layer."""

from __future__ import annotations

from typing import Any, Dict, Optional

from flask import Flask, current_app, jsonify
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge


class AppError(Exception):
    """Base class for failures reported to the caller as reason + message."""

    reason = "internal_error"
    status_code = 500
    default_message = "Internal server error. Please try again later."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "reason": self.reason}


class InvalidCredentials(AppError):
    reason = "invalid_credentials"
    status_code = 401
    default_message = "Invalid credentials"


class Unauthenticated(AppError):
    reason = "unauthenticated"
    status_code = 401
    default_message = "Authentication required"


class MissingRequiredField(AppError):
    reason = "missing_required_field"
    status_code = 400

    def __init__(self, field: str, message: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message or f"Please fill in all required fields. Missing: {field}.")

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["field"] = self.field
        return payload


class ConsentRequired(AppError):
    reason = "consent_required"
    status_code = 400
    default_message = "Please confirm your consent to be contacted about opportunities."


class FileRequired(AppError):
    reason = "file_required"
    status_code = 400
    default_message = "Please upload your resume."


class FileTooLarge(AppError):
    reason = "file_too_large"
    status_code = 400
    default_message = "Resume exceeds the 5 MB size limit."


class UnsupportedFileType(AppError):
    reason = "unsupported_file_type"
    status_code = 400
    default_message = "Only PDF, DOC, and DOCX files are allowed!"


class RequestTooLarge(AppError):
    reason = "request_too_large"
    status_code = 413
    default_message = "The submitted form is too large."


class InvalidFieldValue(AppError):
    reason = "invalid_field_value"
    status_code = 400

    def __init__(self, field: str, message: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message or f"Field {field} may not contain line breaks.")

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["field"] = self.field
        return payload


class DeliveryFailed(AppError):
    reason = "delivery_failed"
    status_code = 500
    default_message = "We could not send your application. Please try again later."


class InternalError(AppError):
    pass


def register_error_handlers(app: Flask) -> None:
    """Render taxonomy errors and unexpected failures as JSON responses."""

    @app.errorhandler(AppError)
    def _handle_app_error(error: AppError):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(RequestEntityTooLarge)
    def _handle_too_large(error: RequestEntityTooLarge):
        rejection = RequestTooLarge()
        return jsonify(rejection.to_dict()), rejection.status_code

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):
        if isinstance(error, HTTPException):
            return error
        current_app.logger.error("Unhandled error while processing request", exc_info=error)
        return jsonify(InternalError().to_dict()), InternalError.status_code
