from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthorizationError,
    ConstraintViolation,
    DuplicatePeriodError,
    NotFoundError,
    PartialReconciliationFailure,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong, please try again"


def ok(data=None, status: int = 200, **meta):
    payload = {"success": True, "data": data}
    if meta:
        payload["meta"] = meta
    return jsonify(payload), status


def fail(message: str = "Bad Request", status: int = 400, code: str | None = None, detail=None):
    err: dict = {"message": message}
    if code:
        err["code"] = code
    if detail is not None:
        err["detail"] = detail
    return jsonify({"success": False, "error": err}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return fail(str(e), status=400, code="VALIDATION_ERROR")

    @app.errorhandler(AuthorizationError)
    def _forbidden(e: AuthorizationError):
        return fail(str(e), status=403, code="FORBIDDEN")

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return fail(str(e), status=404, code="NOT_FOUND")

    @app.errorhandler(DuplicatePeriodError)
    def _duplicate_period(e: DuplicatePeriodError):
        return fail(str(e), status=409, code="DUPLICATE_PERIOD")

    @app.errorhandler(ConstraintViolation)
    def _constraint(e: ConstraintViolation):
        return fail("Record already exists", status=409, code="CONSTRAINT_VIOLATION")

    @app.errorhandler(PartialReconciliationFailure)
    def _partial(e: PartialReconciliationFailure):
        return fail(str(e), status=207, code="PARTIAL_RECONCILIATION", detail=e.result.to_dict())

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return fail(e.description or e.name, status=e.code or 500)

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):
        logger.exception("Unhandled error")
        return fail(GENERIC_ERROR, status=500, code="INTERNAL_ERROR")
