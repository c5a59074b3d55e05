"""Helpers shared by the Flask controllers."""

from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from functools import wraps
from typing import Any, Optional

from flask import Flask, current_app, jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    DomainError,
    DuplicateCodeError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from ..teachers.model import TeacherSession
from .datetime_utils import parse_iso_date, today

logger = logging.getLogger(__name__)

_STATUS_CODES = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (DuplicateCodeError, 409),
    (StorageError, 409),
)


def to_json(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return to_json(asdict(value))
    if isinstance(value, dict):
        return {str(k): to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def ok(message: str = "", **payload):
    body = {"success": True}
    if message:
        body["message"] = message
    body.update({k: to_json(v) for k, v in payload.items()})
    return jsonify(body)


def fail(message: str, status: int = 400, **payload):
    body = {"success": False, "message": message}
    body.update({k: to_json(v) for k, v in payload.items()})
    return jsonify(body), status


def current_teacher() -> Optional[TeacherSession]:
    if "teacher_id" not in session:
        return None
    return TeacherSession(
        teacher_id=int(session["teacher_id"]),
        email=session.get("email", ""),
        full_name=session.get("name", ""),
    )


def start_session(teacher: TeacherSession) -> None:
    session.clear()
    session["teacher_id"] = teacher.teacher_id
    session["email"] = teacher.email
    session["name"] = teacher.full_name


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        teacher = current_teacher()
        if teacher is None:
            return fail("Please sign in to continue", 401)
        return view(teacher, *args, **kwargs)

    return wrapper


def payload() -> dict:
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form.to_dict()


def int_field(data: dict, name: str) -> int:
    try:
        return int(data.get(name))
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid {name}", {name: "Must be a whole number"}) from exc


def day_arg(name: str = "date", default: Optional[date] = None) -> date:
    raw = request.args.get(name) or payload().get(name)
    if not raw:
        return default or today()
    try:
        return parse_iso_date(str(raw)[:10])
    except ValueError as exc:
        raise ValidationError(f"Invalid date: {raw}", {name: "Use the YYYY-MM-DD format"}) from exc


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        status = next((code for kind, code in _STATUS_CODES if isinstance(exc, kind)), 400)
        errors = getattr(exc, "errors", None)
        if errors:
            return fail(str(exc), status, errors=errors)
        return fail(str(exc), status)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        # Let Flask render its own HTTP errors (404 routes, 405 methods, ...).
        code = getattr(exc, "code", None)
        if isinstance(code, int) and 400 <= code < 600 and hasattr(exc, "get_response"):
            return fail(getattr(exc, "description", str(exc)), code)
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        message = str(exc) if current_app.config.get("DEBUG") else "Internal server error"
        return fail(message, 500)
