# PATH: apps/api/common/exceptions.py
"""
coursework 도메인 오류 → DRF Response

- NotFoundError           → 404
- ConflictError           → 409
- ValidationError         → 400 (errors 목록 포함)
- PreconditionFailedError → 412
그 외 예외는 DRF 기본 handler 로 넘긴다.

응답 계약: {"detail": str, "code": str, "errors"?: [str]}
"""
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from coursework.domain.shared.errors import (
    ConflictError,
    CourseworkError,
    NotFoundError,
    PreconditionFailedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (PreconditionFailedError, status.HTTP_412_PRECONDITION_FAILED),
)


def status_for(exc: CourseworkError) -> int:
    for cls, code in STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return code
    return status.HTTP_400_BAD_REQUEST


def error_payload(exc: CourseworkError) -> dict:
    data = {"detail": exc.message, "code": exc.code}
    if exc.errors:
        data["errors"] = list(exc.errors)
    return data


def coursework_exception_handler(exc, context):
    if isinstance(exc, CourseworkError):
        code = status_for(exc)
        if code >= 409:
            logger.info("[api] %s %s: %s", code, exc.code, exc.message)
        return Response(error_payload(exc), status=code)
    return exception_handler(exc, context)


def flatten_errors(detail, prefix: str = "") -> list[str]:
    """serializer.errors (중첩 dict/list) → "field: message" 목록."""
    if isinstance(detail, dict):
        out: list[str] = []
        for key, value in detail.items():
            name = key if key != "non_field_errors" else ""
            out.extend(flatten_errors(value, f"{prefix}{name}"))
        return out
    if isinstance(detail, (list, tuple)):
        out = []
        for item in detail:
            out.extend(flatten_errors(item, prefix))
        return out
    return [f"{prefix}: {detail}" if prefix else str(detail)]


def validate_or_raise(serializer, message: str = "Invalid request"):
    """DRF serializer 검증 실패를 도메인 ValidationError 로 변환."""
    if not serializer.is_valid():
        raise ValidationError(message, errors=flatten_errors(serializer.errors))
    return serializer.validated_data
