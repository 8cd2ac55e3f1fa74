"""
도메인 공통: 식별자 검증 (외부 라이브러리 없음)
"""
from __future__ import annotations

import uuid
from typing import Any, Mapping

from coursework.domain.shared.errors import ValidationError


def parse_uuid(value: Any, label: str = "ID") -> uuid.UUID:
    """UUID 문자열/객체를 uuid.UUID로. 형식 오류면 ValidationError."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except (AttributeError, TypeError, ValueError):
        raise ValidationError(f"Invalid {label} format: {value!r}")


def parse_uuids(values: Mapping[str, Any]) -> dict[str, uuid.UUID]:
    """
    {label: value} 를 한꺼번에 검증.
    실패한 항목을 모두 모아서 하나의 ValidationError로 던진다.
    """
    parsed: dict[str, uuid.UUID] = {}
    errors: list[str] = []
    for label, value in values.items():
        try:
            parsed[label] = parse_uuid(value, label)
        except ValidationError as e:
            errors.append(e.message)
    if errors:
        raise ValidationError("; ".join(errors), errors=errors)
    return parsed
