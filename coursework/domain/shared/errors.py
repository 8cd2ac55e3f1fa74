"""
도메인 공통 오류: 순수 파이썬

- NotFoundError: 대상 없음 / 소유권 없음 (두 경우를 구분하지 않음. 존재 여부 노출 방지)
- ConflictError: 이미 존재 (인증서 중복 등)
- ValidationError: 범위 밖 값, 잘못된 식별자, 가중치 합계 오류
- PreconditionFailedError: 이전 레슨 미완료 상태에서 다음 레슨 완료 시도

HTTP 매핑은 apps.api.common.exceptions 에서 수행한다.
"""
from __future__ import annotations

from typing import Optional, Sequence


class CourseworkError(Exception):
    """coursework 도메인 오류 베이스."""

    code = "error"

    def __init__(self, message: str, errors: Optional[Sequence[str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors: list[str] = list(errors or [])

    def __str__(self) -> str:
        return self.message


class NotFoundError(CourseworkError):
    code = "not_found"


class ConflictError(CourseworkError):
    code = "conflict"


class ValidationError(CourseworkError):
    code = "validation_error"


class PreconditionFailedError(CourseworkError):
    code = "precondition_failed"
