"""
코스 성적 가중치 검증

불변식: assignment + activity + exam == 100, 각 값은 0~100 정수.
검증은 쓰기 전에 끝낸다. 잘못된 값은 DB에 도달하지 않는다.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from coursework.domain.shared.errors import ValidationError

WEIGHT_FIELDS = ("assignment_weight", "activity_weight", "exam_weight")

DEFAULT_GRADE_WEIGHTS: Mapping[str, int] = {
    "assignment": 40,
    "activity": 30,
    "exam": 30,
}


@dataclass(frozen=True)
class WeightsInput:
    assignment_weight: int
    activity_weight: int
    exam_weight: int


def _as_weight(name: str, value: Any, errors: list[str]) -> int | None:
    if isinstance(value, bool) or value is None:
        errors.append(f"{name} must be an integer between 0 and 100")
        return None
    if isinstance(value, float) and not value.is_integer():
        errors.append(f"{name} must be an integer between 0 and 100")
        return None
    try:
        weight = int(value)
    except (TypeError, ValueError):
        errors.append(f"{name} must be an integer between 0 and 100")
        return None
    if weight < 0 or weight > 100:
        errors.append(f"{name} must be between 0 and 100 (got {weight})")
        return None
    return weight


def validate_grade_weights(raw: Mapping[str, Any] | WeightsInput) -> WeightsInput:
    if isinstance(raw, WeightsInput):
        raw = {f: getattr(raw, f) for f in WEIGHT_FIELDS}

    errors: list[str] = []
    values: dict[str, int] = {}
    for name in WEIGHT_FIELDS:
        if name not in raw:
            errors.append(f"{name} is required")
            continue
        weight = _as_weight(name, raw[name], errors)
        if weight is not None:
            values[name] = weight

    if errors:
        raise ValidationError("Invalid grade weights: " + "; ".join(errors), errors=errors)

    total = sum(values.values())
    if total != 100:
        message = f"Grade weights must sum to 100. Current sum: {total}"
        raise ValidationError(message, errors=[message])

    return WeightsInput(**values)


def default_weights_input(defaults: Mapping[str, int] | None = None) -> WeightsInput:
    """설정값(COURSEWORK_DEFAULT_GRADE_WEIGHTS)도 같은 불변식으로 검증한다."""
    d = dict(DEFAULT_GRADE_WEIGHTS if defaults is None else defaults)
    return validate_grade_weights(
        {
            "assignment_weight": d.get("assignment"),
            "activity_weight": d.get("activity"),
            "exam_weight": d.get("exam"),
        }
    )
