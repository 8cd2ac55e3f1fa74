"""
도메인 공통: 점수/퍼센트 반올림 규칙

round()는 banker's rounding 이라 85.125 -> 85.12 가 된다.
성적 표기는 half-up 으로 고정한다.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 2) -> float:
    quant = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quant, rounding=ROUND_HALF_UP))


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def percent(part: float, whole: float, places: int = 2) -> float:
    """part / whole × 100. whole 이 0 이하이면 0 (0 나눗셈 없음)."""
    if whole <= 0:
        return 0.0
    return round_half_up(part / whole * 100, places)


def whole_percent(part: int, whole: int) -> int:
    """진행률용 정수 퍼센트 (0~100)."""
    if whole <= 0:
        return 0
    return int(clamp(round_half_up(part / whole * 100, 0)))
