from __future__ import annotations

from typing import Sequence, Tuple

# (최소 퍼센트, 등급): 위에서부터 첫 매칭
LETTER_GRADE_THRESHOLDS: Tuple[Tuple[float, str], ...] = (
    (97, "A+"),
    (93, "A"),
    (90, "A-"),
    (87, "B+"),
    (83, "B"),
    (80, "B-"),
    (77, "C+"),
    (73, "C"),
    (70, "C-"),
    (67, "D+"),
    (63, "D"),
    (60, "D-"),
)

FAILING_LETTER = "F"


class LetterGradeMapper:
    def __init__(self, thresholds: Sequence[Tuple[float, str]] = LETTER_GRADE_THRESHOLDS) -> None:
        self._thresholds = tuple(thresholds)

    def map(self, percentage: float) -> str:
        for minimum, letter in self._thresholds:
            if percentage >= minimum:
                return letter
        return FAILING_LETTER
