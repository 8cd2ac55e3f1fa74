"""
가중 평균 성적 계산기

✅ 재정규화 규칙
- total > 0 인 카테고리만 average × (weight/100) 을 더하고 weight 를 누적
- 콘텐츠 없는 카테고리는 가중치째 제외 (예: 시험이 아직 없는 코스는 시험 가중치로 감점되지 않음)
- 0 < 사용 가중치 < 100 이면 (합 / 사용 가중치) × 100
- 사용 가중치 == 100 이면 그대로 (이미 유효한 퍼센트)
- 사용 가중치 == 0 이면 0
- 소수 2자리 반올림 후 [0, 100] clamp
- 문자 등급은 반올림 전 값에 매핑 (92.996 -> A-, 표기는 93.0)
"""
from __future__ import annotations

from coursework.domain.grading.entities import (
    CATEGORIES,
    CategoryGrades,
    GradeSummary,
    GradeWeights,
)
from coursework.domain.grading.letters import LetterGradeMapper
from coursework.domain.shared.numbers import clamp, round_half_up


class WeightedGradeCalculator:
    def __init__(self, letter_mapper: LetterGradeMapper | None = None) -> None:
        self._letters = letter_mapper or LetterGradeMapper()

    def raw_overall(self, category_grades: CategoryGrades, weights: GradeWeights) -> float:
        """반올림 전 가중 평균 ([0, 100] clamp). 문자 등급은 이 값으로 매긴다."""
        running = 0.0
        weight_used = 0

        for category in CATEGORIES:
            grade = category_grades.get(category)
            if not grade.has_content:
                continue
            weight = weights.weight_for(category)
            running += grade.average * (weight / 100)
            weight_used += weight

        if weight_used <= 0:
            return 0.0
        if weight_used < 100:
            running = (running / weight_used) * 100

        return clamp(running)

    def overall(self, category_grades: CategoryGrades, weights: GradeWeights) -> float:
        return clamp(round_half_up(self.raw_overall(category_grades, weights), 2))

    def summarize(self, category_grades: CategoryGrades, weights: GradeWeights) -> GradeSummary:
        raw = self.raw_overall(category_grades, weights)
        return GradeSummary(
            overall_grade=clamp(round_half_up(raw, 2)),
            category_grades=category_grades,
            grade_weights=weights,
            letter_grade=self._letters.map(raw),
        )
