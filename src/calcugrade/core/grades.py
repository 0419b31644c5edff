import math
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from calcugrade.core.scores import (
    ATTENDANCE_WEIGHT,
    PROBLEM_SET_WEIGHT,
    PeriodInputs,
    adjusted_exam,
    adjusted_quiz,
    weighted_out_of_ten,
)


MIDTERM_WEIGHT = 0.30
FINALS_WEIGHT = 0.70

FAILING_GPE = "5.00"

GPE_SCALE: List[Tuple[int, str]] = [
    (99, "1.00"),
    (96, "1.25"),
    (93, "1.50"),
    (90, "1.75"),
    (87, "2.00"),
    (84, "2.25"),
    (81, "2.50"),
    (78, "2.75"),
    (75, "3.00"),
]

GRADE_BANDS: List[Tuple[int, str]] = [
    (90, "excellent"),
    (80, "good"),
    (75, "needs_improvement"),
]


class Period(Enum):
    MIDTERM = "midterm"
    FINALS = "finals"

    @property
    def first_quiz_number(self) -> int:
        return 1 if self is Period.MIDTERM else 3

    def quiz_label(self, index: int) -> str:
        return f"Quiz {self.first_quiz_number + index}"


def period_grade(
    quiz_scores: Sequence[Optional[float]],
    quiz_max_scores: Sequence[Optional[float]],
    exam_score: Optional[float],
    exam_max_score: Optional[float],
    attendance: Optional[float],
    problem_set: Optional[float],
) -> float:
    """
    Weighted sum of a period's contributions.

    Not clamped: full credit on every component adds up to 117.5.
    """
    return (
        adjusted_quiz(quiz_scores, quiz_max_scores)
        + adjusted_exam(exam_score, exam_max_score)
        + weighted_out_of_ten(attendance, ATTENDANCE_WEIGHT)
        + weighted_out_of_ten(problem_set, PROBLEM_SET_WEIGHT)
    )


def calculate_period(inputs: PeriodInputs) -> float:
    return period_grade(
        inputs.quiz_scores,
        inputs.quiz_max_scores,
        inputs.exam.score,
        inputs.exam.max_score,
        inputs.attendance,
        inputs.problem_set,
    )


def final_grade(midterm: float, finals: float) -> float:
    return midterm * MIDTERM_WEIGHT + finals * FINALS_WEIGHT


def round_half_up(value: float) -> int:
    # nan and inf have no band; they grade as 0
    if not math.isfinite(value):
        return 0
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_gpe(final: float) -> str:
    rounded = round_half_up(final)
    for threshold, gpe in GPE_SCALE:
        if rounded >= threshold:
            return gpe
    return FAILING_GPE


def grade_band(final: float) -> str:
    rounded = round_half_up(final)
    for threshold, band in GRADE_BANDS:
        if rounded >= threshold:
            return band
    return "failed"


def format_final_grade(final: float) -> str:
    return f"{round_half_up(final)} ({final:.2f})"
