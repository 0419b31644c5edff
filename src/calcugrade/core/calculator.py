import logging
from dataclasses import dataclass

from calcugrade.core.grades import calculate_period, final_grade, format_final_grade, round_half_up, to_gpe
from calcugrade.core.scores import PeriodInputs
from calcugrade.core.targets import (
    DEFAULT_ASSUMED_FINALS,
    DEFAULT_TARGET_GRADE,
    TargetScoreReport,
    calculate_points_needed,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradeSummary:
    midterm: float
    finals: float
    final_grade: float
    gpe: str
    targets: TargetScoreReport

    @property
    def rounded_final(self) -> int:
        return round_half_up(self.final_grade)

    @property
    def formatted_final(self) -> str:
        return format_final_grade(self.final_grade)


def calculate_grades(
    midterm: PeriodInputs,
    finals: PeriodInputs,
    target: float = DEFAULT_TARGET_GRADE,
    assumed_finals: float = DEFAULT_ASSUMED_FINALS,
) -> GradeSummary:
    """Run every calculation on one input snapshot."""
    midterm_grade = calculate_period(midterm)
    finals_grade = calculate_period(finals)
    final = final_grade(midterm_grade, finals_grade)
    targets = calculate_points_needed(midterm, finals, midterm_grade, finals_grade, target, assumed_finals)

    logger.debug(
        "midterm=%.2f finals=%.2f final=%.2f possible=%s",
        midterm_grade,
        finals_grade,
        final,
        targets.is_possible,
    )
    return GradeSummary(
        midterm=midterm_grade,
        finals=finals_grade,
        final_grade=final,
        gpe=to_gpe(final),
        targets=targets,
    )
