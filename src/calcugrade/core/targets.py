"""Back-solve the component scores a period still needs to reach a target final grade."""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from calcugrade.core.grades import FINALS_WEIGHT, MIDTERM_WEIGHT, Period, final_grade
from calcugrade.core.scores import (
    ATTENDANCE_WEIGHT,
    DEFAULT_MAX_SCORE,
    EXAM_WEIGHT,
    OUT_OF_TEN,
    PROBLEM_SET_WEIGHT,
    QUIZ_WEIGHT,
    PeriodInputs,
    adjusted_exam,
    adjusted_quiz,
    curve,
    normalize,
    uncurve,
    weighted_out_of_ten,
)


logger = logging.getLogger(__name__)

DEFAULT_TARGET_GRADE = 75.0
DEFAULT_ASSUMED_FINALS = 100.0

QUIZ_SLOTS = 2
PER_QUIZ_WEIGHT = QUIZ_WEIGHT / QUIZ_SLOTS

# fixed anchors used by the focus scenarios
FOCUS_EXAM_QUIZ_RATIO = 0.6
FOCUS_QUIZZES_EXAM_RATIO = 0.7

EXAM_LABEL = "Major Exam"

EVEN_DISTRIBUTION = "Even distribution across all missing components"
FOCUS_ON_EXAM = "Focus on Major Exam"
FOCUS_ON_QUIZZES = "Focus on Quizzes"

MSG_ALL_FILLED = "All fields are filled."
MSG_TARGET_REACHED = "All fields are filled and you've reached the target grade!"
MSG_TARGET_MISSED = "All fields are filled but you've only reached {final:.2f}%."
MSG_NO_MISSING = "No missing fields detected."
MSG_ON_TRACK = "You're already on track to reach the target grade!"
MSG_FINALS_IMPOSSIBLE = "Even with perfect finals scores, you can't reach the target grade."
MSG_MIDTERM_IMPOSSIBLE = "Even with perfect midterm scores, you'd need excellent finals to reach the target."
MSG_EXCEEDS_MAX = "Some required scores may exceed maximum possible scores."
MSG_HERE_ARE_SCORES = "Here are the scores you need to reach the target grade."


@dataclass(frozen=True)
class Scenario:
    description: str
    scores: Dict[str, str]
    is_possible: bool = True


@dataclass(frozen=True)
class TargetScoreReport:
    needed_scores: Dict[str, str] = field(default_factory=dict)
    is_possible: bool = True
    message: str = ""
    scenarios: List[Scenario] = field(default_factory=list)


@dataclass(frozen=True)
class _MissingSlot:
    label: str
    weight: float
    max_score: float
    is_exam: bool = False


def _slot_max(max_score: Optional[float]) -> float:
    if max_score is None or not math.isfinite(max_score) or max_score <= 0:
        return DEFAULT_MAX_SCORE
    return max_score


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def is_period_complete(inputs: PeriodInputs) -> bool:
    return all(quiz.is_present for quiz in inputs.quizzes) and inputs.exam.is_present


def required_contribution(
    period: Period,
    other_period_grade: float,
    target: float = DEFAULT_TARGET_GRADE,
    assumed_finals: float = DEFAULT_ASSUMED_FINALS,
) -> float:
    """
    Period grade this period must reach for the final grade to hit ``target``.

    The midterm is solved against ``assumed_finals``, never the current finals grade.
    """
    if period is Period.FINALS:
        return (target - other_period_grade * MIDTERM_WEIGHT) / FINALS_WEIGHT
    return (target - assumed_finals * FINALS_WEIGHT) / MIDTERM_WEIGHT


def current_contribution(inputs: PeriodInputs) -> float:
    present = [quiz for quiz in inputs.quizzes if quiz.is_present]
    quiz_part = 0.0
    if present:
        # each present quiz only owns its share of the quiz weight
        quiz_part = adjusted_quiz(
            [quiz.score for quiz in present],
            [quiz.max_score for quiz in present],
        ) * len(present) / QUIZ_SLOTS

    attendance = OUT_OF_TEN if inputs.attendance is None else inputs.attendance
    problem_set = OUT_OF_TEN if inputs.problem_set is None else inputs.problem_set

    return (
        quiz_part
        + adjusted_exam(inputs.exam.score, inputs.exam.max_score)
        + weighted_out_of_ten(attendance, ATTENDANCE_WEIGHT)
        + weighted_out_of_ten(problem_set, PROBLEM_SET_WEIGHT)
    )


def _missing_slots(inputs: PeriodInputs, period: Period) -> List[_MissingSlot]:
    slots = [
        _MissingSlot(period.quiz_label(index), PER_QUIZ_WEIGHT, _slot_max(quiz.max_score))
        for index, quiz in enumerate(inputs.quizzes)
        if not quiz.is_present
    ]
    if not inputs.exam.is_present:
        slots.append(_MissingSlot(EXAM_LABEL, EXAM_WEIGHT, _slot_max(inputs.exam.max_score), is_exam=True))
    return slots


def _needed_raw_score(contribution: float, slot: _MissingSlot) -> float:
    percentage = uncurve(contribution / slot.weight)
    return percentage / 100 * slot.max_score


def _ceil(value: float) -> int:
    # round first so float noise never bumps an exact requirement up a point
    return math.ceil(round(value, 9))


def _describe_needed(needed: float, max_score: float) -> Tuple[str, bool]:
    if math.isnan(needed) or round(needed, 9) >= max_score:
        return f"Max score needed ({_format_number(max_score)})", False
    if needed <= 0:
        return "No additional points needed", True
    ceiling = min(_ceil(needed), max_score)
    if ceiling <= 0:
        return "No additional points needed", True
    return f"{_format_number(ceiling)} out of {_format_number(max_score)}", True


def _fixed_score(slot: _MissingSlot, ratio: float) -> Tuple[float, float]:
    score = min(slot.max_score, _ceil(slot.max_score * ratio))
    return score, curve(normalize(score, slot.max_score)) * slot.weight


def _solve_slots(slots: List[_MissingSlot], shares: List[float], scores: Dict[str, str]) -> bool:
    is_possible = True
    for slot, share in zip(slots, shares):
        text, possible = _describe_needed(_needed_raw_score(share, slot), slot.max_score)
        scores[slot.label] = text
        is_possible = is_possible and possible
    return is_possible


def _even_distribution(slots: List[_MissingSlot], additional: float) -> Optional[Scenario]:
    total_weight = sum(slot.weight for slot in slots)
    if total_weight <= 0:
        return None
    scores: Dict[str, str] = {}
    shares = [additional * slot.weight / total_weight for slot in slots]
    is_possible = _solve_slots(slots, shares, scores)
    return Scenario(EVEN_DISTRIBUTION, scores, is_possible)


def _focus_on_exam(slots: List[_MissingSlot], additional: float) -> Scenario:
    scores: Dict[str, str] = {}
    remaining = additional
    for slot in slots:
        if slot.is_exam:
            continue
        score, contribution = _fixed_score(slot, FOCUS_EXAM_QUIZ_RATIO)
        scores[slot.label] = f"{_format_number(score)} out of {_format_number(slot.max_score)}"
        remaining -= contribution

    exam = [slot for slot in slots if slot.is_exam]
    is_possible = _solve_slots(exam, [remaining], scores)
    return Scenario(FOCUS_ON_EXAM, scores, is_possible)


def _focus_on_quizzes(slots: List[_MissingSlot], additional: float) -> Scenario:
    scores: Dict[str, str] = {}
    remaining = additional
    quizzes = [slot for slot in slots if not slot.is_exam]
    for slot in slots:
        if slot.is_exam:
            score, contribution = _fixed_score(slot, FOCUS_QUIZZES_EXAM_RATIO)
            scores[slot.label] = f"{_format_number(score)} out of {_format_number(slot.max_score)}"
            remaining -= contribution

    per_quiz = remaining / len(quizzes)
    is_possible = _solve_slots(quizzes, [per_quiz] * len(quizzes), scores)
    return Scenario(FOCUS_ON_QUIZZES, scores, is_possible)


def calculate_needed_scores(
    inputs: PeriodInputs,
    period: Period,
    other_period_grade: float,
    target: float = DEFAULT_TARGET_GRADE,
    assumed_finals: float = DEFAULT_ASSUMED_FINALS,
) -> TargetScoreReport:
    required = required_contribution(period, other_period_grade, target, assumed_finals)
    if required > 100:
        message = MSG_FINALS_IMPOSSIBLE if period is Period.FINALS else MSG_MIDTERM_IMPOSSIBLE
        return TargetScoreReport(is_possible=False, message=message)

    slots = _missing_slots(inputs, period)
    if not slots:
        return TargetScoreReport(message=MSG_ALL_FILLED)

    current = current_contribution(inputs)
    additional = max(0.0, required - current)
    logger.debug(
        "%s: required %.4f, current %.4f, additional %.4f",
        period.value,
        required,
        current,
        additional,
    )
    if additional <= 0:
        return TargetScoreReport(message=MSG_ON_TRACK)

    primary = _even_distribution(slots, additional)
    if primary is None:
        return TargetScoreReport(message=MSG_NO_MISSING)

    scenarios = [primary]
    if any(slot.is_exam for slot in slots):
        scenarios.append(_focus_on_exam(slots, additional))
    if any(not slot.is_exam for slot in slots):
        scenarios.append(_focus_on_quizzes(slots, additional))

    chosen = primary
    if not primary.is_possible:
        chosen = next((scenario for scenario in scenarios if scenario.is_possible), primary)

    message = MSG_HERE_ARE_SCORES if chosen.is_possible else MSG_EXCEEDS_MAX
    return TargetScoreReport(
        needed_scores=dict(chosen.scores),
        is_possible=chosen.is_possible,
        message=message,
        scenarios=scenarios,
    )


def calculate_points_needed(
    midterm: PeriodInputs,
    finals: PeriodInputs,
    midterm_grade: float,
    finals_grade: float,
    target: float = DEFAULT_TARGET_GRADE,
    assumed_finals: float = DEFAULT_ASSUMED_FINALS,
) -> TargetScoreReport:
    midterm_complete = is_period_complete(midterm)
    finals_complete = is_period_complete(finals)

    if midterm_complete and finals_complete:
        final = final_grade(midterm_grade, finals_grade)
        if final >= target:
            return TargetScoreReport(is_possible=True, message=MSG_TARGET_REACHED)
        return TargetScoreReport(is_possible=False, message=MSG_TARGET_MISSED.format(final=final))

    if not midterm_complete and finals_complete:
        return calculate_needed_scores(midterm, Period.MIDTERM, finals_grade, target, assumed_finals)

    if midterm_complete and not finals_complete:
        return calculate_needed_scores(finals, Period.FINALS, midterm_grade, target, assumed_finals)

    # solving both periods at once is not supported
    return TargetScoreReport(message=MSG_NO_MISSING)
