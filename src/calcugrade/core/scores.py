from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


CURVE_SLOPE = 0.5
CURVE_FLOOR = 50.0

QUIZ_WEIGHT = 0.35
EXAM_WEIGHT = 0.45
ATTENDANCE_WEIGHT = 0.10
PROBLEM_SET_WEIGHT = 0.10

OUT_OF_TEN = 10.0
DEFAULT_MAX_SCORE = 100.0


@dataclass(frozen=True)
class ComponentScore:
    score: Optional[float] = None
    max_score: Optional[float] = DEFAULT_MAX_SCORE

    @property
    def is_present(self) -> bool:
        return self.score is not None


@dataclass(frozen=True)
class PeriodInputs:
    quizzes: Tuple[ComponentScore, ComponentScore]
    exam: ComponentScore
    attendance: Optional[float] = None
    problem_set: Optional[float] = None

    @classmethod
    def empty(cls) -> "PeriodInputs":
        return cls(quizzes=(ComponentScore(), ComponentScore()), exam=ComponentScore())

    @property
    def quiz_scores(self) -> Tuple[Optional[float], ...]:
        return tuple(quiz.score for quiz in self.quizzes)

    @property
    def quiz_max_scores(self) -> Tuple[Optional[float], ...]:
        return tuple(quiz.max_score for quiz in self.quizzes)


def _has_max(max_score: Optional[float]) -> bool:
    return max_score is not None and max_score > 0


def normalize(score: Optional[float], max_score: Optional[float]) -> float:
    if score is None or not _has_max(max_score):
        return 0.0
    return (score / max_score) * 100


def curve(percentage: float) -> float:
    """Leniency curve: a raw 0% still maps to 50%."""
    return percentage * CURVE_SLOPE + CURVE_FLOOR


def uncurve(adjusted: float) -> float:
    return (adjusted - CURVE_FLOOR) / CURVE_SLOPE


def adjusted_quiz(scores: Sequence[Optional[float]], max_scores: Sequence[Optional[float]]) -> float:
    """
    Curved quiz average scaled by the quiz weight.

    All-or-nothing: any missing score or unusable max excludes the quizzes entirely.
    """
    if not scores or len(max_scores) < len(scores):
        return 0.0
    if any(score is None for score in scores):
        return 0.0
    if any(not _has_max(max_scores[index]) for index in range(len(scores))):
        return 0.0

    percentages = [normalize(score, max_scores[index]) for index, score in enumerate(scores)]
    average = sum(percentages) / len(percentages)
    return curve(average) * QUIZ_WEIGHT


def adjusted_exam(score: Optional[float], max_score: Optional[float]) -> float:
    if score is None or not _has_max(max_score):
        return 0.0
    return curve(normalize(score, max_score)) * EXAM_WEIGHT


def weighted_out_of_ten(value: Optional[float], weight: float) -> float:
    # attendance and problem set are weighted, never curved
    if value is None:
        return 0.0
    return (value / OUT_OF_TEN * 100) * weight
