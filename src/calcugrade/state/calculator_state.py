import math
from dataclasses import dataclass, field
from typing import List, Optional

from calcugrade.core.calculator import GradeSummary, calculate_grades
from calcugrade.core.scores import DEFAULT_MAX_SCORE, ComponentScore, PeriodInputs
from calcugrade.core.targets import DEFAULT_ASSUMED_FINALS, DEFAULT_TARGET_GRADE


QUIZ_FIELDS = ("quiz_scores", "quiz_max_scores")
SCALAR_FIELDS = ("exam_score", "exam_max_score", "attendance", "problem_set")


def parse_score(raw: Optional[str]) -> Optional[float]:
    """Blank input means the score is absent. Non-numeric or non-finite input raises ValueError."""
    text = (raw or "").strip()
    if not text:
        return None
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Not a finite number: {text}")
    return value


def _default_quiz_scores() -> List[Optional[float]]:
    return [None, None]


def _default_quiz_max_scores() -> List[Optional[float]]:
    return [DEFAULT_MAX_SCORE, DEFAULT_MAX_SCORE]


@dataclass
class PeriodState:
    quiz_scores: List[Optional[float]] = field(default_factory=_default_quiz_scores)
    quiz_max_scores: List[Optional[float]] = field(default_factory=_default_quiz_max_scores)
    exam_score: Optional[float] = None
    exam_max_score: Optional[float] = DEFAULT_MAX_SCORE
    attendance: Optional[float] = None
    problem_set: Optional[float] = None

    def set_field(self, name: str, value: Optional[float], index: Optional[int] = None) -> None:
        if name in QUIZ_FIELDS:
            if index is None:
                raise ValueError(f"{name} requires a quiz index")
            values = getattr(self, name)
            if not 0 <= index < len(values):
                raise ValueError(f"Quiz index out of range: {index}")
            values[index] = value
            return
        if name in SCALAR_FIELDS:
            setattr(self, name, value)
            return
        raise ValueError(f"Unknown period field: {name}")

    def validate(self) -> List[str]:
        errors: List[str] = []
        pairs = list(zip(self.quiz_scores, self.quiz_max_scores))
        pairs.append((self.exam_score, self.exam_max_score))
        for score, max_score in pairs:
            if score is not None and score < 0:
                errors.append("Scores cannot be negative.")
            if max_score is not None and max_score <= 0:
                errors.append("Max scores must be greater than 0.")
            if score is not None and max_score is not None and score > max_score:
                errors.append("A score cannot exceed its max score.")
        for value in (self.attendance, self.problem_set):
            if value is not None and not 0 <= value <= 10:
                errors.append("Attendance and problem set are scored from 0 to 10.")
        return sorted(set(errors))

    def to_inputs(self) -> PeriodInputs:
        quizzes = tuple(
            ComponentScore(score, max_score)
            for score, max_score in zip(self.quiz_scores, self.quiz_max_scores)
        )
        return PeriodInputs(
            quizzes=quizzes,
            exam=ComponentScore(self.exam_score, self.exam_max_score),
            attendance=self.attendance,
            problem_set=self.problem_set,
        )

    def clear(self) -> None:
        self.quiz_scores = _default_quiz_scores()
        self.quiz_max_scores = _default_quiz_max_scores()
        self.exam_score = None
        self.exam_max_score = DEFAULT_MAX_SCORE
        self.attendance = None
        self.problem_set = None


@dataclass
class CalculatorState:
    midterm: PeriodState = field(default_factory=PeriodState)
    finals: PeriodState = field(default_factory=PeriodState)
    target_grade: float = DEFAULT_TARGET_GRADE
    assumed_finals: float = DEFAULT_ASSUMED_FINALS
    summary: Optional[GradeSummary] = None

    def recalculate(self) -> GradeSummary:
        self.summary = calculate_grades(
            self.midterm.to_inputs(),
            self.finals.to_inputs(),
            self.target_grade,
            self.assumed_finals,
        )
        return self.summary

    def clear(self) -> None:
        self.midterm.clear()
        self.finals.clear()
        self.summary = None
