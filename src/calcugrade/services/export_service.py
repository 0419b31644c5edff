from typing import List, Optional

from calcugrade.core.calculator import GradeSummary
from calcugrade.core.grades import Period, format_final_grade
from calcugrade.core.scores import PeriodInputs
from calcugrade.core.targets import EXAM_LABEL


SECTION_TITLES = {
    Period.MIDTERM: ("Midterm Grades:", "Midterm Grade"),
    Period.FINALS: ("Final Grades:", "Final Grade"),
}


def _value_or_na(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_period_section(inputs: PeriodInputs, period: Period, grade: float) -> str:
    title, grade_label = SECTION_TITLES[period]
    lines: List[str] = [title]
    for index, quiz in enumerate(inputs.quizzes):
        lines.append(f"{period.quiz_label(index)} - {_value_or_na(quiz.score)}")
    lines.append(f"{EXAM_LABEL} - {_value_or_na(inputs.exam.score)}")
    lines.append(f"Attendance - {_value_or_na(inputs.attendance)}")
    lines.append(f"Problem Set - {_value_or_na(inputs.problem_set)}")
    lines.append(f"{grade_label} - {format_final_grade(grade)}")
    return "\n".join(lines)


def format_grades_for_clipboard(midterm: PeriodInputs, finals: PeriodInputs, summary: GradeSummary) -> str:
    midterm_section = format_period_section(midterm, Period.MIDTERM, summary.midterm)
    finals_section = format_period_section(finals, Period.FINALS, summary.finals)
    results_section = "\n".join(
        [
            "Final Results:",
            f"Final Grade - {summary.formatted_final}",
            f"GPE - {summary.gpe}",
        ]
    )
    return f"{midterm_section}\n\n{finals_section}\n\n\n{results_section}"
