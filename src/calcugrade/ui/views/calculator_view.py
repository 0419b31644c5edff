from typing import Callable, Dict, List, Optional
import flet as ft

from calcugrade.core.grades import Period, grade_band
from calcugrade.core.calculator import GradeSummary
from calcugrade.core.targets import EXAM_LABEL
from calcugrade.services.export_service import format_grades_for_clipboard
from calcugrade.services.notification_service import notify_quietly
from calcugrade.state.app_state import AppState
from calcugrade.state.calculator_state import PeriodState, parse_score


BAND_COLORS = {
    "failed": ft.Colors.RED_400,
    "needs_improvement": ft.Colors.YELLOW_700,
    "good": ft.Colors.ORANGE_400,
    "excellent": ft.Colors.GREEN_400,
}


def _build_period_card(
    title: str,
    period: Period,
    state: PeriodState,
    on_change: Callable[[], None],
    on_invalid: Callable[[], None],
) -> ft.Card:
    def bind(field: ft.TextField, name: str, index: Optional[int] = None) -> ft.TextField:
        def handle(_):
            try:
                value = parse_score(field.value)
            except ValueError:
                field.error_text = "Enter a number"
                on_invalid()
                return
            field.error_text = None
            state.set_field(name, value, index)
            on_change()

        field.on_change = handle
        return field

    rows: List[ft.Control] = [ft.Text(title, size=20, weight=ft.FontWeight.BOLD)]
    for index in range(len(state.quiz_scores)):
        label = period.quiz_label(index)
        rows.append(
            ft.Row(
                controls=[
                    bind(ft.TextField(label=label, width=140), "quiz_scores", index),
                    bind(
                        ft.TextField(label="Max", width=100, value=str(int(state.quiz_max_scores[index] or 0))),
                        "quiz_max_scores",
                        index,
                    ),
                ]
            )
        )
    rows.append(
        ft.Row(
            controls=[
                bind(ft.TextField(label=EXAM_LABEL, width=140), "exam_score"),
                bind(ft.TextField(label="Max", width=100, value=str(int(state.exam_max_score or 0))), "exam_max_score"),
            ]
        )
    )
    rows.append(bind(ft.TextField(label="Attendance (out of 10)", width=250), "attendance"))
    rows.append(bind(ft.TextField(label="Problem Set (out of 10)", width=250), "problem_set"))

    return ft.Card(content=ft.Container(padding=12, content=ft.Column(controls=rows, spacing=8)))


def build_calculator_view(page: ft.Page, app_state: AppState) -> ft.View:
    calculator = app_state.calculator

    status = ft.Text(color=ft.Colors.RED_400)
    midterm_text = ft.Text()
    finals_text = ft.Text()
    final_text = ft.Text(size=22, weight=ft.FontWeight.BOLD)
    gpe_text = ft.Text(size=18)
    target_message = ft.Text()
    needed_list = ft.Column(spacing=4)
    scenario_list = ft.Column(spacing=8)

    def set_status(message: str, is_error: bool = True) -> None:
        status.value = message
        status.color = ft.Colors.RED_400 if is_error else ft.Colors.GREEN_400

    def render_scores(scores: Dict[str, str]) -> List[ft.Control]:
        return [ft.Text(f"{label}: {text}") for label, text in scores.items()]

    def render(summary: GradeSummary) -> None:
        midterm_text.value = f"Midterm Grade: {summary.midterm:.2f}"
        finals_text.value = f"Finals Grade: {summary.finals:.2f}"
        final_text.value = f"Final Grade: {summary.formatted_final}"
        final_text.color = BAND_COLORS[grade_band(summary.final_grade)]
        gpe_text.value = f"GPE: {summary.gpe}"

        targets = summary.targets
        target_message.value = targets.message
        target_message.color = ft.Colors.GREEN_400 if targets.is_possible else ft.Colors.RED_400

        needed_list.controls = render_scores(targets.needed_scores)
        scenario_list.controls = [
            ft.Column(
                controls=[ft.Text(scenario.description, weight=ft.FontWeight.BOLD), *render_scores(scenario.scores)],
                spacing=2,
            )
            for scenario in targets.scenarios
        ]

    def recalculate() -> None:
        errors = sorted(set(calculator.midterm.validate() + calculator.finals.validate()))
        if errors:
            set_status(" ".join(errors))
        else:
            set_status("", is_error=False)
        render(calculator.recalculate())
        page.update()

    def on_invalid() -> None:
        set_status("Only numbers are allowed.")
        page.update()

    def on_copy(_):
        summary = calculator.summary or calculator.recalculate()
        text = format_grades_for_clipboard(calculator.midterm.to_inputs(), calculator.finals.to_inputs(), summary)
        page.set_clipboard(text)
        set_status("Grades copied to clipboard.", is_error=False)
        page.update()
        page.run_thread(notify_quietly, text)

    midterm_card = _build_period_card("Midterm", Period.MIDTERM, calculator.midterm, recalculate, on_invalid)
    finals_card = _build_period_card("Finals", Period.FINALS, calculator.finals, recalculate, on_invalid)

    render(calculator.recalculate())

    return ft.View(
        route="/",
        controls=[
            ft.AppBar(title=ft.Text("CalcuGrade")),
            ft.Container(
                padding=20,
                content=ft.Column(
                    scroll=ft.ScrollMode.AUTO,
                    controls=[
                        ft.Text("Real-time grade calculator", size=22, weight=ft.FontWeight.BOLD),
                        ft.Row(controls=[midterm_card, finals_card], wrap=True),
                        status,
                        ft.Divider(),
                        midterm_text,
                        finals_text,
                        final_text,
                        gpe_text,
                        ft.Button("Copy Grades", on_click=on_copy),
                        ft.Divider(),
                        ft.Text(f"Scores needed for {calculator.target_grade:g}", size=20, weight=ft.FontWeight.BOLD),
                        target_message,
                        needed_list,
                        ft.Divider(),
                        ft.Text("Scenarios", size=20, weight=ft.FontWeight.BOLD),
                        scenario_list,
                    ],
                ),
            ),
        ],
    )
