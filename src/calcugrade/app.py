import flet as ft

from calcugrade.config.logging_config import setup_logging
from calcugrade.config.settings import settings
from calcugrade.state.app_state import app_state
from calcugrade.ui.views.calculator_view import build_calculator_view


def main(page: ft.Page) -> None:
    page.title = "CalcuGrade"
    page.scroll = ft.ScrollMode.AUTO
    page.views.clear()
    page.views.append(build_calculator_view(page, app_state))
    page.update()


def run() -> None:
    setup_logging(settings.log_level)
    ft.app(
        target=main,
        view=ft.AppView.WEB_BROWSER if settings.web_mode else ft.AppView.FLET_APP,
        port=settings.port,
    )


if __name__ == "__main__":
    run()
