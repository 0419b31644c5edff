from dataclasses import dataclass, field

from calcugrade.config.settings import settings
from calcugrade.state.calculator_state import CalculatorState


def _calculator_from_settings() -> CalculatorState:
    return CalculatorState(target_grade=settings.target_grade, assumed_finals=settings.assumed_finals)


@dataclass
class AppState:
    calculator: CalculatorState = field(default_factory=_calculator_from_settings)


app_state = AppState()
