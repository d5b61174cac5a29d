"""UI package."""

from .timer_widget import TimerWidget
from .timer_form import TimerForm
from .phase_bar import PhaseBar

__all__ = [
    "TimerWidget",
    "TimerForm",
    "PhaseBar",
]
