"""
Slot Generation

Turns availability windows and a meeting duration into discrete start times.
Stateless; safe to call repeatedly.
"""

from typing import Iterable

from ...exceptions import ValidationError
from .availability import TimeWindow


def generate_slots(window: TimeWindow, duration: int) -> list[int]:
    """
    Every start time t = window.start + k * duration with t + duration <= window.end.

    The result is empty when the duration does not fit in the window.
    """
    if duration <= 0:
        raise ValidationError(f"Duration must be positive, got {duration}")

    slots = []
    current = window.start
    while current + duration <= window.end:
        slots.append(current)
        current += duration
    return slots


def generate_for_windows(windows: Iterable[TimeWindow], duration: int) -> list[int]:
    """Concatenate per-window slots in window order (no sorting or de-duplication)"""
    slots: list[int] = []
    for window in windows:
        slots.extend(generate_slots(window, duration))
    return slots
