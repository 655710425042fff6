import pytest

from meety.domain.scheduling.availability import TimeWindow
from meety.domain.scheduling.slots import generate_for_windows, generate_slots
from meety.exceptions import ValidationError

NINE_TO_TEN = TimeWindow(start=540, end=600)


def test_thirty_minute_slots() -> None:
    assert generate_slots(NINE_TO_TEN, 30) == [540, 570]


def test_slot_must_end_inside_window() -> None:
    assert generate_slots(NINE_TO_TEN, 45) == [540]


def test_duration_equal_to_window_yields_one_slot() -> None:
    assert generate_slots(NINE_TO_TEN, 60) == [540]


def test_duration_longer_than_window_yields_nothing() -> None:
    assert generate_slots(NINE_TO_TEN, 61) == []


@pytest.mark.parametrize("duration", [5, 15, 25, 50, 90, 480])
def test_slots_start_at_window_start_and_fit(duration: int) -> None:
    window = TimeWindow(start=480, end=1080)
    slots = generate_slots(window, duration)

    assert slots[0] == window.start
    assert all(b - a == duration for a, b in zip(slots, slots[1:]))
    assert all(t + duration <= window.end for t in slots)
    # No further slot would fit
    assert slots[-1] + 2 * duration > window.end


def test_non_positive_duration_is_rejected() -> None:
    with pytest.raises(ValidationError):
        generate_slots(NINE_TO_TEN, 0)


def test_generation_is_repeatable() -> None:
    assert generate_slots(NINE_TO_TEN, 20) == generate_slots(NINE_TO_TEN, 20)


def test_windows_are_concatenated_in_given_order() -> None:
    afternoon = TimeWindow(start=780, end=840)

    assert generate_for_windows([afternoon, NINE_TO_TEN], 30) == [780, 810, 540, 570]
