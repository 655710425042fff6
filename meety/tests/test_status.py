from datetime import date, datetime

import pytest

from meety.domain.scheduling.status import (
    BookingStatus,
    initial_status,
    needs_decision,
    parse_requested_status,
    validate_status_transition,
)
from meety.exceptions import ValidationError

NOW = datetime(2030, 1, 7, 10, 15)


@pytest.mark.parametrize(
    ("current", "new", "allowed"),
    [
        (BookingStatus.PENDING, BookingStatus.COMPLETED, True),
        (BookingStatus.PENDING, BookingStatus.MISSED, True),
        (BookingStatus.PENDING, BookingStatus.CANCELLED, True),
        (BookingStatus.COMPLETED, BookingStatus.MISSED, True),
        (BookingStatus.MISSED, BookingStatus.COMPLETED, True),
        (BookingStatus.COMPLETED, BookingStatus.CANCELLED, False),
        (BookingStatus.CANCELLED, BookingStatus.COMPLETED, False),
        (BookingStatus.CANCELLED, BookingStatus.PENDING, False),
        (BookingStatus.COMPLETED, BookingStatus.PENDING, False),
    ],
)
def test_status_transitions(current: BookingStatus, new: BookingStatus, allowed: bool) -> None:
    assert validate_status_transition(current, new) is allowed


def test_same_status_is_allowed_as_no_op() -> None:
    for status in BookingStatus:
        assert validate_status_transition(status, status) is True


def test_parse_requested_status_normalises_input() -> None:
    assert parse_requested_status(" Completed ") is BookingStatus.COMPLETED


@pytest.mark.parametrize("value", ["pending", "done", ""])
def test_parse_requested_status_rejects_other_targets(value: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        parse_requested_status(value)

    assert exc_info.value.details["allowed"] == ["cancelled", "completed", "missed"]


def test_initial_status() -> None:
    assert initial_status(date(2030, 1, 7), 600, NOW) is BookingStatus.COMPLETED
    assert initial_status(date(2030, 1, 7), 615, NOW) is BookingStatus.COMPLETED
    assert initial_status(date(2030, 1, 7), 630, NOW) is BookingStatus.PENDING


def test_needs_decision_only_for_elapsed_pending() -> None:
    assert needs_decision("pending", date(2030, 1, 6), 540, NOW) is True
    assert needs_decision("pending", date(2030, 1, 8), 540, NOW) is False
    assert needs_decision("completed", date(2030, 1, 6), 540, NOW) is False
