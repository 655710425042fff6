import pytest

from meety.shared import validators


def test_shared_validators_are_the_participant_field_checks() -> None:
    public = sorted(name for name in dir(validators) if name.startswith("validate_"))

    assert public == ["validate_email", "validate_full_name", "validate_phone"]


@pytest.mark.parametrize(
    ("value", "expected"),
    [("0501234567", "050-123-4567"), ("031234567", "03-123-4567"), ("+972 50 765 4321", "972507654321")],
)
def test_validate_phone(value: str, expected: str) -> None:
    assert validators.validate_phone(value) == expected


def test_validate_phone_rejects_short_numbers() -> None:
    with pytest.raises(ValueError):
        validators.validate_phone("12345")


def test_validate_email_lowercases() -> None:
    assert validators.validate_email(" Dana@Example.com ") == "dana@example.com"

    with pytest.raises(ValueError):
        validators.validate_email("not-an-email")


def test_validate_full_name_trims() -> None:
    assert validators.validate_full_name("  Dana Levi ") == "Dana Levi"

    with pytest.raises(ValueError):
        validators.validate_full_name(" D ")
