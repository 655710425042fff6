"""Shared validation utilities"""

import re
from typing import Optional


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate and normalize a phone number.

    Args:
        phone: Phone number string in various formats

    Returns:
        Digits grouped with dashes (NNN-NNN-NNNN for 10 digits, NN-NNN-NNNN for 9),
        other valid lengths as bare digits

    Raises:
        ValueError: If the number does not have 9 to 15 digits
    """
    if not phone:
        return phone

    # Remove all non-digit characters
    digits = re.sub(r"\D", "", phone)

    if len(digits) < 9 or len(digits) > 15:
        raise ValueError(f"{phone} is not a valid phone number")

    if len(digits) == 10:
        return f"{digits[:3]}-{digits[3:6]}-{digits[6:]}"
    if len(digits) == 9:
        return f"{digits[:2]}-{digits[2:5]}-{digits[5:]}"
    return digits


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_full_name(name: Optional[str]) -> Optional[str]:
    """Trimmed name of 2 to 50 characters"""
    if name is None:
        return name

    name = name.strip()
    if len(name) < 2:
        raise ValueError("Name must be at least 2 characters long")
    if len(name) > 50:
        raise ValueError("Name cannot be more than 50 characters long")
    return name
