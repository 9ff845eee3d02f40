"""Input rules for account fields."""

import re
from typing import Optional

from ....core.exceptions import ValidationError

MAX_EMAIL_LENGTH = 254
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
# 0/84/+84 prefix followed by a mobile network digit and eight more digits
VN_PHONE_PATTERN = re.compile(r"^(?:0|\+84|84)[35789]\d{8}$")


def normalize_email(email: Optional[str]) -> str:
    if not email or not isinstance(email, str):
        raise ValidationError("Email is required", field="email")
    normalized = email.strip().lower()
    if len(normalized) > MAX_EMAIL_LENGTH:
        raise ValidationError(f"Email must be at most {MAX_EMAIL_LENGTH} characters", field="email")
    if not EMAIL_PATTERN.match(normalized):
        raise ValidationError("Email is not valid", field="email")
    return normalized


def check_password(password: Optional[str], min_length: int = 8) -> str:
    if not password or not isinstance(password, str):
        raise ValidationError("Password is required", field="password")
    if len(password) < min_length:
        raise ValidationError(
            f"Password must be at least {min_length} characters", field="password"
        )
    return password


def normalize_phone(phone: str) -> str:
    """Validate a Vietnamese mobile number and normalize it to ``0xxxxxxxxx``."""
    cleaned = re.sub(r"[\s-]", "", phone or "")
    if not VN_PHONE_PATTERN.match(cleaned):
        raise ValidationError("Phone number is not valid", field="phone")
    if cleaned.startswith("+84"):
        return "0" + cleaned[3:]
    if cleaned.startswith("84") and len(cleaned) == 11:
        return "0" + cleaned[2:]
    return cleaned
