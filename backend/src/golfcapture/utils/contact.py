"""
Contact Normalization
Email/phone normalization applied everywhere contact info enters the system
"""

import re
from typing import Optional

EMAIL_SHAPE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NON_DIGITS = re.compile(r"\D")


def normalize_email(email: Optional[str]) -> Optional[str]:
    """Lowercase and trim; blank becomes None"""
    if email is None:
        return None
    normalized = email.strip().lower()
    return normalized or None


def is_valid_email(email: Optional[str]) -> bool:
    """Form-boundary check: something@something.something"""
    return bool(email) and EMAIL_SHAPE.match(email) is not None


def normalize_phone(phone: Optional[str]) -> Optional[str]:
    """
    Reduce a phone number to 10 US digits.

    Strips every non-digit; accepts 10 digits, or 11 digits with a leading
    country code 1 (which is dropped). Anything else returns None.
    """
    if not phone:
        return None
    digits = NON_DIGITS.sub("", str(phone))
    if len(digits) == 10:
        return digits
    if len(digits) == 11 and digits[0] == "1":
        return digits[1:]
    return None


def mask_email(email: Optional[str]) -> Optional[str]:
    """j***@example.com"""
    if not email or "@" not in email:
        return None
    local, domain = email.split("@", 1)
    return f"{local[0]}***@{domain}"


def mask_phone(phone: Optional[str]) -> Optional[str]:
    """(***) ***-1234"""
    if not phone:
        return None
    return f"(***) ***-{phone[-4:]}"
