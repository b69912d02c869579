from __future__ import annotations

import re
from typing import List

from ..services.normalization import normalize_membership_code, normalize_mobile
from ..services.records import VolunteerPayload


_MEMBERSHIP_CODE = re.compile(r"^[A-Z]+\d{4,}$")
_VIEW_MODES = {"grid", "list"}


def is_valid_name(text: str) -> bool:
    cleaned = (text or "").strip()
    if len(cleaned) < 2:
        return False
    if cleaned.isdigit():
        return False
    return True


def is_membership_code(text: str) -> bool:
    return bool(_MEMBERSHIP_CODE.match(normalize_membership_code(text)))


def is_mobile_number(text: str) -> bool:
    return bool(normalize_mobile(text))


def is_view_mode(text: str) -> bool:
    return (text or "").strip().lower() in _VIEW_MODES


def payload_errors(payload: VolunteerPayload) -> List[str]:
    """Return human-readable problems with a submitted volunteer, empty when valid."""
    errors = []
    if not is_valid_name(payload.name):
        errors.append("name must have at least 2 characters and not be only digits")
    if not is_membership_code(payload.membership_code):
        errors.append("membership code must look like AAK0001")
    if not is_mobile_number(payload.mobile_number):
        errors.append("mobile number must contain only digits")
    return errors
