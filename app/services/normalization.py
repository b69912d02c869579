import re


def normalize_mobile(phone: str) -> str:
    """Strip spaces, dashes and brackets from a mobile number.

    Returns an empty string when anything other than digits (and an optional
    leading +) remains.
    """
    if not phone:
        return ""

    cleaned = re.sub(r"[\s\-().]", "", str(phone))
    if cleaned.startswith("+"):
        cleaned = cleaned[1:]

    if not cleaned.isdigit():
        return ""
    return cleaned


def normalize_membership_code(code: str) -> str:
    """Uppercase a membership code and drop inner whitespace (``aak 0001`` -> ``AAK0001``)."""
    if not code:
        return ""
    return re.sub(r"\s+", "", str(code)).upper()


def clean_text(text: str) -> str:
    """Collapse runs of whitespace in free-text fields."""
    if not text:
        return ""
    return re.sub(r"\s+", " ", str(text)).strip()
