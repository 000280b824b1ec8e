"""Display formatting helpers."""

import re

_NON_DIGITS = re.compile(r"\D")


def format_phone_number(phone: str) -> str:
    """Format a North American number for display.

    ``15551234567`` -> ``+1 (555) 123-4567``, ``5551234567`` ->
    ``(555) 123-4567``. Anything else is returned unchanged.
    """
    digits = _NON_DIGITS.sub("", phone)
    if len(digits) == 11 and digits.startswith("1"):
        return f"+1 ({digits[1:4]}) {digits[4:7]}-{digits[7:]}"
    if len(digits) == 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    return phone
