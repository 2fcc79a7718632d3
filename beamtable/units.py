"""
Unit Conversion Utilities
Drawing values are stored in millimeters; the beam table reports meters.
"""

import re
from typing import Union


# Optional thousands separators, decimals (trailing point allowed) and exponent
NUMBER_PATTERN = re.compile(
    r"^(?:\d{1,3}(?:,\d{3})+|\d+)?(?:\.\d*)?(?:[eE][+-]?\d+)?$"
)


def parse_number(token: str) -> float:
    """
    Parse a numeric token leniently.

    Formats supported:
    - "300" -> 300.0
    - "300." -> 300.0
    - "1,200" -> 1200.0
    - "+450.5" -> 450.5
    - "450-" -> -450.0 (trailing sign)
    - "(450)" -> -450.0 (accounting negative)
    - "3e2" -> 300.0

    Returns:
        Parsed value, or 0.0 when the token is not a number
    """
    if not token:
        return 0.0

    s = token.strip()
    if not s or not any(ch.isdigit() for ch in s):
        return 0.0

    sign = 1.0
    if s.startswith('(') and s.endswith(')'):
        sign, s = -1.0, s[1:-1].strip()
    if s[0] in '+-':
        sign, s = (sign if s[0] == '+' else -sign), s[1:]
    elif s[-1] in '+-':
        sign, s = (sign if s[-1] == '+' else -sign), s[:-1]

    if not s or not NUMBER_PATTERN.match(s):
        return 0.0

    try:
        return sign * float(s.replace(',', ''))
    except ValueError:
        return 0.0


def mm_to_m(value_mm: Union[int, float], places: int = 2) -> str:
    """
    Format a millimeter value in meters.

    Args:
        value_mm: Value in millimeters
        places: Decimal places

    Returns:
        e.g. mm_to_m(300) -> "0.30", mm_to_m(1250, 1) -> "1.2"
    """
    return f"{value_mm / 1000.0:.{places}f}"


if __name__ == "__main__":
    for tc in ["300", "1,200", "abc", "45.5", ""]:
        print(f"  {tc!r} -> {parse_number(tc)}")
    print(f"  300 mm -> {mm_to_m(300)} m")
