"""Parsing of user-entered whole numbers."""

import re
from typing import Optional

from .errors import InvalidInput

# Values must fit a 32-bit signed int, like the prefs store on the phone.
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_int(text: Optional[str]) -> int:
    """
    Parse a whole number typed by the user.

    Raises InvalidInput when the text is blank, is not an optionally signed
    run of digits, or falls outside the 32-bit range.
    """
    if text is None or not str(text).strip():
        raise InvalidInput(text, InvalidInput.BLANK)
    stripped = str(text).strip()
    if not _INTEGER.fullmatch(stripped):
        raise InvalidInput(text, InvalidInput.NOT_A_NUMBER)
    value = int(stripped)
    if value < INT_MIN or value > INT_MAX:
        raise InvalidInput(text, InvalidInput.NOT_A_NUMBER)
    return value


def parse_mileage(text: Optional[str]) -> int:
    """Parse an odometer reading, which can't be negative."""
    value = parse_int(text)
    if value < 0:
        raise InvalidInput(text, InvalidInput.NOT_A_NUMBER)
    return value


def parse_int_or_none(text: Optional[str]) -> Optional[int]:
    """Lenient parse: None instead of an error."""
    try:
        return parse_int(text)
    except InvalidInput:
        return None
