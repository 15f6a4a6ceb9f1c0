"""HTTP status code families used to compare expected and actual responses."""

from enum import Enum
from typing import Any


class ResponseFamily(str, Enum):
    """Response family, i.e. the leading digit of a status code."""

    ZEROXX = "0xx"  # No response, or a code outside 100..599
    ONEXX = "1xx"
    TWOXX = "2xx"
    THREEXX = "3xx"
    FOURXX = "4xx"
    FIVEXX = "5xx"

    @classmethod
    def _missing_(cls, value):
        # Accept report wording such as "4XX"
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None

    @property
    def starting_digit(self) -> str:
        return self.value[0]

    def as_string(self) -> str:
        """Report wording, e.g. ``4XX``."""
        return self.value.upper()

    def matches(self, status_code: Any) -> bool:
        return family_of(status_code) is self


def family_of(status_code: Any) -> ResponseFamily:
    """Classify a status code by its leading digit.

    Accepts ints or numeric strings. Anything unparsable or outside 100..599
    falls back to ``0xx``.
    """
    if isinstance(status_code, bool):
        return ResponseFamily.ZEROXX
    try:
        code = int(status_code)
    except (TypeError, ValueError):
        return ResponseFamily.ZEROXX
    if not 100 <= code <= 599:
        return ResponseFamily.ZEROXX
    return ResponseFamily(f"{code // 100}xx")


def is_2xx(status_code: Any) -> bool:
    return family_of(status_code) is ResponseFamily.TWOXX


def is_4xx(status_code: Any) -> bool:
    return family_of(status_code) is ResponseFamily.FOURXX


def is_5xx(status_code: Any) -> bool:
    return family_of(status_code) is ResponseFamily.FIVEXX


def is_unimplemented(status_code: Any) -> bool:
    return str(status_code) == "501"


def is_valid_code(code: Any) -> bool:
    """A code is three characters starting with a digit, e.g. ``404`` or ``4XX``."""
    text = str(code) if code is not None else ""
    return len(text) == 3 and text[0].isdigit()


def matches_code_or_range(first: Any, second: Any) -> bool:
    """Compare two codes where either side may be a range such as ``4XX``."""
    one, two = str(first).upper(), str(second).upper()
    if not (is_valid_code(one) and is_valid_code(two)):
        return False
    if one == two:
        return True
    if one[1:] == "XX" or two[1:] == "XX":
        return one[0] == two[0]
    return False
