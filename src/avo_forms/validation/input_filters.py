"""Keystroke-level filters for text fields."""

import logging
import re

from ..constraints import Field, bounds_for

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^0-9.]")
_NON_DIGIT = re.compile(r"[^0-9]")
_WHITESPACE = re.compile(r"\s+")


def normalize_spaces(raw: str) -> str:
    """Collapse whitespace runs to a single space and strip both ends."""
    return _WHITESPACE.sub(" ", raw).strip()


def filter_numeric_input(text: str, collapse_extra_separators: bool = True) -> str:
    """Keep only digits and a single decimal point.

    Any character other than a digit or ``.`` is dropped silently. When more
    than one ``.`` survives, the first one is the separator and the later dots
    are removed, so the digits after them join the fractional part
    (``"1.2.3"`` becomes ``"1.23"``). Pass ``collapse_extra_separators=False``
    to cut the text at the second separator instead (``"1.2"``).
    """
    filtered = _NON_NUMERIC.sub("", text)
    parts = filtered.split(".")
    if len(parts) > 2:
        logger.debug("Numeric input had %d decimal separators", len(parts) - 1)
        if collapse_extra_separators:
            filtered = parts[0] + "." + "".join(parts[1:])
        else:
            filtered = parts[0] + "." + parts[1]
    return filtered


def filter_integer_input(text: str) -> str:
    """Keep only digits."""
    return _NON_DIGIT.sub("", text)


def filter_bounded_integer(text: str, field: Field | str, previous: str = "") -> str:
    """As-you-type editor for integral fields such as minutes, sets and steps.

    Returns the text the field should show next: empty stays empty, an
    in-range value is accepted, a value above the max is clamped to the max,
    and anything else leaves ``previous`` in place.
    """
    bounds = bounds_for(field)
    digits = filter_integer_input(text)
    if digits == "":
        return ""

    value = int(digits)
    if bounds.contains(value):
        return digits
    if value > bounds.max:
        return str(int(bounds.max))
    return previous
