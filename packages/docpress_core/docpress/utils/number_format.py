"""
Optional thousands-separator formatting for numbers embedded in text.

Deciding which digit runs are "amounts" is a heuristic, so every rule is
a switch on :class:`NumberFormatPolicy` and nothing here runs unless a
caller asks for it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_DIGIT_RUN = re.compile(r"\d+")


@dataclass(frozen=True)
class NumberFormatPolicy:
    """Which digit runs get grouped.

    Attributes:
        min_digits: Shortest digit run that is grouped
        separator: Thousands separator to insert
        skip_phone_like: Leave runs after ``+`` or joined to other digits by ``-``
        skip_date_like: Leave runs joined to other digits by ``/`` or ``.``
        skip_years: Leave 4-digit runs between 1000 and 2999 (only relevant when ``min_digits <= 4``)
        skip_leading_zero: Leave runs starting with ``0`` (identifiers, codes)
    """

    min_digits: int = 5
    separator: str = ","
    skip_phone_like: bool = True
    skip_date_like: bool = True
    skip_years: bool = True
    skip_leading_zero: bool = True


DEFAULT_POLICY = NumberFormatPolicy()


def _char_at(text: str, index: int) -> str:
    if 0 <= index < len(text):
        return text[index]
    return ""


def _joined(text: str, start: int, end: int, joiners: str) -> bool:
    """True if the run at [start, end) is joined to another digit by one of ``joiners``."""
    before = _char_at(text, start - 1)
    after = _char_at(text, end)
    if before and before in joiners and _char_at(text, start - 2).isdigit():
        return True
    if after and after in joiners and _char_at(text, end + 1).isdigit():
        return True
    return False


def should_group(text: str, start: int, end: int, policy: NumberFormatPolicy = DEFAULT_POLICY) -> bool:
    """Decide whether the digit run ``text[start:end]`` gets thousands separators."""
    digits = text[start:end]
    if len(digits) < max(1, policy.min_digits):
        return False

    before = _char_at(text, start - 1)
    after = _char_at(text, end)

    # Part of a word or identifier
    if before.isalpha() or after.isalpha() or before == "_" or after == "_":
        return False
    # Already grouped, or the fractional part of a decimal
    if before == policy.separator or (after == policy.separator and _char_at(text, end + 1).isdigit()):
        return False
    if before == "." and _char_at(text, start - 2).isdigit() and not policy.skip_date_like:
        return False

    if policy.skip_leading_zero and digits.startswith("0"):
        return False
    if policy.skip_phone_like and (before == "+" or _joined(text, start, end, "-")):
        return False
    if policy.skip_date_like and _joined(text, start, end, "/."):
        return False
    if policy.skip_years and len(digits) == 4 and 1000 <= int(digits) <= 2999:
        return False
    return True


def group_digits(digits: str, separator: str = ",") -> str:
    return f"{int(digits):,}".replace(",", separator)


def format_large_numbers(text: str, policy: Optional[NumberFormatPolicy] = None) -> str:
    """Insert thousands separators into qualifying digit runs.

    >>> format_large_numbers("Total: 1234567890")
    'Total: 1,234,567,890'
    >>> format_large_numbers("Phone: +91-9999999999")
    'Phone: +91-9999999999'
    """
    if not text:
        return text
    policy = policy or DEFAULT_POLICY

    def _replace(match: re.Match) -> str:
        if should_group(text, match.start(), match.end(), policy):
            return group_digits(match.group(0), policy.separator)
        return match.group(0)

    return _DIGIT_RUN.sub(_replace, text)
