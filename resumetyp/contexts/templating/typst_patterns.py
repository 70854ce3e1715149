"""
Typst Pattern Constants

Centralized Typst literals and the helpers that turn user text and dates
into safe Typst source fragments.
"""

import re
from dataclasses import dataclass
from numbers import Number
from typing import Union


@dataclass(frozen=True)
class TypstTokens:
    """
    Generated Typst expressions that are embedded verbatim (never escaped).
    """
    TODAY: str = "datetime.today()"
    PRESENT: str = '"Present"'


@dataclass(frozen=True)
class HelperNames:
    """
    Names of the layout helpers defined in the structure preamble.

    Entry renderers call these; the preamble template defines them.
    """
    WORK_HEADING: str = "work-heading"
    PROJECT_HEADING: str = "project-heading"
    EDUCATION_HEADING: str = "education-heading"
    ACHIEVEMENT_HEADING: str = "achievement-heading"
    SKILLS: str = "skills"


# Characters with meaning inside Typst string literals and markup:
# backslash, double quote, the code introducer and the math introducer.
ESCAPE_PATTERN = re.compile(r'([\\"#$])')

DATE_PATTERN = re.compile(r"^\s*(\d+)-(\d+)")


def escape(text: str) -> str:
    """
    Escape user text for embedding in generated Typst source.

    Prefixes each backslash, double quote, ``#`` and ``$`` with one backslash.
    Every other character is left alone. Apply exactly once per literal.

    Args:
        text: Raw user-supplied text

    Returns:
        Escaped text

    Examples:
        >>> escape('C# "and" $5')
        'C\\\\# \\\\"and\\\\" \\\\$5'
    """
    return ESCAPE_PATTERN.sub(r"\\\1", text)


def quote(text: str) -> str:
    """Escape text and wrap it in a Typst string literal."""
    return f'"{escape(text)}"'


def format_date(date_str: str) -> str:
    """
    Convert a ``YYYY-MM`` string into a Typst ``datetime`` expression.

    The month is emitted as a plain integer (``"2024-03"`` gives ``month: 3``).
    An empty string yields ``datetime.today()`` so open-ended entries still
    type-check. Strings without a parseable year and month fall back to the
    same sentinel instead of raising.

    Args:
        date_str: Date in ``YYYY-MM`` form, or empty

    Returns:
        Typst expression string
    """
    if not date_str:
        return TypstTokens.TODAY

    match = DATE_PATTERN.match(date_str)
    if match is None:
        return TypstTokens.TODAY

    year, month = int(match.group(1), 10), int(match.group(2), 10)
    return f"datetime(year: {year}, month: {month}, day: 1)"


def format_end_date(end_date: str, is_present: bool) -> str:
    """End-date expression; the ongoing flag wins over any concrete date."""
    if is_present:
        return TypstTokens.PRESENT
    return format_date(end_date)


def format_size(points: Union[Number, str]) -> str:
    """
    Format a point size as a Typst length.

    Integral values print without a decimal part (``10.0`` gives ``10pt``).
    """
    if isinstance(points, str):
        try:
            points = float(points)
        except ValueError:
            return f"{escape(points)}pt"
    if float(points).is_integer():
        return f"{int(points)}pt"
    return f"{points:g}pt"
