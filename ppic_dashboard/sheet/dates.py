from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date, datetime

"""Export date parsing.

Sheet maintainers type export dates by hand, so the same column mixes ISO,
day-first, month-first and textual-month dates. ``parse_export_date`` tries an
ordered chain of parsers and returns the first success. Day-first wins over
month-first for ambiguous values such as ``03/04/2025``.
"""

__all__ = [
    "DateParser",
    "DATE_PARSERS",
    "parse_export_date",
    "strptime_parser",
]

DateParser = Callable[[str], "date | None"]


def strptime_parser(fmt: str) -> DateParser:
    """Build a parser that accepts exactly ``fmt``."""
    def _parse(text: str) -> date | None:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            return None
    _parse.__name__ = f"parse_{fmt}"
    return _parse


DATE_PARSERS: tuple[DateParser, ...] = (
    # ISO
    strptime_parser("%Y-%m-%d"),
    strptime_parser("%Y/%m/%d"),
    # day-first
    strptime_parser("%d/%m/%Y"),
    strptime_parser("%d-%m-%Y"),
    strptime_parser("%d.%m.%Y"),
    # month-first
    strptime_parser("%m/%d/%Y"),
    # textual month
    strptime_parser("%d-%b-%Y"),
    strptime_parser("%d %b %Y"),
    strptime_parser("%b %d, %Y"),
    strptime_parser("%d %B %Y"),
    strptime_parser("%B %d, %Y"),
)


def parse_export_date(text: str, parsers: Sequence[DateParser] = DATE_PARSERS) -> date | None:
    """Return the first successful parse of ``text``, or None."""
    cleaned = text.strip()
    if not cleaned:
        return None
    for parser in parsers:
        parsed = parser(cleaned)
        if parsed is not None:
            return parsed
    return None
