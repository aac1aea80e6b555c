"""
Date parsing utilities for the pair finder.

Assignment files mix several date layouts. Layouts are tried in order and
the first one that matches wins, so day-first strings such as 03/04/2020
are read as 3 April rather than 4 March.

Layouts use yyyy/MM/M/dd/d tokens: doubled letters need exactly two digits,
single letters take one or two.
"""

import re
from datetime import date, datetime
from functools import lru_cache
from typing import Iterable, Optional, Pattern, Tuple

from pairfinder.exceptions import DateParseError

DATE_FORMATS = [
    "yyyy-MM-dd",
    "yyyy/MM/dd",
    "dd/MM/yyyy",
    "dd-MM-yyyy",
    "d/M/yyyy",
    "d-M-yyyy",
    "MM-dd-yyyy",
    "MM/dd/yyyy",
    "M/d/yyyy",
    "M-d-yyyy",
]

# token -> (regex, strptime directive)
_LAYOUT_TOKENS = {
    "yyyy": ("[0-9]{4}", "%Y"),
    "MM": ("[0-9]{2}", "%m"),
    "M": ("[0-9]{1,2}", "%m"),
    "dd": ("[0-9]{2}", "%d"),
    "d": ("[0-9]{1,2}", "%d"),
}
_TOKEN_PATTERN = re.compile("yyyy|MM|M|dd|d")


@lru_cache(maxsize=None)
def compile_layout(layout: str) -> Tuple[Pattern, str]:
    """
    Translate a layout such as "d/M/yyyy" into a full-match regex and a
    strptime format.
    """
    regex_parts = []
    format_parts = []
    position = 0
    for match in _TOKEN_PATTERN.finditer(layout):
        literal = layout[position : match.start()]
        regex, directive = _LAYOUT_TOKENS[match.group()]
        regex_parts.extend([re.escape(literal), regex])
        format_parts.extend([literal.replace("%", "%%"), directive])
        position = match.end()

    literal = layout[position:]
    regex_parts.append(re.escape(literal))
    format_parts.append(literal.replace("%", "%%"))
    return re.compile("".join(regex_parts)), "".join(format_parts)


def parse_date(
    text: str,
    formats: Optional[Iterable[str]] = None,
    line_number: Optional[int] = None,
) -> date:
    """
    Parse a date string using the first matching layout.

    Args:
        text: Date string to parse
        formats: Layouts to try, in order. Defaults to DATE_FORMATS
        line_number: Source line, reported in the error message

    Returns:
        Parsed date

    Raises:
        DateParseError: If the string matches none of the layouts
    """
    candidate = str(text).strip()
    for layout in formats if formats is not None else DATE_FORMATS:
        pattern, fmt = compile_layout(layout)
        if not pattern.fullmatch(candidate):
            continue
        try:
            return datetime.strptime(candidate, fmt).date()
        except ValueError:
            # Right shape, impossible date (e.g. month 25): try the next layout.
            continue

    raise DateParseError(candidate, line_number=line_number)
