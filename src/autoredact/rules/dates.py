"""Custom date rules.

A date entered once (e.g. ``2024-01-15``) is parsed into a calendar date and
expanded into patterns that match the same date in every common written form:

* ISO: ``2024-01-15``, ``2024/1/15``
* US: ``01/15/2024``, ``1-15-24``
* EU: ``15.01.2024``, ``15/1/24``
* Long: ``January 15, 2024``, ``15 Jan. 2024``, ``15th January 2024``
"""

import datetime
import re
from typing import List, NamedTuple, Optional, Union

from ..models.entities import CustomDate
from .validation import ValidationError

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
MONTH_ABBREV = [name[:3] for name in MONTH_NAMES]

MIN_YEAR = 1900
MAX_YEAR = 2100

_ISO = re.compile(r"^(\d{4})[-/](\d{1,2})[-/](\d{1,2})$")
_US = re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$")
_EU = re.compile(r"^(\d{1,2})[-/.](\d{1,2})[-/.](\d{4})$")
_LONG_MONTH_FIRST = re.compile(r"^([A-Za-z]+)\s+(\d{1,2}),?\s+(\d{4})$")
_LONG_DAY_FIRST = re.compile(r"^(\d{1,2})\s+([A-Za-z]+)\s+(\d{4})$")


class ParsedDate(NamedTuple):
    year: int
    month: int
    day: int


def _month_number(name: str) -> int:
    lower = name.lower()
    for i, (full, abbrev) in enumerate(zip(MONTH_NAMES, MONTH_ABBREV)):
        if lower in (full.lower(), abbrev.lower()):
            return i + 1
    return 0


def _is_valid(year: int, month: int, day: int) -> bool:
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return False
    if not MIN_YEAR <= year <= MAX_YEAR:
        return False
    try:
        datetime.date(year, month, day)
    except ValueError:
        return False
    return True


def _candidates(text: str):
    """Yield (year, month, day) readings of *text* in priority order."""
    m = _ISO.match(text)
    if m:
        yield int(m.group(1)), int(m.group(2)), int(m.group(3))
    m = _US.match(text)
    if m:
        yield int(m.group(3)), int(m.group(1)), int(m.group(2))
    m = _EU.match(text)
    if m:
        yield int(m.group(3)), int(m.group(2)), int(m.group(1))
    m = _LONG_MONTH_FIRST.match(text)
    if m:
        month = _month_number(m.group(1))
        if month:
            yield int(m.group(3)), month, int(m.group(2))
    m = _LONG_DAY_FIRST.match(text)
    if m:
        month = _month_number(m.group(2))
        if month:
            yield int(m.group(3)), month, int(m.group(1))


def parse_date(text: str) -> Union[ParsedDate, ValidationError]:
    """Parse a single date string; the first valid reading wins."""
    trimmed = (text or "").strip()
    if not trimmed:
        return ValidationError("Date cannot be empty")
    for year, month, day in _candidates(trimmed):
        if _is_valid(year, month, day):
            return ParsedDate(year, month, day)
    return ValidationError(
        f"Unrecognized date: {trimmed!r}. Use a format like 2024-01-15, "
        "01/15/2024, 15.01.2024 or January 15, 2024"
    )


def ordinal_suffix(day: int) -> str:
    if 11 <= day <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def date_pattern_sources(date: ParsedDate) -> List[str]:
    """Return the uncompiled pattern sources for every representation of *date*."""
    year, month, day = date
    mm, dd = f"{month:02d}", f"{day:02d}"
    m, d = str(month), str(day)
    yyyy, yy = str(year), str(year)[-2:]

    month_pattern = "(?:{}|{}\\.?)".format(
        re.escape(MONTH_NAMES[month - 1]), re.escape(MONTH_ABBREV[month - 1])
    )
    ordinal = d + ordinal_suffix(day)

    sources = [
        # ISO
        f"{yyyy}[-/]{mm}[-/]{dd}",
        f"{yyyy}[-/]{m}[-/]{d}",
        # US
        f"{mm}[-/]{dd}[-/]{yyyy}",
        f"{m}[-/]{d}[-/]{yyyy}",
        f"{mm}[-/]{dd}[-/]{yy}",
        f"{m}[-/]{d}[-/]{yy}",
        # EU
        f"{dd}[-/.]{mm}[-/.]{yyyy}",
        f"{d}[-/.]{m}[-/.]{yyyy}",
        f"{dd}[-/.]{mm}[-/.]{yy}",
        f"{d}[-/.]{m}[-/.]{yy}",
        # Long forms
        f"{month_pattern}\\s+{dd},?\\s+{yyyy}",
        f"{month_pattern}\\s+{d},?\\s+{yyyy}",
        f"{dd}\\s+{month_pattern}\\s+{yyyy}",
        f"{d}\\s+{month_pattern}\\s+{yyyy}",
        # Ordinal long forms
        f"{month_pattern}\\s+{ordinal},?\\s+{yyyy}",
        f"{ordinal}\\s+{month_pattern}\\s+{yyyy}",
    ]
    return [rf"\b{source}\b" for source in sources]


def compile_date_patterns(date: ParsedDate) -> List[re.Pattern]:
    return [re.compile(source, re.IGNORECASE) for source in date_pattern_sources(date)]


def generate_date_patterns(text: str) -> List[re.Pattern]:
    """Parse *text* and compile its patterns; empty when the date is invalid."""
    parsed = parse_date(text)
    if isinstance(parsed, ValidationError):
        return []
    return compile_date_patterns(parsed)


def build_date_rule(text: str) -> Union[CustomDate, ValidationError]:
    """Create a CustomDate rule, or a ValidationError if *text* is not a date."""
    parsed = parse_date(text)
    if isinstance(parsed, ValidationError):
        return parsed
    return CustomDate(
        original_input=text.strip(),
        compiled_patterns=tuple(compile_date_patterns(parsed)),
    )


def format_date(date: ParsedDate, style: Optional[str] = None) -> str:
    """Render *date* for display (``iso`` by default, or ``long``)."""
    if style == "long":
        return f"{MONTH_NAMES[date.month - 1]} {date.day}, {date.year}"
    return f"{date.year:04d}-{date.month:02d}-{date.day:02d}"
