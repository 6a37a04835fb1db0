"""Quick-add parser: free text → workout type, duration and calories.

Heuristic and total: any text yields a draft, missing signals fall back to
defaults. Numbers are taken from the first match in a left-to-right scan.
"""

import re
from dataclasses import dataclass

KNOWN_TYPES = (
    "Running",
    "Walking",
    "Cycling",
    "Swimming",
    "Weightlifting",
    "HIIT",
    "Yoga",
    "Pilates",
    "CrossFit",
    "Hiking",
    "Dancing",
)
FALLBACK_TYPE = "Other"
DEFAULT_DURATION = 30
DEFAULT_CALORIES = 200

_TYPE_PATTERNS = [(name, re.compile(re.escape(name), re.IGNORECASE)) for name in KNOWN_TYPES]
_DURATION_PATTERN = re.compile(r"(\d+)\s*min", re.IGNORECASE)
_CALORIES_PATTERN = re.compile(r"(\d+)\s*cal", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedNotes:
    type: str
    duration: int
    calories: int


def _match_type(text: str) -> str:
    for name, pattern in _TYPE_PATTERNS:
        if pattern.match(text):
            return name
    return FALLBACK_TYPE


def _first_number(pattern: re.Pattern, text: str, default: int) -> int:
    match = pattern.search(text)
    if not match:
        return default
    try:
        return int(match.group(1))
    except ValueError:
        # digit runs past the interpreter's int conversion limit
        return default


def parse_notes(text: str) -> ParsedNotes:
    """Extract draft fields from quick-add text.

    >>> parse_notes("Running for 30 min, 300 cal")
    ParsedNotes(type='Running', duration=30, calories=300)
    """
    return ParsedNotes(
        type=_match_type(text),
        duration=_first_number(_DURATION_PATTERN, text, DEFAULT_DURATION),
        calories=_first_number(_CALORIES_PATTERN, text, DEFAULT_CALORIES),
    )
