"""
Zoom range parsing.

Supported formats:
    - Single value:     "5"         -> [5]
    - Range:            "1-5"       -> [1, 2, 3, 4, 5]
    - Comma-separated:  "1,3,5"     -> [1, 3, 5]
    - Mixed:            "1-3,5,7-9" -> [1, 2, 3, 5, 7, 8, 9]
"""

import re
from typing import List

from .errors import ZoomRangeError

_INTEGER = re.compile(r'^-?\d+$')


def _parse_integer(text: str) -> int:
    if not _INTEGER.match(text):
        raise ZoomRangeError(f"Invalid number: {text}")
    return int(text)


def _check_zoom(value: int) -> int:
    if value < 1:
        raise ZoomRangeError("Zoom values must be >= 1")
    return value


def _parse_range(part: str) -> List[int]:
    pieces = part.split('-')

    # "-2-3": the leading dash belongs to the start value
    if len(pieces) == 3 and pieces[0] == '':
        start_text, end_text = '-' + pieces[1].strip(), pieces[2].strip()
    elif len(pieces) == 2:
        start_text, end_text = pieces[0].strip(), pieces[1].strip()
    else:
        raise ZoomRangeError(f"Invalid range format: {part}")

    if not start_text or not end_text or start_text == '-':
        raise ZoomRangeError(f"Invalid range format: {part}")

    start = _check_zoom(_parse_integer(start_text))
    end = _check_zoom(_parse_integer(end_text))

    if start > end:
        raise ZoomRangeError("Invalid range: start must be <= end")

    return list(range(start, end + 1))


def parse_zoom_range(text: str) -> List[int]:
    """
    Parse a zoom range string into a sorted list of unique zoom levels.

    Args:
        text: Range expression such as "1-5,7"

    Returns:
        Sorted, de-duplicated zoom levels

    Raises:
        ZoomRangeError: If the expression is empty or malformed, or a value is below 1
    """
    stripped = text.strip()

    if not stripped:
        raise ZoomRangeError("Empty input")

    if stripped == ',':
        raise ZoomRangeError("Invalid format")

    values = set()
    for part in stripped.split(','):
        part = part.strip()

        # Leading and trailing commas leave empty parts
        if not part:
            continue

        if '-' in part and not _INTEGER.match(part):
            values.update(_parse_range(part))
        else:
            values.add(_check_zoom(_parse_integer(part)))

    if not values:
        raise ZoomRangeError("Invalid format")

    return sorted(values)
