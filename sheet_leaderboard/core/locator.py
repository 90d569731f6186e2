"""
Label and header lookups over a parsed sheet grid

Sheets are maintained by hand, so column order and header spelling drift.
Both lookups are plain top-to-bottom scans that stop at the first match.
"""
import logging
from typing import List, Optional, Sequence

from ..config.schema import Grid, HeaderMatch
from .utils import normalize, parse_number

logger = logging.getLogger(__name__)

def cell(row: Sequence[str], index: int) -> str:
    """Return the cell at index, or "" when the row is too short"""
    if 0 <= index < len(row):
        return row[index] if row[index] is not None else ""
    return ""

def is_date_time_header(text: str) -> bool:
    """'Date & Time', 'Date/Time Opened', 'date and time' ..."""
    text = normalize(text)
    return "date" in text and "time" in text

def find_value_adjacent_to_label(grid: Grid, label: str) -> Optional[float]:
    """
    Find the first cell equal to label (case-insensitive, trimmed) and
    return the number in the cell to its right
    """
    target = normalize(label)
    for r, row in enumerate(grid):
        for c, value in enumerate(row):
            if normalize(value) == target:
                logger.debug(f"Label '{label}' found at row {r}, col {c}")
                return parse_number(cell(row, c + 1))
    return None

def find_header_row(grid: Grid, required_headers: List[str],
                    start_row: int = 0) -> Optional[HeaderMatch]:
    """
    Find the first row (at or after start_row) containing every required header

    Headers match exactly after normalization. A required header mentioning
    both "date" and "time" also matches any cell containing both words.

    Returns:
        HeaderMatch with the column of each (normalized) required header,
        or None when no row qualifies
    """
    required = [normalize(h) for h in required_headers]

    for r in range(max(start_row, 0), len(grid)):
        row = grid[r]
        cells = [normalize(v) for v in row]
        columns = {}
        for header in required:
            if header in cells:
                columns[header] = cells.index(header)
            elif is_date_time_header(header):
                fuzzy = next((i for i, v in enumerate(cells) if is_date_time_header(v)), None)
                if fuzzy is None:
                    break
                columns[header] = fuzzy
            else:
                break
        else:
            logger.debug(f"Header row found at row {r}: {columns}")
            return HeaderMatch(row_index=r, columns=columns)

    return None
