"""
Tiny CSV parser for Google Sheets exports

Handles quoted fields with embedded commas/newlines, doubled quotes and
CRLF/LF/CR line endings. Rows are returned as-is (ragged rows allowed).
"""
import logging
from typing import List

from ..config.schema import Grid

logger = logging.getLogger(__name__)

def is_blank_row(row: List[str]) -> bool:
    return all((cell or "").strip() == "" for cell in row)

def parse_csv(text: str) -> Grid:
    """
    Parse delimited text into a grid of raw string cells

    Malformed quoting is never an error: an unterminated quote consumes the
    rest of the input into a single cell.

    Examples:
    - 'a,"b,c",d'  -> [["a", "b,c", "d"]]
    - 'a,"b""c",d' -> [["a", 'b"c', "d"]]
    """
    if not isinstance(text, str):
        raise TypeError(f"parse_csv expects str, got {type(text).__name__}")

    rows: Grid = []
    row: List[str] = []
    cur: List[str] = []
    in_quotes = False

    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < length else ""

        if in_quotes:
            if ch == '"' and nxt == '"':
                cur.append('"')
                i += 1
            elif ch == '"':
                in_quotes = False
            else:
                cur.append(ch)
        elif ch == '"':
            in_quotes = True
        elif ch == ",":
            row.append("".join(cur))
            cur = []
        elif ch == "\n" or ch == "\r":
            if ch == "\r" and nxt == "\n":
                i += 1
            row.append("".join(cur))
            rows.append(row)
            row = []
            cur = []
        else:
            cur.append(ch)
        i += 1

    if in_quotes:
        logger.debug("Input ended inside a quoted field; remainder kept as one cell")

    # last cell
    row.append("".join(cur))
    rows.append(row)

    while rows and is_blank_row(rows[-1]):
        rows.pop()

    return rows
