"""
Utility functions for cell normalization and number formatting
"""
import math
import re
import logging
from typing import Optional, Union

logger = logging.getLogger(__name__)

_ACCOUNTING_NEGATIVE = re.compile(r'^\(.*\)$', re.DOTALL)
_DECIMAL = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$')

def normalize(text: Optional[str]) -> str:
    """Trim and lower-case a cell for header/label comparison"""
    if text is None:
        return ""
    return str(text).strip().lower()

def parse_number(raw: Union[str, int, float, None]) -> Optional[float]:
    """
    Convert a raw cell into a signed float, or None when it is not a number

    Examples:
    - "$1,234.50" -> 1234.5
    - "(500)" -> -500.0
    - "($1,234.56)" -> -1234.56
    - "12%" -> 12.0
    - "" -> None
    - "abc" -> None
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else None

    text = str(raw).strip()
    if not text:
        return None

    # Accounting style negative: the magnitude lives inside the parentheses
    negative = bool(_ACCOUNTING_NEGATIVE.match(text))

    cleaned = text.replace(',', '').replace('$', '')
    if cleaned.startswith('('):
        cleaned = cleaned[1:]
    if cleaned.endswith(')'):
        cleaned = cleaned[:-1]
    if cleaned.endswith('%'):
        cleaned = cleaned[:-1]
    cleaned = cleaned.strip()

    # float() alone would also accept "nan", "inf" and "1_000"
    if not _DECIMAL.match(cleaned):
        return None

    value = float(cleaned)
    if not math.isfinite(value):
        return None

    return -value if negative else value

def format_money(amount: Optional[float]) -> str:
    """Format a USD amount for display"""
    if amount is None:
        return ""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"

def format_pct(ratio: Optional[float]) -> str:
    """Format a return ratio (0.12 => 12.00%) for display"""
    if ratio is None:
        return ""
    return f"{ratio * 100:,.2f}%"
