"""
Trade journal extractor

The journal sheet keeps two sections side by side under one header row:
cash received (credits) on the left and cash paid (debits) on the right.
Each section has its own Action and Date & Time columns, described by
JOURNAL_LAYOUT.
"""
import logging
from typing import Dict, List, Optional, Tuple

from ..config.enums import ColumnKind, SectionRole
from ..config.schema import Grid, JOURNAL_LAYOUT, JournalTotals
from ..core.csv_grid import is_blank_row
from ..core.locator import find_header_row, is_date_time_header
from ..core.utils import normalize
from .base_extractor import SectionExtractor

logger = logging.getLogger(__name__)

RECEIVED_HEADER = "total $ received"
PAID_HEADER = "total $ paid"

# Stop scanning once this far below the header and a long blank stretch follows
EARLY_STOP_AFTER_ROWS = 20
EARLY_STOP_WINDOW = 10

LayoutColumns = Dict[Tuple[SectionRole, ColumnKind], int]

class JournalExtractor(SectionExtractor):
    """Extract received/paid totals, trade count and last activity"""

    section_name = "journal"

    def __init__(self, layout=JOURNAL_LAYOUT):
        self.layout = layout

    def _occurrences(self, cells: List[str], header: str, kind: ColumnKind) -> List[int]:
        if kind == ColumnKind.TIMESTAMP:
            return [i for i, v in enumerate(cells) if is_date_time_header(v)]
        return [i for i, v in enumerate(cells) if v == header]

    def resolve_layout(self, header_row: List[str]) -> Optional[LayoutColumns]:
        """
        Assign each layout entry its own column in the header row

        Repeated headers (Action, Date & Time) are handed out left to right in
        layout order, so the credits section gets the first occurrence and the
        debits section the second. Returns None if a row has too few occurrences.
        """
        cells = [normalize(v) for v in header_row]
        used: Dict[Tuple[str, ColumnKind], int] = {}
        columns: LayoutColumns = {}

        for column in self.layout:
            header = normalize(column.header)
            key = (header, column.kind)
            occurrences = self._occurrences(cells, header, column.kind)
            nth = used.get(key, 0)
            if nth >= len(occurrences):
                return None
            columns[(column.role, column.kind)] = occurrences[nth]
            used[key] = nth + 1

        return columns

    def _find_journal_header(self, grid: Grid) -> Optional[Tuple[int, LayoutColumns]]:
        required = [column.header for column in self.layout]
        start_row = 0
        while True:
            match = find_header_row(grid, required, start_row=start_row)
            if not match:
                return None
            columns = self.resolve_layout(grid[match.row_index])
            if columns is not None:
                return match.row_index, columns
            start_row = match.row_index + 1

    def extract(self, grid: Grid) -> JournalTotals:
        found = self._find_journal_header(grid)
        if found:
            header_index, columns = found
            return self._extract_sections(grid, header_index, columns)

        logger.debug("No combined journal header found, falling back to column search")
        return self._extract_fallback(grid)

    def _extract_sections(self, grid: Grid, header_index: int, columns: LayoutColumns) -> JournalTotals:
        totals = JournalTotals()

        received_col = columns.get((SectionRole.CREDITS, ColumnKind.AMOUNT), -1)
        paid_col = columns.get((SectionRole.DEBITS, ColumnKind.AMOUNT), -1)

        # The rightmost date column belongs to the debits section, which is the most recent activity
        date_cols = [i for i, v in enumerate(grid[header_index]) if is_date_time_header(v)]
        date_col = max(date_cols) if date_cols else -1

        start = header_index + 1
        for r in range(start, len(grid)):
            row = grid[r]
            received = self.number_at(row, received_col)
            paid = self.number_at(row, paid_col)

            any_action = any(normalize(v) not in ("", "0") for v in row)
            if any_action and (received is not None or paid is not None):
                totals.trades += 1

            if received is not None:
                totals.credits_total += received
            if paid is not None:
                totals.debits_total += paid

            # Scan order wins, dates are kept as the raw cell text
            timestamp = self.text_at(row, date_col)
            if timestamp:
                totals.last_activity = timestamp

            if received is None and paid is None and r > start + EARLY_STOP_AFTER_ROWS:
                window = grid[r:r + EARLY_STOP_WINDOW]
                if all(is_blank_row(x) for x in window):
                    logger.debug(f"Journal scan stopped at blank stretch, row {r}")
                    break

        logger.debug(
            f"Journal: received {totals.credits_total:.2f}, paid {totals.debits_total:.2f}, "
            f"{totals.trades} trades"
        )
        return totals

    def _extract_fallback(self, grid: Grid) -> JournalTotals:
        totals = JournalTotals()

        for r, row in enumerate(grid):
            cells = [normalize(v) for v in row]
            received_col = cells.index(RECEIVED_HEADER) if RECEIVED_HEADER in cells else -1
            paid_col = cells.index(PAID_HEADER) if PAID_HEADER in cells else -1
            if received_col == -1 and paid_col == -1:
                continue

            for data_row in grid[r + 1:]:
                received = self.number_at(data_row, received_col)
                paid = self.number_at(data_row, paid_col)
                if received is not None:
                    totals.credits_total += received
                if paid is not None:
                    totals.debits_total += paid

                # Prefer the received cell, fall back to paid when that cell is missing
                if 0 <= received_col < len(data_row):
                    marker = data_row[received_col]
                elif 0 <= paid_col < len(data_row):
                    marker = data_row[paid_col]
                else:
                    marker = ""
                if (marker or "").strip():
                    totals.trades += 1
            break

        return totals
