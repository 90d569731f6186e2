"""
Open positions table extractor

Looks for the row headed Quantity | Open Price | Current Price | Unrealized Gain
and sums the unrealized gain of the rows below it.
"""
import logging

from ..config.schema import Grid, OpenPositions, Position
from ..core.locator import find_header_row
from .base_extractor import SectionExtractor

logger = logging.getLogger(__name__)

POSITION_HEADERS = ["quantity", "open price", "current price", "unrealized gain"]

# Blank rows tolerated between the header and the first position
LEADING_BLANK_ROWS = 2

class OpenPositionsExtractor(SectionExtractor):
    """Extract open positions and their total unrealized gain"""

    section_name = "open positions"

    def extract(self, grid: Grid) -> OpenPositions:
        header = find_header_row(grid, POSITION_HEADERS)
        if not header:
            logger.debug("No open positions header found")
            return OpenPositions()

        start = header.row_index + 1
        q_col = header.columns["quantity"]
        o_col = header.columns["open price"]
        c_col = header.columns["current price"]
        u_col = header.columns["unrealized gain"]

        result = OpenPositions()

        for r in range(start, len(grid)):
            row = grid[r]
            quantity = self.number_at(row, q_col)
            open_price = self.number_at(row, o_col)
            current_price = self.number_at(row, c_col)
            gain = self.number_at(row, u_col)

            if quantity is None and open_price is None and current_price is None and gain is None:
                # The table is contiguous: once past the leading blanks, a gap ends it
                if r > start + LEADING_BLANK_ROWS:
                    break
                continue

            quantity = quantity if quantity is not None else 0.0
            if gain is None:
                if quantity and open_price is not None and current_price is not None:
                    gain = quantity * (current_price - open_price)
                else:
                    gain = 0.0

            result.positions.append(Position(
                quantity=quantity,
                open_price=open_price,
                current_price=current_price,
                unrealized_gain=gain,
            ))
            result.unrealized_total += gain

        logger.debug(f"Open positions: {len(result.positions)} rows, unrealized {result.unrealized_total:.2f}")
        return result
