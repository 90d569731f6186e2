"""
Test script for the open positions and journal extractors
"""
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from sheet_leaderboard.extractors.open_positions import OpenPositionsExtractor
from sheet_leaderboard.extractors.journal import JournalExtractor

POSITION_HEADER = ["Quantity", "Open Price", "Current Price", "Unrealized Gain"]
JOURNAL_HEADER = ["Action", "Date & Time", "Total $ Received", "Status", "Action", "Date & Time", "Total $ Paid"]

def test_open_positions_total():
    """Gain is computed from prices when the cell is empty"""
    grid = [
        ["Open Positions"],
        POSITION_HEADER,
        ["10", "5", "7", ""],
        ["-5", "", "", "20"],
    ]
    result = OpenPositionsExtractor().extract(grid)
    assert result.unrealized_total == 40.0
    assert len(result.positions) == 2
    assert result.positions[0].unrealized_gain == 20.0
    assert result.positions[1].open_price is None
    assert result.positions[1].quantity == -5.0

def test_open_positions_missing_prices():
    grid = [POSITION_HEADER, ["3", "10", "", ""], ["", "", "", "$1,000"]]
    result = OpenPositionsExtractor().extract(grid)
    assert [p.unrealized_gain for p in result.positions] == [0.0, 1000.0]
    assert result.positions[1].quantity == 0.0

def test_open_positions_leading_blank_rows():
    grid = [POSITION_HEADER, ["", "", "", ""], [], ["1", "1", "2", ""]]
    result = OpenPositionsExtractor().extract(grid)
    assert result.unrealized_total == 1.0

def test_open_positions_stop_at_gap():
    """Once the table is under way, the first empty row ends it"""
    grid = [
        POSITION_HEADER,
        ["1", "", "", "10"],
        ["1", "", "", "10"],
        ["1", "", "", "10"],
        ["", "", "", ""],
        ["1", "", "", "500"],
    ]
    result = OpenPositionsExtractor().extract(grid)
    assert result.unrealized_total == 30.0
    assert len(result.positions) == 3

def test_open_positions_no_header():
    result = OpenPositionsExtractor().extract([["Quantity", "Price"], ["1", "2"]])
    assert result.positions == []
    assert result.unrealized_total == 0.0

def test_journal_dual_sections():
    """Credits on the left, debits on the right, one shared header row"""
    grid = [
        ["Trade Journal"],
        JOURNAL_HEADER,
        ["Sell AAPL", "1/5/2026", "$1,000.00", "Closed", "Buy AAPL", "1/2/2026", "$400.00"],
        ["Dividend", "1/6/2026", "$50", "", "", "", ""],
        ["", "", "", "", "Buy MSFT", "1/7/2026", "100"],
        ["0", "", "", "", "", "", ""],
        ["note", "", "", "", "", "", ""],
    ]
    totals = JournalExtractor().extract(grid)
    assert totals.credits_total == 1050.0
    assert totals.debits_total == 500.0
    assert totals.trades == 3
    # Rightmost date column, last non-blank value in scan order
    assert totals.last_activity == "1/7/2026"

def test_journal_last_activity_is_scan_order():
    grid = [
        JOURNAL_HEADER,
        ["", "", "", "", "Buy", "3/1/2026", "10"],
        ["", "", "", "", "Buy", "1/1/2026", "10"],
    ]
    assert JournalExtractor().extract(grid).last_activity == "1/1/2026"

def test_journal_fuzzy_date_headers():
    header = ["Action", "Date & Time Opened", "Total $ Received", "Status", "Action", "Date/Time Closed", "Total $ Paid"]
    grid = [header, ["Sell", "x", "10", "", "Buy", "2/2/2026", "4"]]
    totals = JournalExtractor().extract(grid)
    assert totals.credits_total == 10.0
    assert totals.debits_total == 4.0
    assert totals.last_activity == "2/2/2026"

def test_journal_early_stop():
    """A long blank stretch well below the header ends the scan"""
    blank = [""] * 7
    grid = [JOURNAL_HEADER, ["Sell", "", "100", "", "", "1/1/2026", ""]]
    grid += [list(blank) for _ in range(38)]
    grid.append(["Sell", "9/9/2026", "999", "", "", "", ""])
    totals = JournalExtractor().extract(grid)
    assert totals.credits_total == 100.0
    assert totals.trades == 1
    assert totals.last_activity == "1/1/2026"

def test_journal_no_early_stop_when_data_follows():
    blank = [""] * 7
    grid = [JOURNAL_HEADER, ["Sell", "1/1/2026", "100", "", "", "", ""]]
    grid += [list(blank) for _ in range(23)]
    grid.append(["Sell", "2/1/2026", "5", "", "", "", ""])
    totals = JournalExtractor().extract(grid)
    assert totals.credits_total == 105.0
    assert totals.trades == 2

def test_journal_fallback():
    """Without the combined header, sum any Total $ Received / Paid columns"""
    grid = [
        ["Trades"],
        ["Ticker", "Total $ Received", "Total $ Paid"],
        ["AAPL", "1,000", ""],
        ["MSFT", "", "400"],
        ["GOOG", "200"],
    ]
    totals = JournalExtractor().extract(grid)
    assert totals.credits_total == 1200.0
    assert totals.debits_total == 400.0
    # The received cell decides; it is blank on the MSFT row
    assert totals.trades == 2
    assert totals.last_activity is None

def test_journal_single_action_header_uses_fallback():
    """A header with only one Action/Date column is not the dual-section layout"""
    grid = [
        ["Action", "Date & Time", "Total $ Received", "Status", "Total $ Paid"],
        ["Sell", "1/1/2026", "30", "", "10"],
    ]
    totals = JournalExtractor().extract(grid)
    assert totals.credits_total == 30.0
    assert totals.debits_total == 10.0
    assert totals.last_activity is None

def test_journal_nothing_found():
    totals = JournalExtractor().extract([["hello", "world"]])
    assert totals.credits_total == 0.0
    assert totals.debits_total == 0.0
    assert totals.trades == 0

def main():
    """Run all tests"""
    print("Testing Section Extractors")
    print("=" * 50)

    tests = [
        test_open_positions_total,
        test_open_positions_missing_prices,
        test_open_positions_leading_blank_rows,
        test_open_positions_stop_at_gap,
        test_open_positions_no_header,
        test_journal_dual_sections,
        test_journal_last_activity_is_scan_order,
        test_journal_fuzzy_date_headers,
        test_journal_early_stop,
        test_journal_no_early_stop_when_data_follows,
        test_journal_fallback,
        test_journal_single_action_header_uses_fallback,
        test_journal_nothing_found,
    ]
    for test in tests:
        test()
        print(f"+ {test.__name__}")

    print("All extractor tests passed")

if __name__ == "__main__":
    main()
