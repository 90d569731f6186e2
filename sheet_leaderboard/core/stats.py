"""
Per-participant stats aggregation and ranking
"""
import math
import logging
from typing import Iterable, List, Optional

from ..config.enums import SortKey
from ..config.schema import DEFAULT_INITIAL_CAPITAL, PlayerStats, StatsDetails
from ..extractors.journal import JournalExtractor
from ..extractors.open_positions import OpenPositionsExtractor
from .csv_grid import parse_csv
from .locator import find_value_adjacent_to_label

logger = logging.getLogger(__name__)

REALIZED_LABEL = "Realized P/L:"

def resolve_initial_capital(initial_capital) -> float:
    """Return initial_capital if it is a positive finite number, else the default"""
    value = None
    if not isinstance(initial_capital, bool):
        try:
            value = float(initial_capital)
        except (TypeError, ValueError):
            value = None

    if value is None or not math.isfinite(value) or value <= 0:
        logger.warning(f"Invalid initial capital {initial_capital!r}, using {DEFAULT_INITIAL_CAPITAL:,.0f}")
        return DEFAULT_INITIAL_CAPITAL
    return value

def compute_player_stats(name: str, csv_text: str,
                         initial_capital: Optional[float] = DEFAULT_INITIAL_CAPITAL) -> PlayerStats:
    """
    Compute standardized stats for one participant tab

    Realized P/L comes from the "Realized P/L:" cell when the participant
    tracks it, otherwise it is approximated as cash received minus cash paid
    from the journal. Unrealized P/L is the open positions total.
    """
    grid = parse_csv(csv_text)

    realized_from_label = find_value_adjacent_to_label(grid, REALIZED_LABEL)
    positions = OpenPositionsExtractor().extract(grid)
    journal = JournalExtractor().extract(grid)

    if realized_from_label is not None:
        realized_pl = realized_from_label
    else:
        realized_pl = journal.credits_total - journal.debits_total

    unrealized_pl = positions.unrealized_total
    total_pl = realized_pl + unrealized_pl

    capital = resolve_initial_capital(initial_capital)

    stats = PlayerStats(
        name=name,
        realized_pl=realized_pl,
        unrealized_pl=unrealized_pl,
        total_pl=total_pl,
        return_pct=total_pl / capital,
        equity=capital + total_pl,
        trades=journal.trades,
        last_activity=journal.last_activity,
        details=StatsDetails(
            credits_total=journal.credits_total,
            debits_total=journal.debits_total,
        ),
    )

    logger.debug(
        f"{name}: realized {realized_pl:.2f} "
        f"({'label' if realized_from_label is not None else 'journal'}), "
        f"unrealized {unrealized_pl:.2f}, {len(positions.positions)} open positions"
    )
    return stats

def rank_players(players: Iterable[PlayerStats], sort_key: SortKey = SortKey.RETURN_PCT) -> List[PlayerStats]:
    """Order players best first (alphabetical when ranking by name)"""
    if sort_key == SortKey.NAME:
        return sorted(players, key=lambda p: p.name.lower())
    return sorted(players, key=lambda p: p.sort_value(sort_key), reverse=True)
