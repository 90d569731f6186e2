"""
CSV exporter for leaderboard results
"""
import csv
import logging
from typing import List, Optional
from datetime import datetime
from pathlib import Path

from ..config.schema import LeaderboardResult, PlayerStats
from ..core.utils import format_money, format_pct

logger = logging.getLogger(__name__)

HEADERS = [
    'Rank',
    'Name',
    'Return (%)',
    'Total P/L',
    'Realized P/L',
    'Unrealized P/L',
    'Equity',
    'Trades',
    'Last Activity',
    'Total Received',
    'Total Paid',
]

class CSVExporter:
    """Export ranked player stats to CSV"""

    def __init__(self, output_dir: str = "data"):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def _to_row(self, rank: int, player: PlayerStats) -> list:
        return [
            rank,
            player.name,
            round(player.return_pct * 100, 4),
            round(player.total_pl, 2),
            round(player.realized_pl, 2),
            round(player.unrealized_pl, 2),
            round(player.equity, 2),
            player.trades,
            player.last_activity or '',
            round(player.details.credits_total, 2),
            round(player.details.debits_total, 2),
        ]

    def export_to_csv(self, players: List[PlayerStats], filename: Optional[str] = None) -> str:
        """
        Export players (already ranked) to a CSV file

        Args:
            players: List of PlayerStats in rank order
            filename: Optional custom filename

        Returns:
            Path to the created CSV file, or "" when there is nothing to write
        """
        if not players:
            logger.warning("No players to export")
            return ""

        if not filename:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"leaderboard_{timestamp}.csv"

        filepath = self.output_dir / filename

        try:
            with open(filepath, 'w', newline='', encoding='utf-8') as csvfile:
                writer = csv.writer(csvfile)
                writer.writerow(HEADERS)
                for rank, player in enumerate(players, start=1):
                    writer.writerow(self._to_row(rank, player))
        except OSError as e:
            logger.error(f"Failed to export to CSV: {e}")
            raise

        logger.info(f"Exported {len(players)} players to {filepath}")
        return str(filepath)

    def export_summary(self, result: LeaderboardResult) -> str:
        """Write a plain-text summary report of a leaderboard run"""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.output_dir / f"leaderboard_summary_{timestamp}.txt"

        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                f.write("INVESTING CHALLENGE LEADERBOARD\n")
                f.write("=" * 50 + "\n")
                f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write(f"Fetched at: {result.meta.get('fetchedAt', '')}\n")
                f.write(f"Initial capital: {format_money(result.meta.get('initialCapital'))}\n\n")

                if not result.ok:
                    f.write(f"FAILED: {result.error}\n")
                else:
                    f.write("RANKING:\n")
                    f.write("-" * 20 + "\n")
                    for rank, player in enumerate(result.players, start=1):
                        f.write(f"{rank}. {player.name}\n")
                        f.write(f"  Return: {format_pct(player.return_pct)}\n")
                        f.write(f"  Total P/L: {format_money(player.total_pl)}\n")
                        f.write(f"  Equity: {format_money(player.equity)}\n")
                        f.write(f"  Trades: {player.trades}\n")
                        if player.last_activity:
                            f.write(f"  Last activity: {player.last_activity}\n")
        except OSError as e:
            logger.error(f"Failed to export summary: {e}")
            raise

        logger.info(f"Summary report saved to {filepath}")
        return str(filepath)
