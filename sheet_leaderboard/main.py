"""
Main execution script for the Sheet Leaderboard
"""
import json
import time
import asyncio
import argparse
import logging
from datetime import datetime, timezone
from typing import List, Optional

from .core.logger import setup_logger
from .core.errors import LeaderboardError, SettingsError
from .core.stats import compute_player_stats, rank_players
from .core.utils import format_money, format_pct
from .config.schema import LeaderboardResult, LeaderboardSettings, PlayerStats
from .config.settings import load_settings
from .fetchers.sheet_fetcher import SheetFetcher
from .exporters.csv_exporter import CSVExporter

logger = logging.getLogger("sheet_leaderboard")

class LeaderboardBuilder:
    """Fetch every participant tab, compute stats and rank them"""

    def __init__(self, settings: LeaderboardSettings, fetcher: Optional[SheetFetcher] = None):
        self.settings = settings
        self.fetcher = fetcher or SheetFetcher(
            api_key=settings.google_sheets_api_key,
            service_account_file=settings.service_account_file,
            cache_ttl=settings.cache_ttl_seconds,
            timeout=settings.request_timeout,
        )

    def load_tab(self, tab: str) -> PlayerStats:
        """Fetch one tab and compute its stats (blocking)"""
        csv_text = self.fetcher.fetch_tab_csv(self.settings.sheet_id, tab)
        return compute_player_stats(tab, csv_text, self.settings.initial_capital)

    def _meta(self, started: float) -> dict:
        return {
            'sheetId': self.settings.sheet_id,
            'tabs': list(self.settings.tabs),
            'initialCapital': self.settings.initial_capital,
            'fetchedAt': datetime.now(timezone.utc).isoformat(),
            'ms': int((time.monotonic() - started) * 1000),
        }

    async def build(self) -> LeaderboardResult:
        """
        Build the ranked leaderboard

        Tabs are fetched concurrently. A tab that cannot be fetched fails the
        whole run: the result carries ok=False and the error message.
        """
        started = time.monotonic()
        logger.info(f"Building leaderboard for {len(self.settings.tabs)} tabs")

        try:
            players = await asyncio.gather(
                *(asyncio.to_thread(self.load_tab, tab) for tab in self.settings.tabs)
            )
        except LeaderboardError as e:
            logger.error(f"Leaderboard failed: {e}")
            return LeaderboardResult(ok=False, error=str(e), meta=self._meta(started))

        ranked = rank_players(players, self.settings.sort_key)
        result = LeaderboardResult(ok=True, players=ranked, meta=self._meta(started))
        logger.info(f"Leaderboard ready: {len(ranked)} players in {result.meta['ms']} ms")
        return result

    def print_summary(self, result: LeaderboardResult):
        """Log the ranked table"""
        if not result.ok:
            logger.info(f"No leaderboard: {result.error}")
            return

        logger.info("=== LEADERBOARD ===")
        logger.info(f"Initial capital: {format_money(self.settings.initial_capital)}")
        for rank, player in enumerate(result.players, start=1):
            logger.info(
                f"{rank:>2}. {player.name:<15} {format_pct(player.return_pct):>9}  "
                f"P/L {format_money(player.total_pl):>12}  equity {format_money(player.equity):>12}  "
                f"trades {player.trades}"
            )

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Investing challenge leaderboard from a Google Sheet.")
    parser.add_argument("--config", default=None, help="Settings YAML (defaults to the packaged settings.yaml).")
    parser.add_argument("--csv", default=None, metavar="DIR", help="Also export the ranking to CSV in DIR.")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON.")
    parser.add_argument("--log-level", default=None, help="Override the configured log level.")
    parser.add_argument("--log-dir", default=None, help="Also write a debug log file to this directory.")
    return parser.parse_args(argv)

async def run(argv: Optional[List[str]] = None) -> LeaderboardResult:
    """Load settings, build the leaderboard and report it"""
    args = parse_args(argv)
    setup_logger(log_level=args.log_level or "INFO", log_dir=args.log_dir)
    settings = load_settings(args.config)
    if not args.log_level:
        setup_logger(log_level=settings.log_level)

    builder = LeaderboardBuilder(settings)
    result = await builder.build()
    builder.print_summary(result)

    if args.csv and result.ok:
        exporter = CSVExporter(args.csv)
        csv_file = exporter.export_to_csv(result.players)
        summary_file = exporter.export_summary(result)
        logger.info(f"CSV file: {csv_file}")
        logger.info(f"Summary report: {summary_file}")

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))

    return result

def main(argv: Optional[List[str]] = None) -> int:
    """Entry point"""
    try:
        result = asyncio.run(run(argv))
    except SettingsError as e:
        logger.error(f"Invalid settings: {e}")
        return 1
    return 0 if result.ok else 1

if __name__ == "__main__":
    raise SystemExit(main())
