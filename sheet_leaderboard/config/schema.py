"""
Data schema definitions for sheet extraction and leaderboard results
"""
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any
from .enums import SectionRole, ColumnKind, SortKey

DEFAULT_INITIAL_CAPITAL = 10000.0

Grid = List[List[str]]

@dataclass
class HeaderMatch:
    """Location of a header row and the column of each required header"""
    row_index: int
    columns: Dict[str, int] = field(default_factory=dict)

@dataclass
class Position:
    """One row of the open positions table"""
    quantity: float = 0.0
    open_price: Optional[float] = None
    current_price: Optional[float] = None
    unrealized_gain: float = 0.0

@dataclass
class OpenPositions:
    positions: List[Position] = field(default_factory=list)
    unrealized_total: float = 0.0

@dataclass
class JournalTotals:
    """Cash received / paid sums scanned from the trade journal"""
    credits_total: float = 0.0
    debits_total: float = 0.0
    trades: int = 0
    last_activity: Optional[str] = None  # raw cell text, not parsed

@dataclass(frozen=True)
class JournalColumn:
    """One header of the dual-section journal layout"""
    header: str
    role: SectionRole
    kind: ColumnKind

# Credits section on the left, debits section on the right, sharing one header row
JOURNAL_LAYOUT = (
    JournalColumn("action", SectionRole.CREDITS, ColumnKind.ACTION),
    JournalColumn("date & time", SectionRole.CREDITS, ColumnKind.TIMESTAMP),
    JournalColumn("total $ received", SectionRole.CREDITS, ColumnKind.AMOUNT),
    JournalColumn("status", SectionRole.CREDITS, ColumnKind.STATUS),
    JournalColumn("action", SectionRole.DEBITS, ColumnKind.ACTION),
    JournalColumn("date & time", SectionRole.DEBITS, ColumnKind.TIMESTAMP),
    JournalColumn("total $ paid", SectionRole.DEBITS, ColumnKind.AMOUNT),
)

@dataclass(frozen=True)
class StatsDetails:
    credits_total: float = 0.0
    debits_total: float = 0.0

@dataclass(frozen=True)
class PlayerStats:
    """Performance stats for one participant tab"""

    name: str
    realized_pl: float
    unrealized_pl: float
    total_pl: float
    return_pct: float  # 0.12 => +12%
    equity: float  # initial capital + total P/L
    trades: int
    last_activity: Optional[str] = None
    details: StatsDetails = field(default_factory=StatsDetails)

    def sort_value(self, key: SortKey):
        return self.to_dict()[key.value]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape served by the leaderboard API"""
        return {
            'name': self.name,
            'realizedPL': self.realized_pl,
            'unrealizedPL': self.unrealized_pl,
            'totalPL': self.total_pl,
            'returnPct': self.return_pct,
            'equity': self.equity,
            'trades': self.trades,
            'lastActivity': self.last_activity,
            'details': {
                'creditsTotal': self.details.credits_total,
                'debitsTotal': self.details.debits_total,
            },
        }

@dataclass
class LeaderboardSettings:
    """Resolved configuration for one leaderboard run"""
    sheet_id: str
    tabs: List[str] = field(default_factory=list)
    initial_capital: float = DEFAULT_INITIAL_CAPITAL
    google_sheets_api_key: Optional[str] = None
    service_account_file: Optional[str] = None
    cache_ttl_seconds: int = 60
    request_timeout: int = 30
    sort_key: SortKey = SortKey.RETURN_PCT
    log_level: str = "INFO"

@dataclass
class LeaderboardResult:
    """Ranked players plus request metadata, or the error that stopped the run"""
    ok: bool
    players: List[PlayerStats] = field(default_factory=list)
    error: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        if self.ok:
            return {'ok': True, 'data': [p.to_dict() for p in self.players], 'meta': self.meta}
        return {'ok': False, 'error': self.error, 'meta': self.meta}
