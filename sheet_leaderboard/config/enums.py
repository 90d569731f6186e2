"""
Enum definitions for journal layout roles and leaderboard ordering
"""
from enum import Enum

class SectionRole(Enum):
    CREDITS = "CREDITS"
    DEBITS = "DEBITS"

class ColumnKind(Enum):
    ACTION = "ACTION"
    TIMESTAMP = "TIMESTAMP"
    STATUS = "STATUS"
    AMOUNT = "AMOUNT"

class SortKey(Enum):
    RETURN_PCT = "returnPct"
    TOTAL_PL = "totalPL"
    EQUITY = "equity"
    REALIZED_PL = "realizedPL"
    UNREALIZED_PL = "unrealizedPL"
    TRADES = "trades"
    NAME = "name"

class FetchSource(Enum):
    GVIZ = "GVIZ"
    SHEETS_API = "SHEETS_API"
    CACHE = "CACHE"
