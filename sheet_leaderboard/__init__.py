"""
Sheet Leaderboard

Turns loosely structured Google Sheets exports (one tab per participant)
into standardized trading performance stats and a ranked leaderboard.
"""

__version__ = "1.0.0"
__author__ = "Sheet Leaderboard Team"
