"""
Exceptions raised outside the extraction core
"""

class LeaderboardError(Exception):
    """Base class for errors that stop a leaderboard run"""

class SheetFetchError(LeaderboardError):
    """A participant tab could not be retrieved"""

    def __init__(self, tab: str, message: str):
        super().__init__(message)
        self.tab = tab

class SettingsError(LeaderboardError):
    """The settings file is missing or malformed"""
