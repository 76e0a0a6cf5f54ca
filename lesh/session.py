import os
from typing import Optional

from lesh.config import HISTORY_MAX_SIZE
from lesh.history import HistoryStore


class Session:
    """
    State shared by every command of one shell session.

    Holds the history store and the directory `cdl` returns to. Nothing in
    here is module-global, so tests can run several sessions side by side.
    """

    def __init__(self, history_size: int = HISTORY_MAX_SIZE):
        self.history = HistoryStore(history_size)
        self.last_working_directory: Optional[str] = None

    def home_directory(self) -> Optional[str]:
        return os.environ.get("HOME") or None
