import logging
import sys
from collections import OrderedDict
from typing import List, Optional

from lesh.config import HISTORY_LIMIT, HISTORY_MAX_SIZE
from lesh.parser import Command

try:
    import readline
except ImportError:
    readline = None

logger = logging.getLogger(__name__)


def init_readline():
    """Configure readline so the prompt edits like a Linux terminal"""
    if readline is None:
        return
    try:
        if not sys.stdin.isatty():
            return

        # Arrow keys walk through the lines typed in this session
        readline.parse_and_bind("\\e[A: previous-history")
        readline.parse_and_bind("\\e[B: next-history")

        # Ctrl+Left/Right jump between words
        readline.parse_and_bind("\\e[1;5D: backward-word")
        readline.parse_and_bind("\\e[1;5C: forward-word")

        readline.parse_and_bind("set editing-mode emacs")
    except Exception as e:
        print(f"Warning: Could not configure readline: {e}", file=sys.stderr)


class HistoryStore:
    """
    Recently executed commands, most recent first.

    Rank 0 is the most recently recorded command. Re-recording a command
    that is already stored moves it back to rank 0 instead of adding a
    second copy; recording past capacity drops the oldest entry.
    """

    def __init__(self, max_size: int = HISTORY_MAX_SIZE):
        if not 1 <= max_size <= HISTORY_LIMIT:
            raise ValueError(f"history size must be between 1 and {HISTORY_LIMIT}, got {max_size}")
        self.max_size = max_size
        # Command -> None, front of the dict is rank 0
        self._entries: "OrderedDict[Command, None]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, cmd: Command) -> bool:
        return cmd in self._entries

    def record_executed(self, cmd: Command):
        """Put cmd at rank 0, evicting the least recently used entry if full"""
        self._entries[cmd] = None
        self._entries.move_to_end(cmd, last=False)
        while len(self._entries) > self.max_size:
            evicted, _ = self._entries.popitem(last=True)
            logger.debug("history full, evicted %s", evicted)

    def get_by_display_index(self, index: int) -> Optional[Command]:
        """
        Resolve a 1-based index as typed by the user.
        Returns: the command (1 = most recent) or None when out of range
        """
        if index < 1 or index > len(self._entries):
            return None
        for rank, cmd in enumerate(self._entries):
            if rank == index - 1:
                return cmd
        return None

    def list(self) -> List[Command]:
        """Snapshot of the store, most recent first"""
        return list(self._entries)

    def clear(self):
        self._entries.clear()
