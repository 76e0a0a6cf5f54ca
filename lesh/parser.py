import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from lesh.config import COMMAND_SEPARATORS, WHITESPACE_CHARS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Command:
    """One command of an input line: a name and its arguments."""
    name: str
    arguments: Tuple[str, ...] = ()

    def __post_init__(self):
        # Accept any sequence but always store a tuple so the value stays hashable
        object.__setattr__(self, "arguments", tuple(self.arguments))

    def __str__(self) -> str:
        return " ".join((self.name,) + self.arguments)


def tokenize(line: str, whitespace: Sequence[str] = WHITESPACE_CHARS) -> List[str]:
    """
    Split a raw input line into words.
    Runs of whitespace collapse, so no empty word is ever produced.
    """
    words, cur = [], []
    for char in line:
        if char in whitespace:
            if cur:
                words.append("".join(cur))
                cur = []
        else:
            cur.append(char)
    if cur:
        words.append("".join(cur))
    return words


def split_commands(words: Sequence[str],
                   separators: Sequence[str] = COMMAND_SEPARATORS) -> List[Command]:
    """
    Group words into commands using the chain separators ("&&", ";").
    Returns: list of Command, empty runs between separators are skipped
    """
    commands, cur = [], []
    for word in words:
        if word in separators:
            if cur:
                commands.append(Command(cur[0], cur[1:]))
            cur = []
        else:
            cur.append(word)
    if cur:
        commands.append(Command(cur[0], cur[1:]))
    return commands


def parse_command(line: str) -> List[Command]:
    """Tokenize and split one input line."""
    commands = split_commands(tokenize(line))
    logger.debug("parsed %r into %s", line, commands)
    return commands
