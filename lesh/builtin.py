import logging
import os
import sys
from typing import Optional, Sequence

from lesh.config import (
    CHANGE_DIRECTORY_COMMAND,
    CHANGE_TO_LAST_DIRECTORY_COMMAND,
    DISPLAY_HISTORY_COMMAND,
    EXECUTE_HISTORY_COMMAND,
    HISTORY_DEFAULT_DISPLAY_SIZE,
    SHELL_NAME,
)
from lesh.outcome import ExecutionOutcome
from lesh.parser import Command
from lesh.session import Session

logger = logging.getLogger(__name__)

# Commands that may never be the target of a replay
NOT_REPLAYABLE = (EXECUTE_HISTORY_COMMAND, DISPLAY_HISTORY_COMMAND)


def print_error(builtin: str, message: str):
    """Print a one line diagnostic: '<shell>: <builtin>: <message>'"""
    print(f"{SHELL_NAME}: {builtin}: {message}", file=sys.stderr)


def fail(builtin: str, message: str) -> ExecutionOutcome:
    print_error(builtin, message)
    return ExecutionOutcome.failed(f"{builtin}: {message}")


def parse_index(text: str) -> Optional[int]:
    """Parse a non-negative decimal number, None if text is anything else"""
    if text.isascii() and text.isdigit():
        return int(text)
    return None


def builtin_history(session: Session, args: Sequence[str]) -> ExecutionOutcome:
    """Print the most recent entries, oldest first so that entry 1 comes last"""
    count = HISTORY_DEFAULT_DISPLAY_SIZE
    if len(args) > 1:
        return fail(DISPLAY_HISTORY_COMMAND, "too many parameters")
    if args:
        count = parse_index(args[0])
        if count is None:
            return fail(DISPLAY_HISTORY_COMMAND, "invalid parameter")

    entries = session.history.list()
    if not entries:
        print(f"{SHELL_NAME}: {DISPLAY_HISTORY_COMMAND}: empty")
        return ExecutionOutcome.handled()

    count = min(count, session.history.max_size)
    for index in range(min(count, len(entries)), 0, -1):
        print(f"{SHELL_NAME}: {EXECUTE_HISTORY_COMMAND} {index}: {entries[index - 1]}")
    return ExecutionOutcome.handled()


def resolve_history_command(session: Session, args: Sequence[str]) -> Optional[Command]:
    """
    Look up the command a `! N` replay refers to.
    Returns: the stored command, or None after reporting why it could not be resolved
    """
    if len(args) > 1:
        print_error(EXECUTE_HISTORY_COMMAND, "too many parameters")
        return None
    if not args:
        print_error(EXECUTE_HISTORY_COMMAND, "missing parameter")
        return None

    index = parse_index(args[0])
    cmd = session.history.get_by_display_index(index) if index is not None else None
    if cmd is None:
        size = len(session.history)
        print_error(EXECUTE_HISTORY_COMMAND,
                    f"invalid parameter (min={1 if size else 0} max={size})")
        return None
    if cmd.name in NOT_REPLAYABLE:
        print_error(EXECUTE_HISTORY_COMMAND, f"invalid parameter (cannot replay '{cmd.name}')")
        return None

    logger.debug("! %s resolved to %s", index, cmd)
    return cmd


def expand_directory(session: Session, path: str) -> Optional[str]:
    """
    Expand a `cd` argument: empty means "/", a leading ~ means home.
    Returns: the path to change to, or None if home could not be found
    """
    if not path:
        return "/"
    if path.startswith("~"):
        home = session.home_directory()
        if home is None:
            print_error("~", "failed to find home directory")
            return None
        path = home + path[1:]
    return path


def change_directory(session: Session, builtin: str, path: str) -> ExecutionOutcome:
    """chdir to path, remembering the directory we came from on success"""
    try:
        previous = os.getcwd()
    except OSError:
        # Current directory was removed from under us
        previous = None
    try:
        os.chdir(path)
    except OSError as e:
        return fail(builtin, f"{path}: {e.strerror or e}")

    if previous is not None:
        session.last_working_directory = previous
    logger.debug("changed directory %s -> %s", previous, path)
    return ExecutionOutcome.handled()


def builtin_cd(session: Session, args: Sequence[str]) -> ExecutionOutcome:
    """Change directory"""
    if len(args) > 1:
        return fail(CHANGE_DIRECTORY_COMMAND, "too many parameters")

    path = expand_directory(session, args[0] if args else "")
    if path is None:
        return ExecutionOutcome.failed("~: failed to find home directory")
    return change_directory(session, CHANGE_DIRECTORY_COMMAND, path)


def builtin_cdl(session: Session, args: Sequence[str]) -> ExecutionOutcome:
    """Change back to the directory before the last successful cd"""
    if args:
        return fail(CHANGE_TO_LAST_DIRECTORY_COMMAND, "too many parameters")
    if session.last_working_directory is None:
        return fail(CHANGE_TO_LAST_DIRECTORY_COMMAND, "no previous directory")
    return change_directory(session, CHANGE_TO_LAST_DIRECTORY_COMMAND,
                            session.last_working_directory)


# Builtins that run after the command has been recorded in history
BUILTINS = {
    CHANGE_DIRECTORY_COMMAND: builtin_cd,
    CHANGE_TO_LAST_DIRECTORY_COMMAND: builtin_cdl,
}
