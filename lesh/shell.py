import argparse
import logging
import os
import sys
from typing import List, Optional

from lesh.config import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_STYLE,
    DIRECTORY_STYLE,
    HISTORY_LIMIT,
    HISTORY_MAX_SIZE,
    LOG_LEVEL_ENV,
    QUIT_COMMANDS,
    SHELL_NAME,
    SHELL_STYLE,
    USER_STYLE,
)
from lesh.executor import Dispatcher
from lesh.history import init_readline
from lesh.outcome import ExecutionOutcome
from lesh.parser import Command, parse_command
from lesh.session import Session

logger = logging.getLogger(__name__)


class ExecutionBatch:
    """
    The commands parsed from one input line and what became of them.

    `executed` is the ledger of commands that ran during this line, most
    recent first, each command appearing once at the position of its latest
    run. It always matches the order those commands now have at the head of
    the history store.
    """

    def __init__(self, line: str):
        self.line = line
        self.commands: List[Command] = parse_command(line)
        self.executed: List[Command] = []
        self.outcomes: List[ExecutionOutcome] = []
        self.quit = False

    def run(self, dispatcher: Dispatcher) -> "ExecutionBatch":
        """Dispatch every command in order; a failed command never stops the chain"""
        for cmd in self.commands:
            if cmd.name in QUIT_COMMANDS:
                self.quit = True
                break

            outcome = dispatcher.dispatch(cmd)
            self.outcomes.append(outcome)
            if outcome.command is not None:
                if outcome.command in self.executed:
                    self.executed.remove(outcome.command)
                self.executed.insert(0, outcome.command)

        logger.debug("line %r executed %s", self.line, self.executed)
        return self


def prompt(color: Optional[bool] = None) -> str:
    """Generate shell prompt: lesh(user):/current/dir$ """
    if color is None:
        color = sys.stdout.isatty()
    shell = dirs = user_style = punct = ""
    if color:
        shell, user_style, dirs, punct = SHELL_STYLE, USER_STYLE, DIRECTORY_STYLE, DEFAULT_STYLE

    user = os.getenv("USER")
    user_part = f"{punct}({user_style}{user}{punct})" if user else ""
    try:
        cwd = os.getcwd()
    except OSError:
        cwd = ""
    return f"{shell}{SHELL_NAME}{user_part}{punct}:{dirs}{cwd}{punct}$ "


def run_line(dispatcher: Dispatcher, line: str) -> bool:
    """
    Execute one input line.
    Returns: False when the line asked the shell to quit
    """
    batch = ExecutionBatch(line).run(dispatcher)
    return not batch.quit


def main_loop(session: Optional[Session] = None) -> int:
    """Main shell loop"""
    dispatcher = Dispatcher(session or Session())
    init_readline()

    try:
        while True:
            try:
                line = input(prompt())
            except EOFError:
                print()
                break
            except KeyboardInterrupt:
                print()
                continue

            if not run_line(dispatcher, line):
                break
    except Exception as e:
        logger.exception("fatal error in main loop")
        print(f"{SHELL_NAME}: Fatal Exception: {e}", file=sys.stderr)
        return 1
    return 0


def _history_size(text: str) -> int:
    try:
        size = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid history size: {text!r}")
    if not 1 <= size <= HISTORY_LIMIT:
        raise argparse.ArgumentTypeError(f"history size must be between 1 and {HISTORY_LIMIT}")
    return size


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=SHELL_NAME,
        description="Interactive shell with chained commands and a replayable history.",
    )
    parser.add_argument(
        "--history-size",
        type=_history_size,
        default=HISTORY_MAX_SIZE,
        help=f"number of commands kept in history (1-{HISTORY_LIMIT}, default {HISTORY_MAX_SIZE})",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help=f"logging level (default from ${LOG_LEVEL_ENV} or {DEFAULT_LOG_LEVEL})",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logger.info("starting %s with history size %d", SHELL_NAME, args.history_size)
    return main_loop(Session(args.history_size))
