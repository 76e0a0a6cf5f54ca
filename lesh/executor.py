import dataclasses
import logging
import signal
import sys
from typing import Callable, Sequence

import psutil

from lesh.builtin import BUILTINS, builtin_history, resolve_history_command
from lesh.config import DISPLAY_HISTORY_COMMAND, EXECUTE_HISTORY_COMMAND, SHELL_NAME
from lesh.outcome import ExecutionOutcome
from lesh.parser import Command
from lesh.session import Session

logger = logging.getLogger(__name__)

Launcher = Callable[[str, Sequence[str]], ExecutionOutcome]


def program_name(name: str) -> str:
    """argv[0] for a program: the name with any leading path stripped"""
    return name.rsplit("/", 1)[-1]


def _signal_name(signum: int) -> str:
    try:
        return signal.Signals(signum).name
    except ValueError:
        return f"signal {signum}"


def run_external(name: str, args: Sequence[str]) -> ExecutionOutcome:
    """
    Run an external program and wait for it to finish.
    `name` (bare or with a path) is looked up through PATH like execvp does,
    while the child only sees the bare program name as argv[0].
    Returns: handled with the exit code, or failed if it could not be started
    """
    argv = [program_name(name)] + list(args)
    try:
        proc = psutil.Popen(argv, executable=name)
    except OSError as e:
        # Unknown program, permission denied, or no resources to spawn
        print(f"{SHELL_NAME}: {name}: {e.strerror or e}", file=sys.stderr)
        return ExecutionOutcome.failed(f"{name}: {e.strerror or e}", status=127)

    logger.debug("started pid %s: %s", proc.pid, argv)

    # Ctrl+C reaches the child too; the shell keeps waiting until it is gone
    while True:
        try:
            status = proc.wait()
            break
        except KeyboardInterrupt:
            continue
        except psutil.Error as e:
            print(f"{SHELL_NAME}: {name}: {e}", file=sys.stderr)
            return ExecutionOutcome.failed(f"{name}: {e}")

    if status is None:
        # Already reaped elsewhere, exit code unknown
        status = 0
    status = int(status)
    if status < 0:
        print(f"{SHELL_NAME}: {name}: terminated by {_signal_name(-status)}", file=sys.stderr)
        status = 128 - status

    logger.debug("pid %s exited with %s", proc.pid, status)
    return ExecutionOutcome.handled(status)


class Dispatcher:
    """
    Decides what a command is and runs it.

    Order of checks:
      history   -> print the history, never recorded
      !         -> replaced by the history entry it names
      (record)  -> everything else is recorded before it runs
      cd, cdl   -> builtins
      otherwise -> external program
    """

    def __init__(self, session: Session, launcher: Launcher = run_external):
        self.session = session
        self.launcher = launcher

    def dispatch(self, cmd: Command) -> ExecutionOutcome:
        if not cmd.name:
            return ExecutionOutcome.handled()

        if cmd.name == DISPLAY_HISTORY_COMMAND:
            return builtin_history(self.session, cmd.arguments)

        if cmd.name == EXECUTE_HISTORY_COMMAND:
            resolved = resolve_history_command(self.session, cmd.arguments)
            if resolved is None:
                return ExecutionOutcome.failed(f"{EXECUTE_HISTORY_COMMAND}: invalid parameter")
            cmd = resolved

        self.session.history.record_executed(cmd)

        handler = BUILTINS.get(cmd.name)
        if handler is not None:
            logger.debug("builtin %s", cmd)
            outcome = handler(self.session, cmd.arguments)
        else:
            outcome = self.launcher(cmd.name, cmd.arguments)
        return dataclasses.replace(outcome, command=cmd)

