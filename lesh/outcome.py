from dataclasses import dataclass
from typing import Optional

from lesh.parser import Command


@dataclass(frozen=True)
class ExecutionOutcome:
    """
    Result of dispatching one command.

    `ok` is False only when the command could not be carried out at all
    (bad builtin parameters, unknown program, failed chdir). A program that
    ran and exited non-zero is still handled; its exit code is in `status`.
    `command` is the command that was actually executed and recorded, which
    differs from the typed one for a `!` replay.
    """
    ok: bool
    status: int = 0
    reason: Optional[str] = None
    command: Optional[Command] = None

    @classmethod
    def handled(cls, status: int = 0) -> "ExecutionOutcome":
        return cls(True, status)

    @classmethod
    def failed(cls, reason: str, status: int = 1) -> "ExecutionOutcome":
        return cls(False, status, reason)
