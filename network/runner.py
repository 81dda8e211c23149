# network/runner.py
from __future__ import annotations
import shutil
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Sequence
from logger import log


@dataclass
class CommandResult:
    args: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command(self) -> str:
        return " ".join(self.args)


class CommandRunner:
    """Runs system commands and never raises for a failed or missing tool."""

    def run(self, args: Sequence[str], timeout: Optional[float] = None) -> CommandResult:
        args = list(args)
        log.debug("Running: %s", " ".join(args))
        try:
            proc = subprocess.run(
                args, capture_output=True, text=True, timeout=timeout
            )
        except FileNotFoundError:
            log.warning("Command not found: %s", args[0])
            return CommandResult(args=args, returncode=127,
                                 stderr=f"{args[0]}: command not found")
        except subprocess.TimeoutExpired:
            log.warning("Command timed out after %ss: %s", timeout, " ".join(args))
            return CommandResult(args=args, returncode=124, stderr="timeout")
        if proc.returncode != 0:
            log.debug("%s exited %d: %s", args[0], proc.returncode, proc.stderr.strip())
        return CommandResult(
            args=args,
            returncode=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name)
