# network/firewall.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List
from logger import log
from network.runner import CommandRunner, CommandResult
from state import FirewallRule


@dataclass
class FirewallResult:
    available: bool
    results: List[CommandResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.available and all(r.ok for r in self.results)

    def describe(self) -> str:
        if not self.available:
            return "UFW not available, skipped"
        failed = [r.command for r in self.results if not r.ok]
        if failed:
            return "configured with errors: " + "; ".join(failed)
        return "enabled with basic rules"


def configure_firewall(
    runner: CommandRunner, rules: Iterable[FirewallRule]
) -> FirewallResult:
    """Enable ufw and allow `rules`. Skips quietly when ufw is not installed."""
    if not runner.which("ufw"):
        log.info("ufw not available, skipping firewall configuration")
        return FirewallResult(available=False)

    commands = [["ufw", "--force", "enable"]]
    for rule in rules:
        commands.append(["ufw", "allow", rule.spec, "comment", rule.comment])

    result = FirewallResult(available=True)
    for cmd in commands:
        r = runner.run(cmd, timeout=30)
        if r.ok:
            log.info("Firewall: %s", r.command)
        else:
            log.warning("Firewall command failed (%d): %s", r.returncode, r.command)
        result.results.append(r)
    return result
