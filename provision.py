# provision.py
from __future__ import annotations
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional
from logger import log
from network.checks import CheckResult, run_connectivity_checks
from network.firewall import FirewallResult, configure_firewall
from network.interfaces import discover_network
from network.netplan import NetplanManager
from network.runner import CommandRunner, CommandResult
from state import NetworkRecord, ProvisionSettings
from validators import validate_ip

Progress = Callable[[str], None]


@dataclass
class ProvisionReport:
    record: NetworkRecord
    config_path: Path
    backup_glob: str
    backups: List[Path] = field(default_factory=list)
    apply_results: List[CommandResult] = field(default_factory=list)
    firewall: Optional[FirewallResult] = None
    checks: List[CheckResult] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def record_warnings(record: NetworkRecord) -> List[str]:
    """Problems with the record that do not stop provisioning."""
    warnings = [
        f"{name} could not be detected; a placeholder value was used"
        for name in record.fallbacks
    ]
    ok, msg = validate_ip(record.static_address, record.subnet_prefix)
    if not ok:
        warnings.append(f"Static address is not usable: {msg}")
    return warnings


def run_provisioning(
    record: NetworkRecord,
    settings: ProvisionSettings,
    runner: CommandRunner,
    progress: Optional[Progress] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ProvisionReport:
    """
    Back up and write the netplan config, apply it, open the firewall and
    test connectivity, in that order.

    Only filesystem errors while writing the config propagate; every other
    failure is logged and recorded on the returned report.
    """
    emit = progress or (lambda msg: None)
    nm = NetplanManager(settings.netplan_dir, runner, settings.config_filename)
    report = ProvisionReport(
        record=record,
        config_path=nm.config_path,
        backup_glob=nm.backup_glob,
        warnings=record_warnings(record),
    )
    for w in report.warnings:
        log.warning(w)

    emit("Configuring static IP...")
    report.backups = nm.backup()
    for bak in report.backups:
        emit(f"Backup created: {bak}")
    nm.write_static(
        iface=record.interface,
        ip_cidr=record.static_cidr,
        gateway=record.gateway,
        dns=record.dns_servers,
    )
    emit(f"Wrote {nm.config_path}")

    emit("Applying network configuration...")
    report.apply_results = nm.apply()
    for r in report.apply_results:
        if not r.ok:
            report.warnings.append(f"'{r.command}' exited with status {r.returncode}")

    if settings.settle_delay > 0:
        emit("Waiting for network to stabilize...")
        sleep(settings.settle_delay)

    emit("Configuring firewall...")
    report.firewall = configure_firewall(runner, settings.firewall_rules)
    emit(f"Firewall: {report.firewall.describe()}")

    emit("Testing network connectivity...")
    report.checks = run_connectivity_checks(record, settings, runner, emit)

    log.info("Provisioning finished with %d warning(s)", len(report.warnings))
    return report


def run_unattended(
    settings: Optional[ProvisionSettings] = None,
    runner: Optional[CommandRunner] = None,
    out: Progress = print,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Plain-console run for when there is no terminal to draw the UI on."""
    from report import build_summary, format_detected

    settings = settings or ProvisionSettings()
    runner = runner or CommandRunner()

    out("=== Automated Static IP Configuration ===")
    out("Detecting network settings...")
    record = discover_network(runner, settings)
    out(format_detected(record))

    if settings.cancel_window > 0:
        out("Proceeding with automatic configuration...")
        out(f"Press Ctrl+C within {settings.cancel_window} seconds to cancel...")
        try:
            sleep(settings.cancel_window)
        except KeyboardInterrupt:
            log.info("Cancelled by operator before any change was made")
            out("Cancelled. No changes were made.")
            return 130

    report = run_provisioning(record, settings, runner, progress=out, sleep=sleep)
    out(build_summary(report))
    return 0
