# report.py
from __future__ import annotations
from typing import List
from provision import ProvisionReport
from state import NetworkRecord

PLACEHOLDER_MARK = " (default)"


def _mark(record: NetworkRecord, name: str) -> str:
    return PLACEHOLDER_MARK if record.is_fallback(name) else ""


def format_detected(record: NetworkRecord) -> str:
    lines = ["", "=== Detected Settings ==="]
    lines.append(f"Interface: {record.interface}{_mark(record, 'interface')}")
    lines.append(f"Current IP: {record.current_address}{_mark(record, 'current_address')}")
    lines.append(f"Static IP: {record.static_address}")
    lines.append(f"Subnet: /{record.subnet_prefix}{_mark(record, 'subnet_prefix')}")
    lines.append(f"Gateway: {record.gateway}{_mark(record, 'gateway')}")
    return "\n".join(lines)


def build_summary(report: ProvisionReport) -> str:
    rec = report.record
    lines: List[str] = ["", "=== Configuration Summary ==="]
    lines.append(f"Network Interface: {rec.interface}")
    lines.append(f"Static IP: {rec.static_cidr}")
    lines.append(f"Gateway: {rec.gateway}")
    lines.append(f"DNS Servers: {' '.join(rec.dns_servers)}")
    lines.append(f"Public IP: {rec.public_address}")
    lines.append(f"Config File: {report.config_path}")

    lines += ["", "=== Results ==="]
    for r in report.apply_results:
        lines.append(f"{'✓' if r.ok else '✗'} {r.command}")
    if report.firewall is not None:
        lines.append(f"Firewall: {report.firewall.describe()}")
    for check in report.checks:
        lines.append(str(check))

    if report.warnings:
        lines += ["", "=== Warnings ==="]
        lines += [f"! {w}" for w in report.warnings]

    lines += ["", "=== Next Steps ==="]
    lines.append(f"1. You can now access your machine at: {rec.static_address}")
    lines.append(f"2. Configure port forwarding on your router for: {rec.static_address}")
    lines.append(f"3. Backup created: {report.backup_glob}")

    lines += ["", "=== Router Port Forwarding ==="]
    lines.append(f"Access your router at: http://{rec.gateway}")
    lines.append(f"Forward ports to: {rec.static_address}")

    lines += ["", "=== Configuration Complete ==="]
    lines.append("You may need to restart for all changes to take full effect.")
    return "\n".join(lines)
