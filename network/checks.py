# network/checks.py
from __future__ import annotations
import httpx
from dataclasses import dataclass
from typing import Optional, List, Callable
from logger import log
from network.runner import CommandRunner
from state import NetworkRecord, ProvisionSettings, UNKNOWN_PUBLIC_IP


@dataclass
class CheckResult:
    label: str
    target: str
    passed: bool
    error: str = ""

    @property
    def status_icon(self) -> str:
        return "✓" if self.passed else "✗"

    def __str__(self) -> str:
        status = "SUCCESS" if self.passed else "FAILED"
        if self.error:
            status = f"{status} ({self.error})"
        return f"{self.status_icon} {self.label} ({self.target}): {status}"


def check_icmp(
    runner: CommandRunner, host: str, *, label: str,
    count: int = 2, timeout: int = 3,
) -> CheckResult:
    """ICMP ping via 'ping -c<count> -W<timeout>'."""
    result = runner.run(
        ["ping", "-c", str(count), "-W", str(timeout), host],
        timeout=count * timeout + 5,
    )
    passed = result.ok
    log.info("ICMP check %s: %s", "PASS" if passed else "FAIL", host)
    error = ""
    if not passed:
        error = "timeout" if result.returncode == 124 else "no response"
    return CheckResult(label=label, target=host, passed=passed, error=error)


def fetch_public_ip(url: str, timeout: float = 5.0) -> str:
    """Return the address reported by `url`, or UNKNOWN_PUBLIC_IP on failure."""
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPError as e:
        log.warning("Public IP lookup failed: %s", e)
        return UNKNOWN_PUBLIC_IP
    address = response.text.strip()
    if not address:
        log.warning("Public IP lookup returned an empty body")
        return UNKNOWN_PUBLIC_IP
    log.info("Public IP: %s", address)
    return address


def run_connectivity_checks(
    record: NetworkRecord,
    settings: ProvisionSettings,
    runner: CommandRunner,
    progress: Optional[Callable[[str], None]] = None,
) -> List[CheckResult]:
    """Ping the gateway and the internet host, then look up the public IP."""
    emit = progress or (lambda msg: None)
    targets = [
        ("Gateway connectivity", record.gateway),
        ("Internet connectivity", settings.internet_probe),
    ]
    results: List[CheckResult] = []
    for label, host in targets:
        r = check_icmp(
            runner, host, label=label,
            count=settings.ping_count, timeout=settings.ping_timeout,
        )
        emit(str(r))
        results.append(r)

    emit("Fetching public IP...")
    record.public_address = fetch_public_ip(
        settings.public_ip_url, timeout=settings.public_ip_timeout
    )
    emit(f"Public IP: {record.public_address}")
    return results
