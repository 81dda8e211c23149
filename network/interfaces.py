# network/interfaces.py
from __future__ import annotations
import json
from typing import Optional, List, Tuple
from logger import log
from network.allocator import allocate_static_address
from network.runner import CommandRunner
from state import (
    NetworkRecord, ProvisionSettings,
    DEFAULT_INTERFACE, DEFAULT_ADDRESS, DEFAULT_PREFIX, DEFAULT_GATEWAY,
)
from validators import validate_prefix


def _ip_json(runner: CommandRunner, *args: str) -> List[dict]:
    """Run `ip -j <args>` and return the parsed list, or [] on any failure."""
    result = runner.run(["ip", "-j", *args], timeout=5)
    if not result.ok or not result.stdout.strip():
        return []
    try:
        data = json.loads(result.stdout)
    except ValueError as e:
        log.debug(f"ip -j {' '.join(args)} returned invalid JSON: {e}")
        return []
    return data if isinstance(data, list) else []


def default_route(runner: CommandRunner) -> Tuple[Optional[str], Optional[str]]:
    """Return (interface, gateway) of the first default route."""
    for route in _ip_json(runner, "route", "show", "default"):
        dev = route.get("dev") or None
        gateway = route.get("gateway") or None
        return dev, gateway
    return None, None


def first_non_loopback(runner: CommandRunner) -> Optional[str]:
    for entry in _ip_json(runner, "addr", "show"):
        name = entry.get("ifname", "")
        if not name or name == "lo" or "LOOPBACK" in entry.get("flags", []):
            continue
        return name
    return None


def interface_address(runner: CommandRunner, iface: str) -> Tuple[Optional[str], Optional[int]]:
    """Return (address, prefixlen) of the first IPv4 address on `iface`."""
    for entry in _ip_json(runner, "addr", "show", iface):
        for ai in entry.get("addr_info", []):
            if ai.get("family") == "inet" and ai.get("local"):
                prefix = ai.get("prefixlen")
                ok, _ = validate_prefix(prefix)
                return ai["local"], prefix if ok else None
    return None, None


def discover_network(
    runner: CommandRunner, settings: Optional[ProvisionSettings] = None
) -> NetworkRecord:
    """
    Build the network record from the live routing table.

    Detection failures are never fatal. Each field that could not be
    detected gets its placeholder and is named in `record.fallbacks`.
    """
    settings = settings or ProvisionSettings()
    log.info("Detecting network settings")

    iface, gateway = default_route(runner)
    if not iface:
        iface = first_non_loopback(runner)
    address, prefix = interface_address(runner, iface) if iface else (None, None)

    fallbacks: List[str] = []
    if not iface:
        iface = DEFAULT_INTERFACE
        fallbacks.append("interface")
    if not address:
        address = DEFAULT_ADDRESS
        fallbacks.append("current_address")
    if prefix is None:
        prefix = DEFAULT_PREFIX
        fallbacks.append("subnet_prefix")
    if not gateway:
        gateway = DEFAULT_GATEWAY
        fallbacks.append("gateway")

    for name in fallbacks:
        log.warning("Could not detect %s; using placeholder value", name)

    record = NetworkRecord(
        interface=iface,
        current_address=address,
        subnet_prefix=prefix,
        gateway=gateway,
        static_address=allocate_static_address(address, settings.octet_offset),
        dns_servers=list(settings.dns_servers),
        fallbacks=fallbacks,
    )
    log.info(
        "Detected: iface=%s ip=%s/%s gw=%s -> static %s",
        record.interface, record.current_address, record.subnet_prefix,
        record.gateway, record.static_address,
    )
    return record
