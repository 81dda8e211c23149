# validators.py
from __future__ import annotations
import ipaddress
from typing import Tuple

def validate_ip(address: str, prefix_len: int = None) -> Tuple[bool, str]:
    try:
        ip = ipaddress.IPv4Address(address)
    except ValueError:
        return False, f"'{address}' is not a valid IPv4 address."

    if prefix_len is not None and prefix_len < 31:
        net = ipaddress.IPv4Network(f"{address}/{prefix_len}", strict=False)
        if ip == net.network_address:
            return False, f"{address} is the network address of {net}."
        if ip == net.broadcast_address:
            return False, f"{address} is the broadcast address of {net}."

    return True, ""

def validate_prefix(prefix_len: int) -> Tuple[bool, str]:
    if isinstance(prefix_len, bool) or not isinstance(prefix_len, int) \
            or not (0 <= prefix_len <= 32):
        return False, f"Prefix length must be 0-32, got {prefix_len}."
    return True, ""
