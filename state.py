# state.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple

DEFAULT_INTERFACE = "eth0"
DEFAULT_ADDRESS = "192.168.1.100"
DEFAULT_PREFIX = 24
DEFAULT_GATEWAY = "192.168.1.1"

UNKNOWN_PUBLIC_IP = "Unable to determine"


@dataclass(frozen=True)
class FirewallRule:
    port: int
    proto: str
    comment: str

    @property
    def spec(self) -> str:
        return f"{self.port}/{self.proto}"


@dataclass
class ProvisionSettings:
    netplan_dir: str = "/etc/netplan"
    config_filename: str = "01-static-ip.yaml"
    dns_servers: Tuple[str, ...] = ("8.8.8.8", "1.1.1.1")
    octet_offset: int = 10
    firewall_rules: Tuple[FirewallRule, ...] = (
        FirewallRule(22, "tcp", "SSH"),
        FirewallRule(80, "tcp", "HTTP"),
        FirewallRule(443, "tcp", "HTTPS"),
    )
    internet_probe: str = "8.8.8.8"
    ping_count: int = 2
    ping_timeout: int = 3
    public_ip_url: str = "https://ifconfig.me/ip"
    public_ip_timeout: float = 5.0

    # Seconds; zero disables the wait
    cancel_window: int = 5
    settle_delay: float = 8.0
    # Seconds the summary screen stays up before the app exits by itself
    summary_hold: float = 3.0


@dataclass
class NetworkRecord:
    interface: str = DEFAULT_INTERFACE
    current_address: str = DEFAULT_ADDRESS
    subnet_prefix: int = DEFAULT_PREFIX
    gateway: str = DEFAULT_GATEWAY
    static_address: str = ""
    dns_servers: List[str] = field(default_factory=list)

    # Set by the connectivity stage
    public_address: str = "unknown"

    # Names of fields that hold a placeholder instead of a detected value
    fallbacks: List[str] = field(default_factory=list)

    @property
    def static_cidr(self) -> str:
        return f"{self.static_address}/{self.subnet_prefix}"

    def is_fallback(self, name: str) -> bool:
        return name in self.fallbacks
