# tests/conftest.py
import sys, os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import json
import pytest
from network.runner import CommandResult
from state import NetworkRecord, ProvisionSettings


class FakeRunner:
    """Stand-in for CommandRunner: canned results keyed by argv, calls recorded."""

    def __init__(self, responses=None, tools=("ip", "netplan", "ufw", "ping")):
        self.responses = dict(responses or {})
        self.tools = set(tools)
        self.calls = []

    def set(self, args, stdout="", returncode=0, stderr=""):
        self.responses[tuple(args)] = CommandResult(
            args=list(args), returncode=returncode, stdout=stdout, stderr=stderr
        )

    def set_json(self, args, data):
        self.set(args, stdout=json.dumps(data))

    def run(self, args, timeout=None):
        args = list(args)
        self.calls.append(args)
        if tuple(args) in self.responses:
            return self.responses[tuple(args)]
        return CommandResult(args=args, returncode=0)

    def which(self, name):
        return f"/usr/sbin/{name}" if name in self.tools else None

    def commands(self):
        return [" ".join(c) for c in self.calls]


DEFAULT_ROUTE = [{"dst": "default", "gateway": "192.168.1.1", "dev": "eth0",
                  "protocol": "dhcp", "flags": []}]
ETH0_ADDR = [{"ifindex": 2, "ifname": "eth0", "flags": ["BROADCAST", "UP"],
              "addr_info": [{"family": "inet", "local": "192.168.1.50",
                             "prefixlen": 24}]}]


def live_network(runner, route=DEFAULT_ROUTE, addr=ETH0_ADDR):
    runner.set_json(["ip", "-j", "route", "show", "default"], route)
    runner.set_json(["ip", "-j", "addr", "show", "eth0"], addr)
    return runner


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def settings(tmp_path):
    return ProvisionSettings(
        netplan_dir=str(tmp_path),
        cancel_window=0,
        settle_delay=0,
        summary_hold=0,
        public_ip_url="https://ip.example.test/ip",
    )


@pytest.fixture
def record():
    return NetworkRecord(
        interface="eth0",
        current_address="192.168.1.50",
        subnet_prefix=24,
        gateway="192.168.1.1",
        static_address="192.168.1.60",
        dns_servers=["8.8.8.8", "1.1.1.1"],
    )
