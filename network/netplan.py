# network/netplan.py
from __future__ import annotations
import os
import shutil
import yaml
from datetime import datetime
from pathlib import Path
from typing import Optional, List
from logger import log
from network.runner import CommandRunner, CommandResult

CONFIG_FILENAME = "01-static-ip.yaml"
BACKUP_TAG = ".backup."


class NetplanDumper(yaml.SafeDumper):
    """Writes booleans as yes/no, the spelling netplan's own examples use."""


NetplanDumper.add_representer(
    bool,
    lambda dumper, value: dumper.represent_scalar(
        "tag:yaml.org,2002:bool", "yes" if value else "no"
    ),
)


class NetplanManager:
    def __init__(
        self,
        netplan_dir: str = "/etc/netplan",
        runner: Optional[CommandRunner] = None,
        filename: str = CONFIG_FILENAME,
    ):
        self.netplan_dir = Path(netplan_dir)
        self.runner = runner or CommandRunner()
        self.config_path = self.netplan_dir / filename

    @property
    def backup_glob(self) -> str:
        return str(self.netplan_dir / f"*{BACKUP_TAG}*")

    # -- Backup ------------------------------------------------------------

    def backup(self, now: Optional[datetime] = None) -> List[Path]:
        """Copy every existing .yaml file to <name>.backup.<timestamp>."""
        stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
        backups = []
        for f in sorted(self.netplan_dir.glob("*.yaml")):
            if not f.is_file():
                continue
            bak = f.with_name(f"{f.name}{BACKUP_TAG}{stamp}")
            shutil.copy2(f, bak)
            log.info(f"Backed up {f} -> {bak}")
            backups.append(bak)
        return backups

    # -- Write -------------------------------------------------------------

    def _write_yaml(self, config: dict) -> Path:
        path = self.config_path
        with open(path, "w") as f:
            # Flow style for leaf lists: addresses: [10.0.0.5/24]
            yaml.dump(config, f, Dumper=NetplanDumper,
                      default_flow_style=None, sort_keys=False)
        os.chmod(path, 0o600)
        log.info(f"Wrote netplan config to {path}")
        return path

    def write_static(
        self,
        iface: str,
        ip_cidr: str,
        gateway: str,
        dns: List[str],
    ) -> Path:
        ethernets_entry: dict = {
            "dhcp4": False,
            "addresses": [ip_cidr],
            "gateway4": gateway,
            "nameservers": {"addresses": list(dns)},
        }
        config = {
            "network": {
                "version": 2,
                "renderer": "networkd",
                "ethernets": {iface: ethernets_entry},
            }
        }
        return self._write_yaml(config)

    # -- Apply -------------------------------------------------------------

    def apply(self) -> List[CommandResult]:
        """
        Run `netplan generate` then `netplan apply`.

        Both steps always run; a non-zero exit is logged and returned to the
        caller rather than raised.
        """
        results = []
        for step in ("generate", "apply"):
            log.info(f"Running: netplan {step}")
            result = self.runner.run(["netplan", step])
            if not result.ok:
                log.warning(
                    "netplan %s exited %d: %s",
                    step, result.returncode, result.stderr.strip(),
                )
            results.append(result)
        return results
