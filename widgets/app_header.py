# widgets/app_header.py
from __future__ import annotations
from typing import Optional
import pyfiglet
from textual.widgets import Static
from state import NetworkRecord

_ASCII = pyfiglet.figlet_format("auto-static-ip", font="small").rstrip("\n")


def target_line(record: Optional[NetworkRecord]) -> str:
    """One-line `iface: current -> static/prefix via gateway` status."""
    if record is None:
        return "detecting network settings…"
    line = (
        f"{record.interface}: {record.current_address} -> "
        f"{record.static_cidr} via {record.gateway}"
    )
    if record.fallbacks:
        line += f"  [placeholder: {', '.join(record.fallbacks)}]"
    return line


class AppHeader(Static):
    """Banner plus the provisioning target, shown on every screen."""

    DEFAULT_CSS = """
    AppHeader {
        color: #22c55e;
        text-style: bold;
        width: 100%;
        padding: 0 2;
    }
    """

    def __init__(self) -> None:
        super().__init__(_ASCII, markup=False)

    def on_mount(self) -> None:
        self.show_record(self.app.record)

    def show_record(self, record: Optional[NetworkRecord]) -> None:
        self.update(f"{_ASCII}\n{target_line(record)}")
