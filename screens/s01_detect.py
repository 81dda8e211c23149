# screens/s01_detect.py
from __future__ import annotations
import asyncio
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Footer, Button, Static, DataTable, ProgressBar
from textual.containers import Container, Vertical
from widgets.app_header import AppHeader
from network.interfaces import discover_network
from provision import record_warnings
from logger import log

CANCEL_RETURN_CODE = 130


class DetectScreen(Screen):
    """Step 1: show detected settings, then count down the cancel window."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self) -> None:
        super().__init__()
        self._cancelled = False
        self._task = None

    def compose(self) -> ComposeResult:
        yield AppHeader()
        with Vertical(id="content"):
            yield Static("Detected Settings", classes="title")
            yield Static("Detecting network settings…", id="status_msg")
            yield DataTable(id="settings_table")
            yield Static("", id="warn_msg", markup=False)
            yield Static("", id="countdown_label")
            yield ProgressBar(id="countdown_bar", show_eta=False)
        with Container(id="nav_buttons"):
            yield Button("✗ Cancel", id="btn_cancel", variant="warning")
        yield Footer()

    async def on_mount(self) -> None:
        self._task = asyncio.create_task(self._detect_and_countdown())

    def on_unmount(self) -> None:
        if self._task:
            self._task.cancel()

    async def _detect_and_countdown(self) -> None:
        app = self.app
        loop = asyncio.get_running_loop()
        record = await loop.run_in_executor(
            None, lambda: discover_network(app.runner, app.settings)
        )
        if self._cancelled:
            return
        app.record = record
        self.query_one(AppHeader).show_record(record)

        table = self.query_one("#settings_table", DataTable)
        table.add_columns("Setting", "Value", "Source")
        rows = [
            ("Interface", record.interface, "interface"),
            ("Current IP", record.current_address, "current_address"),
            ("Static IP", record.static_address, None),
            ("Subnet", f"/{record.subnet_prefix}", "subnet_prefix"),
            ("Gateway", record.gateway, "gateway"),
            ("DNS Servers", ", ".join(record.dns_servers), None),
        ]
        for label, value, name in rows:
            if name is None:
                source = "computed"
            else:
                source = "default" if record.is_fallback(name) else "detected"
            table.add_row(label, value, source)

        warnings = record_warnings(record)
        if warnings:
            self.query_one("#warn_msg", Static).update(
                "\n".join(f"⚠ {w}" for w in warnings)
            )
        self.query_one("#status_msg", Static).update(
            "Proceeding with automatic configuration…"
        )

        window = app.settings.cancel_window
        bar = self.query_one("#countdown_bar", ProgressBar)
        label = self.query_one("#countdown_label", Static)
        bar.update(total=max(window, 1))
        for remaining in range(window, 0, -1):
            if self._cancelled:
                return
            label.update(
                f"Press [bold]ESC[/bold] / [bold]Ctrl+Q[/bold] or click [bold]Cancel[/bold] "
                f"within {remaining}s to cancel…"
            )
            bar.advance(1)
            await asyncio.sleep(1)

        if self._cancelled:
            return
        log.info("Step 1: cancel window elapsed, starting provisioning")
        from screens.s02_provision import ProvisionScreen
        app.provisioning = True
        self.app.push_screen(ProvisionScreen())

    def action_cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        log.info("Step 1: cancelled by operator, no changes made")
        self.app.exit(return_code=CANCEL_RETURN_CODE,
                      message="Cancelled. No changes were made.")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn_cancel":
            self.action_cancel()
