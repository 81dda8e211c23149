# screens/s02_provision.py
from __future__ import annotations
import asyncio
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Footer, Button, Static, Log
from textual.containers import Container, Vertical
from textual.css.query import NoMatches
from widgets.app_header import AppHeader
from provision import run_provisioning
from logger import log


class ProvisionScreen(Screen):
    """Step 2: write, apply, firewall and connectivity, streamed into a log."""

    def __init__(self) -> None:
        super().__init__()
        self._task = None

    def compose(self) -> ComposeResult:
        yield AppHeader()
        with Vertical(id="content"):
            yield Static("Applying Network Configuration", classes="title")
            yield Log(id="progress_log", auto_scroll=True)
            yield Static("", id="err_msg", markup=False)
        with Container(id="nav_buttons"):
            yield Button("Exit", id="btn_exit", variant="error", disabled=True)
        yield Footer()

    async def on_mount(self) -> None:
        self._task = asyncio.create_task(self._provision())

    def on_unmount(self) -> None:
        if self._task:
            self._task.cancel()

    def _write_line(self, message: str) -> None:
        self.query_one("#progress_log", Log).write_line(message)

    def _progress_to(self, app):
        def progress(message: str) -> None:
            """Called from the worker thread; the run goes on if the UI is gone."""
            try:
                app.call_from_thread(self._write_line, message)
            except (RuntimeError, NoMatches) as e:
                log.debug("Progress line not shown (%r): %s", e, message)
        return progress

    async def _provision(self) -> None:
        app = self.app
        progress = self._progress_to(app)
        loop = asyncio.get_running_loop()
        app.provisioning = True
        try:
            report = await loop.run_in_executor(
                None,
                lambda: run_provisioning(
                    app.record, app.settings, app.runner, progress=progress
                ),
            )
        except OSError as e:
            log.error("Step 2 provisioning failed: %s", e)
            self.query_one("#err_msg", Static).update(
                f"Error writing network configuration: {e}"
            )
            self.query_one("#btn_exit", Button).disabled = False
            return
        finally:
            app.provisioning = False

        app.report = report
        from screens.s03_summary import SummaryScreen
        app.push_screen(SummaryScreen())

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn_exit":
            self.app.exit(return_code=1)
