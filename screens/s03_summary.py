# screens/s03_summary.py
from __future__ import annotations
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Button, Footer, Static
from textual.containers import Vertical, Horizontal, VerticalScroll
from widgets.app_header import AppHeader
from report import build_summary
from logger import log


class SummaryScreen(Screen):
    """Step 3: configuration summary; exits on its own after a short hold."""

    BINDINGS = [("q", "finish", "Finish")]

    def __init__(self) -> None:
        super().__init__()
        self._finished = False

    def compose(self) -> ComposeResult:
        yield AppHeader()
        with Vertical(id="content"):
            yield Static("Configuration Complete", classes="title")
            with VerticalScroll():
                yield Static("", id="summary", markup=False)
            yield Static("", id="hold_msg")
        with Horizontal(id="nav_buttons"):
            yield Button("✓ Finish & Exit", id="btn_finish", variant="success")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#summary", Static).update(build_summary(self.app.report))
        hold = self.app.settings.summary_hold
        if hold > 0:
            self.query_one("#hold_msg", Static).update(
                f"Exiting in {hold:g}s; the summary is printed to the terminal."
            )
            self.set_timer(hold, self.action_finish)
        else:
            self.call_after_refresh(self.action_finish)

    def action_finish(self) -> None:
        if self._finished:
            return
        self._finished = True
        log.info("Provisioning complete – exiting")
        self.app.exit(return_code=0)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn_finish":
            self.action_finish()
