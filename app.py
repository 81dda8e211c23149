# app.py
from typing import Optional
from textual.app import App
from network.runner import CommandRunner
from state import NetworkRecord, ProvisionSettings
from logger import log


class StaticIPApp(App):
    """Automated static IP configuration."""

    CSS = """
    Screen {
        background: $surface;
    }
    .title {
        text-style: bold;
        color: $accent;
        margin-bottom: 1;
    }
    #content {
        margin: 1 2;
    }
    #nav_buttons {
        dock: bottom;
        height: 3;
        align: center middle;
        margin: 1 2;
    }
    Button {
        margin: 0 1;
    }
    #err_msg {
        margin-top: 1;
        color: $error;
    }
    #warn_msg {
        color: $warning;
    }
    DataTable {
        height: 9;
    }
    #progress_log {
        height: 1fr;
        border: solid $primary;
    }
    #countdown_label {
        margin-top: 1;
    }
    ProgressBar {
        margin: 1 0;
    }
    """

    def __init__(
        self,
        settings: Optional[ProvisionSettings] = None,
        runner: Optional[CommandRunner] = None,
    ) -> None:
        super().__init__()
        self.settings = settings or ProvisionSettings()
        self.runner = runner or CommandRunner()
        self.record: Optional[NetworkRecord] = None
        self.report = None
        # True while the provisioning thread runs; quitting is refused then
        self.provisioning = False
        log.info("StaticIPApp started")

    async def on_mount(self) -> None:
        from screens.s01_detect import DetectScreen
        await self.push_screen(DetectScreen())

    async def action_quit(self) -> None:
        """Quit key: cancels inside the window, ignored while applying."""
        from screens.s01_detect import DetectScreen
        if self.provisioning:
            log.info("Quit requested during provisioning; ignored")
            self.notify(
                "Network configuration is being applied and cannot be interrupted.",
                severity="warning",
            )
            return
        if isinstance(self.screen, DetectScreen):
            self.screen.action_cancel()
            return
        self.exit(return_code=0 if self.report is not None else 1)
