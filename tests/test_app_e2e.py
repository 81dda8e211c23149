# tests/test_app_e2e.py
"""
End-to-end headless Pilot tests for the static IP app.

The command runner is faked, the netplan directory is a temp dir and the
public IP lookup is mocked, so the tests run without root and without
touching the host.
"""
from __future__ import annotations

import asyncio

import pytest
import respx
from httpx import Response
from textual.widgets import DataTable, Static

from conftest import FakeRunner, live_network
from report import build_summary


async def _wait_for_screen(pilot, name: str, tries: int = 40) -> None:
    for _ in range(tries):
        if type(pilot.app.screen).__name__ == name:
            return
        await pilot.pause(0.1)
    pytest.fail(f"Expected {name}, got {type(pilot.app.screen).__name__}")


@pytest.mark.asyncio
async def test_detect_screen_shows_detected_settings(settings):
    """Screen 1 lists the detected values and marks placeholders."""
    from app import StaticIPApp

    settings.cancel_window = 30
    runner = FakeRunner()
    runner.set_json(["ip", "-j", "route", "show", "default"], [])
    runner.set_json(["ip", "-j", "addr", "show"], [{"ifname": "eth0"}])
    runner.set_json(["ip", "-j", "addr", "show", "eth0"], [{
        "ifname": "eth0",
        "addr_info": [{"family": "inet", "local": "192.168.1.50", "prefixlen": 24}],
    }])

    app = StaticIPApp(settings=settings, runner=runner)
    async with app.run_test(headless=True, size=(120, 50)) as pilot:
        await _wait_for_screen(pilot, "DetectScreen")
        table = pilot.app.screen.query_one("#settings_table", DataTable)
        for _ in range(20):
            if table.row_count:
                break
            await pilot.pause(0.1)
        assert table.row_count == 6
        assert pilot.app.record.static_address == "192.168.1.60"
        assert pilot.app.record.fallbacks == ["gateway"]
        gateway_row = table.get_row_at(4)
        assert list(gateway_row) == ["Gateway", "192.168.1.1", "default"]
        await pilot.press("escape")

    assert app.return_code == 130


@pytest.mark.asyncio
async def test_cancel_makes_no_changes(settings, tmp_path):
    """Cancelling inside the window exits 130 and writes nothing."""
    from app import StaticIPApp

    settings.cancel_window = 30
    runner = live_network(FakeRunner())
    app = StaticIPApp(settings=settings, runner=runner)
    async with app.run_test(headless=True, size=(120, 50)) as pilot:
        await _wait_for_screen(pilot, "DetectScreen")
        await pilot.pause(0.3)
        await pilot.click("#btn_cancel")
        await pilot.pause(0.2)

    assert app.return_code == 130
    assert list(tmp_path.iterdir()) == []
    assert not any(c[0] in ("netplan", "ufw", "ping") for c in runner.calls)


@pytest.mark.asyncio
@respx.mock
async def test_full_run_exits_by_itself(settings, tmp_path):
    """Once started the app provisions, shows the summary and exits 0 untouched."""
    from app import StaticIPApp

    respx.get(settings.public_ip_url).mock(return_value=Response(200, text="203.0.113.5"))
    runner = live_network(FakeRunner())
    app = StaticIPApp(settings=settings, runner=runner)

    await asyncio.wait_for(app.run_async(headless=True, size=(120, 50)), timeout=20)

    assert app.return_code == 0
    assert app.report is not None
    assert "Static IP: 192.168.1.60/24" in build_summary(app.report)
    content = (tmp_path / "01-static-ip.yaml").read_text()
    assert "addresses: [192.168.1.60/24]" in content
    assert "netplan apply" in runner.commands()
    assert app.record.public_address == "203.0.113.5"


@pytest.mark.asyncio
@respx.mock
async def test_summary_finish_button_exits_before_hold(settings):
    from app import StaticIPApp

    respx.get(settings.public_ip_url).mock(return_value=Response(200, text="203.0.113.5"))
    settings.summary_hold = 60
    app = StaticIPApp(settings=settings, runner=live_network(FakeRunner()))
    async with app.run_test(headless=True, size=(120, 50)) as pilot:
        await _wait_for_screen(pilot, "SummaryScreen", tries=60)
        assert app.return_code is None
        assert pilot.app.screen.query_one("#summary", Static) is not None
        await pilot.click("#btn_finish")
        await pilot.pause(0.2)

    assert app.return_code == 0


@pytest.mark.asyncio
@respx.mock
async def test_quit_key_ignored_while_provisioning(settings):
    """ctrl+q during provisioning neither exits nor cuts the run short."""
    from app import StaticIPApp

    respx.get(settings.public_ip_url).mock(return_value=Response(200, text="203.0.113.5"))
    settings.settle_delay = 1
    settings.summary_hold = 60
    runner = live_network(FakeRunner())
    app = StaticIPApp(settings=settings, runner=runner)
    async with app.run_test(headless=True, size=(120, 50)) as pilot:
        await _wait_for_screen(pilot, "ProvisionScreen")
        await pilot.press("ctrl+q")
        await pilot.pause(0.2)
        assert app.return_code is None

        await _wait_for_screen(pilot, "SummaryScreen", tries=60)
        commands = runner.commands()
        assert "ufw --force enable" in commands
        assert "ufw allow 443/tcp comment HTTPS" in commands
        assert "ping -c 2 -W 3 192.168.1.1" in commands
        assert "ping -c 2 -W 3 8.8.8.8" in commands
        assert app.report is not None

        await pilot.press("ctrl+q")
        await pilot.pause(0.2)

    assert app.return_code == 0


@pytest.mark.asyncio
async def test_quit_key_in_window_cancels(settings, tmp_path):
    """ctrl+q inside the cancel window is a cancel: exit 130, nothing written."""
    from app import StaticIPApp

    settings.cancel_window = 30
    runner = live_network(FakeRunner())
    app = StaticIPApp(settings=settings, runner=runner)
    async with app.run_test(headless=True, size=(120, 50)) as pilot:
        await _wait_for_screen(pilot, "DetectScreen")
        await pilot.pause(0.3)
        await pilot.press("ctrl+q")
        await pilot.pause(0.2)

    assert app.return_code == 130
    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_header_shows_target_after_detection(settings):
    from app import StaticIPApp
    from widgets.app_header import AppHeader, target_line

    settings.cancel_window = 30
    app = StaticIPApp(settings=settings, runner=live_network(FakeRunner()))
    async with app.run_test(headless=True, size=(120, 50)) as pilot:
        await _wait_for_screen(pilot, "DetectScreen")
        for _ in range(20):
            if pilot.app.record is not None:
                break
            await pilot.pause(0.1)
        assert pilot.app.screen.query_one(AppHeader) is not None
        assert target_line(pilot.app.record) == (
            "eth0: 192.168.1.50 -> 192.168.1.60/24 via 192.168.1.1"
        )
        await pilot.press("escape")


@pytest.mark.asyncio
async def test_write_error_shows_message(settings, tmp_path):
    """An unwritable netplan dir is reported on screen and Exit is enabled."""
    from app import StaticIPApp
    from textual.widgets import Button

    settings.netplan_dir = str(tmp_path / "missing")
    runner = live_network(FakeRunner())
    app = StaticIPApp(settings=settings, runner=runner)
    async with app.run_test(headless=True, size=(120, 50)) as pilot:
        await _wait_for_screen(pilot, "ProvisionScreen")
        btn = pilot.app.screen.query_one("#btn_exit", Button)
        for _ in range(30):
            if not btn.disabled:
                break
            await pilot.pause(0.1)
        else:
            pytest.fail("btn_exit never became enabled")
        assert pilot.app.report is None
        await pilot.click("#btn_exit")
        await pilot.pause(0.2)

    assert app.return_code == 1
