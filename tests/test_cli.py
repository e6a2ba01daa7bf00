"""Tests for nmbridge/cli.py - CLI integration tests using Click's CliRunner."""

from __future__ import annotations

import json
import logging
import sys

import pytest
from click.testing import CliRunner

from nmbridge.cli import cli, main, setup_logging
from nmbridge.exceptions import CommandFailureError, LaunchError, ToolError, UserError


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("NMBRIDGE_NMCLI", "NMBRIDGE_TIMEOUT", "NMBRIDGE_MOCK", "NMBRIDGE_MOCK_DELAY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def run_line(mocker):
    return mocker.patch("nmbridge.client.run_line", return_value="ok")


@pytest.fixture
def run_records(mocker):
    return mocker.patch("nmbridge.client.run_records", return_value=[])


class TestCliHelp:
    """Tests for CLI help output."""

    def test_main_help(self, runner: CliRunner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("hostname", "networking", "connection", "device", "wifi", "monitor"):
            assert command in result.output

    def test_wifi_help(self, runner: CliRunner):
        result = runner.invoke(cli, ["wifi", "--help"])
        assert result.exit_code == 0
        for command in ("list", "radio", "connect", "hotspot", "password"):
            assert command in result.output

    def test_connection_help(self, runner: CliRunner):
        result = runner.invoke(cli, ["connection", "--help"])
        assert result.exit_code == 0
        for command in ("list", "up", "down", "delete", "dns", "add-ethernet", "add-gsm"):
            assert command in result.output

    def test_version_flag(self, runner: CliRunner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "nmbridge" in result.output.lower()


class TestCliCommands:
    """Commands run end to end with the runner functions mocked."""

    def test_hostname(self, runner: CliRunner, run_line):
        run_line.return_value = "myhost"
        result = runner.invoke(cli, ["hostname"])
        assert result.exit_code == 0
        assert result.output == "myhost\n"
        assert list(run_line.call_args[0][0]) == ["general", "hostname"]

    def test_set_hostname_json(self, runner: CliRunner, run_line):
        run_line.return_value = 0
        result = runner.invoke(cli, ["hostname", "newbox", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == 0
        assert list(run_line.call_args[0][0]) == ["general", "hostname", "newbox"]

    def test_global_options_reach_runner(self, runner: CliRunner, run_line):
        result = runner.invoke(
            cli, ["--nmcli", "/opt/nmcli", "--timeout", "5", "networking", "on"]
        )
        assert result.exit_code == 0
        assert run_line.call_args[1] == {"binary": "/opt/nmcli", "timeout_s": 5.0}
        assert list(run_line.call_args[0][0]) == ["networking", "on"]

    def test_environment_settings(self, runner: CliRunner, run_line, monkeypatch):
        monkeypatch.setenv("NMBRIDGE_NMCLI", "/env/nmcli")
        result = runner.invoke(cli, ["connectivity", "--check"])
        assert result.exit_code == 0
        assert run_line.call_args[1]["binary"] == "/env/nmcli"
        assert list(run_line.call_args[0][0]) == ["networking", "connectivity", "check"]

    def test_connection_up(self, runner: CliRunner, run_line):
        result = runner.invoke(cli, ["connection", "up", "Wired connection 1"])
        assert result.exit_code == 0
        assert list(run_line.call_args[0][0]) == ["connection", "up", "Wired connection 1"]

    def test_connection_dns(self, runner: CliRunner, run_line):
        result = runner.invoke(cli, ["connection", "dns", "Home", "1.1.1.1"])
        assert result.exit_code == 0
        assert list(run_line.call_args[0][0]) == [
            "connection", "modify", "Home", "ipv4.dns", "1.1.1.1",
        ]  # fmt: skip

    def test_connection_add_gsm(self, runner: CliRunner, run_line):
        result = runner.invoke(cli, ["connection", "add-gsm", "mobile", "--apn", "internet"])
        assert result.exit_code == 0
        assert list(run_line.call_args[0][0])[-2:] == ["apn", "internet"]

    def test_connection_list_json(self, runner: CliRunner, run_records):
        run_records.return_value = [{"NAME": "Home", "TYPE": "wifi"}]
        result = runner.invoke(cli, ["connection", "list", "--active", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [{"NAME": "Home", "TYPE": "wifi"}]
        assert "--active" in run_records.call_args[0][0]

    def test_device_status(self, runner: CliRunner, mocker, device_status_output):
        mocker.patch("nmbridge.client.run_output", return_value=device_status_output)
        result = runner.invoke(cli, ["device", "status", "--json"])
        assert result.exit_code == 0
        rows = json.loads(result.output)
        assert rows[0] == {
            "device": "eth0",
            "type": "ethernet",
            "state": "connected",
            "connection": "Wired connection 1",
        }
        assert len(rows) == 3

    def test_device_show_one(self, runner: CliRunner, run_records):
        run_records.return_value = [{"GENERAL.DEVICE": "eth0", "GENERAL.STATE": "100"}]
        result = runner.invoke(cli, ["device", "show", "eth0"])
        assert result.exit_code == 0
        assert "connected" in result.output
        assert list(run_records.call_args[0][0]) == ["device", "show", "eth0"]

    def test_device_show_all(self, runner: CliRunner, run_records):
        result = runner.invoke(cli, ["device", "show"])
        assert result.exit_code == 0
        assert list(run_records.call_args[0][0]) == ["device", "show"]

    def test_wifi_list_mock(self, runner: CliRunner, run_records, monkeypatch):
        monkeypatch.setenv("NMBRIDGE_MOCK_DELAY", "0")
        result = runner.invoke(cli, ["--mock", "wifi", "list", "--json"])
        assert result.exit_code == 0
        networks = json.loads(result.output)
        assert [n["SSID"] for n in networks] == ["Insecure Network", "Better Network", "Best-WiFi"]
        run_records.assert_not_called()

    def test_wifi_radio_status(self, runner: CliRunner, run_line):
        run_line.return_value = "enabled"
        result = runner.invoke(cli, ["wifi", "radio"])
        assert result.exit_code == 0
        assert result.output == "enabled\n"
        assert list(run_line.call_args[0][0]) == ["radio", "wifi"]

    def test_wifi_connect_hidden(self, runner: CliRunner, run_line):
        result = runner.invoke(cli, ["wifi", "connect", "Home", "--password", "pw", "--hidden"])
        assert result.exit_code == 0
        assert list(run_line.call_args[0][0]) == [
            "device", "wifi", "connect", "Home", "password", "pw", "hidden", "yes",
        ]  # fmt: skip

    def test_wifi_connect_requires_password(self, runner: CliRunner, run_line):
        result = runner.invoke(cli, ["wifi", "connect", "Home"])
        assert result.exit_code != 0
        run_line.assert_not_called()

    def test_interfaces(self, runner: CliRunner, mocker):
        from nmbridge.interfaces import IPv4Interface

        mocker.patch(
            "nmbridge.commands.general.list_ipv4_interfaces",
            return_value=[IPv4Interface("eth0", "10.0.0.5", "255.255.255.0", "aa:bb")],
        )
        result = runner.invoke(cli, ["interfaces", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output)[0]["address"] == "10.0.0.5"

    def test_tool_error_propagates(self, runner: CliRunner, run_line):
        run_line.side_effect = ToolError("Error: not authorized")
        result = runner.invoke(cli, ["networking", "off"])
        assert isinstance(result.exception, ToolError)

    def test_silent_nonzero_exit_fails_command(self, runner: CliRunner, run_line):
        run_line.return_value = 10
        result = runner.invoke(cli, ["connection", "down", "Home"])
        assert isinstance(result.exception, CommandFailureError)
        assert result.exception.rc == 10
        assert "ERROR: nmcli exited with code 10" in result.output

    def test_commands_drain_processes(self, runner: CliRunner, run_line, mocker):
        drain = mocker.patch("nmbridge.runner.drain")
        result = runner.invoke(cli, ["wifi", "radio", "on"])
        assert result.exit_code == 0
        drain.assert_awaited_once()

    def test_monitor(self, runner: CliRunner, mocker):
        follow = mocker.patch("nmbridge.commands.monitor.follow_monitor", return_value=0)
        result = runner.invoke(cli, ["monitor"])
        assert result.exit_code == 0
        follow.assert_called_once()


class TestMain:
    """Tests for main() exit code mapping."""

    @pytest.mark.parametrize(
        ("error", "rc", "message"),
        [
            (UserError("ifname required"), 2, "ERROR: ifname required"),
            (UserError("bad", rc=3), 3, "ERROR: bad"),
            (LaunchError("nmcli binary not found"), 2, "ERROR: nmcli binary not found"),
            (ToolError("Error: no such device"), 2, "ERROR: Error: no such device"),
            (KeyboardInterrupt(), 130, "ERROR: Interrupted"),
        ],
    )
    def test_errors_become_exit_codes(self, mocker, capsys, error, rc, message):
        mocker.patch("nmbridge.cli.cli", side_effect=error)
        with pytest.raises(SystemExit) as excinfo:
            main()
        assert excinfo.value.code == rc
        assert message in capsys.readouterr().err

    def test_command_failure_prints_nothing(self, mocker, capsys):
        mocker.patch("nmbridge.cli.cli", side_effect=CommandFailureError(rc=4))
        with pytest.raises(SystemExit) as excinfo:
            main()
        assert excinfo.value.code == 4
        assert capsys.readouterr().err == ""


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_debug_level(self):
        setup_logging(debug=True)
        assert logging.getLogger("nmbridge").level == logging.DEBUG
        setup_logging(debug=False)
        assert logging.getLogger("nmbridge").level == logging.WARNING

    def test_single_handler(self):
        setup_logging()
        setup_logging()
        handlers = [
            h
            for h in logging.getLogger("nmbridge").handlers
            if getattr(h, "stream", None) is sys.stderr
        ]
        assert len(handlers) == 1
