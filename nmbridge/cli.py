"""nmbridge CLI using Click."""

from __future__ import annotations

import logging
import sys
from importlib.metadata import version

import click

from .cli_types import (
    ConnectionListArgs,
    ConnectivityArgs,
    DeviceArgs,
    EthernetAddArgs,
    GsmAddArgs,
    HostnameArgs,
    MonitorArgs,
    OutputArgs,
    ProfileArgs,
    WifiConnectArgs,
    WifiHotspotArgs,
    WifiListArgs,
)
from .commands import (
    cmd_connection_add_ethernet,
    cmd_connection_add_gsm,
    cmd_connection_list,
    cmd_connection_profile,
    cmd_connectivity,
    cmd_device,
    cmd_device_status,
    cmd_hostname,
    cmd_interfaces,
    cmd_monitor,
    cmd_networking,
    cmd_wifi_connect,
    cmd_wifi_hotspot,
    cmd_wifi_list,
    cmd_wifi_password,
    cmd_wifi_radio,
)
from .config import Settings, load_settings
from .constants import DEFAULT_ETHERNET_IFNAME, DEFAULT_GSM_IFNAME
from .exceptions import CommandFailureError, NmBridgeError, UserError

# Module logger
logger = logging.getLogger("nmbridge")


def setup_logging(debug: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if debug else logging.WARNING
    logger.setLevel(level)
    if any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr
        for h in logger.handlers
    ):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)


def json_option(func):
    """Decorator adding --json to data commands."""
    return click.option(
        "--json",
        "json_output",
        is_flag=True,
        help="Emit machine-readable JSON to stdout.",
    )(func)


def _settings(ctx: click.Context) -> Settings:
    return ctx.obj["settings"]


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=version("nmbridge"), prog_name="nmbridge")
@click.option(
    "--debug",
    "-d",
    is_flag=True,
    help="Enable debug logging to stderr.",
)
@click.option(
    "--nmcli",
    "binary",
    help="nmcli executable to run (default: $NMBRIDGE_NMCLI or nmcli).",
)
@click.option(
    "--timeout",
    type=float,
    help="Seconds to wait for each nmcli call (default: $NMBRIDGE_TIMEOUT or no limit).",
)
@click.option(
    "--mock",
    is_flag=True,
    help="Serve canned Wi-Fi data instead of scanning (also $NMBRIDGE_MOCK=1).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    debug: bool,
    binary: str | None,
    timeout: float | None,
    mock: bool,
):
    """nmbridge: NetworkManager (nmcli) operations with typed, parsed output."""
    ctx.ensure_object(dict)
    setup_logging(debug=debug)
    settings = load_settings().with_overrides(binary=binary, timeout_s=timeout, mock=mock or None)
    logger.debug("settings: %s", settings)
    ctx.obj["settings"] = settings


# general


@cli.command("hostname")
@click.argument("name", required=False)
@json_option
@click.pass_context
def hostname(ctx: click.Context, name: str | None, json_output: bool):
    """Show the hostname, or set it to NAME."""
    cmd_hostname(HostnameArgs(settings=_settings(ctx), json=json_output, name=name))


@cli.command("networking")
@click.argument("state", type=click.Choice(["on", "off"]))
@json_option
@click.pass_context
def networking(ctx: click.Context, state: str, json_output: bool):
    """Enable or disable all networking."""
    args = OutputArgs(settings=_settings(ctx), json=json_output)
    cmd_networking(args, enable=(state == "on"))


@cli.command("connectivity")
@click.option(
    "--check",
    is_flag=True,
    help="Re-check connectivity instead of using the cached state.",
)
@json_option
@click.pass_context
def connectivity(ctx: click.Context, check: bool, json_output: bool):
    """Show the network connectivity state."""
    cmd_connectivity(ConnectivityArgs(settings=_settings(ctx), json=json_output, check=check))


@cli.command("interfaces")
@json_option
@click.pass_context
def interfaces(ctx: click.Context, json_output: bool):
    """List non-loopback IPv4 addresses of this host."""
    cmd_interfaces(OutputArgs(settings=_settings(ctx), json=json_output))


@cli.command("monitor")
@click.pass_context
def monitor(ctx: click.Context):
    """Stream NetworkManager events until interrupted."""
    cmd_monitor(MonitorArgs(settings=_settings(ctx)))


# connection profiles


@cli.group("connection")
def connection():
    """Manage connection profiles."""


@connection.command("list")
@click.option("--active", is_flag=True, help="Only active profiles.")
@json_option
@click.pass_context
def connection_list(ctx: click.Context, active: bool, json_output: bool):
    """List connection profiles, active first."""
    cmd_connection_list(
        ConnectionListArgs(settings=_settings(ctx), json=json_output, active=active)
    )


def _profile_command(action: str, help_text: str):
    @connection.command(action, help=help_text)
    @click.argument("profile")
    @json_option
    @click.pass_context
    def command(ctx: click.Context, profile: str, json_output: bool):
        cmd_connection_profile(
            ProfileArgs(settings=_settings(ctx), json=json_output, action=action, profile=profile)
        )

    return command


_profile_command("up", "Activate PROFILE.")
_profile_command("down", "Deactivate PROFILE.")
_profile_command("delete", "Delete PROFILE.")


@connection.command("dns")
@click.argument("profile")
@click.argument("dns")
@json_option
@click.pass_context
def connection_dns(ctx: click.Context, profile: str, dns: str, json_output: bool):
    """Set the IPv4 DNS servers of PROFILE."""
    cmd_connection_profile(
        ProfileArgs(
            settings=_settings(ctx), json=json_output, action="dns", profile=profile, dns=dns
        )
    )


@connection.command("add-ethernet")
@click.argument("name")
@click.option("--ipv4", required=True, help="Static IPv4 address (a /24 prefix is appended).")
@click.option("--gateway", required=True, help="IPv4 gateway.")
@click.option(
    "--ifname",
    default=DEFAULT_ETHERNET_IFNAME,
    show_default=True,
    help="Interface the profile binds to.",
)
@json_option
@click.pass_context
def connection_add_ethernet(
    ctx: click.Context,
    name: str,
    ipv4: str,
    gateway: str,
    ifname: str,
    json_output: bool,
):
    """Add a static ethernet profile called NAME."""
    args = EthernetAddArgs(
        settings=_settings(ctx),
        json=json_output,
        name=name,
        ipv4=ipv4,
        gateway=gateway,
        ifname=ifname,
    )
    cmd_connection_add_ethernet(args)


@connection.command("add-gsm")
@click.argument("name")
@click.option(
    "--ifname",
    default=DEFAULT_GSM_IFNAME,
    show_default=True,
    help="Modem interface the profile binds to.",
)
@click.option("--apn", help="Access point name.")
@click.option("--username", help="Mobile network user name.")
@click.option("--password", help="Mobile network password.")
@click.option("--pin", help="SIM PIN.")
@json_option
@click.pass_context
def connection_add_gsm(
    ctx: click.Context,
    name: str,
    ifname: str,
    apn: str | None,
    username: str | None,
    password: str | None,
    pin: str | None,
    json_output: bool,
):
    """Add a mobile broadband (GSM) profile called NAME."""
    args = GsmAddArgs(
        settings=_settings(ctx),
        json=json_output,
        name=name,
        ifname=ifname,
        apn=apn,
        username=username,
        password=password,
        pin=pin,
    )
    cmd_connection_add_gsm(args)


# devices


@cli.group("device")
def device():
    """Inspect and control network devices."""


@device.command("status")
@json_option
@click.pass_context
def device_status(ctx: click.Context, json_output: bool):
    """Show the status table of all devices."""
    cmd_device_status(OutputArgs(settings=_settings(ctx), json=json_output))


@device.command("show")
@click.argument("name", required=False)
@json_option
@click.pass_context
def device_show(ctx: click.Context, name: str | None, json_output: bool):
    """Show IP details of device NAME, or of every device."""
    cmd_device(DeviceArgs(settings=_settings(ctx), json=json_output, action="show", device=name))


@device.command("connect")
@click.argument("name")
@json_option
@click.pass_context
def device_connect(ctx: click.Context, name: str, json_output: bool):
    """Connect device NAME."""
    cmd_device(
        DeviceArgs(settings=_settings(ctx), json=json_output, action="connect", device=name)
    )


@device.command("disconnect")
@click.argument("name")
@json_option
@click.pass_context
def device_disconnect(ctx: click.Context, name: str, json_output: bool):
    """Disconnect device NAME."""
    cmd_device(
        DeviceArgs(settings=_settings(ctx), json=json_output, action="disconnect", device=name)
    )


# wifi


@cli.group("wifi")
def wifi():
    """Wi-Fi radio, scanning, connections and hotspot."""


@wifi.command("list")
@click.option("--rescan", is_flag=True, help="Force a new scan before listing.")
@json_option
@click.pass_context
def wifi_list(ctx: click.Context, rescan: bool, json_output: bool):
    """List visible Wi-Fi networks."""
    cmd_wifi_list(WifiListArgs(settings=_settings(ctx), json=json_output, rescan=rescan))


@wifi.command("radio")
@click.argument("state", type=click.Choice(["on", "off"]), required=False)
@json_option
@click.pass_context
def wifi_radio(ctx: click.Context, state: str | None, json_output: bool):
    """Show the Wi-Fi radio state, or switch it on/off."""
    cmd_wifi_radio(OutputArgs(settings=_settings(ctx), json=json_output), state=state)


@wifi.command("connect")
@click.argument("ssid")
@click.option("--password", required=True, help="Network password.")
@click.option("--hidden", is_flag=True, help="The network does not broadcast its SSID.")
@json_option
@click.pass_context
def wifi_connect(ctx: click.Context, ssid: str, password: str, hidden: bool, json_output: bool):
    """Connect to Wi-Fi network SSID."""
    args = WifiConnectArgs(
        settings=_settings(ctx),
        json=json_output,
        ssid=ssid,
        password=password,
        hidden=hidden,
    )
    cmd_wifi_connect(args)


@wifi.command("hotspot")
@click.argument("ifname")
@click.argument("ssid")
@click.option("--password", required=True, help="Hotspot password.")
@json_option
@click.pass_context
def wifi_hotspot(ctx: click.Context, ifname: str, ssid: str, password: str, json_output: bool):
    """Start a hotspot called SSID on interface IFNAME."""
    args = WifiHotspotArgs(
        settings=_settings(ctx),
        json=json_output,
        ifname=ifname,
        ssid=ssid,
        password=password,
    )
    cmd_wifi_hotspot(args)


@wifi.command("password")
@click.argument("ifname")
@json_option
@click.pass_context
def wifi_password(ctx: click.Context, ifname: str, json_output: bool):
    """Show SSID, security and password of the network active on IFNAME."""
    cmd_wifi_password(OutputArgs(settings=_settings(ctx), json=json_output), ifname)


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except CommandFailureError as e:
        sys.exit(e.rc)
    except UserError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(e.rc)
    except NmBridgeError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(2)
    except KeyboardInterrupt:
        click.echo("ERROR: Interrupted", err=True)
        sys.exit(130)
