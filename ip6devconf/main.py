"""The main module for the ip6devconf command."""

# pylint: disable=import-error, invalid-name

import json
import logging
import sys

import typer

from ip6devconf._version import __version__
from ip6devconf.config import Configuration
from ip6devconf.devconf import IPv6DevConf
from ip6devconf.exceptions import FatalError, NotSupportedError
from ip6devconf.names import accept_dad_to_name, accept_ra_to_name, addr_gen_mode_to_name, privacy_to_name
from ip6devconf.netdev import NetDevice
from ip6devconf.sysctl import PROC_SYS_NET_IPV6, SysctlGateway

app = typer.Typer()
logger = logging.getLogger(__name__)


def version_callback(value: bool):
    """Print the version and exit."""
    if value:
        typer.echo(f"ip6devconf version: {__version__}")
        raise typer.Exit


@app.callback()
def common(
    version: bool = typer.Option(None, "--version", callback=version_callback, is_eager=True),  # pylint: disable=unused-argument
) -> None:
    """Reconcile IPv6 interface configuration with the kernel."""


def setup_logging(log: str | None, logfile: str | None, trace: bool) -> None:
    """Configure the root logger."""
    numeric_level = getattr(logging, log.upper(), None) if log else logging.INFO
    if not isinstance(numeric_level, int):
        raise typer.BadParameter(f"Invalid log level: {log}")
    if logfile:
        logging.basicConfig(
            filename=logfile,
            encoding="utf-8",
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=numeric_level,
        )
    else:
        logging.basicConfig(
            stream=sys.stdout,
            encoding="utf-8",
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=numeric_level,
        )
    tracelevel = logging.DEBUG if trace else logging.INFO
    logging.getLogger("ip6devconf.devflags.trace").setLevel(tracelevel)
    logging.getLogger("ip6devconf.raadv.packet").setLevel(tracelevel)


def describe(dev: NetDevice) -> dict:
    """Observed IPv6 configuration of dev with readable names."""
    conf = dev.get_ipv6().conf
    return {
        "enabled": conf.enabled.name.lower(),
        "forwarding": conf.forwarding.name.lower(),
        "autoconf": conf.autoconf.name.lower(),
        "accept-redirects": conf.accept_redirects.name.lower(),
        "privacy": privacy_to_name(conf.privacy),
        "accept-ra": accept_ra_to_name(conf.accept_ra),
        "accept-dad": accept_dad_to_name(conf.accept_dad),
        "addr-gen-mode": addr_gen_mode_to_name(conf.addr_gen_mode),
    }


@app.command()
def apply(
    config: typer.FileText,
    log: str = None,
    logfile: str = None,
    trace: bool = False,
) -> None:
    """Apply the IPv6 interface configuration in CONFIG."""
    conf = Configuration(**json.loads(config.read()))
    setup_logging(log or conf.system.log_level, logfile or conf.system.log_file, trace)
    logger.debug("Configuration %s", conf)

    devconf = IPv6DevConf(SysctlGateway(conf.system.sysctl_root))
    for ifname, ifconf in conf.interfaces.items():
        dev = NetDevice(ifname)
        devconf.refresh(dev)
        try:
            devconf.apply(dev, ifconf.to_devconf())
        except (FatalError, NotSupportedError) as e:
            logger.exception("%s", e)
            raise typer.Exit(code=1) from e
        logger.info("%s: ipv6 %s", ifname, describe(dev))


@app.command()
def show(
    ifname: str,
    sysctl_root: str = PROC_SYS_NET_IPV6,
) -> None:
    """Show the IPv6 configuration of an interface."""
    dev = NetDevice(ifname)
    IPv6DevConf(SysctlGateway(sysctl_root)).refresh(dev)
    typer.echo(json.dumps(describe(dev), indent=4))


if __name__ == "__main__":
    app()
