# pylint: disable=import-error, invalid-name

"""Record what a Router Advertisement announces."""

import logging
import time

from scapy.layers.inet6 import (
    ICMPv6ND_RA,
    ICMPv6NDOptDNSSL,
    ICMPv6NDOptPrefixInfo,
    ICMPv6NDOptRDNSS,
)
from scapy.packet import Packet

from ip6devconf.datamodel import IPv6Flags
from ip6devconf.exceptions import InvalidInputError
from ip6devconf.netdev import NetDevice

logger = logging.getLogger(__name__)
packet_logger = logging.getLogger(f"{__name__}.packet")


def _options(packet: Packet, cls) -> list[Packet]:
    """All options of the given type, in packet order."""
    options = []
    nb = 1
    while (option := packet.getlayer(cls, nb)) is not None:
        options.append(option)
        nb += 1
    return options


def _domain_name(name) -> str:
    if isinstance(name, bytes):
        name = name.decode("ascii")
    return name.rstrip(".")


def learn_ra(dev: NetDevice, packet: Packet, acquired: float | None = None) -> None:
    """Update the RA information of dev from a received Router Advertisement.

    Prefixes are replaced, DNS servers and search domains are refreshed. A zero
    lifetime withdraws an entry.
    """
    ra = packet.getlayer(ICMPv6ND_RA)
    if ra is None:
        raise InvalidInputError("Not a router advertisement")
    if acquired is None:
        acquired = time.monotonic()

    ipv6 = dev.get_ipv6()
    radv = ipv6.radv
    packet_logger.debug("%s: received RA %s", dev.name, ra.summary())

    radv.managed_addr = bool(ra.M)
    radv.other_config = bool(ra.O)

    for pio in _options(ra, ICMPv6NDOptPrefixInfo):
        radv.remove_prefix(pio.prefix, pio.prefixlen)
        if pio.validlifetime:
            radv.insert_prefix(
                pio.prefix,
                pio.prefixlen,
                pio.validlifetime,
                acquired,
                preferred_lft=pio.preferredlifetime,
                on_link=bool(pio.L),
                autoconf=bool(pio.A),
            )
        logger.debug("%s: prefix %s/%d valid %d", dev.name, pio.prefix, pio.prefixlen, pio.validlifetime)

    for option in _options(ra, ICMPv6NDOptRDNSS):
        for server in option.dns:
            radv.update_rdnss(server, option.lifetime, acquired)
            logger.debug("%s: rdnss %s lifetime %d", dev.name, server, option.lifetime)

    for option in _options(ra, ICMPv6NDOptDNSSL):
        for name in option.searchlist:
            domain = _domain_name(name)
            if domain:
                radv.update_dnssl(domain, option.lifetime, acquired)
                logger.debug("%s: dnssl %s lifetime %d", dev.name, domain, option.lifetime)

    ipv6.flags |= IPv6Flags.RA_RCVD
