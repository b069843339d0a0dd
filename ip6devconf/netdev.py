"""Per-interface IPv6 state."""

import logging

from ip6devconf.datamodel import DevConf, IPv6Flags
from ip6devconf.rainfo import RAInfo

logger = logging.getLogger(__name__)


class DeviceIPv6Info:
    """IPv6 configuration, RA information and readiness of one interface."""

    def __init__(self):
        self.conf = DevConf()
        self.radv = RAInfo()
        self.flags = IPv6Flags(0)

    def __repr__(self) -> str:
        return f"DeviceIPv6Info(conf={self.conf!r}, radv={self.radv!r}, flags={self.flags!r})"

    @property
    def is_ready(self) -> bool:
        return bool(self.flags & IPv6Flags.READY)

    @property
    def ra_received(self) -> bool:
        return bool(self.flags & IPv6Flags.RA_RCVD)

    @property
    def ra_requested(self) -> bool:
        return bool(self.flags & IPv6Flags.RS_SENT)

    def close(self) -> None:
        self.radv.reset()


class NetDevice:
    """The parts of a network interface the IPv6 code needs."""

    def __init__(self, name: str, ifindex: int = 0):
        self.name = name
        self.ifindex = ifindex
        self.ipv6: DeviceIPv6Info | None = None

    def __repr__(self) -> str:
        return f"NetDevice({self.name!r}, ifindex={self.ifindex})"

    def get_ipv6(self) -> DeviceIPv6Info:
        """Return the IPv6 info, creating it on first access."""
        if self.ipv6 is None:
            self.ipv6 = DeviceIPv6Info()
        return self.ipv6

    def set_ipv6(self, conf: DevConf | None) -> None:
        """Replace the observed IPv6 configuration, or drop the IPv6 info with None."""
        if conf is not None:
            self.get_ipv6().conf = conf.model_copy()
        elif self.ipv6 is not None:
            logger.debug("%s: dropping ipv6 info", self.name)
            self.ipv6.close()
            self.ipv6 = None

    def ipv6_is_ready(self) -> bool:
        return self.ipv6 is not None and self.ipv6.is_ready

    def ipv6_ra_received(self) -> bool:
        return self.ipv6 is not None and self.ipv6.ra_received

    def ipv6_ra_requested(self) -> bool:
        return self.ipv6 is not None and self.ipv6.ra_requested
