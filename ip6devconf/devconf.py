"""
Reconcile the IPv6 device configuration of an interface.

IPv6DevConf.apply() compares a desired DevConf with the configuration observed
on the interface and writes only the attributes that differ. A write that fails
because the attribute is missing or read-only is logged and skipped; any other
failure aborts with FatalError.
"""

import logging

from ip6devconf.datamodel import IN6ADDR_ANY, AcceptDAD, AcceptRA, AddrGenMode, DevConf, Privacy, Tristate
from ip6devconf.devflags import TRACKED_FLAGS, set_kernel_value
from ip6devconf.exceptions import FatalError, InvalidInputError, NotSupportedError, TransientError
from ip6devconf.names import devconf_flag_to_sysctl_name
from ip6devconf.netdev import DeviceIPv6Info, NetDevice
from ip6devconf.sysctl import ConfigGateway, Status

logger = logging.getLogger(__name__)

# DevConf field, kernel attribute and the highest value the kernel accepts
DEVCONF_ATTRIBUTES = (
    ("forwarding", "forwarding", None),
    ("autoconf", "autoconf", None),
    ("privacy", "use_tempaddr", Privacy.PREFER_TEMPORARY),
    ("accept_ra", "accept_ra", AcceptRA.ROUTER),
    ("accept_dad", "accept_dad", AcceptDAD.FAIL_PROTOCOL),
    ("accept_redirects", "accept_redirects", None),
    ("addr_gen_mode", "addr_gen_mode", None),
)


def changed(desired: int, observed: int) -> bool:
    """True if desired is set and differs from observed."""
    return desired != Tristate.DEFAULT and desired != observed


class IPv6DevConf:
    """IPv6 device configuration of interfaces, read and written via a gateway."""

    def __init__(self, gateway: ConfigGateway):
        self.gateway = gateway

    def refresh(self, dev: NetDevice) -> DeviceIPv6Info:
        """Read the current IPv6 configuration of dev, attribute by attribute."""
        ipv6 = dev.get_ipv6()

        if not self.gateway.supported():
            ipv6.conf.reset()
            ipv6.radv.reset()
            ipv6.conf.enabled = Tristate.DISABLE
            return ipv6

        # The conf directory vanishes when all addresses are removed and the
        # kernel disables IPv6 on the interface. Wait for it to come back.
        if not self.gateway.is_present(dev.name):
            logger.warning("%s: cannot get ipv6 device attributes", dev.name)
            ipv6.conf.reset()
            ipv6.radv.reset()
            return ipv6

        for flag in TRACKED_FLAGS:
            attr = devconf_flag_to_sysctl_name(flag)
            reply = self.gateway.get_int(dev.name, attr)
            if reply.ok:
                set_kernel_value(ipv6.conf, flag, reply.value)
            else:
                logger.debug("%s: cannot get ipv6.conf.%s: %s", dev.name, attr, reply.error)

        # stable_secret is only readable once set, see apply()
        return ipv6

    def _set_int(self, ifname: str, attr: str, value: int) -> None:
        reply = self.gateway.set_int(ifname, attr, value)
        if reply.status == Status.OK:
            return
        if reply.status == Status.SOFT_FAIL:
            raise TransientError(f"{ifname}: cannot set ipv6.conf.{attr} = {value} attribute: {reply.error}")
        logger.warning("%s: cannot set ipv6.conf.%s = %d attribute: %s", ifname, attr, value, reply.error)
        raise FatalError(ifname, attr, value) from reply.error

    def _change_int(self, ifname: str, attr: str, value: int) -> bool:
        """Write an attribute. Returns False if it is not available."""
        try:
            self._set_int(ifname, attr, value)
        except TransientError as e:
            logger.info("%s", e)
            return False
        return True

    def _change_stable_secret(self, dev: NetDevice, conf: DevConf, desired: DevConf) -> None:
        # Link notifications never carry stable_secret and the kernel refuses
        # to read it until it is set. Only fetch it in stable-privacy mode.
        secret = IN6ADDR_ANY
        stable_privacy = conf.addr_gen_mode == AddrGenMode.STABLE_PRIVACY
        if stable_privacy:
            reply = self.gateway.get_secret(dev.name)
            if reply.ok:
                secret = reply.value
            else:
                logger.debug("%s: cannot get ipv6.conf.stable_secret: %s", dev.name, reply.error)

        if desired.stable_secret == IN6ADDR_ANY and not (stable_privacy and desired.stable_secret != secret):
            return

        reply = self.gateway.set_secret(dev.name, desired.stable_secret)
        if not reply.ok:
            logger.warning("%s: cannot set ipv6.conf.stable_secret attribute: %s", dev.name, reply.error)
            raise FatalError(dev.name, "stable_secret") from reply.error
        conf.stable_secret = desired.stable_secret

    def apply(self, dev: NetDevice, desired: DevConf) -> None:
        """Bring the IPv6 configuration of dev in line with desired.

        Raises NotSupportedError when asked to enable IPv6 on a host without
        IPv6, and FatalError when an attribute could not be written. Attributes
        after the failing one are left untouched.
        """
        if dev is None or desired is None:
            raise InvalidInputError("device and desired configuration are required")

        ipv6 = dev.get_ipv6()
        conf = ipv6.conf

        if not self.gateway.supported():
            conf.enabled = Tristate.DISABLE
            ipv6.radv.reset()
            if desired.enabled == Tristate.ENABLE:
                raise NotSupportedError(f"{dev.name}: IPv6 is not supported")
            return

        if changed(desired.enabled, conf.enabled):
            disable = 0 if desired.enabled == Tristate.ENABLE else 1
            if self._change_int(dev.name, "disable_ipv6", disable):
                conf.enabled = desired.enabled

        # Nothing else matters while IPv6 is disabled
        if conf.enabled == Tristate.DISABLE:
            ipv6.radv.reset()
            return

        for field, attr, upper in DEVCONF_ATTRIBUTES:
            value = getattr(desired, field)
            if not changed(value, getattr(conf, field)):
                continue
            value = int(value) if upper is None else int(min(value, upper))
            if self._change_int(dev.name, attr, value):
                setattr(conf, field, value)

        self._change_stable_secret(dev, conf, desired)
