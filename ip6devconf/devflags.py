"""IPv6 device configuration from the kernel's devconf array.

Link notifications carry the per-device IPv6 configuration as an array of
int32 values, indexed by DevConfFlag. process_flags() folds the values this
package tracks into the observed DevConf and traces the rest.
"""

import logging
from collections.abc import Sequence

from ip6devconf.datamodel import AcceptDAD, AcceptRA, DevConf, Privacy, Tristate, clamp
from ip6devconf.exceptions import InvalidInputError
from ip6devconf.names import DevConfFlag, devconf_flag_to_sysctl_name

logger = logging.getLogger(__name__)
trace_logger = logging.getLogger(f"{__name__}.trace")

# Flags reflected in DevConf
TRACKED_FLAGS = (
    DevConfFlag.DISABLE_IPV6,
    DevConfFlag.FORWARDING,
    DevConfFlag.AUTOCONF,
    DevConfFlag.USE_TEMPADDR,
    DevConfFlag.ACCEPT_RA,
    DevConfFlag.ACCEPT_DAD,
    DevConfFlag.ACCEPT_REDIRECTS,
    DevConfFlag.ADDR_GEN_MODE,
)


def set_kernel_value(conf: DevConf, flag: int, value: int) -> bool:
    """Store a value read from the kernel into conf.

    Returns False when the flag is not tracked.
    """
    if flag == DevConfFlag.FORWARDING:
        conf.forwarding = Tristate.ENABLE if value else Tristate.DISABLE
    elif flag == DevConfFlag.DISABLE_IPV6:
        conf.enabled = Tristate.DISABLE if value else Tristate.ENABLE
    elif flag == DevConfFlag.ACCEPT_REDIRECTS:
        conf.accept_redirects = Tristate.ENABLE if value else Tristate.DISABLE
    elif flag == DevConfFlag.ACCEPT_RA:
        conf.accept_ra = clamp(value, AcceptRA.DISABLED, AcceptRA.ROUTER)
    elif flag == DevConfFlag.ACCEPT_DAD:
        conf.accept_dad = clamp(value, AcceptDAD.DISABLED, AcceptDAD.FAIL_PROTOCOL)
    elif flag == DevConfFlag.AUTOCONF:
        conf.autoconf = Tristate.ENABLE if value else Tristate.DISABLE
    elif flag == DevConfFlag.USE_TEMPADDR:
        # The kernel uses -1 on loopback and point-to-point links
        conf.privacy = clamp(value, Privacy.DEFAULT, Privacy.PREFER_TEMPORARY)
    elif flag == DevConfFlag.ADDR_GEN_MODE:
        conf.addr_gen_mode = max(value, 0)
    else:
        return False
    return True


def process_flag(dev, flag: int, value: int) -> bool:
    """Process one devconf array slot. Returns False if the slot is unused."""
    if flag == DevConfFlag.STABLE_SECRET:
        # Not carried by the int32 array
        return False

    used = set_kernel_value(dev.get_ipv6().conf, flag, value)
    log = logger if used else trace_logger
    if log.isEnabledFor(logging.DEBUG):
        name = devconf_flag_to_sysctl_name(flag) or f"[{flag}]"
        log.debug(
            "%s[%d]: get ipv6.conf.%s = %d%s", dev.name, dev.ifindex, name, value, "" if used else " (unused)"
        )
    return used


def process_flags(dev, values: Sequence[int]) -> None:
    """Update the observed IPv6 configuration of dev from a devconf array."""
    if dev is None or values is None:
        raise InvalidInputError("device and devconf values are required")

    for flag, value in enumerate(values):
        process_flag(dev, flag, value)
