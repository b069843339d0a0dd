"""Name tables for IPv6 device configuration values."""

from enum import IntEnum

from ip6devconf.datamodel import AcceptDAD, AcceptRA, AddrGenMode, Privacy, clamp


class DevConfFlag(IntEnum):
    """Slots of the kernel's per-device IPv6 configuration array.

    Same order as DEVCONF_* in linux/ipv6.h. Unlike IPv4, slots start at 0.
    """

    FORWARDING = 0
    HOPLIMIT = 1
    MTU6 = 2
    ACCEPT_RA = 3
    ACCEPT_REDIRECTS = 4
    AUTOCONF = 5
    DAD_TRANSMITS = 6
    RTR_SOLICITS = 7
    RTR_SOLICIT_INTERVAL = 8
    RTR_SOLICIT_DELAY = 9
    USE_TEMPADDR = 10
    TEMP_VALID_LFT = 11
    TEMP_PREFERED_LFT = 12
    REGEN_MAX_RETRY = 13
    MAX_DESYNC_FACTOR = 14
    MAX_ADDRESSES = 15
    FORCE_MLD_VERSION = 16
    ACCEPT_RA_DEFRTR = 17
    ACCEPT_RA_PINFO = 18
    ACCEPT_RA_RTR_PREF = 19
    RTR_PROBE_INTERVAL = 20
    ACCEPT_RA_RT_INFO_MAX_PLEN = 21
    PROXY_NDP = 22
    OPTIMISTIC_DAD = 23
    ACCEPT_SOURCE_ROUTE = 24
    MC_FORWARDING = 25
    DISABLE_IPV6 = 26
    ACCEPT_DAD = 27
    FORCE_TLLAO = 28
    NDISC_NOTIFY = 29
    MLDV1_UNSOLICITED_REPORT_INTERVAL = 30
    MLDV2_UNSOLICITED_REPORT_INTERVAL = 31
    SUPPRESS_FRAG_NDISC = 32
    ACCEPT_RA_FROM_LOCAL = 33
    USE_OPTIMISTIC = 34
    ACCEPT_RA_MTU = 35
    STABLE_SECRET = 36
    USE_OIF_ADDRS_ONLY = 37
    ACCEPT_RA_MIN_HOP_LIMIT = 38
    IGNORE_ROUTES_WITH_LINKDOWN = 39
    DROP_UNICAST_IN_L2_MULTICAST = 40
    DROP_UNSOLICITED_NA = 41
    KEEP_ADDR_ON_DOWN = 42
    RTR_SOLICIT_MAX_INTERVAL = 43
    SEG6_ENABLED = 44
    SEG6_REQUIRE_HMAC = 45
    ENHANCED_DAD = 46
    ADDR_GEN_MODE = 47
    DISABLE_POLICY = 48
    ACCEPT_RA_RT_INFO_MIN_PLEN = 49
    NDISC_TCLASS = 50
    RPL_SEG_ENABLED = 51


# net/ipv6/conf/<ifname>/<name>
_SYSCTL_NAMES = {
    DevConfFlag.FORWARDING: "forwarding",
    DevConfFlag.HOPLIMIT: "hop_limit",
    DevConfFlag.MTU6: "mtu",
    DevConfFlag.ACCEPT_RA: "accept_ra",
    DevConfFlag.ACCEPT_REDIRECTS: "accept_redirects",
    DevConfFlag.AUTOCONF: "autoconf",
    DevConfFlag.DAD_TRANSMITS: "dad_transmits",
    DevConfFlag.RTR_SOLICITS: "router_solicitations",
    DevConfFlag.RTR_SOLICIT_INTERVAL: "router_solicitation_interval",
    DevConfFlag.RTR_SOLICIT_DELAY: "router_solicitation_delay",
    DevConfFlag.USE_TEMPADDR: "use_tempaddr",
    DevConfFlag.TEMP_VALID_LFT: "temp_valid_lft",
    DevConfFlag.TEMP_PREFERED_LFT: "temp_prefered_lft",
    DevConfFlag.REGEN_MAX_RETRY: "regen_max_retry",
    DevConfFlag.MAX_DESYNC_FACTOR: "max_desync_factor",
    DevConfFlag.MAX_ADDRESSES: "max_addresses",
    DevConfFlag.FORCE_MLD_VERSION: "force_mld_version",
    DevConfFlag.ACCEPT_RA_DEFRTR: "accept_ra_defrtr",
    DevConfFlag.ACCEPT_RA_PINFO: "accept_ra_pinfo",
    DevConfFlag.ACCEPT_RA_RTR_PREF: "accept_ra_rtr_pref",
    DevConfFlag.RTR_PROBE_INTERVAL: "router_probe_interval",
    DevConfFlag.ACCEPT_RA_RT_INFO_MAX_PLEN: "accept_ra_rt_info_max_plen",
    DevConfFlag.PROXY_NDP: "proxy_ndp",
    DevConfFlag.OPTIMISTIC_DAD: "optimistic_dad",
    DevConfFlag.ACCEPT_SOURCE_ROUTE: "accept_source_route",
    DevConfFlag.MC_FORWARDING: "mc_forwarding",
    DevConfFlag.DISABLE_IPV6: "disable_ipv6",
    DevConfFlag.ACCEPT_DAD: "accept_dad",
    DevConfFlag.FORCE_TLLAO: "force_tllao",
    DevConfFlag.NDISC_NOTIFY: "ndisc_notify",
    DevConfFlag.MLDV1_UNSOLICITED_REPORT_INTERVAL: "mldv1_unsolicited_report_interval",
    DevConfFlag.MLDV2_UNSOLICITED_REPORT_INTERVAL: "mldv2_unsolicited_report_interval",
    DevConfFlag.SUPPRESS_FRAG_NDISC: "suppress_frag_ndisc",
    DevConfFlag.ACCEPT_RA_FROM_LOCAL: "accept_ra_from_local",
    DevConfFlag.USE_OPTIMISTIC: "use_optimistic",
    DevConfFlag.ACCEPT_RA_MTU: "accept_ra_mtu",
    DevConfFlag.STABLE_SECRET: "stable_secret",
    DevConfFlag.USE_OIF_ADDRS_ONLY: "use_oif_addrs_only",
    DevConfFlag.ACCEPT_RA_MIN_HOP_LIMIT: "accept_ra_min_hop_limit",
    DevConfFlag.IGNORE_ROUTES_WITH_LINKDOWN: "ignore_routes_with_linkdown",
    DevConfFlag.DROP_UNICAST_IN_L2_MULTICAST: "drop_unicast_in_l2_multicast",
    DevConfFlag.DROP_UNSOLICITED_NA: "drop_unsolicited_na",
    DevConfFlag.KEEP_ADDR_ON_DOWN: "keep_addr_on_down",
    DevConfFlag.RTR_SOLICIT_MAX_INTERVAL: "router_solicitation_max_interval",
    DevConfFlag.SEG6_ENABLED: "seg6_enabled",
    DevConfFlag.SEG6_REQUIRE_HMAC: "seg6_require_hmac",
    DevConfFlag.ENHANCED_DAD: "enhanced_dad",
    DevConfFlag.ADDR_GEN_MODE: "addr_gen_mode",
    DevConfFlag.DISABLE_POLICY: "disable_policy",
    DevConfFlag.ACCEPT_RA_RT_INFO_MIN_PLEN: "accept_ra_rt_info_min_plen",
    DevConfFlag.NDISC_TCLASS: "ndisc_tclass",
    DevConfFlag.RPL_SEG_ENABLED: "rpl_seg_enabled",
}
_SYSCTL_FLAGS = {name: flag for flag, name in _SYSCTL_NAMES.items()}

_PRIVACY_NAMES = {
    Privacy.DEFAULT: "default",
    Privacy.DISABLED: "disable",
    Privacy.PREFER_PUBLIC: "prefer-public",
    Privacy.PREFER_TEMPORARY: "prefer-temporary",
}
_ACCEPT_RA_NAMES = {
    AcceptRA.DISABLED: "disable",
    AcceptRA.HOST: "host",
    AcceptRA.ROUTER: "router",
}
_ACCEPT_DAD_NAMES = {
    AcceptDAD.DISABLED: "disable",
    AcceptDAD.FAIL_ADDRESS: "fail-address",
    AcceptDAD.FAIL_PROTOCOL: "fail-protocol",
}
_ADDR_GEN_MODE_NAMES = {
    AddrGenMode.EUI64: "eui64",
    AddrGenMode.NONE: "none",
    AddrGenMode.STABLE_PRIVACY: "stable-privacy",
    AddrGenMode.RANDOM: "random",
}


def _reverse(table: dict) -> dict:
    return {name: value for value, name in table.items()}


_PRIVACY_VALUES = _reverse(_PRIVACY_NAMES)
_ACCEPT_RA_VALUES = _reverse(_ACCEPT_RA_NAMES)
_ACCEPT_DAD_VALUES = _reverse(_ACCEPT_DAD_NAMES)
_ADDR_GEN_MODE_VALUES = _reverse(_ADDR_GEN_MODE_NAMES)


def devconf_flag_to_sysctl_name(flag: int) -> str | None:
    """Return the sysctl attribute name of a devconf array slot."""
    return _SYSCTL_NAMES.get(flag)


def sysctl_name_to_devconf_flag(name: str) -> DevConfFlag | None:
    """Return the devconf array slot of a sysctl attribute name."""
    return _SYSCTL_FLAGS.get(name)


def privacy_to_name(privacy: int) -> str:
    return _PRIVACY_NAMES[clamp(privacy, Privacy.DEFAULT, Privacy.PREFER_TEMPORARY)]


def accept_ra_to_name(accept_ra: int) -> str | None:
    return _ACCEPT_RA_NAMES.get(clamp(accept_ra, AcceptRA.DEFAULT, AcceptRA.ROUTER))


def accept_dad_to_name(accept_dad: int) -> str | None:
    return _ACCEPT_DAD_NAMES.get(clamp(accept_dad, AcceptDAD.DEFAULT, AcceptDAD.FAIL_PROTOCOL))


def addr_gen_mode_to_name(addr_gen_mode: int) -> str | None:
    return _ADDR_GEN_MODE_NAMES.get(clamp(addr_gen_mode, AddrGenMode.DEFAULT, AddrGenMode.RANDOM))


def privacy_from_name(name: str) -> Privacy | None:
    return _PRIVACY_VALUES.get(name.lower())


def accept_ra_from_name(name: str) -> AcceptRA | None:
    return _ACCEPT_RA_VALUES.get(name.lower())


def accept_dad_from_name(name: str) -> AcceptDAD | None:
    return _ACCEPT_DAD_VALUES.get(name.lower())


def addr_gen_mode_from_name(name: str) -> AddrGenMode | None:
    return _ADDR_GEN_MODE_VALUES.get(name.lower())
