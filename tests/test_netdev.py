"""Tests for the per-interface IPv6 state."""

from ip6devconf.datamodel import DevConf, IPv6Flags, Tristate
from ip6devconf.netdev import NetDevice


def test_ipv6_created_lazily():
    dev = NetDevice("eth0", 2)
    assert dev.ipv6 is None
    assert not dev.ipv6_is_ready()
    assert not dev.ipv6_ra_received()
    assert not dev.ipv6_ra_requested()

    ipv6 = dev.get_ipv6()
    assert ipv6 is dev.get_ipv6()
    assert ipv6.conf == DevConf()
    assert ipv6.flags == IPv6Flags(0)


def test_readiness_flags():
    dev = NetDevice("eth0", 2)
    dev.get_ipv6().flags |= IPv6Flags.READY | IPv6Flags.RS_SENT

    assert dev.ipv6_is_ready()
    assert dev.ipv6_ra_requested()
    assert not dev.ipv6_ra_received()


def test_set_ipv6_copies_conf():
    dev = NetDevice("eth0", 2)
    conf = DevConf(forwarding=True)
    dev.set_ipv6(conf)
    conf.forwarding = False

    assert dev.ipv6.conf.forwarding == Tristate.ENABLE


def test_set_ipv6_none_drops_and_flushes():
    dev = NetDevice("eth0", 2)
    ipv6 = dev.get_ipv6()
    ipv6.radv.update_dnssl("example.com", 100, 1.0)

    dev.set_ipv6(None)
    assert dev.ipv6 is None
    assert ipv6.radv.dnssl == []

    dev.set_ipv6(None)
    assert dev.ipv6 is None


def test_devconf_clamps_on_assignment():
    conf = DevConf(privacy=5, accept_ra=-8, accept_dad=3)
    assert conf.privacy == 2
    assert conf.accept_ra == -1
    assert conf.accept_dad == 2

    conf.privacy = 9
    assert conf.privacy == 2
    conf.enabled = False
    assert conf.enabled == Tristate.DISABLE
