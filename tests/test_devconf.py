"""Tests for the IPv6 device configuration reconciler."""

import errno
import logging
from ipaddress import IPv6Address
from unittest.mock import Mock, call

import pytest

from ip6devconf.datamodel import AddrGenMode, DevConf, Tristate
from ip6devconf.devconf import IPv6DevConf
from ip6devconf.exceptions import FatalError, InvalidInputError, NotSupportedError
from ip6devconf.netdev import NetDevice
from ip6devconf.sysctl import Reply, Status, SysctlGateway

SECRET = IPv6Address("2001:db8::1234")
NO_SECRET = Reply(Status.HARD_FAIL, error=OSError(errno.EIO, "Input/output error"))


def soft_fail():
    return Reply(Status.SOFT_FAIL, error=OSError(errno.ENOENT, "No such file or directory"))


def hard_fail():
    return Reply(Status.HARD_FAIL, error=OSError(errno.EPERM, "Operation not permitted"))


def mock_gateway(failures=None, secret=NO_SECRET, supported=True, values=None):
    failures = failures or {}
    values = values or {}
    gateway = Mock(spec=SysctlGateway)
    gateway.supported.return_value = supported
    gateway.is_present.return_value = True
    gateway.set_int.side_effect = lambda ifname, attr, value: failures.get(attr, Reply(Status.OK))
    gateway.get_int.side_effect = lambda ifname, attr: (
        Reply(Status.OK, values[attr]) if attr in values else soft_fail()
    )
    gateway.get_secret.return_value = secret
    gateway.set_secret.return_value = failures.get("stable_secret", Reply(Status.OK))
    return gateway


@pytest.fixture
def dev():
    dev = NetDevice("eth0", 2)
    dev.set_ipv6(
        DevConf(
            enabled=True,
            forwarding=False,
            autoconf=True,
            accept_redirects=True,
            privacy=0,
            accept_ra=1,
            accept_dad=1,
            addr_gen_mode=AddrGenMode.EUI64,
        )
    )
    radv = dev.ipv6.radv
    radv.insert_prefix("2001:db8::", 64, 100, 1.0)
    radv.update_rdnss("2001:db8::53", 100, 1.0)
    radv.update_dnssl("example.com", 100, 1.0)
    return dev


def test_identical_configuration_writes_nothing(dev):
    gateway = mock_gateway()
    IPv6DevConf(gateway).apply(dev, dev.ipv6.conf.model_copy())

    gateway.set_int.assert_not_called()
    gateway.set_secret.assert_not_called()


def test_unset_fields_are_skipped(dev):
    gateway = mock_gateway()
    before = dev.ipv6.conf.model_copy()
    IPv6DevConf(gateway).apply(dev, DevConf())

    gateway.set_int.assert_not_called()
    gateway.set_secret.assert_not_called()
    assert dev.ipv6.conf == before


def test_only_deltas_are_written(dev):
    gateway = mock_gateway()
    IPv6DevConf(gateway).apply(dev, DevConf(enabled=True, forwarding=True, autoconf=True, accept_ra=2))

    assert gateway.set_int.call_args_list == [
        call("eth0", "forwarding", 1),
        call("eth0", "accept_ra", 2),
    ]
    assert dev.ipv6.conf.forwarding == Tristate.ENABLE
    assert dev.ipv6.conf.accept_ra == 2


def test_disable_short_circuits(dev):
    gateway = mock_gateway()
    desired = DevConf(enabled=False, forwarding=True, autoconf=False, privacy=2, stable_secret=SECRET)
    IPv6DevConf(gateway).apply(dev, desired)

    gateway.set_int.assert_called_once_with("eth0", "disable_ipv6", 1)
    gateway.set_secret.assert_not_called()
    assert dev.ipv6.conf.enabled == Tristate.DISABLE
    assert dev.ipv6.conf.forwarding == Tristate.DISABLE
    assert dev.ipv6.conf.accept_dad == 1
    assert dev.ipv6.radv.pinfo == []
    assert dev.ipv6.radv.rdnss == []
    assert dev.ipv6.radv.dnssl == []


def test_already_disabled_short_circuits(dev):
    dev.ipv6.conf.enabled = Tristate.DISABLE
    gateway = mock_gateway()
    IPv6DevConf(gateway).apply(dev, DevConf(forwarding=True))

    gateway.set_int.assert_not_called()
    assert dev.ipv6.radv.pinfo == []


def test_enable_continues(dev):
    dev.ipv6.conf.enabled = Tristate.DISABLE
    gateway = mock_gateway()
    IPv6DevConf(gateway).apply(dev, DevConf(enabled=True, forwarding=True))

    assert gateway.set_int.call_args_list == [
        call("eth0", "disable_ipv6", 0),
        call("eth0", "forwarding", 1),
    ]
    assert dev.ipv6.conf.enabled == Tristate.ENABLE


def test_privacy_is_clamped(dev):
    gateway = mock_gateway()
    IPv6DevConf(gateway).apply(dev, DevConf(privacy=5))

    gateway.set_int.assert_called_once_with("eth0", "use_tempaddr", 2)
    assert dev.ipv6.conf.privacy == 2


def test_policies_are_clamped(dev):
    gateway = mock_gateway()
    IPv6DevConf(gateway).apply(dev, DevConf(accept_ra=7, accept_dad=9))

    assert gateway.set_int.call_args_list == [
        call("eth0", "accept_ra", 2),
        call("eth0", "accept_dad", 2),
    ]
    assert dev.ipv6.conf.accept_ra == 2
    assert dev.ipv6.conf.accept_dad == 2


def test_soft_failure_continues(dev, caplog):
    gateway = mock_gateway(failures={"forwarding": soft_fail()})
    with caplog.at_level(logging.INFO, logger="ip6devconf.devconf"):
        IPv6DevConf(gateway).apply(dev, DevConf(forwarding=True, autoconf=False))

    assert gateway.set_int.call_args_list == [
        call("eth0", "forwarding", 1),
        call("eth0", "autoconf", 0),
    ]
    assert dev.ipv6.conf.forwarding == Tristate.DISABLE
    assert dev.ipv6.conf.autoconf == Tristate.DISABLE
    assert "cannot set ipv6.conf.forwarding = 1" in caplog.text


def test_hard_failure_aborts(dev):
    failure = hard_fail()
    gateway = mock_gateway(failures={"forwarding": failure})
    with pytest.raises(FatalError) as excinfo:
        IPv6DevConf(gateway).apply(dev, DevConf(forwarding=True, autoconf=False))

    gateway.set_int.assert_called_once_with("eth0", "forwarding", 1)
    assert excinfo.value.attr == "forwarding"
    assert excinfo.value.__cause__ is failure.error
    assert dev.ipv6.conf.forwarding == Tristate.DISABLE
    assert dev.ipv6.conf.autoconf == Tristate.ENABLE


def test_hard_failure_on_disable(dev):
    gateway = mock_gateway(failures={"disable_ipv6": hard_fail()})
    with pytest.raises(FatalError):
        IPv6DevConf(gateway).apply(dev, DevConf(enabled=False))

    assert dev.ipv6.conf.enabled == Tristate.ENABLE
    assert len(dev.ipv6.radv.pinfo) == 1


def test_soft_failure_on_disable_keeps_going(dev):
    gateway = mock_gateway(failures={"disable_ipv6": soft_fail()})
    IPv6DevConf(gateway).apply(dev, DevConf(enabled=False, forwarding=True))

    assert gateway.set_int.call_args_list == [
        call("eth0", "disable_ipv6", 1),
        call("eth0", "forwarding", 1),
    ]
    assert dev.ipv6.conf.enabled == Tristate.ENABLE


def test_not_supported(dev):
    gateway = mock_gateway(supported=False)
    with pytest.raises(NotSupportedError):
        IPv6DevConf(gateway).apply(dev, DevConf(enabled=True))

    gateway.set_int.assert_not_called()
    assert dev.ipv6.conf.enabled == Tristate.DISABLE
    assert dev.ipv6.radv.pinfo == []


def test_not_supported_without_enable(dev):
    gateway = mock_gateway(supported=False)
    IPv6DevConf(gateway).apply(dev, DevConf(forwarding=True))

    gateway.set_int.assert_not_called()
    assert dev.ipv6.conf.enabled == Tristate.DISABLE


def test_missing_arguments(dev):
    with pytest.raises(InvalidInputError):
        IPv6DevConf(mock_gateway()).apply(dev, None)


def test_stable_secret_written_when_set(dev):
    gateway = mock_gateway()
    IPv6DevConf(gateway).apply(dev, DevConf(stable_secret=SECRET))

    gateway.get_secret.assert_not_called()
    gateway.set_secret.assert_called_once_with("eth0", SECRET)
    assert dev.ipv6.conf.stable_secret == SECRET


def test_stable_secret_cleared_in_stable_privacy_mode(dev):
    dev.ipv6.conf.addr_gen_mode = AddrGenMode.STABLE_PRIVACY
    gateway = mock_gateway(secret=Reply(Status.OK, SECRET))
    IPv6DevConf(gateway).apply(dev, DevConf())

    gateway.get_secret.assert_called_once_with("eth0")
    gateway.set_secret.assert_called_once_with("eth0", IPv6Address("::"))


def test_stable_secret_unreadable_in_stable_privacy_mode(dev):
    dev.ipv6.conf.addr_gen_mode = AddrGenMode.STABLE_PRIVACY
    gateway = mock_gateway()
    IPv6DevConf(gateway).apply(dev, DevConf())

    gateway.get_secret.assert_called_once_with("eth0")
    gateway.set_secret.assert_not_called()


def test_stable_secret_checked_after_mode_change(dev):
    gateway = mock_gateway(secret=Reply(Status.OK, SECRET))
    IPv6DevConf(gateway).apply(dev, DevConf(addr_gen_mode=AddrGenMode.STABLE_PRIVACY, stable_secret=SECRET))

    gateway.set_int.assert_called_once_with("eth0", "addr_gen_mode", 2)
    gateway.get_secret.assert_called_once_with("eth0")
    gateway.set_secret.assert_called_once_with("eth0", SECRET)


def test_stable_secret_failure_is_fatal(dev):
    gateway = mock_gateway(failures={"stable_secret": soft_fail()})
    with pytest.raises(FatalError) as excinfo:
        IPv6DevConf(gateway).apply(dev, DevConf(stable_secret=SECRET))
    assert excinfo.value.attr == "stable_secret"
    assert dev.ipv6.conf.stable_secret == IPv6Address("::")


def test_refresh_reads_and_clamps():
    values = {
        "disable_ipv6": 0,
        "forwarding": 1,
        "autoconf": 0,
        "use_tempaddr": -5,
        "accept_ra": 5,
        "accept_dad": -3,
        "addr_gen_mode": -1,
    }
    dev = NetDevice("eth0", 2)
    ipv6 = IPv6DevConf(mock_gateway(values=values)).refresh(dev)

    assert ipv6 is dev.ipv6
    assert ipv6.conf.enabled == Tristate.ENABLE
    assert ipv6.conf.forwarding == Tristate.ENABLE
    assert ipv6.conf.autoconf == Tristate.DISABLE
    assert ipv6.conf.privacy == -1
    assert ipv6.conf.accept_ra == 2
    assert ipv6.conf.accept_dad == 0
    assert ipv6.conf.addr_gen_mode == 0
    # accept_redirects is unreadable
    assert ipv6.conf.accept_redirects == Tristate.DEFAULT


def test_refresh_not_present(dev):
    gateway = mock_gateway()
    gateway.is_present.return_value = False
    IPv6DevConf(gateway).refresh(dev)

    assert dev.ipv6.conf == DevConf()
    assert dev.ipv6.radv.pinfo == []


def test_refresh_not_supported(dev):
    IPv6DevConf(mock_gateway(supported=False)).refresh(dev)

    assert dev.ipv6.conf.enabled == Tristate.DISABLE
    assert dev.ipv6.conf.forwarding == Tristate.DEFAULT
    assert dev.ipv6.radv.rdnss == []
