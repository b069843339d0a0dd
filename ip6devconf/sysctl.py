"""
Access to the kernel's per-interface IPv6 configuration.

The reconciler talks to the kernel through a ConfigGateway. SysctlGateway is
the implementation on top of /proc/sys/net/ipv6/conf/<ifname>/<attribute>.
"""

import errno
import logging
import os
from enum import IntEnum
from ipaddress import IPv6Address
from pathlib import Path
from typing import Any, NamedTuple, Protocol

logger = logging.getLogger(__name__)

PROC_SYS_NET_IPV6 = "/proc/sys/net/ipv6"

# The attribute is missing or read-only: interface down or feature compiled out
SOFT_ERRNOS = (errno.ENOENT, errno.EROFS)


class Status(IntEnum):
    """Outcome of a gateway call."""

    OK = 0
    SOFT_FAIL = 1
    HARD_FAIL = 2


class Reply(NamedTuple):
    """Gateway reply. value is set on successful reads."""

    status: Status
    value: Any = None
    error: OSError | None = None

    @property
    def ok(self) -> bool:
        return self.status == Status.OK


def _failed(e: OSError) -> Reply:
    status = Status.SOFT_FAIL if e.errno in SOFT_ERRNOS else Status.HARD_FAIL
    return Reply(status, error=e)


class ConfigGateway(Protocol):
    """Per-interface IPv6 configuration attributes."""

    def supported(self) -> bool: ...

    def is_present(self, ifname: str) -> bool: ...

    def get_int(self, ifname: str, attr: str) -> Reply: ...

    def set_int(self, ifname: str, attr: str, value: int) -> Reply: ...

    def get_secret(self, ifname: str) -> Reply: ...

    def set_secret(self, ifname: str, secret: IPv6Address) -> Reply: ...


class SysctlGateway:
    """ConfigGateway on top of procfs."""

    def __init__(self, root: str | Path = PROC_SYS_NET_IPV6):
        self.root = Path(root)

    def path(self, ifname: str, attr: str | None = None) -> Path:
        path = self.root / "conf" / ifname
        return path / attr if attr else path

    def supported(self) -> bool:
        """IPv6 may be disabled via ipv6.disable=1 on the kernel command line."""
        return self.root.is_dir()

    def is_present(self, ifname: str) -> bool:
        return self.path(ifname).is_dir()

    def _read(self, ifname: str, attr: str) -> str:
        return self.path(ifname, attr).read_text(encoding="ascii").strip()

    def _write(self, ifname: str, attr: str, value: str) -> None:
        logger.debug("%s: set ipv6.conf.%s = %s", ifname, attr, value)
        # No O_CREAT: a missing attribute must fail with ENOENT
        fd = os.open(self.path(ifname, attr), os.O_WRONLY | os.O_TRUNC)
        with open(fd, "w", encoding="ascii") as f:
            f.write(f"{value}\n")

    def get_int(self, ifname: str, attr: str) -> Reply:
        try:
            text = self._read(ifname, attr)
        except OSError as e:
            return _failed(e)
        try:
            return Reply(Status.OK, int(text))
        except ValueError:
            return Reply(Status.HARD_FAIL, error=OSError(errno.EINVAL, f"Invalid value {text!r}"))

    def set_int(self, ifname: str, attr: str, value: int) -> Reply:
        try:
            self._write(ifname, attr, str(int(value)))
        except OSError as e:
            return _failed(e)
        return Reply(Status.OK)

    def get_secret(self, ifname: str) -> Reply:
        """The kernel refuses to read stable_secret until one has been set."""
        try:
            text = self._read(ifname, "stable_secret")
        except OSError as e:
            return _failed(e)
        try:
            return Reply(Status.OK, IPv6Address(text))
        except ValueError:
            return Reply(Status.HARD_FAIL, error=OSError(errno.EINVAL, f"Invalid stable secret {text!r}"))

    def set_secret(self, ifname: str, secret: IPv6Address) -> Reply:
        try:
            self._write(ifname, "stable_secret", str(IPv6Address(secret)))
        except OSError as e:
            return _failed(e)
        return Reply(Status.OK)
