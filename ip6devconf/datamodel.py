"""IPv6 device configuration model."""

from enum import IntEnum, IntFlag
from ipaddress import IPv6Address, IPv6Network

from pydantic import BaseModel, ConfigDict, Field, field_validator

LIFETIME_INFINITE = 0xFFFFFFFF
IN6ADDR_ANY = IPv6Address("::")


class Tristate(IntEnum):
    """Unset, disabled or enabled."""

    DEFAULT = -1
    DISABLE = 0
    ENABLE = 1


class Privacy(IntEnum):
    """ipv6.conf.use_tempaddr."""

    DEFAULT = -1
    DISABLED = 0
    PREFER_PUBLIC = 1
    PREFER_TEMPORARY = 2


class AcceptRA(IntEnum):
    """ipv6.conf.accept_ra."""

    DEFAULT = -1
    DISABLED = 0
    HOST = 1
    ROUTER = 2


class AcceptDAD(IntEnum):
    """ipv6.conf.accept_dad."""

    DEFAULT = -1
    DISABLED = 0
    FAIL_ADDRESS = 1
    FAIL_PROTOCOL = 2


class AddrGenMode(IntEnum):
    """ipv6.conf.addr_gen_mode."""

    DEFAULT = -1
    EUI64 = 0
    NONE = 1
    STABLE_PRIVACY = 2
    RANDOM = 3


class IPv6Flags(IntFlag):
    """IPv6 device readiness flags."""

    READY = 1 << 0
    RA_RCVD = 1 << 1
    RS_SENT = 1 << 2


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp value into [lower, upper]."""
    return int(lower if value < lower else upper if value > upper else value)


def tristate(value) -> Tristate:
    """Convert a bool, None or int into a tristate."""
    if value is None:
        return Tristate.DEFAULT
    if isinstance(value, Tristate):
        return value
    if isinstance(value, bool):
        return Tristate.ENABLE if value else Tristate.DISABLE
    value = int(value)
    if value < 0:
        return Tristate.DEFAULT
    return Tristate.ENABLE if value else Tristate.DISABLE


def _as_int(value) -> int:
    if value is None:
        return -1
    return int(value)


class DevConf(BaseModel):
    """IPv6 device configuration snapshot.

    Used both for the configuration observed on an interface and for the
    desired configuration pushed to it. A field set to -1 is unset.
    """

    model_config = ConfigDict(validate_assignment=True)

    enabled: Tristate = Tristate.DEFAULT
    forwarding: Tristate = Tristate.DEFAULT
    autoconf: Tristate = Tristate.DEFAULT
    accept_redirects: Tristate = Tristate.DEFAULT
    privacy: int = Privacy.DEFAULT.value
    accept_ra: int = AcceptRA.DEFAULT.value
    accept_dad: int = AcceptDAD.DEFAULT.value
    addr_gen_mode: int = AddrGenMode.DEFAULT.value
    stable_secret: IPv6Address = IN6ADDR_ANY

    @field_validator("enabled", "forwarding", "autoconf", "accept_redirects", mode="before")
    @classmethod
    def _validate_tristate(cls, value) -> Tristate:
        return tristate(value)

    @field_validator("privacy", mode="before")
    @classmethod
    def _validate_privacy(cls, value) -> int:
        return clamp(_as_int(value), Privacy.DEFAULT, Privacy.PREFER_TEMPORARY)

    @field_validator("accept_ra", mode="before")
    @classmethod
    def _validate_accept_ra(cls, value) -> int:
        return clamp(_as_int(value), AcceptRA.DEFAULT, AcceptRA.ROUTER)

    @field_validator("accept_dad", mode="before")
    @classmethod
    def _validate_accept_dad(cls, value) -> int:
        return clamp(_as_int(value), AcceptDAD.DEFAULT, AcceptDAD.FAIL_PROTOCOL)

    @field_validator("addr_gen_mode", mode="before")
    @classmethod
    def _validate_addr_gen_mode(cls, value) -> int:
        return int(max(_as_int(value), AddrGenMode.DEFAULT))

    @field_validator("stable_secret", mode="before")
    @classmethod
    def _validate_stable_secret(cls, value):
        return IN6ADDR_ANY if value is None else value

    def reset(self) -> None:
        """Reset to defaults."""
        for name, field in type(self).model_fields.items():
            setattr(self, name, field.default)


class PrefixInfo(BaseModel):
    """Prefix learned from a RA prefix information option."""

    prefix: IPv6Address
    length: int = Field(ge=0, le=128)
    on_link: bool = True
    autoconf: bool = True
    valid_lft: int = LIFETIME_INFINITE
    preferred_lft: int = LIFETIME_INFINITE
    acquired: float

    @property
    def lifetime(self) -> int:
        return self.valid_lft

    @property
    def network(self) -> IPv6Network:
        return IPv6Network((self.prefix, self.length), strict=False)


class RDNSSInfo(BaseModel):
    """Recursive DNS server learned from a RA RDNSS option."""

    server: IPv6Address
    lifetime: int
    acquired: float


class DNSSLInfo(BaseModel):
    """Search domain learned from a RA DNSSL option."""

    domain: str
    lifetime: int
    acquired: float
