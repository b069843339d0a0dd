"""ip6devconf configuration file model."""

from ipaddress import IPv6Address

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ip6devconf.datamodel import DevConf
from ip6devconf.names import (
    accept_dad_from_name,
    accept_ra_from_name,
    addr_gen_mode_from_name,
    privacy_from_name,
)
from ip6devconf.sysctl import PROC_SYS_NET_IPV6


def _from_name(value, lookup, what: str):
    if isinstance(value, str) and not value.lstrip("-").isdigit():
        result = lookup(value)
        if result is None:
            raise ValueError(f"Unknown {what} {value!r}")
        return int(result)
    return value


class ConfSystem(BaseModel):
    """Global configuration."""

    model_config = ConfigDict(populate_by_name=True)
    log_level: str = Field(alias="log-level", default="info")
    log_file: str | None = Field(alias="log-file", default=None)
    sysctl_root: str = Field(alias="sysctl-root", default=PROC_SYS_NET_IPV6)


class ConfInterface(BaseModel):
    """Desired IPv6 configuration of one interface. Omitted fields are left alone."""

    model_config = ConfigDict(populate_by_name=True)
    enabled: bool | None = None
    forwarding: bool | None = None
    autoconf: bool | None = None
    accept_redirects: bool | None = Field(alias="accept-redirects", default=None)
    privacy: int | None = None
    accept_ra: int | None = Field(alias="accept-ra", default=None)
    accept_dad: int | None = Field(alias="accept-dad", default=None)
    addr_gen_mode: int | None = Field(alias="addr-gen-mode", default=None)
    stable_secret: IPv6Address | None = Field(alias="stable-secret", default=None)

    @field_validator("privacy", mode="before")
    @classmethod
    def _privacy(cls, value):
        return _from_name(value, privacy_from_name, "privacy mode")

    @field_validator("accept_ra", mode="before")
    @classmethod
    def _accept_ra(cls, value):
        return _from_name(value, accept_ra_from_name, "accept-ra policy")

    @field_validator("accept_dad", mode="before")
    @classmethod
    def _accept_dad(cls, value):
        return _from_name(value, accept_dad_from_name, "accept-dad policy")

    @field_validator("addr_gen_mode", mode="before")
    @classmethod
    def _addr_gen_mode(cls, value):
        return _from_name(value, addr_gen_mode_from_name, "address generation mode")

    def to_devconf(self) -> DevConf:
        return DevConf(**self.model_dump())


class Configuration(BaseModel):
    """Configuration model."""

    system: ConfSystem = ConfSystem()
    interfaces: dict[str, ConfInterface] = {}
