"""IPv6 device configuration exceptions."""


class IP6DevConfError(Exception):
    """IPv6 device configuration error."""


class NotSupportedError(IP6DevConfError):
    """IPv6 is not available on this host."""


class TransientError(IP6DevConfError):
    """Attribute path is missing or read-only."""


class FatalError(IP6DevConfError):
    """Writing an attribute failed."""

    def __init__(self, ifname: str, attr: str, value=None):
        super().__init__(f"{ifname}: cannot set ipv6.conf.{attr} = {value}")
        self.ifname = ifname
        self.attr = attr
        self.value = value


class InvalidInputError(IP6DevConfError, ValueError):
    """Missing or invalid argument."""
