"""Data learned from IPv6 Router Advertisements.

Prefixes, recursive DNS servers and DNS search domains announced by routers.
Every entry carries the time it was acquired and a lifetime. Once the lifetime
has run out, the entry is dropped by the next call to RAInfo.expire().
"""

import logging
import time
from ipaddress import IPv6Address

from ip6devconf.datamodel import LIFETIME_INFINITE, DNSSLInfo, PrefixInfo, RDNSSInfo
from ip6devconf.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


def lifetime_left(lifetime: int, acquired: float, now: float) -> int:
    """Return the seconds left of a lifetime acquired at the given time."""
    if lifetime in (0, LIFETIME_INFINITE):
        return lifetime
    spent = max(0, int(now - acquired))  # clock going backwards spends nothing
    if spent >= lifetime:
        return 0
    return lifetime - spent


def _expire_list(entries: list, now: float) -> int:
    """Drop expired entries in place, return the shortest lifetime left."""
    lifetime = LIFETIME_INFINITE
    kept = []
    for entry in entries:
        left = lifetime_left(entry.lifetime, entry.acquired, now)
        if left:
            lifetime = min(lifetime, left)
            kept.append(entry)
        else:
            logger.debug("Expired %s", entry)
    entries[:] = kept
    return lifetime


class RAInfo:
    """Router Advertisement information of an interface."""

    def __init__(self):
        self.managed_addr = False
        self.other_config = False
        self.pinfo: list[PrefixInfo] = []
        self.rdnss: list[RDNSSInfo] = []
        self.dnssl: list[DNSSLInfo] = []

    def __repr__(self) -> str:
        return (
            f"RAInfo(managed_addr={self.managed_addr}, other_config={self.other_config}, "
            f"pinfo={len(self.pinfo)}, rdnss={len(self.rdnss)}, dnssl={len(self.dnssl)})"
        )

    def reset(self) -> None:
        """Clear the RA flags and flush everything learned."""
        self.managed_addr = False
        self.other_config = False
        self.flush()

    def flush(self) -> None:
        """Forget all prefixes, DNS servers and search domains."""
        self.pinfo.clear()
        self.rdnss.clear()
        self.dnssl.clear()

    def expire(self, now: float | None = None) -> int:
        """Drop expired entries.

        Returns the shortest lifetime left over all entries, or LIFETIME_INFINITE
        when nothing will expire. Use it as the delay until the next call.
        """
        if now is None:
            now = time.monotonic()

        lifetime = LIFETIME_INFINITE
        for entries in (self.pinfo, self.rdnss, self.dnssl):
            left = _expire_list(entries, now)
            if left and left < lifetime:
                lifetime = left
        return lifetime

    # Prefixes

    def insert_prefix(
        self,
        prefix: IPv6Address | str,
        length: int,
        valid_lft: int,
        acquired: float,
        preferred_lft: int | None = None,
        on_link: bool = True,
        autoconf: bool = True,
    ) -> PrefixInfo:
        """Prepend a prefix. Does not replace an existing entry for the same prefix."""
        if prefix is None or acquired is None:
            raise InvalidInputError("prefix and acquired time are required")
        pinfo = PrefixInfo(
            prefix=prefix,
            length=length,
            valid_lft=valid_lft,
            preferred_lft=valid_lft if preferred_lft is None else preferred_lft,
            on_link=on_link,
            autoconf=autoconf,
            acquired=acquired,
        )
        self.pinfo.insert(0, pinfo)
        return pinfo

    def find_prefix(self, prefix: IPv6Address | str, length: int) -> PrefixInfo | None:
        prefix = IPv6Address(prefix)
        for pinfo in self.pinfo:
            if pinfo.length == length and pinfo.prefix == prefix:
                return pinfo
        return None

    def remove_prefix(self, prefix: IPv6Address | str, length: int) -> PrefixInfo | None:
        """Unlink the first entry for prefix/length and return it, None if not found."""
        pinfo = self.find_prefix(prefix, length)
        if pinfo is not None:
            self.pinfo.remove(pinfo)
        return pinfo

    # Recursive DNS servers

    def find_rdnss(self, server: IPv6Address | str) -> RDNSSInfo | None:
        server = IPv6Address(server)
        for rdnss in self.rdnss:
            if rdnss.server == server:
                return rdnss
        return None

    def update_rdnss(self, server: IPv6Address | str, lifetime: int, acquired: float) -> None:
        """Add, refresh or (with a zero lifetime) remove a DNS server."""
        if not server or acquired is None:
            raise InvalidInputError("server address and acquired time are required")

        rdnss = self.find_rdnss(server)
        if rdnss is not None:
            if lifetime:
                rdnss.lifetime = lifetime
                rdnss.acquired = acquired
            else:
                self.rdnss.remove(rdnss)
            return

        # Nothing to do on removal of an untracked server
        if lifetime:
            self.rdnss.append(RDNSSInfo(server=server, lifetime=lifetime, acquired=acquired))

    # DNS search list

    def find_dnssl(self, domain: str) -> DNSSLInfo | None:
        domain = domain.lower()
        for dnssl in self.dnssl:
            if dnssl.domain == domain:
                return dnssl
        return None

    def update_dnssl(self, domain: str, lifetime: int, acquired: float) -> None:
        """Add, refresh or (with a zero lifetime) remove a search domain."""
        if not domain or acquired is None:
            raise InvalidInputError("domain and acquired time are required")

        dnssl = self.find_dnssl(domain)
        if dnssl is not None:
            if lifetime:
                dnssl.lifetime = lifetime
                dnssl.acquired = acquired
            else:
                self.dnssl.remove(dnssl)
            return

        if lifetime:
            self.dnssl.append(DNSSLInfo(domain=domain.lower(), lifetime=lifetime, acquired=acquired))
