# audit_scout/crawler/guard.py
"""
SSRF guard: decides whether a URL points at an internal, private or
cloud-metadata address that the crawler must never request.
"""
from __future__ import annotations

import ipaddress
import re
import socket
from typing import Optional, Tuple, Union
from urllib.parse import urlsplit

from yarl import URL

_IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

ALLOWED_SCHEMES: Tuple[str, ...] = ("http", "https")

BLOCKED_HOSTNAMES = frozenset(
    {
        "localhost",
        "localhost.localdomain",
        "metadata.google.internal",
        "metadata.azure.com",
    }
)

BLOCKED_SUFFIXES: Tuple[str, ...] = (".localhost", ".internal", ".local")

BLOCKED_NETWORKS = tuple(
    ipaddress.ip_network(net)
    for net in (
        "127.0.0.0/8",      # loopback
        "10.0.0.0/8",
        "172.16.0.0/12",
        "192.168.0.0/16",
        "169.254.0.0/16",   # link-local, includes 169.254.169.254 metadata
        "0.0.0.0/8",
        "::1/128",
        "::/128",
        "fe80::/10",
        "fc00::/7",
    )
)

# inet_aton accepts forms like 127.1, 0x7f.0.0.1 and 2130706433
_SHORTHAND_IPV4_RE = re.compile(r"^(0x[0-9a-f]+|\d+)(\.(0x[0-9a-f]+|\d+)){0,3}$", re.IGNORECASE)


def _parse_ip(host: str) -> Optional[_IPAddress]:
    try:
        return ipaddress.ip_address(host)
    except ValueError:
        pass
    if _SHORTHAND_IPV4_RE.match(host):
        try:
            return ipaddress.IPv4Address(socket.inet_aton(host))
        except OSError:
            return None
    return None


def is_private_ip(ip: _IPAddress) -> bool:
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    return any(ip.version == net.version and ip in net for net in BLOCKED_NETWORKS)


def is_private_url(url: str) -> bool:
    """
    Return True if *url* must not be fetched.

    Anything that cannot be parsed, has no host or uses a scheme other than
    http/https is treated as private. Both the raw host and the host aiohttp
    will connect to must pass; yarl IDNA-normalizes the latter, folding
    full-width dots, digits and letters to ASCII.
    """
    try:
        parts = urlsplit(url.strip())
        raw_host = parts.hostname
        parts.port  # raises ValueError on a bad port
        wire_host = URL(url.strip()).host
    except (ValueError, TypeError, AttributeError, UnicodeError):
        return True

    if parts.scheme.lower() not in ALLOWED_SCHEMES or not raw_host or not wire_host:
        return True
    return _is_private_host(raw_host) or _is_private_host(wire_host)


def _is_private_host(host: str) -> bool:
    host = host.strip("[]").rstrip(".").lower()
    if not host or host in BLOCKED_HOSTNAMES or host.endswith(BLOCKED_SUFFIXES):
        return True
    ip = _parse_ip(host)
    return ip is not None and is_private_ip(ip)


__all__ = ["is_private_url", "is_private_ip", "BLOCKED_NETWORKS", "BLOCKED_HOSTNAMES"]
