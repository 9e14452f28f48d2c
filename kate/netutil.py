"""Network helpers."""

from __future__ import annotations

import errno
import functools
import ipaddress
import socket

import psutil

__all__ = ["get_external_ip", "is_err_closing"]

_CLOSING_MESSAGE = "use of closed network connection"
_WSAENOTSOCK = 10038


def _ip_of(addr) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    if addr.family not in (socket.AF_INET, socket.AF_INET6):
        return None
    try:
        return ipaddress.ip_address(addr.address.split("%", 1)[0])
    except ValueError:
        return None


@functools.cache
def get_external_ip() -> str:
    """Return the first IPv4 address of an interface that is up and not loopback.

    Raises OSError when no such address exists.
    """
    stats = psutil.net_if_stats()
    for name, addrs in psutil.net_if_addrs().items():
        stat = stats.get(name)
        if stat is None or not stat.isup:
            continue
        if "loopback" in getattr(stat, "flags", "").split(","):
            continue
        for addr in addrs:
            ip = _ip_of(addr)
            if ip is None or ip.is_loopback:
                continue
            v4 = ip if isinstance(ip, ipaddress.IPv4Address) else ip.ipv4_mapped
            if v4 is None:
                continue
            return str(v4)
    raise OSError("not connected to the network")


def _is_closing(err: BaseException) -> bool:
    if str(err) == _CLOSING_MESSAGE:
        return True
    if isinstance(err, OSError):
        return err.errno == errno.EBADF or getattr(err, "winerror", None) == _WSAENOTSOCK
    return False


def is_err_closing(err: BaseException) -> bool:
    """Return True if `err` (or its direct cause) reports a closed socket."""
    return _is_closing(err) or (err.__cause__ is not None and _is_closing(err.__cause__))