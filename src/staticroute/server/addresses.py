"""Listen address resolution and the bind-with-fallback loop.

Addresses are ``host:port`` strings (``[v6]:port`` for IPv6 literals).
Each is resolved through the system resolver, which may yield several
socket addresses; they are tried in declared order and the first that
binds wins.
"""

import logging
import socket
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from staticroute.errors import BindError

logger = logging.getLogger("staticroute.server")


@dataclass(frozen=True, slots=True)
class ResolvedAddress:
    """One connectable socket address produced from a configured string."""

    label: str
    family: socket.AddressFamily
    sockaddr: tuple[Any, ...]

    @property
    def host(self) -> str:
        return self.sockaddr[0]

    @property
    def port(self) -> int:
        return self.sockaddr[1]

    def __str__(self) -> str:
        if self.family == socket.AF_INET6:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


def split_host_port(addr: str) -> tuple[str, int]:
    """Split ``"host:port"`` into its parts.

    Raises ``ValueError`` when the port is missing or out of range, or
    an IPv6 literal is not bracketed.
    """
    host, sep, port = addr.rpartition(":")
    if not sep or not host:
        msg = "expected HOST:PORT"
        raise ValueError(msg)

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        msg = "IPv6 addresses must be written as [ADDR]:PORT"
        raise ValueError(msg)

    if not port.isdigit() or int(port) > 65535:
        msg = f"invalid port {port!r}"
        raise ValueError(msg)
    return host, int(port)


def resolve_addresses(addrs: Iterable[str]) -> Iterator[ResolvedAddress]:
    """Resolve each address string in order.

    Entries that cannot be parsed or resolved are logged and skipped.
    """
    for label in addrs:
        try:
            host, port = split_host_port(label)
            infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
        except (ValueError, OSError) as exc:
            logger.warning("no socket addr found for %r (%s)", label, exc)
            continue

        seen: set[tuple[Any, ...]] = set()
        for family, _type, _proto, _canonname, sockaddr in infos:
            if sockaddr in seen:
                continue
            seen.add(sockaddr)
            yield ResolvedAddress(label, family, sockaddr)


def bind_first(addrs: Iterable[str]) -> socket.socket:
    """Bind a TCP socket to the first address that accepts it.

    Returns the bound (not yet listening) socket. Raises ``BindError``
    naming every configured address when none can be bound.
    """
    addrs = tuple(addrs)
    for address in resolve_addresses(addrs):
        sock = socket.socket(address.family, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind(address.sockaddr)
        except OSError as exc:
            sock.close()
            logger.warning("failed to bind to address %r = %s (%s)", address.label, address, exc)
            continue

        logger.info("bound %r = %s", address.label, address)
        return sock

    raise BindError(addrs)
