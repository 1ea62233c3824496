"""Server bootstrap — bind with fallback, then serve with pounce.

The bind loop runs first so address fallback and its error reporting
happen before any server machinery starts. The winning address is then
handed to a single-worker pounce server running ``StaticServer``.

pounce is an optional dependency (``pip install staticroute[server]``);
``StaticServer`` itself runs under any ASGI server.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from staticroute.errors import BindError, StaticRouteError
from staticroute.server.addresses import bind_first
from staticroute.server.app import StaticServer

if TYPE_CHECKING:
    from staticroute.config import ServerConfig

logger = logging.getLogger("staticroute.server")


class ServerNotInstalledError(StaticRouteError, ImportError):
    """pounce is not installed."""


def select_listen_address(config: ServerConfig) -> tuple[str, int]:
    """Return ``(host, port)`` of the first configured address that binds.

    The probe socket is released before returning; a configured port
    of ``0`` is replaced by the port the kernel picked.

    Raises:
        BindError: If no address in ``config.addresses`` can be bound.
    """
    sock = bind_first(config.addresses)
    try:
        host, port = sock.getsockname()[:2]
    finally:
        sock.close()
    return host, port


def run_server(config: ServerConfig, *, log_level: str = "info") -> None:
    """Serve *config*'s routes until the process is terminated.

    Args:
        config: Loaded server configuration.
        log_level: Log level forwarded to pounce.

    Raises:
        BindError: If no configured address can be bound, or the
            selected one is lost before pounce binds it.
        ServerNotInstalledError: If pounce is missing.
    """
    try:
        from pounce.config import ServerConfig as PounceConfig
        from pounce.server import Server
    except ImportError:
        msg = (
            "staticroute needs 'pounce' to serve requests. "
            "Install with: pip install staticroute[server]"
        )
        raise ServerNotInstalledError(msg) from None

    host, port = select_listen_address(config)
    logger.info("serving %d route(s) from %s", len(config.routes), config.base_dir)

    server_config = PounceConfig(
        host=host,
        port=port,
        workers=1,
        log_level=log_level,
    )
    server = Server(server_config, StaticServer(config))
    try:
        server.run()
    except OSError as exc:
        # The probed address was taken before pounce could bind it.
        logger.warning("failed to bind to address %s:%d (%s)", host, port, exc)
        raise BindError(config.addresses) from exc
