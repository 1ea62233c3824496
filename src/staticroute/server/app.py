"""ASGI application serving the compiled route table.

The only component that touches raw ASGI directly. Looks each GET
request up in the ``RouteTable``, reads the file off the event loop
and sends it with its configured media type.
"""

import logging
from pathlib import Path

import anyio

from staticroute._internal.asgi import HTTPScope, Receive, Scope, Send
from staticroute.config import ServerConfig
from staticroute.errors import HTTPError, MethodNotAllowed, NotFound
from staticroute.http.response import Response
from staticroute.routing.files import ResolvedFile
from staticroute.server.sender import send_response

logger = logging.getLogger("staticroute.server")
access_logger = logging.getLogger("staticroute.access")

BARE_NOT_FOUND = Response(body="Not Found", status=404)


async def load_not_found_page(page: ResolvedFile | None) -> Response:
    """Read the configured 404 page into a reusable response.

    A missing or unreadable page is logged and replaced by a bare 404.
    """
    if page is None:
        logger.info("proceeding without 404 file")
        return BARE_NOT_FOUND

    try:
        data = await anyio.Path(page.path).read_bytes()
    except (OSError, ValueError) as exc:
        logger.error("failed to load 404 file %s: %s", page.path, exc)
        return BARE_NOT_FOUND

    logger.info("loaded 404 file")
    return Response(body=data, status=404, content_type=page.media_type)


class StaticServer:
    """ASGI callable serving files from a ``ServerConfig``'s route table.

    Usage::

        config = load_config("site/server.toml")
        app = StaticServer(config)
    """

    __slots__ = ("_not_found", "config")

    def __init__(self, config: ServerConfig) -> None:
        self.config = config
        self._not_found: Response | None = None

    async def startup(self) -> None:
        """Load per-process resources (the 404 page)."""
        self._not_found = await load_not_found_page(self.config.not_found)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        # Servers without lifespan support never call startup().
        if self._not_found is None:
            await self.startup()

        request = HTTPScope.from_scope(scope)
        try:
            response = await self.dispatch(request)
        except HTTPError as exc:
            response = self._error_response(exc)
        except Exception:
            logger.exception("500 %s %s", request.method, request.path)
            response = Response(body="Internal Server Error", status=500)

        await send_response(response, send)

    async def dispatch(self, request: HTTPScope) -> Response:
        """Serve one request. Raises ``HTTPError`` for 404 and 405."""
        if request.method != "GET":
            access_logger.info("[!] unsupported request: %s %s", request.method, request.target)
            raise MethodNotAllowed(request.method)

        resolved = self.config.routes.resolve(request.path)
        if resolved is None:
            access_logger.info("[GET %s] blocked (no configured route)", request.target)
            raise NotFound(f"No route matches {request.path!r}")

        access_logger.info("[GET %s] open %s", request.target, self._display_path(resolved.path))

        try:
            body = await anyio.Path(resolved.path).read_bytes()
        except FileNotFoundError as exc:
            logger.error("I/O error at %s: %s", resolved.path, exc)
            raise NotFound(f"File for {request.path!r} is missing") from exc
        except OSError as exc:
            logger.error("I/O error at %s: %s", resolved.path, exc)
            # the client never sees the specific error
            return Response(body="I/O error", status=500)

        return Response(body=body, content_type=resolved.media_type)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _display_path(self, path: Path) -> str:
        if path.is_relative_to(self.config.base_dir):
            return path.relative_to(self.config.base_dir).as_posix()
        return str(path)

    def _error_response(self, exc: HTTPError) -> Response:
        logger.debug("%d %s", exc.status, exc.detail)
        if exc.status == 404:
            return self._not_found or BARE_NOT_FOUND

        response = Response(body=exc.detail or f"Error {exc.status}", status=exc.status)
        for name, value in exc.headers:
            response = response.with_header(name, value)
        return response

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Handle the ASGI lifespan protocol."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                await self.startup()
                await send({"type": "lifespan.startup.complete"})
            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
