"""Staticroute exception hierarchy.

Shared across config loading, route building, the ASGI handler and the
bind loop so every module raises and catches the same types.
"""

from dataclasses import dataclass


class StaticRouteError(Exception):
    """Base for all staticroute-specific errors."""


class ConfigurationError(StaticRouteError):
    """Raised when the configuration file is invalid.

    Always fatal: the server never starts with a partially valid
    route table. ``section`` and ``key`` locate the offending entry,
    e.g. ``section="get_routes.direct"``, ``key="2"``.
    """

    def __init__(self, message: str, *, section: str | None = None, key: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.section = section
        self.key = key

    @property
    def location(self) -> str:
        """Dotted location of the offending entry, or ``""``."""
        parts = [p for p in (self.section, self.key) if p is not None]
        return ".".join(repr(p) if p == "" else p for p in parts)

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class ReservedRouteError(ConfigurationError):
    """``direct`` or ``unspecial`` used as a literal route key."""


class DuplicateRouteError(ConfigurationError):
    """A route key was defined by more than one entry."""


class PathEscapeError(ConfigurationError):
    """A ``direct`` path is absolute or leaves the config directory."""


class EmptyPathError(ConfigurationError):
    """A file object has an empty path."""


class BindError(StaticRouteError):
    """No configured address could be bound.

    ``addresses`` holds every address string that was tried, in order.
    """

    def __init__(self, addresses: tuple[str, ...]) -> None:
        self.addresses = addresses
        listed = ", ".join(repr(a) for a in addresses)
        super().__init__(f"failed to bind to any address (tried {listed})")


@dataclass(frozen=True, slots=True)
class HTTPError(StaticRouteError):
    """An error that maps directly to an HTTP status code.

    Raised during request dispatch. The ASGI handler catches these and
    turns them into responses.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request path, or its file is missing."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — only GET is served."""

    def __init__(self, method: str) -> None:
        super().__init__(
            status=405,
            detail=f"Method {method} not allowed. Allowed methods: GET",
            headers=(("Allow", "GET"),),
        )
