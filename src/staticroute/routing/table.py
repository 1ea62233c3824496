"""Route table construction.

Compiles the ``[get_routes]`` section of the config into an immutable
``RouteTable`` mapping exact URL paths to files. Three sources feed it:

- literal routes: ``"about" = "pages/about.html"``
- ``direct``: a list of files each routed under its own relative path
- ``unspecial``: literal routes whose key is ``direct`` or ``unspecial``

Construction is all-or-nothing. A reserved key used as a literal route,
a duplicated route key, or an escaping ``direct`` path aborts the build
with a ``ConfigurationError``.
"""

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from staticroute.errors import ConfigurationError, DuplicateRouteError, ReservedRouteError
from staticroute.routing.files import FileObject, ResolvedFile, parse_file_object, resolve_file

logger = logging.getLogger("staticroute.config")

DIRECT = "direct"
UNSPECIAL = "unspecial"
RESERVED_KEYS = frozenset({DIRECT, UNSPECIAL})

SECTION = "get_routes"
DIRECT_SECTION = f"{SECTION}.{DIRECT}"
UNSPECIAL_SECTION = f"{SECTION}.{UNSPECIAL}"


class RouteTable(Mapping[str, ResolvedFile]):
    """Immutable mapping from route key to resolved file.

    Keys are request paths without the leading ``/``; the empty key is
    the root path. Safe to share between concurrent requests.
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: Mapping[str, ResolvedFile] | None = None) -> None:
        self._routes: Mapping[str, ResolvedFile] = MappingProxyType(dict(routes or {}))

    def __getitem__(self, key: str) -> ResolvedFile:
        return self._routes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        return f"RouteTable({dict(self._routes)!r})"

    def resolve(self, url_path: str) -> ResolvedFile | None:
        """Look up a request path (``/a/b.html`` -> key ``a/b.html``)."""
        key = url_path[1:] if url_path.startswith("/") else url_path
        return self._routes.get(key)


@dataclass(frozen=True, slots=True)
class GetRoutes:
    """The ``[get_routes]`` section split into its three sources."""

    explicit: Mapping[str, FileObject] = field(default_factory=dict)
    direct: tuple[FileObject, ...] = ()
    unspecial: Mapping[str, FileObject] = field(default_factory=dict)


def _reserved_hint(name: str) -> str:
    return (
        f"`{name}` is a reserved key of [{SECTION}]; "
        f'to serve the literal path "/{name}" declare it under [{UNSPECIAL_SECTION}]'
    )


def parse_get_routes(table: Any) -> GetRoutes:
    """Split a raw ``[get_routes]`` table into literal, direct and unspecial routes.

    The two reserved keys are taken out first, and must have their
    structural shapes: ``direct`` an array, ``unspecial`` a table.
    """
    if not isinstance(table, Mapping):
        msg = f"must be a table, not {type(table).__name__}"
        raise ConfigurationError(msg, section=SECTION)

    remaining = dict(table)

    direct: tuple[FileObject, ...] = ()
    if DIRECT in remaining:
        raw_direct = remaining.pop(DIRECT)
        if not isinstance(raw_direct, list):
            raise ReservedRouteError(_reserved_hint(DIRECT), section=SECTION, key=DIRECT)
        direct = tuple(
            parse_file_object(value, section=DIRECT_SECTION, key=str(i))
            for i, value in enumerate(raw_direct)
        )

    unspecial: dict[str, FileObject] = {}
    if UNSPECIAL in remaining:
        raw_unspecial = remaining.pop(UNSPECIAL)
        if not isinstance(raw_unspecial, Mapping):
            raise ReservedRouteError(_reserved_hint(UNSPECIAL), section=SECTION, key=UNSPECIAL)
        unspecial = {
            k: parse_file_object(v, section=UNSPECIAL_SECTION, key=k)
            for k, v in raw_unspecial.items()
        }

    explicit = {k: parse_file_object(v, section=SECTION, key=k) for k, v in remaining.items()}
    return GetRoutes(explicit=explicit, direct=direct, unspecial=unspecial)


class _Builder:
    """Accumulates routes, remembering which section defined each key."""

    __slots__ = ("routes", "sources")

    def __init__(self) -> None:
        self.routes: dict[str, ResolvedFile] = {}
        self.sources: dict[str, str] = {}

    def insert(self, key: str, resolved: ResolvedFile, section: str) -> None:
        if key in self.routes:
            first = self.sources[key]
            where = f"[{first}]" if first == section else f"[{first}] and [{section}]"
            msg = f"route {key!r} is defined more than once (in {where})"
            raise DuplicateRouteError(msg, section=section, key=key)
        logger.debug("route /%s -> %s (%s)", key, resolved.path, resolved.media_type)
        self.routes[key] = resolved
        self.sources[key] = section


def build_route_table(
    explicit_routes: Mapping[str, FileObject],
    direct_list: Sequence[FileObject] | None,
    unspecial_table: Mapping[str, FileObject] | None,
    base: Path,
) -> RouteTable:
    """Compile the three route sources into a ``RouteTable``.

    Literal routes go in first, then ``unspecial``, then ``direct``.
    Any key collision between (or within) sources is an error rather
    than a silent override.
    """
    builder = _Builder()

    for key, obj in explicit_routes.items():
        if key in RESERVED_KEYS:
            raise ReservedRouteError(_reserved_hint(key), section=SECTION, key=key)
        resolved = resolve_file(obj, base, section=SECTION, key=key)
        builder.insert(key, resolved, SECTION)

    for key, obj in (unspecial_table or {}).items():
        resolved = resolve_file(obj, base, section=UNSPECIAL_SECTION, key=key)
        builder.insert(key, resolved, UNSPECIAL_SECTION)

    for i, obj in enumerate(direct_list or ()):
        resolved = resolve_file(obj, base, allow_escape=False, section=DIRECT_SECTION, key=str(i))
        key = resolved.path.relative_to(base).as_posix()
        builder.insert(key, resolved, DIRECT_SECTION)

    return RouteTable(builder.routes)


def compile_get_routes(table: Any, base: Path) -> RouteTable:
    """Parse and build a raw ``[get_routes]`` table in one step."""
    routes = parse_get_routes(table)
    return build_route_table(routes.explicit, routes.direct, routes.unspecial, base)
