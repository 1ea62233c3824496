"""Server configuration.

ServerConfig is a frozen dataclass — immutable after loading, with the
route table already compiled. ``load_config()`` reads a TOML file;
``parse_config()`` is the pure half that works on decoded data.

Example config::

    addr = "localhost:8080"
    failsafe_addrs = ["127.0.0.1:8080"]
    404 = "404.html"

    [get_routes]
    "" = "index.html"
    "logo" = { type = "image/svg+xml", path = "img/logo.svg" }
    direct = ["style.css", "img/banner.png"]

    [get_routes.unspecial]
    direct = "pages/direct.html"
"""

import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from staticroute.errors import ConfigurationError
from staticroute.routing.files import ResolvedFile, parse_file_object, resolve_file
from staticroute.routing.table import RouteTable, compile_get_routes

logger = logging.getLogger("staticroute.config")

_KNOWN_KEYS = frozenset({"addr", "failsafe_addrs", "404", "get_routes"})


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Server configuration. Immutable after creation.

    ``base_dir`` is the absolute directory of the config file; every
    relative path in the config was resolved against it.
    """

    addr: str
    failsafe_addrs: tuple[str, ...] = ()
    base_dir: Path = field(default_factory=Path.cwd)
    routes: RouteTable = field(default_factory=RouteTable)
    not_found: ResolvedFile | None = None

    @property
    def addresses(self) -> tuple[str, ...]:
        """The primary address followed by the failsafes, in order."""
        return (self.addr, *self.failsafe_addrs)


def config_base_dir(config_path: str | Path) -> Path:
    """Absolute directory containing *config_path*.

    Relative config paths are anchored at the current working directory.
    No symlinks are resolved.
    """
    path = Path(config_path)
    if not path.is_absolute():
        path = Path.cwd() / path
    return path.parent


def _require_str(data: Mapping[str, Any], key: str) -> str:
    if key not in data:
        raise ConfigurationError("missing required field", key=key)
    value = data[key]
    if not isinstance(value, str):
        msg = f"must be a string, not {type(value).__name__}"
        raise ConfigurationError(msg, key=key)
    return value


def _str_list(data: Mapping[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key, [])
    if not isinstance(value, list):
        msg = f"must be an array of strings, not {type(value).__name__}"
        raise ConfigurationError(msg, key=key)
    for i, item in enumerate(value):
        if not isinstance(item, str):
            msg = f"must be a string, not {type(item).__name__}"
            raise ConfigurationError(msg, section=key, key=str(i))
    return tuple(value)


def parse_config(data: Mapping[str, Any], base_dir: Path) -> ServerConfig:
    """Validate decoded TOML *data* and compile it into a ``ServerConfig``."""
    for key in data:
        if key not in _KNOWN_KEYS:
            logger.warning("ignoring unknown config key %r", key)

    addr = _require_str(data, "addr")
    failsafe_addrs = _str_list(data, "failsafe_addrs")

    not_found = None
    if "404" in data:
        obj = parse_file_object(data["404"], key="404")
        not_found = resolve_file(obj, base_dir, key="404")

    routes = RouteTable()
    if "get_routes" in data:
        routes = compile_get_routes(data["get_routes"], base_dir)

    return ServerConfig(
        addr=addr,
        failsafe_addrs=failsafe_addrs,
        base_dir=base_dir,
        routes=routes,
        not_found=not_found,
    )


def load_config(config_path: str | Path) -> ServerConfig:
    """Read, decode and compile the config file at *config_path*.

    Raises ``ConfigurationError`` for unreadable files, malformed TOML
    and every invalid setting.
    """
    try:
        text = Path(config_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"failed to read config file {str(config_path)!r} ({exc})"
        raise ConfigurationError(msg) from exc

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        msg = f"malformed config file ({exc})"
        raise ConfigurationError(msg) from exc

    base_dir = config_base_dir(config_path)
    config = parse_config(data, base_dir)
    logger.debug("loaded %d route(s) from %s", len(config.routes), config_path)
    return config
