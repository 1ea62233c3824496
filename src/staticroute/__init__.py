"""Staticroute — a config-driven static HTTP server.

A TOML file maps request paths to files; the server compiles it into an
immutable route table at startup and serves GET requests from it.

Basic usage::

    from staticroute import StaticServer, load_config

    config = load_config("site/server.toml")
    app = StaticServer(config)  # any ASGI server can run this

Or from the command line::

    staticroute site/server.toml
"""

__version__ = "0.1.0"
__all__ = [
    "BindError",
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "NotFound",
    "ResolvedFile",
    "RouteTable",
    "ServerConfig",
    "StaticRouteError",
    "StaticServer",
    "load_config",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import staticroute`` (and so the CLI's ``--help``) fast.
    """
    if name in ("ServerConfig", "load_config"):
        from staticroute import config

        return getattr(config, name)

    if name in ("ResolvedFile", "RouteTable"):
        from staticroute import routing

        return getattr(routing, name)

    if name == "StaticServer":
        from staticroute.server.app import StaticServer

        return StaticServer

    if name in (
        "BindError",
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "StaticRouteError",
    ):
        from staticroute import errors

        return getattr(errors, name)

    msg = f"module 'staticroute' has no attribute {name!r}"
    raise AttributeError(msg)
