"""Routing — config-compiled route table with exact-path lookup.

Routes are declared in the config file and compiled into an immutable
lookup structure once, before the server starts.
"""

from staticroute.routing.files import (
    ExplicitFile,
    FileObject,
    InferredFile,
    ResolvedFile,
    parse_file_object,
    resolve_file,
)
from staticroute.routing.table import (
    GetRoutes,
    RouteTable,
    build_route_table,
    compile_get_routes,
    parse_get_routes,
)

__all__ = [
    "ExplicitFile",
    "FileObject",
    "GetRoutes",
    "InferredFile",
    "ResolvedFile",
    "RouteTable",
    "build_route_table",
    "compile_get_routes",
    "parse_file_object",
    "parse_get_routes",
    "resolve_file",
]
