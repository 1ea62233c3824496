"""File objects — the configuration values that name a served file.

A file object is written either as a bare path string or as a record::

    "index.html"
    { type = "text/plain", path = "notes.md" }

Parsing turns the raw TOML value into one of two frozen variants;
resolution turns a variant into a ``ResolvedFile`` anchored at the
config file's directory.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, TypeAlias

from staticroute.errors import ConfigurationError, EmptyPathError, PathEscapeError
from staticroute.mediatypes import DEFAULT_MEDIA_TYPE, media_type_for

logger = logging.getLogger("staticroute.config")

_RECORD_KEYS = frozenset({"path", "type"})


@dataclass(frozen=True, slots=True)
class InferredFile:
    """A bare path; the media type comes from the file extension."""

    path: str


@dataclass(frozen=True, slots=True)
class ExplicitFile:
    """A path with a declared media type that always wins over inference."""

    media_type: str
    path: str


FileObject: TypeAlias = InferredFile | ExplicitFile


@dataclass(frozen=True, slots=True)
class ResolvedFile:
    """A concrete file to serve: absolute path plus media type."""

    path: Path
    media_type: str


def _check_media_type(value: str, section: str | None, key: str | None) -> str:
    # Written verbatim as the Content-Type header value.
    if not value or not value.isascii() or not value.isprintable():
        msg = f"invalid media type {value!r} (must be non-empty printable ASCII)"
        raise ConfigurationError(msg, section=section, key=key)
    return value


def parse_file_object(value: Any, *, section: str | None = None, key: str | None = None) -> FileObject:
    """Parse a raw TOML value into a file object.

    Raises ``ConfigurationError`` for anything that is neither a string
    nor a ``{ path, type }`` table.
    """
    if isinstance(value, str):
        return InferredFile(value)

    if isinstance(value, Mapping):
        unknown = set(value) - _RECORD_KEYS
        if unknown:
            names = ", ".join(sorted(unknown))
            msg = f"unknown file object field(s): {names} (expected `path` and optional `type`)"
            raise ConfigurationError(msg, section=section, key=key)

        path = value.get("path")
        if not isinstance(path, str):
            msg = "file object record needs a string `path`"
            raise ConfigurationError(msg, section=section, key=key)

        media_type = value.get("type")
        if media_type is None:
            return InferredFile(path)
        if not isinstance(media_type, str):
            msg = f"file object `type` must be a string, not {type(media_type).__name__}"
            raise ConfigurationError(msg, section=section, key=key)
        return ExplicitFile(_check_media_type(media_type, section, key), path)

    msg = f"expected a path string or a {{ path, type }} table, not {type(value).__name__}"
    raise ConfigurationError(msg, section=section, key=key)


def confine(raw: str, base: Path, *, section: str | None = None, key: str | None = None) -> str:
    """Normalize *raw* lexically and return it relative to *base*.

    Used for ``direct`` entries, whose route key is the file's own
    relative path. Absolute paths and paths that leave *base* (or name
    *base* itself) raise ``PathEscapeError``.
    """
    if PurePosixPath(raw).is_absolute() or Path(raw).is_absolute():
        msg = f"absolute path {raw!r} is not allowed here (use a path relative to {str(base)!r})"
        raise PathEscapeError(msg, section=section, key=key)

    normalized = PurePosixPath(os.path.normpath(raw.replace(os.sep, "/")))
    if normalized.parts[:1] == ("..",) or str(normalized) == ".":
        msg = f"path {raw!r} resolves outside of {str(base)!r}"
        raise PathEscapeError(msg, section=section, key=key)
    return normalized.as_posix()


def resolve_file(
    obj: FileObject,
    base: Path,
    *,
    allow_escape: bool = True,
    section: str | None = None,
    key: str | None = None,
) -> ResolvedFile:
    """Resolve *obj* against the base directory.

    Relative paths are joined onto *base*; absolute paths are kept as
    they are unless *allow_escape* is false, in which case they (and
    relative paths leading out of *base*) raise ``PathEscapeError``.
    The filesystem is not consulted: a missing file is a 404 at request
    time, not a startup failure.
    """
    if not obj.path:
        raise EmptyPathError("file path must not be empty", section=section, key=key)
    if "\x00" in obj.path:
        msg = f"file path {obj.path!r} contains a NUL character"
        raise ConfigurationError(msg, section=section, key=key)

    if allow_escape:
        path = base / obj.path
    else:
        path = base / confine(obj.path, base, section=section, key=key)

    if isinstance(obj, ExplicitFile):
        return ResolvedFile(path, obj.media_type)

    media_type = media_type_for(path.name)
    if media_type is None:
        logger.debug("no known media type for %r, using %s", obj.path, DEFAULT_MEDIA_TYPE)
        media_type = DEFAULT_MEDIA_TYPE
    return ResolvedFile(path, media_type)
