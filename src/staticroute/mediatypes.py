"""File extension to media type mapping.

A fixed table rather than ``mimetypes``: results must not depend on the
host's ``/etc/mime.types``. Matching is case-sensitive on the literal
suffix after the last ``.`` of the file name.
"""

from pathlib import PurePosixPath

DEFAULT_MEDIA_TYPE = "application/octet-stream"

MEDIA_TYPES: dict[str, str] = {
    "txt": "text/plain",
    "html": "text/html",
    "css": "text/css",
    "js": "text/javascript",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "jxl": "image/jxl",
    "svg": "image/svg",
    "mp4": "video/mp4",
    "m4v": "video/mp4",
    # not registered with IANA; the type suggested by matroska.org
    "mkv": "video/x-matroska",
    "pdf": "application/pdf",
    "wasm": "application/wasm",
}


def extension_of(name: str) -> str:
    """Return the suffix of *name*'s final component without the dot.

    Dotfiles (``.bashrc``) and names without a dot have no extension.
    """
    suffix = PurePosixPath(name).suffix
    return suffix[1:]


def media_type_for(name: str) -> str | None:
    """Infer the media type of *name*, or ``None`` if unrecognized."""
    ext = extension_of(name)
    if not ext:
        return None
    return MEDIA_TYPES.get(ext)


def resolve_extension(name: str) -> str:
    """Infer the media type of *name*, falling back to the default."""
    return media_type_for(name) or DEFAULT_MEDIA_TYPE
