"""Tests for staticroute.mediatypes — extension to media type table."""

import pytest

from staticroute.mediatypes import (
    DEFAULT_MEDIA_TYPE,
    extension_of,
    media_type_for,
    resolve_extension,
)


class TestMediaTypeFor:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("a.txt", "text/plain"),
            ("index.html", "text/html"),
            ("style.css", "text/css"),
            ("app.js", "text/javascript"),
            ("logo.png", "image/png"),
            ("photo.jpg", "image/jpeg"),
            ("photo.jpeg", "image/jpeg"),
            ("pic.jxl", "image/jxl"),
            ("x.svg", "image/svg"),
            ("clip.mp4", "video/mp4"),
            ("clip.m4v", "video/mp4"),
            ("film.mkv", "video/x-matroska"),
            ("doc.pdf", "application/pdf"),
            ("mod.wasm", "application/wasm"),
        ],
    )
    def test_known_extensions(self, name: str, expected: str) -> None:
        assert media_type_for(name) == expected

    def test_unknown_extension(self) -> None:
        assert media_type_for("x.unknownext") is None

    def test_no_extension(self) -> None:
        assert media_type_for("noext") is None

    def test_case_sensitive(self) -> None:
        assert media_type_for("INDEX.HTML") is None

    def test_only_last_suffix_counts(self) -> None:
        assert media_type_for("archive.html.gz") is None
        assert media_type_for("page.min.js") == "text/javascript"

    def test_directory_dots_ignored(self) -> None:
        assert media_type_for("v1.2/readme") is None
        assert media_type_for("assets.d/site.css") == "text/css"


class TestResolveExtension:
    def test_svg(self) -> None:
        assert resolve_extension("x.svg") == "image/svg"

    def test_unknown_falls_back(self) -> None:
        assert resolve_extension("x.unknownext") == DEFAULT_MEDIA_TYPE

    def test_no_extension_falls_back(self) -> None:
        assert resolve_extension("noext") == DEFAULT_MEDIA_TYPE

    def test_default_is_octet_stream(self) -> None:
        assert DEFAULT_MEDIA_TYPE == "application/octet-stream"


class TestExtensionOf:
    def test_plain(self) -> None:
        assert extension_of("a.txt") == "txt"

    def test_dotfile_has_no_extension(self) -> None:
        assert extension_of(".bashrc") == ""

    def test_no_dot(self) -> None:
        assert extension_of("Makefile") == ""
