"""Tests for staticroute.routing.files — file object parsing and resolution."""

from pathlib import Path

import pytest

from staticroute.errors import ConfigurationError, EmptyPathError, PathEscapeError
from staticroute.routing.files import (
    ExplicitFile,
    InferredFile,
    ResolvedFile,
    confine,
    parse_file_object,
    resolve_file,
)

BASE = Path("/cfg")


class TestParseFileObject:
    def test_bare_string(self) -> None:
        assert parse_file_object("a.html") == InferredFile("a.html")

    def test_record_with_type(self) -> None:
        obj = parse_file_object({"type": "text/plain", "path": "a.png"})
        assert obj == ExplicitFile(media_type="text/plain", path="a.png")

    def test_record_without_type_is_inferred(self) -> None:
        assert parse_file_object({"path": "a.png"}) == InferredFile("a.png")

    def test_record_missing_path(self) -> None:
        with pytest.raises(ConfigurationError, match="path"):
            parse_file_object({"type": "text/plain"}, section="get_routes", key="a")

    def test_record_unknown_field(self) -> None:
        with pytest.raises(ConfigurationError, match="mime"):
            parse_file_object({"path": "a.png", "mime": "text/plain"})

    def test_record_non_string_type(self) -> None:
        with pytest.raises(ConfigurationError, match="`type` must be a string"):
            parse_file_object({"path": "a.png", "type": 3})

    def test_empty_media_type_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="invalid media type"):
            parse_file_object({"path": "a.png", "type": ""})

    def test_non_ascii_media_type_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="invalid media type"):
            parse_file_object({"path": "a.png", "type": "text/plaïn"})

    def test_wrong_type(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_file_object(42, section="get_routes", key="answer")
        assert "int" in str(exc_info.value)
        assert exc_info.value.section == "get_routes"
        assert exc_info.value.key == "answer"


class TestResolveFile:
    def test_relative_joined_with_base(self) -> None:
        resolved = resolve_file(InferredFile("sub/page.html"), BASE)
        assert resolved == ResolvedFile(Path("/cfg/sub/page.html"), "text/html")
        assert resolved.path.is_absolute()

    def test_absolute_kept(self) -> None:
        resolved = resolve_file(InferredFile("/srv/www/a.css"), BASE)
        assert resolved.path == Path("/srv/www/a.css")
        assert resolved.media_type == "text/css"

    def test_explicit_type_wins(self) -> None:
        resolved = resolve_file(ExplicitFile("text/plain", "a.png"), BASE)
        assert resolved.media_type == "text/plain"

    def test_explicit_type_wins_for_unknown_extension(self) -> None:
        resolved = resolve_file(ExplicitFile("text/markdown", "notes.md"), BASE)
        assert resolved.media_type == "text/markdown"

    def test_unknown_extension_falls_back(self) -> None:
        resolved = resolve_file(InferredFile("data.bin"), BASE)
        assert resolved.media_type == "application/octet-stream"

    def test_empty_path(self) -> None:
        with pytest.raises(EmptyPathError):
            resolve_file(InferredFile(""), BASE)

    def test_empty_path_in_record(self) -> None:
        with pytest.raises(EmptyPathError):
            resolve_file(ExplicitFile("text/plain", ""), BASE)

    def test_nul_in_path_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="NUL") as exc_info:
            resolve_file(InferredFile("a\x00.html"), BASE, section="get_routes", key="x")
        assert exc_info.value.key == "x"

    def test_nul_in_confined_path_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="NUL"):
            resolve_file(ExplicitFile("text/html", "a\x00.html"), BASE, allow_escape=False)

    def test_escape_allowed_by_default(self) -> None:
        resolved = resolve_file(InferredFile("../shared/a.txt"), BASE)
        assert resolved.path == Path("/cfg/../shared/a.txt")

    def test_absolute_rejected_when_confined(self) -> None:
        with pytest.raises(PathEscapeError):
            resolve_file(InferredFile("/etc/passwd"), BASE, allow_escape=False)

    def test_parent_rejected_when_confined(self) -> None:
        with pytest.raises(PathEscapeError):
            resolve_file(InferredFile("../secret.txt"), BASE, allow_escape=False)

    def test_confined_path_is_normalized(self) -> None:
        resolved = resolve_file(InferredFile("./a/../b/c.js"), BASE, allow_escape=False)
        assert resolved.path == Path("/cfg/b/c.js")

    def test_filesystem_not_touched(self, tmp_path: Path) -> None:
        resolved = resolve_file(InferredFile("missing.html"), tmp_path)
        assert resolved.path == tmp_path / "missing.html"
        assert not resolved.path.exists()


class TestConfine:
    def test_simple(self) -> None:
        assert confine("sub/page.html", BASE) == "sub/page.html"

    def test_dot_segments(self) -> None:
        assert confine("./sub/./page.html", BASE) == "sub/page.html"

    def test_inner_parent_stays_inside(self) -> None:
        assert confine("a/../page.html", BASE) == "page.html"

    def test_leaves_base(self) -> None:
        with pytest.raises(PathEscapeError):
            confine("a/../../page.html", BASE)

    def test_base_itself(self) -> None:
        with pytest.raises(PathEscapeError):
            confine(".", BASE)

    def test_error_carries_location(self) -> None:
        with pytest.raises(PathEscapeError) as exc_info:
            confine("/etc/passwd", BASE, section="get_routes.direct", key="0")
        assert str(exc_info.value).startswith("get_routes.direct.0:")
