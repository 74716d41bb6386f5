"""Tests for the output subsystem: declaration writer."""

from pathlib import Path

from extdts.config.models import OutputConfig
from extdts.output.writer import DeclarationWriter, _sanitize_version_name


# ---------------------------------------------------------------------------
# _sanitize_version_name
# ---------------------------------------------------------------------------


class TestSanitizeVersionName:
    def test_normal_name_unchanged(self):
        assert _sanitize_version_name("ExtJS-4.2.1.883") == "ExtJS-4.2.1.883"

    def test_replaces_slash(self):
        assert "/" not in _sanitize_version_name("ext/5")

    def test_strips_dot_dot(self):
        assert ".." not in _sanitize_version_name("../../etc/passwd")

    def test_removes_unsafe_chars(self):
        result = _sanitize_version_name("ext <5>")
        assert "<" not in result
        assert " " not in result

    def test_empty_becomes_unnamed(self):
        assert _sanitize_version_name("") == "_unnamed"

    def test_dots_only_becomes_unnamed(self):
        assert _sanitize_version_name(".") == "_unnamed"


# ---------------------------------------------------------------------------
# DeclarationWriter
# ---------------------------------------------------------------------------


class TestDeclarationWriter:
    def test_declaration_path(self, tmp_path):
        writer = DeclarationWriter(OutputConfig(base_dir=str(tmp_path)))
        assert writer.declaration_path("ExtJS-5.1.0") == tmp_path / "ExtJS-5.1.0" / "ExtJS-5.1.0.d.ts"

    def test_write_creates_directories(self, tmp_path):
        writer = DeclarationWriter(OutputConfig(base_dir=str(tmp_path / "build")))
        dest = writer.write("declare class Ext {}\n", "ext")
        assert dest == tmp_path / "build" / "ext" / "ext.d.ts"
        assert dest.read_text(encoding="utf-8") == "declare class Ext {}\n"

    def test_write_overwrites(self, tmp_path):
        writer = DeclarationWriter(OutputConfig(base_dir=str(tmp_path)))
        writer.write("old", "ext")
        dest = writer.write("new", "ext")
        assert dest.read_text(encoding="utf-8") == "new"

    def test_dry_run_writes_nothing(self, tmp_path):
        writer = DeclarationWriter(OutputConfig(base_dir=str(tmp_path / "build")))
        dest = writer.write("text", "ext", dry_run=True)
        assert dest == tmp_path / "build" / "ext" / "ext.d.ts"
        assert not (tmp_path / "build").exists()

    def test_write_to_explicit_destination(self, tmp_path):
        writer = DeclarationWriter(OutputConfig(base_dir=str(tmp_path / "unused")))
        dest = writer.write_to("text", str(tmp_path / "a" / "b" / "out.d.ts"))
        assert isinstance(dest, Path)
        assert dest.read_text(encoding="utf-8") == "text"
        assert not (tmp_path / "unused").exists()

    def test_utf8_output(self, tmp_path):
        writer = DeclarationWriter(OutputConfig(base_dir=str(tmp_path)))
        dest = writer.write("/* Größe */\n", "ext")
        assert dest.read_bytes() == "/* Größe */\n".encode("utf-8")
