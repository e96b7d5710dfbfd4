# SPDX-License-Identifier: MIT
"""Tests for ninjagen.util.files."""

from ninjagen.util.files import (
    DiskFileWriter,
    GeneratedFileWriter,
    MemoryFileWriter,
)


class TestDiskFileWriter:
    def test_protocol(self):
        assert isinstance(DiskFileWriter(), GeneratedFileWriter)
        assert isinstance(MemoryFileWriter(), GeneratedFileWriter)

    def test_creates_parents(self, tmp_path):
        path = tmp_path / "a" / "b" / "build.ninja"
        assert DiskFileWriter().write_generated_file("app", path, "x\n")
        assert path.read_bytes() == b"x\n"

    def test_skips_identical_content(self, tmp_path):
        path = tmp_path / "build.ninja"
        writer = DiskFileWriter()
        writer.write_generated_file("app", path, "same\n")
        mtime = path.stat().st_mtime_ns

        assert not writer.write_generated_file("app", str(path), "same\n")
        assert path.stat().st_mtime_ns == mtime

    def test_rewrites_changed_content(self, tmp_path):
        path = tmp_path / "build.ninja"
        writer = DiskFileWriter()
        writer.write_generated_file("app", path, "old\n")
        assert writer.write_generated_file("app", path, "new\n")
        assert path.read_text() == "new\n"

    def test_newlines_are_not_translated(self, tmp_path):
        path = tmp_path / "build.ninja"
        DiskFileWriter().write_generated_file("app", path, "a\nb\n")
        assert b"\r" not in path.read_bytes()


class TestMemoryFileWriter:
    def test_write_and_skip(self):
        writer = MemoryFileWriter()
        assert writer.write_generated_file("app", "x.ninja", "a")
        assert not writer.write_generated_file("app", "x.ninja", "a")
        assert writer.write_generated_file("app", "x.ninja", "b")
        assert writer.files == {"x.ninja": "b"}
