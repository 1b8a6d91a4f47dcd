"""Tests for the atomic output writer."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sharpdoc.writer.output_writer import OutputWriter


@pytest.fixture
def writer():
    return OutputWriter()


class TestOutputWriter:
    """Test suite for OutputWriter."""

    def test_writes_content(self, writer, tmp_path):
        target = tmp_path / "output.cs"
        written = writer.write(str(target), "class Foo { }\n")

        assert written == target.resolve()
        assert target.read_text(encoding="utf-8") == "class Foo { }\n"

    def test_line_endings_preserved(self, writer, tmp_path):
        target = tmp_path / "output.cs"
        writer.write(str(target), "class Foo\r\n{\r\n}\r\n")

        assert target.read_bytes() == b"class Foo\r\n{\r\n}\r\n"

    def test_creates_parent_directories(self, writer, tmp_path):
        target = tmp_path / "nested" / "dir" / "output.cs"
        writer.write(str(target), "x")

        assert target.read_text(encoding="utf-8") == "x"

    def test_overwrites_existing_file(self, writer, tmp_path):
        target = tmp_path / "output.cs"
        target.write_text("old", encoding="utf-8")

        writer.write(str(target), "new")
        assert target.read_text(encoding="utf-8") == "new"

    def test_no_temp_files_left(self, writer, tmp_path):
        writer.write(str(tmp_path / "output.cs"), "class Foo { }")
        assert [p.name for p in tmp_path.iterdir()] == ["output.cs"]

    def test_failed_validation_keeps_original(self, writer, tmp_path):
        target = tmp_path / "output.cs"
        target.write_text("original", encoding="utf-8")

        with patch.object(
            OutputWriter, "_validate_write", side_effect=OSError("mismatch")
        ):
            with pytest.raises(OSError, match="mismatch"):
                writer.write(str(target), "replacement")

        assert target.read_text(encoding="utf-8") == "original"
        assert [p.name for p in tmp_path.iterdir()] == ["output.cs"]

    def test_insufficient_disk_space(self, writer, tmp_path):
        with patch("shutil.disk_usage") as mock_usage:
            mock_usage.return_value.free = 0
            with pytest.raises(OSError, match="Insufficient disk space"):
                writer.write(str(tmp_path / "output.cs"), "content")
