"""Atomic writer for the documented output file."""

import os
import shutil
import tempfile
from pathlib import Path


class OutputWriter:
    """Writes text files atomically.

    The content is written to a temporary file in the target directory,
    validated by reading it back, and moved over the target with
    ``Path.replace``. A failed write never leaves a partial output file.
    """

    def write(self, filepath: str, content: str) -> Path:
        """Write ``content`` to ``filepath``.

        Parameters
        ----------
        filepath : str
            Destination path; parent directories are created if needed
        content : str
            Text to write, line endings preserved as given

        Returns
        -------
        Path
            Resolved destination path

        Raises
        ------
        OSError
            If there is not enough disk space or the write cannot be validated
        """
        file_path = Path(filepath).resolve()
        file_path.parent.mkdir(parents=True, exist_ok=True)

        self._check_disk_space(file_path, len(content.encode("utf-8")))

        temp_path = None  # Initialize to avoid NameError if mkstemp fails
        try:
            # Temp file must be in same directory for atomic rename to work
            temp_fd, temp_path_str = tempfile.mkstemp(
                dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
            )
            temp_path = Path(temp_path_str)

            with os.fdopen(temp_fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)

            self._validate_write(temp_path, content)
            temp_path.replace(file_path)
            return file_path
        finally:
            if temp_path and temp_path.exists():
                temp_path.unlink()

    def _check_disk_space(self, file_path: Path, required_bytes: int) -> None:
        """Check if sufficient disk space is available before writing.

        Raises
        ------
        OSError
            If insufficient disk space is available
        """
        usage = shutil.disk_usage(file_path.parent)

        # Add 10% buffer for safety
        required_with_buffer = int(required_bytes * 1.1)

        if usage.free < required_with_buffer:
            raise OSError(
                f"Insufficient disk space. Required: {required_with_buffer} bytes, "
                f"Available: {usage.free} bytes"
            )

    def _validate_write(self, file_path: Path, expected_content: str) -> None:
        """Validate that file was written correctly by reading it back.

        Raises
        ------
        OSError
            If the file content doesn't match expected content
        """
        with file_path.open(encoding="utf-8", newline="") as f:
            actual_content = f.read()

        if actual_content != expected_content:
            raise OSError(
                f"Write validation failed for '{file_path}'. "
                f"Expected {len(expected_content)} characters, "
                f"got {len(actual_content)}."
            )
