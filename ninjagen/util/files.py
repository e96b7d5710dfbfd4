# SPDX-License-Identifier: MIT
"""Write-if-different layer for generated files.

Every file ninjagen produces (Ninja scripts, unity files, response files,
manifests) goes through a ``GeneratedFileWriter``. The disk writer only
touches a file when its bytes change, so timestamps of unchanged outputs
are preserved and Ninja does not rebuild anything after a rerun.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class GeneratedFileWriter(Protocol):
    """Protocol for objects persisting generated files."""

    def write_generated_file(self, owner: str, path: str | Path, content: str) -> bool:
        """Write ``content`` to ``path`` unless it already holds it.

        Args:
            owner: Name of the project the file is generated for.
            path: Destination path.
            content: Full file content.

        Returns:
            True if the file was written, False if it was already up to date.
        """
        ...


class DiskFileWriter:
    """Write generated files to disk, skipping unchanged ones.

    Content is written as UTF-8 with ``\\n`` line endings on every platform
    so that output is byte-identical between hosts.
    """

    def write_generated_file(self, owner: str, path: str | Path, content: str) -> bool:
        path = Path(path)
        data = content.encode("utf-8")
        if path.is_file() and path.read_bytes() == data:
            logger.debug("%s: %s is up to date", owner, path)
            return False

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.debug("%s: wrote %s", owner, path)
        return True


class MemoryFileWriter:
    """Keep generated files in memory instead of writing them.

    Useful for previews and tests. Behaves like ``DiskFileWriter``: writing
    the same content twice reports the second write as skipped.
    """

    def __init__(self) -> None:
        self.files: dict[str, str] = {}

    def write_generated_file(self, owner: str, path: str | Path, content: str) -> bool:
        key = str(path)
        if self.files.get(key) == content:
            return False
        self.files[key] = content
        return True
