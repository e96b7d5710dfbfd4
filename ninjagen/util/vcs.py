# SPDX-License-Identifier: MIT
"""Version-control status queries.

The Ninja generator compiles locally modified files on their own and with
optimizations disabled, so they never land in a unity batch and can be
debugged. Whether a file is modified is asked through a ``StatusQuery``.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class StatusQuery(Protocol):
    """Protocol for modification-status providers."""

    def is_modified(self, path: str) -> bool:
        """Return True if ``path`` has local modifications."""
        ...


class NoStatusQuery:
    """Status query reporting every file as unmodified."""

    def is_modified(self, path: str) -> bool:
        return False


class GitStatusQuery:
    """Status query backed by ``git status``.

    git runs once, on the first query; the set of modified files is kept
    for the lifetime of the object, i.e. one generator invocation. If git
    is missing or the directory is not a work tree, a warning is logged
    and no file counts as modified.

    Example:
        query = GitStatusQuery(Path("/src/game"))
        query.is_modified("/src/game/engine/render.cpp")
    """

    def __init__(self, root: Path | str = ".", *, git: str = "git") -> None:
        self.root = Path(root)
        self._git = git
        self._modified: set[str] | None = None

    def is_modified(self, path: str) -> bool:
        if self._modified is None:
            self._modified = self._query()
        return self._normalize(path) in self._modified

    def _normalize(self, path: str) -> str:
        if not os.path.isabs(path):
            path = os.path.join(self.root, path)
        return os.path.normcase(os.path.normpath(path)).lower()

    def _query(self) -> set[str]:
        try:
            toplevel = subprocess.run(
                [self._git, "rev-parse", "--show-toplevel"],
                cwd=self.root,
                capture_output=True,
                text=True,
                timeout=30,
            )
            if toplevel.returncode != 0:
                logger.warning(
                    "Not a git work tree, treating no file as modified: %s",
                    self.root,
                )
                return set()
            result = subprocess.run(
                [self._git, "status", "--porcelain", "-z"],
                cwd=self.root,
                capture_output=True,
                text=True,
                timeout=60,
            )
        except (subprocess.TimeoutExpired, OSError) as e:
            logger.warning("Could not query git status: %s", e)
            return set()

        if result.returncode != 0:
            logger.warning("git status failed: %s", result.stderr.strip())
            return set()

        top = toplevel.stdout.strip()
        return {
            self._normalize(os.path.join(top, entry))
            for entry in parse_porcelain(result.stdout)
        }


def parse_porcelain(output: str) -> list[str]:
    """Return the modified paths listed in ``git status --porcelain -z`` output.

    An entry counts as modified when its index or work-tree status is
    ``M``. Rename and copy entries carry their source path in an extra
    field, which is skipped.

    Examples:
        >>> parse_porcelain(" M src/a.cpp\\0?? new.cpp\\0M  inc/b.h\\0")
        ['src/a.cpp', 'inc/b.h']
        >>> parse_porcelain("R  new.cpp\\0old.cpp\\0 M c.cpp\\0")
        ['c.cpp']
    """
    modified: list[str] = []
    fields = output.split("\0")
    i = 0
    while i < len(fields):
        entry = fields[i]
        i += 1
        if len(entry) < 4:
            continue
        status, path = entry[:2], entry[3:]
        if status[0] in "RC":
            i += 1
        if "M" in status:
            modified.append(path)
    return modified
