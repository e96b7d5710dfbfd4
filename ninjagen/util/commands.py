# SPDX-License-Identifier: MIT
"""Cross-platform command helpers for generated build rules.

These helpers are invoked from Ninja rules through the Python interpreter
that ran ninjagen, so rules do not depend on the host shell's ``del`` or
``rm``.

Usage in build rules:
    python -m ninjagen.util.commands remove <path>...
"""

from __future__ import annotations

import sys
from pathlib import Path


def remove(paths: list[str]) -> None:
    """Delete files if they exist. Missing files are not an error."""
    for path in paths:
        Path(path).unlink(missing_ok=True)


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print(
            "Usage: python -m ninjagen.util.commands <command> [args...]",
            file=sys.stderr,
        )
        print("Commands: remove", file=sys.stderr)
        return 1

    cmd = args[0]

    if cmd == "remove":
        if len(args) < 2:
            print(
                "Usage: python -m ninjagen.util.commands remove <path> [path...]",
                file=sys.stderr,
            )
            return 1
        remove(args[1:])
        return 0

    else:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
