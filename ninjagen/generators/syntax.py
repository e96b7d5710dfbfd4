# SPDX-License-Identifier: MIT
"""Ninja syntax helpers."""

from __future__ import annotations

import re
from pathlib import Path


def escape_path(path: str | Path) -> str:
    """Escape a path for use in a Ninja build line.

    ``$``, spaces and colons are special in build lines; each gets a ``$``
    prefix.

    Examples:
        >>> escape_path("C:/src/main.cpp")
        'C$:/src/main.cpp'
        >>> escape_path("path with spaces/file.c")
        'path$ with$ spaces/file.c'
        >>> escape_path("obj/main.o")
        'obj/main.o'
    """
    return str(path).replace("$", "$$").replace(" ", "$ ").replace(":", "$:")


def escape_value(value: str) -> str:
    """Escape a variable value: only ``$`` is special there.

    Examples:
        >>> escape_value("echo $HOME")
        'echo $$HOME'
    """
    return value.replace("$", "$$")


def to_forward_slashes(path: str | Path) -> str:
    r"""Return ``path`` with backslashes replaced by forward slashes.

    Examples:
        >>> to_forward_slashes(r"obj\debug\main.obj")
        'obj/debug/main.obj'
    """
    return str(path).replace("\\", "/")


_IDENTIFIER_RE = re.compile(r"[^a-z0-9_]")


def make_identifier(name: str) -> str:
    """Lower-case ``name`` and replace anything that is not [a-z0-9_] by ``_``.

    Examples:
        >>> make_identifier("Debug_MSVC_my-app.exe")
        'debug_msvc_my_app_exe'
    """
    return _IDENTIFIER_RE.sub("_", name.lower())
