# SPDX-License-Identifier: MIT
"""Flag translation tables and flag list helpers.

Configuration data is toolchain agnostic: a define is ``FOO=1`` and an
include directory is a plain path. The tables in this module map each
canonical option kind to the literal prefix a compiler family expects on
its command line, e.g. a define becomes ``/DFOO=1`` for MSVC and
``-DFOO=1`` for Clang and GCC.

Option values resolved to ``REMOVE_LINE`` mean "this option produces no
command-line text"; every helper here drops them so a removed option never
shows up in generated scripts.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from ninjagen.core.errors import UnknownCompilerError
from ninjagen.core.model import CompilerFamily

if TYPE_CHECKING:
    from collections.abc import Iterable


# Sentinel value for options that resolve to nothing.
REMOVE_LINE = "REMOVE_LINE_TAG"


class CompilerFlag(Enum):
    DEFINE = "define"
    INCLUDE = "include"
    SYSTEM_INCLUDE = "system_include"


class LinkerFlag(Enum):
    INCLUDE_PATH = "include_path"
    INCLUDE_FILE = "include_file"


COMPILER_FLAG_TABLE: dict[CompilerFamily, dict[CompilerFlag, str]] = {
    CompilerFamily.MSVC: {
        CompilerFlag.DEFINE: "/D",
        CompilerFlag.INCLUDE: "/I",
        CompilerFlag.SYSTEM_INCLUDE: "/external:I",
    },
    CompilerFamily.CLANG: {
        CompilerFlag.DEFINE: "-D",
        CompilerFlag.INCLUDE: "-I",
        CompilerFlag.SYSTEM_INCLUDE: "-isystem",
    },
    CompilerFamily.GCC: {
        CompilerFlag.DEFINE: "-D",
        CompilerFlag.INCLUDE: "-I",
        CompilerFlag.SYSTEM_INCLUDE: "-isystem",
    },
}

LINKER_FLAG_TABLE: dict[CompilerFamily, dict[LinkerFlag, str]] = {
    CompilerFamily.MSVC: {
        LinkerFlag.INCLUDE_PATH: "/LIBPATH:",
        # MSVC takes full library names (kernel32.lib)
        LinkerFlag.INCLUDE_FILE: "",
    },
    CompilerFamily.CLANG: {
        LinkerFlag.INCLUDE_PATH: "-L",
        LinkerFlag.INCLUDE_FILE: "-l",
    },
    CompilerFamily.GCC: {
        LinkerFlag.INCLUDE_PATH: "-L",
        LinkerFlag.INCLUDE_FILE: "-l",
    },
}


def get_compiler_flag(compiler: CompilerFamily, flag: CompilerFlag) -> str:
    """Return the compiler-side prefix for an option kind.

    Raises:
        UnknownCompilerError: If the compiler family has no table.

    Examples:
        >>> get_compiler_flag(CompilerFamily.MSVC, CompilerFlag.DEFINE)
        '/D'
        >>> get_compiler_flag(CompilerFamily.GCC, CompilerFlag.SYSTEM_INCLUDE)
        '-isystem'
    """
    try:
        return COMPILER_FLAG_TABLE[compiler][flag]
    except KeyError:
        raise UnknownCompilerError(compiler, "compiler flag lookup") from None


def get_linker_flag(compiler: CompilerFamily, flag: LinkerFlag) -> str:
    """Return the linker-side prefix for an option kind.

    Raises:
        UnknownCompilerError: If the compiler family has no table.

    Examples:
        >>> get_linker_flag(CompilerFamily.MSVC, LinkerFlag.INCLUDE_PATH)
        '/LIBPATH:'
        >>> get_linker_flag(CompilerFamily.CLANG, LinkerFlag.INCLUDE_FILE)
        '-l'
    """
    try:
        return LINKER_FLAG_TABLE[compiler][flag]
    except KeyError:
        raise UnknownCompilerError(compiler, "linker flag lookup") from None


def join_flags(
    options: Iterable[str],
    *,
    prefix: str = "",
    quote: bool = False,
) -> str:
    """Merge a list of options into one space separated string.

    Each option gets ``prefix`` prepended and is optionally wrapped in
    double quotes. Empty strings and ``REMOVE_LINE`` values are skipped,
    as is surrounding whitespace of each option.

    Examples:
        >>> join_flags(["FOO", "BAR=1"], prefix="-D")
        '-DFOO -DBAR=1'
        >>> join_flags(["inc dir"], prefix="/I", quote=True)
        '/I"inc dir"'
        >>> join_flags(["-O2", "REMOVE_LINE_TAG", "-g"])
        '-O2 -g'
    """
    parts: list[str] = []
    for option in options:
        if option == REMOVE_LINE:
            continue
        option = option.strip()
        if not option:
            continue
        if quote:
            option = f'"{option}"'
        parts.append(f"{prefix}{option}")
    return " ".join(parts)


def remove_flags_with_prefix(flags: list[str], prefixes: Iterable[str]) -> list[str]:
    """Return ``flags`` without any flag starting with one of ``prefixes``.

    Examples:
        >>> remove_flags_with_prefix(["/DEBUG:FULL", "/NOLOGO"], ["/DEBUG"])
        ['/NOLOGO']
    """
    prefixes = tuple(prefixes)
    return [flag for flag in flags if not flag.strip().startswith(prefixes)]
