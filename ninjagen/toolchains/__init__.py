# SPDX-License-Identifier: MIT
"""Toolchain strategies (MSVC, Clang, GCC)."""

from __future__ import annotations

from ninjagen.core.errors import UnknownCompilerError
from ninjagen.core.model import CompilerFamily
from ninjagen.toolchains.base import BaseToolchain
from ninjagen.toolchains.clang import ClangToolchain
from ninjagen.toolchains.gcc import GccToolchain
from ninjagen.toolchains.msvc import MsvcToolchain

TOOLCHAINS: dict[CompilerFamily, type[BaseToolchain]] = {
    CompilerFamily.MSVC: MsvcToolchain,
    CompilerFamily.CLANG: ClangToolchain,
    CompilerFamily.GCC: GccToolchain,
}


def get_toolchain(family: CompilerFamily) -> BaseToolchain:
    """Return the strategy object for a compiler family.

    Raises:
        UnknownCompilerError: If no strategy is registered for ``family``.
    """
    try:
        return TOOLCHAINS[family]()
    except KeyError:
        raise UnknownCompilerError(family) from None


__all__ = [
    "BaseToolchain",
    "ClangToolchain",
    "GccToolchain",
    "MsvcToolchain",
    "TOOLCHAINS",
    "get_toolchain",
]
