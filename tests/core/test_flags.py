# SPDX-License-Identifier: MIT
"""Tests for ninjagen.core.flags."""

import pytest

from ninjagen.core.errors import UnknownCompilerError
from ninjagen.core.flags import (
    REMOVE_LINE,
    CompilerFlag,
    LinkerFlag,
    get_compiler_flag,
    get_linker_flag,
    join_flags,
    remove_flags_with_prefix,
)
from ninjagen.core.model import CompilerFamily


class TestFlagTables:
    def test_msvc_prefixes(self):
        assert get_compiler_flag(CompilerFamily.MSVC, CompilerFlag.DEFINE) == "/D"
        assert get_compiler_flag(CompilerFamily.MSVC, CompilerFlag.INCLUDE) == "/I"
        assert (
            get_compiler_flag(CompilerFamily.MSVC, CompilerFlag.SYSTEM_INCLUDE)
            == "/external:I"
        )
        assert get_linker_flag(CompilerFamily.MSVC, LinkerFlag.INCLUDE_PATH) == "/LIBPATH:"
        assert get_linker_flag(CompilerFamily.MSVC, LinkerFlag.INCLUDE_FILE) == ""

    @pytest.mark.parametrize("family", [CompilerFamily.CLANG, CompilerFamily.GCC])
    def test_gnu_style_prefixes(self, family):
        assert get_compiler_flag(family, CompilerFlag.DEFINE) == "-D"
        assert get_compiler_flag(family, CompilerFlag.INCLUDE) == "-I"
        assert get_compiler_flag(family, CompilerFlag.SYSTEM_INCLUDE) == "-isystem"
        assert get_linker_flag(family, LinkerFlag.INCLUDE_PATH) == "-L"
        assert get_linker_flag(family, LinkerFlag.INCLUDE_FILE) == "-l"

    def test_unknown_compiler_raises(self):
        with pytest.raises(UnknownCompilerError) as exc_info:
            get_compiler_flag("icc", CompilerFlag.DEFINE)  # type: ignore[arg-type]
        assert "icc" in exc_info.value.message

        with pytest.raises(UnknownCompilerError):
            get_linker_flag("icc", LinkerFlag.INCLUDE_PATH)  # type: ignore[arg-type]


class TestJoinFlags:
    def test_prefix(self):
        assert join_flags(["FOO", "BAR=1"], prefix="/D") == "/DFOO /DBAR=1"

    def test_quote(self):
        assert join_flags(["a dir", "b"], prefix="-I", quote=True) == '-I"a dir" -I"b"'

    def test_skips_sentinel_and_empty(self):
        assert join_flags([REMOVE_LINE, "", "  ", "-O2", REMOVE_LINE]) == "-O2"

    def test_strips_whitespace(self):
        assert join_flags([" -g ", "-Wall"]) == "-g -Wall"

    def test_empty(self):
        assert join_flags([]) == ""
        assert join_flags([REMOVE_LINE]) == ""


class TestRemoveFlagsWithPrefix:
    def test_prefix_match(self):
        flags = ["/NOLOGO", "/DEBUG:FULL", "/INCREMENTAL:NO", "/LTCG"]
        assert remove_flags_with_prefix(flags, ["/DEBUG", "/INCREMENTAL"]) == [
            "/NOLOGO",
            "/LTCG",
        ]

    def test_keeps_order(self):
        flags = ["-c", "-b", "-a"]
        assert remove_flags_with_prefix(flags, ["-x"]) == ["-c", "-b", "-a"]
