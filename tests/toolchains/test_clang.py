# SPDX-License-Identifier: MIT
"""Tests for ninjagen.toolchains.clang."""

from conftest import make_project

from ninjagen.core.model import CompilerFamily, OutputKind
from ninjagen.toolchains import get_toolchain
from ninjagen.toolchains.clang import CLANG_COMPILER_OPTIONS, ClangToolchain


def clang_config(**kwargs):
    _, config = make_project(compiler=CompilerFamily.CLANG, **kwargs)
    return config


class TestClangToolchain:
    def test_registered(self):
        assert isinstance(get_toolchain(CompilerFamily.CLANG), ClangToolchain)

    def test_windows_outputs(self):
        toolchain = ClangToolchain()
        assert toolchain.output_extension(OutputKind.EXECUTABLE) == ".exe"
        assert toolchain.output_extension(OutputKind.SHARED_LIBRARY) == ".dll"
        assert toolchain.output_extension(OutputKind.STATIC_LIBRARY) == ".lib"

    def test_shared_library_supported(self):
        ClangToolchain().validate(clang_config(output=OutputKind.SHARED_LIBRARY))

    def test_inline_option(self):
        assert CLANG_COMPILER_OPTIONS["Inline"].values["OnlyInline"] == (
            "-finline-hint-functions"
        )

    def test_default_libraries(self):
        libraries = ClangToolchain().default_libraries(clang_config())
        assert libraries[0] == "kernel32"
        assert libraries[-1] == "libcmt.lib"


class TestClangCompileFlags:
    def test_plain(self):
        flags = ClangToolchain().implicit_compiler_flags(clang_config(), "obj/a.o", False)
        assert flags == ["-MD", "-MF", "obj/a.o.d", "-c", '-o"obj/a.o"']

    def test_sanitizers(self):
        config = clang_config(
            code_coverage=True,
            address_sanitizer=True,
            undefined_behavior_sanitizer=True,
            fuzzing=True,
        )
        flags = ClangToolchain().implicit_compiler_flags(config, "obj/a.o", False)
        assert flags[5:] == [
            "-fprofile-instr-generate",
            "-fcoverage-mapping",
            "-fsanitize=address",
            "-fsanitize=undefined",
            "-fsanitize=fuzzer",
        ]


class TestClangLinkFlags:
    def test_executable(self):
        flags = ClangToolchain().implicit_linker_flags(clang_config(), "bin/app.exe")
        assert flags == [
            "-fuse-ld=lld-link",
            "-nostartfiles",
            "-nostdlib",
            "-o",
            '"bin/app.exe"',
        ]

    def test_shared_library_with_sanitizers(self):
        config = clang_config(
            output=OutputKind.SHARED_LIBRARY, code_coverage=True, address_sanitizer=True
        )
        flags = ClangToolchain().implicit_linker_flags(config, "bin/app.dll")
        assert flags[-3:] == ["-shared", "-fprofile-instr-generate", "-fsanitize=address"]

    def test_archive(self):
        config = clang_config(output=OutputKind.STATIC_LIBRARY, address_sanitizer=True)
        flags = ClangToolchain().implicit_linker_flags(config, "bin/app.lib")
        assert flags == ["qc", '"bin/app.lib"']

    def test_filter_is_noop(self):
        config = clang_config(output=OutputKind.STATIC_LIBRARY)
        assert ClangToolchain().filter_linker_flags(["-g"], config) == ["-g"]
