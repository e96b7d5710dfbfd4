# SPDX-License-Identifier: MIT
"""Clang toolchain strategy targeting Windows (clang, lld-link, llvm-ar).

Clang outputs link through lld-link with the MSVC runtime, so binaries use
the Windows extensions while the command line stays GNU style.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from ninjagen.core.flags import REMOVE_LINE
from ninjagen.core.model import CompilerFamily, OutputKind
from ninjagen.core.options import OptionDef
from ninjagen.toolchains.base import BaseToolchain
from ninjagen.toolchains.gcc import GNU_COMPILER_OPTIONS, GNU_LINKER_OPTIONS

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ninjagen.core.model import Configuration
    from ninjagen.core.options import ResolvedOptions


CLANG_COMPILER_OPTIONS: Mapping[str, OptionDef] = MappingProxyType(
    {
        **GNU_COMPILER_OPTIONS,
        "Inline": OptionDef(
            "Default",
            {
                "Default": REMOVE_LINE,
                "Disable": "-fno-inline",
                "OnlyInline": "-finline-hint-functions",
                "AnySuitable": "-finline-functions",
            },
        ),
        "DebugInformation": OptionDef(
            "Disable", {"Disable": REMOVE_LINE, "Enable": "-g -gcodeview"}
        ),
    }
)

CLANG_LINKER_OPTIONS: Mapping[str, OptionDef] = GNU_LINKER_OPTIONS


class ClangToolchain(BaseToolchain):
    """LLVM Clang toolchain linking with lld-link."""

    family = CompilerFamily.CLANG

    DEFAULT_SYSTEM_LIBRARIES = (
        "kernel32",
        "user32",
        "gdi32",
        "winspool",
        "shell32",
        "ole32",
        "oleaut32",
        "uuid",
        "comdlg32",
        "advapi32",
        "oldnames",
        "libcmt.lib",
    )

    def output_extension(self, output: OutputKind) -> str:
        return {
            OutputKind.EXECUTABLE: ".exe",
            OutputKind.SHARED_LIBRARY: ".dll",
            OutputKind.STATIC_LIBRARY: ".lib",
        }[output]

    def implicit_compiler_flags(
        self, configuration: Configuration, object_path: str, compile_as_c: bool
    ) -> list[str]:
        flags = ["-MD", "-MF", f"{object_path}.d", "-c", f'-o"{object_path}"']
        flags.extend(self.sanitizer_compile_flags(configuration))
        return flags

    def sanitizer_compile_flags(self, configuration: Configuration) -> list[str]:
        flags: list[str] = []
        if configuration.code_coverage:
            flags.extend(["-fprofile-instr-generate", "-fcoverage-mapping"])
        if configuration.address_sanitizer:
            flags.append("-fsanitize=address")
        if configuration.undefined_behavior_sanitizer:
            flags.append("-fsanitize=undefined")
        if configuration.fuzzing:
            flags.append("-fsanitize=fuzzer")
        return flags

    def sanitizer_link_flags(self, configuration: Configuration) -> list[str]:
        flags: list[str] = []
        if configuration.code_coverage:
            flags.append("-fprofile-instr-generate")
        if configuration.address_sanitizer:
            flags.append("-fsanitize=address")
        if configuration.undefined_behavior_sanitizer:
            flags.append("-fsanitize=undefined")
        if configuration.fuzzing:
            flags.append("-fsanitize=fuzzer")
        return flags

    def apply_sanitizer_overrides(
        self,
        configuration: Configuration,
        options: ResolvedOptions,
        *,
        optimized: bool,
    ) -> ResolvedOptions:
        compiler: dict[str, str] = {}
        linker: dict[str, str] = {}
        if configuration.any_sanitizer and optimized:
            compiler["Optimization"] = "-O1"
        if configuration.address_sanitizer:
            # ASan does not work with LTO
            compiler["CompilerWholeProgramOptimization"] = REMOVE_LINE
            linker["LinkTimeCodeGeneration"] = REMOVE_LINE
        if not compiler and not linker:
            return options
        return options.with_overrides(compiler=compiler, linker=linker)

    def compiler_option_table(self) -> Mapping[str, OptionDef]:
        return CLANG_COMPILER_OPTIONS

    def linker_option_table(self) -> Mapping[str, OptionDef]:
        return CLANG_LINKER_OPTIONS

    def implicit_linker_flags(
        self, configuration: Configuration, output_path: str
    ) -> list[str]:
        if configuration.output == OutputKind.STATIC_LIBRARY:
            return ["qc", f'"{output_path}"']
        flags = [
            "-fuse-ld=lld-link",
            "-nostartfiles",
            "-nostdlib",
            "-o",
            f'"{output_path}"',
        ]
        if configuration.output == OutputKind.SHARED_LIBRARY:
            flags.append("-shared")
        flags.extend(self.sanitizer_link_flags(configuration))
        return flags

    def filter_linker_flags(
        self, flags: list[str], configuration: Configuration
    ) -> list[str]:
        # llvm-ar and lld-link accept every flag we currently emit.
        return flags
