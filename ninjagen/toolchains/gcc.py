# SPDX-License-Identifier: MIT
"""GCC toolchain strategy (gcc, g++, ar).

Shared libraries are not supported for GCC; configurations asking for one
are rejected before anything is generated.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from ninjagen.core.flags import REMOVE_LINE
from ninjagen.core.model import CompilerFamily, OutputKind
from ninjagen.core.options import OptionDef
from ninjagen.toolchains.base import BaseToolchain

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ninjagen.core.model import Configuration


GNU_COMPILER_OPTIONS: Mapping[str, OptionDef] = MappingProxyType(
    {
        "CppLanguageStd": OptionDef(
            "Default",
            {
                "Default": REMOVE_LINE,
                "Cpp14": "-std=c++14",
                "Cpp17": "-std=c++17",
                "Cpp20": "-std=c++20",
                "Latest": "-std=c++2b",
            },
        ),
        "CLanguageStd": OptionDef(
            "Default",
            {"Default": REMOVE_LINE, "C11": "-std=c11", "C17": "-std=c17"},
        ),
        "Optimization": OptionDef(
            "Disable",
            {
                "Disable": "-O0",
                "MinimizeSize": "-Os",
                "MaximizeSpeed": "-O2",
                "FullOptimization": "-O3",
            },
        ),
        "Intrinsic": OptionDef(
            "Disable", {"Disable": REMOVE_LINE, "Enable": REMOVE_LINE}
        ),
        "Inline": OptionDef(
            "Default",
            {
                "Default": REMOVE_LINE,
                "Disable": "-fno-inline",
                "OnlyInline": "-finline-small-functions",
                "AnySuitable": "-finline-functions",
            },
        ),
        "FavorSizeOrSpeed": OptionDef(
            "Neither",
            {
                "Neither": REMOVE_LINE,
                "FastCode": REMOVE_LINE,
                "SmallCode": REMOVE_LINE,
            },
        ),
        "CompilerWholeProgramOptimization": OptionDef(
            "Disable", {"Disable": REMOVE_LINE, "Enable": "-flto"}
        ),
        "DebugInformation": OptionDef("Disable", {"Disable": REMOVE_LINE, "Enable": "-g"}),
        "Exceptions": OptionDef(
            "Enable", {"Enable": "-fexceptions", "Disable": "-fno-exceptions"}
        ),
        "Warnings": OptionDef(
            "Level3",
            {
                "Level0": "-w",
                "Level1": "-Wall",
                "Level2": "-Wall",
                "Level3": "-Wall",
                "Level4": "-Wall -Wextra",
            },
        ),
        "TreatWarningsAsErrors": OptionDef(
            "Disable", {"Disable": REMOVE_LINE, "Enable": "-Werror"}
        ),
    }
)

# Defaults stay empty: the same options are passed to the archiver.
GNU_LINKER_OPTIONS: Mapping[str, OptionDef] = MappingProxyType(
    {
        "LinkTimeCodeGeneration": OptionDef(
            "Disable", {"Disable": REMOVE_LINE, "Enable": "-flto"}
        ),
        "GenerateDebugInformation": OptionDef(
            "Disable", {"Disable": REMOVE_LINE, "Enable": "-g"}
        ),
    }
)


class GccToolchain(BaseToolchain):
    """GNU Compiler Collection toolchain."""

    family = CompilerFamily.GCC

    supports_shared_library = False

    # ld resolves archives left to right, so libraries follow the objects
    LINK_COMMAND_VARIABLES = (
        "IMPLICIT_LINKER_FLAGS",
        "LINKER_FLAGS",
        "LINKER_RESPONSE_FILE",
        "IMPLICIT_LINKER_PATHS",
        "IMPLICIT_LINKER_LIBS",
        "LINKER_PATHS",
        "LINKER_LIBS",
    )

    def dependency_library_flag(self, file_name: str) -> str:
        # -l:<file> looks the exact file name up on the library path
        return f"-l:{file_name}"

    def implicit_compiler_flags(
        self, configuration: Configuration, object_path: str, compile_as_c: bool
    ) -> list[str]:
        return [
            "-MD",
            "-MF",
            f"{object_path}.d",
            f'-o"{object_path}"',
            "-c",
        ]

    def compiler_option_table(self) -> Mapping[str, OptionDef]:
        return GNU_COMPILER_OPTIONS

    def linker_option_table(self) -> Mapping[str, OptionDef]:
        return GNU_LINKER_OPTIONS

    def implicit_linker_flags(
        self, configuration: Configuration, output_path: str
    ) -> list[str]:
        if configuration.output == OutputKind.EXECUTABLE:
            return ["-o", f'"{output_path}"']
        return ["qc", f'"{output_path}"']

    def filter_linker_flags(
        self, flags: list[str], configuration: Configuration
    ) -> list[str]:
        # No GCC specific filtering yet, for any output kind.
        return flags
