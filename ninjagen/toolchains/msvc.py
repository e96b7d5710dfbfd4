# SPDX-License-Identifier: MIT
"""MSVC toolchain strategy (cl.exe, link.exe, lib.exe)."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from ninjagen.core.flags import REMOVE_LINE, remove_flags_with_prefix
from ninjagen.core.model import CompilerFamily, OutputKind
from ninjagen.core.options import OptionDef
from ninjagen.toolchains.base import BaseToolchain

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ninjagen.core.model import Configuration


MSVC_COMPILER_OPTIONS: Mapping[str, OptionDef] = MappingProxyType(
    {
        "LanguageStandard": OptionDef(
            "Default",
            {
                "Default": REMOVE_LINE,
                "CPP14": "/std:c++14",
                "CPP17": "/std:c++17",
                "CPP20": "/std:c++20",
                "Latest": "/std:c++latest",
            },
        ),
        "LanguageStandard_C": OptionDef(
            "Default",
            {"Default": REMOVE_LINE, "C11": "/std:c11", "C17": "/std:c17"},
        ),
        "Optimization": OptionDef(
            "Disable",
            {
                "Disable": "/Od",
                "MinimizeSize": "/O1",
                "MaximizeSpeed": "/O2",
                "FullOptimization": "/Ox",
            },
        ),
        "Intrinsic": OptionDef("Disable", {"Disable": REMOVE_LINE, "Enable": "/Oi"}),
        "Inline": OptionDef(
            "Default",
            {
                "Default": REMOVE_LINE,
                "Disable": "/Ob0",
                "OnlyInline": "/Ob1",
                "AnySuitable": "/Ob2",
            },
        ),
        "FavorSizeOrSpeed": OptionDef(
            "Neither",
            {"Neither": REMOVE_LINE, "FastCode": "/Ot", "SmallCode": "/Os"},
        ),
        "CompilerWholeProgramOptimization": OptionDef(
            "Disable", {"Disable": REMOVE_LINE, "Enable": "/GL"}
        ),
        "DebugInformation": OptionDef(
            "Disable",
            {"Disable": REMOVE_LINE, "Enable": "/Zi", "CompatibleWithC7": "/Z7"},
        ),
        "CompilerPdb": OptionDef(
            "Enable", {"Enable": '/Fd"{compiler_pdb}"', "Disable": REMOVE_LINE}
        ),
        "RuntimeLibrary": OptionDef(
            "MultiThreaded",
            {
                "MultiThreaded": "/MT",
                "MultiThreadedDebug": "/MTd",
                "MultiThreadedDLL": "/MD",
                "MultiThreadedDebugDLL": "/MDd",
            },
        ),
        "Exceptions": OptionDef("Enable", {"Enable": "/EHsc", "Disable": REMOVE_LINE}),
        "Warnings": OptionDef(
            "Level3",
            {
                "Level0": "/W0",
                "Level1": "/W1",
                "Level2": "/W2",
                "Level3": "/W3",
                "Level4": "/W4",
            },
        ),
        "TreatWarningsAsErrors": OptionDef(
            "Disable", {"Disable": REMOVE_LINE, "Enable": "/WX"}
        ),
    }
)

MSVC_LINKER_OPTIONS: Mapping[str, OptionDef] = MappingProxyType(
    {
        "SuppressBanner": OptionDef(
            "Enable", {"Enable": "/NOLOGO", "Disable": REMOVE_LINE}
        ),
        "LinkTimeCodeGeneration": OptionDef(
            "Disable", {"Disable": REMOVE_LINE, "Enable": "/LTCG"}
        ),
        "GenerateDebugInformation": OptionDef(
            "Disable", {"Disable": REMOVE_LINE, "Enable": "/DEBUG"}
        ),
        "LinkerPdb": OptionDef(
            "Enable", {"Enable": '/PDB:"{linker_pdb}"', "Disable": REMOVE_LINE}
        ),
        "Incremental": OptionDef(
            "Default",
            {
                "Default": REMOVE_LINE,
                "Enable": "/INCREMENTAL",
                "Disable": "/INCREMENTAL:NO",
            },
        ),
        "RandomizedBaseAddress": OptionDef(
            "Default",
            {
                "Default": REMOVE_LINE,
                "Enable": "/DYNAMICBASE",
                "Disable": "/DYNAMICBASE:NO",
            },
        ),
        "LargeAddressAware": OptionDef(
            "Default", {"Default": REMOVE_LINE, "Enable": "/LARGEADDRESSAWARE"}
        ),
        "References": OptionDef(
            "Default",
            {"Default": REMOVE_LINE, "Eliminate": "/OPT:REF", "Keep": "/OPT:NOREF"},
        ),
        "EnableCOMDATFolding": OptionDef(
            "Default",
            {
                "Default": REMOVE_LINE,
                "RemoveRedundant": "/OPT:ICF",
                "DoNotRemove": "/OPT:NOICF",
            },
        ),
        "FunctionPadding": OptionDef(
            "Default", {"Default": REMOVE_LINE, "Enable": "/FUNCTIONPADMIN"}
        ),
    }
)


class MsvcToolchain(BaseToolchain):
    """Microsoft Visual C++ toolchain."""

    family = CompilerFamily.MSVC

    CPP_STANDARD_OPTION = "LanguageStandard"
    C_STANDARD_OPTION = "LanguageStandard_C"

    OBJECT_SUFFIX = ".obj"
    DEPS_STYLE = "msvc"
    MSVC_DEPS_PREFIX = "Note: including file:"

    DEFAULT_SYSTEM_LIBRARIES = (
        "kernel32.lib",
        "user32.lib",
        "gdi32.lib",
        "winspool.lib",
        "shell32.lib",
        "ole32.lib",
        "oleaut32.lib",
        "uuid.lib",
        "comdlg32.lib",
        "advapi32.lib",
        "oldnames.lib",
    )

    # Linker flags lib.exe does not accept
    ARCHIVE_UNSUPPORTED_FLAGS: tuple[str, ...] = (
        "/INCREMENTAL",
        "/DYNAMICBASE",
        "/DEBUG",
        "/PDB",
        "/LARGEADDRESSAWARE",
        "/OPT:REF",
        "/OPT:ICF",
        "/OPT:NOREF",
        "/OPT:NOICF",
        "/FUNCTIONPADMIN",
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
        return [
            "/showIncludes",  # header dependencies for ninja
            "/nologo",
            "/TC" if compile_as_c else "/TP",
            "/c",  # no auto link
            f'/Fo"{object_path}"',
            "/FS",  # serialize pdb writes through mspdbsrv
        ]

    def compiler_option_table(self) -> Mapping[str, OptionDef]:
        return MSVC_COMPILER_OPTIONS

    def linker_option_table(self) -> Mapping[str, OptionDef]:
        return MSVC_LINKER_OPTIONS

    def implicit_linker_flags(
        self, configuration: Configuration, output_path: str
    ) -> list[str]:
        flags = [f'/OUT:"{output_path}"']
        if configuration.output == OutputKind.SHARED_LIBRARY:
            flags.append("/dll")
        return flags

    def filter_linker_flags(
        self, flags: list[str], configuration: Configuration
    ) -> list[str]:
        if configuration.output == OutputKind.STATIC_LIBRARY:
            return remove_flags_with_prefix(flags, self.ARCHIVE_UNSUPPORTED_FLAGS)
        return flags
