# SPDX-License-Identifier: MIT
"""Toolchain strategy base class.

A toolchain strategy holds everything that differs between compiler
families: flag prefixes, the implicit flags the generator adds to every
compile and link command, default system libraries, the option tables used
by the options resolver, linker flag filtering, and the dependency style
used by Ninja. One strategy is selected per generation context and handed
to the statement builders, which never switch on the compiler family
themselves.
"""

from __future__ import annotations

import ntpath
import os
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ninjagen.core.errors import UnsupportedConfigurationError
from ninjagen.core.flags import (
    CompilerFlag,
    LinkerFlag,
    get_compiler_flag,
    get_linker_flag,
)
from ninjagen.core.model import OutputKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ninjagen.core.model import CompilerFamily, Configuration
    from ninjagen.core.options import OptionDef, ResolvedOptions


class BaseToolchain(ABC):
    """Abstract base class for compiler family strategies.

    Subclasses set ``family`` and provide the implicit flags and option
    tables of their compiler family.
    """

    family: CompilerFamily

    # Option names holding the language standard flags
    CPP_STANDARD_OPTION: str = "CppLanguageStd"
    C_STANDARD_OPTION: str = "CLanguageStd"

    OBJECT_SUFFIX: str = ".o"

    # Libraries every executable and shared library links against
    DEFAULT_SYSTEM_LIBRARIES: tuple[str, ...] = ()

    # Ninja dependency handling for compile rules ("gcc" or "msvc")
    DEPS_STYLE: str = "gcc"
    MSVC_DEPS_PREFIX: str = ""

    # Variables of the link rule command, in command-line order
    LINK_COMMAND_VARIABLES: tuple[str, ...] = (
        "IMPLICIT_LINKER_FLAGS",
        "LINKER_FLAGS",
        "IMPLICIT_LINKER_PATHS",
        "IMPLICIT_LINKER_LIBS",
        "LINKER_PATHS",
        "LINKER_LIBS",
        "LINKER_RESPONSE_FILE",
    )

    supports_shared_library: bool = True

    @property
    def name(self) -> str:
        return self.family.value

    # =========================================================================
    # Flag prefixes
    # =========================================================================

    @property
    def define_prefix(self) -> str:
        return get_compiler_flag(self.family, CompilerFlag.DEFINE)

    @property
    def include_prefix(self) -> str:
        return get_compiler_flag(self.family, CompilerFlag.INCLUDE)

    @property
    def system_include_prefix(self) -> str:
        return get_compiler_flag(self.family, CompilerFlag.SYSTEM_INCLUDE)

    @property
    def library_path_prefix(self) -> str:
        return get_linker_flag(self.family, LinkerFlag.INCLUDE_PATH)

    @property
    def library_file_prefix(self) -> str:
        return get_linker_flag(self.family, LinkerFlag.INCLUDE_FILE)

    # =========================================================================
    # Outputs
    # =========================================================================

    def output_extension(self, output: OutputKind) -> str:
        """Return the default file extension for an output kind."""
        return {
            OutputKind.EXECUTABLE: "",
            OutputKind.SHARED_LIBRARY: ".so",
            OutputKind.STATIC_LIBRARY: ".a",
        }[output]

    def validate(self, configuration: Configuration) -> None:
        """Reject configurations this compiler family cannot build.

        Raises:
            UnsupportedConfigurationError: For unsupported combinations.
        """
        if (
            configuration.output == OutputKind.SHARED_LIBRARY
            and not self.supports_shared_library
        ):
            raise UnsupportedConfigurationError(
                f"shared library for {self.name} is currently not supported",
                self.name,
                configuration.name,
            )

    # =========================================================================
    # Compilation
    # =========================================================================

    @abstractmethod
    def implicit_compiler_flags(
        self, configuration: Configuration, object_path: str, compile_as_c: bool
    ) -> list[str]:
        """Return the housekeeping flags added to every compile command.

        Args:
            configuration: Configuration being compiled.
            object_path: Object output path, already escaped for Ninja.
            compile_as_c: Whether the file is compiled as C.
        """
        ...

    def sanitizer_compile_flags(self, configuration: Configuration) -> list[str]:
        """Return coverage, sanitizer and fuzzing compile flags."""
        return []

    def sanitizer_link_flags(self, configuration: Configuration) -> list[str]:
        """Return coverage, sanitizer and fuzzing link flags."""
        return []

    def apply_sanitizer_overrides(
        self,
        configuration: Configuration,
        options: ResolvedOptions,
        *,
        optimized: bool,
    ) -> ResolvedOptions:
        """Adjust resolved options for enabled sanitizers.

        Returns a new option set; ``options`` is left untouched. ``optimized``
        is False for the option set resolved with optimizations disabled.
        """
        return options

    @abstractmethod
    def compiler_option_table(self) -> Mapping[str, OptionDef]:
        """Return the compiler option table used by the options resolver."""
        ...

    @abstractmethod
    def linker_option_table(self) -> Mapping[str, OptionDef]:
        """Return the linker option table used by the options resolver."""
        ...

    # =========================================================================
    # Linking
    # =========================================================================

    @abstractmethod
    def implicit_linker_flags(
        self, configuration: Configuration, output_path: str
    ) -> list[str]:
        """Return the housekeeping flags added to the link command."""
        ...

    def default_libraries(self, configuration: Configuration) -> list[str]:
        """Return the system libraries linked into executables and DLLs."""
        if configuration.output == OutputKind.STATIC_LIBRARY:
            return []
        return list(self.DEFAULT_SYSTEM_LIBRARIES)

    def filter_linker_flags(
        self, flags: list[str], configuration: Configuration
    ) -> list[str]:
        """Drop user linker flags that do not apply to the output kind.

        The base implementation keeps every flag.
        """
        return flags

    def dependency_library_name(self, library: str, configuration: Configuration) -> str:
        """Return the file name a dependency library is generated under.

        Generated binaries carry the configuration and compiler in their
        name, see ``unique_output_filename``.
        """
        stem, extension = os.path.splitext(ntpath.basename(library))
        return f"{stem}_{configuration.name}_{self.family.value}{extension}"

    def dependency_library_flag(self, file_name: str) -> str:
        """Return the linker argument naming a generated dependency library.

        ``file_name`` is a full file name as returned by
        ``dependency_library_name``.
        """
        return f"{self.library_file_prefix}{file_name}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"
