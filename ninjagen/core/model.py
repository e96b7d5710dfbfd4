# SPDX-License-Identifier: MIT
"""Project and configuration model consumed by the generators.

The model arrives fully resolved: dependencies are already expanded into
``Configuration.resolved_dependencies`` and all dependency include and
library paths are already collected. ninjagen does not resolve the
dependency graph itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class CompilerFamily(Enum):
    """Supported compiler families."""

    MSVC = "msvc"
    CLANG = "clang"
    GCC = "gcc"

    def __str__(self) -> str:
        return self.value


class OutputKind(Enum):
    """What a configuration produces."""

    EXECUTABLE = "executable"
    SHARED_LIBRARY = "shared_library"
    STATIC_LIBRARY = "static_library"

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class Configuration:
    """One build configuration of a project for one compiler family.

    Path attributes are strings as handed over by the project model. The
    per-file sets (``compile_as_c``, ``build_exclude``, ``unity_exclude``)
    hold source paths exactly as they appear in ``Project.source_files``.

    Attributes:
        name: Configuration name (e.g. "Debug").
        compiler: Compiler family used to build this configuration.
        output: Kind of binary produced.
        project_path: Directory receiving the generated scripts and manifest.
        intermediate_path: Directory for objects, unity and response files.
        target_path: Directory receiving the final binary.
        target_file_name: Binary name without extension.
        target_extension: Binary extension; None uses the toolchain default.
        options: Symbolic options, option name to value
            (e.g. ``{"Optimization": "MaximizeSpeed"}``).
        resolved_dependencies: Dependency configurations, pre-resolved.
    """

    name: str
    compiler: CompilerFamily
    output: OutputKind = OutputKind.EXECUTABLE
    project_path: str = "."
    intermediate_path: str = "obj"
    target_path: str = "bin"
    target_file_name: str = ""
    target_extension: str | None = None
    compiler_pdb_path: str = ""
    linker_pdb_path: str = ""
    use_relative_pdb_path: bool = False

    defines: list[str] = field(default_factory=list)
    include_paths: list[str] = field(default_factory=list)
    include_private_paths: list[str] = field(default_factory=list)
    dependencies_include_paths: list[str] = field(default_factory=list)
    include_system_paths: list[str] = field(default_factory=list)
    dependencies_include_system_paths: list[str] = field(default_factory=list)

    library_paths: list[str] = field(default_factory=list)
    library_files: list[str] = field(default_factory=list)
    dependencies_library_paths: list[str] = field(default_factory=list)
    dependencies_library_files: list[str] = field(default_factory=list)
    dependencies_other_library_files: list[str] = field(default_factory=list)

    options: dict[str, str] = field(default_factory=dict)

    compile_as_c: set[str] = field(default_factory=set)
    build_exclude: set[str] = field(default_factory=set)
    unity_exclude: set[str] = field(default_factory=set)
    unity_build: bool = False
    max_files_per_unity_file: int = 0

    pre_build_events: list[str] = field(default_factory=list)
    post_build_events: list[str] = field(default_factory=list)

    code_coverage: bool = False
    address_sanitizer: bool = False
    undefined_behavior_sanitizer: bool = False
    fuzzing: bool = False
    platform_supports_shared_library: bool = True

    resolved_dependencies: list[Configuration] = field(default_factory=list)
    project: Project | None = field(default=None, repr=False)

    @property
    def any_sanitizer(self) -> bool:
        return (
            self.address_sanitizer
            or self.undefined_behavior_sanitizer
            or self.fuzzing
        )

    @property
    def project_name(self) -> str:
        return self.project.name if self.project is not None else ""

    def __repr__(self) -> str:
        return (
            f"Configuration({self.project_name}:{self.name}, "
            f"{self.compiler.value}, {self.output.value})"
        )


class Project:
    """A project: a named set of source files and its configurations.

    Example:
        project = Project("app", source_root="src")
        project.add_sources(["src/main.cpp", "src/util.cpp"])
        project.add_configuration(
            Configuration("Debug", CompilerFamily.MSVC, target_file_name="app")
        )
    """

    DEFAULT_COMPILE_EXTENSIONS: tuple[str, ...] = (".cpp", ".cc", ".cxx", ".c")

    def __init__(
        self,
        name: str,
        *,
        source_root: str | Path = ".",
        compile_extensions: tuple[str, ...] | None = None,
    ) -> None:
        self.name = name
        self.source_root = str(source_root)
        self.compile_extensions = (
            compile_extensions
            if compile_extensions is not None
            else self.DEFAULT_COMPILE_EXTENSIONS
        )
        self.source_files: list[str] = []
        self.configurations: list[Configuration] = []

    def add_sources(self, sources: list[str | Path]) -> None:
        """Append source files, keeping their order."""
        for source in sources:
            self.source_files.append(str(source))

    def add_configuration(self, configuration: Configuration) -> Configuration:
        """Attach a configuration to this project.

        Returns:
            The configuration, for chaining.
        """
        configuration.project = self
        if not configuration.target_file_name:
            configuration.target_file_name = self.name
        self.configurations.append(configuration)
        return configuration

    def get_configuration(
        self, name: str, compiler: CompilerFamily | None = None
    ) -> Configuration | None:
        """Find a configuration by name (and optionally compiler family)."""
        for config in self.configurations:
            if config.name.lower() != name.lower():
                continue
            if compiler is None or config.compiler == compiler:
                return config
        return None

    def __repr__(self) -> str:
        return f"Project({self.name!r}, configurations={len(self.configurations)})"
