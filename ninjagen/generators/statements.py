# SPDX-License-Identifier: MIT
"""Compile and link statements of a per-configuration Ninja script.

A statement is built once from a ``GenerationContext`` and is immutable
afterwards. Rendering emits the ``build`` line followed by one indented
variable per non-empty value, always in the same order, so identical
input gives identical text.

Example output of a compile statement:

    build obj/main.obj: compile_cpp_debug_msvc_app src/main.cpp
      DEFINES = /DNDEBUG
      DEP_FILE = obj/main.obj.d
      IMPLICIT_COMPILER_FLAGS = /showIncludes /nologo /TP /c /Fo"obj/main.obj" /FS
      COMPILER_FLAGS = /Od /EHsc /W3
      INCLUDES = /I"include"
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ninjagen.core.flags import REMOVE_LINE, join_flags
from ninjagen.core.model import OutputKind
from ninjagen.generators.syntax import (
    escape_path,
    escape_value,
    make_identifier,
    to_forward_slashes,
)

if TYPE_CHECKING:
    from ninjagen.configure.config import CompilerSettings
    from ninjagen.core.context import GenerationContext
    from ninjagen.core.model import Configuration
    from ninjagen.core.options import ResolvedOptions
    from ninjagen.generators.generator import GenerationResult
    from ninjagen.util.files import GeneratedFileWriter

logger = logging.getLogger(__name__)


EMPTY_BUILD_EVENT = "cd ."
BUILD_EVENT_SEPARATOR = " && "


def phony_name(configuration: Configuration) -> str:
    """Return the phony alias building a configuration's binary.

    Examples:
        >>> from ninjagen.core.model import CompilerFamily, Configuration
        >>> cfg = Configuration("Debug", CompilerFamily.MSVC, target_file_name="App")
        >>> phony_name(cfg)
        'debug_msvc_app'
    """
    return make_identifier(
        f"{configuration.name}_{configuration.compiler.value}_"
        f"{configuration.target_file_name}"
    )


@dataclass(frozen=True)
class RuleNames:
    """Names of the rules declared by one per-configuration script.

    Every name carries the configuration's phony name so scripts can be
    pulled into one another without their rules clashing.
    """

    phony: str

    @property
    def compile_cpp(self) -> str:
        return f"compile_cpp_{self.phony}"

    @property
    def compile_c(self) -> str:
        return f"compile_c_{self.phony}"

    @property
    def link(self) -> str:
        return f"link_{self.phony}"

    @property
    def clean(self) -> str:
        return f"clean_{self.phony}"

    @property
    def compdb(self) -> str:
        return f"compdb_{self.phony}"


def _variable_lines(variables: list[tuple[str, str]]) -> list[str]:
    return [
        f"  {key} = {value}"
        for key, value in variables
        if value and value != REMOVE_LINE
    ]


@dataclass(frozen=True)
class CompileStatement:
    """One compiler invocation: a source (or unity file) to an object file."""

    input: str
    output: str
    rule: str
    defines: str = ""
    dep_file: str = ""
    implicit_compiler_flags: str = ""
    system_includes: str = ""
    compiler_flags: str = ""
    includes: str = ""
    target_pdb: str = ""

    def variables(self) -> list[tuple[str, str]]:
        return [
            ("DEFINES", self.defines),
            ("DEP_FILE", self.dep_file),
            ("IMPLICIT_COMPILER_FLAGS", self.implicit_compiler_flags),
            ("SYSTEM_INCLUDES", self.system_includes),
            ("COMPILER_FLAGS", self.compiler_flags),
            ("INCLUDES", self.includes),
            ("TARGET_PDB", self.target_pdb),
        ]

    def render(self) -> str:
        lines = [f"build {escape_path(self.output)}: {self.rule} {escape_path(self.input)}"]
        lines.extend(_variable_lines(self.variables()))
        return "\n".join(lines) + "\n"


@dataclass(frozen=True)
class LinkStatement:
    """The statement producing a configuration's binary.

    Attributes:
        output: Path of the binary.
        inputs: Object files, in compile statement order.
        dependency_targets: Extra implicit inputs. Phony aliases of the
            dependencies, or their output files for static archives.
        extra_members: Dependency archives merged into a static archive.
    """

    output: str
    rule: str
    inputs: tuple[str, ...]
    response_file: str
    dependency_targets: tuple[str, ...] = ()
    extra_members: tuple[str, ...] = ()
    implicit_linker_flags: str = ""
    implicit_linker_paths: str = ""
    implicit_linker_libs: str = ""
    linker_flags: str = ""
    linker_paths: str = ""
    linker_libs: str = ""
    target_pdb: str = ""
    pre_build: str = EMPTY_BUILD_EVENT
    post_build: str = EMPTY_BUILD_EVENT

    def variables(self) -> list[tuple[str, str]]:
        return [
            ("LINKER_RESPONSE_FILE", f"@{escape_path(self.response_file)}"),
            ("IMPLICIT_LINKER_FLAGS", self.implicit_linker_flags),
            ("IMPLICIT_LINKER_PATHS", self.implicit_linker_paths),
            ("IMPLICIT_LINKER_LIBS", self.implicit_linker_libs),
            ("LINKER_FLAGS", self.linker_flags),
            ("LINKER_PATHS", self.linker_paths),
            ("LINKER_LIBS", self.linker_libs),
            ("TARGET_FILE", escape_path(self.output)),
            ("TARGET_PDB", self.target_pdb),
            ("PRE_BUILD", self.pre_build or EMPTY_BUILD_EVENT),
            ("POST_BUILD", self.post_build or EMPTY_BUILD_EVENT),
        ]

    def response_file_content(self) -> str:
        """Text of the response file: every input, slash-normalized."""
        paths = []
        for path in (*self.inputs, *self.extra_members):
            path = to_forward_slashes(path)
            if " " in path:
                path = f'"{path}"'
            paths.append(path)
        return " ".join(paths) + "\n"

    def render(self) -> str:
        implicit = [escape_path(path) for path in self.inputs]
        implicit.extend(self.dependency_targets)
        line = f"build {escape_path(self.output)}: {self.rule}"
        if implicit:
            line += " | " + " ".join(implicit)
        lines = [line]
        lines.extend(_variable_lines(self.variables()))
        return "\n".join(lines) + "\n"


# =============================================================================
# Builders
# =============================================================================


def _unique(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


def language_compiler_flags(
    context: GenerationContext, options: ResolvedOptions, compile_as_c: bool
) -> list[str]:
    """Return the user compiler flags for a C or C++ translation unit.

    C++ units drop the C standard option. C units get the C standard at
    the position of the C++ standard, or no standard flag if none is set.
    """
    toolchain = context.toolchain
    flags = dict(options.compiler)
    c_standard = flags.pop(toolchain.C_STANDARD_OPTION, REMOVE_LINE)
    if compile_as_c and toolchain.CPP_STANDARD_OPTION in flags:
        flags[toolchain.CPP_STANDARD_OPTION] = c_standard
    return list(flags.values())


def build_compile_statement(
    context: GenerationContext,
    source: str,
    object_path: str,
    *,
    modified: bool = False,
) -> CompileStatement:
    """Build the compile statement of one translation unit.

    Args:
        context: Generation context of the configuration.
        source: Source file or unity file to compile.
        object_path: Object file to produce.
        modified: Use the option set with optimizations disabled.
    """
    config = context.configuration
    toolchain = context.toolchain
    rules = RuleNames(phony_name(config))

    compile_as_c = source in config.compile_as_c
    options = context.debug_options if modified else context.options

    defines = list(config.defines)
    if (
        config.output == OutputKind.SHARED_LIBRARY
        and config.platform_supports_shared_library
    ):
        defines.append("_WINDLL")

    includes = _unique(
        config.include_paths
        + config.include_private_paths
        + config.dependencies_include_paths
    )
    system_includes = _unique(
        config.include_system_paths + config.dependencies_include_system_paths
    )

    escaped_object = escape_path(object_path)
    return CompileStatement(
        input=source,
        output=object_path,
        rule=rules.compile_c if compile_as_c else rules.compile_cpp,
        defines=escape_value(join_flags(defines, prefix=toolchain.define_prefix)),
        dep_file=f"{escaped_object}.d",
        implicit_compiler_flags=join_flags(
            toolchain.implicit_compiler_flags(config, escaped_object, compile_as_c)
        ),
        system_includes=escape_value(
            join_flags(system_includes, prefix=toolchain.system_include_prefix, quote=True)
        ),
        compiler_flags=escape_value(
            join_flags(language_compiler_flags(context, options, compile_as_c))
        ),
        includes=escape_value(
            join_flags(includes, prefix=toolchain.include_prefix, quote=True)
        ),
        target_pdb=escape_path(context.compiler_pdb_path),
    )


def join_build_events(events: list[str]) -> str:
    """Chain build event commands with ``&&``; no events gives ``cd .``.

    Examples:
        >>> join_build_events(["echo a", "echo b"])
        'echo a && echo b'
        >>> join_build_events([])
        'cd .'
    """
    chained = BUILD_EVENT_SEPARATOR.join(e for e in events if e.strip())
    return chained or EMPTY_BUILD_EVENT


def response_file_path(context: GenerationContext) -> str:
    config = context.configuration
    return os.path.join(
        context.intermediate_directory,
        f"{config.target_file_name}_{config.name}_{config.compiler.value}"
        "_linker_response.txt",
    )


def dependency_library_flags(context: GenerationContext) -> list[str]:
    """Return linker arguments for the dependency libraries of a configuration.

    Generated dependency libraries are renamed to their per-configuration
    file name and passed through ``dependency_library_flag``; "other"
    library files use the plain library prefix.
    """
    config = context.configuration
    toolchain = context.toolchain
    result: list[str] = []
    for library in config.dependencies_library_files:
        if library in config.dependencies_other_library_files:
            result.append(f"{toolchain.library_file_prefix}{library}")
        else:
            result.append(
                toolchain.dependency_library_flag(
                    toolchain.dependency_library_name(library, config)
                )
            )
    return result


def build_link_statement(
    context: GenerationContext,
    object_paths: list[str],
    settings: CompilerSettings,
    writer: GeneratedFileWriter,
    result: GenerationResult,
    *,
    dependency_targets: list[str] | None = None,
    dependency_outputs: list[str] | None = None,
) -> LinkStatement:
    """Build the link (or archive) statement and write its response file.

    Args:
        context: Generation context of the configuration.
        object_paths: Object files of the compile statements, in order.
        settings: Toolchain settings providing implicit library paths.
        writer: Writer for the response file.
        result: Receives the response file path.
        dependency_targets: Phony aliases or files the link must wait for.
        dependency_outputs: Outputs of dependency static archives, merged
            into the output when it is itself a static archive.
    """
    config = context.configuration
    toolchain = context.toolchain
    rules = RuleNames(phony_name(config))
    is_archive = config.output == OutputKind.STATIC_LIBRARY

    linker_flags = toolchain.filter_linker_flags(
        context.options.linker_flags(), config
    )

    implicit_paths = ""
    implicit_libs = ""
    library_paths = ""
    library_files = ""
    extra_members: tuple[str, ...] = ()
    if is_archive:
        extra_members = tuple(dependency_outputs or ())
    else:
        implicit_paths = join_flags(
            settings.library_paths, prefix=toolchain.library_path_prefix, quote=True
        )
        implicit_libs = join_flags(
            toolchain.default_libraries(config), prefix=toolchain.library_file_prefix
        )
        library_paths = join_flags(
            _unique(config.library_paths + config.dependencies_library_paths),
            prefix=toolchain.library_path_prefix,
            quote=True,
        )
        user_libraries = join_flags(
            _unique(config.library_files), prefix=toolchain.library_file_prefix
        )
        library_files = join_flags(
            [user_libraries] + _unique(dependency_library_flags(context))
        )

    statement = LinkStatement(
        output=context.target_output_path,
        rule=rules.link,
        inputs=tuple(object_paths),
        response_file=response_file_path(context),
        dependency_targets=tuple(dependency_targets or ()),
        extra_members=extra_members,
        implicit_linker_flags=join_flags(
            toolchain.implicit_linker_flags(
                config, escape_path(context.target_output_path)
            )
        ),
        implicit_linker_paths=escape_value(implicit_paths),
        implicit_linker_libs=escape_value(implicit_libs),
        linker_flags=escape_value(join_flags(linker_flags)),
        linker_paths=escape_value(library_paths),
        linker_libs=escape_value(library_files),
        target_pdb=escape_path(context.linker_pdb_path),
        pre_build=escape_value(join_build_events(config.pre_build_events)),
        post_build=escape_value(join_build_events(config.post_build_events)),
    )

    written = writer.write_generated_file(
        config.project_name,
        statement.response_file,
        statement.response_file_content(),
    )
    result.record(statement.response_file, written)
    return statement
