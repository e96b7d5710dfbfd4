# SPDX-License-Identifier: MIT
"""Ninja build file generator.

Generates two files per configuration of a project, plus a JSON project
manifest listing the configurations. The body file declares the
configuration's rules, compiles its translation units, links the binary
and defines its aliases. The entry script is the file handed to Ninja: it
pulls in the body of every configuration it depends on, directly or not,
exactly once, followed by its own body. Building any entry script
therefore also builds what it needs, however the dependency graph is
shaped.

Entry script (``<project>.<config>.<family>.ninja``):

    ninja_required_version = 1.1
    builddir = <intermediate>/.ninja
    subninja <dependency bodies>
    subninja <own body>
    default <phony>

Body (``<project>.<config>.<family>.body.ninja``):

    rule compile_cpp_<phony> / compile_c_<phony> / link_<phony> / ...
    build <object>: compile_cpp_<phony> <source>
    build <binary>: link_<phony> | <objects> <dependency aliases>
    build <phony>: phony <binary>
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

from ninjagen.configure.config import ToolchainRegistry
from ninjagen.core.context import GenerationContext, OptionsCache
from ninjagen.core.model import OutputKind
from ninjagen.core.options import TableOptionsResolver
from ninjagen.generators.generator import BaseGenerator, GenerationResult
from ninjagen.generators.layout import body_path, output_path, script_path
from ninjagen.generators.manifest import write_project_manifest
from ninjagen.generators.statements import (
    RuleNames,
    build_compile_statement,
    build_link_statement,
    phony_name,
)
from ninjagen.generators.syntax import escape_path, escape_value
from ninjagen.generators.unity import UnityBatcher
from ninjagen.toolchains import get_toolchain
from ninjagen.util.files import DiskFileWriter
from ninjagen.util.vcs import NoStatusQuery

if TYPE_CHECKING:
    from ninjagen.configure.config import CompilerSettings
    from ninjagen.core.model import Configuration, Project
    from ninjagen.core.options import OptionsResolver
    from ninjagen.generators.statements import CompileStatement, LinkStatement
    from ninjagen.toolchains.base import BaseToolchain
    from ninjagen.util.files import GeneratedFileWriter
    from ninjagen.util.vcs import StatusQuery

logger = logging.getLogger(__name__)

NINJA_REQUIRED_VERSION = "1.1"


class NinjaProjectGenerator(BaseGenerator):
    """Generator for per-configuration Ninja scripts.

    Collaborators are injected so that generation can run without touching
    git or PATH; the defaults read nothing but the project model.

    Example:
        generator = NinjaProjectGenerator(status=GitStatusQuery("."))
        result = generator.generate(project)
        # Creates <project_path>/ninja/<project>.<config>.<family>.ninja
        # with its .body.ninja file
        # and <project_path>/<project>.nproj

    Attributes:
        registry: Toolchain settings (compiler paths, ninja path).
        resolver: Symbolic option resolver.
        status: Modification status of source files.
        writer: Write-if-different layer for every generated file.
        cache: Memo of option sets, shared by all configurations
            generated by this instance.
    """

    def __init__(
        self,
        *,
        registry: ToolchainRegistry | None = None,
        resolver: OptionsResolver | None = None,
        status: StatusQuery | None = None,
        writer: GeneratedFileWriter | None = None,
        cache: OptionsCache | None = None,
        windows_host: bool | None = None,
    ) -> None:
        super().__init__("ninja")
        self.registry = registry or ToolchainRegistry()
        self.resolver = resolver or TableOptionsResolver()
        self.status = status or NoStatusQuery()
        self.writer = writer or DiskFileWriter()
        self.cache = cache if cache is not None else OptionsCache()
        self.windows_host = (
            sys.platform == "win32" if windows_host is None else windows_host
        )
        self._unity = UnityBatcher(self.writer, self.status)

    def generate(self, project: Project) -> GenerationResult:
        """Generate every configuration of a project and its manifest.

        Raises:
            GenerateError: If a configuration cannot be generated. Scripts of
                configurations generated before the failing one stay on disk.
        """
        result = GenerationResult()
        for config in project.configurations:
            self.generate_configuration(project, config, result)
        if project.configurations:
            write_project_manifest(project, self.writer, result)
        else:
            logger.warning("Project %s has no configurations", project.name)

        logger.info(
            "%s: %d file(s) generated, %d up to date",
            project.name,
            len(result.generated_files),
            len(result.skipped_files),
        )
        return result

    def generate_configuration(
        self,
        project: Project,
        configuration: Configuration,
        result: GenerationResult,
    ) -> str:
        """Generate the entry script and body of one configuration.

        Returns:
            The path of the entry script.
        """
        # Everything that can fail runs before the first file is written.
        toolchain = get_toolchain(configuration.compiler)
        toolchain.validate(configuration)
        path = script_path(configuration)
        body = body_path(configuration)
        bodies = [
            body_path(dep) for dep in self.included_configurations(configuration)
        ]
        bodies.append(body)

        if configuration.use_relative_pdb_path:
            logger.warning(
                "%s: use_relative_pdb_path is not supported for Ninja, ignoring it",
                configuration,
            )

        context = GenerationContext(
            project, configuration, toolchain, self.resolver, self.cache
        )
        settings = self.registry.get_compiler_settings(configuration.compiler)

        if configuration.output == OutputKind.STATIC_LIBRARY:
            # Archives have no build-order dependency; dependency archives
            # are only merged through the response file.
            archived = [
                output_path(dep)
                for dep in configuration.resolved_dependencies
                if dep.output == OutputKind.STATIC_LIBRARY
            ]
            dependency_targets = []
        else:
            archived = []
            dependency_targets = [
                phony_name(dep) for dep in configuration.resolved_dependencies
            ]

        units = self.files_to_compile(project, configuration)
        if configuration.unity_build:
            units = self._unity.batch(configuration, units, result)
        object_paths = [
            self.object_path(project, configuration, toolchain, unit) for unit in units
        ]

        if context.linker_pdb_path:
            pdb_dir = os.path.dirname(context.linker_pdb_path)
            if pdb_dir:
                os.makedirs(pdb_dir, exist_ok=True)

        compile_statements = [
            build_compile_statement(
                context, unit, obj, modified=self.status.is_modified(unit)
            )
            for unit, obj in zip(units, object_paths)
        ]

        link_statement = build_link_statement(
            context,
            object_paths,
            settings,
            self.writer,
            result,
            dependency_targets=dependency_targets,
            dependency_outputs=archived,
        )

        self._write(
            project,
            body,
            self.render_body(
                context, settings, compile_statements, link_statement, path
            ),
            result,
        )
        self._write(project, path, self.render_entry(context, bodies), result)
        return path

    def _write(
        self, project: Project, path: str, content: str, result: GenerationResult
    ) -> None:
        written = self.writer.write_generated_file(project.name, path, content)
        result.record(path, written)
        logger.info("%s %s", "Generated" if written else "Up to date:", path)

    # =========================================================================
    # Inputs
    # =========================================================================

    def files_to_compile(self, project: Project, configuration: Configuration) -> list[str]:
        """Return the project's compilable sources not excluded from the build."""
        extensions = {ext.lower() for ext in project.compile_extensions}
        return [
            source
            for source in project.source_files
            if os.path.splitext(source)[1].lower() in extensions
            and source not in configuration.build_exclude
        ]

    def object_path(
        self,
        project: Project,
        configuration: Configuration,
        toolchain: BaseToolchain,
        source: str,
    ) -> str:
        """Return the object file of a translation unit.

        Objects mirror the layout of the sources below the intermediate
        directory: ``src/core/a.cpp`` becomes ``<intermediate>/core/a.obj``
        for a source root of ``src``. Generated unity files keep their
        location inside the intermediate directory.
        """
        intermediate = configuration.intermediate_path
        relative = os.path.basename(source)
        for root in (intermediate, project.source_root):
            try:
                candidate = os.path.relpath(source, root)
            except ValueError:
                # On Windows, relpath fails across drive letters
                continue
            if not candidate.startswith(os.pardir):
                relative = candidate
                break
        stem = os.path.splitext(relative)[0]
        return os.path.join(intermediate, stem + toolchain.OBJECT_SUFFIX)

    def included_configurations(
        self, configuration: Configuration
    ) -> list[Configuration]:
        """Return the configurations whose bodies the entry script pulls in.

        Every configuration reachable through resolved dependencies appears
        once, dependencies before their dependents, since Ninja rejects two
        definitions of the same build edge. Static archives pull in nothing.
        """
        if configuration.output == OutputKind.STATIC_LIBRARY:
            return []
        ordered: list[Configuration] = []
        self._collect_dependencies(configuration, {configuration}, ordered)
        return ordered

    def _collect_dependencies(
        self,
        configuration: Configuration,
        seen: set[Configuration],
        ordered: list[Configuration],
    ) -> None:
        for dep in configuration.resolved_dependencies:
            if dep in seen:
                continue
            seen.add(dep)
            self._collect_dependencies(dep, seen, ordered)
            ordered.append(dep)

    # =========================================================================
    # Script text
    # =========================================================================

    def render_entry(self, context: GenerationContext, bodies: list[str]) -> str:
        """Return the entry script pulling in ``bodies``, own body last."""
        config = context.configuration
        builddir = os.path.join(context.intermediate_directory, ".ninja")
        includes = "\n".join(f"subninja {escape_path(body)}" for body in bodies)
        sections = [
            self._header(config),
            f"ninja_required_version = {NINJA_REQUIRED_VERSION}\n",
            f"builddir = {escape_path(builddir)}\n",
            "# Build statements\n" + includes + "\n",
            f"default {phony_name(config)}\n",
        ]
        return "\n".join(sections)

    def render_body(
        self,
        context: GenerationContext,
        settings: CompilerSettings,
        compile_statements: list[CompileStatement],
        link_statement: LinkStatement,
        path: str,
    ) -> str:
        """Return the rules, statements and aliases of one configuration.

        Args:
            path: Entry script, used by the clean and compdb rules.
        """
        config = context.configuration
        phony = phony_name(config)
        sections = [self._header(config), self._rules(context, settings, path)]

        lines = ["# Compile statements"]
        lines.extend(statement.render() for statement in compile_statements)
        sections.append("\n".join(lines))

        sections.append("# Link statement\n" + link_statement.render())

        rules = RuleNames(phony)
        sections.append(
            "# Aliases\n"
            f"build {phony}: phony {escape_path(link_statement.output)}\n"
            f"build {rules.clean}: {rules.clean}\n"
            f"build {rules.compdb}: {rules.compdb}\n"
        )
        return "\n".join(sections)

    def _header(self, configuration: Configuration) -> str:
        return (
            "# Generated by ninjagen, edits will be overwritten.\n"
            f"# {configuration.project_name} {configuration.name} "
            f"({configuration.compiler.value})\n"
        )

    def _rules(
        self, context: GenerationContext, settings: CompilerSettings, path: str
    ) -> str:
        config = context.configuration
        toolchain = context.toolchain
        rules = RuleNames(phony_name(config))
        is_archive = config.output == OutputKind.STATIC_LIBRARY

        lines: list[str] = []
        if toolchain.DEPS_STYLE == "msvc":
            lines.append(f"msvc_deps_prefix = {toolchain.MSVC_DEPS_PREFIX}")
            lines.append("")

        compile_args = (
            "$DEFINES $SYSTEM_INCLUDES $INCLUDES $COMPILER_FLAGS "
            "$IMPLICIT_COMPILER_FLAGS $in"
        )
        for rule, compiler, language in (
            (rules.compile_cpp, settings.cxx_compiler, "C++"),
            (rules.compile_c, settings.c_compiler, "C"),
        ):
            lines.append(f"rule {rule}")
            if toolchain.DEPS_STYLE == "gcc":
                lines.append("  depfile = $DEP_FILE")
            lines.append(f"  deps = {toolchain.DEPS_STYLE}")
            lines.append(f'  command = "{escape_value(compiler)}" {compile_args}')
            lines.append(f"  description = Building {language} object $out")
            lines.append("")

        program = settings.archiver if is_archive else settings.linker
        chain = ["$PRE_BUILD"]
        if is_archive:
            # Archivers update existing archives; start from scratch instead.
            chain.append(
                f'"{escape_value(sys.executable)}" -m ninjagen.util.commands '
                "remove $out"
            )
        arguments = " ".join(f"${name}" for name in toolchain.LINK_COMMAND_VARIABLES)
        chain.append(f'"{escape_value(program)}" {arguments}')
        chain.append("$POST_BUILD")
        command = " && ".join(chain)
        if self.windows_host:
            command = f'cmd.exe /C "{command}"'

        description = {
            OutputKind.EXECUTABLE: "Linking C++ executable",
            OutputKind.SHARED_LIBRARY: "Linking C++ shared library",
            OutputKind.STATIC_LIBRARY: "Creating C++ archive",
        }[config.output]
        lines.append(f"rule {rules.link}")
        lines.append(f"  command = {command}")
        lines.append(f"  description = {description} $TARGET_FILE")
        lines.append("  restat = 1")
        lines.append("")

        ninja = escape_value(self.registry.ninja_path)
        script = escape_value(path)
        lines.append(f"rule {rules.clean}")
        lines.append(f'  command = "{ninja}" -f "{script}" -t clean')
        lines.append("  description = Cleaning all build files")
        lines.append("")
        lines.append(f"rule {rules.compdb}")
        lines.append(
            f'  command = "{ninja}" -f "{script}" -t compdb '
            f"{rules.compile_cpp} {rules.compile_c}"
        )
        lines.append("  description = Generating compilation database")

        return "# Rules\n" + "\n".join(lines) + "\n"
