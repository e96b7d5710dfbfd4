# SPDX-License-Identifier: MIT
"""Generation context for one (project, configuration) pair.

The context bundles everything the statement builders need: the project,
the configuration, the toolchain strategy for its compiler family, the
resolved output paths and the resolved option maps. A context is created
per configuration and never shared; option resolution runs once when the
context is created.

The optimization-disabled option set used for locally modified files is
resolved lazily and memoized in an ``OptionsCache``. The cache belongs to
one generator invocation, so repeated modified files of a configuration
reuse one resolution.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from ninjagen.core.options import DEBUG_OVERLAY

if TYPE_CHECKING:
    from ninjagen.core.model import Configuration, Project
    from ninjagen.core.options import OptionsResolver, ResolvedOptions
    from ninjagen.toolchains.base import BaseToolchain

logger = logging.getLogger(__name__)


class OptionsCache:
    """Memo of option sets resolved with the debug overlay.

    Keyed by compiler family, project and configuration name.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str, str], ResolvedOptions] = {}

    def get(self, key: tuple[str, str, str]) -> ResolvedOptions | None:
        return self._entries.get(key)

    def put(self, key: tuple[str, str, str], options: ResolvedOptions) -> None:
        self._entries[key] = options

    def __len__(self) -> int:
        return len(self._entries)


class GenerationContext:
    """Everything known about one configuration during generation.

    Attributes:
        project: The project being generated.
        configuration: The configuration being generated.
        toolchain: Strategy object of the configuration's compiler family.
        project_directory: Directory receiving generated scripts.
        intermediate_directory: Directory for objects and helper files.
        target_output_path: Full path of the binary to produce.
        compiler_pdb_path: Compiler debug-symbol path ("" if none).
        linker_pdb_path: Linker debug-symbol path ("" if none).
    """

    def __init__(
        self,
        project: Project,
        configuration: Configuration,
        toolchain: BaseToolchain,
        resolver: OptionsResolver,
        cache: OptionsCache | None = None,
    ) -> None:
        self.project = project
        self.configuration = configuration
        self.toolchain = toolchain
        self._resolver = resolver
        self._cache = cache if cache is not None else OptionsCache()

        self.project_directory = configuration.project_path
        self.intermediate_directory = configuration.intermediate_path
        self.target_output_path = os.path.join(
            configuration.target_path, unique_output_filename(configuration, toolchain)
        )
        self.compiler_pdb_path = configuration.compiler_pdb_path
        self.linker_pdb_path = configuration.linker_pdb_path

        logger.debug(
            "%s: output %s, intermediate %s",
            configuration,
            self.target_output_path,
            self.intermediate_directory,
        )

        self._options = toolchain.apply_sanitizer_overrides(
            configuration, resolver.resolve(self), optimized=True
        )

    @property
    def compiler(self):
        """The configuration's compiler family."""
        return self.configuration.compiler

    @property
    def output(self):
        """The configuration's output kind."""
        return self.configuration.output

    @property
    def options(self) -> ResolvedOptions:
        """Option set used for unmodified files and for linking."""
        return self._options

    @property
    def debug_options(self) -> ResolvedOptions:
        """Option set with optimizations disabled, for modified files."""
        key = (
            self.compiler.value,
            self.project.name,
            self.configuration.name,
        )
        cached = self._cache.get(key)
        if cached is None:
            logger.debug("Resolving unoptimized options for %s", self.configuration)
            cached = self.toolchain.apply_sanitizer_overrides(
                self.configuration,
                self._resolver.resolve(self, DEBUG_OVERLAY),
                optimized=False,
            )
            self._cache.put(key, cached)
        return cached

    def __repr__(self) -> str:
        return f"GenerationContext({self.configuration!r})"


def unique_output_filename(
    configuration: Configuration, toolchain: BaseToolchain
) -> str:
    """Return the binary's file name, unique per configuration and compiler.

    Example: ``app_Debug_msvc.exe``.
    """
    extension = configuration.target_extension
    if extension is None:
        extension = toolchain.output_extension(configuration.output)
    return (
        f"{configuration.target_file_name}_{configuration.name}_"
        f"{configuration.compiler.value}{extension}"
    )
