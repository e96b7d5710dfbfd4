# SPDX-License-Identifier: MIT
"""Generator protocol for build file generation.

Generators take a Project and produce build system files (Ninja scripts
and their manifests). Every file a generator writes is recorded in a
``GenerationResult``, split into files that were written and files that
were already up to date.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ninjagen.core.model import Project


@dataclass
class GenerationResult:
    """Files touched by a generation run.

    Attributes:
        generated_files: Files whose content changed and were written.
        skipped_files: Files already holding the generated content.
    """

    generated_files: list[Path] = field(default_factory=list)
    skipped_files: list[Path] = field(default_factory=list)

    def record(self, path: str | Path, written: bool) -> None:
        if written:
            self.generated_files.append(Path(path))
        else:
            self.skipped_files.append(Path(path))

    def merge(self, other: GenerationResult) -> None:
        self.generated_files.extend(other.generated_files)
        self.skipped_files.extend(other.skipped_files)


@runtime_checkable
class Generator(Protocol):
    """Protocol for build file generators."""

    @property
    def name(self) -> str:
        """Generator name (e.g., 'ninja')."""
        ...

    def generate(self, project: Project) -> GenerationResult:
        """Generate build files for a project.

        Args:
            project: The project to generate for. Output locations come
                from the project's configurations.
        """
        ...


class BaseGenerator:
    """Base class for generators with common functionality."""

    def __init__(self, name: str) -> None:
        """Initialize a generator.

        Args:
            name: Generator name.
        """
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def generate(self, project: Project) -> GenerationResult:
        """Generate build files. Subclasses must implement."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"
