# SPDX-License-Identifier: MIT
"""Shared fixtures for ninjagen tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from ninjagen.configure.config import ToolchainRegistry
from ninjagen.core.context import GenerationContext, OptionsCache
from ninjagen.core.model import CompilerFamily, Configuration, OutputKind, Project
from ninjagen.core.options import TableOptionsResolver
from ninjagen.toolchains import get_toolchain
from ninjagen.util.files import MemoryFileWriter


class FakeStatus:
    """Status query reporting a fixed set of files as modified."""

    def __init__(self, modified: set[str] | None = None) -> None:
        self.modified = set(modified or ())
        self.queries: list[str] = []

    def is_modified(self, path: str) -> bool:
        self.queries.append(path)
        return path in self.modified


@pytest.fixture
def registry(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ToolchainRegistry:
    """Registry that never searches PATH; programs keep their bare names."""
    monkeypatch.delenv("NINJAGEN_NINJA", raising=False)
    return ToolchainRegistry(
        build_dir=tmp_path, overrides={"ninja": "ninja"}, search_path=False
    )


@pytest.fixture
def memory_writer() -> MemoryFileWriter:
    return MemoryFileWriter()


def make_project(
    name: str = "app",
    compiler: CompilerFamily = CompilerFamily.MSVC,
    output: OutputKind = OutputKind.EXECUTABLE,
    sources: list[str] | None = None,
    base: Path | str = "build",
    config_name: str = "Debug",
    **config_kwargs,
) -> tuple[Project, Configuration]:
    """Create a project with one configuration laid out below ``base``."""
    base = Path(base)
    project = Project(name, source_root=str(base / "src" / name))
    project.add_sources(
        sources
        if sources is not None
        else [str(base / "src" / name / "main.cpp")]
    )
    config_kwargs.setdefault("project_path", str(base / "out" / name))
    config_kwargs.setdefault("intermediate_path", str(base / "obj" / name))
    config_kwargs.setdefault("target_path", str(base / "bin"))
    config = project.add_configuration(
        Configuration(config_name, compiler, output, **config_kwargs)
    )
    return project, config


def make_context(
    project: Project,
    config: Configuration,
    cache: OptionsCache | None = None,
) -> GenerationContext:
    return GenerationContext(
        project,
        config,
        get_toolchain(config.compiler),
        TableOptionsResolver(),
        cache,
    )
