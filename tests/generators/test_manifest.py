# SPDX-License-Identifier: MIT
"""Tests for ninjagen.generators.manifest."""

import json

import pytest
from conftest import make_project

from ninjagen.core.errors import MissingProjectPathError
from ninjagen.core.model import CompilerFamily, Configuration, OutputKind, Project
from ninjagen.generators.generator import GenerationResult
from ninjagen.generators.manifest import (
    build_project_manifest,
    write_project_manifest,
    write_solution_manifest,
)


@pytest.fixture
def projects():
    core, core_debug = make_project("core", output=OutputKind.STATIC_LIBRARY)
    app, app_debug = make_project("app")
    app.add_configuration(
        Configuration(
            "Release",
            CompilerFamily.CLANG,
            project_path="build/out/app",
            resolved_dependencies=[core_debug],
        )
    )
    app_debug.resolved_dependencies = [core_debug]
    _, base_debug = make_project("base", output=OutputKind.STATIC_LIBRARY)
    core_debug.resolved_dependencies = [base_debug]
    return core, app


class TestProjectManifest:
    def test_layout(self, projects):
        _, app = projects
        assert build_project_manifest(app) == {
            "app": {
                "msvc": {
                    "debug": {
                        "ninja_file": "build/out/app/ninja/app.Debug.msvc.ninja",
                        "dependencies": ["build/out/core/ninja/core.Debug.msvc.ninja"],
                    }
                },
                "clang": {
                    "release": {
                        "ninja_file": "build/out/app/ninja/app.Release.clang.ninja",
                        "dependencies": ["build/out/core/ninja/core.Debug.msvc.ninja"],
                    }
                },
            }
        }

    def test_static_library_has_no_dependencies(self, projects):
        core, _ = projects
        data = build_project_manifest(core)
        assert data["core"]["msvc"]["debug"]["dependencies"] == []

    def test_write(self, projects, memory_writer):
        _, app = projects
        result = GenerationResult()
        path = write_project_manifest(app, memory_writer, result)

        assert path.replace("\\", "/") == "build/out/app/app.nproj"
        content = memory_writer.files[path]
        assert content.endswith("}\n")
        assert content.startswith('{\n  "app": {\n')
        assert json.loads(content) == build_project_manifest(app)
        assert len(result.generated_files) == 1

    def test_project_without_configurations(self):
        with pytest.raises(MissingProjectPathError):
            write_project_manifest(Project("empty"), None, GenerationResult())


class TestSolutionManifest:
    def test_write(self, projects, tmp_path):
        core, app = projects
        result = write_solution_manifest("game", [core, app], tmp_path)

        path = tmp_path / "game.nsln"
        assert result.generated_files == [path]
        assert json.loads(path.read_text()) == {
            "core": "build/out/core/core.nproj",
            "app": "build/out/app/app.nproj",
        }

        again = write_solution_manifest("game", [core, app], tmp_path)
        assert again.skipped_files == [path]
