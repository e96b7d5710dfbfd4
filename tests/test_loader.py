# SPDX-License-Identifier: MIT
"""Tests for ninjagen.loader."""

import json

import pytest

from ninjagen.core.errors import ProjectDescriptionError
from ninjagen.core.model import CompilerFamily, OutputKind
from ninjagen.loader import load_description, parse_description


def description(**overrides):
    data = {
        "solution": "game",
        "settings": {"ninja": "ninja"},
        "projects": [
            {
                "name": "core",
                "source_root": "src/core",
                "sources": ["src/core/a.cpp", "src/core/b.c"],
                "configurations": [
                    {
                        "name": "Debug",
                        "compiler": "MSVC",
                        "output": "static_library",
                        "project_path": "build/core",
                        "compile_as_c": ["src/core/b.c"],
                    },
                    {"name": "Debug", "compiler": "clang", "project_path": "build/core"},
                ],
            },
            {
                "name": "app",
                "sources": ["src/main.cpp"],
                "configurations": [
                    {
                        "name": "Debug",
                        "compiler": "msvc",
                        "project_path": "build/app",
                        "options": {"Optimization": "MaximizeSpeed"},
                        "dependencies": ["core"],
                    },
                    {
                        "name": "Release",
                        "compiler": "msvc",
                        "project_path": "build/app",
                        "dependencies": [
                            {"project": "core", "configuration": "debug", "compiler": "clang"}
                        ],
                    },
                ],
            },
        ],
    }
    data.update(overrides)
    return data


class TestParseDescription:
    def test_projects(self):
        desc = parse_description(description())
        assert desc.solution == "game"
        assert desc.settings == {"ninja": "ninja"}
        assert [p.name for p in desc.projects] == ["core", "app"]

        core = desc.get_project("core")
        assert core.source_root == "src/core"
        assert core.source_files == ["src/core/a.cpp", "src/core/b.c"]
        debug = core.configurations[0]
        assert debug.compiler == CompilerFamily.MSVC
        assert debug.output == OutputKind.STATIC_LIBRARY
        assert debug.compile_as_c == {"src/core/b.c"}
        assert debug.target_file_name == "core"
        assert debug.project is core

    def test_dependencies(self):
        desc = parse_description(description())
        core = desc.get_project("core")
        debug, release = desc.get_project("app").configurations
        assert debug.options == {"Optimization": "MaximizeSpeed"}
        assert debug.resolved_dependencies == [core.configurations[0]]
        assert release.resolved_dependencies == [core.configurations[1]]

    @pytest.mark.parametrize(
        "config, message",
        [
            ({"name": "Debug", "compiler": "icc"}, "unknown compiler"),
            ({"name": "Debug", "compiler": "gcc", "output": "dll"}, "unknown output"),
            ({"name": "Debug", "compiler": "gcc", "colour": "red"}, "unknown key"),
            ({"name": "Debug", "compiler": "gcc", "project": "x"}, "unknown key"),
            ({"compiler": "gcc"}, "needs a 'name'"),
            ({"name": "Debug", "compiler": "gcc", "dependencies": ["nope"]}, "unknown project"),
            (
                {"name": "Debug", "compiler": "gcc", "dependencies": [{"project": "core"}]},
                "no configuration 'Debug' for gcc",
            ),
        ],
    )
    def test_invalid_configuration(self, config, message):
        data = description()
        data["projects"][1]["configurations"] = [config]
        with pytest.raises(ProjectDescriptionError) as exc_info:
            parse_description(data)
        assert message in exc_info.value.message

    def test_duplicate_project(self):
        data = description()
        data["projects"].append({"name": "core"})
        with pytest.raises(ProjectDescriptionError, match="duplicate project"):
            parse_description(data)

    def test_not_an_object(self):
        with pytest.raises(ProjectDescriptionError):
            parse_description([])

    def test_projects_must_be_a_list(self):
        with pytest.raises(ProjectDescriptionError, match="'projects' must be a list"):
            parse_description({"projects": {}})


class TestLoadDescription:
    def test_load(self, tmp_path):
        path = tmp_path / "game.json"
        path.write_text(json.dumps(description()))
        assert len(load_description(path).projects) == 2

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "game.json"
        path.write_text("{")
        with pytest.raises(ProjectDescriptionError) as exc_info:
            load_description(path)
        assert exc_info.value.path == str(path)
        assert "invalid JSON" in str(exc_info.value)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProjectDescriptionError, match="cannot read description"):
            load_description(tmp_path / "missing.json")
