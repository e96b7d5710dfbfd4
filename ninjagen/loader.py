# SPDX-License-Identifier: MIT
"""Load project descriptions from JSON.

A description lists projects, their sources and their configurations.
Configuration keys are the attribute names of ``Configuration``:

    {
      "solution": "game",
      "settings": {"msvc": {"linker": "C:/VS/bin/link.exe"}, "ninja": "ninja"},
      "projects": [
        {
          "name": "core",
          "source_root": "src/core",
          "sources": ["src/core/a.cpp"],
          "configurations": [
            {"name": "Debug", "compiler": "msvc", "output": "static_library",
             "project_path": "build/core"}
          ]
        },
        {
          "name": "app",
          "sources": ["src/main.cpp"],
          "configurations": [
            {"name": "Debug", "compiler": "msvc", "project_path": "build/app",
             "dependencies": [{"project": "core"}]}
          ]
        }
      ]
    }

A dependency names a project and, optionally, a configuration and
compiler; both default to the ones of the depending configuration.
Dependencies are linked as listed: include paths, library files and
transitive dependencies must already be spelled out.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from ninjagen.core.errors import ProjectDescriptionError
from ninjagen.core.model import CompilerFamily, Configuration, OutputKind, Project

logger = logging.getLogger(__name__)

_SET_FIELDS = {"compile_as_c", "build_exclude", "unity_exclude"}
_RESERVED_FIELDS = {"project", "resolved_dependencies", "name", "compiler", "output"}
_CONFIG_FIELDS = {f.name for f in fields(Configuration)} - _RESERVED_FIELDS


@dataclass
class Description:
    """A loaded project description.

    Attributes:
        projects: Projects, in description order.
        settings: Toolchain settings overrides (see ToolchainRegistry).
        solution: Solution name, if the description names one.
    """

    projects: list[Project] = field(default_factory=list)
    settings: dict[str, Any] = field(default_factory=dict)
    solution: str | None = None

    def get_project(self, name: str) -> Project | None:
        for project in self.projects:
            if project.name == name:
                return project
        return None


def load_description(path: Path | str) -> Description:
    """Load a description file.

    Raises:
        ProjectDescriptionError: If the file cannot be read or is invalid.
    """
    path = Path(path)
    try:
        with open(path) as f:
            data = json.load(f)
    except OSError as e:
        raise ProjectDescriptionError(f"cannot read description: {e}", str(path)) from e
    except json.JSONDecodeError as e:
        raise ProjectDescriptionError(f"invalid JSON: {e}", str(path)) from e
    return parse_description(data, str(path))


def parse_description(data: Any, path: str | None = None) -> Description:
    """Build projects from already parsed JSON data.

    Raises:
        ProjectDescriptionError: If the data is not a valid description.
    """
    if not isinstance(data, dict):
        raise ProjectDescriptionError("description must be a JSON object", path)

    settings = data.get("settings", {})
    if not isinstance(settings, dict):
        raise ProjectDescriptionError("'settings' must be an object", path)

    description = Description(settings=settings, solution=data.get("solution"))
    pending: list[tuple[Configuration, list[Any]]] = []

    for entry in _require_list(data, "projects", path):
        project, deps = _parse_project(entry, path)
        if description.get_project(project.name) is not None:
            raise ProjectDescriptionError(f"duplicate project {project.name!r}", path)
        description.projects.append(project)
        pending.extend(deps)

    for config, references in pending:
        for reference in references:
            config.resolved_dependencies.append(
                _resolve_dependency(description, config, reference, path)
            )

    logger.debug("Loaded %d project(s) from %s", len(description.projects), path)
    return description


def _require_list(data: dict[str, Any], key: str, path: str | None) -> list[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ProjectDescriptionError(f"{key!r} must be a list", path)
    return value


def _parse_project(
    data: Any, path: str | None
) -> tuple[Project, list[tuple[Configuration, list[Any]]]]:
    if not isinstance(data, dict) or not data.get("name"):
        raise ProjectDescriptionError("every project needs a 'name'", path)

    extensions = data.get("compile_extensions")
    project = Project(
        data["name"],
        source_root=data.get("source_root", "."),
        compile_extensions=tuple(extensions) if extensions is not None else None,
    )
    project.add_sources(_require_list(data, "sources", path))

    deps: list[tuple[Configuration, list[Any]]] = []
    for entry in _require_list(data, "configurations", path):
        config, references = _parse_configuration(project.name, entry, path)
        project.add_configuration(config)
        deps.append((config, references))
    return project, deps


def _parse_configuration(
    project: str, data: Any, path: str | None
) -> tuple[Configuration, list[Any]]:
    if not isinstance(data, dict) or not data.get("name"):
        raise ProjectDescriptionError(
            f"project {project!r}: every configuration needs a 'name'", path
        )
    where = f"{project}:{data['name']}"

    try:
        compiler = CompilerFamily(str(data.get("compiler", "")).lower())
    except ValueError:
        raise ProjectDescriptionError(
            f"{where}: unknown compiler {data.get('compiler')!r}", path
        ) from None
    try:
        output = OutputKind(data.get("output", OutputKind.EXECUTABLE.value))
    except ValueError:
        raise ProjectDescriptionError(
            f"{where}: unknown output {data.get('output')!r}", path
        ) from None

    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key in ("name", "compiler", "output", "dependencies"):
            continue
        if key not in _CONFIG_FIELDS:
            raise ProjectDescriptionError(f"{where}: unknown key {key!r}", path)
        kwargs[key] = set(value) if key in _SET_FIELDS else value

    references = data.get("dependencies", [])
    if not isinstance(references, list):
        raise ProjectDescriptionError(f"{where}: 'dependencies' must be a list", path)

    config = Configuration(data["name"], compiler, output, **kwargs)
    return config, references


def _resolve_dependency(
    description: Description,
    config: Configuration,
    reference: Any,
    path: str | None,
) -> Configuration:
    if isinstance(reference, str):
        reference = {"project": reference}
    if not isinstance(reference, dict) or "project" not in reference:
        raise ProjectDescriptionError(
            f"{config.project_name}:{config.name}: invalid dependency {reference!r}",
            path,
        )

    project = description.get_project(reference["project"])
    if project is None:
        raise ProjectDescriptionError(
            f"{config.project_name}:{config.name}: unknown project "
            f"{reference['project']!r}",
            path,
        )
    name = reference.get("configuration", config.name)
    compiler = config.compiler
    if "compiler" in reference:
        try:
            compiler = CompilerFamily(str(reference["compiler"]).lower())
        except ValueError:
            raise ProjectDescriptionError(
                f"unknown compiler {reference['compiler']!r}", path
            ) from None

    dependency = project.get_configuration(name, compiler)
    if dependency is None:
        raise ProjectDescriptionError(
            f"{config.project_name}:{config.name}: project {project.name!r} has "
            f"no configuration {name!r} for {compiler.value}",
            path,
        )
    return dependency
