# SPDX-License-Identifier: MIT
"""Project and solution manifests.

The project manifest tells tools which Ninja script builds which
configuration of a project and which scripts must be built before it:

    {
      "app": {
        "msvc": {
          "debug": {
            "ninja_file": "build/ninja/app.Debug.msvc.ninja",
            "dependencies": ["build/ninja/core.Debug.msvc.ninja"]
          }
        }
      }
    }

The solution manifest maps every project of a solution to its project
manifest.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ninjagen.core.model import OutputKind
from ninjagen.generators.generator import GenerationResult
from ninjagen.generators.layout import (
    SOLUTION_MANIFEST_EXTENSION,
    project_manifest_path,
    script_path,
)
from ninjagen.generators.syntax import to_forward_slashes
from ninjagen.util.files import DiskFileWriter

if TYPE_CHECKING:
    from ninjagen.core.model import Configuration, Project
    from ninjagen.util.files import GeneratedFileWriter

logger = logging.getLogger(__name__)


def build_dependencies(configuration: Configuration) -> list[str]:
    """Return the scripts that must be built before a configuration.

    A static library only collects its own objects, so it has none.
    """
    if configuration.output == OutputKind.STATIC_LIBRARY:
        return []
    return [
        to_forward_slashes(script_path(dep))
        for dep in configuration.resolved_dependencies
    ]


def build_project_manifest(project: Project) -> dict[str, Any]:
    """Return the manifest data of a project.

    Compiler family and configuration names are lower-cased.
    """
    families: dict[str, dict[str, Any]] = {}
    for config in project.configurations:
        configs = families.setdefault(config.compiler.value.lower(), {})
        configs[config.name.lower()] = {
            "ninja_file": to_forward_slashes(script_path(config)),
            "dependencies": build_dependencies(config),
        }
    return {project.name: families}


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2) + "\n"


def write_project_manifest(
    project: Project,
    writer: GeneratedFileWriter,
    result: GenerationResult,
) -> str:
    """Write ``<project_path>/<project>.nproj`` and return its path."""
    path = project_manifest_path(project)
    content = to_json(build_project_manifest(project))
    result.record(path, writer.write_generated_file(project.name, path, content))
    return path


def write_solution_manifest(
    name: str,
    projects: list[Project],
    output_dir: str | Path,
    *,
    writer: GeneratedFileWriter | None = None,
) -> GenerationResult:
    """Write ``<output_dir>/<name>.nsln`` mapping projects to their manifests.

    Args:
        name: Solution name.
        projects: Projects of the solution, in order.
        output_dir: Directory receiving the solution manifest.
        writer: Writer to use; defaults to writing to disk.
    """
    writer = writer or DiskFileWriter()
    result = GenerationResult()
    data = {
        project.name: to_forward_slashes(project_manifest_path(project))
        for project in projects
    }
    path = os.path.join(str(output_dir), f"{name}{SOLUTION_MANIFEST_EXTENSION}")
    written = writer.write_generated_file(name, path, to_json(data))
    result.record(path, written)
    logger.info("%s %s", "Generated" if written else "Up to date:", path)
    return result
