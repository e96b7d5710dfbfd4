# SPDX-License-Identifier: MIT
"""Where generated files go."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from ninjagen.core.context import unique_output_filename
from ninjagen.core.errors import MissingProjectPathError
from ninjagen.toolchains import get_toolchain

if TYPE_CHECKING:
    from ninjagen.core.model import Configuration, Project

NINJA_DIRECTORY = "ninja"
PROJECT_MANIFEST_EXTENSION = ".nproj"
SOLUTION_MANIFEST_EXTENSION = ".nsln"
BODY_SUFFIX = ".body.ninja"


def _project_path(configuration: Configuration) -> str:
    if configuration.project is None or not configuration.project_path:
        raise MissingProjectPathError(configuration.project_name or repr(configuration))
    return configuration.project_path


def script_path(configuration: Configuration) -> str:
    """Return the per-configuration script path.

    ``<project_path>/ninja/<project>.<config>.<family>.ninja``

    Raises:
        MissingProjectPathError: If the configuration has no project path.
    """
    return os.path.join(
        _project_path(configuration),
        NINJA_DIRECTORY,
        f"{configuration.project_name}.{configuration.name}."
        f"{configuration.compiler.value}.ninja",
    )


def body_path(configuration: Configuration) -> str:
    """Return the path of the file holding a configuration's rules and statements.

    ``<project_path>/ninja/<project>.<config>.<family>.body.ninja``. Entry
    scripts of the configuration and of its dependents pull it in with
    ``subninja``.
    """
    entry = script_path(configuration)
    return os.path.splitext(entry)[0] + BODY_SUFFIX


def output_path(configuration: Configuration) -> str:
    """Return the full path of the binary a configuration produces."""
    toolchain = get_toolchain(configuration.compiler)
    return os.path.join(
        configuration.target_path, unique_output_filename(configuration, toolchain)
    )


def project_manifest_path(project: Project) -> str:
    """Return ``<project_path>/<project>.nproj``.

    The project path of the first configuration is used; all
    configurations of a project share their output directory.
    """
    if not project.configurations:
        raise MissingProjectPathError(project.name)
    return os.path.join(
        _project_path(project.configurations[0]),
        f"{project.name}{PROJECT_MANIFEST_EXTENSION}",
    )
