# SPDX-License-Identifier: MIT
"""Unity (jumbo) build batching.

A unity build compiles several sources as one translation unit: a
generated ``unity_<n>.cpp`` ``#include``s each of them. Locally modified
files and files excluded from unity builds keep their own translation
unit so they recompile quickly and can be debugged.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from ninjagen.generators.syntax import to_forward_slashes

if TYPE_CHECKING:
    from ninjagen.core.model import Configuration
    from ninjagen.generators.generator import GenerationResult
    from ninjagen.util.files import GeneratedFileWriter
    from ninjagen.util.vcs import StatusQuery

logger = logging.getLogger(__name__)

UNITY_DIRECTORY = "unity"


class UnityBatcher:
    """Group a configuration's sources into unity files.

    Example:
        batcher = UnityBatcher(DiskFileWriter(), GitStatusQuery())
        units = batcher.batch(config, ["a.cpp", "b.cpp", "c.cpp"], result)
        # ["obj/unity/unity_0.cpp"] with max_files_per_unity_file == 0
    """

    def __init__(self, writer: GeneratedFileWriter, status: StatusQuery) -> None:
        self._writer = writer
        self._status = status

    def batch(
        self,
        configuration: Configuration,
        sources: list[str],
        result: GenerationResult,
    ) -> list[str]:
        """Return the translation units to compile for ``sources``.

        Files compiled on their own come first, in their original order,
        followed by the unity files. With ``max_files_per_unity_file`` set to
        N, each unity file holds at most N sources; 0 means one unity file
        for everything.

        Args:
            configuration: Configuration being generated.
            sources: Candidate sources, in order.
            result: Receives the paths of the written unity files.
        """
        limit = configuration.max_files_per_unity_file
        unity_dir = os.path.join(configuration.intermediate_path, UNITY_DIRECTORY)

        standalone: list[str] = []
        batches: list[list[str]] = []
        current: list[str] = []

        for source in sources:
            if self._status.is_modified(source):
                logger.info(
                    "Excluding %s from unity build as it is modified", source
                )
                standalone.append(source)
                continue
            # Unity files are C++; C sources keep their own translation unit
            if (
                source in configuration.unity_exclude
                or source in configuration.compile_as_c
            ):
                standalone.append(source)
                continue
            current.append(source)
            if limit and len(current) == limit:
                batches.append(current)
                current = []
        if current:
            batches.append(current)

        unity_files: list[str] = []
        owner = configuration.project_name
        for index, batch in enumerate(batches):
            path = os.path.join(unity_dir, f"unity_{index}.cpp")
            content = unity_file_content(batch, unity_dir)
            result.record(path, self._writer.write_generated_file(owner, path, content))
            unity_files.append(path)

        return standalone + unity_files


def unity_file_content(sources: list[str], unity_dir: str) -> str:
    """Return the text of a unity file including ``sources`` in order.

    Include paths are relative to the unity file so the generated text does
    not depend on the directory ninjagen runs from.
    """
    lines: list[str] = []
    for source in sources:
        try:
            include = os.path.relpath(source, unity_dir)
        except ValueError:
            # On Windows, relpath fails across drive letters
            include = os.path.abspath(source)
        lines.append(
            f'#include "{to_forward_slashes(include)}" '
            "// NOLINT(bugprone-suspicious-include)"
        )
    return "\n".join(lines) + "\n"
