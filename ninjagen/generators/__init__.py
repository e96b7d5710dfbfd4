# SPDX-License-Identifier: MIT
"""Build file generators for ninjagen."""

from ninjagen.generators.generator import BaseGenerator, GenerationResult, Generator
from ninjagen.generators.manifest import write_solution_manifest
from ninjagen.generators.ninja import NinjaProjectGenerator
from ninjagen.generators.unity import UnityBatcher

__all__ = [
    "BaseGenerator",
    "GenerationResult",
    "Generator",
    "NinjaProjectGenerator",
    "UnityBatcher",
    "write_solution_manifest",
]
