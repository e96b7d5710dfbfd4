# SPDX-License-Identifier: MIT
"""
ninjagen: generate Ninja build scripts from project descriptions.

ninjagen turns toolchain-agnostic project and configuration data into one
Ninja script per configuration for MSVC, Clang and GCC, batching sources
into unity files and chaining projects through phony aliases.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Re-export commonly used classes for convenient imports
from ninjagen.configure.config import ToolchainRegistry  # noqa: E402
from ninjagen.core.model import (  # noqa: E402
    CompilerFamily,
    Configuration,
    OutputKind,
    Project,
)
from ninjagen.generators.ninja import NinjaProjectGenerator  # noqa: E402

__all__ = [
    "CompilerFamily",
    "Configuration",
    "NinjaProjectGenerator",
    "OutputKind",
    "Project",
    "ToolchainRegistry",
    "__version__",
]
