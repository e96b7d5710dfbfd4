# SPDX-License-Identifier: MIT
"""Toolchain registry for ninjagen.

The ToolchainRegistry knows where each compiler family's programs live
(compilers, linker, archiver), which library search paths its linker
needs, and where the ninja executable is. Programs are looked up on PATH
the first time they are needed and remembered in a JSON cache file, so
later runs generate identical scripts without searching again.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from ninjagen.core.errors import UnknownCompilerError
from ninjagen.core.model import CompilerFamily

logger = logging.getLogger(__name__)

NINJA_ENV_VAR = "NINJAGEN_NINJA"


@dataclass
class ProgramInfo:
    """Information about a found program.

    Attributes:
        path: Path to the program executable.
    """

    path: Path


@dataclass
class CompilerSettings:
    """Programs and paths of one compiler family.

    Attributes:
        cxx_compiler: C++ compiler executable.
        c_compiler: C compiler executable.
        linker: Linker used for executables and shared libraries.
        archiver: Archiver used for static libraries.
        library_paths: Library directories passed to every link.
    """

    cxx_compiler: str
    c_compiler: str
    linker: str
    archiver: str
    library_paths: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any], base: CompilerSettings) -> CompilerSettings:
        """Create settings from ``data``, taking missing keys from ``base``."""
        merged = asdict(base)
        for key, value in data.items():
            if key not in merged:
                logger.warning("Ignoring unknown compiler setting: %s", key)
                continue
            merged[key] = value
        merged["library_paths"] = list(merged["library_paths"])
        return cls(**merged)


# Program names searched on PATH when nothing is configured
DEFAULT_SETTINGS: dict[CompilerFamily, CompilerSettings] = {
    CompilerFamily.MSVC: CompilerSettings(
        cxx_compiler="cl.exe",
        c_compiler="cl.exe",
        linker="link.exe",
        archiver="lib.exe",
    ),
    CompilerFamily.CLANG: CompilerSettings(
        cxx_compiler="clang++",
        c_compiler="clang",
        linker="clang++",
        archiver="llvm-ar",
    ),
    CompilerFamily.GCC: CompilerSettings(
        cxx_compiler="g++",
        c_compiler="gcc",
        linker="g++",
        archiver="ar",
    ),
}


class ToolchainRegistry:
    """Registry of toolchain settings.

    Settings are taken, in order of precedence, from explicit overrides,
    the cache file, and a PATH search. Programs that cannot be found keep
    their bare name so the generated scripts rely on PATH at build time.

    Example:
        registry = ToolchainRegistry(build_dir=Path("build"))
        settings = registry.get_compiler_settings(CompilerFamily.GCC)
        settings.cxx_compiler  # "/usr/bin/g++"
        registry.save()

    Attributes:
        build_dir: Directory holding the cache file.
    """

    def __init__(
        self,
        *,
        build_dir: Path | str = ".",
        cache_file: str = "ninjagen_config.json",
        overrides: dict[str, Any] | None = None,
        search_path: bool = True,
    ) -> None:
        """Create a toolchain registry.

        Args:
            build_dir: Directory holding the cache file.
            cache_file: Name of the cache file within build_dir.
            overrides: Explicit settings, keyed by compiler family name
                (``{"msvc": {"linker": "C:/VS/link.exe"}}``) plus an
                optional ``"ninja"`` entry.
            search_path: Look programs up on PATH. When False, programs
                that are neither overridden nor cached keep their bare name.
        """
        self.build_dir = Path(build_dir)
        self._cache_file = cache_file
        self._cache: dict[str, Any] = {}
        self._overrides = dict(overrides or {})
        self._search_path = search_path
        self._settings: dict[CompilerFamily, CompilerSettings] = {}

        self._load_cache()

    def _cache_path(self) -> Path:
        """Get the path to the cache file."""
        return self.build_dir / self._cache_file

    def _load_cache(self) -> None:
        """Load settings from the cache file if it exists."""
        cache_path = self._cache_path()
        if cache_path.exists():
            try:
                with open(cache_path) as f:
                    self._cache = json.load(f)
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Ignoring unreadable cache %s: %s", cache_path, e)
                self._cache = {}

    def save(self, path: Path | None = None) -> None:
        """Save discovered settings to the cache file.

        Args:
            path: Optional path override for cache file.
        """
        cache_path = path or self._cache_path()
        cache_path.parent.mkdir(parents=True, exist_ok=True)

        with open(cache_path, "w") as f:
            json.dump(self._cache, f, indent=2, sort_keys=True, default=str)
            f.write("\n")

    def find_program(self, name: str) -> ProgramInfo | None:
        """Find a program, first in the cache, then on PATH.

        Args:
            name: Program name (e.g., 'clang++', 'lib.exe').

        Returns:
            ProgramInfo if found, None otherwise.
        """
        cache_key = f"program:{name}"
        if cache_key in self._cache:
            path = Path(self._cache[cache_key]["path"])
            if path.exists():
                return ProgramInfo(path=path)

        if not self._search_path:
            return None

        result = shutil.which(name)
        if not result:
            logger.debug("Program not found on PATH: %s", name)
            return None

        found = Path(result)
        self._cache[cache_key] = {"path": str(found)}
        return ProgramInfo(path=found)

    def _program(self, name: str) -> str:
        info = self.find_program(name)
        return str(info.path) if info is not None else name

    def get_compiler_settings(self, family: CompilerFamily) -> CompilerSettings:
        """Return the settings of a compiler family.

        Raises:
            UnknownCompilerError: If the family has no default settings.
        """
        if family in self._settings:
            return self._settings[family]
        try:
            defaults = DEFAULT_SETTINGS[family]
        except KeyError:
            raise UnknownCompilerError(family, "toolchain settings") from None

        discovered = CompilerSettings(
            cxx_compiler=self._program(defaults.cxx_compiler),
            c_compiler=self._program(defaults.c_compiler),
            linker=self._program(defaults.linker),
            archiver=self._program(defaults.archiver),
            library_paths=list(defaults.library_paths),
        )
        override = self._overrides.get(family.value)
        settings = (
            CompilerSettings.from_dict(override, discovered) if override else discovered
        )
        self._settings[family] = settings
        return settings

    def set_compiler_settings(
        self, family: CompilerFamily, settings: CompilerSettings
    ) -> None:
        """Register explicit settings for a compiler family."""
        self._settings[family] = settings

    @property
    def ninja_path(self) -> str:
        """Path of the ninja executable used by clean and compdb rules.

        ``NINJAGEN_NINJA`` in the environment wins over everything else.
        """
        env = os.environ.get(NINJA_ENV_VAR)
        if env:
            return env
        override = self._overrides.get("ninja")
        if override:
            return str(override)
        return self._program("ninja")

    def __repr__(self) -> str:
        return f"ToolchainRegistry(build_dir={self.build_dir})"
