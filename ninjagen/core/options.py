# SPDX-License-Identifier: MIT
"""Resolution of symbolic options into command-line option strings.

A configuration names its options symbolically (``Optimization`` is
``MaximizeSpeed``); a resolver turns them into two ordered maps, one for
the compiler and one for the linker, keyed by option name:

    {"Optimization": "/O2", "Intrinsic": "/Oi", "Inline": "REMOVE_LINE_TAG"}

Every option known to the toolchain appears in the maps, in the order the
toolchain declares them, so the generated command lines do not depend on
the order options were set in. Options that produce no text resolve to
``REMOVE_LINE``.

Resolution can be asked to apply an ``overlay``: a read-only set of
symbolic values that win over the configuration's own. Overlays are how a
single compile statement gets a different option set (e.g. optimization
disabled for a file being edited) without touching the configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ninjagen.core.errors import GenerateError
from ninjagen.core.flags import REMOVE_LINE

if TYPE_CHECKING:
    from ninjagen.core.context import GenerationContext

logger = logging.getLogger(__name__)


OptionOverlay = Mapping[str, str]

# Symbolic values that turn off every optimization-related option.
DEBUG_OVERLAY: OptionOverlay = MappingProxyType(
    {
        "Intrinsic": "Disable",
        "Inline": "Default",
        "FavorSizeOrSpeed": "Neither",
        "Optimization": "Disable",
    }
)


@dataclass(frozen=True)
class OptionDef:
    """Definition of one symbolic option for a toolchain.

    Attributes:
        default: Symbolic value used when the configuration sets none.
        values: Symbolic value to flag string. Flag strings may contain
            ``{compiler_pdb}``, ``{linker_pdb}`` or ``{output}``; the option
            resolves to ``REMOVE_LINE`` when the referenced path is empty.
    """

    default: str
    values: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ResolvedOptions:
    """The resolved compiler and linker option maps of a configuration.

    Instances are never modified; use ``with_overrides`` to derive a new set.
    """

    compiler: Mapping[str, str]
    linker: Mapping[str, str]

    def with_overrides(
        self,
        compiler: Mapping[str, str] | None = None,
        linker: Mapping[str, str] | None = None,
    ) -> ResolvedOptions:
        """Return a copy with some option values replaced.

        Replaced options keep their position; unknown names are appended.
        """
        new_compiler = dict(self.compiler)
        new_compiler.update(compiler or {})
        new_linker = dict(self.linker)
        new_linker.update(linker or {})
        return ResolvedOptions(
            MappingProxyType(new_compiler), MappingProxyType(new_linker)
        )

    def compiler_flags(self) -> list[str]:
        """Compiler option values in declaration order, sentinels included."""
        return list(self.compiler.values())

    def linker_flags(self) -> list[str]:
        """Linker option values in declaration order, sentinels included."""
        return list(self.linker.values())


@runtime_checkable
class OptionsResolver(Protocol):
    """Protocol for options-resolution engines."""

    def resolve(
        self,
        context: GenerationContext,
        overlay: OptionOverlay | None = None,
    ) -> ResolvedOptions:
        """Resolve the context's configuration into option maps.

        Args:
            context: Generation context of the configuration.
            overlay: Symbolic values overriding the configuration's options.
        """
        ...


class TableOptionsResolver:
    """Resolve options from the option tables declared by each toolchain.

    Example:
        resolver = TableOptionsResolver()
        options = resolver.resolve(context)
        options.compiler["Optimization"]  # "/O2"
    """

    def resolve(
        self,
        context: GenerationContext,
        overlay: OptionOverlay | None = None,
    ) -> ResolvedOptions:
        chosen = dict(context.configuration.options)
        if overlay:
            chosen.update(overlay)

        toolchain = context.toolchain
        known = set(toolchain.compiler_option_table()) | set(
            toolchain.linker_option_table()
        )
        for name in chosen:
            if name not in known:
                logger.debug(
                    "Option %s is not used by the %s toolchain", name, toolchain.name
                )

        paths = {
            "compiler_pdb": context.compiler_pdb_path,
            "linker_pdb": context.linker_pdb_path,
            "output": context.target_output_path,
        }
        compiler = self._resolve_table(
            toolchain.compiler_option_table(), chosen, paths, context
        )
        linker = self._resolve_table(
            toolchain.linker_option_table(), chosen, paths, context
        )
        return ResolvedOptions(MappingProxyType(compiler), MappingProxyType(linker))

    def _resolve_table(
        self,
        table: Mapping[str, OptionDef],
        chosen: Mapping[str, str],
        paths: Mapping[str, str],
        context: GenerationContext,
    ) -> dict[str, str]:
        result: dict[str, str] = {}
        for name, definition in table.items():
            value = chosen.get(name, definition.default)
            if value not in definition.values:
                raise GenerateError(
                    f"{context.configuration.name}: unknown value {value!r} "
                    f"for option {name} ({context.toolchain.name})"
                )
            flag = definition.values[value]
            result[name] = self._expand_paths(flag, paths)
        return result

    @staticmethod
    def _expand_paths(flag: str, paths: Mapping[str, str]) -> str:
        if flag == REMOVE_LINE or "{" not in flag:
            return flag
        for key, path in paths.items():
            placeholder = "{" + key + "}"
            if placeholder in flag:
                if not path:
                    return REMOVE_LINE
                flag = flag.replace(placeholder, path)
        return flag
