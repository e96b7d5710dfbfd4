# SPDX-License-Identifier: MIT
"""Tests for ninjagen.core.context."""

import os

from conftest import make_context, make_project

from ninjagen.core.context import GenerationContext, OptionsCache, unique_output_filename
from ninjagen.core.flags import REMOVE_LINE
from ninjagen.core.model import CompilerFamily, Configuration, OutputKind
from ninjagen.core.options import TableOptionsResolver
from ninjagen.toolchains import get_toolchain


class CountingResolver(TableOptionsResolver):
    def __init__(self) -> None:
        self.calls: list[bool] = []

    def resolve(self, context, overlay=None):
        self.calls.append(overlay is not None)
        return super().resolve(context, overlay)


class TestUniqueOutputFilename:
    def test_toolchain_extension(self):
        project, config = make_project()
        name = unique_output_filename(config, get_toolchain(config.compiler))
        assert name == "app_Debug_msvc.exe"

    def test_static_library(self):
        project, config = make_project(
            compiler=CompilerFamily.GCC, output=OutputKind.STATIC_LIBRARY
        )
        name = unique_output_filename(config, get_toolchain(config.compiler))
        assert name == "app_Debug_gcc.a"

    def test_explicit_extension(self):
        project, config = make_project(target_extension=".pyd")
        name = unique_output_filename(config, get_toolchain(config.compiler))
        assert name == "app_Debug_msvc.pyd"


class TestGenerationContext:
    def test_paths(self):
        project, config = make_project(linker_pdb_path="bin/app.pdb")
        context = make_context(project, config)
        assert context.project_directory == config.project_path
        assert context.intermediate_directory == config.intermediate_path
        assert context.target_output_path == os.path.join(
            config.target_path, "app_Debug_msvc.exe"
        )
        assert context.linker_pdb_path == "bin/app.pdb"
        assert context.compiler == CompilerFamily.MSVC
        assert context.output == OutputKind.EXECUTABLE

    def test_options_resolved_once(self):
        project, config = make_project()
        resolver = CountingResolver()
        context = GenerationContext(
            project, config, get_toolchain(config.compiler), resolver
        )
        context.options
        context.options
        assert resolver.calls == [False]

    def test_debug_options_are_lazy_and_cached(self):
        project, config = make_project(options={"Optimization": "MaximizeSpeed"})
        resolver = CountingResolver()
        cache = OptionsCache()
        toolchain = get_toolchain(config.compiler)

        first = GenerationContext(project, config, toolchain, resolver, cache)
        assert resolver.calls == [False]
        assert first.debug_options.compiler["Optimization"] == "/Od"

        second = GenerationContext(project, config, toolchain, resolver, cache)
        assert second.debug_options is first.debug_options
        assert resolver.calls == [False, True, False]
        assert len(cache) == 1

    def test_debug_options_do_not_change_options(self):
        project, config = make_project(options={"Optimization": "MaximizeSpeed"})
        context = make_context(project, config)
        assert context.debug_options.compiler["Optimization"] == "/Od"
        assert context.options.compiler["Optimization"] == "/O2"

    def test_cache_is_keyed_per_configuration(self):
        project, debug = make_project(options={"Optimization": "MaximizeSpeed"})
        release = project.add_configuration(
            Configuration(
                "Release",
                CompilerFamily.MSVC,
                options={"Optimization": "MaximizeSpeed", "Exceptions": "Disable"},
            )
        )
        cache = OptionsCache()
        make_context(project, debug, cache).debug_options
        release_options = make_context(project, release, cache).debug_options
        assert len(cache) == 2
        assert release_options.compiler["Exceptions"] == REMOVE_LINE


class TestSanitizerOverrides:
    def test_sanitizer_forces_o1(self):
        project, config = make_project(
            compiler=CompilerFamily.CLANG,
            options={"Optimization": "FullOptimization"},
            undefined_behavior_sanitizer=True,
        )
        context = make_context(project, config)
        assert context.options.compiler["Optimization"] == "-O1"

    def test_unoptimized_set_keeps_o0(self):
        project, config = make_project(
            compiler=CompilerFamily.CLANG, address_sanitizer=True
        )
        context = make_context(project, config)
        assert context.debug_options.compiler["Optimization"] == "-O0"

    def test_asan_removes_lto(self):
        project, config = make_project(
            compiler=CompilerFamily.CLANG,
            options={
                "CompilerWholeProgramOptimization": "Enable",
                "LinkTimeCodeGeneration": "Enable",
            },
            address_sanitizer=True,
        )
        context = make_context(project, config)
        for options in (context.options, context.debug_options):
            assert options.compiler["CompilerWholeProgramOptimization"] == REMOVE_LINE
            assert options.linker["LinkTimeCodeGeneration"] == REMOVE_LINE

    def test_fuzzing_keeps_lto(self):
        project, config = make_project(
            compiler=CompilerFamily.CLANG,
            options={"CompilerWholeProgramOptimization": "Enable"},
            fuzzing=True,
        )
        context = make_context(project, config)
        assert context.options.compiler["CompilerWholeProgramOptimization"] == "-flto"

    def test_no_sanitizer_no_change(self):
        project, config = make_project(
            compiler=CompilerFamily.CLANG, options={"Optimization": "MaximizeSpeed"}
        )
        assert make_context(project, config).options.compiler["Optimization"] == "-O2"
