# SPDX-License-Identifier: MIT
"""Tests for ninjagen.generators.unity."""

import os

from conftest import FakeStatus, make_project

from ninjagen.generators.generator import GenerationResult
from ninjagen.generators.unity import UnityBatcher, unity_file_content


SOURCES = [f"build/src/app/f{i}.cpp" for i in range(5)]


def unity_config(**kwargs):
    _, config = make_project(
        sources=SOURCES, unity_build=True, intermediate_path="build/obj/app", **kwargs
    )
    return config


def unity_path(index: int) -> str:
    return os.path.join("build/obj/app", "unity", f"unity_{index}.cpp")


class TestUnityBatcher:
    def test_batches_of_n(self, memory_writer):
        config = unity_config(max_files_per_unity_file=2)
        result = GenerationResult()
        units = UnityBatcher(memory_writer, FakeStatus()).batch(config, SOURCES, result)

        assert units == [unity_path(0), unity_path(1), unity_path(2)]
        assert memory_writer.files[unity_path(0)] == (
            '#include "../../../src/app/f0.cpp" // NOLINT(bugprone-suspicious-include)\n'
            '#include "../../../src/app/f1.cpp" // NOLINT(bugprone-suspicious-include)\n'
        )
        assert memory_writer.files[unity_path(2)].count("#include") == 1
        assert len(result.generated_files) == 3

    def test_exact_multiple_has_no_empty_batch(self, memory_writer):
        config = unity_config(max_files_per_unity_file=2)
        units = UnityBatcher(memory_writer, FakeStatus()).batch(
            config, SOURCES[:4], GenerationResult()
        )
        assert units == [unity_path(0), unity_path(1)]

    def test_unbounded(self, memory_writer):
        config = unity_config(max_files_per_unity_file=0)
        units = UnityBatcher(memory_writer, FakeStatus()).batch(
            config, SOURCES, GenerationResult()
        )
        assert units == [unity_path(0)]
        assert memory_writer.files[unity_path(0)].count("#include") == 5

    def test_modified_and_excluded_first(self, memory_writer, caplog):
        config = unity_config(unity_exclude={SOURCES[3]})
        status = FakeStatus({SOURCES[1]})
        with caplog.at_level("INFO"):
            units = UnityBatcher(memory_writer, status).batch(
                config, SOURCES, GenerationResult()
            )

        assert units == [SOURCES[1], SOURCES[3], unity_path(0)]
        content = memory_writer.files[unity_path(0)]
        assert "f1.cpp" not in content
        assert "f3.cpp" not in content
        assert "Excluding" in caplog.text

    def test_c_sources_compile_on_their_own(self, memory_writer):
        sources = SOURCES[:2] + ["build/src/app/legacy.c"]
        config = unity_config(compile_as_c={sources[2]})
        units = UnityBatcher(memory_writer, FakeStatus()).batch(
            config, sources, GenerationResult()
        )
        assert units == [sources[2], unity_path(0)]
        assert "legacy.c" not in memory_writer.files[unity_path(0)]

    def test_rerun_is_skipped(self, memory_writer):
        config = unity_config()
        batcher = UnityBatcher(memory_writer, FakeStatus())
        batcher.batch(config, SOURCES, GenerationResult())

        result = GenerationResult()
        batcher.batch(config, SOURCES, result)
        assert result.generated_files == []
        assert len(result.skipped_files) == 1


class TestUnityFileContent:
    def test_relative_includes(self):
        content = unity_file_content(["obj/unity/gen.cpp", "src/a.cpp"], "obj/unity")
        assert content.splitlines() == [
            '#include "gen.cpp" // NOLINT(bugprone-suspicious-include)',
            '#include "../../src/a.cpp" // NOLINT(bugprone-suspicious-include)',
        ]
