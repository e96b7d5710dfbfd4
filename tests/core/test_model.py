# SPDX-License-Identifier: MIT
"""Tests for ninjagen.core.model."""

from ninjagen.core.model import CompilerFamily, Configuration, OutputKind, Project


class TestProject:
    def test_add_sources_keeps_order(self):
        project = Project("app")
        project.add_sources(["b.cpp", "a.cpp"])
        project.add_sources(["c.c"])
        assert project.source_files == ["b.cpp", "a.cpp", "c.c"]

    def test_default_compile_extensions(self):
        project = Project("app")
        assert project.compile_extensions == (".cpp", ".cc", ".cxx", ".c")

    def test_add_configuration_sets_back_reference(self):
        project = Project("app")
        config = project.add_configuration(Configuration("Debug", CompilerFamily.MSVC))
        assert config.project is project
        assert config.project_name == "app"
        assert project.configurations == [config]

    def test_target_file_name_defaults_to_project_name(self):
        project = Project("app")
        config = project.add_configuration(Configuration("Debug", CompilerFamily.GCC))
        assert config.target_file_name == "app"

        named = project.add_configuration(
            Configuration("Release", CompilerFamily.GCC, target_file_name="tool")
        )
        assert named.target_file_name == "tool"

    def test_get_configuration(self):
        project = Project("app")
        msvc = project.add_configuration(Configuration("Debug", CompilerFamily.MSVC))
        clang = project.add_configuration(Configuration("Debug", CompilerFamily.CLANG))

        assert project.get_configuration("debug") is msvc
        assert project.get_configuration("DEBUG", CompilerFamily.CLANG) is clang
        assert project.get_configuration("Release") is None


class TestConfiguration:
    def test_defaults(self):
        config = Configuration("Debug", CompilerFamily.MSVC)
        assert config.output == OutputKind.EXECUTABLE
        assert config.options == {}
        assert config.resolved_dependencies == []
        assert not config.any_sanitizer

    def test_any_sanitizer(self):
        assert Configuration("D", CompilerFamily.CLANG, fuzzing=True).any_sanitizer
        assert Configuration(
            "D", CompilerFamily.CLANG, undefined_behavior_sanitizer=True
        ).any_sanitizer
        # Coverage alone is not a sanitizer
        assert not Configuration("D", CompilerFamily.CLANG, code_coverage=True).any_sanitizer

    def test_identity_equality(self):
        a = Configuration("Debug", CompilerFamily.MSVC)
        b = Configuration("Debug", CompilerFamily.MSVC)
        assert a != b
        assert len({a, b}) == 2

    def test_repr(self):
        project = Project("app")
        config = project.add_configuration(
            Configuration("Debug", CompilerFamily.GCC, OutputKind.STATIC_LIBRARY)
        )
        assert repr(config) == "Configuration(app:Debug, gcc, static_library)"
