# SPDX-License-Identifier: MIT
"""Custom exceptions for ninjagen.

All ninjagen exceptions inherit from NinjagenError. Generation errors are
fatal for the configuration being generated: they are raised before the
configuration's build script is written and are never retried.
"""

from __future__ import annotations


class NinjagenError(Exception):
    """Base class for all ninjagen exceptions.

    Attributes:
        message: The error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class GenerateError(NinjagenError):
    """Error during the generate phase.

    Raised when build file generation fails.
    """


class UnsupportedConfigurationError(GenerateError):
    """A configuration asks for something the compiler family cannot do.

    Attributes:
        compiler: Name of the compiler family.
        configuration: Name of the offending configuration.
    """

    def __init__(self, message: str, compiler: str, configuration: str) -> None:
        self.compiler = compiler
        self.configuration = configuration
        super().__init__(f"{configuration} ({compiler}): {message}")


class UnknownCompilerError(GenerateError):
    """No flag table or toolchain exists for a compiler family.

    Attributes:
        compiler: The compiler family that was looked up.
    """

    def __init__(self, compiler: object, what: str = "toolchain") -> None:
        self.compiler = compiler
        super().__init__(f"unknown compiler {compiler!r} used for {what}")


class MissingProjectPathError(GenerateError):
    """A dependency does not know where its build scripts are generated.

    Attributes:
        project: Name of the project whose path could not be found.
    """

    def __init__(self, project: str) -> None:
        self.project = project
        super().__init__(f"failed to find project path for {project!r}")


class ProjectDescriptionError(NinjagenError):
    """The JSON project description is malformed.

    Attributes:
        path: Description file, if the description came from disk.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
