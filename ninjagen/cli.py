# SPDX-License-Identifier: MIT
"""Command-line interface for ninjagen."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ninjagen.configure.config import ToolchainRegistry
from ninjagen.core.errors import NinjagenError
from ninjagen.generators.generator import GenerationResult
from ninjagen.generators.manifest import write_solution_manifest
from ninjagen.generators.ninja import NinjaProjectGenerator
from ninjagen.loader import load_description
from ninjagen.util.files import DiskFileWriter
from ninjagen.util.vcs import GitStatusQuery, NoStatusQuery

# Set up logging
logger = logging.getLogger("ninjagen")


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt)


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate Ninja scripts for every project of a description.

    Writes one script per configuration, a manifest per project and, when
    the description names a solution, a solution manifest in the output
    directory.
    """
    setup_logging(args.verbose, args.debug)

    description_path = Path(args.description)
    if not description_path.exists():
        logger.error("Description not found: %s", description_path)
        return 1

    output_dir = Path(args.output_dir)

    try:
        description = load_description(description_path)
        registry = ToolchainRegistry(
            build_dir=output_dir,
            overrides=description.settings,
        )
        status = (
            NoStatusQuery()
            if args.no_vcs
            else GitStatusQuery(description_path.parent)
        )
        writer = DiskFileWriter()
        generator = NinjaProjectGenerator(
            registry=registry, status=status, writer=writer
        )

        result = GenerationResult()
        for project in description.projects:
            result.merge(generator.generate(project))
        if description.solution:
            result.merge(
                write_solution_manifest(
                    description.solution,
                    description.projects,
                    output_dir,
                    writer=writer,
                )
            )
        registry.save()
    except NinjagenError as e:
        logger.error("%s", e.message)
        return 1
    except OSError as e:
        logger.error("Failed to write build files: %s", e)
        return 1

    print(
        f"Generated {len(result.generated_files)} file(s), "
        f"{len(result.skipped_files)} already up to date"
    )
    return 0


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser."""
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the ninjagen CLI."""
    parser = argparse.ArgumentParser(
        prog="ninjagen",
        description="Generate Ninja build scripts from project descriptions.",
        epilog="Run 'ninjagen <command> --help' for command-specific help.",
    )
    from ninjagen import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ninjagen generate
    gen_parser = subparsers.add_parser(
        "generate", help="Generate Ninja scripts from a JSON description"
    )
    add_common_args(gen_parser)
    gen_parser.add_argument("description", help="Path to the JSON project description")
    gen_parser.add_argument(
        "-o",
        "--output-dir",
        default=".",
        help="Directory for the solution manifest and config cache (default: .)",
    )
    gen_parser.add_argument(
        "--no-vcs",
        action="store_true",
        help="Do not query git for modified files",
    )
    gen_parser.set_defaults(func=cmd_generate)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    # Run the specified command
    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
