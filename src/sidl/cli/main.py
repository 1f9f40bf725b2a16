# Copyright 2026 SIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the SIDL command-line interface."""

import argparse
import sys
from pathlib import Path

from sidl.compiler.artifact import serialize
from sidl.compiler.build import SOURCE_SUFFIX, CompilerError, compile_files, load_source
from sidl.compiler.errors import SidlError
from sidl.compiler.parser import parse
from sidl.workspace.config import (
    DEFAULT_BUILD_DIRECTORY,
    WORKSPACE_FILE_NAME,
    WorkspaceConfig,
    WorkspaceConfigError,
    load_workspace_config,
)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the SIDL CLI."""
    parser = argparse.ArgumentParser(
        prog="sidl",
        description="SIDL - schema compiler for records and service contracts",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Initialize a new SIDL workspace",
        description=f"Create a {WORKSPACE_FILE_NAME} file in a directory.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to initialize the workspace in (default: current directory)",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Check the syntax of all schema files",
        description=f"Parse every {SOURCE_SUFFIX} file in the workspace and report errors.",
    )
    check_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the SIDL workspace (default: current directory)",
    )

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate Python modules from all schema files",
        description="Compile every schema file into the workspace build directory.",
    )
    generate_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the SIDL workspace (default: current directory)",
    )

    # dump subcommand
    dump_parser = subparsers.add_parser(
        "dump",
        help="Print the parsed declarations of a schema file as JSON",
        description="Parse a single schema file and print its declarations as JSON.",
    )
    dump_parser.add_argument("file", help="Schema file to parse")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "dump":
        return _cmd_dump(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    workspace_file = directory / WORKSPACE_FILE_NAME

    if workspace_file.exists():
        print(
            f"Error: workspace already exists at '{workspace_file}'.",
            file=sys.stderr,
        )
        return 1

    workspace_content = (
        "# SIDL Workspace Configuration\n"
        "# This file marks the root of a SIDL workspace.\n"
        "\n"
        f"build-directory: {DEFAULT_BUILD_DIRECTORY}\n"
    )
    workspace_file.write_text(workspace_content, encoding="utf-8")
    print(f"Initialized SIDL workspace at '{workspace_file}'.")
    return 0


def _load_workspace(directory: Path) -> WorkspaceConfig | None:
    """Load the workspace configuration, printing an error and returning None on failure."""
    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return None

    workspace_file = directory / WORKSPACE_FILE_NAME
    if not workspace_file.exists():
        print(
            f"Error: no SIDL workspace found at '{directory}'. Run 'sidl init' to initialize a workspace.",
            file=sys.stderr,
        )
        return None

    try:
        return load_workspace_config(workspace_file)
    except WorkspaceConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None


def _schema_files(directory: Path, build_dir: Path) -> list[Path]:
    """Return all schema files below *directory*, excluding generated output."""
    return sorted(f for f in directory.rglob(f"*{SOURCE_SUFFIX}") if build_dir not in f.parents)


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    directory = Path(args.directory).resolve()
    config = _load_workspace(directory)
    if config is None:
        return 1

    schema_files = _schema_files(directory, (directory / config.build_directory).resolve())
    if not schema_files:
        print(f"No {SOURCE_SUFFIX} files found in the workspace.")
        return 0

    print(f"Checking {len(schema_files)} schema file(s)...")
    has_errors = False
    for source_file in schema_files:
        rel = source_file.relative_to(directory)
        try:
            parse(load_source(source_file))
        except SidlError as exc:
            print(f"Error: {rel}: {exc}", file=sys.stderr)
            has_errors = True

    if has_errors:
        return 1

    print("No issues found.")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    directory = Path(args.directory).resolve()
    config = _load_workspace(directory)
    if config is None:
        return 1

    build_dir = (directory / config.build_directory).resolve()
    schema_files = _schema_files(directory, build_dir)
    if not schema_files:
        print(f"No {SOURCE_SUFFIX} files found in the workspace.")
        return 0

    try:
        compiled = compile_files(schema_files, build_dir, directory, type_map=config.type_mappings)
    except CompilerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Generated {len(compiled)} module(s) in '{build_dir}'.")
    return 0


def _cmd_dump(args: argparse.Namespace) -> int:
    """Handle the dump subcommand."""
    source_file = Path(args.file)
    try:
        defs = parse(load_source(source_file))
    except SidlError as exc:
        print(f"Error: {source_file}: {exc}", file=sys.stderr)
        return 1

    print(serialize(defs, indent=2))
    return 0
