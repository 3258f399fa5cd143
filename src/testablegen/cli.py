#!/usr/bin/env python3
"""
Command line interface for testable peer expansion.

Usage:
    python -m testablegen <file.swift> [<file.swift> ...]
    # Or use the CLI entrypoint:
    testablegen <file.swift> [<file.swift> ...]

Every function marked `@Testable` or `@PrivateTestable` gets a public
`testable...` peer guarded by `#if TESTING`, written next to the original.

Examples:
    # Expand into a separate directory
    testablegen Sources/App/Model.swift -o Generated/

    # Print the expanded sources instead of writing files
    testablegen Sources/App/Model.swift --stdout

    # Guard peers with a different build flag
    testablegen Sources/App/Model.swift --flag UNIT_TESTS
"""

import argparse
import logging
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Optional

from .config import ExpansionConfig
from .expansion import expand_source
from .synthesis import SYNTHESIZERS
from .transformer import default_registry
from .writer import write_sources


def run_swift_format_on_file(file_path: Path) -> None:
    """
    Run swift-format in place on a single file.

    Args:
        file_path: Path to the file to format
    """
    subprocess.run(
        ["swift-format", "format", "--in-place", str(file_path)],
        capture_output=True,
        text=True,
    )


def output_name(file_name: str) -> str:
    """Name an input file is written under, relative to the output directory."""
    path = Path(file_name)
    if path.is_absolute() or ".." in path.parts:
        return path.name
    return path.as_posix()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="testablegen",
        description="Generate public testing peers for @Testable / @PrivateTestable Swift functions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Expand files into ./generated (default)
  testablegen Sources/App/Model.swift

  # Expand into a specific directory and format with swift-format
  testablegen Sources/App/Model.swift -o Generated/ --swift-format

  # Print all expanded files to stdout
  testablegen Sources/App/Model.swift --stdout
        """,
    )
    parser.add_argument("files", nargs="+", help="Swift source files to expand")
    parser.add_argument(
        "-o",
        "--output-dir",
        default="generated",
        help="Output directory for expanded files (default: ./generated)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print all expanded files to stdout with file headers instead of writing files",
    )
    parser.add_argument(
        "--flag",
        default=None,
        help="Build flag guarding generated peers (default: $TESTABLEGEN_BUILD_FLAG or TESTING)",
    )
    parser.add_argument(
        "--strategy",
        choices=sorted(SYNTHESIZERS),
        default=None,
        help="Synthesis strategy used to render peers (default: template)",
    )
    parser.add_argument(
        "--keep-markers",
        action="store_true",
        help="Leave the marker attributes in the expanded source",
    )
    parser.add_argument(
        "--swift-format",
        action="store_true",
        help="Run swift-format on the expanded files (works with both file output and --stdout)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every marker and peer")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ExpansionConfig.from_env(
            build_flag=args.flag,
            strategy=args.strategy,
            strip_markers=False if args.keep_markers else None,
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    registry = default_registry(config)

    print(f"Expanding {len(args.files)} file(s) with build flag '{config.build_flag}'...", file=sys.stderr)

    expanded: dict[str, str] = {}
    diagnostics = []
    total_markers = 0
    for file_name in args.files:
        try:
            source = Path(file_name).read_text()
        except OSError as exc:
            print(f"Error: could not read '{file_name}': {exc}", file=sys.stderr)
            sys.exit(1)

        expansion = expand_source(source, registry, config, path=file_name)
        total_markers += expansion.markers_found
        diagnostics.extend(expansion.diagnostics)
        expanded[output_name(file_name)] = expansion.source
        print(
            f"  {file_name}: {expansion.markers_found} marker(s), {len(expansion.peers)} peer(s)",
            file=sys.stderr,
        )

    for diagnostic in diagnostics:
        print(diagnostic.format(), file=sys.stderr)

    if not total_markers:
        print("\nError: No @Testable or @PrivateTestable markers found in the given files.", file=sys.stderr)
        sys.exit(1)

    if args.stdout:
        if args.swift_format:
            print("Running swift-format on expanded files...", file=sys.stderr)
            with tempfile.TemporaryDirectory() as tmpdir:
                for file_path in write_sources(Path(tmpdir), expanded):
                    run_swift_format_on_file(file_path)
                    name = file_path.relative_to(tmpdir).as_posix()
                    print(f"// File: {name}\n")
                    print(file_path.read_text())
                    print()  # Blank line between files
        else:
            for name in expanded:
                print(f"// File: {name}\n")
                print(expanded[name])
                print()  # Blank line between files
    else:
        output_dir = Path(args.output_dir)
        for file_path in write_sources(output_dir, expanded):
            print(f"  Wrote: {file_path}", file=sys.stderr)
            if args.swift_format:
                run_swift_format_on_file(file_path)
                print(f"  Formatted: {file_path}", file=sys.stderr)

    if diagnostics:
        print(f"\nExpansion finished with {len(diagnostics)} error(s)", file=sys.stderr)
        sys.exit(1)

    print("\nExpansion completed successfully!", file=sys.stderr)


if __name__ == "__main__":
    main()
