"""
Command-line interface for depgraph.

This module reads a resolved dependency tree from a JSON file, builds and
finalizes its dependency graph, and writes the Graphviz digraph to stdout
or a file.
"""

import argparse
import logging
import sys
from pathlib import Path

from colorama import Fore, Style, init

from depgraph import (
    DependencyGraph,
    GraphConfig,
    ImportanceFilter,
    WarningCollector,
    load_tree_file,
)
from depgraph.exceptions import DepGraphError, RenderError
from depgraph.graph.importance import DEFAULT_EXCLUDE_FRAGMENTS, parse_allowlist
from depgraph.resolver.tree_loader import parse_package_ref

HAS_COLOR = True


def _paint(color: str, msg: str) -> str:
    if HAS_COLOR:
        return f"{color}{msg}{Style.RESET_ALL}"
    return msg


# Status goes to stderr so the digraph can be piped from stdout.
def print_success(msg: str) -> None:
    """Print success message."""
    print(_paint(Fore.GREEN, f"[OK] {msg}"), file=sys.stderr)


def print_error(msg: str) -> None:
    """Print error message."""
    print(_paint(Fore.RED, f"[ERROR] {msg}"), file=sys.stderr)


def print_warning(msg: str) -> None:
    """Print warning message."""
    print(_paint(Fore.YELLOW, f"[WARN] {msg}"), file=sys.stderr)


def print_info(msg: str) -> None:
    """Print info message."""
    print(_paint(Fore.CYAN, msg), file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the depgraph command."""
    parser = argparse.ArgumentParser(
        prog="depgraph",
        description="Render a resolved dependency tree as a Graphviz digraph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the digraph to stdout
  %(prog)s tree.json

  # Pick the root and write to a file
  %(prog)s tree.json --root app@1.0.0 -o deps.dot

  # Only keep a few packages
  %(prog)s tree.json --keep app --keep serde

  # Render it
  %(prog)s tree.json | dot -Tpng -o deps.png
        """,
    )

    # === Input parameters ===
    input_group = parser.add_argument_group("Input Options")
    input_group.add_argument("tree_file", help="Resolved dependency tree (JSON)")
    input_group.add_argument(
        "--root",
        "-r",
        metavar="NAME@VERSION",
        help="Package to place at the root of the graph",
    )

    # === Filter parameters ===
    filter_group = parser.add_argument_group("Filter Options")
    filter_group.add_argument(
        "--keep",
        "-k",
        metavar="NAME",
        action="append",
        default=[],
        help="Keep this package when filtering (repeatable)",
    )
    filter_group.add_argument(
        "--keep-file",
        metavar="FILE",
        help="File with one package name to keep per line",
    )
    filter_group.add_argument(
        "--exclude-fragment",
        metavar="TEXT",
        action="append",
        help=(
            "Drop packages whose name contains TEXT when filtering "
            f"(repeatable, default: {', '.join(DEFAULT_EXCLUDE_FRAGMENTS)})"
        ),
    )
    filter_group.add_argument(
        "--no-filter",
        action="store_true",
        help="Disable the importance filter",
    )

    # === Style parameters ===
    style_group = parser.add_argument_group("Style Options")
    style_group.add_argument(
        "--include-versions",
        action="store_true",
        help="Add versions to node labels",
    )
    style_group.add_argument("--build-style", metavar="STYLE", default="solid")
    style_group.add_argument("--dev-style", metavar="STYLE", default="dashed")
    style_group.add_argument(
        "--optional-style", metavar="STYLE", default="dotted"
    )
    style_group.add_argument("--build-color", metavar="COLOR", default="black")
    style_group.add_argument("--dev-color", metavar="COLOR", default="blue")
    style_group.add_argument("--optional-color", metavar="COLOR", default="red")

    # === Output parameters ===
    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "--output", "-o", metavar="FILE", help="Write the digraph to FILE"
    )
    output_group.add_argument(
        "--stats", action="store_true", help="Print graph statistics"
    )
    output_group.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )
    output_group.add_argument(
        "--no-warnings", action="store_true", help="Suppress warnings"
    )
    output_group.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    return parser


def build_config(args: argparse.Namespace) -> GraphConfig:
    """Build the rendering configuration from parsed arguments."""
    return GraphConfig(
        build_lines=GraphConfig.line_fragment(args.build_style),
        dev_lines=GraphConfig.line_fragment(args.dev_style),
        optional_lines=GraphConfig.line_fragment(args.optional_style),
        build_color=GraphConfig.color_fragment(args.build_color),
        dev_color=GraphConfig.color_fragment(args.dev_color),
        optional_color=GraphConfig.color_fragment(args.optional_color),
        include_versions=args.include_versions,
        filter_enabled=not args.no_filter,
    )


def build_filter(args: argparse.Namespace):
    """Build the importance filter, or None when nothing is to be kept."""
    names = list(args.keep)
    if args.keep_file:
        keep_path = Path(args.keep_file)
        if not keep_path.exists():
            raise FileNotFoundError(f"Keep file not found: {args.keep_file}")
        names.extend(parse_allowlist(keep_path.read_text(encoding="utf-8")))
    if not names:
        return None
    fragments = args.exclude_fragment
    if fragments is None:
        fragments = DEFAULT_EXCLUDE_FRAGMENTS
    return ImportanceFilter(names, fragments)


def main() -> None:
    """
    CLI main entry point.

    Usage:
        depgraph tree.json
        depgraph tree.json --root app@1.0.0 --include-versions -o deps.dot
        depgraph tree.json --keep app --keep serde
    """
    args = build_parser().parse_args()

    if args.no_color:
        global HAS_COLOR
        HAS_COLOR = False
    else:
        init(autoreset=True)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        tree_path = Path(args.tree_file)
        if not tree_path.exists():
            print_error(f"File not found: {args.tree_file}")
            sys.exit(1)

        root = None
        if args.root:
            try:
                root = parse_package_ref(args.root)
            except ValueError as e:
                print_error(str(e))
                sys.exit(1)

        importance = build_filter(args)
        config = build_config(args)
        warnings = WarningCollector()

        print_info(f"Reading dependency tree from: {tree_path}")
        graph = load_tree_file(tree_path, config, warnings)
        if root is not None and not graph.set_root(*root):
            warnings.add_missing_root_warning(*root)

        print_info(
            f"Loaded {len(graph)} packages and {len(graph.edges)} dependencies."
        )
        write_graph(graph, args.output, importance)

        if args.stats:
            show_statistics(graph)
        if not args.no_warnings:
            show_warnings(warnings)

    except FileNotFoundError as e:
        print_error(str(e))
        sys.exit(1)
    except DepGraphError as e:
        print_error(f"Dependency graph failed: {e}")
        sys.exit(1)


def write_graph(graph: DependencyGraph, output_file, importance) -> None:
    """Render ``graph`` to ``output_file``, or stdout when it is None."""
    if output_file is None:
        graph.render_to(sys.stdout, importance)
        sys.stdout.flush()
    else:
        output_path = Path(output_file)
        # Render fully before touching the file so a failure leaves nothing behind.
        text = graph.render(importance)
        try:
            output_path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise RenderError(f"render failed: {e}") from e
        print_success(f"Wrote {output_path}")
    print_success(
        f"Rendered {len(graph)} packages and {len(graph.edges)} dependencies."
    )


def show_statistics(graph: DependencyGraph) -> None:
    """Print graph statistics."""
    print_info("\nGraph statistics:")
    for key, value in graph.get_statistics().items():
        print(f"  {key}: {value}", file=sys.stderr)


def show_warnings(warnings: WarningCollector) -> None:
    """Show collected warnings."""
    collected = warnings.get_all()
    if collected:
        print_warning(f"{len(collected)} warning(s):")
        for i, warning in enumerate(collected, 1):
            print(f"  {i}. {warning.message}", file=sys.stderr)


if __name__ == "__main__":
    main()
