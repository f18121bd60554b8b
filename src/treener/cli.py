"""
Command-line interface for TreeNER.

Provides subcommands for labeling tree files (one file or a whole treebank
directory) and for showing the labels already present in a tree. This
module is the entry point referenced in pyproject.toml as
``treener.cli:main``.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import structlog

from .auto_ner import turkish_auto_ner
from .gazetteer import GazetteerLoadError, load_gazetteers
from .models import NamedEntityType, NerConfig, NerReport
from .tree_io import TreeLoadError, format_labels, iter_tree_files, load_tree, save_tree

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# ANSI color helpers
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if stdout appears to support ANSI color codes."""
    if not hasattr(sys.stdout, "isatty"):
        return False
    return sys.stdout.isatty()


_COLOR_ENABLED: bool | None = None


def _color(text: str, code: str) -> str:
    """Wrap *text* in ANSI escape codes if the terminal supports it."""
    global _COLOR_ENABLED
    if _COLOR_ENABLED is None:
        _COLOR_ENABLED = _supports_color()
    if not _COLOR_ENABLED:
        return text
    return f"\033[{code}m{text}\033[0m"


def _red(text: str) -> str:
    return _color(text, "31")


def _green(text: str) -> str:
    return _color(text, "32")


def _bold(text: str) -> str:
    return _color(text, "1")


def _dim(text: str) -> str:
    return _color(text, "2")


# ---------------------------------------------------------------------------
# Output formatting helpers
# ---------------------------------------------------------------------------

def _print_header(text: str) -> None:
    """Print a section header with visual separation."""
    print()
    print(_bold(f"  {text}"))
    print(_dim(f"  {'-' * len(text)}"))


def _print_counts(totals: dict[NamedEntityType, int]) -> None:
    """Print the number of labels written per category."""
    for category in NamedEntityType:
        count = totals.get(category, 0)
        line = f"  {category.value:<14} {count}"
        print(line if count else _dim(line))


def _add_counts(totals: dict[NamedEntityType, int], report: NerReport) -> None:
    for category, count in report.assigned.items():
        totals[category] = totals.get(category, 0) + count


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------

def _config_from_args(args: argparse.Namespace) -> NerConfig:
    return NerConfig(word_layer=args.view, locale=args.locale)


def _handle_label(args: argparse.Namespace) -> int:
    """Label one tree file, or every tree file of a treebank directory."""
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input not found: {input_path}")
        return 1
    if input_path.is_file() and args.output and Path(args.output).is_dir():
        print(f"Error: Output for a single tree file must be a file, not a directory: {args.output}")
        return 1

    config = _config_from_args(args)
    gazetteers = load_gazetteers(args.gazetteer_dir, locale=config.locale)

    if input_path.is_dir():
        sources = list(iter_tree_files(input_path, args.pattern))
        output_dir = Path(args.output) if args.output else input_path
        output_dir.mkdir(parents=True, exist_ok=True)
        destinations = [output_dir / source.name for source in sources]
    else:
        sources = [input_path]
        destinations = [Path(args.output) if args.output else input_path]

    _print_header(f"Labeling {len(sources)} tree(s)")

    totals: dict[NamedEntityType, int] = {}
    failures = 0
    for source, destination in zip(sources, destinations):
        try:
            tree = load_tree(source, default_layer=config.word_layer)
        except TreeLoadError as exc:
            failures += 1
            logger.error("Tree load failed", path=str(source), error=str(exc))
            print(f"  {_red('Skipped')} {source.name}: {exc}")
            continue

        auto_ner = turkish_auto_ner(
            gazetteers,
            config=config,
            saver=lambda labeled, dest=destination: save_tree(labeled, dest),
        )
        report = auto_ner.auto_ner(tree)
        _add_counts(totals, report)
        logger.info(
            "Tree labeled",
            path=str(source),
            output=str(destination),
            leaves=len(report.labels),
            entities=len(report.entities()),
        )

    _print_header("Labels written")
    _print_counts(totals)
    print()
    if failures:
        print(f"  {_red(f'{failures} tree(s) could not be loaded.')}")
        return 1
    print(f"  {_green('Done.')}")
    return 0


def _handle_show(args: argparse.Namespace) -> int:
    """Print the leaves of a tree with their current labels."""
    tree = load_tree(args.input, default_layer=args.view)
    print(format_labels(tree, view=args.view))
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="treener",
        description="TreeNER: rule-based named-entity labeling of parse tree leaves.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- label ---
    label_parser = subparsers.add_parser(
        "label",
        help="Label the leaves of a tree file or of every tree in a directory",
    )
    label_parser.add_argument(
        "input",
        help="Path to a tree file or a treebank directory",
    )
    label_parser.add_argument(
        "--output",
        default=None,
        help="Output file (or directory for treebank input); default overwrites the input",
    )
    label_parser.add_argument(
        "--gazetteer-dir",
        default=None,
        help="Directory holding gazetteer-person.txt, gazetteer-location.txt "
             "and gazetteer-organization.txt",
    )
    label_parser.add_argument(
        "--pattern",
        default="*",
        help="Glob selecting tree files inside a treebank directory (default: *)",
    )
    _add_view_arguments(label_parser)

    # --- show ---
    show_parser = subparsers.add_parser(
        "show",
        help="Print each leaf of a tree with its named-entity label",
    )
    show_parser.add_argument(
        "input",
        help="Path to the tree file",
    )
    _add_view_arguments(show_parser)

    return parser


def _add_view_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "--view",
        default="turkish",
        help="Leaf layer holding the words to label (default: turkish)",
    )
    subparser.add_argument(
        "--locale",
        default="tr",
        help="Locale used to lowercase words before lookup (default: tr)",
    )


def _get_version() -> str:
    """Return the package version string."""
    from . import __version__
    return __version__


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    """
    Main entry point for the TreeNER CLI.

    Parses arguments, dispatches to the appropriate subcommand handler,
    and exits with the appropriate code.

    Args:
        argv: Optional argument list for testing. Defaults to sys.argv[1:].
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    # Dispatch table
    handlers = {
        "label": _handle_label,
        "show": _handle_show,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        exit_code = handler(args)
        sys.exit(exit_code)
    except (FileNotFoundError, TreeLoadError, GazetteerLoadError) as exc:
        print(f"\nError: {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(130)


if __name__ == "__main__":
    main()
