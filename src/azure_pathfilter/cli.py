"""CLI entrypoint for generating Azure DevOps path filter files."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .core import generate_path_filters
from .descriptors import DescriptorReadError
from .settings import ConfigError, load_settings
from .summary import render_summary


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "-r",
        "--root-dir",
        type=Path,
        default=Path("."),
        help="Root directory to search from",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file (default: <root-dir>/.azure-pathfilter.yml)",
    )
    parser.add_argument(
        "--root-marker",
        default=None,
        help="Directory name that marks the repository root (default: --root-dir itself)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=None,
        help="Reference hops to follow beyond each pipeline's own projects (default: 1)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the filters without writing side-car files",
    )
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true")
    verbosity.add_argument("-q", "--quiet", action="store_true")
    return parser.parse_args(argv)


def _configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose, args.quiet)

    root = args.root_dir.resolve()
    if not root.is_dir():
        print(f"ERROR: Root directory not found: {root}", file=sys.stderr)
        return 1

    try:
        settings = load_settings(args.config, root=root).with_overrides(
            root_marker=args.root_marker,
            closure_depth=args.depth,
        )
        report = generate_path_filters(root, settings, write=not args.dry_run)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except DescriptorReadError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"ERROR: Failed to write path filter: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        print(render_summary(report), end="")
        if not args.dry_run and report["pipelines"]:
            print("Done! Now it's time to paste the path filters into Azure DevOps.")

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
