#!/usr/bin/env python3
"""Local entrypoint to generate path filter files from a source checkout.

Usage:
  python scripts/generate_path_filters.py --root-dir . [--dry-run] [--json]

This calls the same cli.main that the installed ``azure-pathfilter`` script uses.
"""

from __future__ import annotations

from azure_pathfilter.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
