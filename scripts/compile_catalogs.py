#!/usr/bin/env python3
"""Compile the ``locale/*/LC_MESSAGES/*.po`` sources into gettext ``.mo`` files."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from sitelocale.backend.app.localization.catalog import LOCALE_DIRECTORY, compile_catalogs


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "localedir",
        nargs="?",
        type=Path,
        default=LOCALE_DIRECTORY,
        help="Catalogue root (defaults to the repository locale directory)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    compiled = compile_catalogs(args.localedir)
    if not compiled:
        print(f"No .po catalogues found under {args.localedir}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
