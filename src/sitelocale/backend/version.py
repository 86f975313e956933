"""Report which build of the site is running, for ``/health`` and the CLI."""

from __future__ import annotations

import re
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "sitelocale"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"

_TABLE_HEADER = re.compile(r"^\s*\[{1,2}\s*([^\]]+?)\s*\]{1,2}\s*(?:#.*)?$", re.MULTILINE)
_VERSION_KEY = re.compile(r"""^\s*version\s*=\s*(["'])(?P<value>[^"']*)\1""", re.MULTILINE)


def _project_table(text: str) -> str | None:
    headers = list(_TABLE_HEADER.finditer(text))
    for index, header in enumerate(headers):
        if header.group(1) != "project":
            continue
        end = headers[index + 1].start() if index + 1 < len(headers) else len(text)
        return text[header.end():end]
    return None


def read_pyproject_version(pyproject_path: Path) -> str:
    """Extract ``version`` from the ``[project]`` table of a source checkout.

    Keys of the same name under ``[tool.*]`` or any other table are skipped.
    """

    try:
        text = pyproject_path.read_text(encoding="utf-8")
    except FileNotFoundError as error:  # pragma: no cover - source checkouts ship one
        raise RuntimeError(f"Unable to locate project metadata at {pyproject_path}") from error

    table = _project_table(text)
    match = _VERSION_KEY.search(table) if table is not None else None
    if match is None or not match.group("value"):
        raise RuntimeError(f"No project version declared in {pyproject_path.name}")
    return match.group("value")


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Installed distribution version, or the checkout's declared one."""

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return read_pyproject_version(PYPROJECT_PATH)


__all__ = ["PACKAGE_NAME", "PYPROJECT_PATH", "get_project_version", "read_pyproject_version"]
