"""
Construction-plan files — where the game looks for them and how they are written.

The game reads player construction plans from
  <Documents>/Egosoft/X4/<steam id>/constructionplan/
(or ~/.config/EgoSoft/X4/<steam id>/ on Linux).  When no such folder
exists, plans are written to the current directory instead.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path


log = logging.getLogger(__name__)

_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


class PlanExistsError(Exception):
    """Raised when a plan file already exists and overwriting was not allowed."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File '{path.name}' already exists in {path.parent}")


def _game_roots(home: Path) -> list[Path]:
    return [
        home / "Documents" / "Egosoft" / "X4",
        home / ".config" / "EgoSoft" / "X4",
    ]


def find_plan_dir(home: Path | None = None) -> Path | None:
    """Return the constructionplan folder of the first numeric profile, or None."""
    for root in _game_roots(home or Path.home()):
        if not root.is_dir():
            continue
        for d in sorted(root.iterdir()):
            if d.is_dir() and d.name.isdigit():
                return d / "constructionplan"
    return None


def safe_filename(name: str) -> str:
    """Replace characters that are not allowed in file names with '_'."""
    return _INVALID_FILENAME_CHARS.sub("_", name)


def plan_path(plan_name: str, target_dir: Path) -> Path:
    return target_dir / f"{safe_filename(plan_name)}.xml"


def write_plan(
    xml: str,
    plan_name: str,
    target_dir: Path | None = None,
    *,
    overwrite: bool = False,
) -> Path:
    """Write a plan to ``<target_dir>/<safe name>.xml`` and return the path.

    Without *target_dir* the game's plan folder is used, falling back to
    the current directory.

    Raises
    ------
    PlanExistsError
        If the file exists and *overwrite* is false.
    """
    if target_dir is None:
        target_dir = find_plan_dir()
        if target_dir is None:
            target_dir = Path.cwd()
            log.warning("Could not find the X4 profile folder, saving locally")

    path = plan_path(plan_name, target_dir)
    if path.exists() and not overwrite:
        raise PlanExistsError(path)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(xml, encoding="utf-8")
    log.info("Saved plan '%s' to %s", plan_name, path)
    return path
