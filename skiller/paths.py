"""Path helpers shared by the scanner and the deactivation engine"""

from __future__ import annotations

import errno
import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def expand_home(path: str | Path, home: Path) -> Path:
    """Expand a leading ``~`` against an explicit home directory"""
    text = str(path)
    if text == "~":
        return Path(home)
    if text.startswith("~/"):
        return Path(home) / text[2:]
    return Path(text)


def contract_home(path: str | Path, home: Path) -> str:
    """Replace the home prefix with ``~`` for display"""
    text = str(path)
    home_text = str(home)
    if text == home_text:
        return "~"
    if text.startswith(home_text.rstrip(os.sep) + os.sep):
        return "~" + text[len(home_text.rstrip(os.sep)):]
    return text


def path_exists(path: Path) -> bool:
    """True if the path exists, following symlinks"""
    try:
        return path.exists()
    except OSError:
        return False


def entry_exists(path: Path) -> bool:
    """True if a directory entry exists, broken symlinks included"""
    return os.path.lexists(path)


def is_directory(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False


def is_symlink(path: Path) -> bool:
    try:
        return path.is_symlink()
    except OSError:
        return False


def resolve_canonical(path: Path) -> Path | None:
    """Resolve all symlinks, or None when the target is unreachable"""
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError):
        return None


def is_within(path: Path, root: Path) -> bool:
    """Containment test on path components, not string prefixes"""
    path = Path(path)
    root = Path(root)
    if path.is_relative_to(root):
        return True
    resolved_root = resolve_canonical(root)
    return resolved_root is not None and path.is_relative_to(resolved_root)


def move_path(src: Path, dst: Path) -> None:
    """Rename src to dst, copying across devices when rename can't"""
    try:
        os.rename(src, dst)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        logger.debug(f"Cross-device move {src} -> {dst}, copying instead")
        shutil.move(str(src), str(dst))


def remove_entry(path: Path) -> None:
    """Remove a symlink, file or directory tree"""
    if path.is_symlink() or path.is_file():
        path.unlink()
    else:
        shutil.rmtree(path)
