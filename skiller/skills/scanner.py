"""Scan one agent skill directory into SkillRecords"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from skiller.agents.catalog import SkillScope
from skiller.ledger.lock import LockLedger, find_lock_entry
from skiller.paths import is_directory, is_symlink, resolve_canonical

from .manifest import parse_manifest
from .models import SkillRecord

logger = logging.getLogger(__name__)

# Children starting with this prefix are bookkeeping (e.g. the .disabled quarantine)
RESERVED_PREFIX = "."
QUARANTINE_DIRNAME = ".disabled"


def is_reserved(name: str) -> bool:
    return name.startswith(RESERVED_PREFIX)


def _scan_child(
    child: Path,
    scope: SkillScope,
    agent_id: str,
    lock: Optional[LockLedger],
) -> SkillRecord | None:
    # Follows symlinks, so a link to a directory counts
    if not child.is_dir():
        return None

    symlink = is_symlink(child)
    return SkillRecord(
        name=child.name,
        path=child,
        scope=scope,
        owning_agent=agent_id,
        manifest=parse_manifest(child),
        lock_entry=find_lock_entry(lock, child.name) if lock is not None else None,
        is_symlink=symlink,
        canonical_path=resolve_canonical(child) if symlink else child,
    )


def scan_skills_directory(
    directory: Path,
    scope: SkillScope,
    agent_id: str,
    lock: Optional[LockLedger] = None,
) -> list[SkillRecord]:
    """List the skills directly under one agent directory.

    Never raises: a missing directory gives an empty list and any child that
    can't be inspected is skipped.
    """
    directory = Path(directory)
    if not is_directory(directory):
        return []

    try:
        children = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.warning(f"Cannot list skills in {directory}: {e}")
        return []

    records: list[SkillRecord] = []
    for child in children:
        if is_reserved(child.name):
            continue
        try:
            record = _scan_child(child, scope, agent_id, lock)
        except OSError as e:
            logger.debug(f"Skipping {child}: {e}")
            continue
        if record is not None:
            records.append(record)

    logger.debug(f"Scanned {directory} ({agent_id}, {scope}): {len(records)} skills")
    return records

