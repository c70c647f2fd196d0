"""Merge per-agent scan records into logical skills"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .models import MergedSkill, SkillRecord


def merge_skills(records: Iterable[SkillRecord]) -> list[MergedSkill]:
    """Group records by canonical path (falling back to their own path).

    The first record of a group seeds the result; later ones add their agent
    and fill manifest or lock entry only where still missing. Output keeps the
    order in which groups were first seen.
    """
    merged: dict[Path, MergedSkill] = {}

    for record in records:
        key = record.identity
        existing = merged.get(key)
        if existing is None:
            merged[key] = MergedSkill(
                name=record.name,
                path=record.path,
                scope=record.scope,
                agents=[record.owning_agent],
                manifest=record.manifest,
                lock_entry=record.lock_entry,
                is_symlink=record.is_symlink,
                canonical_path=record.canonical_path,
            )
            continue

        if record.owning_agent not in existing.agents:
            existing.agents.append(record.owning_agent)
        if existing.manifest is None and record.manifest is not None:
            existing.manifest = record.manifest
        if existing.lock_entry is None and record.lock_entry is not None:
            existing.lock_entry = record.lock_entry

    return list(merged.values())
