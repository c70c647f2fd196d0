"""Skill lock ledger (~/.agents/.skill-lock.json).

The lock file is owned by the external skills package manager; skiller only
reads it for provenance and never fails on it. Any problem reading it yields
an empty version-3 ledger.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

LOCK_VERSION = 3


@dataclass
class LockEntry:
    """Where an installed skill came from"""
    source: str = ""  # "owner/repo"
    source_type: str = ""  # "github" | "local" | "direct-url"
    source_url: str = ""
    content_hash: Optional[str] = None
    installed_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict:
        data = {
            "source": self.source,
            "sourceType": self.source_type,
            "sourceUrl": self.source_url,
        }
        if self.content_hash is not None:
            data["skillFolderHash"] = self.content_hash
        data["installedAt"] = self.installed_at
        data["updatedAt"] = self.updated_at
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "LockEntry":
        return cls(
            source=data.get("source") or "",
            source_type=data.get("sourceType") or "",
            source_url=data.get("sourceUrl") or "",
            content_hash=data.get("skillFolderHash"),
            installed_at=data.get("installedAt") or "",
            updated_at=data.get("updatedAt") or "",
        )


@dataclass
class LockLedger:
    version: int = LOCK_VERSION
    entries: dict[str, LockEntry] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "skills": {name: entry.to_dict() for name, entry in self.entries.items()},
        }


def load_json_file(path: Path) -> Any:
    """Parsed JSON, or None when the file is missing or unreadable"""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as e:
        logger.debug(f"Ignoring unreadable ledger {path}: {e}")
        return None


def write_json_file(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class LockStore:
    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> LockLedger:
        data = load_json_file(self.path)
        if not isinstance(data, dict) or not isinstance(data.get("skills"), dict):
            return LockLedger()

        entries = {}
        for name, raw in data["skills"].items():
            if isinstance(raw, dict):
                entries[name] = LockEntry.from_dict(raw)
        version = data.get("version")
        return LockLedger(
            version=version if isinstance(version, int) else LOCK_VERSION,
            entries=entries,
        )

    def write(self, ledger: LockLedger) -> None:
        write_json_file(self.path, ledger.to_dict())
        logger.info(f"Wrote lock ledger with {len(ledger.entries)} entries to {self.path}")


def find_lock_entry(ledger: LockLedger, name: str) -> LockEntry | None:
    """Exact match first, then the first case-insensitive match"""
    if name in ledger.entries:
        return ledger.entries[name]

    lower = name.lower()
    for key, entry in ledger.entries.items():
        if key.lower() == lower:
            return entry
    return None


def get_skill_source(entry: LockEntry) -> str:
    return entry.source or entry.source_url or "unknown"


def lock_entries(ledger: LockLedger) -> list[tuple[str, LockEntry]]:
    return list(ledger.entries.items())


def recent_entries(ledger: LockLedger, limit: int = 5) -> list[tuple[str, LockEntry]]:
    """Most recently updated entries first; ISO timestamps sort lexically"""
    ordered = sorted(ledger.entries.items(), key=lambda item: item[1].updated_at, reverse=True)
    return ordered[:limit]
