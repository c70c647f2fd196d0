"""Disabled-skill ledger (~/.agents/.disabled-skills.json)"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from .lock import load_json_file, write_json_file

logger = logging.getLogger(__name__)

DISABLED_VERSION = 1


@dataclass
class AgentLink:
    """An agent directory entry that was moved into quarantine"""
    path: str
    was_symlink: bool

    def to_dict(self) -> dict:
        return {"path": self.path, "wasSymlink": self.was_symlink}

    @classmethod
    def from_dict(cls, data: dict) -> "AgentLink":
        return cls(path=data["path"], was_symlink=bool(data.get("wasSymlink", False)))


@dataclass
class DisabledEntry:
    """Everything needed to undo one deactivation"""
    canonical_path: str
    agent_links: dict[str, AgentLink] = field(default_factory=dict)  # "agentId:scope" -> link
    disabled_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict:
        return {
            "canonicalPath": self.canonical_path,
            "agentLinks": {key: link.to_dict() for key, link in self.agent_links.items()},
            "disabledAt": self.disabled_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DisabledEntry":
        links = data.get("agentLinks")
        if not isinstance(links, dict):
            links = {}
        disabled_at = data.get("disabledAt")
        return cls(
            canonical_path=data["canonicalPath"],
            agent_links={
                key: AgentLink.from_dict(link)
                for key, link in links.items()
                if isinstance(link, dict) and isinstance(link.get("path"), str)
            },
            disabled_at=str(disabled_at) if disabled_at else "",
        )


@dataclass
class DisabledLedger:
    version: int = DISABLED_VERSION
    entries: dict[str, DisabledEntry] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "skills": {name: entry.to_dict() for name, entry in self.entries.items()},
        }


class DisableManifestStore:
    """Reads and writes the quarantine ledger; reads never raise"""

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> DisabledLedger:
        data = load_json_file(self.path)
        if not isinstance(data, dict) or not isinstance(data.get("skills"), dict):
            return DisabledLedger()

        entries = {}
        for name, raw in data["skills"].items():
            if not isinstance(raw, dict) or not isinstance(raw.get("canonicalPath"), str):
                logger.warning(f"Dropping malformed disabled entry '{name}' from {self.path}")
                continue
            entries[name] = DisabledEntry.from_dict(raw)
        version = data.get("version")
        return DisabledLedger(
            version=version if isinstance(version, int) else DISABLED_VERSION,
            entries=entries,
        )

    def write(self, ledger: DisabledLedger) -> None:
        write_json_file(self.path, ledger.to_dict())
        logger.info(f"Wrote disabled ledger with {len(ledger.entries)} entries to {self.path}")
