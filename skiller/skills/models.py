"""Skill data types produced by scanning and merging"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from skiller.agents.catalog import SkillScope
from skiller.ledger.lock import LockEntry


@dataclass
class SkillManifest:
    """Front matter of a SKILL.md; unknown keys are kept in ``extra``"""
    name: str
    version: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    globs: str | list[str] | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class SkillRecord:
    """One skill entry found in one agent directory"""
    name: str
    path: Path
    scope: SkillScope
    owning_agent: str
    manifest: Optional[SkillManifest] = None
    lock_entry: Optional[LockEntry] = None
    is_symlink: bool = False
    canonical_path: Optional[Path] = None

    @property
    def identity(self) -> Path:
        return self.canonical_path or self.path


@dataclass
class MergedSkill:
    """A logical skill, possibly linked into several agents"""
    name: str
    path: Path
    scope: SkillScope
    agents: list[str] = field(default_factory=list)
    manifest: Optional[SkillManifest] = None
    lock_entry: Optional[LockEntry] = None
    is_symlink: bool = False
    canonical_path: Optional[Path] = None

    @property
    def identity(self) -> Path:
        return self.canonical_path or self.path

    @property
    def description(self) -> str:
        if self.manifest and self.manifest.description:
            return self.manifest.description
        return ""
