"""Skill manager - discovers installed skills across every agent directory"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from skiller.agents.catalog import AgentCatalog, ScopeFilter
from skiller.config.schema import SkillerConfig
from skiller.ledger.disabled import DisableManifestStore
from skiller.ledger.lock import LockStore

from .merger import merge_skills
from .models import MergedSkill, SkillRecord
from .scanner import scan_skills_directory

logger = logging.getLogger(__name__)


@dataclass
class AgentUsage:
    """How many skills one detected agent sees, per scope"""
    agent_id: str
    display_name: str
    global_count: int = 0
    project_count: int = 0


class SkillManager:
    """
    Discovers skills installed for the detected agents.

    Every (agent, scope) directory that exists is scanned and the results
    are merged by canonical path, so a skill symlinked into five agents shows
    up once with five agents. Nothing is cached: each call rescans the disk.
    """

    def __init__(self, config: SkillerConfig, catalog: AgentCatalog | None = None):
        self.config = config
        self.catalog = catalog or AgentCatalog(config.agents, config.project_root)
        self.lock_store = LockStore(config.lock_path)
        self.disabled_store = DisableManifestStore(config.disabled_path)

    def scan(self, scope: ScopeFilter = "all") -> list[SkillRecord]:
        """Raw per-agent records, before merging"""
        lock = self.lock_store.read()
        records: list[SkillRecord] = []
        for agent_dir in self.catalog.active_dirs(scope):
            records.extend(
                scan_skills_directory(agent_dir.path, agent_dir.scope, agent_dir.agent_id, lock)
            )
        return records

    def discover(self, scope: ScopeFilter = "all") -> list[MergedSkill]:
        skills = merge_skills(self.scan(scope))
        logger.info(f"Discovered {len(skills)} skills ({scope})")
        return skills

    def active(self, scope: ScopeFilter = "all") -> list[MergedSkill]:
        """Discovered skills that aren't recorded as disabled"""
        disabled = self.disabled_store.read().entries
        return [skill for skill in self.discover(scope) if skill.name not in disabled]

    def get(self, name: str, scope: ScopeFilter = "all") -> MergedSkill | None:
        for skill in self.discover(scope):
            if skill.name == name:
                return skill
        return None

    def agent_usage(self, skills: list[MergedSkill] | None = None) -> list[AgentUsage]:
        """Per-agent skill counts for the detected agents"""
        if skills is None:
            skills = self.discover()
        usage = []
        for agent in self.catalog.detected():
            row = AgentUsage(agent_id=agent.id, display_name=agent.display_name)
            for skill in skills:
                if agent.id not in skill.agents:
                    continue
                if skill.scope == "global":
                    row.global_count += 1
                else:
                    row.project_count += 1
            usage.append(row)
        return usage
