"""Agent detection and skill directory lookup"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from skiller.agents.registry import AgentDescriptor
from skiller.paths import is_directory

logger = logging.getLogger(__name__)

SkillScope = Literal["global", "project"]
ScopeFilter = Literal["global", "project", "all"]
SCOPES: tuple[SkillScope, ...] = ("global", "project")


@dataclass(frozen=True)
class AgentDir:
    """An existing skill directory for one agent and scope"""
    agent_id: str
    scope: SkillScope
    path: Path


class AgentCatalog:
    """Answers which agents are installed and where their skills live"""

    def __init__(self, agents: list[AgentDescriptor], project_root: Path | None = None):
        self.agents = list(agents)
        self.project_root = Path(project_root) if project_root else None

    def detected(self) -> list[AgentDescriptor]:
        """Agents whose installed-detection predicate holds, in registry order"""
        found = [agent for agent in self.agents if agent.is_installed()]
        logger.debug(f"Detected {len(found)} of {len(self.agents)} agents")
        return found

    def get(self, agent_id: str) -> AgentDescriptor | None:
        for agent in self.agents:
            if agent.id == agent_id:
                return agent
        return None

    def display_name(self, agent_id: str) -> str:
        agent = self.get(agent_id)
        return agent.display_name if agent else agent_id

    def skills_dir(self, agent: AgentDescriptor, scope: SkillScope) -> Path | None:
        """Base skill directory for an agent, None for project scope without a project"""
        if scope == "global":
            return agent.global_skills_dir
        if self.project_root is None:
            return None
        return self.project_root / agent.project_skills_dir

    def base_dirs(self, agent: AgentDescriptor) -> list[tuple[SkillScope, Path]]:
        """Global and project directories of an agent, whether or not they exist"""
        dirs = []
        for scope in SCOPES:
            base = self.skills_dir(agent, scope)
            if base is not None:
                dirs.append((scope, base))
        return dirs

    def active_dirs(self, scope: ScopeFilter = "all") -> list[AgentDir]:
        """Existing skill directories of installed agents for a scope filter"""
        dirs: list[AgentDir] = []
        for agent in self.detected():
            for dir_scope, base in self.base_dirs(agent):
                if scope != "all" and scope != dir_scope:
                    continue
                if is_directory(base):
                    dirs.append(AgentDir(agent_id=agent.id, scope=dir_scope, path=base))
        return dirs
