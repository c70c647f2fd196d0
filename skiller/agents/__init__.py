"""Supported coding agents and their skill directories"""

from .registry import AgentDescriptor, AGENT_TABLE, default_agents
from .catalog import AgentCatalog, AgentDir, SkillScope, ScopeFilter, SCOPES

__all__ = [
    "AgentDescriptor",
    "AGENT_TABLE",
    "default_agents",
    "AgentCatalog",
    "AgentDir",
    "SkillScope",
    "ScopeFilter",
    "SCOPES",
]
