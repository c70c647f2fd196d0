"""Collaborators outside skiller: the skills CLI and the search API"""

from .skills_cli import SkillsCLI, CommandResult, scope_and_agent_args
from .search import SearchResult, search_skills, normalize_result

__all__ = [
    "SkillsCLI",
    "CommandResult",
    "scope_and_agent_args",
    "SearchResult",
    "search_skills",
    "normalize_result",
]
