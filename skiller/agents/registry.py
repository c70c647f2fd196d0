"""Static registry of supported coding agents and their skill directories"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from skiller.paths import path_exists


@dataclass(frozen=True)
class AgentDescriptor:
    """One coding agent and where it looks for skills"""
    id: str
    display_name: str
    project_skills_dir: str  # relative to the project root
    global_skills_dir: Path
    detect: Callable[[], bool]

    def is_installed(self) -> bool:
        try:
            return bool(self.detect())
        except Exception:
            return False


# (id, display name, project dir, global dir under home, detection marker under home)
# A marker of None means the agent is always considered installed.
AGENT_TABLE: list[tuple[str, str, str, str, str | None]] = [
    ("claude-code", "Claude Code", ".claude/skills", ".claude/skills", ".claude"),
    ("cursor", "Cursor", ".cursor/skills", ".cursor/skills", ".cursor"),
    ("windsurf", "Windsurf", ".windsurf/skills", ".codeium/windsurf/skills", ".codeium/windsurf"),
    ("github-copilot", "GitHub Copilot", ".agents/skills", ".copilot/skills", ".copilot"),
    ("amp", "Amp", ".agents/skills", ".amp/skills", ".amp"),
    ("codex", "Codex", ".agents/skills", ".codex/skills", ".codex"),
    ("gemini-cli", "Gemini CLI", ".agents/skills", ".gemini/skills", ".gemini"),
    ("aider", "Aider", ".aider/skills", ".aider/skills", ".aider"),
    ("cline", "Cline", ".cline/skills", ".cline/skills", ".cline"),
    ("roo-code", "Roo Code", ".roo/skills", ".roo/skills", ".roo"),
    ("continue", "Continue", ".continue/skills", ".continue/skills", ".continue"),
    ("zed", "Zed", ".zed/skills", ".zed/skills", ".zed"),
    ("void", "Void", ".void/skills", ".void/skills", ".void"),
    ("trae", "Trae", ".trae/skills", ".trae/rules/skills", ".trae"),
    ("augment", "Augment", ".augment/skills", ".augment/skills", ".augment"),
    ("opencode", "OpenCode", ".opencode/skills", ".opencode/skills", ".opencode"),
    ("kilo-code", "Kilo Code", ".kilo/skills", ".kilo/skills", ".kilo"),
    ("junie", "Junie", ".junie/skills", ".junie/skills", ".junie"),
    ("amazon-q", "Amazon Q", ".amazonq/skills", ".amazonq/skills", ".amazonq"),
    ("tabnine", "Tabnine", ".tabnine/skills", ".tabnine/skills", ".tabnine"),
    ("codeium", "Codeium", ".codeium/skills", ".codeium/skills", ".codeium"),
    ("sourcegraph-cody", "Sourcegraph Cody", ".cody/skills", ".cody/skills", ".cody"),
    ("supermaven", "Supermaven", ".supermaven/skills", ".supermaven/skills", ".supermaven"),
    ("double", "Double", ".double/skills", ".double/skills", ".double"),
    ("pear-ai", "Pear AI", ".pear/skills", ".pear/skills", ".pear"),
    ("cloi", "Cloi", ".cloi/skills", ".cloi/skills", ".cloi"),
    ("aide", "Aide", ".aide/skills", ".aide/skills", ".aide"),
    ("melty", "Melty", ".melty/skills", ".melty/skills", ".melty"),
    ("boltai", "Bolt AI", ".bolt/skills", ".bolt/skills", ".bolt"),
    ("lovable", "Lovable", ".lovable/skills", ".lovable/skills", ".lovable"),
    ("v0", "v0", ".v0/skills", ".v0/skills", ".v0"),
    ("replit", "Replit Agent", ".replit/skills", ".replit/skills", ".replit"),
    ("devin", "Devin", ".devin/skills", ".devin/skills", ".devin"),
    ("claude-desktop", "Claude Desktop (MCP)", ".claude-desktop/skills", ".claude-desktop/skills", ".claude-desktop"),
    ("chatgpt-desktop", "ChatGPT Desktop", ".chatgpt/skills", ".chatgpt/skills", ".chatgpt"),
    ("warp", "Warp", ".warp/skills", ".warp/skills", ".warp"),
    ("fig", "Fig", ".fig/skills", ".fig/skills", ".fig"),
    ("custom", "Custom / Universal", ".agents/skills", ".agents/skills", None),
]


def _marker_detector(marker: Path) -> Callable[[], bool]:
    return lambda: path_exists(marker)


def _always() -> bool:
    return True


def default_agents(home: Path) -> list[AgentDescriptor]:
    """Build the agent registry rooted at a home directory"""
    home = Path(home)
    agents = []
    for agent_id, display_name, project_dir, global_dir, marker in AGENT_TABLE:
        agents.append(AgentDescriptor(
            id=agent_id,
            display_name=display_name,
            project_skills_dir=project_dir,
            global_skills_dir=home / global_dir,
            detect=_marker_detector(home / marker) if marker else _always,
        ))
    return agents
