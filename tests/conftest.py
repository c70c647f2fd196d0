"""Shared fixtures: a fake home directory with a few agents and a project"""

from pathlib import Path

import pytest

from skiller.agents import AgentDescriptor
from skiller.config import SkillerConfig


def write_skill(directory: Path, name: str, front: str | None = None, body: str = "# Skill\n") -> Path:
    """Create ``directory/name/SKILL.md``; front=None writes a minimal manifest"""
    skill_dir = directory / name
    skill_dir.mkdir(parents=True, exist_ok=True)
    if front is None:
        front = f"name: {name}\ndescription: The {name} skill\n"
    (skill_dir / "SKILL.md").write_text(f"---\n{front}---\n{body}")
    return skill_dir


def link_skill(target: Path, agent_dir: Path) -> Path:
    agent_dir.mkdir(parents=True, exist_ok=True)
    link = agent_dir / target.name
    link.symlink_to(target, target_is_directory=True)
    return link


@pytest.fixture
def home(tmp_path):
    home = tmp_path.resolve() / "home"
    home.mkdir()
    (home / ".claude").mkdir()
    (home / ".cursor").mkdir()
    return home


@pytest.fixture
def project(tmp_path):
    project = tmp_path.resolve() / "project"
    project.mkdir()
    return project


@pytest.fixture
def agents(home):
    """claude-code and cursor are installed, codex is not"""
    return [
        AgentDescriptor(
            id="claude-code",
            display_name="Claude Code",
            project_skills_dir=".claude/skills",
            global_skills_dir=home / ".claude" / "skills",
            detect=lambda: (home / ".claude").exists(),
        ),
        AgentDescriptor(
            id="cursor",
            display_name="Cursor",
            project_skills_dir=".cursor/skills",
            global_skills_dir=home / ".cursor" / "skills",
            detect=lambda: (home / ".cursor").exists(),
        ),
        AgentDescriptor(
            id="codex",
            display_name="Codex",
            project_skills_dir=".agents/skills",
            global_skills_dir=home / ".codex" / "skills",
            detect=lambda: False,
        ),
    ]


@pytest.fixture
def config(home, project, agents):
    return SkillerConfig(home_directory=home, project_root=project, agents=agents)


@pytest.fixture
def store(config):
    store = config.store_dir
    store.mkdir(parents=True)
    return store


@pytest.fixture
def fanned_out(store, home):
    """One canonical skill in the store, symlinked into claude-code and cursor"""
    canonical = write_skill(store, "my-skill")
    claude = link_skill(canonical, home / ".claude" / "skills")
    cursor = link_skill(canonical, home / ".cursor" / "skills")
    return canonical, claude, cursor
