"""
Wrapper around the external ``npx skills`` package manager.

skiller never installs or removes skill content itself; it shells out to the
skills CLI and reports what it said.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from typing import Optional

from skiller.agents.catalog import SkillScope
from skiller.config.schema import CommandConfig
from skiller.errors import CommandNotAvailableError, ExternalProcessError, SkillerError
from skiller.ledger.lock import get_skill_source
from skiller.skills.models import MergedSkill

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    @property
    def output(self) -> str:
        return self.stdout or self.stderr


def scope_and_agent_args(scope: Optional[SkillScope], agents: Optional[list[str]]) -> list[str]:
    args = []
    if scope == "global":
        args.append("--global")
    for agent in agents or []:
        args.extend(["--agent", agent])
    return args


class SkillsCLI:
    def __init__(self, config: Optional[CommandConfig] = None, cwd: Optional[str] = None):
        self.config = config or CommandConfig()
        self.cwd = cwd

    def is_available(self) -> bool:
        return shutil.which(self.config.executable) is not None

    def ensure_available(self) -> None:
        if not self.is_available():
            raise CommandNotAvailableError(self.config.executable)

    def run(self, args: list[str], timeout: float) -> CommandResult:
        """Run ``<executable> <base_args> <args>``; timeouts raise, exit codes don't"""
        self.ensure_available()
        command = [self.config.executable, *self.config.base_args, *args]
        logger.info(f"Running {' '.join(command)}")
        try:
            proc = subprocess.run(
                command,
                cwd=self.cwd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=timeout,
                env={**os.environ, "FORCE_COLOR": "0"},
            )
        except subprocess.TimeoutExpired as e:
            # subprocess.run kills the child before re-raising
            raise ExternalProcessError(
                command,
                stdout=_decode(e.stdout),
                stderr=_decode(e.stderr),
                timed_out=True,
            ) from e
        result = CommandResult(exit_code=proc.returncode, stdout=proc.stdout or "", stderr=proc.stderr or "")
        if not result.success:
            logger.warning(f"{' '.join(command)} exited with {result.exit_code}")
        return result

    def run_checked(self, args: list[str], timeout: float) -> CommandResult:
        result = self.run(args, timeout)
        if not result.success:
            raise ExternalProcessError(
                [self.config.executable, *self.config.base_args, *args],
                exit_code=result.exit_code,
                stdout=result.stdout,
                stderr=result.stderr,
            )
        return result

    def add(
        self,
        source: str,
        scope: Optional[SkillScope] = None,
        agents: Optional[list[str]] = None,
    ) -> CommandResult:
        args = ["add", source, *scope_and_agent_args(scope, agents)]
        return self.run(args, self.config.add_timeout)

    def remove(
        self,
        name: str,
        scope: Optional[SkillScope] = None,
        agents: Optional[list[str]] = None,
    ) -> CommandResult:
        args = ["remove", name, *scope_and_agent_args(scope, agents)]
        return self.run(args, self.config.remove_timeout)

    def check(self) -> CommandResult:
        return self.run(["check"], self.config.check_timeout)

    def update(self, name: Optional[str] = None) -> CommandResult:
        args = ["update"]
        if name:
            args.append(name)
        return self.run(args, self.config.update_timeout)

    def version(self) -> Optional[str]:
        """Version string of the skills CLI, or None if it can't be determined"""
        try:
            result = self.run(["--version"], timeout=10)
        except SkillerError:
            return None
        return result.stdout.strip() if result.success else None

    def move(
        self,
        skill: MergedSkill,
        scope: Optional[SkillScope] = None,
        agents: Optional[list[str]] = None,
    ) -> CommandResult:
        """Move a skill to another scope or agent set by removing and re-adding it.

        If the re-add fails the skill stays removed; the raised error carries
        the source so the caller can tell the user how to reinstall.
        """
        if skill.lock_entry is None or not skill.lock_entry.source:
            raise SkillerError(f"Cannot move {skill.name}: source info missing from lock file.")
        source = get_skill_source(skill.lock_entry)

        remove_args = ["remove", skill.name, *scope_and_agent_args(skill.scope, skill.agents)]
        self.run_checked(remove_args, self.config.remove_timeout)
        add_args = ["add", source, *scope_and_agent_args(scope or skill.scope, agents or skill.agents)]
        return self.run_checked(add_args, self.config.add_timeout)


def _decode(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode(errors="replace")
    return value
