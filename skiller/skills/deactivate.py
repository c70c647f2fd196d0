"""Deactivate and reactivate skills by moving them into quarantine.

Deactivating a skill moves every agent's entry for it, and then its copy in
the canonical store, into a ``.disabled`` directory next to it, and records
what was moved in the disabled-skill ledger. Reactivating reads that record
back and restores each entry, recreating symlinks where there were symlinks.

Each move is guarded by an existence check, so a run that was interrupted
half way can simply be repeated. The ledger is only written once every move
of the run has succeeded.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from skiller.agents.catalog import AgentCatalog
from skiller.config.schema import SkillerConfig
from skiller.errors import DeactivationError
from skiller.ledger.disabled import AgentLink, DisabledEntry, DisableManifestStore
from skiller.paths import entry_exists, is_symlink, is_within, move_path, remove_entry, resolve_canonical

from .models import MergedSkill
from .scanner import QUARANTINE_DIRNAME

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"


def quarantine_path(base_dir: Path, name: str) -> Path:
    return base_dir / QUARANTINE_DIRNAME / name


class DeactivationEngine:
    def __init__(self, config: SkillerConfig, catalog: AgentCatalog | None = None):
        self.config = config
        self.catalog = catalog or AgentCatalog(config.agents, config.project_root)
        self.store = DisableManifestStore(config.disabled_path)

    @property
    def store_dir(self) -> Path:
        return self.config.store_dir

    def disabled_entries(self) -> dict[str, DisabledEntry]:
        return self.store.read().entries

    def is_disabled(self, name: str) -> bool:
        return name in self.store.read().entries

    def _move(self, skill: str, step: str, src: Path, dst: Path) -> None:
        try:
            dst.parent.mkdir(parents=True, exist_ok=True)
            move_path(src, dst)
        except OSError as e:
            raise DeactivationError(skill, step, e) from e
        logger.info(f"{step}: {src} -> {dst}")

    # --- Deactivate ---

    def deactivate(self, skill: MergedSkill) -> DisabledEntry:
        """Quarantine every agent entry of a skill, then its canonical copy"""
        ledger = self.store.read()
        canonical = Path(skill.canonical_path or skill.path)
        entry = DisabledEntry(canonical_path=str(canonical))

        for agent in self.catalog.detected():
            for scope, base in self.catalog.base_dirs(agent):
                skill_path = base / skill.name
                target = quarantine_path(base, skill.name)
                key = f"{agent.id}:{scope}"

                if entry_exists(skill_path):
                    entry.agent_links[key] = AgentLink(path=str(skill_path), was_symlink=is_symlink(skill_path))
                    if entry_exists(target):
                        logger.debug(f"Already quarantined: {target}")
                        continue
                    self._move(skill.name, "quarantine-link", skill_path, target)
                elif entry_exists(target):
                    # Moved by an earlier run that didn't get to write the ledger
                    entry.agent_links[key] = AgentLink(path=str(skill_path), was_symlink=is_symlink(target))

        # Agent entries first: if this move fails they are each still restorable
        if is_within(canonical, self.store_dir):
            target = quarantine_path(self.store_dir, skill.name)
            if entry_exists(canonical) and not entry_exists(target):
                self._move(skill.name, "quarantine-canonical", canonical, target)

        ledger.entries[skill.name] = entry
        self.store.write(ledger)
        logger.info(f"Deactivated {skill.name} ({len(entry.agent_links)} agent links)")
        return entry

    # --- Reactivate ---

    def reactivate(self, name: str) -> bool:
        """Restore a quarantined skill. Returns False if it isn't disabled."""
        ledger = self.store.read()
        entry = ledger.entries.get(name)
        if entry is None:
            logger.debug(f"No disabled entry for {name}")
            return False

        canonical = Path(entry.canonical_path)
        if is_within(canonical, self.store_dir):
            quarantined = quarantine_path(self.store_dir, name)
            if entry_exists(quarantined):
                self._move(name, "restore-canonical", quarantined, canonical)

        for key, link in entry.agent_links.items():
            link_path = Path(link.path)
            quarantined = quarantine_path(link_path.parent, name)
            self._recover_temp(name, quarantined)
            if not entry_exists(quarantined):
                logger.debug(f"Nothing to restore for {key}: {quarantined} is gone")
                continue
            if link.was_symlink:
                self._relink(name, quarantined, link_path, canonical)
            else:
                self._move(name, "restore-link", quarantined, link_path)

        del ledger.entries[name]
        self.store.write(ledger)
        logger.info(f"Reactivated {name}")
        return True

    def _recover_temp(self, name: str, quarantined: Path) -> None:
        """Put back a copy left aside by a relink that never finished"""
        temp = quarantined.with_name(quarantined.name + TEMP_SUFFIX)
        if entry_exists(temp) and not entry_exists(quarantined):
            self._move(name, "relink", temp, quarantined)

    def _relink(self, name: str, quarantined: Path, link_path: Path, canonical: Path) -> None:
        """Recreate the symlink at link_path, keeping the quarantined copy until it exists"""
        if _links_to(link_path, canonical):
            # Symlink made by an earlier run whose cleanup failed
            self._remove(name, "relink", quarantined)
            logger.info(f"relink: {link_path} already points at {canonical}")
            return

        temp = quarantined.with_name(quarantined.name + TEMP_SUFFIX)
        self._move(name, "relink", quarantined, temp)

        try:
            os.symlink(canonical, link_path, target_is_directory=True)
        except OSError as e:
            try:
                move_path(temp, quarantined)
            except OSError as rollback_error:
                logger.error(f"Could not roll back {temp} to {quarantined}: {rollback_error}")
            raise DeactivationError(name, "relink", e) from e

        self._remove(name, "relink", temp)
        logger.info(f"relink: {link_path} -> {canonical}")

    def _remove(self, skill: str, step: str, path: Path) -> None:
        try:
            remove_entry(path)
        except OSError as e:
            raise DeactivationError(skill, step, e) from e


def _links_to(link_path: Path, canonical: Path) -> bool:
    if not is_symlink(link_path):
        return False
    try:
        if os.readlink(link_path) == str(canonical):
            return True
    except OSError:
        return False
    target = resolve_canonical(link_path)
    return target is not None and target == resolve_canonical(canonical)
