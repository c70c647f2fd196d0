"""SKILL.md front matter parsing"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .models import SkillManifest

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "SKILL.md"
KNOWN_FIELDS = {"name", "version", "description", "author", "tags", "globs"}


def split_front_matter(text: str) -> tuple[str | None, str]:
    """Split ``---`` delimited front matter from the body.

    Returns (None, text) when the file doesn't open with a front matter block
    or the block is never closed.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != "---":
        return None, text
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            return "".join(lines[1:i]), "".join(lines[i + 1:])
    return None, text


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _as_tags(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(tag) for tag in value if tag is not None]
    if isinstance(value, str) and value:
        return [value]
    return []


def _as_globs(value: Any) -> str | list[str] | None:
    if isinstance(value, list):
        return [str(g) for g in value]
    if value is None:
        return None
    return str(value)


def manifest_from_mapping(data: dict, fallback_name: str) -> SkillManifest:
    return SkillManifest(
        name=_as_text(data.get("name")) or fallback_name,
        version=_as_text(data.get("version")),
        description=_as_text(data.get("description")),
        author=_as_text(data.get("author")),
        tags=_as_tags(data.get("tags")),
        globs=_as_globs(data.get("globs")),
        extra={str(k): v for k, v in data.items() if k not in KNOWN_FIELDS},
    )


def parse_manifest(skill_dir: Path) -> SkillManifest | None:
    """Parse ``<skill_dir>/SKILL.md``.

    None if there is no manifest file; a manifest carrying only the directory
    name if the file can't be read or its front matter isn't valid YAML.
    """
    skill_md = skill_dir / MANIFEST_FILENAME
    if not skill_md.is_file():
        return None

    fallback = SkillManifest(name=skill_dir.name)
    try:
        front, _body = split_front_matter(skill_md.read_text(encoding="utf-8"))
        data = yaml.safe_load(front) if front else {}
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.debug(f"Unparsable manifest {skill_md}: {e}")
        return fallback

    if not isinstance(data, dict):
        return fallback
    return manifest_from_mapping(data, skill_dir.name)
