"""Skill discovery and quarantine across agent directories"""

from .models import SkillManifest, SkillRecord, MergedSkill
from .manifest import parse_manifest, split_front_matter, MANIFEST_FILENAME
from .scanner import scan_skills_directory, QUARANTINE_DIRNAME, RESERVED_PREFIX
from .merger import merge_skills
from .manager import SkillManager, AgentUsage
from .deactivate import DeactivationEngine, quarantine_path

__all__ = [
    "SkillManifest",
    "SkillRecord",
    "MergedSkill",
    "parse_manifest",
    "split_front_matter",
    "MANIFEST_FILENAME",
    "scan_skills_directory",
    "QUARANTINE_DIRNAME",
    "RESERVED_PREFIX",
    "merge_skills",
    "SkillManager",
    "AgentUsage",
    "DeactivationEngine",
    "quarantine_path",
]
