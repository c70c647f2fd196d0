"""Tests for manifest parsing, directory scanning and merging"""

from pathlib import Path

import pytest

from conftest import link_skill, write_skill
from skiller.ledger import LockEntry, LockLedger
from skiller.skills import (
    SkillManifest,
    SkillRecord,
    merge_skills,
    parse_manifest,
    scan_skills_directory,
    split_front_matter,
)
from skiller.skills import scanner


class TestParseManifest:
    def test_full_front_matter(self, tmp_path):
        skill_dir = write_skill(tmp_path, "test-skill", front=(
            "name: test-skill\n"
            'version: "1.0.0"\n'
            "description: A test skill\n"
            "author: testuser\n"
            "tags:\n"
            "  - testing\n"
            "  - demo\n"
            "globs: ['*.py', '*.md']\n"
            "license: MIT\n"
        ))
        manifest = parse_manifest(skill_dir)
        assert manifest == SkillManifest(
            name="test-skill",
            version="1.0.0",
            description="A test skill",
            author="testuser",
            tags=["testing", "demo"],
            globs=["*.py", "*.md"],
            extra={"license": "MIT"},
        )

    def test_missing_manifest(self, tmp_path):
        (tmp_path / "no-skill").mkdir()
        assert parse_manifest(tmp_path / "no-skill") is None

    def test_no_front_matter_uses_directory_name(self, tmp_path):
        skill_dir = tmp_path / "basic-skill"
        skill_dir.mkdir()
        (skill_dir / "SKILL.md").write_text("# Just content\nNo frontmatter.")
        manifest = parse_manifest(skill_dir)
        assert manifest.name == "basic-skill"
        assert manifest.description is None

    def test_invalid_yaml_degrades_to_name(self, tmp_path):
        skill_dir = write_skill(tmp_path, "broken", front="name: [unclosed\n  : :\n")
        assert parse_manifest(skill_dir) == SkillManifest(name="broken")

    def test_non_mapping_front_matter(self, tmp_path):
        skill_dir = write_skill(tmp_path, "listy", front="- a\n- b\n")
        assert parse_manifest(skill_dir) == SkillManifest(name="listy")

    def test_name_falls_back_to_directory(self, tmp_path):
        skill_dir = write_skill(tmp_path, "unnamed", front="description: no name here\nversion: 2\n")
        manifest = parse_manifest(skill_dir)
        assert manifest.name == "unnamed"
        assert manifest.version == "2"

    def test_split_front_matter_unterminated(self):
        assert split_front_matter("---\nname: x\n") == (None, "---\nname: x\n")

    def test_split_front_matter(self):
        front, body = split_front_matter("---\nname: x\n---\nbody\n")
        assert front == "name: x\n"
        assert body == "body\n"


class TestScanSkillsDirectory:
    def test_missing_directory(self, tmp_path):
        assert scan_skills_directory(tmp_path / "nope", "global", "claude-code") == []

    def test_not_a_directory(self, tmp_path):
        file = tmp_path / "skills"
        file.write_text("")
        assert scan_skills_directory(file, "global", "claude-code") == []

    def test_plain_directories(self, tmp_path):
        base = tmp_path / "skills"
        write_skill(base, "b-skill")
        write_skill(base, "a-skill")
        (base / "README.md").write_text("not a skill")

        records = scan_skills_directory(base, "project", "cursor")

        assert [r.name for r in records] == ["a-skill", "b-skill"]
        first = records[0]
        assert first.path == base / "a-skill"
        assert first.scope == "project"
        assert first.owning_agent == "cursor"
        assert first.is_symlink is False
        assert first.canonical_path == base / "a-skill"
        assert first.manifest.description == "The a-skill skill"

    def test_skips_reserved_and_quarantine(self, tmp_path):
        base = tmp_path / "skills"
        write_skill(base, "visible")
        write_skill(base / ".disabled", "hidden-skill")
        write_skill(base, ".git")

        assert [r.name for r in scan_skills_directory(base, "global", "claude-code")] == ["visible"]

    def test_symlink_resolves_canonical(self, tmp_path):
        store = tmp_path.resolve() / "store"
        canonical = write_skill(store, "linked")
        base = tmp_path.resolve() / "agent"
        link_skill(canonical, base)

        [record] = scan_skills_directory(base, "global", "claude-code")
        assert record.is_symlink is True
        assert record.path == base / "linked"
        assert record.canonical_path == canonical

    def test_broken_symlink_skipped(self, tmp_path):
        base = tmp_path / "agent"
        base.mkdir()
        (base / "dangling").symlink_to(tmp_path / "gone", target_is_directory=True)
        assert scan_skills_directory(base, "global", "claude-code") == []

    def test_lock_entry_lookup(self, tmp_path):
        base = tmp_path / "skills"
        write_skill(base, "My-Skill")
        write_skill(base, "unlocked")
        entry = LockEntry(source="owner/repo")
        lock = LockLedger(entries={"my-skill": entry})

        records = {r.name: r for r in scan_skills_directory(base, "global", "claude-code", lock)}
        assert records["My-Skill"].lock_entry is entry
        assert records["unlocked"].lock_entry is None

    def test_child_errors_are_skipped(self, tmp_path, monkeypatch):
        base = tmp_path / "skills"
        write_skill(base, "good")
        write_skill(base, "unreadable")
        real_parse = scanner.parse_manifest

        def flaky_parse(skill_dir: Path):
            if skill_dir.name == "unreadable":
                raise PermissionError("denied")
            return real_parse(skill_dir)

        monkeypatch.setattr(scanner, "parse_manifest", flaky_parse)
        assert [r.name for r in scan_skills_directory(base, "global", "claude-code")] == ["good"]


def _record(agent, path, canonical, **kwargs):
    return SkillRecord(
        name=Path(path).name,
        path=Path(path),
        scope=kwargs.pop("scope", "global"),
        owning_agent=agent,
        is_symlink=canonical is not None and canonical != path,
        canonical_path=Path(canonical) if canonical else None,
        **kwargs,
    )


class TestMergeSkills:
    def test_same_canonical_merges(self):
        merged = merge_skills([
            _record("claude-code", "/home/.claude/skills/x", "/store/x"),
            _record("cursor", "/home/.cursor/skills/x", "/store/x"),
        ])
        assert len(merged) == 1
        assert merged[0].agents == ["claude-code", "cursor"]
        assert merged[0].path == Path("/home/.claude/skills/x")
        assert merged[0].identity == Path("/store/x")

    def test_different_canonical_stay_separate(self):
        merged = merge_skills([
            _record("claude-code", "/home/.claude/skills/a", "/home/.claude/skills/a"),
            _record("cursor", "/home/.cursor/skills/a", "/home/.cursor/skills/a"),
        ])
        assert [m.agents for m in merged] == [["claude-code"], ["cursor"]]

    def test_unresolved_canonical_uses_path(self):
        merged = merge_skills([
            _record("claude-code", "/a/x", None),
            _record("cursor", "/a/x", None),
            _record("codex", "/b/x", None),
        ])
        assert [m.agents for m in merged] == [["claude-code", "cursor"], ["codex"]]
        assert merged[0].canonical_path is None

    def test_agents_deduplicated(self):
        merged = merge_skills([
            _record("custom", "/p/.agents/skills/x", "/p/.agents/skills/x"),
            _record("custom", "/p/.agents/skills/x", "/p/.agents/skills/x"),
            _record("codex", "/p/.agents/skills/x", "/p/.agents/skills/x"),
        ])
        assert merged[0].agents == ["custom", "codex"]

    def test_first_available_metadata_wins(self):
        first_lock = LockEntry(source="first")
        described = SkillManifest(name="x", description="test")
        merged = merge_skills([
            _record("claude-code", "/a/x", "/store/x", lock_entry=first_lock),
            _record("cursor", "/b/x", "/store/x", manifest=described, lock_entry=LockEntry(source="second")),
            _record("codex", "/c/x", "/store/x", manifest=SkillManifest(name="x", description="later")),
        ])
        assert merged[0].manifest is described
        assert merged[0].lock_entry is first_lock

    def test_first_seen_order(self):
        merged = merge_skills([
            _record("claude-code", "/a/b-skill", "/store/b-skill"),
            _record("claude-code", "/a/a-skill", "/store/a-skill"),
            _record("cursor", "/c/b-skill", "/store/b-skill"),
        ])
        assert [m.name for m in merged] == ["b-skill", "a-skill"]

    def test_empty(self):
        assert merge_skills([]) == []
