"""Configuration schemas using Pydantic"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from skiller.agents.registry import AgentDescriptor, default_agents


class SearchConfig(BaseModel):
    """Skill search API settings"""
    url: str = "https://skills.sh/api/search"
    limit: int = Field(default=10, ge=1)
    timeout: float = Field(default=10.0, gt=0)


class CommandConfig(BaseModel):
    """External skills package manager settings"""
    executable: str = "npx"
    base_args: list[str] = Field(default_factory=lambda: ["skills"])
    add_timeout: float = Field(default=60.0, gt=0)
    remove_timeout: float = Field(default=30.0, gt=0)
    check_timeout: float = Field(default=30.0, gt=0)
    update_timeout: float = Field(default=60.0, gt=0)


class SkillerConfig(BaseModel):
    """Main configuration, passed to every component at construction"""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    home_directory: Path = Field(default_factory=Path.home)
    project_root: Path = Field(default_factory=Path.cwd)
    agents: list[AgentDescriptor] | None = None
    search: SearchConfig = Field(default_factory=SearchConfig)
    commands: CommandConfig = Field(default_factory=CommandConfig)

    @model_validator(mode="after")
    def _fill_agents(self) -> "SkillerConfig":
        if self.agents is None:
            self.agents = default_agents(self.home_directory)
        return self

    @property
    def agents_dir(self) -> Path:
        return self.home_directory / ".agents"

    @property
    def store_dir(self) -> Path:
        """Canonical skill store that agent directories link into"""
        return self.agents_dir / "skills"

    @property
    def lock_path(self) -> Path:
        return self.agents_dir / ".skill-lock.json"

    @property
    def disabled_path(self) -> Path:
        return self.agents_dir / ".disabled-skills.json"
