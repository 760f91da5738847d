"""
Configuration settings for the project bootstrapper.
"""

from typing import Optional, List
from pathlib import Path
from pydantic import BaseModel, Field, validator
from pydantic_settings import BaseSettings


class ProjectLayout(BaseModel):
    """Relative locations of the files and directories the bootstrap touches."""
    venv_dir: Path = Field(default=Path(".venv"), description="Virtual environment directory")
    requirements_file: Path = Field(default=Path("requirements.txt"), description="Python requirements manifest")
    package_manifest: Path = Field(default=Path("package.json"), description="Node package manifest")
    env_template: Path = Field(default=Path(".env.example"), description="Environment variable template")
    env_file: Path = Field(default=Path(".env"), description="Environment file materialized from the template")
    scripts_dir: Path = Field(default=Path("scripts"), description="Helper scripts made executable")

    @validator('venv_dir', 'requirements_file', 'package_manifest', 'env_template', 'env_file', 'scripts_dir')
    def validate_relative(cls, v):
        if v.is_absolute():
            raise ValueError(f"Project layout paths must be relative to the project directory: {v}")
        return v


class ToolingConfig(BaseModel):
    """External tool configuration."""
    base_tools: List[str] = Field(default_factory=lambda: ["git", "curl"], description="Tools checked before provisioning")
    python_candidates: List[str] = Field(
        default_factory=lambda: ["python3", "python"],
        description="Python interpreter names, in preference order"
    )
    auto_install_tools: bool = Field(default=True, description="Try to install missing base tools")
    use_sudo: bool = Field(default=True, description="Prefix system package managers with sudo when not root")
    command_timeout: Optional[int] = Field(None, description="Timeout in seconds for each external command")

    @validator('python_candidates')
    def validate_candidates_not_empty(cls, v):
        if not v:
            raise ValueError("At least one Python interpreter name is required")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO", description="Logging level")
    file_path: Optional[Path] = Field(None, description="Optional log file")
    color: Optional[bool] = Field(None, description="Force colored status tags on or off")

    @validator('level')
    def validate_level(cls, v):
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Unsupported logging level: {v}")
        return level


class Settings(BaseSettings):
    """Main application settings."""
    project_name: Optional[str] = Field(None, description="Name shown in the run banner (defaults to the directory name)")
    project_dir: Path = Field(default_factory=Path.cwd, description="Project root to bootstrap")

    # Component configs
    layout: ProjectLayout = Field(default_factory=ProjectLayout)
    tooling: ToolingConfig = Field(default_factory=ToolingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Operational settings
    dry_run: bool = Field(default=False, description="Log commands instead of running them")

    class Config:
        env_prefix = "BOOTSTRAP_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_nested_delimiter = "__"
        extra = "ignore"  # The project's own .env carries unrelated variables

    @validator('project_dir')
    def validate_project_dir(cls, v):
        v = Path(v).expanduser().resolve()
        if not v.is_dir():
            raise ValueError(f"Project directory not found: {v}")
        return v
