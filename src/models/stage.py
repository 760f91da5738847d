"""
Stage-level models: host classification and per-stage outcomes.
"""

from enum import Enum
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field


class OSKind(str, Enum):
    """Host operating system family."""
    LINUX = "linux"
    MACOS = "macos"
    OTHER = "other"


class StageStatus(str, Enum):
    """Outcome of a single bootstrap stage."""
    SKIPPED = "skipped"
    WARNED = "warned"
    INSTALLED = "installed"
    FAILED = "failed"


class StageResult(BaseModel):
    """Result of one bootstrap stage."""
    stage: str = Field(..., description="Stage name")
    status: StageStatus = Field(..., description="Stage outcome")
    message: str = Field(default="", description="Human-readable summary")
    details: Dict[str, Any] = Field(default_factory=dict, description="Extra stage data")

    @property
    def fatal(self) -> bool:
        return self.status == StageStatus.FAILED

    @classmethod
    def skipped(cls, stage: str, message: str = "", **details) -> "StageResult":
        return cls(stage=stage, status=StageStatus.SKIPPED, message=message, details=details)

    @classmethod
    def warned(cls, stage: str, message: str, **details) -> "StageResult":
        return cls(stage=stage, status=StageStatus.WARNED, message=message, details=details)

    @classmethod
    def installed(cls, stage: str, message: str = "", **details) -> "StageResult":
        return cls(stage=stage, status=StageStatus.INSTALLED, message=message, details=details)

    @classmethod
    def failed(cls, stage: str, message: str, error: Optional[str] = None, **details) -> "StageResult":
        if error:
            details["error"] = error
        return cls(stage=stage, status=StageStatus.FAILED, message=message, details=details)

    class Config:
        json_schema_extra = {
            "example": {
                "stage": "python_env",
                "status": "installed",
                "message": "Created virtual environment at .venv",
                "details": {"interpreter": "python3"}
            }
        }
