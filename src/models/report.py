"""
Run report aggregating every stage result of a bootstrap run.
"""

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field

from .stage import OSKind, StageResult, StageStatus


class BootstrapReport(BaseModel):
    """Complete outcome of a bootstrap run."""
    os_kind: OSKind = Field(default=OSKind.OTHER, description="Detected host OS family")
    results: List[StageResult] = Field(default_factory=list)
    missing_tools: List[str] = Field(default_factory=list, description="Base tools found missing")

    # Timing
    started_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    duration_seconds: Optional[float] = None

    def add(self, result: StageResult) -> StageResult:
        self.results.append(result)
        return result

    def by_stage(self, stage: str) -> List[StageResult]:
        return [r for r in self.results if r.stage == stage]

    def warnings(self) -> List[StageResult]:
        return [r for r in self.results if r.status == StageStatus.WARNED]

    @property
    def success(self) -> bool:
        return not any(r.fatal for r in self.results)

    def complete(self) -> None:
        """Mark the run as complete."""
        self.completed_at = datetime.now()
        if self.started_at:
            self.duration_seconds = (self.completed_at - self.started_at).total_seconds()
