"""
Data models for the project bootstrapper.
"""

from .stage import OSKind, StageStatus, StageResult
from .report import BootstrapReport

__all__ = [
    "OSKind",
    "StageStatus",
    "StageResult",
    "BootstrapReport"
]
