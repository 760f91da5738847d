"""
Host and tool detection.
"""

import logging
import platform
import shutil
from typing import Iterable, List, Optional

from ..models.stage import OSKind


logger = logging.getLogger(__name__)


def detect_os(system_name: Optional[str] = None) -> OSKind:
    """
    Classify the host operating system.

    Args:
        system_name: System identifier as reported by uname; the running
            host is inspected when omitted

    Returns:
        OSKind.LINUX, OSKind.MACOS, or OSKind.OTHER for anything unrecognized
    """
    if system_name is None:
        system_name = platform.system()
    system_name = (system_name or "").strip()

    if system_name.startswith("Linux"):
        return OSKind.LINUX
    if system_name.startswith("Darwin"):
        return OSKind.MACOS
    return OSKind.OTHER


def command_exists(name: str, path: Optional[str] = None) -> bool:
    """Check whether an executable resolves on the search path."""
    if not name:
        return False
    return shutil.which(name, path=path) is not None


def find_missing_tools(tools: Iterable[str], path: Optional[str] = None) -> List[str]:
    """Return the tools that are not installed, in the order given."""
    missing = []
    for tool in tools:
        if not command_exists(tool, path=path):
            logger.warning(f"Required tool '{tool}' is not installed.")
            missing.append(tool)
    return missing
