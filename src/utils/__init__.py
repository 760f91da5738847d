"""
Utility modules for the project bootstrapper.
"""

from .logging import setup_root_logger, log_success, SUCCESS

__all__ = ["setup_root_logger", "log_success", "SUCCESS"]
