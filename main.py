#!/usr/bin/env python3
"""
Main entry point for the project bootstrapper.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from src.core.orchestrator import BootstrapOrchestrator
from src.core.errors import BootstrapError
from src.utils.logging import setup_root_logger
from config.settings import Settings


COMMANDS = ["setup", "venv", "install-py", "npm-install", "test", "clean"]


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Bootstrap a project checkout: tools, Python venv, Node deps and .env"
    )

    parser.add_argument(
        "command",
        nargs="?",
        default="setup",
        choices=COMMANDS,
        help="What to run (default: setup)"
    )

    parser.add_argument(
        "--project-dir",
        type=Path,
        default=Path.cwd(),
        help="Project directory to bootstrap (default: current directory)"
    )

    parser.add_argument(
        "--project-name",
        type=str,
        help="Name shown in the run banner"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log external commands instead of running them"
    )

    parser.add_argument(
        "--skip-tool-install",
        action="store_true",
        help="Only report missing base tools, never install them"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write a detailed log to this file"
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored status tags"
    )

    return parser.parse_args(argv)


def load_config(args) -> Settings:
    """Build settings from the environment, the project's .env and command line overrides."""
    project_dir = args.project_dir.expanduser().resolve()

    config_data = {"project_dir": project_dir}
    if args.project_name:
        config_data["project_name"] = args.project_name
    if args.dry_run:
        config_data["dry_run"] = True

    settings = Settings(_env_file=project_dir / ".env", **config_data)

    if args.skip_tool_install:
        settings.tooling.auto_install_tools = False
    if args.log_level:
        settings.logging.level = args.log_level
    if args.log_file:
        settings.logging.file_path = args.log_file
    if args.no_color:
        settings.logging.color = False
    if not settings.project_name:
        settings.project_name = project_dir.name

    return settings


def dispatch(orchestrator: BootstrapOrchestrator, command: str) -> int:
    """Run a command and map its outcome to an exit code."""
    if command == "setup":
        report = orchestrator.run()
        return 0 if report.success else 1
    if command == "venv":
        orchestrator.create_venv()
    elif command == "install-py":
        orchestrator.install_python()
    elif command == "npm-install":
        orchestrator.install_node()
    elif command == "test":
        orchestrator.run_tests()
    elif command == "clean":
        orchestrator.clean()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)

    # Project variables should reach the installers' child processes
    load_dotenv(args.project_dir / ".env")

    try:
        settings = load_config(args)
    except Exception as e:
        setup_root_logger(level="INFO", color=False if args.no_color else None)
        logging.getLogger(__name__).error(f"Invalid configuration: {e}")
        return 2

    setup_root_logger(settings.logging.file_path, settings.logging.level, settings.logging.color)
    logger = logging.getLogger(__name__)
    logger.debug(f"Arguments: {vars(args)}")

    try:
        orchestrator = BootstrapOrchestrator(settings)
        return dispatch(orchestrator, args.command)
    except BootstrapError as e:
        logger.error(str(e))
        logger.debug("Traceback:", exc_info=True)
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
