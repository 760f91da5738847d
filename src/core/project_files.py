"""
Project file stages: the .env file and helper script permissions.
"""

import logging
import shutil
import stat

from ..models.stage import StageResult
from ..utils.logging import log_success
from .context import BootstrapContext


logger = logging.getLogger(__name__)

READ_BITS = stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH


def executable_mode(mode: int) -> int:
    """Grant execute to each class (user, group, other) that can already read."""
    return mode | ((mode & READ_BITS) >> 2)


def materialize_env_file(ctx: BootstrapContext, dry_run: bool = False) -> StageResult:
    """
    Copy the environment template to the concrete env file.

    An existing env file is never touched; a missing template is a silent no-op.
    """
    template, target = ctx.layout.env_template, ctx.layout.env_file
    if not ctx.env_template.is_file():
        return StageResult.skipped("env_file", f"No {template}")
    if ctx.env_file.exists():
        return StageResult.skipped("env_file", f"{target} already exists")

    logger.info(f"Copying {template} -> {target}")
    if not dry_run:
        shutil.copyfile(ctx.env_template, ctx.env_file)
    log_success(logger, f"Created {target} from example. Edit it with project-specific values.")
    return StageResult.installed("env_file", f"Created {target}")


def normalize_script_permissions(ctx: BootstrapContext, dry_run: bool = False) -> StageResult:
    """Mark every direct entry of the scripts directory executable, best-effort."""
    scripts = ctx.layout.scripts_dir
    if not ctx.scripts_dir.is_dir():
        return StageResult.skipped("scripts", f"No {scripts}/")

    logger.info(f"Making {scripts}/* executable")
    updated = 0
    failed = 0
    for entry in sorted(ctx.scripts_dir.iterdir()):
        if dry_run:
            continue
        try:
            mode = entry.stat().st_mode
            new_mode = executable_mode(mode)
            if new_mode != mode:
                entry.chmod(new_mode)
            updated += 1
        except OSError as e:
            failed += 1
            logger.debug(f"chmod failed for {entry}: {e}")

    return StageResult.installed("scripts", f"Made {updated} entries executable", updated=updated, failed=failed)
