from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from .errors import FileSystemError, describe_os_error
from .paths import ensure_parents

logger = logging.getLogger(__name__)


def check_readable(src: str) -> None:
    """Fail before any mutation if the artifact cannot be read."""

    s = Path(src)
    if not s.exists():
        raise FileSystemError("read", src, "No such file or directory")
    if not s.is_file():
        raise FileSystemError("read", src, "Not a regular file")
    if not os.access(s, os.R_OK):
        raise FileSystemError("read", src, "Permission denied")


def install_library(src: str, dst: str, *, dry_run: bool = False) -> None:
    """Copy the layer library byte-for-byte, overwriting ``dst``."""

    check_readable(src)
    ensure_parents(dst, dry_run=dry_run)

    if dry_run:
        logger.info("Would copy %s -> %s", src, dst)
        return

    try:
        if os.path.exists(dst) and os.path.samefile(src, dst):
            logger.info("%s is already in place", dst)
            return
        shutil.copyfile(src, dst)
    except (OSError, ValueError) as e:
        # Attribute the failure to whichever side actually broke.
        filename = getattr(e, "filename", None)
        failed = filename if filename in (src, dst) else dst
        raise FileSystemError("copy", str(failed), describe_os_error(e)) from e
    logger.info("Installed %s -> %s", src, dst)
