from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from pathlib import Path

from .env import LAYER
from .errors import FileSystemError, describe_os_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallPaths:
    # Recorded in the manifest; never contains destdir.
    library_path: str
    # Physical write locations.
    library_dest: str
    manifest_dest: str


def join_path(*parts: str) -> str:
    """Join path segments by plain concatenation, then normalize.

    Unlike ``os.path.join``, an absolute segment does not discard the segments
    before it, so ``join_path("/tmp/stage", "/usr")`` is ``/tmp/stage/usr``.
    Empty segments are ignored; joining nothing yields ``.``.
    """

    joined = "/".join(p for p in parts if p)
    if not joined:
        return "."
    out = posixpath.normpath(joined)
    # POSIX normpath keeps a leading "//"; collapse it like any other run of slashes.
    if out.startswith("//"):
        out = "/" + out.lstrip("/")
    return out


def resolve_paths(prefix: str, destdir: str) -> InstallPaths:
    """Compute where the library and manifest go. No filesystem access."""

    library_path = join_path(prefix, LAYER.library_filename)
    return InstallPaths(
        library_path=library_path,
        library_dest=join_path(destdir, library_path),
        manifest_dest=join_path(destdir, prefix, LAYER.manifest_rel_path),
    )


def ensure_parents(path: str, *, dry_run: bool = False) -> None:
    """Create every missing directory above ``path``; existing ones are fine."""

    parent = Path(path).parent
    if dry_run:
        if not parent.is_dir():
            logger.info("Would create directory %s", str(parent))
        return

    try:
        parent.mkdir(parents=True, exist_ok=True)
    except (OSError, ValueError) as e:
        raise FileSystemError("mkdir", str(parent), describe_os_error(e)) from e
    logger.debug("Ensured directory %s", str(parent))
