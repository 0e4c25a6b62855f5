from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .env import LAYER, LayerDefaults
from .errors import FileSystemError, describe_os_error
from .paths import ensure_parents

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayerManifest:
    """Implicit layer manifest as read by the Vulkan loader (format 1.2.1).

    Only ``library_path`` varies between runs; everything else comes from
    :data:`~lfx2_installer.lib.env.LAYER`.
    """

    library_path: str
    defaults: LayerDefaults = field(default=LAYER)

    def to_document(self) -> Dict[str, Any]:
        d = self.defaults
        device_extensions: List[Dict[str, Any]] = [
            {
                "name": d.device_extension_name,
                "spec_version": d.device_extension_spec_version,
                "entrypoints": list(d.device_extension_entrypoints),
            }
        ]
        return {
            "file_format_version": d.file_format_version,
            "layer": {
                "name": d.name,
                "type": d.layer_type,
                "library_path": self.library_path,
                "library_arch": d.library_arch,
                "api_version": d.api_version,
                "implementation_version": d.implementation_version,
                "description": d.description,
                "functions": {},
                "instance_extensions": [],
                "device_extensions": device_extensions,
                "enable_environment": {d.enable_environment: "1"},
                "disable_environment": {d.disable_environment: "1"},
            },
        }


def build_manifest(library_path: str) -> Dict[str, Any]:
    return LayerManifest(library_path=library_path).to_document()


def render_manifest(document: Dict[str, Any], *, path: str = "<manifest>") -> str:
    # Key order is the insertion order of the document, which is stable.
    try:
        return json.dumps(document, indent=4) + "\n"
    except (TypeError, ValueError) as e:
        raise FileSystemError("serialize", path, str(e)) from e


def write_manifest(path: str, document: Dict[str, Any], *, dry_run: bool = False) -> None:
    """Serialize ``document`` and write it to ``path``, replacing any existing file."""

    contents = render_manifest(document, path=path)
    ensure_parents(path, dry_run=dry_run)

    if dry_run:
        logger.info("Would write %s", path)
        logger.debug("Manifest contents:\n%s", contents)
        return

    try:
        Path(path).write_text(contents, encoding="utf-8")
    except (OSError, ValueError) as e:
        raise FileSystemError("write", path, describe_os_error(e)) from e
    logger.info("Wrote layer manifest %s", path)
