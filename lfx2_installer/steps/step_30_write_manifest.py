from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.manifest import build_manifest, write_manifest

logger = logging.getLogger(__name__)


class WriteManifestStep:
    step_id = "30_write_manifest"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        paths = (state.get("execution") or {}).get("paths") or {}
        library_path = paths.get("library_path")
        manifest_dest = paths.get("manifest_dest")
        if not library_path or not manifest_dest:
            raise RuntimeError("execution.paths missing; run resolve step first")

        document = build_manifest(library_path)
        write_manifest(manifest_dest, document, dry_run=bool(cfg.get("dry_run", False)))
        logger.info("Manifest records library_path=%s", library_path)
        return state
