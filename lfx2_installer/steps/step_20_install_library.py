from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.assets import install_library
from ..lib.env import LAYER

logger = logging.getLogger(__name__)


class InstallLibraryStep:
    step_id = "20_install_library"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        paths = (state.get("execution") or {}).get("paths") or {}
        library_dest = paths.get("library_dest")
        if not library_dest:
            raise RuntimeError("execution.paths.library_dest missing; run resolve step first")

        source = str(cfg.get("source") or f"./{LAYER.library_filename}")
        install_library(source, library_dest, dry_run=bool(cfg.get("dry_run", False)))
        return state
