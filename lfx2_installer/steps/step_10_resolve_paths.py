from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict

from ..lib.env import LAYER
from ..lib.paths import resolve_paths

logger = logging.getLogger(__name__)


class ResolvePathsStep:
    step_id = "10_resolve_paths"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        prefix = str(cfg.get("prefix", LAYER.default_prefix))
        destdir = str(cfg.get("destdir", LAYER.default_destdir))

        paths = resolve_paths(prefix, destdir)
        state.setdefault("execution", {})["paths"] = asdict(paths)

        logger.info(
            "Resolved paths (prefix=%r, destdir=%r): library=%s manifest=%s",
            prefix,
            destdir,
            paths.library_dest,
            paths.manifest_dest,
        )
        return state
