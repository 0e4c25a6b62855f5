from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .lib.errors import FileSystemError, describe_os_error

logger = logging.getLogger(__name__)

STATE_VERSION = 1


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def _require_yaml():
    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError(
            "YAML state requested but PyYAML is not available. Use a .json state file."
        ) from e
    return yaml


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)

    if _detect_format(p) in {"yaml", "yml"}:
        contents = _require_yaml().safe_dump(state, sort_keys=False) + "\n"
    else:
        contents = json.dumps(state, indent=2, sort_keys=True) + "\n"

    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(contents, encoding="utf-8")
    except (OSError, ValueError) as e:
        raise FileSystemError("write", path, describe_os_error(e)) from e
    logger.debug("Saved install state to %s", str(p))


def new_state(config: Dict[str, Any]) -> Dict[str, Any]:
    """Fresh state for one run; every invocation is a full install."""

    return {
        "version": STATE_VERSION,
        "config": dict(config),
        "execution": {
            "current_step": None,
            "completed_steps": [],
            "errors": [],
            "paths": {},
        },
    }


def mark_step_completed(state: Dict[str, Any], step_id: str) -> None:
    exe = state.setdefault("execution", {})
    completed = exe.setdefault("completed_steps", [])
    if step_id not in completed:
        completed.append(step_id)


def record_error(state: Dict[str, Any], error: BaseException) -> None:
    exe = state.setdefault("execution", {})
    exe.setdefault("errors", []).append(
        {
            "step": exe.get("current_step"),
            "operation": getattr(error, "operation", None),
            "path": getattr(error, "path", None),
            "error": str(error),
        }
    )
