from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .lib.env import LAYER

CONFIG_KEYS = ("prefix", "destdir", "source")


@dataclass(frozen=True)
class InstallConfig:
    prefix: str = LAYER.default_prefix
    destdir: str = LAYER.default_destdir
    source: str = f"./{LAYER.library_filename}"
    dry_run: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config_file(path: str) -> Dict[str, Any]:
    """Read ``prefix``/``destdir``/``source`` overrides from a YAML file."""

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("install config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the install config") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Install config must contain a mapping/object: {p}")

    unknown = sorted(set(raw) - set(CONFIG_KEYS))
    if unknown:
        raise ValueError(f"Unknown install config keys in {p}: {', '.join(map(str, unknown))}")

    # Values pass through unvalidated; a bad path shows up later as a FileSystemError.
    return {k: "" if raw[k] is None else str(raw[k]) for k in CONFIG_KEYS if k in raw}


def build_install_config(
    *,
    prefix: Optional[str] = None,
    destdir: Optional[str] = None,
    source: Optional[str] = None,
    config_path: Optional[str] = None,
    dry_run: bool = False,
) -> InstallConfig:
    """Merge explicit values over the config file over the defaults."""

    values: Dict[str, Any] = load_config_file(config_path) if config_path else {}
    explicit = {"prefix": prefix, "destdir": destdir, "source": source}
    values.update({k: v for k, v in explicit.items() if v is not None})
    return InstallConfig(dry_run=dry_run, **values)
