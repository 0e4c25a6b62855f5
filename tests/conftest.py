from collections.abc import Callable
from pathlib import Path

import pytest

from lfx2_installer.lib.env import LAYER

ARTIFACT_BYTES = b"\x7fELF\x02\x01\x01\x00fake-layer\x00\xff\xfe"


@pytest.fixture
def artifact(tmp_path: Path) -> Path:
    src_dir = tmp_path / "build"
    src_dir.mkdir()
    p = src_dir / LAYER.library_filename
    p.write_bytes(ARTIFACT_BYTES)
    return p


@pytest.fixture
def stage(tmp_path: Path) -> Path:
    return tmp_path / "stage"


@pytest.fixture
def in_build_dir(artifact: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run with the artifact in the working directory, as a build tree would."""

    monkeypatch.chdir(artifact.parent)
    return artifact.parent


@pytest.fixture
def make_argv(stage: Path) -> Callable[..., list[str]]:
    def _make_argv(*extra: str, prefix: str = "/usr", destdir: str | None = None) -> list[str]:
        return [
            "--prefix",
            prefix,
            "--destdir",
            str(stage) if destdir is None else destdir,
            *extra,
        ]

    return _make_argv
