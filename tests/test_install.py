import json
from pathlib import Path

import pytest

from lfx2_installer.install_config import InstallConfig
from lfx2_installer.lib.errors import FileSystemError
from lfx2_installer.main import build_steps, run

MANIFEST_REL = Path("usr/share/vulkan/implicit_layer.d/lfx2.json")
LIBRARY_REL = Path("usr/liblatencyflex2_layer.so")


def _read_manifest(root: Path) -> dict:
    return json.loads((root / MANIFEST_REL).read_text(encoding="utf-8"))


def test_build_steps_order() -> None:
    assert [s.step_id for s in build_steps()] == [
        "10_resolve_paths",
        "20_install_library",
        "30_write_manifest",
    ]


def test_run_stages_files_under_destdir(artifact: Path, stage: Path) -> None:
    state = run(InstallConfig(prefix="/usr", destdir=str(stage), source=str(artifact)))

    assert (stage / LIBRARY_REL).read_bytes() == artifact.read_bytes()
    assert _read_manifest(stage)["layer"]["library_path"] == "/usr/liblatencyflex2_layer.so"
    assert state["execution"]["completed_steps"] == [s.step_id for s in build_steps()]
    assert state["execution"]["current_step"] is None


def test_run_with_empty_destdir_uses_prefix_directly(artifact: Path, tmp_path: Path) -> None:
    prefix = tmp_path / "usr"

    run(InstallConfig(prefix=str(prefix), destdir="", source=str(artifact)))

    lib = prefix / "liblatencyflex2_layer.so"
    manifest = prefix / "share" / "vulkan" / "implicit_layer.d" / "lfx2.json"
    assert lib.read_bytes() == artifact.read_bytes()
    assert json.loads(manifest.read_text(encoding="utf-8"))["layer"]["library_path"] == str(lib)


def test_run_default_source_is_read_from_working_directory(in_build_dir: Path, stage: Path) -> None:
    run(InstallConfig(prefix="/usr", destdir=str(stage)))

    assert (stage / LIBRARY_REL).read_bytes() == (in_build_dir / "liblatencyflex2_layer.so").read_bytes()


@pytest.mark.parametrize("prefix", ["/usr", "/usr/local", "/opt/lfx2"])
def test_run_manifest_never_records_destdir(artifact: Path, stage: Path, prefix: str) -> None:
    state = run(InstallConfig(prefix=prefix, destdir=str(stage), source=str(artifact)))

    manifest_path = Path(state["execution"]["paths"]["manifest_dest"])
    library_path = json.loads(manifest_path.read_text(encoding="utf-8"))["layer"]["library_path"]
    assert str(stage) not in library_path
    assert library_path == f"{prefix}/liblatencyflex2_layer.so"


def test_run_twice_is_idempotent(artifact: Path, stage: Path) -> None:
    config = InstallConfig(prefix="/usr", destdir=str(stage), source=str(artifact))
    run(config)
    first = {p.relative_to(stage): p.read_bytes() for p in stage.rglob("*") if p.is_file()}

    run(config)

    second = {p.relative_to(stage): p.read_bytes() for p in stage.rglob("*") if p.is_file()}
    assert first == second


def test_run_missing_artifact_writes_nothing(tmp_path: Path, stage: Path) -> None:
    config = InstallConfig(prefix="/usr", destdir=str(stage), source=str(tmp_path / "nope.so"))

    with pytest.raises(FileSystemError) as exc_info:
        run(config)

    assert exc_info.value.operation == "read"
    assert not stage.exists()


def test_run_keeps_library_when_manifest_write_fails(artifact: Path, stage: Path) -> None:
    # A regular file where the manifest directory should go.
    blocker = stage / "usr" / "share"
    blocker.parent.mkdir(parents=True)
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(FileSystemError) as exc_info:
        run(InstallConfig(prefix="/usr", destdir=str(stage), source=str(artifact)))

    assert exc_info.value.operation == "mkdir"
    assert (stage / LIBRARY_REL).read_bytes() == artifact.read_bytes()


def test_run_dry_run_touches_nothing(artifact: Path, stage: Path) -> None:
    state = run(InstallConfig(prefix="/usr", destdir=str(stage), source=str(artifact), dry_run=True))

    assert not stage.exists()
    assert state["execution"]["paths"]["library_dest"] == str(stage / LIBRARY_REL)


@pytest.mark.parametrize(
    ("prefix", "destdir_suffix"),
    [("/usr\0bad", ""), ("/usr", "\0bad")],
)
def test_run_malformed_prefix_or_destdir_is_a_filesystem_error(
    artifact: Path, stage: Path, prefix: str, destdir_suffix: str
) -> None:
    config = InstallConfig(prefix=prefix, destdir=str(stage) + destdir_suffix, source=str(artifact))

    with pytest.raises(FileSystemError) as exc_info:
        run(config)

    assert exc_info.value.operation == "mkdir"
    assert not stage.exists()
