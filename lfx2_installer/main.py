from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

from .install_config import InstallConfig, build_install_config
from .lib.env import LAYER
from .lib.errors import FileSystemError
from .logging_utils import configure_logging
from .pipeline import run_pipeline
from .state_store import new_state, record_error, save_state
from .steps import InstallLibraryStep, ResolvePathsStep, WriteManifestStep

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FS_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_steps():
    return [
        ResolvePathsStep(),
        InstallLibraryStep(),
        WriteManifestStep(),
    ]


def run(config: InstallConfig, *, state_path: Optional[str] = None) -> Dict[str, Any]:
    """Run one install: copy the library, then write the layer manifest.

    Any FileSystemError aborts the run and propagates; nothing is rolled back.
    When ``state_path`` is given, the run's state is saved there either way.
    """

    state = new_state(config.as_dict())
    if config.dry_run:
        logger.info("Dry run: no files will be written")

    try:
        result = run_pipeline(state=state, steps=build_steps())
    except Exception as e:
        logger.debug("Install aborted at step %s", state["execution"].get("current_step"))
        record_error(state, e)
        if state_path:
            # The step failure is the error to report; a receipt failure only gets logged.
            try:
                save_state(state_path, state)
            except FileSystemError as save_err:
                logger.error("Could not save install state: %s", save_err)
        raise

    state = result.state
    state["execution"]["summary"] = {"ran_steps": result.ran_steps}
    if state_path:
        save_state(state_path, state)
    return state


def build_argument_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="lfx2-install",
        description="Install the LatencyFleX 2 Vulkan layer and its implicit layer manifest",
    )
    # Defaults stay None so a --config file can fill in unspecified values.
    p.add_argument("--prefix", default=None, help=f"Install prefix (default: {LAYER.default_prefix})")
    p.add_argument("--destdir", default=None, help="Staging root prepended to every written path (default: empty)")
    p.add_argument(
        "--source",
        default=None,
        help=f"Layer library to install (default: ./{LAYER.library_filename})",
    )
    p.add_argument("--config", default=None, help="YAML file with prefix/destdir/source")
    p.add_argument("--state", default=None, help="Write an install receipt here (json|yaml)")
    p.add_argument("--log", default=None, help="Also log to this file")
    p.add_argument("--dry-run", action="store_true", help="Log what would be done without writing")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    args = build_argument_parser().parse_args(argv)

    configure_logging(log_path=args.log, level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = build_install_config(
            prefix=args.prefix,
            destdir=args.destdir,
            source=args.source,
            config_path=args.config,
            dry_run=bool(args.dry_run),
        )
    except (FileNotFoundError, ValueError, RuntimeError) as e:
        logger.error("Invalid install config: %s", e)
        return EXIT_CONFIG_ERROR

    try:
        run(config, state_path=args.state)
    except FileSystemError as e:
        logger.error("Install failed: %s", e)
        return EXIT_FS_ERROR

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
