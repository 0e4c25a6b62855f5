from .step_10_resolve_paths import ResolvePathsStep
from .step_20_install_library import InstallLibraryStep
from .step_30_write_manifest import WriteManifestStep

__all__ = [
    "ResolvePathsStep",
    "InstallLibraryStep",
    "WriteManifestStep",
]
