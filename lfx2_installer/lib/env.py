from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class LayerDefaults:
    # Install layout
    library_filename: str = "liblatencyflex2_layer.so"
    manifest_rel_path: str = "share/vulkan/implicit_layer.d/lfx2.json"
    default_prefix: str = "/usr"
    default_destdir: str = ""

    # Loader manifest
    file_format_version: str = "1.2.1"
    name: str = "VK_LAYER_LFX_latencyflex2"
    layer_type: str = "INSTANCE"
    library_arch: str = "64"
    api_version: str = "1.3.268"
    implementation_version: str = "2"
    description: str = "LatencyFleX (TM) latency reduction middleware"
    device_extension_name: str = "VK_NV_low_latency2"
    device_extension_spec_version: str = "1"
    device_extension_entrypoints: Tuple[str, ...] = (
        "vkGetLatencyTimingsNV",
        "vkLatencySleepNV",
        "vkQueueNotifyOutOfBandNV",
        "vkSetLatencyMarkerNV",
        "vkSetLatencySleepModeNV",
    )
    enable_environment: str = "ENABLE_LAYER_LFX_latencyflex2"
    disable_environment: str = "DISABLE_LAYER_LFX_latencyflex2"


LAYER = LayerDefaults()
