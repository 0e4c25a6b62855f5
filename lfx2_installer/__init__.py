"""LatencyFleX 2 Vulkan layer installer.

Core design goals:
- Copy the prebuilt layer library under a prefix, optionally staged in a destdir
- Emit the implicit layer manifest the Vulkan loader discovers
- Never record the staging root inside the manifest
- Centralized logging
"""

__all__ = []
