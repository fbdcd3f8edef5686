"""Platform abstraction layer."""

from .detection import (
    Arch,
    Platform,
    PlatformInfo,
    UnsupportedPlatform,
    arch_from_machine,
    detect,
    platform_from_system,
)

__all__ = [
    "Arch",
    "Platform",
    "PlatformInfo",
    "UnsupportedPlatform",
    "arch_from_machine",
    "detect",
    "platform_from_system",
]
