"""Helpers for mobile build targets."""

from __future__ import annotations

import os


def android_build_tools_path() -> str:
    """Find the Android SDK "build-tools" directory, descending into a version directory if any."""
    directory = os.path.join(os.environ.get("ANDROID_HOME", ""), "build-tools")
    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except OSError:
        return directory

    child = None
    for entry in entries:
        if entry.name == "zipalign":
            return directory
        if child is None and entry.is_dir():
            child = entry.name

    if child is None:
        return directory
    return os.path.join(directory, child)


def is_android(os_name: str) -> bool:
    """Return True if ``os_name`` is one of the Android targets."""
    return os_name.startswith("android")


def is_ios(os_name: str) -> bool:
    """Return True if ``os_name`` is one of the iOS targets (ios, iossimulator)."""
    return os_name.startswith("ios")


def is_mobile(os_name: str) -> bool:
    """Return True if ``os_name`` is a mobile target."""
    return is_ios(os_name) or is_android(os_name)


def require_android_sdk() -> None:
    """Raise RuntimeError unless ``ANDROID_HOME`` points somewhere."""
    if not os.environ.get("ANDROID_HOME"):
        raise RuntimeError("could not find android tools, missing ANDROID_HOME")