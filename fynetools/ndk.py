"""Android NDK toolchains and cross-compiler environment helpers."""

from __future__ import annotations

import os
import platform
import subprocess
import sys
from dataclasses import dataclass
from typing import Iterable

from fynetools.fileutil import exists


def _host_goos() -> str:
    plat = sys.platform
    if plat.startswith("linux"):
        return "linux"
    if plat.startswith("win"):
        return "windows"
    if plat == "darwin":
        return "darwin"
    return plat.rstrip("0123456789")


_MACHINES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
}


def _host_goarch() -> str:
    machine = platform.machine().lower()
    return _MACHINES.get(machine, machine)


@dataclass(frozen=True)
class NdkToolchain:
    """One Android architecture's NDK compiler naming."""

    arch: str
    abi: str
    min_api: int
    tool_prefix: str
    clang_name_prefix: str

    def clang_prefix(self, api: int) -> str:
        """Return the clang name prefix for ``api``, never below the minimum API."""
        return f"{self.clang_name_prefix}{max(api, self.min_api)}"

    def path(self, ndk_root: str, tool_name: str, android_api: int) -> str:
        """Find ``tool_name`` in the NDK, trying API levels from ``android_api`` upward.

        Returns an empty string if no matching tool exists.
        """
        windows = _host_goos() == "windows"
        bin_dir = os.path.join(ndk_root, "toolchains", "llvm", "prebuilt", arch_ndk(), "bin")
        for api in range(android_api, 99):
            if tool_name in ("clang", "clang++"):
                pref = self.clang_prefix(api)
            elif tool_name == "nm":
                pref = "llvm"
            else:
                pref = self.tool_prefix
            tool_path = os.path.join(bin_dir, f"{pref}-{tool_name}")
            if exists(tool_path):
                return tool_path
            # some NDK executables carry an .exe extension on Windows and some do not
            if windows and exists(tool_path + ".exe"):
                return tool_path + ".exe"
        return ""


NDK: dict[str, NdkToolchain] = {
    "arm": NdkToolchain("arm", "armeabi-v7a", 16, "arm-linux-androideabi", "armv7a-linux-androideabi"),
    "arm64": NdkToolchain("arm64", "arm64-v8a", 21, "aarch64-linux-android", "aarch64-linux-android"),
    "386": NdkToolchain("x86", "x86", 16, "i686-linux-android", "i686-linux-android"),
    "amd64": NdkToolchain("x86_64", "x86_64", 21, "x86_64-linux-android", "x86_64-linux-android"),
}


def toolchain(arch: str) -> NdkToolchain:
    """Return the NDK toolchain for a Go architecture, raising ValueError if unknown."""
    try:
        return NDK[arch]
    except KeyError:
        raise ValueError(f"unsupported architecture: {arch}") from None


_CLANG_ARCHS = {"arm": "armv7", "arm64": "arm64", "386": "i386", "amd64": "x86_64"}


def arch_clang(goarch: str) -> str:
    """Return clang's name for a Go architecture."""
    try:
        return _CLANG_ARCHS[goarch]
    except KeyError:
        raise ValueError(f"unknown GOARCH: {goarch!r}") from None


def arch_ndk(goos: str | None = None, goarch: str | None = None) -> str:
    """Return the NDK prebuilt host directory name; defaults to the running host."""
    goos = goos or _host_goos()
    goarch = goarch or _host_goarch()
    if goos == "windows" and goarch == "386":
        return "windows"
    if goarch == "386":
        arch = "x86"
    elif goarch == "amd64":
        arch = "x86_64"
    elif goarch == "arm64" and goos == "darwin":
        arch = "x86_64"
    elif goarch == "arm64" and goos == "android":
        return "linux-aarch64"
    else:
        raise ValueError(f"unsupported GOARCH: {goarch}")
    return f"{goos}-{arch}"


def environ(kv: Iterable[str], goos: str | None = None, base: Iterable[str] | None = None) -> list[str]:
    """Merge ``base`` (default: the process environment) with ``key=value`` pairs.

    Pairs in ``kv`` take precedence. Entries of ``base`` of unusual form are
    passed through untouched; a malformed entry in ``kv`` raises ValueError.
    """
    goos = goos or _host_goos()
    if base is None:
        base = [f"{key}={value}" for key, value in os.environ.items()]

    merged: list[str] = []
    envs: dict[str, str] = {}
    for entry in base:
        key, sep, value = entry.partition("=")
        if not sep or not key:
            merged.append(entry)
            continue
        envs[key.upper() if goos == "windows" else key] = value
    for entry in kv:
        key, sep, value = entry.partition("=")
        if not sep or not key:
            raise ValueError(f"malformed env var {entry!r} from input")
        envs[key.upper() if goos == "windows" else key] = value
    merged.extend(f"{key}={value}" for key, value in envs.items())
    return merged


def ndk_root(dry_run: bool = False) -> str:
    """Locate the Android NDK from ``ANDROID_NDK_HOME`` or ``ANDROID_HOME/ndk-bundle``."""
    if dry_run:
        return "$NDK_PATH"

    root = os.environ.get("ANDROID_NDK_HOME", "")
    if root and os.path.exists(root):
        return root

    android_home = os.environ.get("ANDROID_HOME", "")
    if android_home:
        root = os.path.join(android_home, "ndk-bundle")
        if os.path.exists(root):
            return root

    raise RuntimeError("no Android NDK found in $ANDROID_HOME/ndk-bundle nor in $ANDROID_NDK_HOME")


def _xcrun(args: list[str], label: str) -> str:
    try:
        result = subprocess.run(args, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
    except OSError as err:
        raise RuntimeError(f"{label}: {err}\n") from err
    out = result.stdout.decode(errors="replace")
    if result.returncode != 0:
        raise RuntimeError(f"{label}: exit status {result.returncode}\n{out}")
    return out.strip()


def env_clang(sdk_name: str, dry_run: bool = False) -> tuple[str, str]:
    """Return the clang path and sysroot flags for an Xcode SDK."""
    if dry_run:
        return f"{sdk_name}-clang", f"-isysroot={sdk_name}"
    clang = _xcrun(["xcrun", "--sdk", sdk_name, "--find", "clang"], "xcrun --find")
    sdk = _xcrun(["xcrun", "--sdk", sdk_name, "--show-sdk-path"], "xcrun --show-sdk-path")
    return clang, f"-isysroot {sdk}"


def xcode_available() -> bool:
    """Return True if Xcode's build tools can be run."""
    try:
        result = subprocess.run(
            ["xcrun", "xcodebuild", "-version"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError:
        return False
    return result.returncode == 0