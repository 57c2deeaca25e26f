"""The mobile build environment: toolchain discovery, work directory and command running."""

from __future__ import annotations

import argparse
import logging
import os
import re
import shutil
import subprocess
import sys
import tempfile
from dataclasses import dataclass, field
from typing import Callable, TextIO

from fynetools.mobileutil import is_ios
from fynetools.ndk import NDK, arch_clang, env_clang, environ, ndk_root, xcode_available

_log = logging.getLogger(__name__)

GOMOBILE_NAME = "gomobile"

_SEMVER = re.compile(
    r"(0|[1-9]\d*)(?:\.(0|[1-9]\d*)(?:\.(0|[1-9]\d*)(-[0-9A-Za-z.-]+)?)?)?(?:\+[0-9A-Za-z.-]+)?"
)


def _default_archs() -> dict[str, list[str]]:
    return {
        "android": ["arm", "arm64", "386", "amd64"],
        "ios": ["arm64"],
        "iossimulator": ["arm64", "amd64"],
    }


def _version_before(version: str, major: int, minor: int) -> bool:
    match = _SEMVER.fullmatch(version)
    if match is None:
        # an invalid version sorts before every valid one
        return True
    numbers = tuple(int(part or 0) for part in match.groups()[:3])
    target = (major, minor, 0)
    return numbers < target or (numbers == target and match.group(4) is not None)


def parse_go_version(output: str) -> str | None:
    """Extract the version number from ``go version`` output, or None if absent."""
    fields = output.split(" ")
    if len(fields) < 3:
        return None
    version = fields[2].removeprefix("go")
    # development builds report "devel go1.18-<hash> ..."
    if version == "devel" and len(fields) >= 4:
        version = fields[3].split("-")[0].removeprefix("go")
    return version


def go_env(name: str) -> str:
    """Return a Go environment value from the process environment or ``go env``."""
    value = os.environ.get(name, "")
    if value:
        return value
    try:
        result = subprocess.run(["go", "env", name], capture_output=True, check=True, text=True)
    except (OSError, subprocess.CalledProcessError) as err:
        raise RuntimeError(f"go env {name}: {err}") from err
    return result.stdout.strip()


def reset_read_only_flag_all(path: str) -> None:
    """Make every file below ``path`` writable by its owner."""
    if not os.path.isdir(os.stat(path).st_mode and path):
        os.chmod(path, 0o600)
        return
    try:
        names = os.listdir(os.path.normpath(path))
    except OSError:
        names = []
    for name in names:
        reset_read_only_flag_all(os.path.join(path, name))


def _env_dict(entries: list[str]) -> dict[str, str]:
    env = {}
    for entry in entries:
        split = entry.find("=", 1)
        if split > 0:
            env[entry[:split]] = entry[split + 1 :]
    return env


@dataclass
class BuildContext:
    """Settings and state of one mobile build."""

    build_n: bool = False
    build_x: bool = False
    build_v: bool = False
    build_work: bool = False
    build_target: str = "android"
    build_android_api: int = 16
    min_android_api: int = 16
    build_ios_version: str = "13.0"
    goos: str = field(default_factory=lambda: "windows" if sys.platform.startswith("win") else sys.platform)
    out: TextIO | None = None
    tmpdir: str = ""
    gomobilepath: str = ""
    android_env: dict[str, list[str]] = field(default_factory=dict)
    darwin_env: dict[str, list[str]] = field(default_factory=dict)
    darwin_arm_nm: str = ""
    all_archs: dict[str, list[str]] = field(default_factory=_default_archs)
    bitcode_enabled: bool = False
    before115: bool = False
    before116: bool = False

    def __enter__(self) -> "BuildContext":
        self.init_build_env()
        return self

    def __exit__(self, *exc_info) -> None:
        self.cleanup()

    @property
    def _dry_run(self) -> bool:
        return self.build_n

    @property
    def _verbose(self) -> bool:
        return self.build_x or self.build_n

    def printcmd(self, line: str) -> None:
        """Write a command line to the trace output."""
        print(line, file=self.out or sys.stderr)

    def mkdir(self, path: str) -> None:
        """Create ``path`` and its parents."""
        if self._verbose:
            self.printcmd(f"mkdir -p {path}")
        if self._dry_run:
            return
        os.makedirs(path, 0o750, exist_ok=True)

    def remove_all(self, path: str) -> None:
        """Remove ``path`` and everything below it; a missing path is not an error."""
        if self._verbose:
            self.printcmd(f'rm -r -f "{path}"')
        if self._dry_run:
            return
        if self.goos == "windows":
            reset_read_only_flag_all(path)
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            try:
                os.remove(path)
            except FileNotFoundError:
                pass

    def run_cmd(self, args: list[str], cwd: str | None = None, env: list[str] | None = None) -> None:
        """Run a command with extra ``key=value`` environment entries.

        Raises RuntimeError carrying the command's output if it fails.
        """
        env = list(env or [])
        if self._verbose:
            prefix = f"PWD={cwd} " if cwd else ""
            env_text = " ".join(env)
            if env_text:
                env_text += " "
            self.printcmd(f"{prefix}{env_text}{' '.join(args)}")

        if self.build_work:
            if self.goos == "windows":
                env += [f"TEMP={self.tmpdir}", f"TMP={self.tmpdir}"]
            else:
                env.append(f"TMPDIR={self.tmpdir}")

        if self._dry_run:
            return

        capture = None if self.build_v else subprocess.PIPE
        try:
            result = subprocess.run(
                args,
                cwd=cwd or None,
                env=_env_dict(environ(env, self.goos)),
                stdout=capture,
                stderr=None if self.build_v else subprocess.STDOUT,
            )
        except OSError as err:
            raise RuntimeError(f"{' '.join(args)} failed: {err}\n") from err
        if result.returncode != 0:
            output = (result.stdout or b"").decode(errors="replace")
            raise RuntimeError(
                f"{' '.join(args)} failed: exit status {result.returncode}\n{output}"
            )

    def init_build_env(self) -> None:
        """Locate the gomobile directory, create the work directory and set up toolchains."""
        gopath = go_env("GOPATH")
        for entry in gopath.split(os.pathsep) if gopath else []:
            self.gomobilepath = os.path.join(entry, "pkg", "gomobile")
            if self.build_n or os.path.exists(self.gomobilepath):
                break

        if self.build_x:
            self.printcmd(f"GOMOBILE={self.gomobilepath}")

        if not self.gomobilepath:
            raise RuntimeError("toolchain not installed, run `gomobile init`")

        if self.build_n:
            self.tmpdir = "$WORK"
        else:
            self.tmpdir = tempfile.mkdtemp(prefix="fyne-work-")
        if self.build_x:
            self.printcmd(f"WORK={self.tmpdir}")

        self.env_init()

    def cleanup(self) -> None:
        """Remove the work directory, or report it when it is to be kept."""
        if self.build_n:
            return
        if self.build_work:
            print(f"WORK={self.tmpdir}")
            return
        try:
            self.remove_all(self.tmpdir)
        except OSError as err:
            _log.error("Failed to remove all in cleanup function: %s", err)

    def _check_go_version(self) -> None:
        try:
            result = subprocess.run(["go", "version"], capture_output=True, check=True, text=True)
        except (OSError, subprocess.CalledProcessError):
            return
        version = parse_go_version(result.stdout) if result.stdout else None
        if version is None:
            return
        self.before115 = _version_before(version, 1, 15)
        self.before116 = _version_before(version, 1, 16)

    def _init_android(self) -> None:
        try:
            root = ndk_root(self.build_n)
        except RuntimeError:
            return
        self.android_env = {}
        if self.build_android_api < self.min_android_api:
            raise ValueError(f"gomobile requires Android API level >= {self.min_android_api}")
        for arch, tc in NDK.items():
            clang = tc.path(root, "clang", self.build_android_api)
            clangpp = tc.path(root, "clang++", self.build_android_api)
            if not self.build_n:
                tools = [clang, clangpp]
                if self.goos == "windows":
                    # only NDK r19c and later ship the clang++.cmd script
                    tools.append(clangpp + ".cmd")
                for tool in tools:
                    if not os.path.exists(tool):
                        raise RuntimeError(
                            f"no compiler for {arch} was found in the NDK (tried {tool}). "
                            "Make sure your NDK version is >= r19c. "
                            "Use `sdkmanager --update` to update it"
                        )
            env = ["GOOS=android", f"GOARCH={arch}", f"CC={clang}", f"CXX={clangpp}", "CGO_ENABLED=1"]
            if arch == "arm":
                env.append("GOARM=7")
            self.android_env[arch] = env

    def _init_darwin(self) -> None:
        self.darwin_arm_nm = "nm"
        self.darwin_env = {}
        for arch in self.all_archs.get(self.build_target, []):
            env: list[str] = []
            if arch in ("arm", "arm64"):
                if arch == "arm":
                    env.append("GOARM=7")
                if self.build_target == "ios":
                    clang, cflags = env_clang("iphoneos", self.build_n)
                    cflags += f" -miphoneos-version-min={self.build_ios_version}"
                else:
                    clang, cflags = env_clang("iphonesimulator", self.build_n)
                    cflags += f" -mios-simulator-version-min={self.build_ios_version}"
            elif arch in ("386", "amd64"):
                clang, cflags = env_clang("iphonesimulator", self.build_n)
                cflags += f" -mios-simulator-version-min={self.build_ios_version}"
            else:
                raise ValueError(f"unknown GOARCH: {arch!r}")

            if self.bitcode_enabled:
                cflags += " -fembed-bitcode"

            target_os = "darwin" if self.before116 else "ios"
            arch_flags = f"{cflags} -arch {arch_clang(arch)}"
            env += [
                f"GOOS={target_os}",
                f"GOARCH={arch}",
                f"CC={clang}",
                f"CXX={clang}++",
                f"CGO_CFLAGS={arch_flags}",
                f"CGO_CXXFLAGS={arch_flags}",
                f"CGO_LDFLAGS={arch_flags}",
                "CGO_ENABLED=1",
            ]
            self.darwin_env[arch] = env

    def env_init(self) -> None:
        """Set up the Android and iOS cross-compiler environments."""
        self._check_go_version()
        if self.before115:
            self.all_archs["ios"] = ["arm64", "amd64", "arm"]

        self._init_android()

        if not is_ios(self.build_target) or not xcode_available():
            return
        self._init_darwin()


@dataclass
class MobileCommand:
    """A mobile tool sub-command and its packaging options."""

    name: str = ""
    args_usage: str = ""
    short: str = ""
    long: str = ""
    runner: Callable[["MobileCommand"], None] | None = None
    flags: argparse.ArgumentParser = field(
        default_factory=lambda: argparse.ArgumentParser(add_help=False)
    )
    icon_path: str = ""
    app_name: str = ""
    version: str = ""
    cert: str = ""
    profile: str = ""
    build: int = 0

    def usage(self, out: TextIO | None = None) -> None:
        """Write the command's usage text."""
        (out or sys.stdout).write(f"usage: {GOMOBILE_NAME} {self.name} {self.args_usage}\n{self.long}")