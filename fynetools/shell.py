"""Run tools inside the user's shell environment."""

from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

_UNIX_PLATFORMS = ("linux", "freebsd", "netbsd", "openbsd", "dragonfly")


@dataclass
class _ShellCommand:
    """A prepared command: its argument vector and the environment to run it in.

    An ``env`` of ``None`` means the current process environment is inherited.
    """

    args: list[str]
    env: dict[str, str] | None = None

    def run(self, **kwargs) -> subprocess.CompletedProcess:
        """Run the command, passing extra keyword arguments to ``subprocess.run``."""
        return subprocess.run(self.args, env=self.env, **kwargs)

    def output(self) -> str:
        """Run the command and return its standard output, raising on failure."""
        return self.run(capture_output=True, check=True, text=True).stdout


def _platform() -> str:
    return sys.platform


def _is_unix(platform: str) -> bool:
    return platform.startswith(_UNIX_PLATFORMS)


def quote_string(s: str) -> str:
    """Wrap ``s`` in double quotes, escaping any double quotes inside it."""
    return '"' + s.replace('"', '\\"') + '"'


def quote_args(*args: str) -> list[str]:
    """Quote every argument that contains a space."""
    return [quote_string(arg) if " " in arg else arg for arg in args]


def get_unix_shell() -> str:
    """Return the user's shell from ``$SHELL``, falling back to ``/bin/sh``."""
    import os

    return os.environ.get("SHELL") or "/bin/sh"


def get_darwin_shell() -> str:
    """Look up the user's login shell with ``dscl``, falling back to ``zsh``."""
    try:
        home = str(Path.home())
    except RuntimeError:
        return "zsh"
    try:
        result = subprocess.run(
            ["dscl", ".", "-read", home, "UserShell"],
            capture_output=True,
            check=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return "zsh"

    items = result.stdout.split(":")
    if len(items) < 2:
        return "zsh"
    return items[1].strip()


def _shell_environment(shell_args: list[str]) -> dict[str, str] | None:
    try:
        result = subprocess.run(shell_args, capture_output=True, check=True, text=True)
    except (OSError, subprocess.CalledProcessError):
        return None
    env = {}
    for line in result.stdout.split("\n"):
        key, sep, value = line.partition("=")
        if sep and key:
            env[key] = value
    return env or None


def _run_in_shell(cmd: str, *args: str) -> _ShellCommand:
    platform = _platform()
    env = None
    argv = list(args)
    if platform == "darwin":
        # desktop apps on macOS do not start inside the user's shell environment
        argv = quote_args(*args)
        env = _shell_environment([get_darwin_shell(), "-c", "-i", "env"])
    elif _is_unix(platform):
        argv = quote_args(*args)
        env = _shell_environment([get_unix_shell(), "-c", "env"])
    return _ShellCommand([cmd, *argv], env)


def command_in_shell(cmd: str, *args: str) -> _ShellCommand:
    """Prepare ``cmd`` with ``args`` to run in the environment of the user's shell.

    The command is not started; call ``run`` or ``output`` on the result.
    """
    path = cmd
    if _platform() == "darwin":
        try:
            data = _run_in_shell("which", path).output()
        except (OSError, subprocess.CalledProcessError):
            data = None
        if data is not None:
            # the shell may print a header, so use the last line
            lines = data.split("\n")
            path = lines[-1]
            if path == "" and len(lines) > 1:
                path = lines[-2]
    return _run_in_shell(path, *args)