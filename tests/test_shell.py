import subprocess
import sys
from unittest import mock

from fynetools.shell import (
    command_in_shell,
    get_darwin_shell,
    get_unix_shell,
    quote_args,
    quote_string,
)


def test_quote_args():
    assert quote_args(*["a", "b c"]) == ["a", '"b c"']


def test_quote_string():
    assert quote_string("cat") == '"cat"'
    assert quote_string("my-file.txt") == '"my-file.txt"'
    assert quote_string('"quoted".svg') == '"\\"quoted\\".svg"'


def test_get_unix_shell_default(monkeypatch):
    monkeypatch.delenv("SHELL", raising=False)
    assert get_unix_shell() == "/bin/sh"


def test_get_unix_shell_empty(monkeypatch):
    monkeypatch.setenv("SHELL", "")
    assert get_unix_shell() == "/bin/sh"


def test_get_unix_shell_from_env(monkeypatch):
    monkeypatch.setenv("SHELL", "/bin/bash")
    assert get_unix_shell() == "/bin/bash"


def test_get_darwin_shell_parses_dscl():
    done = subprocess.CompletedProcess([], 0, stdout="UserShell: /bin/bash\n")
    with mock.patch("subprocess.run", return_value=done):
        assert get_darwin_shell() == "/bin/bash"


def test_get_darwin_shell_falls_back_on_failure():
    with mock.patch("subprocess.run", side_effect=OSError("no dscl")):
        assert get_darwin_shell() == "zsh"


def test_get_darwin_shell_falls_back_on_bad_output():
    done = subprocess.CompletedProcess([], 0, stdout="nothing here\n")
    with mock.patch("subprocess.run", return_value=done):
        assert get_darwin_shell() == "zsh"


def test_command_in_shell_unix(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    monkeypatch.setenv("SHELL", "/bin/bash")
    done = subprocess.CompletedProcess([], 0, stdout="HOME=/home/user\nPATH=/usr/bin\n")
    with mock.patch("subprocess.run", return_value=done) as run:
        cmd = command_in_shell("go", "build", "my app")
    assert run.call_args.args[0] == ["/bin/bash", "-c", "env"]
    assert cmd.args == ["go", "build", '"my app"']
    assert cmd.env == {"HOME": "/home/user", "PATH": "/usr/bin"}


def test_command_in_shell_unix_env_failure(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    with mock.patch("subprocess.run", side_effect=OSError("no shell")):
        cmd = command_in_shell("go", "a b")
    assert cmd.args == ["go", '"a b"']
    assert cmd.env is None


def test_command_in_shell_windows(monkeypatch):
    monkeypatch.setattr(sys, "platform", "win32")
    with mock.patch("subprocess.run") as run:
        cmd = command_in_shell("go", "my app")
    assert run.call_count == 0
    assert cmd.args == ["go", "my app"]
    assert cmd.env is None