import os
import stat

import pytest

from fynetools.fileutil import (
    copy_exe_file,
    copy_file,
    ensure_abs_path,
    ensure_sub_dir,
    exists,
    make_path_relative_to,
)


@pytest.fixture
def umask():
    old = os.umask(0o022)
    yield
    os.umask(old)


def test_exists(tmp_path):
    present = tmp_path / "present.txt"
    present.write_text("x")
    assert exists(present) is True
    assert exists(tmp_path) is True
    assert exists(tmp_path / "missing") is False


def test_copy_file_round_trip(tmp_path, umask):
    src = tmp_path / "src.txt"
    src.write_bytes(b"hello fyne\n")
    tgt = tmp_path / "tgt.txt"
    copy_file(src, tgt)
    assert tgt.read_bytes() == b"hello fyne\n"
    assert stat.S_IMODE(tgt.stat().st_mode) == 0o644


def test_copy_file_truncates_target(tmp_path):
    src = tmp_path / "src.txt"
    src.write_bytes(b"short")
    tgt = tmp_path / "tgt.txt"
    tgt.write_bytes(b"a much longer existing content")
    copy_file(src, tgt)
    assert tgt.read_bytes() == b"short"


def test_copy_exe_file_mode(tmp_path, umask):
    src = tmp_path / "app"
    src.write_bytes(b"\x7fELF")
    tgt = tmp_path / "app-copy"
    copy_exe_file(src, tgt)
    assert tgt.read_bytes() == b"\x7fELF"
    assert stat.S_IMODE(tgt.stat().st_mode) == 0o755


def test_copy_missing_source(tmp_path):
    with pytest.raises(FileNotFoundError):
        copy_file(tmp_path / "missing", tmp_path / "out")
    assert not (tmp_path / "out").exists()


def test_ensure_sub_dir_creates(tmp_path):
    path = ensure_sub_dir(tmp_path, "sub")
    assert path == os.path.join(tmp_path, "sub")
    assert os.path.isdir(path)
    assert ensure_sub_dir(tmp_path, "sub") == path


def test_ensure_sub_dir_under_file(tmp_path):
    parent = tmp_path / "file"
    parent.write_text("x")
    path = ensure_sub_dir(parent, "sub")
    assert path == os.path.join(parent, "sub")
    assert not os.path.isdir(path)


def test_ensure_abs_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert ensure_abs_path(str(tmp_path)) == str(tmp_path)
    result = ensure_abs_path("icon.png")
    assert os.path.isabs(result)
    assert result == os.path.join(os.getcwd(), "icon.png")


def test_make_path_relative_to(tmp_path):
    (tmp_path / "Icon.png").write_bytes(b"")
    assert make_path_relative_to(str(tmp_path), "Icon.png") == os.path.join(tmp_path, "Icon.png")
    assert make_path_relative_to(str(tmp_path), "missing.png") == "missing.png"
    absolute = str(tmp_path / "other.png")
    assert make_path_relative_to("/nowhere", absolute) == absolute