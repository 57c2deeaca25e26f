"""Small file system helpers."""

from __future__ import annotations

import logging
import os
import shutil

_log = logging.getLogger(__name__)


def exists(path: str | os.PathLike) -> bool:
    """Return True if ``path`` exists; errors other than "not found" count as existing."""
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError:
        return True
    return True


def _copy_file_mode(src: str | os.PathLike, tgt: str | os.PathLike, perm: int) -> None:
    os.stat(src)
    with open(os.path.normpath(src), "rb") as source:
        fd = os.open(tgt, os.O_RDWR | os.O_CREAT | os.O_TRUNC, perm)
        with os.fdopen(fd, "wb") as target:
            shutil.copyfileobj(source, target)


def copy_file(source: str | os.PathLike, target: str | os.PathLike) -> None:
    """Copy a regular file; a newly created target gets mode 0644."""
    _copy_file_mode(source, target, 0o644)


def copy_exe_file(src: str | os.PathLike, tgt: str | os.PathLike) -> None:
    """Copy an executable file; a newly created target gets mode 0755."""
    _copy_file_mode(src, tgt, 0o755)


def ensure_sub_dir(parent: str | os.PathLike, name: str) -> str:
    """Make sure ``parent/name`` exists as a directory and return its path."""
    path = os.path.join(parent, name)
    if not exists(path):
        try:
            os.mkdir(path, 0o777)
        except OSError as err:
            _log.error("Failed to create directory: %s", err)
    return path


def ensure_abs_path(path: str) -> str:
    """Return ``path`` made absolute if it is not already."""
    if os.path.isabs(path):
        return path
    try:
        return os.path.abspath(path)
    except OSError as err:
        _log.error("Failed to find absolute path: %s", err)
        return path


def make_path_relative_to(root: str, path: str) -> str:
    """Join ``root`` and a relative ``path`` if the result exists, else return ``path``."""
    if os.path.isabs(path):
        return path
    joined = os.path.join(root, path)
    if not exists(joined):
        return path
    return joined