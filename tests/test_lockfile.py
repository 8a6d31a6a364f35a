from __future__ import annotations

import os

import pytest

from eltakoms.collector.lockfile import UUCPLock
from eltakoms.shared.exceptions import LockError


@pytest.fixture()
def proc_root(tmp_path):
    root = tmp_path / "proc"
    root.mkdir()
    return root


def _live_process(proc_root, pid: int) -> None:
    entry = proc_root / str(pid)
    entry.mkdir()
    (entry / "cmdline").write_text("eltakoms")


def test_acquire_writes_padded_pid(tmp_path, proc_root) -> None:
    path = tmp_path / "LCK..ttyS1"
    lock = UUCPLock(path, proc_root=proc_root)

    lock.acquire()

    assert path.read_text() == f"{os.getpid():11d}"
    assert len(path.read_text()) == 11
    lock.release()
    assert not path.exists()


def test_stale_lock_is_replaced(tmp_path, proc_root) -> None:
    path = tmp_path / "LCK..ttyS1"
    path.write_text(f"{4242:11d}")

    with UUCPLock(path, proc_root=proc_root):
        assert int(path.read_text()) == os.getpid()

    assert not path.exists()


def test_garbage_lock_is_treated_as_stale(tmp_path, proc_root) -> None:
    path = tmp_path / "LCK..ttyS1"
    path.write_text("not a pid")

    with UUCPLock(path, proc_root=proc_root):
        assert int(path.read_text()) == os.getpid()


def test_live_lock_raises(tmp_path, proc_root) -> None:
    path = tmp_path / "LCK..ttyS1"
    path.write_text(f"{4242:11d}")
    _live_process(proc_root, 4242)

    with pytest.raises(LockError) as excinfo:
        UUCPLock(path, proc_root=proc_root).acquire()

    assert excinfo.value.pid == 4242
    # the other process keeps its lock
    assert int(path.read_text()) == 4242


def test_release_without_acquire_keeps_foreign_lock(tmp_path, proc_root) -> None:
    path = tmp_path / "LCK..ttyS1"
    path.write_text(f"{4242:11d}")

    UUCPLock(path, proc_root=proc_root).release()

    assert path.exists()


def test_missing_lock_dir_error_names_lockfile(tmp_path, proc_root) -> None:
    path = tmp_path / "missing" / "LCK..ttyS1"
    lock = UUCPLock(path, proc_root=proc_root)

    with pytest.raises(OSError, match="cannot create lockfile") as excinfo:
        lock.acquire()

    assert str(path) in str(excinfo.value)
    assert not lock.acquired
