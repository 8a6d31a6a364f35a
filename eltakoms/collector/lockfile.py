"""UUCP style lock files for serial devices (ASCII PID format)."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from eltakoms.shared.exceptions import LockError

logger = logging.getLogger(__name__)


def _process_alive(pid: int, proc_root: Path) -> bool:
    return (proc_root / str(pid) / "cmdline").exists()


class UUCPLock:
    """Lock file ``LCK..<tty>`` holding the owner's PID as ``%11d``.

    A lock whose PID has no entry under /proc is stale and is replaced.
    """

    def __init__(self, path: Union[str, Path], proc_root: Union[str, Path] = "/proc"):
        self.path = Path(path)
        self.proc_root = Path(proc_root)
        self.acquired = False

    def _read_pid(self) -> Optional[int]:
        try:
            content = self.path.read_text().strip()
        except FileNotFoundError:
            return None
        try:
            return int(content)
        except ValueError:
            logger.warning(f"Unreadable lockfile {self.path}: {content!r}")
            return 0

    def acquire(self) -> None:
        """Take the lock for the current process.

        Raises:
            LockError: If a live process holds the lock.
            OSError: If the lock file cannot be replaced or written; the
                message names the lock file.
        """
        pid = self._read_pid()
        if pid and _process_alive(pid, self.proc_root):
            raise LockError(f"valid lockfile exists: {self.path}, pid {pid}", pid=pid)

        try:
            if pid is not None:
                logger.warning(f"stale lockfile exists: {self.path}, pid {pid}")
                self.path.unlink()
            self.path.write_text(f"{os.getpid():11d}")
        except OSError as e:
            raise OSError(e.errno, f"cannot create lockfile {self.path}: {e.strerror}") from e
        self.acquired = True
        logger.debug(f"Acquired lock {self.path}")

    def release(self) -> None:
        if not self.acquired:
            return
        try:
            self.path.unlink()
        except FileNotFoundError:
            logger.warning(f"Lockfile {self.path} vanished before release")
        self.acquired = False

    def __enter__(self) -> "UUCPLock":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
