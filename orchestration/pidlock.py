"""
Single-instance lock.

The PID file is held with an exclusive flock for the whole run, so a
second monitor started on the same host fails at startup instead of
double-reporting every event.
"""

import fcntl
import logging
import os
from typing import Optional


logger = logging.getLogger(__name__)


class AlreadyRunning(Exception):
    """Raised when another monitor holds the PID file lock."""


class PidLock:
    """
    Exclusive lock on a PID file.

    Usage:
        with PidLock("/run/arpwarden.pid"):
            monitor.run()
    """

    def __init__(self, path: str):
        self.path = path
        self._fd: Optional[int] = None

    @property
    def held(self) -> bool:
        return self._fd is not None

    def acquire(self):
        """
        Take the lock and write our PID.

        Raises:
            AlreadyRunning: if another process holds the lock.
        """
        if self._fd is not None:
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        while True:
            fd = os.open(self.path, os.O_RDWR | os.O_CREAT, 0o644)
            try:
                fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
            except OSError:
                holder = os.read(fd, 32).decode('ascii', errors='replace').strip()
                os.close(fd)
                raise AlreadyRunning(
                    f"another instance holds {self.path}" + (f" (pid {holder})" if holder else "")
                )
            if self._is_current(fd):
                break
            # A releasing instance unlinked the file between our open and flock
            logger.debug(f"{self.path} was replaced while locking, retrying")
            fcntl.flock(fd, fcntl.LOCK_UN)
            os.close(fd)
        os.ftruncate(fd, 0)
        os.write(fd, f"{os.getpid()}\n".encode('ascii'))
        self._fd = fd
        logger.debug(f"Acquired lock {self.path}")

    def _is_current(self, fd: int) -> bool:
        """True if fd still refers to the file at self.path."""
        try:
            on_disk = os.stat(self.path)
        except FileNotFoundError:
            return False
        held = os.fstat(fd)
        return (held.st_dev, held.st_ino) == (on_disk.st_dev, on_disk.st_ino)

    def release(self):
        """Drop the lock and remove the PID file."""
        if self._fd is None:
            return
        try:
            os.unlink(self.path)
        except OSError as e:
            logger.warning(f"Could not remove {self.path}: {e}")
        fcntl.flock(self._fd, fcntl.LOCK_UN)
        os.close(self._fd)
        self._fd = None
        logger.debug(f"Released lock {self.path}")

    def __enter__(self):
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
        return False
