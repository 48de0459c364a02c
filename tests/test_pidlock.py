import os

import pytest

from orchestration import pidlock
from orchestration.pidlock import AlreadyRunning, PidLock


def test_lock_writes_pid_and_cleans_up(tmp_path):
    path = tmp_path / "run" / "arpwarden.pid"

    with PidLock(str(path)) as lock:
        assert lock.held
        assert path.read_text().strip() == str(os.getpid())

    assert not lock.held
    assert not path.exists()


def test_second_lock_is_refused(tmp_path):
    path = str(tmp_path / "arpwarden.pid")

    with PidLock(path):
        with pytest.raises(AlreadyRunning, match=str(os.getpid())):
            PidLock(path).acquire()


def test_stale_pid_file_is_taken_over(tmp_path):
    path = tmp_path / "arpwarden.pid"
    path.write_text("999999\n")

    with PidLock(str(path)):
        assert path.read_text().strip() == str(os.getpid())


def test_lock_follows_pid_file_replaced_while_locking(tmp_path, monkeypatch):
    path = tmp_path / "arpwarden.pid"
    real_flock = pidlock.fcntl.flock
    calls = []

    def flock(fd, operation):
        # The previous holder unlinks the file between our open and flock
        if not calls:
            os.unlink(path)
        calls.append(operation)
        return real_flock(fd, operation)

    monkeypatch.setattr(pidlock.fcntl, "flock", flock)

    with PidLock(str(path)) as lock:
        assert path.read_text().strip() == str(os.getpid())
        assert os.fstat(lock._fd).st_ino == os.stat(path).st_ino

    assert not path.exists()
