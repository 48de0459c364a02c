import os
import shutil
import stat
import sys

import pytest

from defenses.events import AlarmEvent, AlarmKind
from utils.notifier import HookNotifier


def make_hook(tmp_path, name="hook.py", exit_code=0, body=None):
    """Executable hook that records its arguments, one per line."""
    out = tmp_path / f"{name}.out"
    script = tmp_path / name
    script.write_text(
        f"#!{sys.executable}\n"
        "import sys\n"
        f"open({str(out)!r}, 'w').write('\\n'.join(sys.argv[1:]))\n"
        + (body or "")
        + f"sys.exit({exit_code})\n"
    )
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    return str(script), out


def mismatch_event():
    return AlarmEvent(
        kind=AlarmKind.BINDING_MISMATCH,
        interface="eth2",
        mac="00:11:22:33:44:55",
        ip="192.168.1.99",
        real_mac="00:11:22:33:44:55",
        bound_ip="192.168.1.10",
    )


def test_mismatch_hook_receives_four_arguments(tmp_path):
    script, out = make_hook(tmp_path)
    notifier = HookNotifier({"mismatch": script})

    assert notifier(mismatch_event())
    assert out.read_text().split("\n") == [
        "eth2", "00:11:22:33:44:55", "192.168.1.99", "00:11:22:33:44:55",
    ]


@pytest.mark.parametrize("kind", [
    AlarmKind.UNKNOWN_MAC, AlarmKind.DENYLISTED, AlarmKind.ALLOWLISTED, AlarmKind.LEARNED,
])
def test_three_argument_hooks(tmp_path, kind):
    script, out = make_hook(tmp_path)
    notifier = HookNotifier({kind.value: script})

    event = AlarmEvent(kind=kind, interface="eth1", mac="aa:bb:cc:dd:ee:ff", ip="10.0.0.5")

    assert notifier(event)
    assert out.read_text().split("\n") == ["eth1", "aa:bb:cc:dd:ee:ff", "10.0.0.5"]


def test_scan_hook_receives_count(tmp_path):
    script, out = make_hook(tmp_path)
    notifier = HookNotifier({"scan": script})

    assert notifier(AlarmEvent(kind=AlarmKind.SCAN_DETECTED, interface="eth0", count=120))
    assert out.read_text().split("\n") == ["eth0", "120"]


def test_no_hook_for_kind():
    assert HookNotifier({})(mismatch_event()) is False


def test_non_executable_hook_is_skipped(tmp_path):
    script = tmp_path / "hook.sh"
    script.write_text("#!/bin/sh\nexit 0\n")
    os.chmod(script, 0o644)

    assert HookNotifier({"mismatch": str(script)})(mismatch_event()) is False


def test_failing_hook_does_not_raise(tmp_path):
    script, _ = make_hook(tmp_path, exit_code=3)

    assert HookNotifier({"mismatch": script})(mismatch_event()) is False


def test_slow_hook_times_out(tmp_path):
    script, _ = make_hook(tmp_path, body="import time\ntime.sleep(5)\n")

    assert HookNotifier({"mismatch": script}, timeout=0.2)(mismatch_event()) is False


def test_undecodable_hook_output_is_tolerated(tmp_path):
    body = (
        "sys.stdout.buffer.write(b'\\xff\\xfe bad\\n')\n"
        "sys.stderr.buffer.write(b'\\xff\\xfe worse\\n')\n"
    )
    ok_script, _ = make_hook(tmp_path, name="ok.py", body=body)
    failing_script, _ = make_hook(tmp_path, name="fail.py", exit_code=1, body=body)

    assert HookNotifier({"mismatch": ok_script})(mismatch_event()) is True
    assert HookNotifier({"mismatch": failing_script})(mismatch_event()) is False


@pytest.mark.skipif(shutil.which("true") is None, reason="needs true(1) on PATH")
def test_bare_hook_name_is_resolved_on_path():
    assert HookNotifier({"mismatch": "true"})(mismatch_event()) is True


def test_unknown_bare_hook_name_is_skipped():
    assert HookNotifier({"mismatch": "arpwarden-no-such-hook"})(mismatch_event()) is False
