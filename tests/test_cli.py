import signal
import subprocess
import sys
from pathlib import Path

import pytest

from orchestration import cli
from orchestration import monitor as monitor_module
from orchestration.pidlock import PidLock
from tests.conftest import arp_table_text


PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def no_interface_lookup(monkeypatch):
    monkeypatch.setattr(monitor_module, "missing_interfaces", lambda names: [])


@pytest.fixture
def config_file(tmp_path):
    (tmp_path / "arp").write_text(arp_table_text([
        ("192.168.1.99", "00:11:22:33:44:55", "eth2"),
    ]))
    (tmp_path / "static.list").write_text("eth2 00:11:22:33:44:55 192.168.1.10\n")

    def _write(extra=""):
        path = tmp_path / "arpwarden.yaml"
        path.write_text(f"""
neighbor_table: {tmp_path / 'arp'}
static:
  interfaces: [eth2]
  bindings: {tmp_path / 'static.list'}
denylist: {tmp_path / 'denylist'}
allowlist: {tmp_path / 'allowlist'}
pid_file: {tmp_path / 'arpwarden.pid'}
logging:
  general: {tmp_path / 'general.log'}
{extra}""")
        return str(path)

    return _write


def test_help_exits_zero(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--help"])

    assert exc.value.code == 0
    assert "-nS" in capsys.readouterr().out


def test_flags_parse_in_any_order():
    args = cli.build_parser().parse_args(["-nS", "-s", "-nc", "-ns", "-nw", "-nd", "-nb"])

    assert args.single
    assert args.no_scan and args.no_static and args.no_dynamic
    assert args.no_color and args.no_denylist and args.no_allowlist


def test_single_run(config_file, tmp_path, capsys):
    status = cli.main(["-c", config_file(), "-s", "-nc"])

    assert status == 0
    out = capsys.readouterr().out
    assert "BINDING MISMATCH" in out
    assert "BINDING MISMATCH" in (tmp_path / "general.log").read_text()
    assert not (tmp_path / "arpwarden.pid").exists()


def test_dual_assignment_exits_nonzero(config_file, capsys):
    path = config_file("dynamic:\n  interfaces: [eth2]\n")

    assert cli.main(["-c", path, "-s"]) == 1
    assert "both static and dynamic" in capsys.readouterr().err


def test_second_instance_is_refused(config_file, tmp_path, capsys):
    path = config_file()

    with PidLock(str(tmp_path / "arpwarden.pid")):
        assert cli.main(["-c", path, "-s"]) == 1

    assert "another instance" in capsys.readouterr().err


def test_termination_signal_exits_cleanly(config_file, tmp_path):
    path = config_file()
    proc = subprocess.Popen(
        [sys.executable, "-u", "-m", "orchestration.cli", "-c", path, "-nc"],
        cwd=str(PROJECT_ROOT),
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
    )
    try:
        output = []
        for line in proc.stdout:
            output.append(line)
            if "Sleeping" in line:
                break
        assert (tmp_path / "arpwarden.pid").exists()

        proc.send_signal(signal.SIGTERM)
        rest, _ = proc.communicate(timeout=15)
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()

    output.append(rest)
    assert proc.returncode == 0
    assert "Received signal" in "".join(output)
    assert not (tmp_path / "arpwarden.pid").exists()
