import io
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import MonitorConfig
from utils.console import Console


ARP_HEADER = "IP address       HW type     Flags       HW address            Mask     Device\n"


def arp_table_text(rows):
    """Render (ip, mac, interface) rows in the /proc/net/arp layout."""
    lines = [ARP_HEADER]
    for ip, mac, interface in rows:
        flags = "0x0" if mac == "00:00:00:00:00:00" else "0x2"
        lines.append(f"{ip:<16} 0x1         {flags:<11} {mac:<21} *        {interface}\n")
    return "".join(lines)


@pytest.fixture
def write_table(tmp_path):
    """Write a neighbor table file and return its path."""
    path = tmp_path / "arp"

    def _write(rows):
        path.write_text(arp_table_text(rows))
        return str(path)

    return _write


@pytest.fixture
def write_list(tmp_path):
    """Write a list file (bindings, denylist, allowlist) and return its path."""
    def _write(name, content):
        path = tmp_path / name
        path.write_text(content)
        return str(path)

    return _write


@pytest.fixture
def quiet_console():
    return Console(color=False, stream=io.StringIO())


@pytest.fixture
def make_config(tmp_path, write_table):
    """MonitorConfig rooted in tmp_path with every optional source absent."""
    def _make(**overrides):
        config = MonitorConfig(
            neighbor_table=str(tmp_path / "arp"),
            static_bindings=str(tmp_path / "static.list"),
            denylist=str(tmp_path / "denylist"),
            allowlist=str(tmp_path / "allowlist"),
            pid_file=None,
        )
        for key, value in overrides.items():
            setattr(config, key, value)
        return config

    return _make
