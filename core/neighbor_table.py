"""
Kernel Neighbor Table Reader

Samples the ARP neighbor table once per monitoring cycle. On Linux the
table is exposed as /proc/net/arp:

    IP address       HW type     Flags       HW address            Mask     Device
    192.168.1.10     0x1         0x2         00:11:22:33:44:55     *        eth2
    192.168.1.77     0x1         0x0         00:00:00:00:00:00     *        eth2

Rows whose HW address is all zeros have not finished resolving. They are
kept in the snapshot for scan detection but are never classified.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Tuple

from config.settings import NEIGHBOR_TABLE_PATH
from core.network_utils import is_incomplete_mac, normalize_mac


logger = logging.getLogger(__name__)


class SnapshotUnavailable(Exception):
    """Raised when the neighbor table cannot be read for this cycle."""


@dataclass(frozen=True)
class NeighborEntry:
    """One row of the neighbor table"""
    ip: str
    mac: str
    interface: str

    @property
    def is_incomplete(self) -> bool:
        return is_incomplete_mac(self.mac)


@dataclass(frozen=True)
class Snapshot:
    """All rows read from the neighbor table in a single sample."""
    rows: Tuple[NeighborEntry, ...] = ()

    def complete(self) -> List[NeighborEntry]:
        """Rows with a resolved MAC, in table order."""
        return [row for row in self.rows if not row.is_incomplete]

    def count_by_interface(self) -> Dict[str, int]:
        """Number of rows per interface, incomplete rows included."""
        return dict(Counter(row.interface for row in self.rows))

    def __len__(self) -> int:
        return len(self.rows)


def parse_neighbor_table(text: str) -> Snapshot:
    """
    Parse the text of /proc/net/arp.

    The first line is a header. Rows with fewer than six fields are skipped.
    """
    rows = []
    lines = text.splitlines()
    for line in lines[1:]:
        parts = line.split()
        if len(parts) < 6:
            if parts:
                logger.debug(f"Skipping short neighbor row: {line!r}")
            continue
        rows.append(NeighborEntry(
            ip=parts[0],
            mac=normalize_mac(parts[3]),
            interface=parts[5],
        ))
    return Snapshot(rows=tuple(rows))


class NeighborTableReader:
    """
    Reads the neighbor table from a file in the /proc/net/arp layout.

    Usage:
        reader = NeighborTableReader()
        snapshot = reader.read()
        for entry in snapshot.complete():
            ...
    """

    def __init__(self, path: str = NEIGHBOR_TABLE_PATH):
        self.path = path

    def read(self) -> Snapshot:
        """
        Take one snapshot of the neighbor table.

        Raises:
            SnapshotUnavailable: if the table cannot be read.
        """
        try:
            with open(self.path, 'r', encoding='ascii', errors='replace') as f:
                text = f.read()
        except OSError as e:
            raise SnapshotUnavailable(f"cannot read neighbor table {self.path}: {e}") from e

        snapshot = parse_neighbor_table(text)
        logger.debug(f"Read {len(snapshot)} neighbor rows from {self.path}")
        return snapshot
