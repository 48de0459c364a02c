"""
Core module for neighbor table access.

Includes:
- Neighbor table snapshots (/proc/net/arp)
- List file reading shared by bindings and MAC rules
- MAC/IP normalization and interface lookup
"""

from .network_utils import (
    normalize_mac,
    is_valid_mac,
    is_valid_ip,
    get_interfaces,
    missing_interfaces,
)
from .neighbor_table import (
    NeighborEntry,
    NeighborTableReader,
    Snapshot,
    SnapshotUnavailable,
    parse_neighbor_table,
)
