"""
LAN scan detection.

A host sweeping the subnet leaves one neighbor entry per probed address,
most of them incomplete. Too many rows on an interface means someone is
scanning through us.
"""

from typing import Iterable, List

from config.settings import SCAN_THRESHOLD
from core.neighbor_table import Snapshot
from defenses.events import AlarmEvent, AlarmKind


class ScanDetector:
    """
    Compares per-interface neighbor counts against a threshold.

    Args:
        interfaces: Interfaces to watch. Empty disables detection.
        threshold: Alarm when the count is strictly greater than this.
    """

    def __init__(self, interfaces: Iterable[str], threshold: int = SCAN_THRESHOLD):
        self.interfaces = list(dict.fromkeys(interfaces))
        self.threshold = threshold

    @property
    def enabled(self) -> bool:
        return bool(self.interfaces)

    def check(self, snapshot: Snapshot) -> List[AlarmEvent]:
        if not self.interfaces:
            return []
        counts = snapshot.count_by_interface()
        events = []
        for interface in self.interfaces:
            count = counts.get(interface, 0)
            if count > self.threshold:
                events.append(AlarmEvent(
                    kind=AlarmKind.SCAN_DETECTED,
                    interface=interface,
                    count=count,
                ))
        return events
