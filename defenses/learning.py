"""
Learning engine for interfaces in dynamic mode.

Each MAC seen for the first time on a dynamic interface becomes a binding
with the IP it was observed with. First sightings are reported as alarms
so the monitor polls more closely while new devices appear.
"""

import logging
from typing import Iterable, List

from core.neighbor_table import NeighborEntry
from defenses.binding_store import DynamicBindingStore
from defenses.events import AlarmEvent, AlarmKind


logger = logging.getLogger(__name__)


class LearningEngine:
    """Grows a DynamicBindingStore from observed neighbor entries."""

    def __init__(self, store: DynamicBindingStore, interfaces: Iterable[str]):
        self.store = store
        self.interfaces = frozenset(interfaces)

    def learn(self, entries: Iterable[NeighborEntry]) -> List[AlarmEvent]:
        """
        Record first-seen (interface, MAC) pairs.

        Returns:
            One LEARNED event per new binding, in entry order.
        """
        events = []
        for entry in entries:
            if entry.interface not in self.interfaces:
                continue
            binding = self.store.learn(entry.interface, entry.mac, entry.ip)
            if binding is None:
                continue
            logger.info(f"Learned {binding.mac} at {binding.ip} on {binding.interface}")
            events.append(AlarmEvent(
                kind=AlarmKind.LEARNED,
                interface=entry.interface,
                mac=entry.mac,
                ip=entry.ip,
            ))
        return events
