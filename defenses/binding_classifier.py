"""
Binding Classifier

Decides what each observed (interface, IP, MAC) means for one interface
group (static or dynamic):

    no binding for (interface, MAC)      -> UNKNOWN_MAC alarm
    binding without IP                   -> OK (MAC-only match)
    binding IP == observed IP            -> OK
    binding IP != observed IP            -> BINDING_MISMATCH alarm

The authoritative binding is the first record for (interface, MAC) in
store order.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from core.neighbor_table import NeighborEntry
from defenses.binding_store import Binding, BindingStore
from defenses.events import AlarmEvent, AlarmKind


logger = logging.getLogger(__name__)


class Disposition(Enum):
    """Outcome of classifying one entry"""
    MATCHED = "matched"
    MAC_ONLY = "mac_only"
    UNKNOWN_MAC = "unknown_mac"
    MISMATCH = "mismatch"


@dataclass
class Verdict:
    """Classification of a single neighbor entry"""
    entry: NeighborEntry
    disposition: Disposition
    binding: Optional[Binding] = None
    event: Optional[AlarmEvent] = None

    @property
    def ok(self) -> bool:
        return self.event is None


def classify_entry(store: BindingStore, entry: NeighborEntry) -> Verdict:
    """Classify one entry against a binding store."""
    binding = store.lookup(entry.interface, entry.mac)

    if binding is None:
        return Verdict(
            entry=entry,
            disposition=Disposition.UNKNOWN_MAC,
            event=AlarmEvent(
                kind=AlarmKind.UNKNOWN_MAC,
                interface=entry.interface,
                mac=entry.mac,
                ip=entry.ip,
            ),
        )

    if binding.mac_only:
        return Verdict(entry=entry, disposition=Disposition.MAC_ONLY, binding=binding)

    if binding.ip == entry.ip:
        return Verdict(entry=entry, disposition=Disposition.MATCHED, binding=binding)

    return Verdict(
        entry=entry,
        disposition=Disposition.MISMATCH,
        binding=binding,
        event=AlarmEvent(
            kind=AlarmKind.BINDING_MISMATCH,
            interface=entry.interface,
            mac=entry.mac,
            ip=entry.ip,
            real_mac=binding.mac,
            bound_ip=binding.ip,
        ),
    )


class BindingClassifier:
    """
    Classifies the entries seen on one interface group.

    Args:
        store: Binding store for the group.
        interfaces: Interfaces belonging to the group; entries on other
            interfaces are ignored.
    """

    def __init__(self, store: BindingStore, interfaces: Iterable[str]):
        self.store = store
        self.interfaces = frozenset(interfaces)

    def classify(self, entries: Iterable[NeighborEntry]) -> List[Verdict]:
        verdicts = []
        for entry in entries:
            if entry.interface not in self.interfaces:
                continue
            verdict = classify_entry(self.store, entry)
            logger.debug(f"{entry.interface} {entry.ip} {entry.mac}: {verdict.disposition.value}")
            verdicts.append(verdict)
        return verdicts
