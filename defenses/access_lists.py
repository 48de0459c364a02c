"""
Denylist / Allowlist Filter

MAC-level overrides evaluated before binding classification:

    all          11:22:33:44:55:66   known attacker box
    eth1,eth2    66:55:44:33:22:11   lab printer

- A denylisted MAC raises an alarm but still goes on to classification.
- An allowlisted MAC is reported (informational) and removed from the
  working set, so no other event is raised for it in the same cycle.
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List

from config.settings import ALL_INTERFACES
from core.list_files import iter_list_fields
from core.neighbor_table import NeighborEntry
from core.network_utils import is_valid_mac, normalize_mac
from defenses.events import AlarmEvent, AlarmKind


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MACRule:
    """A MAC scoped to a set of interfaces (or to all of them)"""
    mac: str
    scope: FrozenSet[str] = frozenset()
    all_interfaces: bool = False

    def matches(self, entry: NeighborEntry) -> bool:
        if entry.mac != self.mac:
            return False
        return self.all_interfaces or entry.interface in self.scope


def parse_rule_fields(fields: List[str]):
    """
    Build a MACRule from `<scope> <MAC> [ignored...]`.

    Returns None when the MAC field is missing or malformed.
    """
    if len(fields) < 2 or not is_valid_mac(fields[1]):
        return None
    names = frozenset(name for name in fields[0].split(',') if name)
    return MACRule(
        mac=normalize_mac(fields[1]),
        scope=names,
        all_interfaces=ALL_INTERFACES in names,
    )


def load_rules(path: str) -> List[MACRule]:
    """Load a denylist or allowlist file; missing files give no rules."""
    rules = []
    for lineno, fields in iter_list_fields(path):
        rule = parse_rule_fields(fields)
        if rule is None:
            logger.warning(f"{path}:{lineno}: no valid MAC, line skipped")
            continue
        rules.append(rule)
    logger.info(f"Loaded {len(rules)} rules from {path}")
    return rules


@dataclass
class FilterResult:
    """Entries left for classification plus the events raised"""
    remaining: List[NeighborEntry] = field(default_factory=list)
    events: List[AlarmEvent] = field(default_factory=list)

    @property
    def alarmed(self) -> bool:
        return any(event.is_alarm for event in self.events)


class MACFilter:
    """
    Pre-screens neighbor entries against the denylist and allowlist.

    Either list may be empty; an empty list makes that half of the
    filter a no-op.
    """

    def __init__(self, denylist: Iterable[MACRule] = (), allowlist: Iterable[MACRule] = ()):
        self.denylist = list(denylist)
        self.allowlist = list(allowlist)

    @classmethod
    def from_files(cls, denylist_path: str = None, allowlist_path: str = None) -> 'MACFilter':
        """Load rules from files; a None path disables that list."""
        deny = load_rules(denylist_path) if denylist_path is not None else []
        allow = load_rules(allowlist_path) if allowlist_path is not None else []
        return cls(deny, allow)

    def is_denied(self, entry: NeighborEntry) -> bool:
        return any(rule.matches(entry) for rule in self.denylist)

    def is_allowed(self, entry: NeighborEntry) -> bool:
        return any(rule.matches(entry) for rule in self.allowlist)

    def apply(self, entries: Iterable[NeighborEntry]) -> FilterResult:
        """
        Screen entries in order.

        Returns:
            FilterResult with allowlisted entries removed and one event per
            denylist or allowlist hit.
        """
        result = FilterResult()
        for entry in entries:
            # An allowlist hit overrides the denylist for the same entry
            if self.is_allowed(entry):
                result.events.append(AlarmEvent(
                    kind=AlarmKind.ALLOWLISTED,
                    interface=entry.interface,
                    mac=entry.mac,
                    ip=entry.ip,
                ))
                continue
            if self.is_denied(entry):
                result.events.append(AlarmEvent(
                    kind=AlarmKind.DENYLISTED,
                    interface=entry.interface,
                    mac=entry.mac,
                    ip=entry.ip,
                ))
            result.remaining.append(entry)
        return result
