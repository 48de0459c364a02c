"""
Trusted Binding Stores

A binding ties a MAC to an interface and, optionally, to an IP:

    eth2 00:11:22:33:44:55 192.168.1.10   # file server
    eth2 66:77:88:99:aa:bb                # laptop, any address

Two stores exist per run:
- StaticBindingStore: loaded once from an operator-curated list, read-only.
- DynamicBindingStore: starts empty and only grows as the learning engine
  records first-seen MACs. Nothing is ever removed during a run.

Lookups return the first matching record in insertion (file) order, so a
duplicated MAC line is resolved by the line that appears first.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from core.list_files import iter_list_fields
from core.network_utils import is_valid_ip, is_valid_mac, normalize_mac


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Binding:
    """Expected (interface, MAC, optional IP) association"""
    interface: str
    mac: str
    ip: Optional[str] = None

    @property
    def mac_only(self) -> bool:
        """No IP declared: the MAC alone satisfies the binding."""
        return self.ip is None

    def to_line(self) -> str:
        fields = [self.interface, self.mac]
        if self.ip:
            fields.append(self.ip)
        return " ".join(fields)


def parse_binding_fields(fields: List[str]) -> Optional[Binding]:
    """
    Build a Binding from the fields of one list line.

    Returns None when the MAC field is missing or malformed. A malformed
    IP field is ignored with the binding kept MAC-only.
    """
    if len(fields) < 2 or not is_valid_mac(fields[1]):
        return None
    ip = fields[2] if len(fields) > 2 else None
    if ip is not None and not is_valid_ip(ip):
        logger.warning(f"Ignoring invalid IP {ip!r} for {fields[1]} on {fields[0]}")
        ip = None
    return Binding(interface=fields[0], mac=normalize_mac(fields[1]), ip=ip)


class BindingStore:
    """
    Ordered collection of bindings with (interface, MAC) lookup.

    Records are kept in insertion order; the index keeps the position of
    the first record for each (interface, MAC) pair.
    """

    def __init__(self, bindings: Iterable[Binding] = ()):
        self._bindings: List[Binding] = []
        self._first: Dict[Tuple[str, str], int] = {}
        for binding in bindings:
            self._append(binding)

    def _append(self, binding: Binding):
        key = (binding.interface, binding.mac)
        if key not in self._first:
            self._first[key] = len(self._bindings)
        self._bindings.append(binding)

    def lookup(self, interface: str, mac: str) -> Optional[Binding]:
        """
        Resolve (interface, MAC) to the authoritative binding.

        Returns:
            The first matching record in store order, or None.
        """
        index = self._first.get((interface, normalize_mac(mac)))
        if index is None:
            return None
        return self._bindings[index]

    def __contains__(self, key) -> bool:
        interface, mac = key
        return (interface, normalize_mac(mac)) in self._first

    def __iter__(self):
        return iter(list(self._bindings))

    def __len__(self) -> int:
        return len(self._bindings)


class StaticBindingStore(BindingStore):
    """Read-only store loaded from a binding list file."""

    @classmethod
    def from_file(cls, path: str) -> 'StaticBindingStore':
        """
        Load bindings from a list file.

        Missing files produce an empty store. Lines without a valid MAC
        are skipped with a warning.
        """
        bindings = []
        for lineno, fields in iter_list_fields(path):
            binding = parse_binding_fields(fields)
            if binding is None:
                logger.warning(f"{path}:{lineno}: no valid MAC, line skipped")
                continue
            bindings.append(binding)
        logger.info(f"Loaded {len(bindings)} static bindings from {path}")
        return cls(bindings)


class DynamicBindingStore(BindingStore):
    """
    Append-only store filled by the learning engine.

    When state_file is given it is truncated on creation and each learned
    binding is appended to it, so operators can inspect what the current
    run has learned. The file is never read back.
    """

    def __init__(self, state_file: Optional[str] = None):
        super().__init__()
        self.state_file = state_file
        if state_file:
            directory = os.path.dirname(state_file)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(state_file, 'w', encoding='utf-8'):
                pass

    def learn(self, interface: str, mac: str, ip: Optional[str]) -> Optional[Binding]:
        """
        Record a first-seen MAC.

        Returns:
            The new Binding, or None if (interface, MAC) is already known.
        """
        mac = normalize_mac(mac)
        if (interface, mac) in self:
            return None
        binding = Binding(interface=interface, mac=mac, ip=ip or None)
        self._append(binding)
        if self.state_file:
            try:
                with open(self.state_file, 'a', encoding='utf-8') as f:
                    f.write(binding.to_line() + "\n")
            except OSError as e:
                logger.error(f"Could not record learned binding in {self.state_file}: {e}")
        return binding
