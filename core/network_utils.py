"""
Network utilities for interface lookup and address normalization.
"""

import re
from typing import List

import netifaces

from config.settings import INCOMPLETE_MAC


_MAC_RE = re.compile(r'^([0-9a-f]{2}:){5}[0-9a-f]{2}$')


def normalize_mac(mac: str) -> str:
    """Normalize MAC address format (lower case, colon separated)."""
    return mac.strip().lower().replace('-', ':')


def is_valid_mac(mac: str) -> bool:
    """
    Validate MAC address format.

    Accepts aa:bb:cc:dd:ee:ff or aa-bb-cc-dd-ee-ff in any case.
    """
    return bool(_MAC_RE.match(normalize_mac(mac)))


def is_incomplete_mac(mac: str) -> bool:
    """Check for the all-zero MAC the kernel reports for unresolved entries."""
    return normalize_mac(mac) == INCOMPLETE_MAC


def is_valid_ip(ip: str) -> bool:
    """Validate IPv4 address format."""
    parts = ip.split('.')
    if len(parts) != 4:
        return False
    for part in parts:
        try:
            num = int(part)
        except ValueError:
            return False
        if num < 0 or num > 255:
            return False
    return True


def get_interfaces() -> List[str]:
    """
    Get the names of all network interfaces on this host.

    Returns:
        List of interface names (e.g. ['lo', 'eth0']).
    """
    return list(netifaces.interfaces())


def missing_interfaces(names) -> List[str]:
    """
    Return the configured interface names that do not exist on this host.

    Order follows the input; duplicates are reported once.
    """
    present = set(get_interfaces())
    missing = []
    for name in names:
        if name not in present and name not in missing:
            missing.append(name)
    return missing
