"""
Alarm events raised by the monitoring cycle.

Every detector returns AlarmEvent records; the monitor renders, logs, and
hands them to the notification sink.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple


class AlarmKind(Enum):
    """Kinds of events a cycle can produce"""
    BINDING_MISMATCH = "mismatch"
    UNKNOWN_MAC = "unknown"
    DENYLISTED = "denylisted"
    ALLOWLISTED = "allowlisted"
    SCAN_DETECTED = "scan"
    LEARNED = "learned"


# Event log destination per kind
LOG_DESTINATIONS = {
    AlarmKind.BINDING_MISMATCH: "general",
    AlarmKind.UNKNOWN_MAC: "general",
    AlarmKind.LEARNED: "general",
    AlarmKind.DENYLISTED: "denylist",
    AlarmKind.ALLOWLISTED: "allowlist",
    AlarmKind.SCAN_DETECTED: "scan",
}


@dataclass
class AlarmEvent:
    """Represents a single detection result worth reporting"""
    kind: AlarmKind
    interface: str
    mac: Optional[str] = None
    ip: Optional[str] = None
    real_mac: Optional[str] = None
    bound_ip: Optional[str] = None
    count: Optional[int] = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_alarm(self) -> bool:
        """Allowlist hits are informational; everything else is an alarm."""
        return self.kind is not AlarmKind.ALLOWLISTED

    def hook_args(self) -> Tuple[str, ...]:
        """Positional arguments handed to the hook script for this kind."""
        if self.kind is AlarmKind.BINDING_MISMATCH:
            return (self.interface, self.mac, self.ip, self.real_mac)
        if self.kind is AlarmKind.SCAN_DETECTED:
            return (self.interface, str(self.count))
        return (self.interface, self.mac, self.ip)

    def describe(self) -> str:
        """Single-line description used for console and log output."""
        if self.kind is AlarmKind.BINDING_MISMATCH:
            return (f"BINDING MISMATCH on {self.interface}: {self.mac} claims {self.ip}, "
                    f"bound to {self.real_mac} at {self.bound_ip}")
        if self.kind is AlarmKind.UNKNOWN_MAC:
            return f"UNKNOWN MAC on {self.interface}: {self.mac} ({self.ip})"
        if self.kind is AlarmKind.DENYLISTED:
            return f"DENYLISTED MAC on {self.interface}: {self.mac} ({self.ip})"
        if self.kind is AlarmKind.ALLOWLISTED:
            return f"allowlisted MAC on {self.interface}: {self.mac} ({self.ip})"
        if self.kind is AlarmKind.SCAN_DETECTED:
            return f"SCAN DETECTED on {self.interface}: {self.count} neighbor entries"
        return f"LEARNED new binding on {self.interface}: {self.mac} ({self.ip})"

    def to_dict(self) -> Dict:
        return {
            'timestamp': self.timestamp.isoformat(),
            'kind': self.kind.value,
            'interface': self.interface,
            'mac': self.mac,
            'ip': self.ip,
            'real_mac': self.real_mac,
            'bound_ip': self.bound_ip,
            'count': self.count,
        }
