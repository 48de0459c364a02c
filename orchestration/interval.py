"""
Adaptive polling interval.

Two states: NORMAL and ATTACK. At the end of each cycle the controller is
told whether that cycle raised an alarm and returns how long to sleep
before the next one. An alarming cycle is therefore followed by a short
sleep; the first quiet cycle after it restores the normal cadence.
"""

from enum import Enum

from config.settings import ATTACK_INTERVAL, NORMAL_INTERVAL


class IntervalMode(Enum):
    NORMAL = "normal"
    ATTACK = "attack"


class IntervalController:
    """Two-state polling cadence driven by per-cycle alarms."""

    def __init__(self, normal: float = NORMAL_INTERVAL, attack: float = ATTACK_INTERVAL):
        if normal <= 0 or attack <= 0:
            raise ValueError("intervals must be positive")
        self.normal = normal
        self.attack = attack
        self.current = IntervalMode.NORMAL

    def next_interval(self, alarmed: bool) -> float:
        """
        Apply the end-of-cycle transition.

        Args:
            alarmed: Whether any alarm fired during the cycle just finished.

        Returns:
            Seconds to sleep before the next cycle.
        """
        self.current = IntervalMode.ATTACK if alarmed else IntervalMode.NORMAL
        return self.current_interval

    @property
    def current_interval(self) -> float:
        return self.attack if self.current is IntervalMode.ATTACK else self.normal

    def to_dict(self) -> dict:
        return {
            'normal': self.normal,
            'attack': self.attack,
            'current': self.current.value,
        }
