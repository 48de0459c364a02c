"""
ARP Defense Modules

This package contains the detection logic applied to each neighbor table
snapshot.

Modules:
- BindingStore: static (file) and dynamic (learned) trusted bindings
- MACFilter: denylist / allowlist pre-screening
- BindingClassifier: per-group binding verification
- LearningEngine: growth-only learning for dynamic interfaces
- ScanDetector: neighbor count threshold per interface
"""

from defenses.events import AlarmEvent, AlarmKind
from defenses.binding_store import Binding, BindingStore, StaticBindingStore, DynamicBindingStore
from defenses.access_lists import MACFilter, MACRule, FilterResult
from defenses.binding_classifier import BindingClassifier, Disposition, Verdict
from defenses.learning import LearningEngine
from defenses.scan_detector import ScanDetector

__all__ = [
    'AlarmEvent',
    'AlarmKind',
    'Binding',
    'BindingStore',
    'StaticBindingStore',
    'DynamicBindingStore',
    'MACFilter',
    'MACRule',
    'FilterResult',
    'BindingClassifier',
    'Disposition',
    'Verdict',
    'LearningEngine',
    'ScanDetector',
]
