"""
ARP Neighbor Monitor

Runs the detection cycle:

    snapshot -> deny/allow filter -> static classification
             -> learning + dynamic classification -> scan detection
             -> report events -> adaptive sleep -> repeat

Everything a cycle derives from the neighbor table lives in a fresh
CycleContext; the only state carried between cycles is the dynamic
binding store and the interval controller.
"""

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from config.settings import MonitorConfig
from core.neighbor_table import NeighborEntry, NeighborTableReader, Snapshot, SnapshotUnavailable
from core.network_utils import missing_interfaces
from defenses.access_lists import MACFilter
from defenses.binding_classifier import BindingClassifier, Verdict
from defenses.binding_store import DynamicBindingStore, StaticBindingStore
from defenses.events import AlarmEvent
from defenses.learning import LearningEngine
from defenses.scan_detector import ScanDetector
from orchestration.interval import IntervalController
from utils.console import Console
from utils.event_log import EventLog


logger = logging.getLogger(__name__)


@dataclass
class CycleContext:
    """Working state of a single monitoring cycle"""
    number: int
    snapshot: Optional[Snapshot] = None
    working_set: List[NeighborEntry] = field(default_factory=list)
    verdicts: List[Verdict] = field(default_factory=list)
    events: List[AlarmEvent] = field(default_factory=list)
    alarmed: bool = False
    skipped: bool = False

    def add_events(self, events: List[AlarmEvent]):
        for event in events:
            self.events.append(event)
            if event.is_alarm:
                self.alarmed = True


class NeighborMonitor:
    """
    Periodic ARP neighbor table monitor.

    Usage:
        config = load_config("/etc/arpwarden/arpwarden.yaml")
        monitor = NeighborMonitor(config)
        monitor.run()              # until stop() or a signal
        monitor.run(single=True)   # one cycle, no sleep
    """

    def __init__(
        self,
        config: MonitorConfig,
        reader: Optional[NeighborTableReader] = None,
        console: Optional[Console] = None,
        event_log: Optional[EventLog] = None,
        notifier: Optional[Callable[[AlarmEvent], object]] = None
    ):
        """
        Initialize the monitor from a validated configuration.

        Args:
            config: Monitor configuration.
            reader: Neighbor table source (defaults to config.neighbor_table).
            console: Terminal output.
            event_log: Event log destinations.
            notifier: Callable invoked once per event (the hook sink).
        """
        config.validate()
        self.config = config
        self.reader = reader or NeighborTableReader(config.neighbor_table)
        self.console = console or Console(color=config.color)
        self.event_log = event_log or EventLog(config.event_logs)
        self.notifier = notifier

        # Static group
        self.static_store: Optional[StaticBindingStore] = None
        self.static_classifier: Optional[BindingClassifier] = None
        if config.static_enabled and config.static_interfaces:
            self.static_store = StaticBindingStore.from_file(config.static_bindings)
            self.static_classifier = BindingClassifier(self.static_store, config.static_interfaces)

        # Dynamic group
        self.dynamic_store: Optional[DynamicBindingStore] = None
        self.learning: Optional[LearningEngine] = None
        self.dynamic_classifier: Optional[BindingClassifier] = None
        if config.dynamic_enabled and config.dynamic_interfaces:
            self.dynamic_store = DynamicBindingStore(config.dynamic_state_file)
            self.learning = LearningEngine(self.dynamic_store, config.dynamic_interfaces)
            self.dynamic_classifier = BindingClassifier(self.dynamic_store, config.dynamic_interfaces)

        self.mac_filter = MACFilter.from_files(
            config.denylist if config.denylist_enabled else None,
            config.allowlist if config.allowlist_enabled else None,
        )

        self.scan_detector = ScanDetector(
            config.scan_interfaces if config.scan_enabled else [],
            config.scan_threshold,
        )

        self.interval = IntervalController(config.normal_interval, config.attack_interval)

        self._stop_event = threading.Event()
        self._cycle = 0

        self.stats = {
            'cycles': 0,
            'skipped_cycles': 0,
            'alarmed_cycles': 0,
            'entries_checked': 0,
            'notify_errors': 0,
            'events': defaultdict(int),
        }

    # ------------------------------------------------------------------
    # Cycle
    # ------------------------------------------------------------------

    def run_cycle(self) -> CycleContext:
        """Run one full detection pass and report its events."""
        self._cycle += 1
        ctx = CycleContext(number=self._cycle)
        self.stats['cycles'] += 1

        try:
            ctx.snapshot = self.reader.read()
        except SnapshotUnavailable as e:
            logger.error(f"Cycle {ctx.number} skipped: {e}")
            self.console.error(f"Cycle {ctx.number} skipped: {e}")
            ctx.skipped = True
            self.stats['skipped_cycles'] += 1
            return ctx

        ctx.working_set = ctx.snapshot.complete()
        self.stats['entries_checked'] += len(ctx.working_set)

        self._check_access_lists(ctx)
        self._check_static(ctx)
        self._check_dynamic(ctx)
        self._check_scan(ctx)

        self._report(ctx)
        if ctx.alarmed:
            self.stats['alarmed_cycles'] += 1
        return ctx

    def _check_access_lists(self, ctx: CycleContext):
        if not self.config.denylist_enabled:
            self.console.disabled("Denylist")
        if not self.config.allowlist_enabled:
            self.console.disabled("Allowlist")
        result = self.mac_filter.apply(ctx.working_set)
        ctx.working_set = result.remaining
        ctx.add_events(result.events)

    def _classify(self, ctx: CycleContext, classifier: BindingClassifier):
        for verdict in classifier.classify(ctx.working_set):
            ctx.verdicts.append(verdict)
            if verdict.ok:
                entry = verdict.entry
                self.console.ok(f"{entry.interface} {entry.ip} {entry.mac} ({verdict.disposition.value})")
            else:
                ctx.add_events([verdict.event])

    def _check_static(self, ctx: CycleContext):
        if not self.config.static_enabled:
            self.console.disabled("Static checking")
            return
        if self.static_classifier is not None:
            self._classify(ctx, self.static_classifier)

    def _check_dynamic(self, ctx: CycleContext):
        if not self.config.dynamic_enabled:
            self.console.disabled("Dynamic learning")
            return
        if self.learning is None:
            return
        ctx.add_events(self.learning.learn(ctx.working_set))
        self._classify(ctx, self.dynamic_classifier)

    def _check_scan(self, ctx: CycleContext):
        if not self.config.scan_enabled:
            self.console.disabled("Scan detection")
            return
        ctx.add_events(self.scan_detector.check(ctx.snapshot))

    def _report(self, ctx: CycleContext):
        for event in ctx.events:
            self.stats['events'][event.kind.value] += 1
            logger.debug(f"Event: {event.to_dict()}")
            self.console.event(event)
            self.event_log.record(event)
            if self.notifier is not None:
                self._notify(event)

    def _notify(self, event: AlarmEvent):
        try:
            self.notifier(event)
        except Exception as e:
            logger.error(f"Notification for {event.kind.value} on {event.interface} failed: {e}")
            self.stats['notify_errors'] += 1

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def check_interfaces(self) -> List[str]:
        """Warn about configured interfaces missing on this host."""
        missing = missing_interfaces(self.config.monitored_interfaces)
        for name in missing:
            logger.warning(f"Configured interface {name} does not exist (yet)")
        return missing

    def run(self, single: bool = False) -> int:
        """
        Run the monitor.

        Args:
            single: Run exactly one cycle and return without sleeping.

        Returns:
            Process exit status.
        """
        self._stop_event.clear()
        self.check_interfaces()
        logger.info(f"Monitor started: {self.config.to_dict()}")

        while True:
            ctx = self.run_cycle()
            if single:
                break

            delay = self.interval.next_interval(ctx.alarmed)
            self.console.info(f"Sleeping {delay:g}s ({self.interval.current.value} mode)")
            if self._stop_event.wait(delay):
                break

        logger.info("Monitor stopped")
        return 0

    def stop(self):
        """Ask the loop to finish after the current cycle or sleep."""
        self._stop_event.set()

    def get_statistics(self) -> Dict:
        """Get monitoring statistics"""
        stats = dict(self.stats)
        stats['events'] = dict(self.stats['events'])
        stats['learned_bindings'] = len(self.dynamic_store) if self.dynamic_store else 0
        stats['interval'] = self.interval.to_dict()
        return stats

    def close(self):
        self.event_log.close()
