"""
Orchestration Module

This package provides the monitoring loop, its adaptive polling interval,
the single-instance lock, and the command line entry point.
"""

from orchestration.monitor import NeighborMonitor, CycleContext
from orchestration.interval import IntervalController, IntervalMode

__all__ = ['NeighborMonitor', 'CycleContext', 'IntervalController', 'IntervalMode']
