"""
Output Utilities

Terminal rendering, event log destinations, and the hook script
notification sink.
"""

from utils.console import Console
from utils.event_log import EventLog
from utils.notifier import HookNotifier

__all__ = ['Console', 'EventLog', 'HookNotifier']
