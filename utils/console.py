"""
Terminal output for the monitor.

Colored with colorama unless disabled (-nc), in which case the same
lines are printed plain.
"""

import sys
from datetime import datetime

from colorama import Fore, Style, init as colorama_init

from defenses.events import AlarmEvent


class Console:
    """Prints timestamped status, OK, and alarm lines."""

    def __init__(self, color: bool = True, stream=None):
        self.color = color
        self.stream = stream or sys.stdout
        if color:
            colorama_init()

    def _print(self, message: str, color: str = ""):
        timestamp = datetime.now().strftime("%H:%M:%S")
        if self.color and color:
            line = f"[{timestamp}] {color}{message}{Style.RESET_ALL}"
        else:
            line = f"[{timestamp}] {message}"
        print(line, file=self.stream)

    def banner(self, title: str):
        line = "=" * 60
        if self.color:
            print(f"{Fore.CYAN}{Style.BRIGHT}{line}\n  {title}\n{line}{Style.RESET_ALL}",
                  file=self.stream)
        else:
            print(f"{line}\n  {title}\n{line}", file=self.stream)

    def info(self, message: str):
        self._print(message, Fore.CYAN)

    def ok(self, message: str):
        self._print(f"OK    {message}", Fore.GREEN)

    def disabled(self, feature: str):
        self._print(f"{feature} disabled", Fore.YELLOW)

    def error(self, message: str):
        self._print(f"ERROR {message}", Fore.RED + Style.BRIGHT)

    def event(self, event: AlarmEvent):
        """Alarms in red, informational events in cyan."""
        if event.is_alarm:
            self._print(f"ALARM {event.describe()}", Fore.RED + Style.BRIGHT)
        else:
            self._print(f"INFO  {event.describe()}", Fore.CYAN)
