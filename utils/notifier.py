"""
Hook script notification sink.

Each event kind may have an executable hook. The script receives the
event fields as positional arguments:

    mismatch     <interface> <mac> <ip> <realmac>
    unknown      <interface> <mac> <ip>
    denylisted   <interface> <mac> <ip>
    allowlisted  <interface> <mac> <ip>
    learned      <interface> <mac> <ip>
    scan         <interface> <count>

What the script does with them (mail, firewall rule, syslog) is up to
the operator. Hook failures are logged and never stop the monitor.
"""

import logging
import shutil
import subprocess
from typing import Dict, List, Optional

from config.settings import HOOK_TIMEOUT
from defenses.events import AlarmEvent


logger = logging.getLogger(__name__)


def _decode(output: bytes) -> str:
    """Hook output is free-form; never fail on undecodable bytes."""
    return output.decode("utf-8", errors="replace").strip()


class HookNotifier:
    """
    Runs the configured hook script for each event.

    Args:
        hooks: Mapping of AlarmKind value (e.g. 'mismatch') to script path.
        timeout: Seconds a hook may run before it is killed.
    """

    def __init__(self, hooks: Optional[Dict[str, str]] = None, timeout: float = HOOK_TIMEOUT):
        self.hooks = dict(hooks or {})
        self.timeout = timeout

    def command_for(self, event: AlarmEvent) -> Optional[List[str]]:
        """Command line for the event's hook, or None if none is configured."""
        script = self.hooks.get(event.kind.value)
        if not script:
            return None
        return [script] + [str(arg) for arg in event.hook_args()]

    def __call__(self, event: AlarmEvent) -> bool:
        """
        Invoke the hook for one event.

        Returns:
            True if a hook ran and exited with status 0.
        """
        cmd = self.command_for(event)
        if cmd is None:
            return False

        # Bare names are looked up on PATH
        executable = shutil.which(cmd[0])
        if executable is None:
            logger.error(f"Hook script {cmd[0]!r} is missing or not executable")
            return False
        cmd[0] = executable

        try:
            result = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.error(f"Hook {cmd[0]} timed out after {self.timeout}s")
            return False
        except OSError as e:
            logger.error(f"Failed to run hook {cmd[0]}: {e}")
            return False

        if result.returncode != 0:
            logger.warning(
                f"Hook {cmd[0]} exited with {result.returncode}: {_decode(result.stderr)}"
            )
            return False

        logger.debug(f"Hook ran: {' '.join(cmd)}")
        return True
