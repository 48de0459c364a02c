"""
Command line entry point for ARP Warden.

    arpwarden [-c CONFIG] [-nc] [-ns] [-nd] [-nb] [-nw] [-nS] [-s]

Switches are order independent; each one turns a feature off for this run.
"""

import argparse
import logging
import signal
import sys
from typing import List, Optional

from config.settings import LOG_DATE_FORMAT, LOG_FORMAT, ConfigurationError, load_config
from orchestration.monitor import NeighborMonitor
from orchestration.pidlock import AlreadyRunning, PidLock
from utils.notifier import HookNotifier


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arpwarden",
        description="ARP neighbor table monitor: detects ARP spoofing and LAN scans",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog="""
Examples:
  arpwarden                       monitor with /etc/arpwarden/arpwarden.yaml
  arpwarden -c ./arpwarden.yaml -s  one cycle with a local config
  arpwarden -nd -nS               no dynamic learning, no scan detection
        """
    )
    parser.add_argument("-c", "--config", default=None,
                        help="YAML configuration file")
    parser.add_argument("-nc", dest="no_color", action="store_true",
                        help="Disable colored output")
    parser.add_argument("-ns", dest="no_static", action="store_true",
                        help="Disable static binding checks")
    parser.add_argument("-nd", dest="no_dynamic", action="store_true",
                        help="Disable dynamic learning")
    parser.add_argument("-nb", dest="no_denylist", action="store_true",
                        help="Disable the denylist")
    parser.add_argument("-nw", dest="no_allowlist", action="store_true",
                        help="Disable the allowlist")
    parser.add_argument("-nS", dest="no_scan", action="store_true",
                        help="Disable scan detection")
    parser.add_argument("-s", "--single", action="store_true",
                        help="Run a single cycle and exit")
    return parser


def setup_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        print(f"arpwarden: configuration error: {e}", file=sys.stderr)
        return 1

    config.apply_flags(
        no_color=args.no_color,
        no_static=args.no_static,
        no_dynamic=args.no_dynamic,
        no_denylist=args.no_denylist,
        no_allowlist=args.no_allowlist,
        no_scan=args.no_scan,
    )
    setup_logging(config.log_level)

    lock = PidLock(config.pid_file) if config.pid_file else None
    try:
        if lock is not None:
            lock.acquire()
    except AlreadyRunning as e:
        print(f"arpwarden: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"arpwarden: cannot create PID file {config.pid_file}: {e}", file=sys.stderr)
        return 1

    try:
        monitor = NeighborMonitor(
            config,
            notifier=HookNotifier(config.hooks, config.hook_timeout),
        )
        monitor.console.banner("ARP WARDEN")

        def _handle_signal(signum, frame):
            logger.info(f"Received signal {signum}, stopping")
            monitor.stop()

        previous_handler = signal.signal(signal.SIGTERM, _handle_signal)

        try:
            status = monitor.run(single=args.single)
        except KeyboardInterrupt:
            monitor.stop()
            status = 0
        finally:
            signal.signal(signal.SIGTERM, previous_handler)

        stats = monitor.get_statistics()
        logger.info(
            f"Cycles: {stats['cycles']} (alarmed: {stats['alarmed_cycles']}, "
            f"skipped: {stats['skipped_cycles']}), events: {stats['events']}"
        )
        monitor.close()
        return status
    finally:
        if lock is not None:
            lock.release()


if __name__ == "__main__":
    sys.exit(main())
