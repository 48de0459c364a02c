#!/usr/bin/env python3
"""
ARP Warden Demo Script

Runs monitoring cycles against a synthetic neighbor table so every event
kind can be seen without root privileges or a live network.

Usage:
    python demo.py
    python demo.py --no-color
    python demo.py --list-interfaces
"""

import argparse
import logging
import os
import sys
import tempfile

# Add project root to path
sys.path.insert(0, '.')

from config.settings import MonitorConfig
from core.network_utils import get_interfaces
from orchestration.monitor import NeighborMonitor


NEIGHBOR_TABLE = """\
IP address       HW type     Flags       HW address            Mask     Device
192.168.1.10     0x1         0x2         00:11:22:33:44:55     *        eth2
192.168.1.99     0x1         0x2         00:11:22:33:44:56     *        eth2
192.168.1.10     0x1         0x2         00:11:22:33:44:56     *        eth2
192.168.1.50     0x1         0x2         de:ad:be:ef:00:01     *        eth2
192.168.1.60     0x1         0x2         aa:aa:aa:aa:aa:aa     *        eth2
10.0.0.5         0x1         0x2         11:22:33:44:55:66     *        eth1
10.0.0.7         0x1         0x2         02:00:00:00:00:07     *        eth1
172.16.0.2       0x1         0x0         00:00:00:00:00:00     *        eth0
172.16.0.3       0x1         0x0         00:00:00:00:00:00     *        eth0
172.16.0.4       0x1         0x0         00:00:00:00:00:00     *        eth0
172.16.0.5       0x1         0x0         00:00:00:00:00:00     *        eth0
"""

STATIC_BINDINGS = """\
# interface  MAC                IP
eth2 00:11:22:33:44:55 192.168.1.10   # file server
eth2 00:11:22:33:44:56 192.168.1.11   # workstation
"""

DENYLIST = "all 11:22:33:44:55:66 known rogue box\n"
ALLOWLIST = "eth2 aa:aa:aa:aa:aa:aa test laptop\n"


def print_banner():
    """Print welcome banner"""
    print("""
╔════════════════════════════════════════════════════════════════╗
║                         ARP WARDEN DEMO                        ║
║                                                                ║
║  Static bindings, dynamic learning, deny/allow lists and scan  ║
║  detection against a synthetic neighbor table.                 ║
╚════════════════════════════════════════════════════════════════╝
    """)


def list_interfaces():
    """List available network interfaces"""
    print("\nAvailable Network Interfaces:")
    print("-" * 50)
    for name in get_interfaces():
        print(f"  {name}")


def write_file(directory: str, name: str, content: str) -> str:
    path = os.path.join(directory, name)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)
    return path


def build_config(directory: str, color: bool) -> MonitorConfig:
    """Demo configuration: eth2 static, eth1 dynamic, eth0 scan-watched."""
    config = MonitorConfig(
        neighbor_table=write_file(directory, "arp", NEIGHBOR_TABLE),
        static_interfaces=["eth2"],
        static_bindings=write_file(directory, "static.list", STATIC_BINDINGS),
        dynamic_interfaces=["eth1"],
        dynamic_state_file=os.path.join(directory, "learned.list"),
        denylist=write_file(directory, "denylist", DENYLIST),
        allowlist=write_file(directory, "allowlist", ALLOWLIST),
        scan_interfaces=["eth0"],
        scan_threshold=3,
        normal_interval=60,
        attack_interval=10,
        pid_file=None,
        event_logs={"general": os.path.join(directory, "events.log")},
    )
    config.color = color
    return config


def run_demo(color: bool = True):
    print_banner()

    with tempfile.TemporaryDirectory(prefix="arpwarden-demo-") as directory:
        config = build_config(directory, color)
        monitor = NeighborMonitor(config)

        for cycle in (1, 2):
            print("\n" + "=" * 50)
            print(f"  CYCLE {cycle}")
            print("=" * 50)
            ctx = monitor.run_cycle()
            delay = monitor.interval.next_interval(ctx.alarmed)
            print(f"\n  Events: {len(ctx.events)}  alarmed: {ctx.alarmed}  "
                  f"next sleep: {delay:g}s ({monitor.interval.current.value})")

        print("\n" + "=" * 50)
        print("  LEARNED BINDINGS")
        print("=" * 50)
        for binding in monitor.dynamic_store:
            print(f"  {binding.to_line()}")

        stats = monitor.get_statistics()
        print(f"\n[*] Statistics:")
        print(f"    Cycles: {stats['cycles']} (alarmed: {stats['alarmed_cycles']})")
        print(f"    Entries checked: {stats['entries_checked']}")
        print(f"    Events: {stats['events']}")
        monitor.close()


def main():
    parser = argparse.ArgumentParser(
        description="ARP Warden Demo",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--no-color", action="store_true",
                       help="Plain output")
    parser.add_argument("--list-interfaces", action="store_true",
                       help="List available interfaces")

    args = parser.parse_args()

    if args.list_interfaces:
        list_interfaces()
        return

    logging.basicConfig(level=logging.WARNING)
    run_demo(color=not args.no_color)


if __name__ == "__main__":
    main()
