#!/usr/bin/env python3
"""
Example ARP Warden hook.

Point any of the `hooks:` entries in arpwarden.yaml at this script. It
appends one line per invocation to a log file and prints it.

    hooks:
      mismatch: /usr/local/lib/arpwarden/example_hook.py
      unknown:  /usr/local/lib/arpwarden/example_hook.py

Arguments arrive positionally:
    mismatch     <interface> <mac> <ip> <realmac>
    unknown / denylisted / allowlisted / learned   <interface> <mac> <ip>
    scan         <interface> <count>

Set ARPWARDEN_HOOK_LOG to change the log file.
"""

import os
import sys
from datetime import datetime


HOOK_LOG = os.environ.get("ARPWARDEN_HOOK_LOG", "/var/log/arpwarden/hooks.log")


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print("usage: example_hook.py <interface> <mac|count> [ip] [realmac]",
              file=sys.stderr)
        return 2

    fields = ["interface", "mac", "ip", "realmac"] if len(args) != 2 else ["interface", "count"]
    details = " ".join(f"{name}={value}" for name, value in zip(fields, args))
    line = f"{datetime.now().strftime('%Y-%m-%d %H:%M:%S')} {details}"

    print(line)
    try:
        directory = os.path.dirname(HOOK_LOG)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(HOOK_LOG, "a", encoding="utf-8") as f:
            f.write(line + "\n")
    except OSError as e:
        print(f"example_hook: cannot write {HOOK_LOG}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
