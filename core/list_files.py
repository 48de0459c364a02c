"""
Reader for the line-oriented list files (bindings, denylist, allowlist).

    # full-line comment
    eth2 00:11:22:33:44:55 192.168.1.10   # trailing comment

A missing file yields no lines: the feature it feeds is simply inert.
"""

import logging
import os
from typing import Iterator, List, Tuple


logger = logging.getLogger(__name__)


def iter_list_fields(path: str) -> Iterator[Tuple[int, List[str]]]:
    """
    Yield (line number, fields) for every non-comment, non-empty line.

    Args:
        path: List file to read. Empty or missing paths yield nothing.
    """
    if not path or not os.path.exists(path):
        logger.info(f"List file {path or '(none)'} not found, using no entries")
        return

    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        for lineno, line in enumerate(f, 1):
            content = line.split('#', 1)[0].strip()
            if not content:
                continue
            yield lineno, content.split()
