"""Promotion of planned pattern labels to verified when heuristics agree."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import PurePath

from archidoc import pattern_heuristic
from archidoc.model import ModuleDoc, PatternStatus

VERIFIABLE_PATTERNS = frozenset({
    "Observer", "Strategy", "Facade", "Builder", "Factory",
    "Adapter", "Decorator", "Singleton", "Command",
})


def auto_promote(docs: Iterable[ModuleDoc]) -> int:
    """Mark planned patterns verified where their module shows structural evidence.

    Modules already verified, or whose pattern has no heuristic, are left
    alone. Returns the number of modules promoted.
    """
    promoted = 0

    for doc in docs:
        if doc.pattern_status != PatternStatus.PLANNED:
            continue
        if doc.pattern not in VERIFIABLE_PATTERNS:
            continue
        if not PurePath(doc.source_file).name:
            continue
        directory = os.path.dirname(doc.source_file)
        if directory and pattern_heuristic.check_module_pattern(doc.pattern, directory):
            doc.pattern_status = PatternStatus.VERIFIED
            promoted += 1

    return promoted