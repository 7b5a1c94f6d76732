"""Architectural fitness functions over documented modules."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import PurePath

from archidoc import pattern_heuristic
from archidoc.model import ModuleDoc


@dataclass
class FitnessFailure:
    """A single module that failed a fitness check."""

    module_path: str
    source_file: str
    reason: str


@dataclass
class FitnessResult:
    """Outcome of running one fitness function across modules."""

    passed: bool
    checked: int
    failures: list[FitnessFailure] = field(default_factory=list)


def _source_dir(source_file: str) -> str | None:
    """Directory holding the source file; None if it has none, "" if it is bare."""
    if not PurePath(source_file).name:
        return None
    return os.path.dirname(source_file)


def _check_modules_for_pattern(
    docs: Sequence[ModuleDoc], pattern: str, failure_reason: str
) -> FitnessResult:
    checked = 0
    failures: list[FitnessFailure] = []

    for doc in docs:
        if doc.pattern != pattern:
            continue
        checked += 1

        directory = _source_dir(doc.source_file)
        if directory is None:
            failures.append(
                FitnessFailure(
                    doc.module_path,
                    doc.source_file,
                    "could not determine source directory",
                )
            )
            continue

        if not (directory and pattern_heuristic.check_module_pattern(pattern, directory)):
            failures.append(
                FitnessFailure(doc.module_path, doc.source_file, failure_reason)
            )

    return FitnessResult(passed=not failures, checked=checked, failures=failures)


def all_strategy_modules_define_a_trait(docs: Sequence[ModuleDoc]) -> FitnessResult:
    """Every Strategy module must define at least one trait."""
    return _check_modules_for_pattern(docs, "Strategy", "no trait definition found")


def all_facade_modules_reexport_submodules(docs: Sequence[ModuleDoc]) -> FitnessResult:
    """Every Facade module must re-export or publicly declare submodules."""
    return _check_modules_for_pattern(
        docs, "Facade", "no pub use re-exports or pub mod declarations found"
    )


def all_observer_modules_have_channels_or_callbacks(
    docs: Sequence[ModuleDoc],
) -> FitnessResult:
    """Every Observer module must use channels or callbacks."""
    return _check_modules_for_pattern(
        docs, "Observer", "no channel types or callback parameters found"
    )


_FITNESS_FUNCTIONS: dict[str, Callable[[Sequence[ModuleDoc]], FitnessResult]] = {
    "all_strategy_modules_define_a_trait": all_strategy_modules_define_a_trait,
    "all_facade_modules_reexport_submodules": all_facade_modules_reexport_submodules,
    "all_observer_modules_have_channels_or_callbacks": (
        all_observer_modules_have_channels_or_callbacks
    ),
}


def run_fitness(name: str, docs: Sequence[ModuleDoc]) -> FitnessResult | None:
    """Run a fitness function by name; None if no such function exists."""
    function = _FITNESS_FUNCTIONS.get(name)
    return None if function is None else function(docs)


def format_fitness_result(name: str, result: FitnessResult) -> str:
    """Render a fitness result as human-readable text."""
    if result.passed:
        return f"PASS: {name} — checked {result.checked} module(s)\n"

    lines = [
        f"FAIL: {name} — {len(result.failures)}/{result.checked} module(s) failed\n"
    ]
    lines.extend(
        f"  {failure.module_path} ({failure.source_file}): {failure.reason}\n"
        for failure in result.failures
    )
    return "".join(lines)