"""Optional cargo-modules integration: import graphs and orphan detection.

Everything here depends on the ``cargo modules`` tool; when it is missing the
functions that run it raise CargoModulesError.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from archidoc.model import ModuleDoc


class CargoModulesError(RuntimeError):
    """cargo-modules is unavailable, failed, or produced unreadable output."""


@dataclass
class ImportGraph:
    """Module paths and the dependencies between them."""

    nodes: set[str] = field(default_factory=set)
    edges: list[tuple[str, str]] = field(default_factory=list)

    def has_dependency(self, source: str, target: str) -> bool:
        """True if ``source`` depends on ``target``."""
        return (source, target) in self.edges

    def get_dependencies(self, module: str) -> list[str]:
        """All modules that ``module`` depends on, in edge order."""
        return [target for origin, target in self.edges if origin == module]


class WarningKind(Enum):
    """How a declared relationship disagrees with the import graph."""

    NO_IMPORT = "no_import"
    UNDECLARED = "undeclared"


@dataclass
class RelationshipWarning:
    """A mismatch between a documented relationship and the actual imports."""

    module: str
    target: str
    kind: WarningKind


def _run_cargo(args: list[str], cwd: str | os.PathLike[str] | None = None):
    return subprocess.run(["cargo", *args], cwd=cwd, capture_output=True)


def check_cargo_modules_available() -> bool:
    """True if ``cargo modules --version`` runs successfully."""
    try:
        return _run_cargo(["modules", "--version"]).returncode == 0
    except OSError:
        return False


def _run_cargo_modules(args: list[str], root: str | os.PathLike[str]) -> str:
    if not check_cargo_modules_available():
        raise CargoModulesError("cargo-modules is not installed")
    try:
        output = _run_cargo(["modules", *args], cwd=root)
    except OSError as exc:
        raise CargoModulesError(f"Failed to run cargo modules: {exc}") from exc
    if output.returncode != 0:
        stderr = output.stderr.decode("utf-8", errors="replace")
        raise CargoModulesError(f"cargo modules failed: {stderr}")
    return output.stdout.decode("utf-8", errors="replace")


def extract_import_graph(root: str | os.PathLike[str]) -> ImportGraph:
    """Run cargo-modules in ``root`` and read its DOT dependency graph."""
    stdout = _run_cargo_modules(["dependencies", "--layout", "dot"], root)
    return parse_dot_output(stdout)


def parse_dot_output(dot: str) -> ImportGraph:
    """Read ``"from" -> "to"`` edges from DOT text into an ImportGraph."""
    graph = ImportGraph()
    for line in dot.splitlines():
        trimmed = line.strip()
        from_part, arrow, to_part = trimmed.partition("->")
        if not arrow:
            continue
        source = crate_path_to_module(extract_quoted(from_part.strip()))
        target = crate_path_to_module(extract_quoted(to_part.strip()))
        graph.nodes.add(source)
        graph.nodes.add(target)
        graph.edges.append((source, target))
    return graph


def extract_quoted(text: str) -> str:
    """Return the contents of the first double-quoted string in ``text``."""
    start = text.find('"')
    if start >= 0:
        end = text.find('"', start + 1)
        if end >= 0:
            return text[start + 1:end]
    raise CargoModulesError(f"Failed to extract quoted string from: {text}")


def crate_path_to_module(path: str) -> str:
    """Turn ``crate::a::b`` into ``a.b``; a bare crate name is kept as is."""
    parts = path.split("::")
    if len(parts) <= 1:
        return parts[0]
    return ".".join(parts[1:])


def validate_relationships(
    docs: Sequence[ModuleDoc], graph: ImportGraph
) -> list[RelationshipWarning]:
    """Compare declared relationships with the actual import graph."""
    declared = {
        doc.module_path: list(dict.fromkeys(rel.target for rel in doc.relationships))
        for doc in docs
    }

    warnings: list[RelationshipWarning] = []
    for doc in docs:
        module = doc.module_path
        actual = list(dict.fromkeys(graph.get_dependencies(module)))
        declared_deps = declared.get(module, [])

        warnings.extend(
            RelationshipWarning(module, target, WarningKind.NO_IMPORT)
            for target in declared_deps
            if target not in actual
        )
        warnings.extend(
            RelationshipWarning(module, target, WarningKind.UNDECLARED)
            for target in actual
            if target not in declared_deps
        )
    return warnings


def detect_orphans(docs: Sequence[ModuleDoc], graph: ImportGraph) -> list[str]:
    """Modules present in the graph that have no documentation, sorted."""
    documented = {doc.module_path for doc in docs}
    return sorted(node for node in graph.nodes if node not in documented)


def detect_orphans_cmd(root: str | os.PathLike[str]) -> list[str]:
    """Run ``cargo modules orphans`` in ``root`` and return the modules it lists."""
    stdout = _run_cargo_modules(["orphans"], root)
    return [
        crate_path_to_module(line.strip())
        for line in stdout.splitlines()
        if line.strip()
    ]