"""Parsing of ``//!`` architecture annotations in Rust source files."""

from __future__ import annotations

import os

from archidoc.model import (
    C4Level,
    FileEntry,
    HealthStatus,
    PatternStatus,
    Relationship,
)

_KNOWN_PATTERNS = (
    "Mediator",
    "Observer",
    "Strategy",
    "Facade",
    "Adapter",
    "Repository",
    "Singleton",
    "Factory",
    "Builder",
    "Decorator",
    "Active Object",
    "Memento",
    "Command",
    "Chain of Responsibility",
    "Registry",
    "Composite",
    "Interpreter",
    "Flyweight",
    "Publisher",
)

_DESCRIPTION_SKIP_PREFIXES = ("#", "@c4 ", "|", "GoF:")

_USES_PREFIX = "@c4 uses "


def _lines(text: str) -> list[str]:
    """Split text into lines on ``\\n``, dropping a trailing ``\\r`` from each."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _strip_doc_prefix(trimmed: str) -> str:
    if trimmed == "//!":
        return ""
    if trimmed.startswith("//! "):
        return trimmed[4:]
    return trimmed[3:]


def archidoc_from_file(path: str | os.PathLike[str]) -> str | None:
    """Return the leading ``//!`` doc comment block of a file, prefixes stripped.

    Returns None if the file cannot be read or has no leading doc lines.
    """
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            content = handle.read()
    except (OSError, UnicodeDecodeError):
        return None

    doc_lines = []
    for line in _lines(content):
        trimmed = line.strip()
        if trimmed.startswith("//!"):
            doc_lines.append(_strip_doc_prefix(trimmed))
        elif trimmed:
            break

    return "\n".join(doc_lines) if doc_lines else None


def extract_c4_level(content: str) -> C4Level:
    """Read the ``@c4 container`` / ``@c4 component`` marker."""
    if "@c4 container" in content:
        return C4Level.CONTAINER
    if "@c4 component" in content:
        return C4Level.COMPONENT
    return C4Level.UNKNOWN


def extract_pattern(content: str) -> str:
    """Return the first known design pattern named in the content, or ``--``."""
    return next((name for name in _KNOWN_PATTERNS if name in content), "--")


def extract_pattern_status(content: str) -> PatternStatus:
    """Verified if the content says ``(verified)``, otherwise planned."""
    if "(verified)" in content:
        return PatternStatus.VERIFIED
    return PatternStatus.PLANNED


def extract_description(content: str) -> str:
    """Return the first line that is not a header, marker, table row or GoF line."""
    for line in _lines(content):
        trimmed = line.strip()
        if trimmed and not trimmed.startswith(_DESCRIPTION_SKIP_PREFIXES):
            return trimmed
    return "*No description*"


def extract_parent_container(module_path: str) -> str | None:
    """Return the top-level segment of a dotted module path, if it has a parent."""
    if "." in module_path:
        return module_path.split(".", 1)[0]
    return None


def _is_table_header(trimmed: str) -> bool:
    return (
        trimmed.startswith("|")
        and ("File" in trimmed or "file" in trimmed)
        and ("Pattern" in trimmed or "pattern" in trimmed)
    )


def extract_file_table(content: str) -> list[FileEntry]:
    """Parse the markdown ``| File | Pattern | Purpose | Health |`` table."""
    entries: list[FileEntry] = []
    in_table = False
    header_seen = False

    for line in _lines(content):
        trimmed = line.strip()

        if not in_table:
            if _is_table_header(trimmed):
                in_table = True
            continue

        if not header_seen:
            if trimmed.startswith("|") and "---" in trimmed:
                header_seen = True
            continue

        if not trimmed.startswith("|"):
            break

        cells = [cell.strip() for cell in trimmed.split("|") if cell.strip()]
        if len(cells) < 4:
            continue

        pattern, pattern_status = parse_pattern_field(cells[1])
        entries.append(
            FileEntry(
                name=cells[0].strip("`").strip(),
                pattern=pattern,
                pattern_status=pattern_status,
                purpose=cells[2].strip(),
                health=HealthStatus.parse(cells[3]),
            )
        )

    return entries


def parse_pattern_field(field: str) -> tuple[str, PatternStatus]:
    """Split a field like ``Strategy (verified)`` into pattern and status."""
    trimmed = field.strip()
    pattern, paren, rest = trimmed.partition("(")
    if not paren:
        return trimmed, PatternStatus.PLANNED
    return pattern.strip(), PatternStatus.parse(rest.rstrip(")").strip())


def extract_relationships(content: str) -> list[Relationship]:
    """Parse ``@c4 uses target "label" "protocol"`` lines."""
    relationships: list[Relationship] = []

    for line in _lines(content):
        trimmed = line.strip()
        if not trimmed.startswith(_USES_PREFIX):
            continue
        rest = trimmed[len(_USES_PREFIX):]
        target, quote, quoted = rest.partition('"')
        if not quote:
            continue
        parts = [part for part in (quote + quoted).split('"') if part.strip()]
        if len(parts) >= 2:
            relationships.append(
                Relationship(target=target.strip(), label=parts[0], protocol=parts[1])
            )

    return relationships