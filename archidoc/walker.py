"""Discovery of annotated module entry files in a Rust source tree."""

from __future__ import annotations

import os
from pathlib import Path, PurePath

from archidoc import parser
from archidoc.model import ModuleDoc
from archidoc.path_resolver import path_to_module_name

_STANDARD_ENTRIES = ("lib.rs", "mod.rs")
_C4_MARKERS = ("@c4 container", "@c4 component")


def _rust_files(root: Path):
    """Yield every ``.rs`` file under ``root`` that is not inside a ``target`` dir."""
    for directory, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            if not filename.endswith(".rs"):
                continue
            path = Path(directory) / filename
            if "target" in PurePath(path).parts:
                continue
            yield path, filename


def extract_all_docs(root: str | os.PathLike[str]) -> list[ModuleDoc]:
    """Walk a source tree and build a ModuleDoc for every annotated module file.

    ``lib.rs`` and ``mod.rs`` are included whenever they carry ``//!`` docs;
    any other ``.rs`` file needs a ``@c4 container`` or ``@c4 component``
    marker. When two files map to the same module, ``mod.rs`` wins.
    """
    root = Path(root)
    candidates = sorted(
        _rust_files(root), key=lambda item: item[1] not in _STANDARD_ENTRIES
    )

    docs: list[ModuleDoc] = []
    seen: set[str] = set()

    for path, filename in candidates:
        content = parser.archidoc_from_file(path)
        if content is None or not content.strip():
            continue

        if filename not in _STANDARD_ENTRIES and not any(
            marker in content for marker in _C4_MARKERS
        ):
            continue

        module_path = path_to_module_name(path, root, filename)
        if module_path in seen:
            continue
        seen.add(module_path)

        docs.append(
            ModuleDoc(
                module_path=module_path,
                content=content,
                source_file=str(path),
                c4_level=parser.extract_c4_level(content),
                pattern=parser.extract_pattern(content),
                pattern_status=parser.extract_pattern_status(content),
                description=parser.extract_description(content),
                parent_container=parser.extract_parent_container(module_path),
                relationships=parser.extract_relationships(content),
                files=parser.extract_file_table(content),
            )
        )

    docs.sort(key=lambda doc: doc.module_path)
    return docs


def read_rs_sources(directory: str | os.PathLike[str]) -> list[tuple[str, str]]:
    """Return ``(filename, source)`` for each readable ``.rs`` file in a directory."""
    try:
        entries = sorted(Path(directory).iterdir())
    except OSError:
        return []

    sources = []
    for path in entries:
        if path.suffix != ".rs":
            continue
        try:
            sources.append((path.name, path.read_text(encoding="utf-8")))
        except (OSError, UnicodeDecodeError):
            continue
    return sources