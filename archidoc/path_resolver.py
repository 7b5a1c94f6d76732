"""Conversion of module entry file paths to dotted module names."""

from __future__ import annotations

import os
from pathlib import PurePath


def path_to_module_name(
    path: str | os.PathLike[str], root: str | os.PathLike[str], filename: str
) -> str:
    """Return the dotted module name of ``path`` relative to ``root``.

    ``lib.rs`` maps to ``_lib``; ``mod.rs`` takes its directory's name; any
    other ``.rs`` file adds its stem to the directory path.
    """
    full = PurePath(path)
    try:
        relative = full.relative_to(PurePath(root))
    except ValueError:
        relative = full

    if filename == "lib.rs":
        return "_lib"

    parts = list(relative.parent.parts)

    if filename == "mod.rs":
        return ".".join(parts)

    module_name = filename[:-3] if filename.endswith(".rs") else filename
    return ".".join([*parts, module_name])