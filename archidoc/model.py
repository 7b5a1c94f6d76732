"""Data model shared by the annotation parser, walker and checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class _TextEnum(str, Enum):
    """An enum whose members print as their lower-case value."""

    def __str__(self) -> str:
        return self.value


class C4Level(_TextEnum):
    """The C4 model level an annotated module sits at."""

    CONTAINER = "container"
    COMPONENT = "component"
    UNKNOWN = "unknown"


class PatternStatus(_TextEnum):
    """How far a declared design pattern has been confirmed."""

    PLANNED = "planned"
    VERIFIED = "verified"

    @classmethod
    def parse(cls, text: str) -> "PatternStatus":
        """Read a status word; anything unrecognised counts as planned."""
        try:
            return cls(text.strip().lower())
        except ValueError:
            return cls.PLANNED


class HealthStatus(_TextEnum):
    """Maturity of a single file listed in a module's file table."""

    PLANNED = "planned"
    ACTIVE = "active"
    STABLE = "stable"

    @classmethod
    def parse(cls, text: str) -> "HealthStatus":
        """Read a maturity word; anything unrecognised counts as planned."""
        try:
            return cls(text.strip().lower())
        except ValueError:
            return cls.PLANNED


@dataclass
class Relationship:
    """A declared dependency of one module on another."""

    target: str
    label: str
    protocol: str


@dataclass
class FileEntry:
    """One row of a module's file table."""

    name: str
    pattern: str
    pattern_status: PatternStatus
    purpose: str
    health: HealthStatus


@dataclass
class ModuleDoc:
    """Everything extracted from one annotated module entry file."""

    module_path: str
    content: str
    source_file: str
    c4_level: C4Level
    pattern: str
    pattern_status: PatternStatus
    description: str
    parent_container: str | None = None
    relationships: list[Relationship] = field(default_factory=list)
    files: list[FileEntry] = field(default_factory=list)