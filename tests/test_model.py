import pytest

from archidoc.model import (
    C4Level,
    FileEntry,
    HealthStatus,
    ModuleDoc,
    PatternStatus,
    Relationship,
)


def _doc(level):
    return ModuleDoc(
        module_path="bus",
        content="@c4 container",
        source_file="bus/mod.rs",
        c4_level=level,
        pattern="--",
        pattern_status=PatternStatus.PLANNED,
        description="Message bus",
    )


@pytest.mark.parametrize(
    ("level", "expected"),
    [(C4Level.CONTAINER, "container"), (C4Level.COMPONENT, "component")],
)
def test_c4_level_prints_as_value(level, expected):
    doc = _doc(level)
    assert doc.c4_level is level
    assert str(doc.c4_level) == expected


@pytest.mark.parametrize("status", list(PatternStatus))
def test_pattern_status_round_trip(status):
    assert PatternStatus.parse(str(status)) is status


def test_pattern_status_parse_verified_with_spacing_and_case():
    assert PatternStatus.parse("  Verified ") is PatternStatus.VERIFIED


def test_pattern_status_unknown_defaults_to_planned():
    assert PatternStatus.parse("maybe") is PatternStatus.PLANNED


@pytest.mark.parametrize("status", list(HealthStatus))
def test_health_status_round_trip(status):
    assert HealthStatus.parse(str(status)) is status


def test_health_status_values():
    assert str(HealthStatus.parse("active")) == "active"
    assert HealthStatus.parse("stable") is HealthStatus.STABLE


def test_health_status_unknown_defaults_to_planned():
    assert HealthStatus.parse("???") is HealthStatus.PLANNED


def test_module_doc_defaults_and_equality():
    first = ModuleDoc(
        module_path="core",
        content="test",
        source_file="test.rs",
        c4_level=C4Level.COMPONENT,
        pattern="--",
        pattern_status=PatternStatus.PLANNED,
        description="test",
    )
    second = ModuleDoc(
        module_path="core",
        content="test",
        source_file="test.rs",
        c4_level=C4Level.COMPONENT,
        pattern="--",
        pattern_status=PatternStatus.PLANNED,
        description="test",
    )
    assert first == second
    assert first.parent_container is None
    assert first.relationships == []
    assert first.files == []
    first.relationships.append(Relationship("utils", "test", "Rust"))
    assert second.relationships == []
    assert first != second


def test_file_entry_fields():
    entry = FileEntry("core.rs", "Facade", PatternStatus.VERIFIED, "Entry point", HealthStatus.STABLE)
    assert entry.name == "core.rs"
    assert entry.pattern_status is PatternStatus.VERIFIED
    assert entry.health is HealthStatus.STABLE