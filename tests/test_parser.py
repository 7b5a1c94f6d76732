from archidoc.model import C4Level, HealthStatus, PatternStatus
from archidoc.parser import (
    archidoc_from_file,
    extract_c4_level,
    extract_description,
    extract_file_table,
    extract_parent_container,
    extract_pattern,
    extract_pattern_status,
    extract_relationships,
    parse_pattern_field,
)

TABLE = (
    "| File | Pattern | Purpose | Health |\n"
    "|------|---------|---------|--------|\n"
    "| `core.rs` | Facade | Entry point | stable |\n"
    "| `calc.rs` | Strategy (verified) | Calculations | active |\n"
)


def test_archidoc_from_file_strips_prefixes(tmp_path):
    source = tmp_path / "router.rs"
    source.write_text("//! @c4 container\n//!\n//! # Router\n//!\n//! HTTP request router\n")
    assert archidoc_from_file(source) == "@c4 container\n\n# Router\n\nHTTP request router"


def test_archidoc_from_file_stops_at_code(tmp_path):
    source = tmp_path / "lib.rs"
    source.write_text("//! first\n\n//! second\nuse foo;\n//! later\n")
    assert archidoc_from_file(source) == "first\nsecond"


def test_archidoc_from_file_without_docs(tmp_path):
    source = tmp_path / "plain.rs"
    source.write_text("fn main() {}\n")
    assert archidoc_from_file(source) is None


def test_archidoc_from_file_missing(tmp_path):
    assert archidoc_from_file(tmp_path / "absent.rs") is None


def test_extract_c4_level():
    assert extract_c4_level("@c4 container\n# Bus") is C4Level.CONTAINER
    assert extract_c4_level("@c4 component") is C4Level.COMPONENT
    assert extract_c4_level("# Nothing") is C4Level.UNKNOWN


def test_extract_pattern_first_in_priority_order():
    assert extract_pattern("GoF: Strategy with Mediator") == "Mediator"
    assert extract_pattern("GoF: Builder") == "Builder"
    assert extract_pattern("no pattern here") == "--"


def test_extract_pattern_status():
    assert extract_pattern_status("GoF: Facade (verified)") is PatternStatus.VERIFIED
    assert extract_pattern_status("GoF: Facade") is PatternStatus.PLANNED


def test_extract_description_skips_markers():
    content = "@c4 container\n\n# Bus\n\nGoF: Mediator\n| a |\n  Central messaging  \n"
    assert extract_description(content) == "Central messaging"


def test_extract_description_default():
    assert extract_description("@c4 container\n# Title\n") == "*No description*"


def test_extract_parent_container():
    assert extract_parent_container("bus.calc.indicators") == "bus"
    assert extract_parent_container("bus") is None


def test_extract_file_table():
    entries = extract_file_table("# Intro\n\n" + TABLE + "\nafter table\n| `x.rs` | A | B | stable |\n")
    assert [entry.name for entry in entries] == ["core.rs", "calc.rs"]
    core, calc = entries
    assert core.pattern == "Facade"
    assert core.pattern_status is PatternStatus.PLANNED
    assert core.purpose == "Entry point"
    assert core.health is HealthStatus.STABLE
    assert calc.pattern == "Strategy"
    assert calc.pattern_status is PatternStatus.VERIFIED
    assert calc.health is HealthStatus.ACTIVE


def test_extract_file_table_skips_short_rows():
    content = TABLE + "| `short.rs` | Facade |\n"
    assert len(extract_file_table(content)) == 2


def test_extract_file_table_absent():
    assert extract_file_table("no table") == []


def test_parse_pattern_field():
    assert parse_pattern_field(" Strategy (verified) ") == ("Strategy", PatternStatus.VERIFIED)
    assert parse_pattern_field("Observer (planned)") == ("Observer", PatternStatus.PLANNED)
    assert parse_pattern_field("--") == ("--", PatternStatus.PLANNED)


def test_extract_relationships():
    content = (
        "@c4 uses bus \"Routes commands\" \"crossbeam\"\n"
        "@c4 uses broken \"only label\"\n"
        "@c4 uses noquotes here\n"
        "  @c4 uses store \"Persists\" \"sqlx\"  \n"
    )
    rels = extract_relationships(content)
    assert [(r.target, r.label, r.protocol) for r in rels] == [
        ("bus", "Routes commands", "crossbeam"),
        ("store", "Persists", "sqlx"),
    ]