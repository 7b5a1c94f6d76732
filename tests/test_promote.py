from pathlib import Path

from archidoc.model import C4Level, ModuleDoc, PatternStatus
from archidoc.promote import auto_promote


def make_doc(module_path, source_file, pattern, status=PatternStatus.PLANNED):
    return ModuleDoc(
        module_path=module_path,
        content="test",
        source_file=str(source_file),
        c4_level=C4Level.COMPONENT,
        pattern=pattern,
        pattern_status=status,
        description="test",
    )


def module_with(tmp_path: Path, name: str, code: str) -> Path:
    directory = tmp_path / name
    directory.mkdir()
    entry = directory / "mod.rs"
    entry.write_text("//! @c4 component\n", encoding="utf-8")
    (directory / "code.rs").write_text(code, encoding="utf-8")
    return entry


def test_promotes_module_with_evidence(tmp_path):
    entry = module_with(tmp_path, "calc", "pub trait Algo { fn run(&self); }\n")
    docs = [make_doc("calc", entry, "Strategy")]
    assert auto_promote(docs) == 1
    assert docs[0].pattern_status == PatternStatus.VERIFIED


def test_second_run_promotes_nothing(tmp_path):
    entry = module_with(tmp_path, "calc", "pub trait Algo { fn run(&self); }\n")
    docs = [make_doc("calc", entry, "Strategy")]
    auto_promote(docs)
    assert auto_promote(docs) == 0
    assert docs[0].pattern_status == PatternStatus.VERIFIED


def test_no_evidence_stays_planned(tmp_path):
    entry = module_with(tmp_path, "calc", "pub struct Plain;\n")
    docs = [make_doc("calc", entry, "Strategy")]
    assert auto_promote(docs) == 0
    assert docs[0].pattern_status == PatternStatus.PLANNED


def test_pattern_without_heuristic_is_skipped(tmp_path):
    entry = module_with(tmp_path, "bus", "pub trait Algo { fn run(&self); }\n")
    docs = [make_doc("bus", entry, "Mediator")]
    assert auto_promote(docs) == 0
    assert docs[0].pattern_status == PatternStatus.PLANNED


def test_counts_only_promoted_modules(tmp_path):
    strategy = module_with(tmp_path, "calc", "pub trait Algo { fn run(&self); }\n")
    facade = module_with(tmp_path, "api", "mod a;\n")
    singleton = module_with(tmp_path, "cfg", "static CFG: OnceLock<u8> = OnceLock::new();\n")
    docs = [
        make_doc("calc", strategy, "Strategy"),
        make_doc("api", facade, "Facade"),
        make_doc("cfg", singleton, "Singleton"),
    ]
    assert auto_promote(docs) == 2
    assert [d.pattern_status for d in docs] == [
        PatternStatus.VERIFIED,
        PatternStatus.PLANNED,
        PatternStatus.VERIFIED,
    ]


def test_empty_source_file_is_skipped():
    docs = [make_doc("calc", "", "Strategy")]
    assert auto_promote(docs) == 0
    assert docs[0].pattern_status == PatternStatus.PLANNED