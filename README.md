# archidoc

Extract architecture information from annotated Rust source trees.

`archidoc` reads the leading `//!` doc comments of `lib.rs`, `mod.rs` and
flat module files. It recognises C4 markers (`@c4 container`,
`@c4 component`), design-pattern names, `@c4 uses` relationships and
markdown file tables, and turns each annotated module into a `ModuleDoc`
record. On top of that it can:

- look for structural evidence of common design patterns,
- promote planned pattern labels to verified,
- run architectural fitness checks,
- compare declared relationships with the import graph reported by
  `cargo modules`.

## Installing

```
pip install .
```

There are no third-party dependencies. The functions in
`archidoc.cargo_modules` that run `cargo modules` need the `cargo-modules`
tool on `PATH`. When it is missing or fails, they raise `CargoModulesError`.

## Annotating a module

```rust
//! @c4 container
//!
//! # Bus
//!
//! Central messaging backbone
//!
//! GoF: Mediator
//!
//! @c4 uses engine "Routes commands" "crossbeam"
//!
//! | File | Pattern | Purpose | Health |
//! |------|---------|---------|--------|
//! | `lanes.rs` | Observer (verified) | Event routing | active |
```

`lib.rs` and `mod.rs` are picked up whenever they carry `//!` docs. Any
other `.rs` file is only picked up when it has a `@c4 container` or
`@c4 component` marker. Files inside a `target` directory are skipped.

Module names are dotted paths relative to the walked root:

| File | Module name |
|------|-------------|
| `lib.rs` | `_lib` |
| `bus/mod.rs` | `bus` |
| `router.rs` | `router` |
| `bus/calc.rs` | `bus.calc` |

When both `foo/mod.rs` and `foo.rs` exist, `foo/mod.rs` is used.

## Using the library

```python
from pathlib import Path

from archidoc.walker import extract_all_docs
from archidoc.promote import auto_promote
from archidoc.fitness import run_fitness, format_fitness_result

docs = extract_all_docs(Path("src"))
for doc in docs:
    print(doc.module_path, doc.c4_level, doc.pattern, doc.description)

promoted = auto_promote(docs)
print(f"{promoted} pattern(s) promoted to verified")

result = run_fitness("all_strategy_modules_define_a_trait", docs)
print(format_fitness_result("all_strategy_modules_define_a_trait", result), end="")
```

### Modules

- `archidoc.model` holds the data classes: `ModuleDoc`, `FileEntry` and
  `Relationship`. It also holds the enums `C4Level`, `PatternStatus` and
  `HealthStatus`. `PatternStatus.parse` and `HealthStatus.parse` treat
  unknown words as `planned`.
- `archidoc.parser` holds the annotation extractors. They are
  `archidoc_from_file`, `extract_c4_level`, `extract_pattern`,
  `extract_pattern_status`, `extract_description`,
  `extract_parent_container`, `extract_file_table`, `parse_pattern_field`
  and `extract_relationships`.
- `archidoc.path_resolver` provides `path_to_module_name`.
- `archidoc.walker` provides `extract_all_docs`, which returns records
  sorted by module path. It also provides `read_rs_sources`.
- `archidoc.rust_items` provides `parse_file`, a small reader for the
  top-level items of a Rust file. It raises `ParseError` on malformed input.

### Pattern heuristics

`archidoc.pattern_heuristic` offers these checks:

- `check_observer`
- `check_strategy`
- `check_facade`
- `check_builder`
- `check_factory`
- `check_adapter`
- `check_decorator`
- `check_singleton`
- `check_command`

Each takes Rust source text and reports whether it shows structural
evidence of that pattern. This is evidence, not proof.

`check_pattern(name, source)` picks the check by name. It returns `False`
for an unknown name. `check_module_pattern(name, directory)` is true if any
`.rs` file in the directory passes.

### Fitness functions

Three named checks are available through `run_fitness`:

- `all_strategy_modules_define_a_trait`
- `all_facade_modules_reexport_submodules`
- `all_observer_modules_have_channels_or_callbacks`

Each returns a `FitnessResult` with `passed`, `checked` and a list of
`FitnessFailure`. An unknown name returns `None`.

### Import graph validation

```python
from pathlib import Path

from archidoc.cargo_modules import (
    extract_import_graph,
    validate_relationships,
    detect_orphans,
)

graph = extract_import_graph(Path("."))
for warning in validate_relationships(docs, graph):
    print(warning.module, warning.target, warning.kind)
print(detect_orphans(docs, graph))
```

Each warning's `kind` is one of two values. `WarningKind.NO_IMPORT` means
the relationship is declared but there is no import. `WarningKind.UNDECLARED`
means there is an import but no declaration.

`parse_dot_output` reads DOT text that you already have.
`detect_orphans_cmd(root)` runs `cargo modules orphans` itself.

## What this package does not do

`archidoc` is a library only. It has:

- no command-line program,
- no output files such as rendered architecture documents or diagrams,
- no serialized intermediate format,
- no health or drift reports.

It produces the `ModuleDoc` records and check results described above. Turning
them into documents is left to the caller.