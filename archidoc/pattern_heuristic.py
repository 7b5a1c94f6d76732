"""Structural heuristics for design-pattern detection in Rust source.

Each check looks for structural evidence consistent with a pattern, not proof
that the pattern is implemented correctly. They are deliberately permissive.
"""

from __future__ import annotations

import os
from collections.abc import Callable

from archidoc import walker
from archidoc.rust_items import Item, ParseError, parse_file

_OBSERVER_INDICATORS = (
    "mpsc::Sender",
    "mpsc::Receiver",
    "mpsc::channel",
    "crossbeam_channel",
    "broadcast::Sender",
    "watch::Sender",
    "watch::Receiver",
    "Box<dyn Fn",
    "Box<dyn FnMut",
    "Box<dyn FnOnce",
    "Arc<dyn Fn",
    "impl Fn(",
    "impl FnMut(",
    "impl FnOnce(",
    "-> Receiver",
    "-> Sender",
)

_OBSERVER_METHODS = frozenset({
    "subscribe", "unsubscribe", "notify", "on_event", "on_update",
    "on_change", "emit", "publish", "add_listener", "remove_listener",
})

_BUILDER_INDICATORS = ("fn build(self)", "fn build(&self)", "fn build(&mut self)")

_FACTORY_INDICATORS = (
    "-> Box<dyn", "-> Arc<dyn", "-> Rc<dyn",
    "fn create(", "fn create_", "fn make(", "fn make_",
)

_SINGLETON_INDICATORS = (
    "lazy_static!",
    "once_cell::sync::Lazy",
    "OnceLock",
    "OnceCell",
    "static ref ",
    "fn instance()",
    "fn get_instance()",
)

_COMMAND_METHODS = frozenset({"execute", "exec", "run", "invoke", "perform", "undo", "redo"})


def _items(source: str) -> list[Item] | None:
    try:
        return parse_file(source)
    except ParseError:
        return None


def _trait_method_names(items: list[Item]):
    for item in items:
        if item.kind == "trait":
            for method in item.methods:
                yield method.name


def check_observer(source: str) -> bool:
    """Channels, callback types or observer-style trait methods."""
    if any(indicator in source for indicator in _OBSERVER_INDICATORS):
        return True
    items = _items(source)
    if items is None:
        return False
    return any(name in _OBSERVER_METHODS for name in _trait_method_names(items))


def check_strategy(source: str) -> bool:
    """At least one trait definition."""
    items = _items(source)
    return items is not None and any(item.kind == "trait" for item in items)


def check_facade(source: str) -> bool:
    """At least one ``pub use`` or at least two ``pub mod`` declarations."""
    items = _items(source)
    if items is None:
        return False
    pub_use = sum(1 for item in items if item.kind == "use" and item.public)
    pub_mod = sum(1 for item in items if item.kind == "mod" and item.public)
    return pub_use >= 1 or pub_mod >= 2


def check_builder(source: str) -> bool:
    """A ``build`` method, or two or more methods returning ``Self``."""
    items = _items(source)
    for item in items or ():
        if item.kind != "impl":
            continue
        has_build = any(m.name == "build" for m in item.methods)
        self_returns = sum(
            1 for m in item.methods if m.return_type and "Self" in m.return_type
        )
        if has_build or self_returns >= 2:
            return True
    return any(indicator in source for indicator in _BUILDER_INDICATORS)


def check_factory(source: str) -> bool:
    """Functions returning trait objects or named ``create``/``make``."""
    if any(indicator in source for indicator in _FACTORY_INDICATORS):
        return True
    items = _items(source)
    for item in items or ():
        if item.kind == "fn" and item.signature and item.signature.return_type:
            ret = item.signature.return_type
            if "Box < dyn" in ret or "impl " in ret:
                return True
    return False


def check_adapter(source: str) -> bool:
    """A struct with one or two named fields alongside a trait impl."""
    items = _items(source)
    if items is None:
        return False
    wrapper = any(
        item.kind == "struct" and item.fields is not None and 1 <= len(item.fields) <= 2
        for item in items
    )
    trait_impl = any(item.kind == "impl" and item.trait_impl for item in items)
    return wrapper and trait_impl


def check_decorator(source: str) -> bool:
    """A struct holding a boxed trait object alongside a trait impl."""
    if "Box<dyn" not in source and "Arc<dyn" not in source:
        return False
    items = _items(source)
    if items is None:
        return False
    dyn_field = any(
        "Box < dyn" in text or "Arc < dyn" in text
        for item in items
        if item.kind == "struct" and item.fields
        for text in item.fields
    )
    trait_impl = any(item.kind == "impl" and item.trait_impl for item in items)
    return dyn_field and trait_impl


def check_singleton(source: str) -> bool:
    """Static or lazy initialisation, or an ``instance()`` accessor."""
    return any(indicator in source for indicator in _SINGLETON_INDICATORS)


def check_command(source: str) -> bool:
    """A trait with an execute/run/undo-style method."""
    items = _items(source)
    if items is None:
        return False
    return any(name in _COMMAND_METHODS for name in _trait_method_names(items))


_CHECKS: dict[str, Callable[[str], bool]] = {
    "Observer": check_observer,
    "Strategy": check_strategy,
    "Facade": check_facade,
    "Builder": check_builder,
    "Factory": check_factory,
    "Adapter": check_adapter,
    "Decorator": check_decorator,
    "Singleton": check_singleton,
    "Command": check_command,
}


def check_pattern(pattern: str, source: str) -> bool:
    """Run the heuristic for a named pattern; unknown patterns never match."""
    check = _CHECKS.get(pattern)
    return check is not None and check(source)


def check_module_pattern(pattern: str, source_dir: str | os.PathLike[str]) -> bool:
    """True if any ``.rs`` file in the directory passes the pattern heuristic."""
    return any(
        check_pattern(pattern, source)
        for _, source in walker.read_rs_sources(source_dir)
    )