import pytest

from archidoc.rust_items import ParseError, parse_file


def test_trait_methods_are_listed():
    items = parse_file("pub trait EventBus { fn subscribe(&mut self); fn notify(&self); }")
    assert len(items) == 1
    assert items[0].kind == "trait"
    assert items[0].name == "EventBus"
    assert items[0].public is True
    assert [m.name for m in items[0].methods] == ["subscribe", "notify"]


def test_restricted_visibility_is_not_public():
    items = parse_file("pub(crate) mod calc; mod store;")
    assert [(i.kind, i.public) for i in items] == [("mod", False), ("mod", False)]


def test_trait_impl_detection():
    items = parse_file("impl Foo { fn a(&self) {} }\nimpl Display for Foo { fn fmt(&self) {} }")
    assert [i.trait_impl for i in items] == [False, True]


def test_return_type_is_token_spaced():
    items = parse_file("pub fn make() -> Box<dyn Shape> { Box::new(Circle) }")
    assert items[0].signature.name == "make"
    assert items[0].signature.return_type == "Box < dyn Shape >"


def test_struct_named_fields_counted_across_generic_commas():
    items = parse_file("struct Wrap { map: HashMap<String, u32>, inner: Vec<u8> }")
    assert len(items[0].fields) == 2
    assert items[0].fields[0].startswith("map")


def test_tuple_struct_has_no_named_fields():
    assert parse_file("struct Meters(f64);")[0].fields is None


def test_comments_strings_and_lifetimes_are_skipped():
    source = (
        "// trait Hidden {}\n/* struct Nope { } */\n"
        "fn f<'a>(x: &'a str) -> char { let _ = \"}{\"; '}' }"
    )
    items = parse_file(source)
    assert [i.kind for i in items] == ["fn"]


def test_macro_invocations_and_attributes():
    items = parse_file("#![allow(dead_code)]\nlazy_static! { static ref X: u8 = 1; }\n#[derive(Debug)]\nstruct S;")
    assert [i.kind for i in items] == ["macro", "struct"]


def test_unbalanced_braces_raise():
    with pytest.raises(ParseError):
        parse_file("fn f() {")


def test_stray_statement_raises():
    with pytest.raises(ParseError):
        parse_file("let x = 1;")