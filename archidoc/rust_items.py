"""A small structural reader for the top-level items of a Rust source file."""

from __future__ import annotations

import re
from dataclasses import dataclass, field


class ParseError(ValueError):
    """Raised when the source is not well-formed enough to read its items."""


@dataclass(frozen=True)
class Function:
    """A function signature: its name and, if written, its return type."""

    name: str
    return_type: str | None = None


@dataclass
class Item:
    """One item of a Rust file or of a trait/impl body."""

    kind: str
    name: str | None = None
    public: bool = False
    trait_impl: bool = False
    methods: list[Function] = field(default_factory=list)
    fields: list[str] | None = None
    signature: Function | None = None


_RAW_STRING = re.compile(r'b?r(#*)"')
_PAIRS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {v: k for k, v in _PAIRS.items()}
_TWO_CHAR = ("->", "::", "=>")
_QUALIFIERS = ("unsafe", "async", "default", "extern", "const")
_KEYWORDS = {
    "fn", "struct", "enum", "union", "trait", "impl", "mod",
    "use", "const", "static", "type", "extern", "macro_rules",
}
_SEMICOLON_KINDS = {"const", "static", "use", "type", "extern crate"}


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def _scan_word(src: str, i: int) -> int:
    while i < len(src) and (src[i].isalnum() or src[i] == "_"):
        i += 1
    return i


def _tokenize(src: str) -> list[str]:
    tokens: list[str] = []
    i, n = 0, len(src)
    while i < n:
        ch = src[i]
        if ch.isspace():
            i += 1
        elif src.startswith("//", i):
            end = src.find("\n", i)
            i = n if end < 0 else end
        elif src.startswith("/*", i):
            depth, i = 1, i + 2
            while i < n and depth:
                if src.startswith("/*", i):
                    depth, i = depth + 1, i + 2
                elif src.startswith("*/", i):
                    depth, i = depth - 1, i + 2
                else:
                    i += 1
            if depth:
                raise ParseError("unterminated block comment")
        elif (raw := _RAW_STRING.match(src, i)) is not None:
            closing = '"' + raw.group(1)
            end = src.find(closing, raw.end())
            if end < 0:
                raise ParseError("unterminated raw string")
            stop = end + len(closing)
            tokens.append(src[i:stop])
            i = stop
        elif ch == '"' or src.startswith('b"', i):
            j = i + (2 if ch == "b" else 1)
            while j < n and src[j] != '"':
                j += 2 if src[j] == "\\" else 1
            if j >= n:
                raise ParseError("unterminated string literal")
            tokens.append(src[i:j + 1])
            i = j + 1
        elif ch == "'" or src.startswith("b'", i):
            k = i + (2 if ch == "b" else 1)
            if k < n and src[k] == "\\":
                end = src.find("'", k + 2)
                if end < 0:
                    raise ParseError("unterminated character literal")
                stop = end + 1
            elif k + 1 < n and src[k + 1] == "'":
                stop = k + 2
            else:
                stop = _scan_word(src, k)
                if stop == k:
                    raise ParseError("stray quote")
            tokens.append(src[i:stop])
            i = stop
        elif _is_ident_start(ch) or ch.isdigit():
            stop = _scan_word(src, i)
            tokens.append(src[i:stop])
            i = stop
        elif src[i:i + 2] in _TWO_CHAR:
            tokens.append(src[i:i + 2])
            i += 2
        else:
            tokens.append(ch)
            i += 1
    return tokens


def _match_delimiters(tokens: list[str]) -> dict[int, int]:
    matches: dict[int, int] = {}
    stack: list[int] = []
    for index, tok in enumerate(tokens):
        if tok in _PAIRS:
            stack.append(index)
        elif tok in _CLOSERS:
            if not stack or tokens[stack[-1]] != _CLOSERS[tok]:
                raise ParseError(f"unbalanced delimiter {tok!r}")
            matches[stack.pop()] = index
    if stack:
        raise ParseError(f"unclosed delimiter {tokens[stack[-1]]!r}")
    return matches


class _Reader:
    def __init__(self, tokens: list[str]) -> None:
        self.toks = tokens
        self.match = _match_delimiters(tokens)

    def items(self, start: int, end: int) -> list[Item]:
        result: list[Item] = []
        i = start
        while i < end:
            tok = self.toks[i]
            if tok == ";":
                i += 1
            elif tok == "#":
                i += 1
                if i < end and self.toks[i] == "!":
                    i += 1
                if i >= end or self.toks[i] != "[":
                    raise ParseError("malformed attribute")
                i = self.match[i] + 1
            else:
                item, i = self.item(i, end)
                result.append(item)
        return result

    def item(self, i: int, end: int) -> tuple[Item, int]:
        toks = self.toks
        public = False
        k = i
        if toks[k] == "pub":
            if k + 1 < end and toks[k + 1] == "(":
                k = self.match[k + 1] + 1
            else:
                public = True
                k += 1

        while k < end and toks[k] in _QUALIFIERS:
            if toks[k] == "const" and (
                k + 1 >= end or toks[k + 1] not in ("fn", "unsafe", "async", "extern")
            ):
                break
            if toks[k] == "extern":
                nxt = k + 1
                if nxt < end and toks[nxt].startswith('"'):
                    nxt += 1
                if nxt < end and toks[nxt] in ("crate", "{"):
                    break
                k = nxt
                continue
            k += 1

        if k >= end:
            raise ParseError("expected an item")
        keyword = toks[k]

        if keyword not in _KEYWORDS:
            return self.macro(k, end, public)

        kind = keyword
        if keyword == "extern":
            kind = "extern crate" if k + 1 < end and toks[k + 1] == "crate" else "foreign"

        stop, body = self.find_end(k, end, kind)
        item = Item(kind=kind, public=public)
        if kind not in ("impl", "use", "foreign", "extern crate") and k + 1 < end:
            item.name = toks[k + 1]

        if kind == "fn":
            item.signature = self.signature(k, stop)
        elif kind in ("trait", "impl") and body is not None:
            inner = self.items(body + 1, self.match[body])
            item.methods = [sub.signature for sub in inner if sub.signature]
            if kind == "impl":
                item.trait_impl = self.has_for(k + 1, body)
        elif kind == "struct":
            item.fields = self.struct_fields(k + 1, stop)
        return item, stop

    def macro(self, k: int, end: int, public: bool) -> tuple[Item, int]:
        toks = self.toks
        j = k
        if not _is_ident_start(toks[j][0]):
            raise ParseError(f"unexpected token {toks[j]!r}")
        while j + 2 < end and toks[j + 1] == "::":
            j += 2
        j += 1
        if j >= end or toks[j] != "!":
            raise ParseError(f"unexpected token {toks[k]!r}")
        j += 1
        if j < end and toks[j] not in _PAIRS:
            j += 1
        if j >= end or toks[j] not in _PAIRS:
            raise ParseError("malformed macro invocation")
        close = self.match[j]
        stop = close + 1
        if toks[j] != "{":
            if stop >= end or toks[stop] != ";":
                raise ParseError("expected ';' after macro invocation")
            stop += 1
        return Item(kind="macro", name=toks[k], public=public), stop

    def find_end(self, k: int, end: int, kind: str) -> tuple[int, int | None]:
        j = k
        while j < end:
            tok = self.toks[j]
            if tok == ";":
                return j + 1, None
            if tok == "{" and kind not in _SEMICOLON_KINDS:
                return self.match[j] + 1, j
            if tok in _PAIRS:
                j = self.match[j] + 1
                continue
            j += 1
        raise ParseError(f"unterminated {kind} item")

    def signature(self, start: int, stop: int) -> Function:
        toks = self.toks
        f = toks.index("fn", start, stop)
        if f + 1 >= stop:
            raise ParseError("fn without a name")
        name = toks[f + 1]
        try:
            paren = toks.index("(", f + 1, stop)
        except ValueError as exc:
            raise ParseError(f"fn {name} has no parameter list") from exc
        j = self.match[paren] + 1
        if j >= stop or toks[j] != "->":
            return Function(name)
        j += 1
        parts: list[str] = []
        while j < stop and toks[j] not in ("{", ";", "where"):
            if toks[j] in _PAIRS:
                close = self.match[j]
                parts.extend(toks[j:close + 1])
                j = close + 1
            else:
                parts.append(toks[j])
                j += 1
        return Function(name, " ".join(parts))

    def has_for(self, start: int, stop: int) -> bool:
        angle = 0
        for tok in self.toks[start:stop]:
            if tok == "<":
                angle += 1
            elif tok == ">":
                angle -= 1
            elif tok == "for" and angle <= 0:
                return True
        return False

    def struct_fields(self, start: int, stop: int) -> list[str] | None:
        toks = self.toks
        j = start
        while j < stop:
            if toks[j] == "{":
                break
            if toks[j] in ("(", ";"):
                return None
            j += 1
        else:
            return None
        close = self.match[j]
        fields: list[str] = []
        current: list[str] = []
        angle = 0
        i = j + 1
        while i < close:
            tok = toks[i]
            if tok == "#" and i + 1 < close and toks[i + 1] == "[":
                i = self.match[i + 1] + 1
                continue
            if tok in _PAIRS:
                end_group = self.match[i]
                current.extend(toks[i:end_group + 1])
                i = end_group + 1
                continue
            if tok == "<":
                angle += 1
            elif tok == ">":
                angle -= 1
            if tok == "," and angle <= 0:
                if current:
                    fields.append(" ".join(current))
                current = []
            else:
                current.append(tok)
            i += 1
        if current:
            fields.append(" ".join(current))
        return fields


def parse_file(source: str) -> list[Item]:
    """Read the top-level items of a Rust source file.

    Raises ParseError for unbalanced delimiters, unterminated literals or
    tokens that do not start an item.
    """
    reader = _Reader(_tokenize(source))
    return reader.items(0, len(reader.toks))