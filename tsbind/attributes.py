"""Parsing and merging of ``ts`` and ``serde`` attributes on structs, fields and enums."""

from __future__ import annotations

import enum
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, fields
from typing import Any

from .naming import print_warning


class DeriveError(ValueError):
    """Raised when a type definition or its attributes cannot be turned into TypeScript."""


def _words(text: str) -> list[str]:
    words: list[str] = []
    current: list[str] = []
    for ch, nxt in zip(text, text[1:] + " "):
        if not ch.isalnum():
            if current:
                words.append("".join(current))
                current = []
            continue
        if current and ch.isupper():
            prev = current[-1]
            if prev.islower() or prev.isdigit() or (prev.isupper() and nxt.islower()):
                words.append("".join(current))
                current = []
        current.append(ch)
    if current:
        words.append("".join(current))
    return words


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


class Inflection(enum.Enum):
    """A renaming rule for fields and variants."""

    LOWER = "lowercase"
    UPPER = "uppercase"
    CAMEL = "camelcase"
    SNAKE = "snakecase"
    PASCAL = "pascalcase"
    SCREAMING_SNAKE = "screamingsnakecase"

    def apply(self, string: str) -> str:
        """Rename ``string`` according to this rule."""
        match self:
            case Inflection.LOWER:
                return string.lower()
            case Inflection.UPPER:
                return string.upper()
        words = _words(string)
        match self:
            case Inflection.CAMEL:
                if not words:
                    return ""
                return words[0].lower() + "".join(_capitalize(w) for w in words[1:])
            case Inflection.PASCAL:
                return "".join(_capitalize(w) for w in words)
            case Inflection.SNAKE:
                return "_".join(w.lower() for w in words)
            case _:
                return "_".join(w.upper() for w in words)

    @classmethod
    def parse(cls, value: str) -> Inflection:
        """Read an inflection name such as ``camelCase`` or ``SCREAMING_SNAKE_CASE``."""
        try:
            return cls(value.lower().replace("_", ""))
        except ValueError:
            raise DeriveError(f"invalid inflection: '{value}'") from None


class Representation(enum.Enum):
    """How an enum's variant tag is laid out."""

    EXTERNALLY = "externally"
    ADJACENTLY = "adjacently"
    INTERNALLY = "internally"
    UNTAGGED = "untagged"


@dataclass(frozen=True)
class Tagged:
    """An enum representation together with the tag and content field names it uses."""

    representation: Representation
    tag: str | None = None
    content: str | None = None


_IDENT = re.compile(r"\s*(r#)?([A-Za-z_][A-Za-z0-9_]*)")
_EQ = re.compile(r"\s*=")
_RAW_STR = re.compile(r'\s*r(#*)"(.*?)"\1', re.S)
_STR = re.compile(r'\s*"((?:[^"\\]|\\.)*)"', re.S)
_OTHER_LIT = re.compile(r"\s*([^\s,]+)")
_SEP = re.compile(r"\s*(,|\Z)")
_ESCAPE = re.compile(r"\\(u\{([0-9A-Fa-f]{1,6})\}|x([0-7][0-9A-Fa-f])|\n\s*|.)", re.S)
_SIMPLE_ESCAPES = {"n": "\n", "r": "\r", "t": "\t", "\\": "\\", "0": "\0", "'": "'", '"': '"'}


def _unescape(body: str) -> str:
    def replace(match: re.Match[str]) -> str:
        if match.group(2) is not None:
            return chr(int(match.group(2), 16))
        if match.group(3) is not None:
            return chr(int(match.group(3), 16))
        escape = match.group(1)
        if escape.startswith("\n"):
            return ""
        try:
            return _SIMPLE_ESCAPES[escape]
        except KeyError:
            raise DeriveError(f"unknown character escape: \\{escape}") from None

    return _ESCAPE.sub(replace, body)


def _read_string(text: str, pos: int) -> tuple[str, int]:
    if match := _RAW_STR.match(text, pos):
        return match.group(2), match.end()
    if match := _STR.match(text, pos):
        return _unescape(match.group(1)), match.end()
    if _OTHER_LIT.match(text, pos):
        raise DeriveError("expected string")
    raise DeriveError("expected literal")


def parse_attribute_args(text: str) -> list[tuple[str, str | None]]:
    """Split the inside of an attribute, e.g. ``rename = "x", inline``, into key/value pairs.

    A key without ``=`` has the value ``None``.
    """
    result: list[tuple[str, str | None]] = []
    pos = 0
    while True:
        ident = _IDENT.match(text, pos)
        if ident is None:
            raise DeriveError("expected identifier")
        key = (ident.group(1) or "") + ident.group(2)
        pos = ident.end()
        value: str | None = None
        if eq := _EQ.match(text, pos):
            value, pos = _read_string(text, eq.end())
        result.append((key, value))
        sep = _SEP.match(text, pos)
        if sep is None:
            raise DeriveError("expected `,`")
        pos = sep.end()
        if sep.group(1) != ",":
            return result


_Handler = Callable[[Any, str, "str | None"], None]


def _need_value(key: str, value: str | None) -> str:
    if value is None:
        raise DeriveError(f"expected `=` after `{key}`")
    return value


def _no_value(key: str, value: str | None) -> None:
    if value is not None:
        raise DeriveError(f"expected `,` after `{key}`")


def _flag(attr: str) -> _Handler:
    def handle(target: Any, key: str, value: str | None) -> None:
        _no_value(key, value)
        setattr(target, attr, True)

    return handle


def _string(attr: str) -> _Handler:
    def handle(target: Any, key: str, value: str | None) -> None:
        setattr(target, attr, _need_value(key, value))

    return handle


def _inflection(attr: str) -> _Handler:
    def handle(target: Any, key: str, value: str | None) -> None:
        setattr(target, attr, Inflection.parse(_need_value(key, value)))

    return handle


def _skip_serializing_if(target: Any, key: str, value: str | None) -> None:
    target.optional = _need_value(key, value) == "Option::is_none"


# A key mapped to ``None`` is recognised (with or without a value) but changes nothing.
_Handlers = dict[str, "_Handler | None"]


def _apply(target: Any, text: str, handlers: _Handlers) -> Any:
    for key, value in parse_attribute_args(text):
        if key not in handlers:
            raise DeriveError(f"unexpected attribute: {key}")
        handler = handlers[key]
        if handler is not None:
            handler(target, key, value)
    return target


def _merge_into(target: Any, other: Any) -> None:
    """Keep values already set on ``target``; booleans are or-ed together."""
    for f in fields(target):
        mine = getattr(target, f.name)
        theirs = getattr(other, f.name)
        if isinstance(mine, bool):
            setattr(target, f.name, mine or theirs)
        elif mine is None:
            setattr(target, f.name, theirs)


def _collect(cls: Any, ts_attrs: Iterable[str], serde_attrs: Iterable[str]) -> Any:
    result = cls()
    for text in ts_attrs:
        result.merge(cls.parse(text))
    for text in serde_attrs:
        try:
            parsed = cls.parse_serde(text)
        except DeriveError:
            print_warning(
                "failed to parse serde attribute",
                f"#[serde({text})]",
                "this attribute could not be parsed. It will be ignored.",
            )
            continue
        result.merge(parsed)
    return result


@dataclass
class StructAttr:
    """Attributes of a struct."""

    rename_all: Inflection | None = None
    rename: str | None = None
    export_to: str | None = None
    export: bool = False
    tag: str | None = None

    @classmethod
    def parse(cls, text: str) -> StructAttr:
        return _apply(cls(), text, _STRUCT_TS)

    @classmethod
    def parse_serde(cls, text: str) -> StructAttr:
        return _apply(cls(), text, _STRUCT_SERDE)

    @classmethod
    def from_attrs(cls, ts_attrs: Iterable[str] = (), serde_attrs: Iterable[str] = ()) -> StructAttr:
        """Merge all ``ts`` attributes, then all ``serde`` attributes; earlier values win."""
        return _collect(cls, ts_attrs, serde_attrs)

    def merge(self, other: StructAttr) -> None:
        _merge_into(self, other)


@dataclass
class FieldAttr:
    """Attributes of a struct field or an enum variant."""

    type_override: str | None = None
    rename: str | None = None
    inline: bool = False
    skip: bool = False
    optional: bool = False
    flatten: bool = False

    @classmethod
    def parse(cls, text: str) -> FieldAttr:
        return _apply(cls(), text, _FIELD_TS)

    @classmethod
    def parse_serde(cls, text: str) -> FieldAttr:
        return _apply(cls(), text, _FIELD_SERDE)

    @classmethod
    def from_attrs(cls, ts_attrs: Iterable[str] = (), serde_attrs: Iterable[str] = ()) -> FieldAttr:
        """Merge all ``ts`` attributes, then all ``serde`` attributes; earlier values win."""
        return _collect(cls, ts_attrs, serde_attrs)

    def merge(self, other: FieldAttr) -> None:
        _merge_into(self, other)


@dataclass
class EnumAttr:
    """Attributes of an enum."""

    rename_all: Inflection | None = None
    rename: str | None = None
    export_to: str | None = None
    export: bool = False
    tag: str | None = None
    untagged: bool = False
    content: str | None = None

    @classmethod
    def parse(cls, text: str) -> EnumAttr:
        return _apply(cls(), text, _ENUM_TS)

    @classmethod
    def parse_serde(cls, text: str) -> EnumAttr:
        return _apply(cls(), text, _ENUM_SERDE)

    @classmethod
    def from_attrs(cls, ts_attrs: Iterable[str] = (), serde_attrs: Iterable[str] = ()) -> EnumAttr:
        """Merge all ``ts`` attributes, then all ``serde`` attributes; earlier values win."""
        return _collect(cls, ts_attrs, serde_attrs)

    def merge(self, other: EnumAttr) -> None:
        _merge_into(self, other)

    def tagged(self) -> Tagged:
        """The representation chosen by ``tag``, ``content`` and ``untagged``."""
        match (self.untagged, self.tag, self.content):
            case (False, None, None):
                return Tagged(Representation.EXTERNALLY)
            case (False, str() as tag, None):
                return Tagged(Representation.INTERNALLY, tag=tag)
            case (False, str() as tag, str() as content):
                return Tagged(Representation.ADJACENTLY, tag=tag, content=content)
            case (True, None, None):
                return Tagged(Representation.UNTAGGED)
            case (True, str(), None):
                raise DeriveError("untagged cannot be used with tag")
            case (True, _, str()):
                raise DeriveError("untagged cannot be used with content")
            case _:
                raise DeriveError("content cannot be used without tag")


_STRUCT_TS: _Handlers = {
    "rename": _string("rename"),
    "rename_all": _inflection("rename_all"),
    "export": _flag("export"),
    "export_to": _string("export_to"),
}

_STRUCT_SERDE: _Handlers = {
    "rename": _string("rename"),
    "rename_all": _inflection("rename_all"),
    "tag": _string("tag"),
    "default": None,
}

_FIELD_TS: _Handlers = {
    "type": _string("type_override"),
    "rename": _string("rename"),
    "inline": _flag("inline"),
    "skip": _flag("skip"),
    "optional": _flag("optional"),
    "flatten": _flag("flatten"),
}

_FIELD_SERDE: _Handlers = {
    "rename": _string("rename"),
    "skip": _flag("skip"),
    "skip_serializing": _flag("skip"),
    "skip_deserializing": _flag("skip"),
    "skip_serializing_if": _skip_serializing_if,
    "flatten": _flag("flatten"),
    "default": None,
}

_ENUM_TS: _Handlers = {
    "rename": _string("rename"),
    "rename_all": _inflection("rename_all"),
    "export_to": _string("export_to"),
    "export": _flag("export"),
}

_ENUM_SERDE: _Handlers = {
    "rename": _string("rename"),
    "rename_all": _inflection("rename_all"),
    "tag": _string("tag"),
    "content": _string("content"),
    "untagged": _flag("untagged"),
}