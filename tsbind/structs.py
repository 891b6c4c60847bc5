"""Definitions derived from structs: named, newtype, tuple and unit structs."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from .attributes import DeriveError, FieldAttr, Inflection, StructAttr
from .derived import Dependencies, DerivedTS
from .generics import Generics, format_generics, format_type
from .naming import raw_name_to_ts_field, to_ts_ident
from .typesystem import TS, Nullable

__all__ = [
    "FieldsKind",
    "Field",
    "Fields",
    "struct_def",
    "type_def",
    "named",
    "newtype",
    "tuple_def",
    "unit",
]

_Formatted = Callable[[], str]


def _as_tuple(attrs: Iterable[str] | str) -> tuple[str, ...]:
    if isinstance(attrs, str):
        return (attrs,)
    return tuple(attrs)


class FieldsKind(enum.Enum):
    """The shape of a struct's or variant's fields."""

    NAMED = "named"
    UNNAMED = "unnamed"
    UNIT = "unit"


@dataclass(frozen=True)
class Field:
    """One field: its name (``None`` for positional fields), its type and its attributes.

    ``ts_attrs`` and ``serde_attrs`` hold the inside of each ``ts(...)`` and
    ``serde(...)`` attribute as written, e.g. ``'rename = "x"'``.
    """

    name: str | None
    ty: TS
    ts_attrs: tuple[str, ...] = ()
    serde_attrs: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "ts_attrs", _as_tuple(self.ts_attrs))
        object.__setattr__(self, "serde_attrs", _as_tuple(self.serde_attrs))

    def attrs(self) -> FieldAttr:
        """The merged attributes of this field."""
        return FieldAttr.from_attrs(self.ts_attrs, self.serde_attrs)


@dataclass(frozen=True)
class Fields:
    """The fields of a struct or enum variant."""

    kind: FieldsKind
    items: tuple[Field, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    @classmethod
    def named(cls, *items: Field) -> Fields:
        return cls(FieldsKind.NAMED, items)

    @classmethod
    def unnamed(cls, *items: Field) -> Fields:
        return cls(FieldsKind.UNNAMED, items)

    @classmethod
    def unit(cls) -> Fields:
        return cls(FieldsKind.UNIT)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Field]:
        return iter(self.items)


def _generics(generics: Generics | None) -> Generics:
    return Generics() if generics is None else generics


def _derived(
    attr: StructAttr,
    name: str,
    inline: _Formatted,
    decl: _Formatted,
    deps: Dependencies,
    inline_flattened: _Formatted | None = None,
) -> DerivedTS:
    return DerivedTS(
        ts_name=name,
        inline_def=inline,
        decl_def=decl,
        inline_flattened_def=inline_flattened,
        deps=deps,
        export=attr.export,
        export_to_attr=attr.export_to,
    )


def struct_def(
    ident: str,
    fields: Fields,
    attrs: StructAttr | None = None,
    generics: Generics | None = None,
) -> DerivedTS:
    """Derive the TypeScript definition of a struct."""
    return type_def(StructAttr() if attrs is None else attrs, ident, fields, generics)


def type_def(
    attr: StructAttr, ident: str, fields: Fields, generics: Generics | None = None
) -> DerivedTS:
    """Derive a definition, choosing the form from the shape of ``fields``."""
    generics = _generics(generics)
    name = attr.rename if attr.rename is not None else to_ts_ident(ident)
    match fields.kind, len(fields):
        case FieldsKind.NAMED, 0:
            return unit(attr, name)
        case FieldsKind.NAMED, _:
            return named(attr, name, fields, generics)
        case FieldsKind.UNNAMED, 0:
            return unit(attr, name)
        case FieldsKind.UNNAMED, 1:
            return newtype(attr, name, fields, generics)
        case FieldsKind.UNNAMED, _:
            return tuple_def(attr, name, fields, generics)
        case _:
            return unit(attr, name)


def named(
    attr: StructAttr, name: str, fields: Fields, generics: Generics | None = None
) -> DerivedTS:
    """Derive an interface from a struct with named fields."""
    generics = _generics(generics)
    formatted: list[_Formatted] = []
    deps = Dependencies()
    if attr.tag is not None:
        tag_text = f'{attr.tag}: "{name}",'
        formatted.append(lambda: tag_text)

    for item in fields:
        _format_named_field(formatted, deps, item, attr.rename_all, generics)

    def fields_text() -> str:
        return " ".join(part() for part in formatted)

    generic_args = format_generics(deps, generics)

    def inline() -> str:
        return f"{{ {fields_text()} }}"

    def decl() -> str:
        return f"interface {name}{generic_args()} {inline()}"

    return _derived(attr, name, inline, decl, deps, fields_text)


def _format_named_field(
    formatted: list[_Formatted],
    deps: Dependencies,
    item: Field,
    rename_all: Inflection | None,
    generics: Generics,
) -> None:
    attr = item.attrs()
    if attr.skip:
        return
    if item.name is None:
        raise DeriveError("a named field must have a name")

    if attr.optional:
        ty, optional_annotation = _extract_option_argument(item.ty), "?"
    else:
        ty, optional_annotation = item.ty, ""

    if attr.flatten:
        if attr.type_override is not None:
            raise DeriveError("`type` is not compatible with `flatten`")
        if attr.rename is not None:
            raise DeriveError("`rename` is not compatible with `flatten`")
        if attr.inline:
            raise DeriveError("`inline` is not compatible with `flatten`")
        formatted.append(ty.inline_flattened)
        deps.append_from(ty)
        return

    formatted_ty: _Formatted
    if attr.type_override is not None:
        override = attr.type_override
        formatted_ty = lambda: override
    elif attr.inline:
        deps.append_from(ty)
        formatted_ty = ty.inline
    else:
        formatted_ty = format_type(ty, deps, generics)

    field_name = to_ts_ident(item.name)
    if attr.rename is not None:
        ts_name = attr.rename
    elif rename_all is not None:
        ts_name = rename_all.apply(field_name)
    else:
        ts_name = field_name
    valid_name = raw_name_to_ts_field(ts_name)

    formatted.append(lambda: f"{valid_name}{optional_annotation}: {formatted_ty()},")


def _extract_option_argument(ty: TS) -> TS:
    if isinstance(ty, Nullable):
        return ty.inner
    raise DeriveError("`optional` can only be used on an Option<T> type")


def newtype(
    attr: StructAttr, name: str, fields: Fields, generics: Generics | None = None
) -> DerivedTS:
    """Derive a type alias from a struct with a single positional field."""
    generics = _generics(generics)
    if attr.rename_all is not None:
        raise DeriveError("`rename_all` is not applicable to newtype structs")
    if attr.tag is not None:
        raise DeriveError("`tag` is not applicable to newtype structs")

    inner = next(iter(fields))
    field_attr = inner.attrs()
    if field_attr.rename is not None:
        raise DeriveError("`rename` is not applicable to newtype fields")
    if field_attr.skip:
        raise DeriveError("`skip` is not applicable to newtype fields")
    if field_attr.optional:
        raise DeriveError("`optional` is not applicable to newtype fields")
    if field_attr.flatten:
        raise DeriveError("`flatten` is not applicable to newtype fields")

    inner_ty = inner.ty
    deps = Dependencies()
    if field_attr.type_override is None:
        if field_attr.inline:
            deps.append_from(inner_ty)
        else:
            deps.push_or_append_from(inner_ty)

    inline_def: _Formatted
    if field_attr.type_override is not None:
        override = field_attr.type_override
        inline_def = lambda: override
    elif field_attr.inline:
        inline_def = inner_ty.inline
    else:
        inline_def = format_type(inner_ty, deps, generics)

    generic_args = format_generics(deps, generics)

    def decl() -> str:
        return f"type {name}{generic_args()} = {inline_def()};"

    return _derived(attr, name, inline_def, decl, deps)


def tuple_def(
    attr: StructAttr, name: str, fields: Fields, generics: Generics | None = None
) -> DerivedTS:
    """Derive a tuple type from a struct with several positional fields."""
    generics = _generics(generics)
    if attr.rename_all is not None:
        raise DeriveError("`rename_all` is not applicable to tuple structs")
    if attr.tag is not None:
        raise DeriveError("`tag` is not applicable to tuple structs")

    formatted: list[_Formatted] = []
    deps = Dependencies()
    for item in fields:
        _format_tuple_field(formatted, deps, item, generics)

    generic_args = format_generics(deps, generics)

    def inline() -> str:
        return f"[{', '.join(part() for part in formatted)}]"

    def decl() -> str:
        return f"type {name}{generic_args()} = {inline()};"

    return _derived(attr, name, inline, decl, deps)


def _format_tuple_field(
    formatted: list[_Formatted], deps: Dependencies, item: Field, generics: Generics
) -> None:
    ty = item.ty
    attr = item.attrs()
    if attr.skip:
        return
    if attr.rename is not None:
        raise DeriveError("`rename` is not applicable to tuple structs")
    if attr.optional:
        raise DeriveError("`optional` is not applicable to tuple fields")
    if attr.flatten:
        raise DeriveError("`flatten` is not applicable to tuple fields")

    if attr.type_override is not None:
        override = attr.type_override
        formatted.append(lambda: override)
        return
    if attr.inline:
        formatted.append(ty.inline)
        deps.append_from(ty)
    else:
        formatted.append(format_type(ty, deps, generics))
        deps.push_or_append_from(ty)


def unit(attr: StructAttr, name: str) -> DerivedTS:
    """Derive ``null`` for a struct without fields."""
    if attr.rename_all is not None:
        raise DeriveError("`rename_all` is not applicable to unit structs")
    if attr.tag is not None:
        raise DeriveError("`tag` is not applicable to unit structs")

    decl_text = f"type {name} = null;"
    return _derived(attr, name, lambda: "null", lambda: decl_text, Dependencies())