"""Definitions derived from enums: unions of their variants."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from .attributes import DeriveError, EnumAttr, FieldAttr, Representation, StructAttr
from .derived import Dependencies, DerivedTS
from .generics import Generics, format_generics, format_type
from .structs import Fields, FieldsKind, type_def

__all__ = ["Variant", "enum_def", "empty_enum"]

_Formatted = Callable[[], str]


def _as_tuple(attrs: Iterable[str] | str) -> tuple[str, ...]:
    if isinstance(attrs, str):
        return (attrs,)
    return tuple(attrs)


@dataclass(frozen=True)
class Variant:
    """One enum variant: its name, its fields and its attributes as written."""

    name: str
    fields: Fields = field(default_factory=Fields.unit)
    ts_attrs: tuple[str, ...] = ()
    serde_attrs: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "ts_attrs", _as_tuple(self.ts_attrs))
        object.__setattr__(self, "serde_attrs", _as_tuple(self.serde_attrs))

    def attrs(self) -> FieldAttr:
        """The merged attributes of this variant."""
        return FieldAttr.from_attrs(self.ts_attrs, self.serde_attrs)


def enum_def(
    ident: str,
    variants: Sequence[Variant],
    attrs: EnumAttr | None = None,
    generics: Generics | None = None,
) -> DerivedTS:
    """Derive a union type from an enum."""
    enum_attr = EnumAttr() if attrs is None else attrs
    generics = Generics() if generics is None else generics
    name = enum_attr.rename if enum_attr.rename is not None else ident

    if not variants:
        return empty_enum(name, enum_attr)

    formatted: list[_Formatted] = []
    deps = Dependencies()
    for variant in variants:
        _format_variant(formatted, deps, enum_attr, variant, generics)

    generic_args = format_generics(deps, generics)

    def inline() -> str:
        return " | ".join(part() for part in formatted)

    def decl() -> str:
        return f"type {name}{generic_args()} = {inline()};"

    return DerivedTS(
        ts_name=name,
        inline_def=inline,
        decl_def=decl,
        deps=deps,
        export=enum_attr.export,
        export_to_attr=enum_attr.export_to,
    )


def _single_field(fields: Fields):
    if fields.kind is FieldsKind.UNNAMED and len(fields) == 1:
        return next(iter(fields))
    return None


def _format_variant(
    formatted: list[_Formatted],
    deps: Dependencies,
    enum_attr: EnumAttr,
    variant: Variant,
    generics: Generics,
) -> None:
    attr = variant.attrs()
    if attr.skip:
        return
    if attr.type_override is not None:
        raise DeriveError("`type` is not applicable to enum variants")
    if attr.optional:
        raise DeriveError("`optional` is not applicable to enum variants")
    if attr.flatten:
        raise DeriveError("`flatten` is not applicable to enum variants")

    if attr.rename is not None:
        name = attr.rename
    elif enum_attr.rename_all is not None:
        name = enum_attr.rename_all.apply(variant.name)
    else:
        name = variant.name

    # The variant is shaped like an anonymous struct.
    variant_type = type_def(StructAttr(), "_", variant.fields, generics)
    inline_type = variant_type.inline
    fields = variant.fields
    is_unit = fields.kind is FieldsKind.UNIT
    tagged = enum_attr.tagged()
    tag, content = tagged.tag, tagged.content

    result: _Formatted
    match tagged.representation:
        case Representation.UNTAGGED:
            result = inline_type
        case Representation.EXTERNALLY:
            if is_unit:
                result = lambda: f'"{name}"'
            else:
                result = lambda: f"{{ {name}: {inline_type()} }}"
        case Representation.ADJACENTLY:
            single = _single_field(fields)
            if single is not None:
                ty = format_type(single.ty, deps, generics)
                result = lambda: f'{{ {tag}: "{name}", {content}: {ty()} }}'
            elif is_unit:
                result = lambda: f'{{ {tag}: "{name}" }}'
            else:
                result = lambda: f'{{ {tag}: "{name}", {content}: {inline_type()} }}'
        case _:
            flattened = variant_type.inline_flattened_def
            single = _single_field(fields)
            if flattened is not None:
                result = lambda: f'{{ {tag}: "{name}", {flattened()} }}'
            elif single is not None:
                ty = format_type(single.ty, deps, generics)
                result = lambda: f'{{ {tag}: "{name}" }} & {ty()}'
            elif is_unit:
                result = lambda: f'{{ {tag}: "{name}" }}'
            else:
                result = lambda: f'{{ {tag}: "{name}" }} & {inline_type()}'

    deps.append(variant_type.deps)
    formatted.append(result)


def empty_enum(name: str, enum_attr: EnumAttr) -> DerivedTS:
    """The definition of an enum without variants: ``never``."""
    decl_text = f"type {name} = never;"
    return DerivedTS(
        ts_name=name,
        inline_def=lambda: "never",
        decl_def=lambda: decl_text,
        deps=Dependencies(),
        export=enum_attr.export,
        export_to_attr=enum_attr.export_to,
    )