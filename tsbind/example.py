"""A small set of sample type definitions showing the supported features."""

from __future__ import annotations

from collections.abc import Sequence

from .attributes import EnumAttr, StructAttr
from .derived import DerivedTS
from .enums import Variant, enum_def
from .generics import Generics, TypeParam
from .structs import Field, Fields, struct_def
from .typesystem import PRIMITIVES, TS, Applied, Array, Dependency, Nullable, Wrapper

__all__ = ["example_types"]


class _Deferred(TS):
    """Stands for a definition that is not built yet, so a type can refer to itself."""

    def __init__(self, label: str) -> None:
        self._label = label
        self.target: TS | None = None

    def _resolved(self) -> TS:
        if self.target is None:
            raise TypeError(f"{self._label} is used before it is defined")
        return self.target

    def __eq__(self, other: object) -> bool:
        return other is self or (self.target is not None and other is self.target)

    __hash__ = object.__hash__

    @property
    def export_to(self) -> str | None:  # type: ignore[override]
        return self._resolved().export_to

    @property
    def type_args(self) -> tuple[TS, ...]:
        return () if self.target is None else self.target.type_args

    def name(self) -> str:
        return self._resolved().name()

    def name_with_type_args(self, args: Sequence[str]) -> str:
        return self._resolved().name_with_type_args(args)

    def inline(self) -> str:
        return self._resolved().inline()

    def inline_flattened(self) -> str:
        return self._resolved().inline_flattened()

    def decl(self) -> str:
        return self._resolved().decl()

    def dependencies(self) -> list[Dependency]:
        return self._resolved().dependencies()

    def transparent(self) -> bool:
        return self._resolved().transparent()


def _enum_attrs(*serde: str, ts: Sequence[str] = ("export",)) -> EnumAttr:
    return EnumAttr.from_attrs(ts, serde)


def _struct_attrs(*serde: str) -> StructAttr:
    return StructAttr.from_attrs(["export"], serde)


def example_types() -> dict[str, DerivedTS]:
    """The sample definitions, keyed by their identifiers."""
    number = PRIMITIVES["i32"]
    string = PRIMITIVES["String"]

    role = enum_def(
        "Role",
        [Variant("User"), Variant("Admin", ts_attrs=('rename = "administrator"',))],
        _enum_attrs(ts=['rename_all = "lowercase"', 'export, export_to = "bindings/UserRole.ts"']),
    )
    gender = enum_def(
        "Gender",
        [Variant("Male"), Variant("Female"), Variant("Other")],
        _enum_attrs('rename_all = "UPPERCASE"'),
    )

    user_ref = _Deferred("User")
    user = struct_def(
        "User",
        Fields.named(
            Field("user_id", number),
            Field("first_name", string),
            Field("last_name", string),
            Field("role", role),
            Field("family", Array(user_ref)),
            Field("gender", gender, ts_attrs=("inline",)),
            Field("token", PRIMITIVES["Uuid"]),
            Field("created_at", PRIMITIVES["NaiveDateTime"], ts_attrs=('type = "string"',)),
        ),
        _struct_attrs(),
    )
    user_ref.target = user

    vehicle = enum_def(
        "Vehicle",
        [
            Variant("Bicycle", Fields.named(Field("color", string))),
            Variant("Car", Fields.named(Field("brand", string), Field("color", string))),
        ],
        _enum_attrs('tag = "type", rename_all = "snake_case"'),
    )

    t = TypeParam("T")
    point = struct_def(
        "Point",
        Fields.named(Field("time", PRIMITIVES["u64"]), Field("value", t)),
        _struct_attrs(),
        Generics(t),
    )
    series = struct_def(
        "Series",
        Fields.named(Field("points", Array(Applied(point, (PRIMITIVES["u64"],))))),
        _struct_attrs("default"),
    )

    simple_enum = enum_def(
        "SimpleEnum",
        [Variant("A"), Variant("B")],
        _enum_attrs('tag = "kind", content = "d"'),
    )

    def complex_variants() -> list[Variant]:
        return [
            Variant("A"),
            Variant(
                "B",
                Fields.named(Field("foo", string), Field("bar", PRIMITIVES["f64"])),
            ),
            Variant("W", Fields.unnamed(Field(None, simple_enum))),
            Variant("F", Fields.named(Field("nested", simple_enum))),
            Variant("V", Fields.unnamed(Field(None, Array(series)))),
            Variant("U", Fields.unnamed(Field(None, Wrapper(user)))),
        ]

    complex_enum = enum_def(
        "ComplexEnum", complex_variants(), _enum_attrs('tag = "kind", content = "data"')
    )
    inline_complex_enum = enum_def(
        "InlineComplexEnum", complex_variants(), _enum_attrs('tag = "kind"')
    )

    complex_struct = struct_def(
        "ComplexStruct",
        Fields.named(
            Field(
                "string_tree",
                Nullable(Wrapper(Array(string))),
                serde_attrs=('default, skip_serializing_if = "Option::is_none"',),
            )
        ),
        _struct_attrs('rename_all = "camelCase"'),
    )

    return {
        "Role": role,
        "Gender": gender,
        "User": user,
        "Vehicle": vehicle,
        "Point": point,
        "Series": series,
        "SimpleEnum": simple_enum,
        "ComplexEnum": complex_enum,
        "InlineComplexEnum": inline_complex_enum,
        "ComplexStruct": complex_struct,
    }