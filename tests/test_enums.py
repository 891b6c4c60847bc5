import pytest

from tsbind.attributes import DeriveError, EnumAttr
from tsbind.enums import Variant, empty_enum, enum_def
from tsbind.generics import Generics, TypeParam
from tsbind.structs import Field, Fields, struct_def
from tsbind.typesystem import NUMBER, STRING, Array, Dependency


def eattrs(*ts, serde=()):
    return EnumAttr.from_attrs(ts, serde)


def pos(ty):
    return Field(None, ty)


def fld(name, ty):
    return Field(name, ty)


def unit_variant(name, *ts, serde=()):
    return Variant(name, Fields.unit(), ts, serde)


# union.rs

def test_empty():
    assert enum_def("Empty", []).decl() == "type Empty = never;"


def test_simple_enum():
    e = enum_def(
        "SimpleEnum",
        [unit_variant("A", 'rename = "asdf"'), unit_variant("B"), unit_variant("C")],
    )
    assert e.decl() == 'type SimpleEnum = "asdf" | "B" | "C";'


# union_rename.rs

def test_renamed_enum():
    e = enum_def(
        "RenamedEnum",
        [unit_variant("A", 'rename = "ASDF"'), unit_variant("B"), unit_variant("C")],
        eattrs('rename_all = "lowercase"', 'rename = "SimpleEnum"'),
    )
    assert e.decl() == 'type SimpleEnum = "ASDF" | "b" | "c";'


# union_serde.rs

def _simple_adjacent():
    return enum_def(
        "SimpleEnum",
        [unit_variant("A"), unit_variant("B")],
        eattrs(serde=['tag = "kind", content = "d"']),
    )


def test_serde_adjacent_simple():
    assert _simple_adjacent().decl() == 'type SimpleEnum = { kind: "A" } | { kind: "B" };'


def test_serde_adjacent_complex():
    simple = _simple_adjacent()
    e = enum_def(
        "ComplexEnum",
        [
            unit_variant("A"),
            Variant("B", Fields.named(fld("foo", STRING), fld("bar", NUMBER))),
            Variant("W", Fields.unnamed(pos(simple))),
            Variant("F", Fields.named(fld("nested", simple))),
            Variant("T", Fields.unnamed(pos(NUMBER), pos(simple))),
        ],
        eattrs(serde=['tag = "kind", content = "data"']),
    )
    assert e.decl() == (
        'type ComplexEnum = { kind: "A" } | { kind: "B", data: { foo: string, bar: number, } } '
        '| { kind: "W", data: SimpleEnum } | { kind: "F", data: { nested: SimpleEnum, } } '
        '| { kind: "T", data: [number, SimpleEnum] };'
    )


def test_serde_untagged():
    e = enum_def(
        "Untagged",
        [
            Variant("Foo", Fields.unnamed(pos(STRING))),
            Variant("Bar", Fields.unnamed(pos(NUMBER))),
            unit_variant("None"),
        ],
        eattrs(serde=["untagged"]),
    )
    assert e.decl() == "type Untagged = string | number | null;"


# union_with_data.rs

def test_stateful_enum():
    bar = struct_def("Bar", Fields.named(fld("field", NUMBER)))
    foo = struct_def("Foo", Fields.named(fld("bar", bar)))
    assert bar.decl() == "interface Bar { field: number, }"
    assert bar.dependencies() == []
    assert foo.decl() == "interface Foo { bar: Bar, }"
    assert foo.dependencies() == [Dependency.from_ty(bar)]

    e = enum_def(
        "SimpleEnum",
        [
            Variant("A", Fields.unnamed(pos(STRING))),
            Variant("B", Fields.unnamed(pos(NUMBER))),
            unit_variant("C"),
            Variant("D", Fields.unnamed(pos(STRING), pos(NUMBER))),
            Variant("E", Fields.unnamed(pos(foo))),
            Variant("F", Fields.named(fld("a", NUMBER), fld("b", STRING))),
        ],
    )
    assert e.decl() == (
        'type SimpleEnum = { A: string } | { B: number } | "C" | { D: [string, number] } '
        "| { E: Foo } | { F: { a: number, b: string, } };"
    )
    deps = e.dependencies()
    assert deps
    assert all(dep == Dependency.from_ty(foo) for dep in deps)


# union_with_internal_tag.rs

def test_internal_tag_named():
    e = enum_def(
        "EnumWithInternalTag",
        [
            Variant("A", Fields.named(fld("foo", STRING))),
            Variant("B", Fields.named(fld("bar", NUMBER))),
        ],
        eattrs(serde=['tag = "type"']),
    )
    assert e.decl() == (
        'type EnumWithInternalTag = { type: "A", foo: string, } | { type: "B", bar: number, };'
    )


def test_internal_tag_newtype():
    inner_a = struct_def("InnerA", Fields.named(fld("foo", STRING)))
    inner_b = struct_def("InnerB", Fields.named(fld("bar", NUMBER)))
    e = enum_def(
        "EnumWithInternalTag2",
        [Variant("A", Fields.unnamed(pos(inner_a))), Variant("B", Fields.unnamed(pos(inner_b)))],
        eattrs(serde=['tag = "type"']),
    )
    assert e.decl() == (
        'type EnumWithInternalTag2 = { type: "A" } & InnerA | { type: "B" } & InnerB;'
    )


def test_internal_tag_with_rename_all():
    e = enum_def(
        "Vehicle",
        [
            Variant("Bicycle", Fields.named(fld("color", STRING))),
            Variant("Car", Fields.named(fld("brand", STRING), fld("color", STRING))),
        ],
        eattrs(serde=['tag = "type", rename_all = "snake_case"']),
    )
    assert e.decl() == (
        'type Vehicle = { type: "bicycle", color: string, } '
        '| { type: "car", brand: string, color: string, };'
    )


# generics.rs

def test_generic_enum():
    a, b, c = TypeParam("A"), TypeParam("B"), TypeParam("C")
    e = enum_def(
        "Generic",
        [
            Variant("A", Fields.unnamed(pos(a))),
            Variant("B", Fields.unnamed(pos(b), pos(b), pos(b))),
            Variant("C", Fields.unnamed(pos(Array(c)))),
            Variant("D", Fields.unnamed(pos(Array(Array(Array(a)))))),
            Variant("E", Fields.named(fld("a", a), fld("b", b), fld("c", c))),
            Variant("X", Fields.unnamed(pos(Array(NUMBER)))),
            Variant("Y", Fields.unnamed(pos(NUMBER))),
            Variant("Z", Fields.unnamed(pos(Array(Array(NUMBER))))),
        ],
        generics=Generics(a, b, c),
    )
    assert e.decl() == (
        "type Generic<A, B, C> = { A: A } | { B: [B, B, B] } | { C: Array<C> } "
        "| { D: Array<Array<Array<A>>> } | { E: { a: A, b: B, c: C, } } "
        "| { X: Array<number> } | { Y: number } | { Z: Array<Array<number>> };"
    )


def test_generic_enum_trait_bounds():
    t = TypeParam("T")
    k = TypeParam("K", NUMBER)
    e = enum_def(
        "C",
        [
            Variant("A", Fields.named(fld("t", t))),
            Variant("B", Fields.unnamed(pos(t))),
            unit_variant("C"),
            Variant("D", Fields.unnamed(pos(t), pos(TypeParam("K")))),
        ],
        generics=Generics(t, k),
    )
    assert e.decl() == (
        'type C<T, K = number> = { A: { t: T, } } | { B: T } | "C" | { D: [T, K] };'
    )


# variants and errors

def test_skipped_variant():
    e = enum_def("E", [unit_variant("A"), unit_variant("B", "skip")])
    assert e.inline() == '"A"'


def test_empty_enum_inline():
    derived = empty_enum("Never", EnumAttr(export_to="out/"))
    assert derived.inline() == "never"
    assert derived.decl() == "type Never = never;"
    assert derived.export_to == "out/Never.ts"


@pytest.mark.parametrize(
    ("attr", "message"),
    [
        ('type = "string"', "`type` is not applicable to enum variants"),
        ("optional", "`optional` is not applicable to enum variants"),
        ("flatten", "`flatten` is not applicable to enum variants"),
    ],
)
def test_variant_attribute_errors(attr, message):
    with pytest.raises(DeriveError, match=message):
        enum_def("E", [unit_variant("A", attr)])


def test_untagged_with_tag_error():
    with pytest.raises(DeriveError, match="untagged cannot be used with tag"):
        enum_def("E", [unit_variant("A")], eattrs(serde=['untagged, tag = "t"']))


def test_content_without_tag_error():
    with pytest.raises(DeriveError, match="content cannot be used without tag"):
        enum_def("E", [unit_variant("A")], eattrs(serde=['content = "c"']))