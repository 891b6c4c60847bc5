# tsbind

Describe your data types once, as Python objects, and generate matching
TypeScript declarations from them: interfaces for structs, union types for
enums, type aliases for newtypes and tuples, and `import type` statements
when types live in different files.

## Installation

```
pip install tsbind
```

The package has no runtime dependencies. To run its tests, install the
`test` extra and run pytest:

```
pip install "tsbind[test]"
pytest
```

## Quick start

```python
from tsbind.typesystem import PRIMITIVES
from tsbind.structs import Field, Fields, struct_def
from tsbind.enums import Variant, enum_def
from tsbind.export import export_type_to_string

simple = struct_def(
    "Simple",
    Fields.named(Field("a", PRIMITIVES["i32"]), Field("b", PRIMITIVES["String"])),
)
simple.inline()  # '{ a: number, b: string, }'
simple.decl()    # 'interface Simple { a: number, b: string, }'

letters = enum_def(
    "SimpleEnum",
    [Variant("A", ts_attrs=('rename = "asdf"',)), Variant("B"), Variant("C")],
)
letters.decl()   # 'type SimpleEnum = "asdf" | "B" | "C";'

print(export_type_to_string(simple))
```

An enum with no variants declares as `type Empty = never;`, and a struct
without fields as `type Unit = null;`.

## Modules

| Module | Purpose |
| --- | --- |
| `tsbind.typesystem` | The abstract `TS` class and built-in types: `Primitive`, `Array`, `Nullable`, `Record`, `Range`, `Tuple`, `Wrapper`, `Applied`, and `Dependency`. `PRIMITIVES` maps names such as `"i32"`, `"u64"`, `"bool"`, `"String"`, `"Uuid"` or `"NaiveDateTime"` to `number`, `bigint`, `boolean`, `string` and `null`. |
| `tsbind.attributes` | Parsing of `ts(...)` and `serde(...)` attribute arguments into `StructAttr`, `FieldAttr` and `EnumAttr`; `Inflection` for `rename_all`; `Tagged` and `Representation` for enum layouts; `DeriveError` for invalid definitions. |
| `tsbind.structs` | `struct_def` builds declarations for structs from `Fields` of `Field` values; `type_def`, `named`, `newtype`, `tuple_def` and `unit` build each form directly. |
| `tsbind.enums` | `enum_def` builds union declarations from a list of `Variant` values; `empty_enum` gives `never`. |
| `tsbind.generics` | `Generics`, `TypeParam` and `Param` describe generic parameters; `format_generics` and `format_type` render them. |
| `tsbind.derived` | `DerivedTS`, the result of deriving a type; `Dependencies`, gathered lazily so types may refer to each other; `resolve_export_path`. |
| `tsbind.export` | `export_type`, `export_type_to`, `export_type_to_string` and `export_all` write declarations to files; `import_path` and `diff_paths` compute relative import paths. |
| `tsbind.config` | `Config`, read from a `ts.toml` file in the project directory. |
| `tsbind.naming` | `to_ts_ident`, `raw_name_to_ts_field` and `print_warning`. |
| `tsbind.example` | `example_types()`, a set of sample definitions. |

Every type, built-in or derived, answers the same questions:
`name()`, `name_with_type_args(args)`, `inline()`, `inline_flattened()`,
`decl()`, `dependencies()` and `transparent()`. Types that cannot be
inlined, flattened or declared raise `TypeError` when asked.

## Attributes

Attributes are given as the text inside `ts(...)` or `serde(...)`, e.g.
`Field("b", ty, ts_attrs=('rename = "bb"',))`, or merged up front with
`StructAttr.from_attrs(ts_attrs, serde_attrs)` and the like. Earlier values
win; `ts` attributes are read before `serde` ones.

- Structs (`ts`): `rename`, `rename_all`, `export`, `export_to`.
  (`serde`): `rename`, `rename_all`, `tag`, `default`.
- Fields (`ts`): `type`, `rename`, `inline`, `skip`, `optional`, `flatten`.
  (`serde`): `rename`, `skip`, `skip_serializing`, `skip_deserializing`,
  `skip_serializing_if = "Option::is_none"`, `flatten`, `default`.
- Enums (`ts`): `rename`, `rename_all`, `export`, `export_to`.
  (`serde`): `rename`, `rename_all`, `tag`, `content`, `untagged`.
- Variants take the field attributes; only `rename` and `skip` apply, and
  `inline` is accepted.

`rename_all` accepts `lowercase`, `UPPERCASE`, `camelCase`, `snake_case`,
`PascalCase` and `SCREAMING_SNAKE_CASE`. Enums are externally tagged by
default, internally tagged with `tag`, adjacently tagged with `tag` and
`content`, or `untagged`.

An unknown or malformed `ts` attribute, or a combination that makes no
sense (such as `flatten` with `rename`, or `content` without `tag`), raises
`DeriveError`. A `serde` attribute that cannot be parsed prints a warning to
standard error and is ignored.

## Exporting

`export_type_to_string(ty)` returns the full text of a binding file: a
header comment, one `import type { X } from "./x";` line per dependency
(sorted by name, without duplicates and never importing the type itself),
a blank line, then `export ` followed by the declaration.

`export_type(ty, base_dir)` writes that text to the type's export path,
relative to `base_dir`, and returns the path written. Without `base_dir`
the directory is taken from the `TSBIND_MANIFEST_DIR` environment
variable. By default the path is `bindings/<Name>.ts`; an `export_to` value
ending in `/` is treated as a directory, any other value as the file name.
`export_type_to(ty, path)` writes to an explicit path instead, creating
parent directories as needed. `export_all(types, base_dir)` exports every
type marked with `export`.

A type with no export path raises `CannotBeExported`, a missing base
directory raises `ManifestDirNotSet`, and a failed write raises
`ExportError`, from which the other two derive.

## Configuration

`Config.load(manifest_dir)` reads `ts.toml` from `manifest_dir` (or from
`TSBIND_MANIFEST_DIR`); when the file is absent the defaults are used
(`ambient_declarations = false`, `out_dir = "typescript"`). A file that is
present must set both keys with the right types. `Config.get()` loads once
and then returns the cached result.

## What the package does not do

- It does not read or parse program source files: types are described by
  building `Field`, `Variant`, `Fields` and the built-in type objects in
  Python.
- It has no command-line tool; everything is called from Python.
- It does not format the generated TypeScript beyond the single-line
  layout shown above.
- The values in `ts.toml` are loaded into `Config` but are not applied by
  the export functions.
- Generic fields cannot be inlined or flattened with their type arguments
  filled in.