"""Runtime description of types and how they read in TypeScript.

Every type is a :class:`TS` object. Built-in shapes (primitives, arrays,
nullable values, records, ranges, tuples and transparent wrappers) are
provided here. Derived definitions subclass :class:`TS` as well.
"""

from __future__ import annotations

import abc
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

__all__ = [
    "Dependency",
    "TS",
    "Primitive",
    "Array",
    "Nullable",
    "Record",
    "Range",
    "Tuple",
    "Wrapper",
    "Applied",
    "NUMBER",
    "BIGINT",
    "BOOLEAN",
    "STRING",
    "NULL",
    "UTC",
    "LOCAL",
    "FIXED_OFFSET",
    "PRIMITIVES",
]


def _expect_args(owner: str, args: Sequence[str], count: int) -> None:
    if len(args) != count:
        raise ValueError(
            f"called {owner}.name_with_type_args with {len(args)} args"
        )


class TS(abc.ABC):
    """A type which can be represented in TypeScript.

    ``export_to`` is the file the type is written to, or ``None`` if the type
    cannot be exported on its own.
    """

    export_to: str | None = None

    @property
    def type_args(self) -> tuple[TS, ...]:
        """The type arguments written between angle brackets, if any."""
        return ()

    @abc.abstractmethod
    def name(self) -> str:
        """Name of this type in TypeScript."""

    def name_with_type_args(self, args: Sequence[str]) -> str:
        """Name of this type in TypeScript, with type arguments."""
        return f"{self.name()}<{', '.join(args)}>"

    def inline(self) -> str:
        """The definition of this type written out, e.g. ``{ user_id: number, }``."""
        raise TypeError(f"{self.name()} cannot be inlined")

    def inline_flattened(self) -> str:
        """The fields of this type, for flattening into another interface."""
        raise TypeError(f"{self.name()} cannot be flattened")

    def decl(self) -> str:
        """The declaration of this type, e.g. ``interface User { ... }``."""
        raise TypeError(f"{self.name()} cannot be declared")

    @abc.abstractmethod
    def dependencies(self) -> list[Dependency]:
        """Types this type refers to, used to resolve imports."""

    @abc.abstractmethod
    def transparent(self) -> bool:
        """``True`` for types such as tuples or lists which only carry other types."""


@dataclass(frozen=True)
class Dependency:
    """A type which another type depends on, with where it is exported to."""

    type_id: object
    ts_name: str
    exported_to: str

    @classmethod
    def from_ty(cls, ty: TS) -> Dependency | None:
        """The dependency on ``ty``, or ``None`` if ``ty`` cannot be exported."""
        exported_to = ty.export_to
        if exported_to is None:
            return None
        return cls(type_id=ty, ts_name=ty.name(), exported_to=exported_to)


def _deps_of(types: Iterable[TS]) -> list[Dependency]:
    return [dep for dep in map(Dependency.from_ty, types) if dep is not None]


@dataclass(frozen=True)
class Primitive(TS):
    """A type with a fixed TypeScript name, such as ``number`` or ``string``.

    ``parameters`` holds type arguments that do not show in TypeScript, as
    with a date-time tied to a time zone; such a primitive ignores the names
    it is given. Without parameters it accepts no type arguments at all.
    """

    ts_name: str
    parameters: tuple[TS, ...] = ()

    @property
    def type_args(self) -> tuple[TS, ...]:
        return self.parameters

    def name(self) -> str:
        return self.ts_name

    def name_with_type_args(self, args: Sequence[str]) -> str:
        if not self.parameters and args:
            raise ValueError("called name_with_type_args on primitive")
        return self.ts_name

    def inline(self) -> str:
        return self.ts_name

    def dependencies(self) -> list[Dependency]:
        return []

    def transparent(self) -> bool:
        return False


@dataclass(frozen=True)
class Array(TS):
    """A list, set or fixed-size array: ``Array<T>``."""

    element: TS

    @property
    def type_args(self) -> tuple[TS, ...]:
        return (self.element,)

    def name(self) -> str:
        return "Array"

    def name_with_type_args(self, args: Sequence[str]) -> str:
        _expect_args("Array", args, 1)
        return f"Array<{args[0]}>"

    def inline(self) -> str:
        return f"Array<{self.element.inline()}>"

    def dependencies(self) -> list[Dependency]:
        return _deps_of([self.element])

    def transparent(self) -> bool:
        return True


@dataclass(frozen=True)
class Nullable(TS):
    """An optional value: ``T | null``."""

    inner: TS

    @property
    def type_args(self) -> tuple[TS, ...]:
        return (self.inner,)

    def name(self) -> str:
        raise TypeError("a nullable type has no name of its own")

    def name_with_type_args(self, args: Sequence[str]) -> str:
        _expect_args("Nullable", args, 1)
        return f"{args[0]} | null"

    def inline(self) -> str:
        return f"{self.inner.inline()} | null"

    def dependencies(self) -> list[Dependency]:
        return _deps_of([self.inner])

    def transparent(self) -> bool:
        return True


@dataclass(frozen=True)
class Record(TS):
    """A map: ``Record<K, V>``."""

    key: TS
    value: TS

    @property
    def type_args(self) -> tuple[TS, ...]:
        return (self.key, self.value)

    def name(self) -> str:
        return "Record"

    def name_with_type_args(self, args: Sequence[str]) -> str:
        _expect_args("Record", args, 2)
        return f"Record<{args[0]}, {args[1]}>"

    def inline(self) -> str:
        return f"Record<{self.key.inline()}, {self.value.inline()}>"

    def dependencies(self) -> list[Dependency]:
        return _deps_of([self.key, self.value])

    def transparent(self) -> bool:
        return True


@dataclass(frozen=True)
class Range(TS):
    """A half-open or inclusive range: ``{ start: I, end: I, }``."""

    bound: TS

    @property
    def type_args(self) -> tuple[TS, ...]:
        return (self.bound,)

    def name(self) -> str:
        raise TypeError("a range has no name of its own - was a type alias used?")

    def name_with_type_args(self, args: Sequence[str]) -> str:
        _expect_args("Range", args, 1)
        return f"{{ start: {args[0]}, end: {args[0]}, }}"

    def dependencies(self) -> list[Dependency]:
        return _deps_of([self.bound])

    def transparent(self) -> bool:
        return True


@dataclass(frozen=True, init=False)
class Tuple(TS):
    """A tuple: ``[A, B, C]``."""

    elements: tuple[TS, ...] = field(default=())

    def __init__(self, *elements: TS) -> None:
        object.__setattr__(self, "elements", tuple(elements))

    def name(self) -> str:
        return f"[{', '.join(e.name() for e in self.elements)}]"

    def inline(self) -> str:
        return f"[{', '.join(e.inline() for e in self.elements)}]"

    def dependencies(self) -> list[Dependency]:
        return _deps_of(self.elements)

    def transparent(self) -> bool:
        return True


@dataclass(frozen=True)
class Wrapper(TS):
    """A container that looks like the value it holds, such as a box or a cell."""

    inner: TS

    @property
    def type_args(self) -> tuple[TS, ...]:
        return (self.inner,)

    def name(self) -> str:
        return self.inner.name()

    def name_with_type_args(self, args: Sequence[str]) -> str:
        _expect_args("Wrapper", args, 1)
        return args[0]

    def inline(self) -> str:
        return self.inner.inline()

    def inline_flattened(self) -> str:
        return self.inner.inline_flattened()

    def dependencies(self) -> list[Dependency]:
        return self.inner.dependencies()

    def transparent(self) -> bool:
        return self.inner.transparent()


@dataclass(frozen=True)
class Applied(TS):
    """A generic type given concrete type arguments, such as ``Generic<number>``."""

    base: TS
    args: tuple[TS, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    @property
    def export_to(self) -> str | None:  # type: ignore[override]
        return self.base.export_to

    @property
    def type_args(self) -> tuple[TS, ...]:
        return self.args

    def name(self) -> str:
        return self.base.name()

    def name_with_type_args(self, args: Sequence[str]) -> str:
        return self.base.name_with_type_args(args)

    def inline(self) -> str:
        return self.base.inline()

    def inline_flattened(self) -> str:
        return self.base.inline_flattened()

    def decl(self) -> str:
        return self.base.decl()

    def dependencies(self) -> list[Dependency]:
        return self.base.dependencies()

    def transparent(self) -> bool:
        return self.base.transparent()


NUMBER = Primitive("number")
BIGINT = Primitive("bigint")
BOOLEAN = Primitive("boolean")
STRING = Primitive("string")
NULL = Primitive("null")

# Time zones carry no TypeScript name; date-times over them read as strings,
# e.g. ``Primitive("string", (UTC,))``.
UTC = Primitive("")
LOCAL = Primitive("")
FIXED_OFFSET = Primitive("")


def _primitive_table() -> dict[str, Primitive]:
    groups = {
        NUMBER: ("u8", "i8", "u16", "i16", "u32", "i32", "f32", "f64", "usize", "isize",
                 "OrderedFloat<f32>", "OrderedFloat<f64>"),
        BIGINT: ("u64", "i64", "u128", "i128"),
        BOOLEAN: ("bool",),
        STRING: ("Path", "PathBuf", "String", "&'static str", "str",
                 "NaiveDateTime", "NaiveDate", "NaiveTime", "Duration",
                 "Uuid", "BigDecimal"),
        NULL: ("()",),
    }
    table = {name: prim for prim, names in groups.items() for name in names}
    table.update({"Utc": UTC, "Local": LOCAL, "FixedOffset": FIXED_OFFSET})
    return table


PRIMITIVES: dict[str, Primitive] = _primitive_table()