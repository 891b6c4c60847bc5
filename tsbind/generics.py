"""Generic parameters and the formatting of field types that may use them."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .derived import Dependencies
from .typesystem import TS, Dependency, Tuple

__all__ = [
    "Param",
    "TypeParam",
    "Generics",
    "format_generics",
    "format_type",
    "extract_type_args",
]

Formatted = Callable[[], str]


@dataclass(frozen=True)
class Param:
    """A lifetime or const generic parameter; it never shows in TypeScript.

    A const parameter carries the type of its value in ``const_type``.
    """

    name: str
    const_type: TS | None = None


@dataclass(frozen=True)
class TypeParam(TS):
    """A generic type parameter such as ``T``, optionally with a default type."""

    ident: str
    default: TS | None = None

    def name(self) -> str:
        return self.ident

    def inline(self) -> str:
        return self.ident

    def dependencies(self) -> list[Dependency]:
        return []

    def transparent(self) -> bool:
        return False


@dataclass(frozen=True, init=False)
class Generics:
    """The generic parameters of a definition, in declaration order."""

    params: tuple[Param | TypeParam, ...] = field(default=())

    def __init__(self, *params: Param | TypeParam) -> None:
        object.__setattr__(self, "params", tuple(params))

    @property
    def type_params(self) -> tuple[TypeParam, ...]:
        """Only the type parameters."""
        return tuple(p for p in self.params if isinstance(p, TypeParam))


def format_generics(deps: Dependencies, generics: Generics) -> Formatted:
    """Format the parameters as ``<A, B = default>``, or as an empty string.

    Defaults are added to ``deps``.
    """
    if not generics.params:
        return lambda: ""

    parts: list[Formatted] = []
    for param in generics.type_params:
        if param.default is None:
            parts.append(lambda ident=param.ident: ident)
        else:
            default = format_type(param.default, deps, generics)
            parts.append(lambda ident=param.ident, default=default: f"{ident} = {default()}")
    return lambda: f"<{', '.join(part() for part in parts)}>"


def format_type(ty: TS, dependencies: Dependencies, generics: Generics) -> Formatted:
    """Format ``ty`` as it is referred to from a field, recording what it depends on."""
    if isinstance(ty, TypeParam) and any(
        param.ident == ty.ident for param in generics.type_params
    ):
        ident = ty.ident
        return lambda: ident

    if isinstance(ty, Tuple):
        return _format_tuple(ty.elements, dependencies, generics)

    dependencies.push_or_append_from(ty)
    type_args = extract_type_args(ty)
    if type_args is None:
        return ty.name
    formatted = [format_type(arg, dependencies, generics) for arg in type_args]
    return lambda: ty.name_with_type_args([arg() for arg in formatted])


def extract_type_args(ty: TS) -> list[TS] | None:
    """The type arguments of ``ty``, or ``None`` if it has none."""
    args = list(ty.type_args)
    return args or None


def _format_tuple(
    elements: Sequence[TS], dependencies: Dependencies, generics: Generics
) -> Formatted:
    """Format a tuple field the way an anonymous tuple struct would be written inline."""
    inner = Dependencies()
    match tuple(elements):
        case ():
            return lambda: "null"
        case (only,):
            inner.push_or_append_from(only)
            result = format_type(only, inner, generics)
        case _:
            parts: list[Formatted] = []
            for element in elements:
                parts.append(format_type(element, inner, generics))
                inner.push_or_append_from(element)
            result = lambda: f"[{', '.join(part() for part in parts)}]"
    format_generics(inner, generics)
    dependencies.append(inner)
    return result