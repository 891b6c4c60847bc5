"""Type definitions derived from structs and enums, and the dependencies they collect."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from .typesystem import TS, Dependency

__all__ = ["Dependencies", "DerivedTS", "resolve_export_path"]

_DependencySource = Callable[[], list[Dependency]]


class Dependencies:
    """The dependencies of a definition, gathered lazily.

    Sources are recorded in order and only asked for their dependencies when
    :meth:`resolve` is called. Definitions may therefore refer to each other,
    or to themselves, before every one of them is complete.
    """

    def __init__(self) -> None:
        self._sources: list[_DependencySource] = []

    def append_from(self, ty: TS) -> None:
        """Add all dependencies of ``ty``."""
        self._sources.append(ty.dependencies)

    def push_or_append_from(self, ty: TS) -> None:
        """Add ``ty`` itself, or, if it is transparent, the dependencies it carries."""

        def collect() -> list[Dependency]:
            if ty.transparent():
                return ty.dependencies()
            dep = Dependency.from_ty(ty)
            return [] if dep is None else [dep]

        self._sources.append(collect)

    def append(self, other: Dependencies) -> None:
        """Add everything ``other`` holds when this set is resolved."""
        self._sources.append(other.resolve)

    def resolve(self) -> list[Dependency]:
        """All dependencies, in the order their sources were added."""
        return [dep for source in self._sources for dep in source()]


def resolve_export_path(name: str, export_to: str | None) -> str:
    """The file a type called ``name`` is exported to.

    An ``export_to`` ending in ``/`` names a directory; without one the type
    goes to ``bindings/<name>.ts``.
    """
    if export_to is None:
        return f"bindings/{name}.ts"
    if export_to.endswith("/"):
        return f"{export_to}{name}.ts"
    return export_to


@dataclass(eq=False, repr=False)
class DerivedTS(TS):
    """A type derived from a struct or enum definition.

    ``inline_def``, ``decl_def`` and ``inline_flattened_def`` produce their
    strings on demand. ``export`` marks the type for bulk export, and
    ``export_to_attr`` is the ``export_to`` attribute as written; the resolved
    file path is available as ``export_to``.
    """

    ts_name: str
    inline_def: Callable[[], str]
    decl_def: Callable[[], str]
    inline_flattened_def: Callable[[], str] | None = None
    deps: Dependencies = field(default_factory=Dependencies)
    export: bool = False
    export_to_attr: str | None = None
    export_to: str | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.export_to = resolve_export_path(self.ts_name, self.export_to_attr)

    def __repr__(self) -> str:
        return f"DerivedTS({self.ts_name!r})"

    def name(self) -> str:
        return self.ts_name

    def inline(self) -> str:
        return self.inline_def()

    def inline_flattened(self) -> str:
        if self.inline_flattened_def is None:
            return super().inline_flattened()
        return self.inline_flattened_def()

    def decl(self) -> str:
        return self.decl_def()

    def dependencies(self) -> list[Dependency]:
        return self.deps.resolve()

    def transparent(self) -> bool:
        return False