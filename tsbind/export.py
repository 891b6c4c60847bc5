"""Writing TypeScript declarations to files, with the imports they need."""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from pathlib import Path

from .typesystem import TS, Dependency

__all__ = [
    "NOTE",
    "MANIFEST_DIR_ENV",
    "ExportError",
    "CannotBeExported",
    "ManifestDirNotSet",
    "export_type",
    "export_type_to",
    "export_type_to_string",
    "export_all",
    "import_path",
    "diff_paths",
]

NOTE = "// This file was generated by tsbind. Do not edit this file manually.\n"

# Directory that relative export paths are resolved against when none is given.
MANIFEST_DIR_ENV = "TSBIND_MANIFEST_DIR"

_ROOT = "/"
_CUR = "."
_PARENT = ".."


class ExportError(Exception):
    """An error which may occur when exporting a type."""


class CannotBeExported(ExportError):
    """The type has no file to be exported to."""

    def __init__(self) -> None:
        super().__init__("this type cannot be exported")


class ManifestDirNotSet(ExportError):
    """No base directory was given and the environment does not name one."""

    def __init__(self) -> None:
        super().__init__(f"the environment variable {MANIFEST_DIR_ENV} is not set")


def export_type(ty: TS, base_dir: str | os.PathLike[str] | None = None) -> Path:
    """Export ``ty`` to its ``export_to`` file, relative to ``base_dir``.

    Without ``base_dir`` the directory is read from the environment.
    Returns the path written.
    """
    if base_dir is None:
        base_dir = os.environ.get(MANIFEST_DIR_ENV)
        if base_dir is None:
            raise ManifestDirNotSet()
    if ty.export_to is None:
        raise CannotBeExported()
    path = Path(base_dir) / ty.export_to
    return export_type_to(ty, path)


def export_type_to(ty: TS, path: str | os.PathLike[str]) -> Path:
    """Export ``ty`` to ``path``, ignoring its ``export_to`` setting."""
    text = export_type_to_string(ty)
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ExportError("an error occurred while performing IO") from exc
    return target


def export_type_to_string(ty: TS) -> str:
    """The file contents generated for ``ty``: note, imports and declaration."""
    return NOTE + _imports(ty) + "export " + ty.decl()


def export_all(
    types: Iterable[TS], base_dir: str | os.PathLike[str] | None = None
) -> list[Path]:
    """Export every type marked for export; returns the paths written."""
    return [export_type(ty, base_dir) for ty in types if getattr(ty, "export", False)]


def _imports(ty: TS) -> str:
    own_path = ty.export_to
    if own_path is None:
        raise CannotBeExported()
    unique: dict[str, Dependency] = {}
    for dep in ty.dependencies():
        if dep.type_id != ty:
            unique[dep.ts_name] = dep
    lines = [
        f"import type {{ {name} }} from "
        f"{json.dumps(import_path(own_path, unique[name].exported_to), ensure_ascii=False)};\n"
        for name in sorted(unique)
    ]
    return "".join(lines) + "\n"


def _normalise(path: str | os.PathLike[str]) -> str:
    text = os.fspath(path)
    if os.sep != "/":
        text = text.replace(os.sep, "/")
    return text


def _components(path: str | os.PathLike[str]) -> list[str]:
    text = _normalise(path)
    rooted = text.startswith("/")
    comps = [_ROOT] if rooted else []
    for index, part in enumerate(text.split("/")):
        if not part:
            continue
        if part == _CUR:
            if index == 0 and not rooted:
                comps.append(_CUR)
            continue
        comps.append(part)
    return comps


def _join(comps: list[str]) -> str:
    if comps and comps[0] == _ROOT:
        return _ROOT + "/".join(comps[1:])
    return "/".join(comps)


def _diff_components(path: list[str], base: list[str]) -> list[str] | None:
    path_absolute = bool(path) and path[0] == _ROOT
    base_absolute = bool(base) and base[0] == _ROOT
    if path_absolute != base_absolute:
        return list(path) if path_absolute else None

    ita = iter(path)
    itb = iter(base)
    comps: list[str] = []
    while True:
        a = next(ita, None)
        b = next(itb, None)
        if a is None and b is None:
            break
        if b is None:
            comps.append(a)
            comps.extend(ita)
            break
        if a is None:
            comps.append(_PARENT)
        elif not comps and a == b:
            continue
        elif b == _CUR:
            comps.append(a)
        elif b == _PARENT:
            return None
        else:
            comps.append(_PARENT)
            comps.extend(_PARENT for _ in itb)
            comps.append(a)
            comps.extend(ita)
            break
    return comps


def diff_paths(
    path: str | os.PathLike[str], base: str | os.PathLike[str]
) -> str | None:
    """The path that leads from the directory ``base`` to ``path``, or ``None``."""
    comps = _diff_components(_components(path), _components(base))
    return None if comps is None else _join(comps)


def import_path(
    from_path: str | os.PathLike[str], import_file: str | os.PathLike[str]
) -> str:
    """The module specifier that imports ``import_file`` from the file ``from_path``."""
    from_comps = _components(from_path)
    if not from_comps or from_comps == [_ROOT]:
        raise ValueError("failed to calculate import path")
    rel = _diff_components(_components(import_file), from_comps[:-1])
    if rel is None:
        raise ValueError("failed to calculate import path")
    text = _join(rel)
    if rel and rel[0] not in (_ROOT, _CUR, _PARENT):
        text = "./" + text
    while text.endswith(".ts"):
        text = text[: -len(".ts")]
    return text