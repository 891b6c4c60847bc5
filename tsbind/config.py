"""Project configuration read from ``ts.toml`` in the project directory."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar

from .export import MANIFEST_DIR_ENV

__all__ = ["Config"]


@dataclass(frozen=True)
class Config:
    """Settings for generating TypeScript output."""

    ambient_declarations: bool = False
    out_dir: str = "typescript"

    FILE_NAME: ClassVar[str] = "ts.toml"
    _instance: ClassVar[Config | None] = None

    @classmethod
    def get(cls) -> Config:
        """The configuration, loaded once from the project directory and then reused."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def load(cls, manifest_dir: str | os.PathLike[str] | None = None) -> Config:
        """Load the configuration from ``manifest_dir``, falling back to defaults.

        Without ``manifest_dir`` the directory is read from the environment.
        """
        if manifest_dir is None:
            manifest_dir = os.environ.get(MANIFEST_DIR_ENV)
            if manifest_dir is None:
                raise RuntimeError(f"environment variable {MANIFEST_DIR_ENV} is not set")
        loaded = cls.try_load_from_dir(manifest_dir)
        return cls() if loaded is None else loaded

    @classmethod
    def try_load_from_dir(cls, directory: str | os.PathLike[str]) -> Config | None:
        """Read ``ts.toml`` from ``directory``, or return ``None`` if it is absent."""
        path = Path(directory) / cls.FILE_NAME
        if not path.is_file():
            return None
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        return cls._from_mapping(data)

    @classmethod
    def _from_mapping(cls, data: dict[str, Any]) -> Config:
        expected = {"ambient_declarations": bool, "out_dir": str}
        values: dict[str, Any] = {}
        for key, kind in expected.items():
            if key not in data:
                raise ValueError(f"missing field `{key}`")
            value = data[key]
            if not isinstance(value, kind):
                raise ValueError(
                    f"invalid type for `{key}`: expected {kind.__name__}"
                )
            values[key] = value
        return cls(**values)