"""
Configuration for composite mark expansion.

Defines Config, a frozen dataclass carrying the error-bar defaults the compiler
falls back on when a mark definition leaves center, extent or a part unset.
Defaults are sourced from compositemark.core.constants.

Source of truth
- compositemark.core.constants.DEFAULT_CENTER, DEFAULT_EXTENT
- Part names from compositemark.core.grammar.ERRORBAR_PARTS
- Part states from compositemark.core.toggle

Loaders
- ``from_mapping``: Vega-Lite style ``{"errorbar": {...}}`` config block.
- ``from_env``: ``COMPOSITEMARK_ERRORBAR_*`` variables.
- ``from_toml``: ``compositemark.toml`` (``[errorbar]``) or ``pyproject.toml``
  (``[tool.compositemark.errorbar]``).
- ``load``: precedence env > TOML > defaults.

Notes
- Invalid values are skipped and the previous layer's value is kept.
- Default parts: whisker and point are drawn; bar, line and ticks are not.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from .core.constants import DEFAULT_CENTER, DEFAULT_EXTENT
from .core.errors import GrammarError
from .core.grammar import (
    ERRORBAR_PARTS,
    ErrorBarCenter,
    ErrorBarExtent,
    center_from_value,
    extent_from_value,
)
from .core.toggle import Disabled, PartToggle, UseDefault, configured_toggle

__all__ = [
    "ErrorBarConfig",
    "Config",
]


@dataclass(frozen=True)
class ErrorBarConfig:
    """
    Error-bar defaults.

    Attributes:
        center (ErrorBarCenter): Center used when the mark sets none.
        extent (ErrorBarExtent): Extent used when the mark sets none and center is mean.
        bar, line, point, ticks, whisker (PartToggle): Configured state per part.

    Examples:
        >>> ErrorBarConfig().part("whisker")
        UseDefault()
    """

    center: ErrorBarCenter = ErrorBarCenter(DEFAULT_CENTER)
    extent: ErrorBarExtent = ErrorBarExtent(DEFAULT_EXTENT)
    bar: PartToggle = field(default_factory=Disabled)
    line: PartToggle = field(default_factory=Disabled)
    point: PartToggle = field(default_factory=UseDefault)
    ticks: PartToggle = field(default_factory=Disabled)
    whisker: PartToggle = field(default_factory=UseDefault)

    def part(self, name: str) -> PartToggle:
        if name not in ERRORBAR_PARTS:
            return Disabled()
        return getattr(self, name)


def _bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
    return False


@dataclass(frozen=True)
class Config:
    """
    Runtime configuration for the compiler.

    Attributes:
        errorbar (ErrorBarConfig): Error-bar defaults.

    Examples:
        Override the default center from a spec's config block:

        >>> Config.from_mapping({"errorbar": {"center": "median"}}).errorbar.center
        <ErrorBarCenter.MEDIAN: 'median'>
    """

    errorbar: ErrorBarConfig = field(default_factory=ErrorBarConfig)

    # Configuration loaders (mapping/env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_errorbar(cls, base: ErrorBarConfig, cfg: Mapping[str, Any]) -> ErrorBarConfig:
        s = base

        if "center" in cfg:
            try:
                s = replace(s, center=center_from_value(cfg["center"]))
            except GrammarError:
                pass

        if "extent" in cfg:
            try:
                s = replace(s, extent=extent_from_value(cfg["extent"]))
            except GrammarError:
                pass

        for part in ERRORBAR_PARTS:
            if part not in cfg:
                continue
            value = cfg[part]
            # env values arrive as strings
            if isinstance(value, str):
                value = _bool(value)
            try:
                s = replace(s, **{part: configured_toggle(value)})
            except GrammarError:
                pass

        return s

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any] | None, base: Config | None = None) -> Config:
        """
        Apply a loose config mapping, returning a new instance.

        Args:
            cfg: Mapping with an ``errorbar`` block, e.g. a Vega-Lite ``config`` object.
                Unrelated keys are ignored.
            base: Starting configuration (defaults when None).

        Returns:
            Config
        """
        s = base or cls()
        if not isinstance(cfg, Mapping):
            return s
        block = cfg.get("errorbar")
        if isinstance(block, Mapping):
            s = replace(s, errorbar=cls._apply_errorbar(s.errorbar, block))
        return s

    @classmethod
    def from_env(cls, base: Config | None = None, prefix: str = "COMPOSITEMARK_") -> Config:
        """
        Build Config from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - COMPOSITEMARK_ERRORBAR_CENTER ("mean" | "median")
            - COMPOSITEMARK_ERRORBAR_EXTENT ("ci" | "iqr" | "stderr" | "stdev")
            - COMPOSITEMARK_ERRORBAR_BAR, _LINE, _POINT, _TICKS, _WHISKER
              (1/0/true/false/yes/no/on/off)
        """
        mapping: dict[str, Any] = {}
        for key in ("center", "extent", *ERRORBAR_PARTS):
            v = os.getenv(f"{prefix}ERRORBAR_{key.upper()}")
            if v:
                mapping[key] = v
        return cls.from_mapping({"errorbar": mapping}, base=base)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> Config:
        """
        Build Config from a TOML file.

        Search order when `path` is None:
            1) ./compositemark.toml (top-level [errorbar] table)
            2) ./pyproject.toml under [tool.compositemark]

        Returns defaults if no file is present or it cannot be parsed.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                return None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "compositemark.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("compositemark") if isinstance(tool, dict) else None
            else:
                cfg = data
            if cfg:
                break

        return cls.from_mapping(cfg, base=s)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> Config:
        """
        Load Config applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults
                (compositemark.toml, pyproject.toml).

        Returns:
            Config
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
