"""Typed helpers for parsing compiler configuration dictionaries."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from intellicompiler.constants import (
    DEFAULT_CONVERTIBLE_EXTENSIONS,
    DEFAULT_EXTENSION_MAP,
    DEFAULT_FALLBACK_EXTENSION,
    DEFAULT_ORACLE_TIMEOUT_S,
    DEFAULT_SECURITY_FLAG_RULES,
    DEFAULT_SKIP_DIRS,
    DEFAULT_TRANSPILE_WORKERS,
    DEFAULT_VERSION_OVERRIDES,
    DEFAULT_VERSION_TABLE,
)
from intellicompiler.exceptions import CompilerConfigError


def _ensure_path(value: str | Path, *, config_root: Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (config_root / path).resolve()
    return path


def _normalize_extension(value: Any) -> str:
    return str(value).strip().lstrip(".")


@dataclass(frozen=True)
class VersionOverride:
    language: str
    flag: str
    version: str


@dataclass(frozen=True)
class VersionSettings:
    table: Mapping[str, Tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_VERSION_TABLE)
    )
    overrides: Tuple[VersionOverride, ...] = field(
        default_factory=lambda: tuple(
            VersionOverride(*item) for item in DEFAULT_VERSION_OVERRIDES
        )
    )


@dataclass(frozen=True)
class FlagRuleSettings:
    name: str
    flag: str


@dataclass(frozen=True)
class SecuritySettings:
    flag_rules: Tuple[FlagRuleSettings, ...] = field(
        default_factory=lambda: tuple(
            FlagRuleSettings(*item) for item in DEFAULT_SECURITY_FLAG_RULES
        )
    )


@dataclass(frozen=True)
class TraversalSettings:
    skip_dirs: frozenset[str] = frozenset(DEFAULT_SKIP_DIRS)
    extensions: frozenset[str] = frozenset(DEFAULT_CONVERTIBLE_EXTENSIONS)
    extension_map: Mapping[str, str] = field(
        default_factory=lambda: dict(DEFAULT_EXTENSION_MAP)
    )
    fallback_extension: str = DEFAULT_FALLBACK_EXTENSION
    workers: int = DEFAULT_TRANSPILE_WORKERS

    def is_convertible(self, path: Path) -> bool:
        suffix = path.suffix.lstrip(".").lower()
        return bool(suffix) and suffix in self.extensions

    def output_extension(self, language: str) -> str:
        return self.extension_map.get(language.lower(), self.fallback_extension)


@dataclass(frozen=True)
class LLMSettings:
    raw: Dict[str, Any] = field(default_factory=dict)
    timeout_s: int = DEFAULT_ORACLE_TIMEOUT_S
    prompt_overrides: Tuple[Path, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CompilerSettings:
    versions: VersionSettings = field(default_factory=VersionSettings)
    security: SecuritySettings = field(default_factory=SecuritySettings)
    traversal: TraversalSettings = field(default_factory=TraversalSettings)
    llm: LLMSettings = field(default_factory=LLMSettings)


def _build_version_settings(cfg: Dict[str, Any]) -> VersionSettings:
    table_cfg = cfg.get("table")
    if table_cfg is None:
        table = dict(DEFAULT_VERSION_TABLE)
    else:
        if not isinstance(table_cfg, dict):
            raise CompilerConfigError("versions.table must be a mapping")
        table = {}
        for language, versions in table_cfg.items():
            values = tuple(str(v) for v in (versions or []))
            if not values:
                raise CompilerConfigError(
                    f"versions.table.{language} must list at least one version"
                )
            table[str(language).lower()] = values

    overrides_cfg = cfg.get("overrides")
    if overrides_cfg is None:
        overrides = tuple(
            VersionOverride(*item) for item in DEFAULT_VERSION_OVERRIDES
        )
    else:
        items = []
        for entry in overrides_cfg:
            try:
                items.append(
                    VersionOverride(
                        language=str(entry["language"]).lower(),
                        flag=str(entry["flag"]),
                        version=str(entry["version"]),
                    )
                )
            except (KeyError, TypeError) as exc:
                raise CompilerConfigError(
                    "versions.overrides entries need language, flag and version"
                ) from exc
        overrides = tuple(items)
    return VersionSettings(table=table, overrides=overrides)


def _build_security_settings(cfg: Dict[str, Any]) -> SecuritySettings:
    rules_cfg = cfg.get("rules")
    if rules_cfg is None:
        return SecuritySettings()
    rules = []
    for entry in rules_cfg:
        try:
            rules.append(
                FlagRuleSettings(name=str(entry["name"]), flag=str(entry["flag"]))
            )
        except (KeyError, TypeError) as exc:
            raise CompilerConfigError(
                "security.rules entries need name and flag"
            ) from exc
    return SecuritySettings(flag_rules=tuple(rules))


def _coerce_names(
    value: Optional[Iterable[Any]], default: Iterable[str]
) -> frozenset[str]:
    if value is None:
        return frozenset(default)
    return frozenset(str(item) for item in value)


def _build_traversal_settings(cfg: Dict[str, Any]) -> TraversalSettings:
    extension_map = dict(DEFAULT_EXTENSION_MAP)
    for language, ext in (cfg.get("extension_map") or {}).items():
        extension_map[str(language).lower()] = _normalize_extension(ext)
    extensions_cfg = cfg.get("extensions")
    extensions = (
        frozenset(DEFAULT_CONVERTIBLE_EXTENSIONS)
        if extensions_cfg is None
        else frozenset(
            _normalize_extension(ext).lower() for ext in extensions_cfg
        )
    )
    workers = int(cfg.get("workers", DEFAULT_TRANSPILE_WORKERS))
    return TraversalSettings(
        skip_dirs=_coerce_names(cfg.get("skip_dirs"), DEFAULT_SKIP_DIRS),
        extensions=extensions,
        extension_map=extension_map,
        fallback_extension=_normalize_extension(
            cfg.get("fallback_extension", DEFAULT_FALLBACK_EXTENSION)
        ),
        workers=max(1, workers),
    )


def _build_llm_settings(
    cfg: Dict[str, Any], *, config_root: Path
) -> LLMSettings:
    raw = deepcopy(cfg)
    prompt_dir_value = raw.pop("prompt_dir", None)
    prompt_overrides: Tuple[Path, ...] = tuple()
    if prompt_dir_value:
        dirs = (
            list(prompt_dir_value)
            if isinstance(prompt_dir_value, (list, tuple))
            else [prompt_dir_value]
        )
        prompt_overrides = tuple(
            _ensure_path(item, config_root=config_root) for item in dirs
        )
    timeout_s = int(raw.get("timeout_s", DEFAULT_ORACLE_TIMEOUT_S))
    return LLMSettings(
        raw=raw, timeout_s=timeout_s, prompt_overrides=prompt_overrides
    )


def build_compiler_settings(
    config: Dict[str, Any], *, config_root: Path
) -> CompilerSettings:
    compiler_cfg = config.get("compiler") or {}
    return CompilerSettings(
        versions=_build_version_settings(compiler_cfg.get("versions") or {}),
        security=_build_security_settings(compiler_cfg.get("security") or {}),
        traversal=_build_traversal_settings(
            compiler_cfg.get("traversal") or {}
        ),
        llm=_build_llm_settings(
            compiler_cfg.get("llm") or {}, config_root=config_root
        ),
    )


__all__ = [
    "CompilerSettings",
    "FlagRuleSettings",
    "LLMSettings",
    "SecuritySettings",
    "TraversalSettings",
    "VersionOverride",
    "VersionSettings",
    "build_compiler_settings",
]
