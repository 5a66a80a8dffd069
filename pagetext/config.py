from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import yaml


class ConfigError(RuntimeError):
    pass


INCLUDE_PATTERNS = "include-patterns"
EXCLUDE_TAGS = "exclude-tags"
MAX_TEXT_SIZE = "max-text-size"
NO_TEXT = "no-text"

# Option names used by crawler configurations, accepted as aliases.
_ALIASES = {
    INCLUDE_PATTERNS: "textextractor.include.pattern",
    EXCLUDE_TAGS: "textextractor.exclude.tags",
    MAX_TEXT_SIZE: "textextractor.skip.after",
    NO_TEXT: "textextractor.no.text",
}

_SECTION = "textextractor"


@dataclass(frozen=True)
class ExtractorConfig:
    include_patterns: tuple[str, ...] = ()
    exclude_tags: frozenset[str] = frozenset()
    max_text_size: int = -1
    no_text: bool = False

    def with_overrides(
        self,
        *,
        include_patterns: Optional[Iterable[str]] = None,
        exclude_tags: Optional[Iterable[str]] = None,
        max_text_size: Optional[int] = None,
        no_text: Optional[bool] = None,
    ) -> "ExtractorConfig":
        changes: dict[str, Any] = {}
        if include_patterns is not None:
            changes["include_patterns"] = tuple(include_patterns)
        if exclude_tags is not None:
            changes["exclude_tags"] = frozenset(t.lower() for t in exclude_tags)
        if max_text_size is not None:
            changes["max_text_size"] = int(max_text_size)
        if no_text is not None:
            changes["no_text"] = bool(no_text)
        return replace(self, **changes)

    def to_mapping(self) -> dict[str, Any]:
        return {
            INCLUDE_PATTERNS: list(self.include_patterns),
            EXCLUDE_TAGS: sorted(self.exclude_tags),
            MAX_TEXT_SIZE: self.max_text_size,
            NO_TEXT: self.no_text,
        }


def _lookup(raw: Mapping[str, Any], key: str) -> Any:
    if key in raw:
        return raw[key]
    return raw.get(_ALIASES[key])


def _string_list(raw: Mapping[str, Any], key: str) -> list[str]:
    value = _lookup(raw, key)
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ConfigError(f"{key} must be a list of strings.")
    out: list[str] = []
    for i, item in enumerate(value):
        if not isinstance(item, str) or not item.strip():
            raise ConfigError(f"{key}[{i}] must be a non-empty string.")
        out.append(item.strip())
    return out


def config_from_mapping(raw: Mapping[str, Any]) -> ExtractorConfig:
    if not isinstance(raw, Mapping):
        raise ConfigError("Config root must be a mapping (YAML dict).")

    section = raw.get(_SECTION)
    if isinstance(section, Mapping):
        raw = section

    max_text_size = _lookup(raw, MAX_TEXT_SIZE)
    if max_text_size is None:
        max_text_size = -1
    if isinstance(max_text_size, bool):
        raise ConfigError(f"{MAX_TEXT_SIZE} must be an integer.")
    try:
        max_text_size = int(max_text_size)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{MAX_TEXT_SIZE} must be an integer.") from e

    no_text = _lookup(raw, NO_TEXT)
    if no_text is not None and not isinstance(no_text, bool):
        raise ConfigError(f"{NO_TEXT} must be true or false.")

    return ExtractorConfig(
        include_patterns=tuple(_string_list(raw, INCLUDE_PATTERNS)),
        exclude_tags=frozenset(t.lower() for t in _string_list(raw, EXCLUDE_TAGS)),
        max_text_size=max_text_size,
        no_text=bool(no_text),
    )


def load_config(path: Path) -> ExtractorConfig:
    if not path.exists():
        raise ConfigError(f"Config not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    return config_from_mapping(raw)
