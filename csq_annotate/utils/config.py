"""Configuration loading and manipulation helpers."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Sequence

import yaml

from csq_annotate.errors import ConfigError


def load_config(config_path: Path) -> Mapping[str, Any]:
    """
    Parse a YAML configuration file into a nested mapping.

    A missing file is a `FileNotFoundError`; callers that run without a config
    file simply start from an empty mapping instead.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def clone_config(config: Mapping[str, Any]) -> dict[str, Any]:
    """Return a deep copy of the configuration mapping."""
    return copy.deepcopy(dict(config))


def set_by_dotted_path(
    config: MutableMapping[str, Any],
    dotted_key: str,
    value: Any,
) -> None:
    """
    Assign a value inside a nested mapping using dotted-path syntax.

    Examples
    --------
    >>> cfg = {"annotation": {"key_index": 4}}
    >>> set_by_dotted_path(cfg, "annotation.key_index", 3)
    >>> cfg["annotation"]["key_index"]
    3
    """
    keys: Sequence[str] = dotted_key.split(".")
    current: MutableMapping[str, Any] = config
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], MutableMapping):
            current[key] = {}
        current = current[key]  # type: ignore[assignment]
    current[keys[-1]] = value


def get_by_dotted_path(config: Mapping[str, Any], dotted_key: str, default: Any = None) -> Any:
    """Fetch a value from a nested mapping using dotted-path syntax."""
    current: Any = config
    for key in dotted_key.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return default
        current = current[key]
    return current


@dataclass(frozen=True)
class AnnotationSettings:
    """Validated view over the `annotation` and `io` config sections."""

    tag_name: str
    table_path: Path
    info_tag: str = "CSQ"
    key_index: int = 4
    key_field: str | None = None
    table_delimiter: str = "\t"
    input_path: str = "-"
    output_path: str = "-"

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "AnnotationSettings":
        tag_name = get_by_dotted_path(config, "annotation.tag_name")
        table_path = get_by_dotted_path(config, "annotation.table_path")
        if not tag_name:
            raise ConfigError("annotation.tag_name must be set to the new sub-field name")
        if not table_path:
            raise ConfigError("annotation.table_path must point at the mapping table")

        try:
            key_index = int(get_by_dotted_path(config, "annotation.key_index", 4))
        except (TypeError, ValueError) as exc:
            raise ConfigError("annotation.key_index must be an integer") from exc
        if key_index < 0:
            raise ConfigError("annotation.key_index must be zero or greater")

        delimiter = str(get_by_dotted_path(config, "annotation.table_delimiter", "\t"))
        if len(delimiter) != 1:
            raise ConfigError("annotation.table_delimiter must be a single character")

        return cls(
            tag_name=str(tag_name),
            table_path=Path(table_path),
            info_tag=str(get_by_dotted_path(config, "annotation.info_tag", "CSQ")),
            key_index=key_index,
            key_field=get_by_dotted_path(config, "annotation.key_field"),
            table_delimiter=delimiter,
            input_path=str(get_by_dotted_path(config, "io.input", "-")),
            output_path=str(get_by_dotted_path(config, "io.output", "-")),
        )
