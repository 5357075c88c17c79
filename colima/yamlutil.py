"""YAML writing, including merging settings into a commented defaults file."""

from __future__ import annotations

import dataclasses
import io
from collections.abc import Mapping, MutableMapping
from enum import Enum
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from ruamel.yaml.representer import RepresenterError


def _yaml() -> YAML:
    yaml = YAML()
    yaml.indent(mapping=2, sequence=4, offset=2)
    yaml.default_flow_style = False
    return yaml


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _plain(dataclasses.asdict(value))
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def _dump(data: Any) -> str:
    stream = io.StringIO()
    try:
        _yaml().dump(data, stream)
    except RepresenterError as exc:
        raise ValueError(f"error encoding YAML: {exc}") from exc
    return stream.getvalue()


def write_yaml(value: Any, path: str | Path) -> None:
    """Encode ``value`` as YAML into the file at ``path``."""
    Path(path).write_text(_dump(_plain(value)), encoding="utf-8")


def _apply(node: MutableMapping[str, Any], values: Any) -> None:
    for key in list(node):
        current = node[key]
        value = values.get(key) if isinstance(values, Mapping) else None

        if isinstance(current, Mapping):
            # only mappings replace mappings; a section of settings is merged
            if not isinstance(value, Mapping):
                continue
            if current and set(value) <= set(current):
                _apply(current, value)
            else:
                node[key] = value
            continue

        node[key] = value


def encode_yaml(values: Mapping[str, Any], defaults: str) -> str:
    """Return the ``defaults`` YAML document with ``values`` applied.

    Comments and key order of the defaults are kept. Every scalar or list in
    the defaults takes the value at the same key path, or null when it is
    absent. A mapping in the defaults whose keys cover the given mapping is a
    section and is filled key by key; any other given mapping replaces it.
    """
    try:
        root = _yaml().load(defaults)
    except YAMLError as exc:
        raise ValueError(f"embedded default config is invalid yaml: {exc}") from exc

    if root is None:
        raise ValueError("unexpected error during yaml decode: default config is empty")

    if isinstance(root, MutableMapping):
        _apply(root, _plain(values))

    try:
        return _dump(root)
    except ValueError as exc:
        raise ValueError(f"error encoding yaml file: {exc}") from exc


def save(values: Mapping[str, Any], path: str | Path, defaults: str) -> None:
    """Write ``values`` merged into ``defaults`` to the file at ``path``."""
    text = encode_yaml(values, defaults)
    try:
        Path(path).write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OSError(f"error writing yaml file: {exc}") from exc