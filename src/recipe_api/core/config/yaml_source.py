"""YAML settings source layered by environment."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` on top of ``base``.

    Nested mappings are merged key by key; any other value in ``override``
    replaces the one in ``base``. Neither argument is mutated.
    """
    result = dict(base)
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = value
    return result


def load_yaml_dir(directory: Path) -> dict[str, Any]:
    """Merge every ``*.yaml`` file of a directory in file-name order."""
    merged: dict[str, Any] = {}
    if not directory.is_dir():
        return merged
    for yaml_file in sorted(directory.glob("*.yaml")):
        with yaml_file.open(encoding="utf-8") as f:
            merged = deep_merge(merged, yaml.safe_load(f) or {})
    return merged


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source reading ``config/base`` then ``config/environments/<APP_ENV>``.

    The config directory defaults to ``<project root>/config`` and can be
    moved with the ``CONFIG_DIR`` environment variable.
    """

    def __init__(self, settings_cls: type[Any]) -> None:
        super().__init__(settings_cls)
        self._config_dir = self._resolve_config_dir()
        self._app_env = os.getenv("APP_ENV", "development")
        self._yaml_data = deep_merge(
            load_yaml_dir(self._config_dir / "base"),
            load_yaml_dir(self._config_dir / "environments" / self._app_env),
        )

    @staticmethod
    def _resolve_config_dir() -> Path:
        override = os.getenv("CONFIG_DIR")
        if override:
            return Path(override)
        # src/recipe_api/core/config/yaml_source.py -> project root
        return Path(__file__).resolve().parents[4] / "config"

    def get_field_value(
        self,
        _field: FieldInfo,
        field_name: str,
    ) -> tuple[Any, str, bool]:
        value = self._yaml_data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, Any]:
        return self._yaml_data
