# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Layered configuration with YAML/TOML files, env vars, and dataclass binding."""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]

from scenewire.kernel.exceptions import ConfigurationException

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_MAX_PLACEHOLDER_DEPTH = 10

_CONFIG_PROPERTIES_ATTR = "__scenewire_config_prefix__"
_ENV_PREFIX = "SCENEWIRE_"
_FILE_STEM = "scenewire"
_EXTENSIONS = (".yaml", ".toml")

_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off"})


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass as bindable to the config section at *prefix*.

    Usage::

        @config_properties(prefix="scenewire.resolver")
        @dataclass
        class ResolverProperties:
            include_inactive: bool = False
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


def env_key_for(key: str) -> str:
    """Environment variable overriding *key*.

    ``scenewire.resolver.include_inactive`` -> ``SCENEWIRE_RESOLVER_INCLUDE_INACTIVE``;
    keys outside the ``scenewire`` namespace get the same prefix.
    """
    name = key.removeprefix(f"{_FILE_STEM}.")
    return _ENV_PREFIX + re.sub(r"[.\-]", "_", name).upper()


class Config:
    """Hierarchical configuration with dot-notation access.

    Lookup order for :meth:`get` (first hit wins):

    1. ``SCENEWIRE_*`` environment variable for the key
    2. Merged file data (library defaults, then project files, then profiles)
    3. The caller's default

    String values may contain ``${NAME}`` or ``${some.key:default}``
    placeholders, resolved from the environment first and then from other
    keys.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self._loaded_sources: list[str] = []

    @property
    def loaded_sources(self) -> list[str]:
        """Files merged into this config, in merge order."""
        return list(self._loaded_sources)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_sources(
        cls,
        base_dir: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Merge every config file found for a project rooted at *base_dir*.

        Later files win: library defaults, ``config/scenewire.*``,
        ``scenewire.*``, then ``scenewire-<profile>.*`` for each active profile
        (each again checked in ``config/`` first).
        """
        config = cls._with_defaults() if load_defaults else cls()
        base_dir = Path(base_dir)
        for path in _project_files(base_dir, _FILE_STEM):
            config._merge_file(path, str(path))
        for profile in active_profiles or []:
            for path in _project_files(base_dir, f"{_FILE_STEM}-{profile}"):
                config._merge_file(path, f"{path} (profile: {profile})")
        return config

    @classmethod
    def from_file(cls, path: str | Path, load_defaults: bool = True) -> Config:
        """Load one YAML or TOML file; a missing file leaves only the defaults."""
        config = cls._with_defaults() if load_defaults else cls()
        path = Path(path)
        if path.is_file():
            config._merge_file(path, str(path))
        return config

    @classmethod
    def _with_defaults(cls) -> Config:
        resource = importlib.resources.files("scenewire.resources").joinpath("scenewire-defaults.yaml")
        config = cls(yaml.safe_load(resource.read_text(encoding="utf-8")) or {})
        config._loaded_sources.append("scenewire-defaults.yaml (library defaults)")
        return config

    def _merge_file(self, path: Path, label: str) -> None:
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                data = tomllib.load(f)
        else:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        self._data = _deep_merge(self._data, data)
        self._loaded_sources.append(label)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Value at dot-notation *key*, honouring env overrides and placeholders."""
        env_value = os.environ.get(env_key_for(key))
        if env_value is not None:
            return env_value

        value = self._lookup(key)
        if value is None:
            return default
        if isinstance(value, str) and "${" in value:
            return self._interpolate(value, 0)
        return value

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Raw mapping under *prefix*, or an empty dict."""
        section = self._lookup(prefix)
        return section if isinstance(section, dict) else {}

    def _lookup(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def _interpolate(self, value: str, depth: int) -> str:
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Max recursion depth exceeded resolving placeholders in '{value}'")

        def substitute(match: re.Match[str]) -> str:
            ref, has_default, fallback = match.group(1).partition(":")
            if ref in os.environ:
                return os.environ[ref]
            found = self._lookup(ref)
            if found is not None:
                text = str(found)
                return self._interpolate(text, depth + 1) if "${" in text else text
            if has_default:
                return fallback
            raise ValueError(f"Cannot resolve placeholder '${{{match.group(1)}}}': not in environment or config")

        return _PLACEHOLDER_RE.sub(substitute, value)

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    def bind(self, config_cls: type[T]) -> T:
        """Instantiate a ``@config_properties`` dataclass from its section.

        Each field is read through :meth:`get`, so env overrides apply per
        field. Strings are coerced to ``int``, ``float`` and ``bool`` fields;
        a value that cannot be coerced raises :class:`ConfigurationException`.
        Missing keys keep the dataclass default.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        hints = get_type_hints(config_cls)
        values: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            key = f"{prefix}.{field.name}"
            raw = self.get(key)
            if raw is not None:
                values[field.name] = _coerce(key, raw, hints.get(field.name))
        return config_cls(**values)


def _project_files(base_dir: Path, stem: str) -> Iterator[Path]:
    for directory in (base_dir / "config", base_dir):
        for ext in _EXTENSIONS:
            path = directory / f"{stem}{ext}"
            if path.is_file():
                yield path


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _coerce(key: str, value: Any, expected: Any) -> Any:
    if not isinstance(value, str) or expected not in (int, float, bool):
        return value
    if expected is bool:
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    else:
        try:
            return expected(value)
        except ValueError:
            pass
    raise ConfigurationException(
        f"Cannot bind '{key}': {value!r} is not a valid {expected.__name__}",
        code="CONFIG_BINDING",
        context={"key": key, "value": value},
    )
