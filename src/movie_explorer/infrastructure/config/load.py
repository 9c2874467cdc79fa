"""Layered configuration loading: defaults < YAML < environment < CLI."""

from __future__ import annotations

from functools import cache
from pathlib import Path
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv
from pydantic import AliasChoices, AliasPath

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides


@cache
def _section_paths() -> dict[str, tuple[str, str]]:
    """Flat field name -> (section, key), read from AppConfig's alias paths."""
    paths: dict[str, tuple[str, str]] = {}
    for name, field in AppConfig.model_fields.items():
        alias = field.validation_alias
        if not isinstance(alias, AliasChoices):
            continue
        for choice in alias.choices:
            if isinstance(choice, AliasPath) and len(choice.path) == 2:
                section, key = choice.path
                paths[name] = (str(section), str(key))
    return paths


def _to_sections(layer: Mapping[str, Any], *, source: str) -> dict[str, Any]:
    """
    Fold a layer into the sectioned shape of config.yaml.

    Env and CLI layers are flat (``log_level``), YAML and defaults are
    sectioned (``logging.level``); both spellings may appear in one layer.
    """
    paths = _section_paths()
    sections = {section for section, _ in paths.values()}
    out: dict[str, Any] = {}
    for name, value in layer.items():
        if name in paths:
            section, key = paths[name]
            out.setdefault(section, {})[key] = value
        elif name in sections:
            if not isinstance(value, Mapping):
                raise ValueError(f"{source}: section {name!r} must be a mapping")
            out.setdefault(name, {}).update(value)
        else:
            out[name] = value
    return out


def _overlay(base: dict[str, Any], layer: Mapping[str, Any]) -> None:
    # Sections are one level deep; keys inside a section replace each other.
    for key, value in layer.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key].update(value)
        else:
            base[key] = value


def _require_file(path: Path) -> None:
    if not path.is_file():
        raise FileNotFoundError(path)


def _read_yaml(path: Path) -> dict[str, Any]:
    parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"{path}: config YAML must be a mapping, got {type(parsed).__name__}")
    return parsed


def _check_storage(config: AppConfig) -> None:
    # diskcache creates the directory on first open but cannot replace a file.
    if config.storage_backend == "diskcache" and config.storage_dir.is_file():
        raise ValueError(f"storage.dir {config.storage_dir} is a file, not a directory")


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> AppConfig:
    """
    Build the validated configuration.

    A ``.env`` file only fills variables that are not already set, so the
    real environment wins over it. Nothing is created on disk.

    Raises:
        FileNotFoundError: When `config_path` or `dotenv_path` does not exist.
        ValueError: On a malformed YAML layer or an unusable storage directory.
        pydantic.ValidationError: When a merged value is invalid.
    """
    if dotenv_path is not None:
        _require_file(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    layers: list[tuple[str, Mapping[str, Any]]] = [("defaults", DEFAULT_CONFIG)]
    if config_path is not None:
        _require_file(config_path)
        layers.append((str(config_path), _read_yaml(config_path)))
    layers.append(("environment", EnvOverrides().to_update_dict()))
    layers.append(("command line", cli_overrides or {}))

    merged: dict[str, Any] = {}
    for source, layer in layers:
        _overlay(merged, _to_sections(layer, source=source))

    config = AppConfig.model_validate(merged)
    _check_storage(config)
    return config


def config_warnings(config: AppConfig) -> list[tuple[str, dict[str, Any]]]:
    """
    Non-fatal configuration problems as (event, context) pairs.

    Logged by the caller once logging is configured.
    """
    warnings: list[tuple[str, dict[str, Any]]] = []
    if not config.omdb_api_key:
        warnings.append(
            ("omdb_api_key_missing", {"env_var": "MOVIE_EXPLORER_OMDB_API_KEY"})
        )
    return warnings
