"""
Carga de la configuración de easyview.

Cada fuente produce un dict parcial que se fusiona sobre la anterior:

    defaults de Pydantic < YAML < variables EASYVIEW_* < flags de la CLI

El resultado final se valida una sola vez con AppConfig.
"""

import os
from pathlib import Path
from typing import Any

import yaml

from .schema import AppConfig

# Variable de entorno → clave "seccion.campo"
ENV_VARS: dict[str, str] = {
    "EASYVIEW_WORKSPACE": "workspace.root",
    "EASYVIEW_LOG_LEVEL": "logging.level",
    "EASYVIEW_LOG_FILE": "logging.file",
}

# Argumento de la CLI → clave "seccion.campo"
CLI_KEYS: dict[str, str] = {
    "workspace": "workspace.root",
    "log_level": "logging.level",
    "log_file": "logging.file",
    "verbose": "logging.verbose",
    "include_hidden": "indexer.include_hidden",
}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Fusiona ``override`` sobre ``base`` sin mutar ninguno de los dos.

    Los dicts anidados se fusionan clave a clave; cualquier otro valor de
    ``override`` reemplaza al de ``base``.

    >>> deep_merge({"indexer": {"max_file_size": 1, "include_hidden": True}},
    ...            {"indexer": {"max_file_size": 2}})
    {'indexer': {'max_file_size': 2, 'include_hidden': True}}
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _nested(dotted_key: str, value: Any) -> dict[str, Any]:
    """``("logging.level", "info")`` → ``{"logging": {"level": "info"}}``."""
    section, field = dotted_key.split(".", 1)
    return {section: {field: value}}


def load_yaml_config(config_path: Path | None) -> dict[str, Any]:
    """Lee el archivo YAML de configuración.

    Un archivo vacío equivale a no tener configuración.

    Raises:
        FileNotFoundError: Si config_path no existe
        ValueError: Si el documento YAML no es un mapping
    """
    if config_path is None:
        return {}

    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a YAML mapping: {path}")
    return data


def load_env_overrides() -> dict[str, Any]:
    """Overrides desde las variables EASYVIEW_* definidas y no vacías."""
    overrides: dict[str, Any] = {}
    for var, key in ENV_VARS.items():
        value = os.environ.get(var)
        if not value:
            continue
        if key == "logging.level":
            value = value.lower()
        overrides = deep_merge(overrides, _nested(key, value))
    return overrides


def apply_cli_overrides(config_dict: dict[str, Any], cli_args: dict[str, Any]) -> dict[str, Any]:
    """Aplica los flags de la CLI que el usuario pasó.

    Los valores "vacíos" (None, False, 0) significan flag no usado y
    no pisan lo que venga del YAML o del entorno.
    """
    result = config_dict
    for arg, key in CLI_KEYS.items():
        value = cli_args.get(arg)
        if value:
            result = deep_merge(result, _nested(key, value))
    return result


def load_config(
    config_path: Path | None = None,
    cli_args: dict[str, Any] | None = None,
) -> AppConfig:
    """Construye el AppConfig final a partir de todas las fuentes.

    Raises:
        FileNotFoundError: Si config_path no existe
        ValueError: Si el YAML no es un mapping
        pydantic.ValidationError: Si el resultado no valida
    """
    merged = deep_merge(load_yaml_config(config_path), load_env_overrides())
    merged = apply_cli_overrides(merged, cli_args or {})
    return AppConfig(**merged)
