"""
Cargador de configuración con deep merge.

Orden de precedencia (de menor a mayor):
1. Defaults (definidos en los schemas Pydantic)
2. Archivo YAML
3. Variables de entorno
4. Argumentos CLI

El merge es recursivo para preservar todas las claves en todos los niveles.
"""

import os
from pathlib import Path
from typing import Any

import yaml

from .schema import AppConfig

_TRUE_VALUES = {"1", "true", "yes", "on"}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge recursivo de diccionarios.

    Args:
        base: Diccionario base
        override: Diccionario que sobreescribe valores del base

    Returns:
        Nuevo diccionario con valores merged. Override gana en conflictos de hojas.

    Example:
        >>> base = {"a": {"b": 1, "c": 2}, "d": 3}
        >>> override = {"a": {"b": 99}, "e": 4}
        >>> deep_merge(base, override)
        {"a": {"b": 99, "c": 2}, "d": 3, "e": 4}
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_config(config_path: Path | None) -> dict[str, Any]:
    """Carga configuración desde archivo YAML.

    Args:
        config_path: Path al archivo YAML, o None para omitir

    Returns:
        Diccionario con la configuración, o dict vacío si no hay archivo

    Raises:
        FileNotFoundError: Si config_path no existe
        ValueError: Si la raíz del YAML no es un mapping
    """
    if not config_path:
        return {}

    if not config_path.exists():
        raise FileNotFoundError(f"Archivo de configuración no encontrado: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuración inválida en {config_path}: se esperaba un mapping")
    return data


def load_env_overrides() -> dict[str, Any]:
    """Carga overrides desde variables de entorno.

    Variables soportadas:
        EASYI18N_LOCALE: sobreescribe locale
        EASYI18N_CATALOG: sobreescribe catalog.path
        EASYI18N_LOG_LEVEL: sobreescribe logging.level
        EASYI18N_ALWAYS_REMOVE_BRACKETS: sobreescribe nuggets.always_remove_brackets

    Returns:
        Diccionario con overrides desde env vars
    """
    overrides: dict[str, Any] = {}

    if locale := os.environ.get("EASYI18N_LOCALE"):
        overrides["locale"] = locale

    if catalog := os.environ.get("EASYI18N_CATALOG"):
        overrides.setdefault("catalog", {})["path"] = catalog

    if log_level := os.environ.get("EASYI18N_LOG_LEVEL"):
        overrides.setdefault("logging", {})["level"] = log_level.lower()

    if remove := os.environ.get("EASYI18N_ALWAYS_REMOVE_BRACKETS"):
        overrides.setdefault("nuggets", {})["always_remove_brackets"] = (
            remove.strip().lower() in _TRUE_VALUES
        )

    return overrides


def apply_cli_overrides(config_dict: dict[str, Any], cli_args: dict[str, Any]) -> dict[str, Any]:
    """Aplica overrides desde argumentos CLI.

    Solo se aplican los argumentos presentes (no None); las listas vacías
    de --include/--exclude se consideran ausentes.

    Args:
        config_dict: Configuración base (ya merged con YAML y env)
        cli_args: Diccionario con argumentos CLI

    Returns:
        Configuración con overrides de CLI aplicados
    """
    overrides: dict[str, Any] = {}

    if cli_args.get("locale"):
        overrides["locale"] = cli_args["locale"]

    # Catalog overrides
    if cli_args.get("catalog"):
        overrides.setdefault("catalog", {})["path"] = cli_args["catalog"]

    if cli_args.get("lookup_dir"):
        overrides.setdefault("catalog", {})["lookup_dir"] = cli_args["lookup_dir"]

    # Nugget overrides
    if cli_args.get("always_remove_brackets") is not None:
        overrides.setdefault("nuggets", {})["always_remove_brackets"] = cli_args["always_remove_brackets"]

    if cli_args.get("warn_missing") is not None:
        overrides.setdefault("nuggets", {})["warn_on_missing_translations"] = cli_args["warn_missing"]

    # Asset overrides
    if cli_args.get("exclude"):
        overrides.setdefault("assets", {})["exclude_urls"] = list(cli_args["exclude"])

    if cli_args.get("include"):
        overrides.setdefault("assets", {})["include_urls"] = list(cli_args["include"])

    # Build overrides
    if cli_args.get("input_dir"):
        overrides.setdefault("build", {})["input_dir"] = cli_args["input_dir"]

    if cli_args.get("output_dir"):
        overrides.setdefault("build", {})["output_dir"] = cli_args["output_dir"]

    if cli_args.get("workers") is not None:
        overrides.setdefault("build", {})["workers"] = cli_args["workers"]

    # Logging overrides
    if cli_args.get("log_level"):
        overrides.setdefault("logging", {})["level"] = cli_args["log_level"]

    if cli_args.get("log_file"):
        overrides.setdefault("logging", {})["file"] = cli_args["log_file"]

    if cli_args.get("verbose") is not None:
        overrides.setdefault("logging", {})["verbose"] = cli_args["verbose"]

    return deep_merge(config_dict, overrides)


def load_config(
    config_path: Path | None = None,
    cli_args: dict[str, Any] | None = None,
) -> AppConfig:
    """Carga y valida la configuración completa de la aplicación.

    Proceso de carga:
    1. Cargar defaults de Pydantic
    2. Merge con YAML (si existe)
    3. Merge con env vars
    4. Merge con CLI args
    5. Validar con Pydantic

    Args:
        config_path: Path al archivo YAML de configuración
        cli_args: Diccionario con argumentos de la CLI

    Returns:
        AppConfig validado y completo

    Raises:
        FileNotFoundError: Si config_path no existe
        ValidationError: Si la configuración final no es válida
    """
    cli_args = cli_args or {}

    yaml_config = load_yaml_config(config_path)

    env_overrides = load_env_overrides()
    merged = deep_merge(yaml_config, env_overrides)

    merged = apply_cli_overrides(merged, cli_args)

    # Pydantic aplica los defaults automáticamente
    return AppConfig(**merged)
