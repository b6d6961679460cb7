"""Configuration file loading and merging.

Handles loading configuration from YAML files with:
- Project-level config (.dotnetreports.yml)
- Global config (~/.dotnetreports/config.yml)
- Environment variable expansion (${VAR})
- Config merging with proper precedence
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from dotnetreports.config.models import (
    AnalysisConfig,
    DEFAULT_MAX_WORKERS,
    ModuleConfig,
    ProjectConfig,
    ReportsConfig,
)
from dotnetreports.config.validation import validate_config
from dotnetreports.core.logging import get_logger
from dotnetreports.core.models import TestScope

LOGGER = get_logger(__name__)

PROJECT_CONFIG_NAMES = [".dotnetreports.yml", ".dotnetreports.yaml", "dotnetreports.yml", "dotnetreports.yaml"]
GLOBAL_CONFIG_NAME = "config.yml"

DEFAULT_HOME_DIR_NAME = ".dotnetreports"
DOTNETREPORTS_HOME_ENV = "DOTNETREPORTS_HOME"

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


class ConfigError(Exception):
    """Configuration loading or parsing error."""

    pass


def get_home() -> Path:
    """Home directory for global configuration.

    Resolution order:
    1. DOTNETREPORTS_HOME environment variable (if set)
    2. ~/.dotnetreports (default)
    """
    env_home = os.environ.get(DOTNETREPORTS_HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / DEFAULT_HOME_DIR_NAME


def load_config(
    project_root: Path,
    cli_config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> ReportsConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. CLI flags (cli_overrides)
    2. Custom config file (cli_config_path) OR project config (.dotnetreports.yml)
    3. Global config (~/.dotnetreports/config.yml)
    4. Built-in defaults

    Args:
        project_root: Project root directory for finding .dotnetreports.yml.
        cli_config_path: Optional path to custom config file (--config flag).
        cli_overrides: Dict of CLI flag overrides.

    Returns:
        Merged ReportsConfig instance.

    Raises:
        ConfigError: If specified config file doesn't exist or has parse errors.
    """
    sources: List[str] = []
    merged: Dict[str, Any] = {}

    # Layer 1: Global config
    global_path = find_global_config()
    if global_path is not None:
        try:
            global_dict = load_yaml_file(global_path)
            validate_config(global_dict, source=str(global_path))
            merged = merge_configs(merged, global_dict)
            sources.append(f"global:{global_path}")
            LOGGER.debug(f"Loaded global config from {global_path}")
        except (yaml.YAMLError, ConfigError, OSError) as e:
            LOGGER.warning(f"Failed to load global config: {e}")

    # Layer 2: Project or custom config
    if cli_config_path:
        config_path: Optional[Path] = Path(cli_config_path)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {cli_config_path}")
        label = "custom"
    else:
        config_path = find_project_config(project_root)
        label = "project"

    if config_path is not None:
        try:
            project_dict = load_yaml_file(config_path)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        validate_config(project_dict, source=str(config_path))
        merged = merge_configs(merged, project_dict)
        sources.append(f"{label}:{config_path}")
        LOGGER.debug(f"Loaded {label} config from {config_path}")

    # Layer 3: CLI overrides
    if cli_overrides:
        merged = merge_configs(merged, cli_overrides)
        sources.append("cli")
        LOGGER.debug("Applied CLI overrides")

    config = dict_to_config(merged, project_root=project_root)
    config._config_sources = sources

    LOGGER.debug(f"Config loaded from sources: {sources}")
    return config


def find_project_config(project_root: Path) -> Optional[Path]:
    """Find config file in project root.

    Args:
        project_root: Directory to search in.

    Returns:
        Path to config file if found, None otherwise.
    """
    for name in PROJECT_CONFIG_NAMES:
        config_path = project_root / name
        if config_path.exists():
            return config_path
    return None


def find_global_config() -> Optional[Path]:
    config_path = get_home() / GLOBAL_CONFIG_NAME
    if config_path.exists():
        return config_path
    return None


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML config file.

    Performs environment variable expansion on string values.

    Raises:
        yaml.YAMLError: If YAML parsing fails.
        ConfigError: If the document is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return expand_env_vars(data)


def expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR} and ${VAR:-default} in config values."""
    if isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        return ENV_VAR_PATTERN.sub(_env_var_replacer, data)
    else:
        return data


def _env_var_replacer(match: re.Match[str]) -> str:
    var_name = match.group(1)
    default_value = match.group(2)

    value = os.environ.get(var_name)
    if value is not None:
        return value
    if default_value is not None:
        return default_value

    LOGGER.warning(f"Environment variable ${var_name} is not set and has no default")
    return ""


def merge_configs(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two config dicts, with overlay taking precedence.

    Rules:
    - Scalar values: overlay replaces base
    - Lists: overlay replaces base (no merging)
    - Dicts: recursive merge
    """
    result = base.copy()

    for key, overlay_value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(overlay_value, dict):
            result[key] = merge_configs(result[key], overlay_value)
        else:
            result[key] = overlay_value

    return result


def parse_property_overrides(definitions: Optional[List[str]]) -> Dict[str, str]:
    """Parse ``-D key=value`` definitions into a property mapping.

    Raises:
        ConfigError: If a definition has no '=' or an empty key.
    """
    properties: Dict[str, str] = {}
    for definition in definitions or []:
        key, sep, value = definition.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigError(f"Invalid property definition '{definition}', expected key=value")
        properties[key] = value.strip()
    return properties


def _parse_scopes(scopes_data: Any) -> List[TestScope]:
    if scopes_data is None:
        return list(TestScope)
    if isinstance(scopes_data, str):
        scopes_data = [scopes_data]

    scopes: List[TestScope] = []
    for value in scopes_data:
        try:
            scope = TestScope(str(value).lower())
        except ValueError:
            raise ConfigError(
                f"Invalid test scope '{value}', expected one of: "
                + ", ".join(s.value for s in TestScope)
            ) from None
        if scope not in scopes:
            scopes.append(scope)
    return scopes


def _parse_flag(section: Dict[str, Any], key: str) -> bool:
    value = section.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigError(f"analysis.{key} must be a boolean (true or false), got {value!r}")
    return value


def _resolve_dir(value: Any, root: Path) -> Path:
    path = Path(str(value)) if value not in (None, "") else Path(".")
    if not path.is_absolute():
        path = root / path
    return path


def _parse_module_config(module_data: Any, project_base: Path, index: int) -> ModuleConfig:
    if isinstance(module_data, str):
        # Simple string format: module directory, also used as its key
        return ModuleConfig(key=module_data, name=module_data, base_dir=_resolve_dir(module_data, project_base))

    if not isinstance(module_data, dict):
        raise ConfigError(f"modules[{index}] must be a mapping or string, got {type(module_data).__name__}")

    key = str(module_data.get("key") or module_data.get("name") or f"module-{index}")
    properties = module_data.get("properties") or {}
    if not isinstance(properties, dict):
        raise ConfigError(f"modules[{index}].properties must be a mapping")

    return ModuleConfig(
        key=key,
        name=str(module_data.get("name", "")),
        base_dir=_resolve_dir(module_data.get("base_dir", key), project_base),
        languages=list(module_data.get("languages", []) or []),
        properties=dict(properties),
    )


def dict_to_config(data: Dict[str, Any], project_root: Optional[Path] = None) -> ReportsConfig:
    """Convert validated dict to typed ReportsConfig.

    Relative directories are resolved against ``project_root``.

    Raises:
        ConfigError: On values that cannot be interpreted.
    """
    root = Path(project_root) if project_root is not None else Path.cwd()

    project_data = data.get("project", {}) or {}
    project = ProjectConfig(
        name=str(project_data.get("name", "")),
        base_dir=_resolve_dir(project_data.get("base_dir"), root),
    )

    analysis_data = data.get("analysis", {}) or {}
    try:
        max_workers = int(analysis_data.get("max_workers", DEFAULT_MAX_WORKERS))
    except (TypeError, ValueError):
        raise ConfigError(f"analysis.max_workers must be an integer, got {analysis_data.get('max_workers')!r}") from None
    if max_workers < 1:
        raise ConfigError("analysis.max_workers must be at least 1")
    analysis = AnalysisConfig(
        max_workers=max_workers,
        sequential=_parse_flag(analysis_data, "sequential"),
        strict=_parse_flag(analysis_data, "strict"),
    )

    languages = data.get("languages", []) or []
    if isinstance(languages, str):
        languages = [languages]

    properties = data.get("properties", {}) or {}
    if not isinstance(properties, dict):
        raise ConfigError(f"'properties' must be a mapping, got {type(properties).__name__}")

    modules = [
        _parse_module_config(module_data, project.base_dir, index)
        for index, module_data in enumerate(data.get("modules", []) or [])
    ]

    return ReportsConfig(
        project=project,
        languages=[str(language) for language in languages],
        scopes=_parse_scopes(data.get("scopes")),
        analysis=analysis,
        properties=dict(properties),
        modules=modules,
    )


def get_default_config(project_root: Optional[Path] = None) -> ReportsConfig:
    """Default configuration: every language and scope, no report paths."""
    return dict_to_config({}, project_root=project_root)
