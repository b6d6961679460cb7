"""Configuration validation for dotnetreports.

Validates core configuration keys and warns on unknown keys. Report
properties are checked against the keys the registered languages accept;
other analysis properties are passed through.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

import yaml

from dotnetreports.core.logging import get_logger

LOGGER = get_logger(__name__)


class ValidationSeverity(Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Config will fail at runtime
    WARNING = "warning"  # Likely mistake but config usable


@dataclass
class ConfigValidationIssue:
    """A validation issue for configuration with severity."""

    message: str
    source: str
    severity: ValidationSeverity
    key: Optional[str] = None
    suggestion: Optional[str] = None


@dataclass
class ConfigValidationWarning:
    """A validation warning for configuration."""

    message: str
    source: str
    key: Optional[str] = None
    suggestion: Optional[str] = None
    is_error: bool = False


VALID_TOP_LEVEL_KEYS: Set[str] = {
    "version",
    "project",
    "languages",
    "scopes",
    "analysis",
    "properties",
    "modules",
}

VALID_PROJECT_KEYS: Set[str] = {"name", "base_dir"}

VALID_ANALYSIS_KEYS: Set[str] = {"max_workers", "sequential", "strict"}

VALID_MODULE_KEYS: Set[str] = {"key", "name", "base_dir", "languages", "properties"}

VALID_SCOPES: Set[str] = {"unit", "integration"}


def validate_config(
    data: Dict[str, Any],
    source: str,
    known_property_keys: Optional[Iterable[str]] = None,
) -> List[ConfigValidationWarning]:
    """Validate configuration dictionary.

    Does not raise exceptions - returns warnings instead.

    Args:
        data: Config dictionary to validate.
        source: Source file path for warning messages.
        known_property_keys: Report property keys to check typos against.
            Defaults to the keys of every installed language plugin.

    Returns:
        List of validation warnings.
    """
    warnings: List[ConfigValidationWarning] = []

    if not isinstance(data, dict):  # type: ignore[unreachable]
        warnings.append(ConfigValidationWarning(
            message=f"Config must be a mapping, got {type(data).__name__}",
            source=source,
            is_error=True,
        ))
        return warnings  # type: ignore[unreachable]

    if known_property_keys is None:
        # Imported here: the registry pulls in plugin discovery.
        from dotnetreports.config.coverage import KindRegistry

        known_keys = KindRegistry.from_plugins().known_keys()
    else:
        known_keys = set(known_property_keys)

    _check_unknown_keys(data, VALID_TOP_LEVEL_KEYS, "", source, warnings)

    project = data.get("project")
    if project is not None:
        if _check_mapping(project, "project", source, warnings):
            _check_unknown_keys(project, VALID_PROJECT_KEYS, "project.", source, warnings)

    analysis = data.get("analysis")
    if analysis is not None and _check_mapping(analysis, "analysis", source, warnings):
        _check_unknown_keys(analysis, VALID_ANALYSIS_KEYS, "analysis.", source, warnings)
        max_workers = analysis.get("max_workers")
        if max_workers is not None and (
            isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1
        ):
            warnings.append(ConfigValidationWarning(
                message="'analysis.max_workers' must be a positive integer",
                source=source,
                key="analysis.max_workers",
                is_error=True,
            ))
        for flag in ("sequential", "strict"):
            value = analysis.get(flag)
            if value is not None and not isinstance(value, bool):
                warnings.append(ConfigValidationWarning(
                    message=f"'analysis.{flag}' must be a boolean",
                    source=source,
                    key=f"analysis.{flag}",
                    is_error=True,
                ))

    _validate_string_list(data.get("languages"), "languages", source, warnings)

    scopes = data.get("scopes")
    if _validate_string_list(scopes, "scopes", source, warnings) and scopes is not None:
        for scope in [scopes] if isinstance(scopes, str) else scopes:
            if scope.lower() not in VALID_SCOPES:
                warnings.append(ConfigValidationWarning(
                    message=f"Invalid value '{scope}' for 'scopes'. "
                            f"Valid values: {', '.join(sorted(VALID_SCOPES))}",
                    source=source,
                    key="scopes",
                    suggestion=_suggest_key(scope.lower(), VALID_SCOPES),
                    is_error=True,
                ))

    properties = data.get("properties")
    if properties is not None and _check_mapping(properties, "properties", source, warnings):
        _validate_properties(properties, "properties", known_keys, source, warnings)

    modules = data.get("modules")
    if modules is not None:
        if not isinstance(modules, list):
            warnings.append(ConfigValidationWarning(
                message=f"'modules' must be a list, got {type(modules).__name__}",
                source=source,
                key="modules",
                is_error=True,
            ))
        else:
            for index, module in enumerate(modules):
                prefix = f"modules[{index}]"
                if isinstance(module, str):
                    continue
                if not _check_mapping(module, prefix, source, warnings):
                    continue
                _check_unknown_keys(module, VALID_MODULE_KEYS, f"{prefix}.", source, warnings)
                _validate_string_list(module.get("languages"), f"{prefix}.languages", source, warnings)
                module_properties = module.get("properties")
                if module_properties is not None and _check_mapping(
                    module_properties, f"{prefix}.properties", source, warnings
                ):
                    _validate_properties(
                        module_properties, f"{prefix}.properties", known_keys, source, warnings
                    )

    for warning in warnings:
        _log_warning(warning)
    return warnings


def _check_mapping(
    value: Any,
    key: str,
    source: str,
    warnings: List[ConfigValidationWarning],
) -> bool:
    if isinstance(value, dict):
        return True
    warnings.append(ConfigValidationWarning(
        message=f"'{key}' must be a mapping, got {type(value).__name__}",
        source=source,
        key=key,
        is_error=True,
    ))
    return False


def _check_unknown_keys(
    data: Dict[str, Any],
    valid_keys: Set[str],
    prefix: str,
    source: str,
    warnings: List[ConfigValidationWarning],
) -> None:
    for key in data.keys():
        if key not in valid_keys:
            scope = "top-level key" if not prefix else "key"
            warnings.append(ConfigValidationWarning(
                message=f"Unknown {scope} '{prefix}{key}'",
                source=source,
                key=f"{prefix}{key}",
                suggestion=_suggest_key(str(key), valid_keys),
            ))


def _validate_string_list(
    value: Any,
    key: str,
    source: str,
    warnings: List[ConfigValidationWarning],
) -> bool:
    if value is None or isinstance(value, str):
        return True
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return True
    warnings.append(ConfigValidationWarning(
        message=f"'{key}' must be a string or a list of strings",
        source=source,
        key=key,
        is_error=True,
    ))
    return False


def _validate_properties(
    properties: Dict[str, Any],
    prefix: str,
    known_keys: Set[str],
    source: str,
    warnings: List[ConfigValidationWarning],
) -> None:
    for key, value in properties.items():
        full_key = f"{prefix}.{key}"
        if key in known_keys:
            _validate_string_list(value, full_key, source, warnings)
            continue
        if not str(key).startswith("sonar."):
            continue
        # Unrelated analysis properties pass through; only likely typos of
        # report keys are reported.
        suggestion = _suggest_key(str(key), known_keys, cutoff=0.85)
        if suggestion is not None:
            warnings.append(ConfigValidationWarning(
                message=f"Unknown report property '{key}'",
                source=source,
                key=full_key,
                suggestion=suggestion,
            ))


def _suggest_key(invalid_key: str, valid_keys: Set[str], cutoff: float = 0.6) -> Optional[str]:
    """Suggest a valid key for a potential typo.

    Returns:
        Closest matching valid key, or None if no good match.
    """
    matches = get_close_matches(invalid_key, sorted(valid_keys), n=1, cutoff=cutoff)
    return matches[0] if matches else None


def _log_warning(warning: ConfigValidationWarning) -> None:
    msg = f"{warning.message} in {warning.source}"
    if warning.suggestion:
        msg += f" (did you mean '{warning.suggestion}'?)"
    LOGGER.warning(msg)


def validate_config_file(
    config_path: Path,
    known_property_keys: Optional[Iterable[str]] = None,
) -> Tuple[bool, List[ConfigValidationIssue]]:
    """Validate a configuration file from disk.

    Checks file existence, YAML syntax, and configuration semantics.

    Returns:
        Tuple of (is_valid, issues) where is_valid is False if any errors exist.
    """
    issues: List[ConfigValidationIssue] = []
    source = str(config_path)

    if not config_path.exists():
        issues.append(ConfigValidationIssue(
            message=f"Configuration file not found: {config_path}",
            source=source,
            severity=ValidationSeverity.ERROR,
        ))
        return False, issues

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        issues.append(ConfigValidationIssue(
            message=f"Invalid YAML syntax: {e}",
            source=source,
            severity=ValidationSeverity.ERROR,
        ))
        return False, issues

    if data is None:
        issues.append(ConfigValidationIssue(
            message="Configuration file is empty",
            source=source,
            severity=ValidationSeverity.WARNING,
        ))
        return True, issues

    for warning in validate_config(data, source, known_property_keys):
        issues.append(ConfigValidationIssue(
            message=warning.message,
            source=warning.source,
            severity=ValidationSeverity.ERROR if warning.is_error else ValidationSeverity.WARNING,
            key=warning.key,
            suggestion=warning.suggestion,
        ))

    is_valid = not any(issue.severity == ValidationSeverity.ERROR for issue in issues)
    return is_valid, issues
