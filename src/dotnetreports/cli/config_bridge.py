"""Translate CLI arguments into configuration overrides."""

from __future__ import annotations

from argparse import Namespace
from typing import Any, Dict

from dotnetreports.config.loader import parse_property_overrides


class ConfigBridge:
    """Maps parsed arguments onto the configuration dictionary layout."""

    @staticmethod
    def args_to_overrides(args: Namespace) -> Dict[str, Any]:
        """Build the CLI override layer.

        Raises:
            ConfigError: On malformed -D definitions.
        """
        overrides: Dict[str, Any] = {}

        properties = parse_property_overrides(getattr(args, "define", None))
        if properties:
            overrides["properties"] = properties

        languages = getattr(args, "languages", None)
        if languages:
            overrides["languages"] = list(languages)

        scope = getattr(args, "scope", None)
        if scope:
            overrides["scopes"] = ["unit", "integration"] if scope == "all" else [scope]

        analysis: Dict[str, Any] = {}
        if getattr(args, "strict", False):
            analysis["strict"] = True
        if getattr(args, "sequential", False):
            analysis["sequential"] = True
        if getattr(args, "max_workers", None) is not None:
            analysis["max_workers"] = args.max_workers
        if analysis:
            overrides["analysis"] = analysis

        return overrides
