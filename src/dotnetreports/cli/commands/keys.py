"""Keys command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import List

from dotnetreports.cli.commands import Command
from dotnetreports.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from dotnetreports.config.coverage import KindRegistry, UnknownLanguageError
from dotnetreports.core.models import TestScope


class KeysCommand(Command):
    """Prints the report property keys of one or more languages."""

    @property
    def name(self) -> str:
        return "keys"

    def execute(self, args: Namespace) -> int:
        registry = KindRegistry.from_plugins()
        languages: List[str] = list(getattr(args, "languages", None) or registry.languages())
        scope = getattr(args, "scope", "all") or "all"
        scopes = list(TestScope) if scope == "all" else [TestScope(scope)]

        try:
            for language in languages:
                metadata = registry.metadata(language)
                print(f"{metadata.language_name} ({language})")
                for test_scope in scopes:
                    configuration = registry.resolve_keys(language, test_scope)
                    for kind, key in configuration.keys().items():
                        print(f"  {test_scope.value:<12} {kind.display_name:<22} {key}")
                print(f"  {'':<12} {'Protobuf':<22} {registry.protobuf_key(language)}")
                print(f"  {'':<12} {'Roslyn':<22} {registry.roslyn_key(language)}")
        except UnknownLanguageError as e:
            print(str(e))
            return EXIT_INVALID_USAGE

        return EXIT_SUCCESS
