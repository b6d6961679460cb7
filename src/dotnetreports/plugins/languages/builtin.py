"""Languages shipped with dotnetreports."""

from __future__ import annotations

from dotnetreports.plugins.languages.base import LanguagePlugin


class CSharpPlugin(LanguagePlugin):

    @property
    def language_key(self) -> str:
        return "cs"

    @property
    def language_name(self) -> str:
        return "C#"

    @property
    def plugin_key(self) -> str:
        return "csharp"


class VbNetPlugin(LanguagePlugin):

    @property
    def language_key(self) -> str:
        return "vbnet"

    @property
    def language_name(self) -> str:
        return "VB.NET"

    @property
    def short_language_name(self) -> str:
        return "VB"
