"""Tests for plugin discovery."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from dotnetreports.plugins.discovery import (
    LANGUAGE_ENTRY_POINT_GROUP,
    discover_plugins,
    get_plugin,
    list_available_plugins,
)
from dotnetreports.plugins.languages import (
    BUILTIN_LANGUAGES,
    CSharpPlugin,
    LanguagePlugin,
    VbNetPlugin,
    discover_language_plugins,
    load_language_plugins,
)


def _entry_point(name: str, loaded=None, error: Exception | None = None) -> MagicMock:
    ep = MagicMock()
    ep.name = name
    if error is not None:
        ep.load.side_effect = error
    else:
        ep.load.return_value = loaded
    return ep


class FSharpPlugin(LanguagePlugin):
    @property
    def language_key(self) -> str:
        return "fsharp"

    @property
    def language_name(self) -> str:
        return "F#"


class TestDiscoverPlugins:
    """Tests for discover_plugins function."""

    def test_builtins_without_entry_points(self) -> None:
        with patch("dotnetreports.plugins.discovery.entry_points", return_value=[]):
            plugins = discover_plugins(LANGUAGE_ENTRY_POINT_GROUP, LanguagePlugin, BUILTIN_LANGUAGES)
        assert plugins == {"cs": CSharpPlugin, "vbnet": VbNetPlugin}

    def test_entry_point_added(self) -> None:
        eps = [_entry_point("fsharp", FSharpPlugin)]
        with patch("dotnetreports.plugins.discovery.entry_points", return_value=eps):
            plugins = discover_plugins(LANGUAGE_ENTRY_POINT_GROUP, LanguagePlugin, BUILTIN_LANGUAGES)
        assert plugins["fsharp"] is FSharpPlugin

    def test_wrong_base_class_skipped(self) -> None:
        eps = [_entry_point("bogus", dict)]
        with patch("dotnetreports.plugins.discovery.entry_points", return_value=eps):
            plugins = discover_plugins(LANGUAGE_ENTRY_POINT_GROUP, LanguagePlugin)
        assert plugins == {}

    def test_non_class_skipped(self) -> None:
        eps = [_entry_point("instance", object())]
        with patch("dotnetreports.plugins.discovery.entry_points", return_value=eps):
            assert discover_plugins(LANGUAGE_ENTRY_POINT_GROUP, LanguagePlugin) == {}

    def test_load_failure_skipped(self) -> None:
        eps = [_entry_point("broken", error=ImportError("no module"))]
        with patch("dotnetreports.plugins.discovery.entry_points", return_value=eps):
            plugins = discover_plugins(LANGUAGE_ENTRY_POINT_GROUP, LanguagePlugin, BUILTIN_LANGUAGES)
        assert set(plugins) == {"cs", "vbnet"}

    def test_get_plugin_instantiates(self) -> None:
        with patch("dotnetreports.plugins.discovery.entry_points", return_value=[]):
            plugin = get_plugin(LANGUAGE_ENTRY_POINT_GROUP, "vbnet", LanguagePlugin, BUILTIN_LANGUAGES)
            missing = get_plugin(LANGUAGE_ENTRY_POINT_GROUP, "cobol", LanguagePlugin, BUILTIN_LANGUAGES)
        assert isinstance(plugin, VbNetPlugin)
        assert missing is None

    def test_list_available_sorted(self) -> None:
        with patch("dotnetreports.plugins.discovery.entry_points", return_value=[]):
            assert list_available_plugins(LANGUAGE_ENTRY_POINT_GROUP, BUILTIN_LANGUAGES) == ["cs", "vbnet"]


class TestLanguagePlugins:
    def test_builtin_metadata(self) -> None:
        vbnet = VbNetPlugin()
        assert vbnet.language_key == "vbnet"
        assert vbnet.language_name == "VB.NET"
        assert vbnet.short_language_name == "VB"
        assert vbnet.analyzer_work_dir == "output-vbnet"
        csharp = CSharpPlugin()
        assert csharp.short_language_name == "C#"
        assert csharp.plugin_key == "csharp"

    def test_installed_plugins_include_builtins(self) -> None:
        assert {"cs", "vbnet"} <= set(discover_language_plugins())
        assert {p.language_key for p in load_language_plugins()} >= {"cs", "vbnet"}
