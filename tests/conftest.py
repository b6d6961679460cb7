"""Shared fixtures for dotnetreports tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from dotnetreports.config.coverage import KindRegistry
from dotnetreports.core.models import ModuleIdentity
from dotnetreports.plugins.languages import CSharpPlugin, VbNetPlugin
from dotnetreports.registry.collector import ReportPathCollector


@pytest.fixture
def kind_registry() -> KindRegistry:
    """Registry with the built-in languages only."""
    return KindRegistry([CSharpPlugin(), VbNetPlugin()])


@pytest.fixture
def collector() -> ReportPathCollector:
    return ReportPathCollector()


@pytest.fixture
def module(tmp_path: Path) -> ModuleIdentity:
    return ModuleIdentity(key="App.Core", name="App Core", base_dir=tmp_path)
