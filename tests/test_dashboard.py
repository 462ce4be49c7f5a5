"""Tests for dashboard environment and web directory helpers."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from aoprompt import dashboard
from aoprompt.dashboard import build_dashboard_env, find_web_dir


def test_build_dashboard_env_applies_defaults() -> None:
    env = build_dashboard_env(3000, None, environ={"HOME": "/home/dev"})
    assert env == {
        "HOME": "/home/dev",
        "PORT": "3000",
        "NEXT_PUBLIC_TERMINAL_PORT": "3001",
        "NEXT_PUBLIC_DIRECT_TERMINAL_PORT": "3003",
    }


def test_build_dashboard_env_forwards_terminal_ports_and_config() -> None:
    source = {"TERMINAL_PORT": "5001", "DIRECT_TERMINAL_PORT": "5003"}
    env = build_dashboard_env(8080, "/etc/ao/agent-orchestrator.yaml", environ=source)
    assert env["AO_CONFIG_PATH"] == "/etc/ao/agent-orchestrator.yaml"
    assert env["PORT"] == "8080"
    assert env["NEXT_PUBLIC_TERMINAL_PORT"] == "5001"
    assert env["NEXT_PUBLIC_DIRECT_TERMINAL_PORT"] == "5003"
    assert source == {"TERMINAL_PORT": "5001", "DIRECT_TERMINAL_PORT": "5003"}


def test_build_dashboard_env_copies_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AOPROMPT_TEST_MARKER", "1")
    monkeypatch.delenv("AO_CONFIG_PATH", raising=False)
    env = build_dashboard_env(3000)
    assert env["AOPROMPT_TEST_MARKER"] == "1"
    assert "AO_CONFIG_PATH" not in env


def test_find_web_dir_prefers_installed_package(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    package_dir = tmp_path / "site-packages" / "ao_web"
    package_dir.mkdir(parents=True)
    spec = SimpleNamespace(origin=str(package_dir / "__init__.py"), submodule_search_locations=[str(package_dir)])
    monkeypatch.setattr(dashboard.importlib.util, "find_spec", lambda name: spec)
    assert find_web_dir() == package_dir.resolve()


def test_find_web_dir_uses_sibling_with_descriptor(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dashboard.importlib.util, "find_spec", lambda name: None)
    package_dir = tmp_path / "aoprompt"
    package_dir.mkdir()
    monorepo_web = tmp_path / "packages" / "web"
    monorepo_web.mkdir(parents=True)
    (monorepo_web / "package.json").write_text("{}", encoding="utf-8")

    assert find_web_dir(package_dir) == monorepo_web.resolve()


def test_find_web_dir_defaults_to_first_candidate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dashboard.importlib.util, "find_spec", lambda name: None)
    package_dir = tmp_path / "aoprompt"
    package_dir.mkdir()
    # A directory without a descriptor does not count.
    (tmp_path / "packages" / "web").mkdir(parents=True)

    assert find_web_dir(package_dir) == (tmp_path / "web").resolve()
