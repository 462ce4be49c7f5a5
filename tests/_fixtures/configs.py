"""Helpers for constructing orchestrator configurations in tests."""

from __future__ import annotations

import textwrap
from dataclasses import replace
from pathlib import Path
from typing import Any

from aoprompt.models import OrchestratorConfig, ProjectConfig
from aoprompt.prompting import generate_orchestrator_prompt

PROJECT_ID = "my-app"


def make_project(**overrides: Any) -> ProjectConfig:
    """Return the canonical "My App" project with ``overrides`` applied."""
    project = ProjectConfig(
        name="My App",
        repo="org/my-app",
        path="/tmp/my-app",
        default_branch="main",
        session_prefix="myapp",
    )
    return replace(project, **overrides)


def make_config(project: ProjectConfig | None = None, **overrides: Any) -> OrchestratorConfig:
    config = OrchestratorConfig(
        port=3000,
        config_path="/tmp/agent-orchestrator.yaml",
        projects={PROJECT_ID: project or make_project()},
    )
    return replace(config, **overrides)


def generate(project_overrides: dict[str, Any] | None = None, **config_overrides: Any) -> str:
    """Render the prompt for the canonical project."""
    config = make_config(make_project(**(project_overrides or {})), **config_overrides)
    return generate_orchestrator_prompt(config, PROJECT_ID, config.projects[PROJECT_ID])


class ConfigFileBuilder:
    """Writes agent-orchestrator.yaml files into a temporary directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "workspace"
        self.root.mkdir()

    def write(self, content: str, filename: str = "agent-orchestrator.yaml") -> Path:
        path = self.root / filename
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path


__all__ = ["ConfigFileBuilder", "PROJECT_ID", "generate", "make_config", "make_project"]
