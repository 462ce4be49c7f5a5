"""Tests for the FastAPI service mode."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from aoprompt.config import ConfigError
from aoprompt.models import OrchestratorConfig
from aoprompt.service import create_app
from tests._fixtures.configs import make_config


class _StubLoader:
    def __init__(self, config: OrchestratorConfig | None = None, error: Exception | None = None) -> None:
        self.config = config or make_config()
        self.error = error
        self.calls: list[Optional[Path]] = []

    def __call__(self, path: Optional[Path]) -> OrchestratorConfig:
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        return self.config


@pytest.fixture
def loader() -> _StubLoader:
    return _StubLoader()


@pytest.fixture
def client(loader: _StubLoader) -> TestClient:
    return TestClient(create_app(loader))


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_prompt_endpoint_renders_prompt(client: TestClient, loader: _StubLoader) -> None:
    response = client.post("/prompt", json={"project_id": "my-app", "config_path": "/etc/ao.yaml"})
    assert response.status_code == 200
    data = response.json()
    assert data["project_id"] == "my-app"
    assert data["prompt"].startswith("# Orchestrator Agent — My App")
    assert loader.calls == [Path("/etc/ao.yaml")]


def test_prompt_endpoint_without_config_path(client: TestClient, loader: _StubLoader) -> None:
    response = client.post("/prompt", json={"project_id": "my-app"})
    assert response.status_code == 200
    assert loader.calls == [None]


def test_prompt_endpoint_unknown_project(client: TestClient) -> None:
    response = client.post("/prompt", json={"project_id": "missing"})
    assert response.status_code == 404
    assert "Unknown project 'missing'" in response.json()["detail"]


def test_prompt_endpoint_config_error() -> None:
    client = TestClient(create_app(_StubLoader(error=ConfigError("bad config"))))
    response = client.post("/prompt", json={"project_id": "my-app"})
    assert response.status_code == 400
    assert response.json() == {"detail": "bad config"}


def test_prompt_endpoint_reads_real_config(sample_config_file: Path) -> None:
    client = TestClient(create_app())
    response = client.post("/prompt", json={"project_id": "my-app", "config_path": str(sample_config_file)})
    assert response.status_code == 200
    assert "retries: 3" in response.json()["prompt"]
