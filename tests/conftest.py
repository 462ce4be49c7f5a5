from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.configs import ConfigFileBuilder


@pytest.fixture
def config_files(tmp_path: Path) -> ConfigFileBuilder:
    """Provide a builder for agent-orchestrator.yaml files under tmp_path."""
    return ConfigFileBuilder(tmp_path)


@pytest.fixture
def sample_config_file(config_files: ConfigFileBuilder) -> Path:
    return config_files.write(
        """
        port: 3000
        projects:
          my-app:
            name: My App
            repo: org/my-app
            path: /tmp/my-app
            defaultBranch: main
            sessionPrefix: myapp
            reactions:
              ci-failed:
                auto: true
                action: send-to-agent
                retries: 3
                escalateAfter: 2h
        """
    )
