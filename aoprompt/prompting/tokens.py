"""Per-project token derivation shared by every prompt section."""

from __future__ import annotations

from dataclasses import dataclass

from ..models import OrchestratorConfig, ProjectConfig


@dataclass(frozen=True)
class PromptTokens:
    """Values substituted into section text, derived once per render."""

    project_id: str
    name: str
    repo: str
    default_branch: str
    prefix: str
    port: int

    @property
    def dashboard_url(self) -> str:
        return f"http://localhost:{self.port}"

    def session(self, number: int | str) -> str:
        """Return the session name ``<prefix>-<number>``."""
        return f"{self.prefix}-{number}"


def derive_tokens(
    config: OrchestratorConfig, project_id: str, project: ProjectConfig
) -> PromptTokens:
    return PromptTokens(
        project_id=project_id,
        name=project.name,
        repo=project.repo,
        default_branch=project.default_branch,
        prefix=project.session_prefix,
        port=config.port,
    )


__all__ = ["PromptTokens", "derive_tokens"]
