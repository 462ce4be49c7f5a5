"""Core data models shared across aoprompt components."""

from dataclasses import dataclass, field
from typing import Mapping, Optional


@dataclass(frozen=True)
class Reaction:
    """Automatic response configured for a session lifecycle event."""

    auto: bool
    action: str
    retries: Optional[int] = None
    escalate_after: Optional[str] = None
    priority: Optional[str] = None


@dataclass(frozen=True)
class ProjectConfig:
    """Per-project descriptor from the orchestrator configuration."""

    name: str
    repo: str
    path: str
    default_branch: str
    session_prefix: str
    reactions: Mapping[str, Reaction] = field(default_factory=dict)
    orchestrator_rules: Optional[str] = None


@dataclass(frozen=True)
class OrchestratorConfig:
    """Process-wide orchestrator settings and the configured projects."""

    port: int
    config_path: str
    projects: Mapping[str, ProjectConfig] = field(default_factory=dict)
