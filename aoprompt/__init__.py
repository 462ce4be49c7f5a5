"""Orchestrator agent prompt generation for agent-orchestrator projects."""

from .config import ConfigError, UnknownProjectError, load_config
from .models import OrchestratorConfig, ProjectConfig, Reaction
from .prompting import build_command_reference, generate_orchestrator_prompt

__all__ = [
    "ConfigError",
    "OrchestratorConfig",
    "ProjectConfig",
    "Reaction",
    "UnknownProjectError",
    "build_command_reference",
    "generate_orchestrator_prompt",
    "load_config",
]
