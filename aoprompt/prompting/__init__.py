"""Orchestrator prompt composition."""

from .builder import OrchestratorPromptBuilder, Section, generate_orchestrator_prompt
from .commands import build_command_reference, documented_commands

__all__ = [
    "OrchestratorPromptBuilder",
    "Section",
    "build_command_reference",
    "documented_commands",
    "generate_orchestrator_prompt",
]
