"""Shared constants for orchestrator prompt sections."""

from __future__ import annotations

SECTION_ORDER: tuple[str, ...] = (
    "identity",
    "project",
    "quick_start",
    "cli_reference",
    "lifecycle",
    "guidelines",
    "workflows",
    "dashboard",
    "reactions",
    "rules",
)

SECTION_TITLES: dict[str, str] = {
    "identity": "Orchestrator Agent",
    "project": "Project",
    "quick_start": "Quick Start",
    "cli_reference": "CLI Reference",
    "lifecycle": "Session Lifecycle",
    "guidelines": "How to Behave",
    "workflows": "Common Workflows",
    "dashboard": "Dashboard",
    "reactions": "Automated Reactions",
    "rules": "Project-Specific Rules",
}

SECTION_SEPARATOR = "\n\n"
COMMAND_SEPARATOR = "\n\n---\n\n"

ACTION_SEND_TO_AGENT = "send-to-agent"
ACTION_NOTIFY = "notify"

DEFAULT_RETRIES_LABEL = "none"
DEFAULT_ESCALATION_LABEL = "never"
DEFAULT_PRIORITY_LABEL = "info"


__all__ = [
    "ACTION_NOTIFY",
    "ACTION_SEND_TO_AGENT",
    "COMMAND_SEPARATOR",
    "DEFAULT_ESCALATION_LABEL",
    "DEFAULT_PRIORITY_LABEL",
    "DEFAULT_RETRIES_LABEL",
    "SECTION_ORDER",
    "SECTION_SEPARATOR",
    "SECTION_TITLES",
]
