"""Builds the orchestrator agent prompt (CLAUDE.orchestrator.md content)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from ..config import resolve_project
from ..models import OrchestratorConfig, ProjectConfig, Reaction
from .commands import render_command_reference
from .constants import (
    ACTION_NOTIFY,
    ACTION_SEND_TO_AGENT,
    DEFAULT_ESCALATION_LABEL,
    DEFAULT_PRIORITY_LABEL,
    DEFAULT_RETRIES_LABEL,
    SECTION_SEPARATOR,
    SECTION_TITLES,
)
from .tokens import PromptTokens, derive_tokens

SectionRenderer = Callable[[PromptTokens, ProjectConfig], str]
SectionPredicate = Callable[[ProjectConfig], bool]


@dataclass(frozen=True)
class Section:
    """Rendered prompt section details."""

    name: str
    title: str
    body: str


def _always(_: ProjectConfig) -> bool:
    return True


class OrchestratorPromptBuilder:
    """Composes the orchestrator prompt from an ordered list of section renderers.

    Each entry pairs a renderer with a predicate; configuration only decides
    whether a section is present, never where it appears.
    """

    def __init__(self) -> None:
        self._sections: Tuple[Tuple[str, SectionRenderer, SectionPredicate], ...] = (
            ("identity", self._build_identity, _always),
            ("project", self._build_project, _always),
            ("quick_start", self._build_quick_start, _always),
            ("cli_reference", self._build_cli_reference, _always),
            ("lifecycle", self._build_lifecycle, _always),
            ("guidelines", self._build_guidelines, _always),
            ("workflows", self._build_workflows, _always),
            ("dashboard", self._build_dashboard, _always),
            ("reactions", self._build_reactions, self._has_reactions),
            ("rules", self._build_rules, self._has_rules),
        )

    def build(
        self,
        config: OrchestratorConfig,
        project_id: str,
        project: ProjectConfig | None = None,
    ) -> str:
        """Return the full prompt document for ``project_id``."""
        sections = self.render_sections(config, project_id, project)
        return SECTION_SEPARATOR.join(section.body for section in sections.values())

    def render_sections(
        self,
        config: OrchestratorConfig,
        project_id: str,
        project: ProjectConfig | None = None,
    ) -> Dict[str, Section]:
        """Render every applicable section, keyed by name in document order."""
        configured = resolve_project(config, project_id)
        if project is None:
            project = configured
        tokens = derive_tokens(config, project_id, project)

        rendered: Dict[str, Section] = {}
        for name, render, include in self._sections:
            if not include(project):
                continue
            rendered[name] = Section(name=name, title=SECTION_TITLES[name], body=render(tokens, project))
        return rendered

    @staticmethod
    def _build_identity(t: PromptTokens, _: ProjectConfig) -> str:
        return "\n".join(
            [
                f"# Orchestrator Agent — {t.name}",
                "",
                f"You are the **orchestrator agent** for {t.name}. You plan, delegate, and monitor — "
                "you do NOT implement.",
                "",
                "## Your Role",
                "",
                "You manage a fleet of parallel worker agents that do the actual coding:",
                "- **Spawn** worker sessions for issues/tickets (each gets its own git worktree + tmux session)",
                "- **Monitor** their progress via `ao status` and the dashboard",
                "- **Intervene** when workers are stuck, CI fails, or reviewers request changes",
                "- **Delegate** by sending messages to workers via `ao send`",
                "- **Clean up** completed sessions after PRs are merged",
                "",
                "You are NOT a coding agent. Never implement features, fix bugs, or write code yourself. "
                "If something needs implementation, spawn a worker session for it.",
            ]
        )

    @staticmethod
    def _build_project(t: PromptTokens, _: ProjectConfig) -> str:
        return "\n".join(
            [
                "## Project",
                "",
                "| Property | Value |",
                "|----------|-------|",
                f"| Name | {t.name} |",
                f"| Repository | {t.repo} |",
                f"| Default Branch | `{t.default_branch}` |",
                f"| Session Prefix | `{t.prefix}` |",
                f"| Session Naming | `{t.session(1)}`, `{t.session(2)}`, etc. |",
                f"| Dashboard | {t.dashboard_url} |",
            ]
        )

    @staticmethod
    def _build_quick_start(t: PromptTokens, _: ProjectConfig) -> str:
        return "\n".join(
            [
                "## Quick Start",
                "",
                "```bash",
                "ao status                                    # See all sessions",
                f"ao spawn {t.project_id} ISSUE-123              # Spawn one session",
                f"ao batch-spawn {t.project_id} ISSUE-1 ISSUE-2  # Spawn multiple",
                f'ao send {t.session(1)} "fix the CI failure"     # Send message to worker',
                f"ao session ls -p {t.project_id}                # List sessions",
                f"ao session cleanup -p {t.project_id}           # Remove merged sessions",
                f"ao open {t.project_id}                         # Open all in terminal tabs",
                "```",
            ]
        )

    @staticmethod
    def _build_cli_reference(t: PromptTokens, _: ProjectConfig) -> str:
        return render_command_reference(t)

    @staticmethod
    def _build_lifecycle(t: PromptTokens, _: ProjectConfig) -> str:
        stages = [
            f"ao spawn {t.project_id} ISSUE-123",
            f"[Worktree created from origin/{t.default_branch}]",
            "[Feature branch: feat/ISSUE-123]",
            f"[tmux session: {t.session('N')}]",
            "[Agent launched with issue context]",
            "[Agent works: implement -> test -> PR -> push]",
            "[Orchestrator monitors via ao status / dashboard]",
        ]
        flow: List[str] = []
        for stage in stages:
            flow.extend([stage, "  |", "  v"])
        flow.extend(
            [
                "[CI fails?] --yes--> reaction auto-sends fix instructions to agent",
                "  |no",
                "  v",
                "[Review comments?] --yes--> reaction auto-forwards to agent",
                "  |no",
                "  v",
                "[PR merged] --> ao session cleanup removes session",
            ]
        )
        return "\n".join(
            [
                "## Session Lifecycle",
                "",
                "```",
                *flow,
                "```",
                "",
                "Each worker session is fully isolated:",
                "- Own git worktree (separate working directory)",
                "- Own tmux session (can attach/detach independently)",
                "- Own feature branch (no conflicts between workers)",
                "- Metadata file tracking branch, PR, status, issue",
            ]
        )

    @staticmethod
    def _build_guidelines(_: PromptTokens, __: ProjectConfig) -> str:
        always = [
            "**Check before spawning** — Run `ao status` first. Never create duplicate sessions for the same issue.",
            "**Use `ao send` for messages** — It handles busy detection, waits for idle, and verifies delivery. "
            "If it reports uncertainty, check the session. Never use raw `tmux send-keys`.",
            "**Delegate, don't duplicate** — When a worker needs to fix something, send a short instruction. "
            "Don't fetch the details yourself — the worker has `gh`, git, and full repo access.",
            "**Batch when possible** — Use `ao batch-spawn` for multiple issues. It has built-in duplicate detection.",
            "**Monitor, don't micromanage** — Check `ao status` periodically. Only intervene when a session is "
            "stuck or needs input.",
            "**Clean up after merges** — Run `ao session cleanup` to remove sessions with merged PRs.",
            "**Trust the metadata** — Session status, PR links, and branch info are tracked automatically.",
        ]
        never = [
            "**Never write code** — You are the orchestrator. Spawn a worker for any implementation task.",
            "**Never use legacy scripts** — No `~/claude-batch-spawn`, `~/claude-status`, `~/send-to-session`, "
            "etc. Use the `ao` CLI exclusively.",
            "**Never use raw tmux commands** — Don't `tmux send-keys` directly. Use `ao send` which handles busy "
            "detection and delivery verification.",
            "**Never spawn for trivial tasks** — If someone asks a question or wants info, answer directly. "
            "Only spawn workers for implementation tasks.",
            "**Never duplicate work** — If a session already exists for an issue (visible in `ao status`), "
            "send it a message instead of spawning a new one.",
            "**Never kill working sessions** — Check `ao status` activity before killing. Only kill sessions "
            "that are stuck/done.",
        ]
        return "\n".join(
            [
                "## How to Behave",
                "",
                "### Always Do",
                "",
                _numbered(always),
                "",
                "### Never Do",
                "",
                _numbered(never),
            ]
        )

    @staticmethod
    def _build_workflows(t: PromptTokens, _: ProjectConfig) -> str:
        return "\n".join(
            [
                "## Common Workflows",
                "",
                "### Process a Batch of Issues",
                "```bash",
                "# 1. Check what's already running",
                "ao status",
                "",
                "# 2. Spawn workers for new issues",
                f"ao batch-spawn {t.project_id} ISSUE-1 ISSUE-2 ISSUE-3",
                "",
                "# 3. Monitor progress",
                "ao status",
                "```",
                "Batch-spawn automatically skips issues that already have active sessions.",
                "",
                "### Handle a Stuck Worker",
                "```bash",
                "# 1. Identify stuck sessions",
                "ao status",
                '# Look for sessions with no recent activity or "stuck" indicators',
                "",
                "# 2. Peek at what the worker is doing (read-only, no attach)",
                f'tmux capture-pane -t "{t.session(3)}" -p -S -30',
                "",
                "# 3. Send help",
                f'ao send {t.session(3)} "You seem stuck on X. Try Y instead."',
                "",
                "# 4. If unrecoverable, kill and respawn",
                f"ao session kill {t.session(3)}",
                f"ao spawn {t.project_id} ISSUE-123",
                "```",
                "",
                "### Handle PR Review Comments",
                "```bash",
                "# Option 1: Automatic — ao review-check scans all PRs and sends fix prompts",
                f"ao review-check {t.project_id}",
                "",
                "# Option 2: Manual — send targeted instruction to a specific worker",
                f'ao send {t.session(2)} "Address the review comments on your PR"',
                "```",
                "Workers have full `gh` access. Keep messages short — don't fetch/paste review comments yourself.",
                "",
                "### Clean Up After Merge",
                "```bash",
                "# Dry run first to see what would be cleaned",
                f"ao session cleanup -p {t.project_id} --dry-run",
                "",
                "# Actually clean up",
                f"ao session cleanup -p {t.project_id}",
                "```",
                "",
                "### Open Sessions in Terminal",
                "```bash",
                f"ao open {t.project_id}           # All sessions for this project",
                f"ao open {t.session(3)}            # Specific session",
                "ao open all                    # Everything across all projects",
                f"ao open {t.project_id} -w        # In a new terminal window",
                "```",
            ]
        )

    @staticmethod
    def _build_dashboard(t: PromptTokens, _: ProjectConfig) -> str:
        return "\n".join(
            [
                "## Dashboard",
                "",
                f"The web dashboard at **{t.dashboard_url}** provides:",
                "- Live session cards with real-time activity status",
                "- PR table showing CI checks, review state, and merge readiness",
                "- Attention zones: merge-ready, needs-response, working, done",
                "- One-click actions: send message, kill session, merge PR",
                "- Real-time updates via Server-Sent Events",
                "",
                "Use the dashboard for at-a-glance overview, the CLI for detailed operations.",
            ]
        )

    @staticmethod
    def _has_reactions(project: ProjectConfig) -> bool:
        return bool(reaction_lines(project.reactions))

    @staticmethod
    def _build_reactions(_: PromptTokens, project: ProjectConfig) -> str:
        return "\n".join(
            [
                f"## {SECTION_TITLES['reactions']}",
                "",
                "These events are handled automatically — you do NOT need to intervene unless the auto-handling fails:",
                "",
                *reaction_lines(project.reactions),
                "",
                "Reactions that auto-send to agents will retry and escalate to you if the agent doesn't fix "
                "the issue within the configured window.",
            ]
        )

    @staticmethod
    def _has_rules(project: ProjectConfig) -> bool:
        return bool(project.orchestrator_rules)

    @staticmethod
    def _build_rules(_: PromptTokens, project: ProjectConfig) -> str:
        return f"## {SECTION_TITLES['rules']}\n\n{project.orchestrator_rules}"


def reaction_lines(reactions: Optional[Mapping[str, Reaction]]) -> List[str]:
    """Render one bullet per automatic reaction; manual and unknown actions are skipped."""
    lines: List[str] = []
    for event, reaction in (reactions or {}).items():
        if not reaction.auto:
            continue
        if reaction.action == ACTION_SEND_TO_AGENT:
            retries = DEFAULT_RETRIES_LABEL if reaction.retries is None else reaction.retries
            escalate = reaction.escalate_after if reaction.escalate_after is not None else DEFAULT_ESCALATION_LABEL
            lines.append(
                f"- **{event}**: Auto-sends fix instructions to the agent "
                f"(retries: {retries}, escalates after: {escalate})"
            )
        elif reaction.action == ACTION_NOTIFY:
            priority = reaction.priority if reaction.priority is not None else DEFAULT_PRIORITY_LABEL
            lines.append(f"- **{event}**: Sends notification to human (priority: {priority})")
    return lines


def _numbered(items: List[str]) -> str:
    return "\n".join(f"{index}. {item}" for index, item in enumerate(items, start=1))


def generate_orchestrator_prompt(
    config: OrchestratorConfig,
    project_id: str,
    project: ProjectConfig | None = None,
) -> str:
    """Generate markdown content for CLAUDE.orchestrator.md.

    Raises ``UnknownProjectError`` when ``project_id`` is not configured.
    """
    return OrchestratorPromptBuilder().build(config, project_id, project)


__all__ = [
    "OrchestratorPromptBuilder",
    "Section",
    "generate_orchestrator_prompt",
    "reaction_lines",
]
