"""CLI reference section documenting every `ao` command."""

from __future__ import annotations

from typing import Callable, List, Tuple

from ..models import OrchestratorConfig, ProjectConfig
from .constants import COMMAND_SEPARATOR, SECTION_TITLES
from .tokens import PromptTokens, derive_tokens


def _fence(*lines: str, lang: str = "bash") -> str:
    return "\n".join([f"```{lang}", *lines, "```"])


def _status(t: PromptTokens) -> str:
    return "\n".join(
        [
            "Show all sessions with branch, PR, CI, review status, and agent activity.",
            "",
            _fence(
                "ao status                   # All projects",
                f"ao status -p {t.project_id}       # Filter to this project",
                "ao status --json            # Machine-readable JSON output",
            ),
            "",
            "**Output columns**: Session, Branch, PR#, CI (pass/fail/pending), Review (approved/changes/pending), "
            "Threads (unresolved comment count), Activity (working/idle/waiting/exited), Age.",
            "",
            "Each session also shows the agent's auto-generated summary of what it's working on.",
        ]
    )


def _spawn(t: PromptTokens) -> str:
    return "\n".join(
        [
            "Spawn a single worker agent session for an issue.",
            "",
            _fence(
                f"ao spawn {t.project_id} ISSUE-123     # Spawn with issue",
                f"ao spawn {t.project_id}               # Spawn without issue (bare session)",
                f"ao spawn {t.project_id} ISSUE-123 --open  # Also open in terminal tab",
            ),
            "",
            f"**What happens**: Creates git worktree from `origin/{t.default_branch}`, creates feature branch "
            f"(`feat/ISSUE-123`), starts tmux session (`{t.session('N')}`), launches agent with composed prompt, "
            "writes metadata.",
            "",
            "**Issue format**: Accepts any identifier — GitHub issues (`#42`, `42`), Linear tickets (`INT-1234`), "
            "Jira keys (`PROJ-567`), etc.",
        ]
    )


def _batch_spawn(t: PromptTokens) -> str:
    return "\n".join(
        [
            "Spawn sessions for multiple issues at once with duplicate detection.",
            "",
            _fence(
                f"ao batch-spawn {t.project_id} ISSUE-1 ISSUE-2 ISSUE-3",
                f"ao batch-spawn {t.project_id} ISSUE-1 ISSUE-2 --open  # Also open tabs",
            ),
            "",
            "**Duplicate detection**: Skips issues that already have an active session (checks both existing "
            "sessions and within the current batch). Reports a summary of created/skipped/failed.",
        ]
    )


def _send(t: PromptTokens) -> str:
    worker = t.session(1)
    return "\n".join(
        [
            "Send a message to a running worker agent. Handles busy detection and delivery verification.",
            "",
            _fence(
                f'ao send {worker} "Fix the failing test in auth.test.ts"',
                f"ao send {worker} -f /tmp/detailed-instructions.txt  # From file",
                f'ao send {worker} --no-wait "Urgent: stop what you\'re doing"  # Skip idle wait',
                f'ao send {worker} --timeout 120 "Take your time"  # Custom timeout (seconds)',
            ),
            "",
            "**How it works**:",
            "1. Waits for the session to become idle (default: up to 600s)",
            "2. Clears any partial input in the session",
            "3. Sends the message (multi-line messages use tmux buffer loading)",
            "4. Presses Enter to submit",
            "5. Verifies delivery by checking for agent activity indicators",
            "6. Retries Enter up to 3 times if delivery isn't confirmed",
            "",
            "**Always use `ao send`** instead of raw `tmux send-keys`. It solves the hard problems: busy detection, "
            "input clearing, long message handling, delivery verification.",
        ]
    )


def _session_ls(t: PromptTokens) -> str:
    return "\n".join(
        [
            "List all sessions with metadata.",
            "",
            _fence(
                "ao session ls                  # All projects",
                f"ao session ls -p {t.project_id}      # Filter to this project",
            ),
            "",
            "Shows: session name, age, branch, status, PR link.",
        ]
    )


def _session_kill(t: PromptTokens) -> str:
    return "\n".join(
        [
            "Kill a session, remove its worktree, and archive its metadata.",
            "",
            _fence(f"ao session kill {t.session(3)}"),
            "",
            "**Irreversible**: Removes the git worktree (uncommitted/unpushed work is lost). Only kill sessions "
            "that have pushed their work or are truly stuck.",
        ]
    )


def _session_cleanup(t: PromptTokens) -> str:
    return "\n".join(
        [
            "Automatically kill sessions where the PR has been merged.",
            "",
            _fence(
                "ao session cleanup                       # All projects",
                f"ao session cleanup -p {t.project_id}           # This project only",
                f"ao session cleanup -p {t.project_id} --dry-run  # Preview what would be killed",
            ),
            "",
            "Always run with `--dry-run` first when unsure.",
        ]
    )


def _review_check(t: PromptTokens) -> str:
    return "\n".join(
        [
            "Scan all sessions with PRs for pending review comments and send fix instructions.",
            "",
            _fence(
                "ao review-check                  # All projects",
                f"ao review-check {t.project_id}         # This project only",
                f"ao review-check {t.project_id} --dry-run   # Preview without sending",
            ),
            "",
            '**What it does**: Finds PRs with unresolved review threads or "changes requested" decisions, '
            "then sends a fix prompt to the corresponding worker agent.",
        ]
    )


def _open(t: PromptTokens) -> str:
    return "\n".join(
        [
            "Open session(s) in terminal tabs.",
            "",
            _fence(
                f"ao open {t.session(3)}            # Specific session",
                f"ao open {t.project_id}               # All sessions for this project",
                "ao open all                    # All sessions across all projects",
                f"ao open {t.project_id} -w            # Open in new terminal window",
            ),
        ]
    )


def _dashboard(t: PromptTokens) -> str:
    return "\n".join(
        [
            "Start the web dashboard manually (usually started by `ao start`).",
            "",
            _fence(
                f"ao dashboard                   # Start on configured port ({t.port})",
                "ao dashboard -p 8080           # Custom port",
                "ao dashboard --no-open         # Don't auto-open browser",
            ),
        ]
    )


def _start_stop(t: PromptTokens) -> str:
    return "\n".join(
        [
            "Start or stop the orchestrator agent and dashboard.",
            "",
            _fence(
                f"ao start {t.project_id}                # Start everything",
                f"ao start {t.project_id} --no-dashboard     # Skip dashboard",
                f"ao start {t.project_id} --no-orchestrator  # Skip orchestrator agent",
                f"ao stop {t.project_id}                 # Stop everything",
            ),
        ]
    )


def _tmux_inspection(t: PromptTokens) -> str:
    return "\n".join(
        [
            "For read-only inspection of sessions, you can use tmux directly:",
            "",
            _fence(
                "# Peek at last 30 lines of a session (read-only, no attach)",
                f'tmux capture-pane -t "{t.session(3)}" -p -S -30',
                "",
                "# List all tmux sessions",
                "tmux ls",
            ),
            "",
            "Never use `tmux send-keys` — use `ao send` instead.",
        ]
    )


COMMAND_CATALOGUE: Tuple[Tuple[str, Callable[[PromptTokens], str]], ...] = (
    ("ao status", _status),
    ("ao spawn", _spawn),
    ("ao batch-spawn", _batch_spawn),
    ("ao send", _send),
    ("ao session ls", _session_ls),
    ("ao session kill", _session_kill),
    ("ao session cleanup", _session_cleanup),
    ("ao review-check", _review_check),
    ("ao open", _open),
    ("ao dashboard", _dashboard),
    ("ao start / ao stop", _start_stop),
    ("tmux (read-only inspection)", _tmux_inspection),
)


def documented_commands() -> List[str]:
    """Return the command headings in the order they are rendered."""
    return [heading for heading, _ in COMMAND_CATALOGUE]


def render_command_reference(tokens: PromptTokens) -> str:
    """Render the CLI reference section from pre-derived tokens."""
    blocks = [f"### {heading}\n\n{render(tokens)}" for heading, render in COMMAND_CATALOGUE]
    return f"## {SECTION_TITLES['cli_reference']}\n\n" + COMMAND_SEPARATOR.join(blocks)


def build_command_reference(
    project_id: str,
    project: ProjectConfig,
    config: OrchestratorConfig,
) -> str:
    """Build the CLI reference section documenting every `ao` command.

    Only the example invocations vary: each one is instantiated with the live
    project id, the session prefix and the configured dashboard port.
    """
    return render_command_reference(derive_tokens(config, project_id, project))


__all__ = [
    "COMMAND_CATALOGUE",
    "build_command_reference",
    "documented_commands",
    "render_command_reference",
]
