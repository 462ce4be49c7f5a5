"""Configuration loading for aoprompt (agent-orchestrator.yaml)."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .logging import get_logger
from .models import OrchestratorConfig, ProjectConfig, Reaction

CONFIG_FILENAMES: tuple[str, ...] = ("agent-orchestrator.yaml", "agent-orchestrator.yml")
CONFIG_PATH_ENV = "AO_CONFIG_PATH"
DEFAULT_PORT = 3000
DEFAULT_BRANCH = "main"

_logger = get_logger("config")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


class UnknownProjectError(LookupError):
    """Raised when a project id is not present in the configuration."""

    def __init__(self, project_id: str, known: list[str] | None = None) -> None:
        self.project_id = project_id
        self.known = list(known or [])
        message = f"Unknown project '{project_id}'"
        if self.known:
            message += f" (configured: {', '.join(self.known)})"
        super().__init__(message)

    def __str__(self) -> str:
        return str(self.args[0])


def load_config(config_path: Path | str | None = None) -> OrchestratorConfig:
    """Load orchestrator configuration from disk."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        raise ConfigError(f"Configuration file not found: {config_file}")

    _logger.debug("Loading configuration from %s", config_file)
    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    port = _as_int(data.get("port"), "port")
    if port is None:
        port = DEFAULT_PORT
    if port <= 0:
        raise ConfigError(f"port must be a positive integer, got {port}")

    projects_data = data.get("projects")
    if not isinstance(projects_data, dict) or not projects_data:
        raise ConfigError(f"{config_file.name} must define at least one project under 'projects'")

    projects: Dict[str, ProjectConfig] = {}
    for project_id, project_data in projects_data.items():
        projects[str(project_id)] = _parse_project(str(project_id), project_data)

    _logger.debug("Loaded %d project(s) from %s", len(projects), config_file)
    return OrchestratorConfig(port=port, config_path=str(config_file), projects=projects)


def resolve_project(config: OrchestratorConfig, project_id: str) -> ProjectConfig:
    """Return the descriptor for ``project_id`` or raise ``UnknownProjectError``."""
    try:
        return config.projects[project_id]
    except KeyError:
        raise UnknownProjectError(project_id, list(config.projects)) from None


def _resolve_config_path(config_path: Path | str | None) -> Path:
    if config_path is None:
        env_path = os.getenv(CONFIG_PATH_ENV)
        config_path = Path(env_path) if env_path else Path.cwd()
    path = Path(config_path).expanduser()
    if path.is_dir():
        for filename in CONFIG_FILENAMES:
            candidate = path / filename
            if candidate.exists():
                return candidate.resolve()
        return (path / CONFIG_FILENAMES[0]).resolve()
    return path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc


def _parse_project(project_id: str, data: Any) -> ProjectConfig:
    if not isinstance(data, dict):
        raise ConfigError(f"Project '{project_id}' must be a mapping")

    repo = _as_str(_pick(data, "repo"), f"projects.{project_id}.repo")
    path = _as_str(_pick(data, "path"), f"projects.{project_id}.path")
    if not repo:
        raise ConfigError(f"Project '{project_id}' is missing required field 'repo'")
    if not path:
        raise ConfigError(f"Project '{project_id}' is missing required field 'path'")

    name = _as_str(_pick(data, "name"), f"projects.{project_id}.name") or project_id
    default_branch = (
        _as_str(_pick(data, "defaultBranch", "default_branch"), f"projects.{project_id}.defaultBranch")
        or DEFAULT_BRANCH
    )
    session_prefix = (
        _as_str(_pick(data, "sessionPrefix", "session_prefix"), f"projects.{project_id}.sessionPrefix")
        or project_id
    )
    rules = _as_str(
        _pick(data, "orchestratorRules", "orchestrator_rules"),
        f"projects.{project_id}.orchestratorRules",
    )

    reactions_data = _pick(data, "reactions")
    if reactions_data is not None and not isinstance(reactions_data, dict):
        raise ConfigError(f"projects.{project_id}.reactions must be a mapping")
    reactions: Dict[str, Reaction] = {}
    for event, reaction_data in (reactions_data or {}).items():
        reactions[str(event)] = _parse_reaction(f"projects.{project_id}.reactions.{event}", reaction_data)

    return ProjectConfig(
        name=name,
        repo=repo,
        path=str(Path(path).expanduser()),
        default_branch=default_branch,
        session_prefix=session_prefix,
        reactions=reactions,
        orchestrator_rules=rules,
    )


def _parse_reaction(key: str, data: Any) -> Reaction:
    if not isinstance(data, dict):
        raise ConfigError(f"{key} must be a mapping")
    auto = _as_bool(data.get("auto"), f"{key}.auto")
    return Reaction(
        auto=bool(auto),
        action=_as_str(data.get("action"), f"{key}.action") or "",
        retries=_as_int(data.get("retries"), f"{key}.retries"),
        escalate_after=_as_str(_pick(data, "escalateAfter", "escalate_after"), f"{key}.escalateAfter"),
        priority=_as_str(data.get("priority"), f"{key}.priority"),
    )


def _pick(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _as_str(value: Any, key: str) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ConfigError(f"{key} must be a string")
    return str(value)


def _as_int(value: Any, key: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    raise ConfigError(f"{key} must be an integer")


def _as_bool(value: Any, key: str) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    raise ConfigError(f"{key} must be a boolean")
