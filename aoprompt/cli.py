"""CLI entrypoints for aoprompt commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import CONFIG_PATH_ENV, ConfigError, UnknownProjectError, load_config
from .dashboard import build_dashboard_env
from .logging import configure_logging, get_logger
from .prompting import generate_orchestrator_prompt

_DASHBOARD_ENV_KEYS = (
    CONFIG_PATH_ENV,
    "PORT",
    "NEXT_PUBLIC_TERMINAL_PORT",
    "NEXT_PUBLIC_DIRECT_TERMINAL_PORT",
)


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help=f"Path to agent-orchestrator.yaml or its directory (defaults to ${CONFIG_PATH_ENV}, then cwd).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aoprompt",
        description="Generate the orchestrator agent prompt from agent-orchestrator.yaml.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Render the orchestrator prompt for a project.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_config_option(generate_parser)
    generate_parser.add_argument("project_id", help="Project id as configured under 'projects'.")
    generate_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the prompt to this file (e.g. CLAUDE.orchestrator.md) instead of stdout.",
    )

    projects_parser = subparsers.add_parser(
        "projects",
        help="List configured projects.",
    )
    _add_verbose_option(projects_parser, suppress_default=True)
    _add_config_option(projects_parser)

    env_parser = subparsers.add_parser(
        "dashboard-env",
        help="Print the environment variables passed to the dashboard process.",
    )
    _add_verbose_option(env_parser, suppress_default=True)
    _add_config_option(env_parser)
    env_parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=None,
        help="Dashboard port (defaults to the configured port).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the prompt service over HTTP.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for aoprompt commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))
    logger = get_logger("cli")

    if args.command == "generate":
        try:
            config = load_config(args.config)
            prompt = generate_orchestrator_prompt(config, args.project_id)
        except (ConfigError, UnknownProjectError) as exc:
            parser.exit(1, f"aoprompt generate failed: {exc}\n")
        if args.output:
            output = Path(args.output).expanduser()
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(prompt + "\n", encoding="utf-8")
            logger.info("Wrote orchestrator prompt for %s to %s", args.project_id, output)
            print(f"Prompt written to {_relativize(output)}")
        else:
            print(prompt)
    elif args.command == "projects":
        try:
            config = load_config(args.config)
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        for project_id, project in config.projects.items():
            print(f"{project_id}\t{project.name}\t{project.repo}")
    elif args.command == "dashboard-env":
        try:
            config = load_config(args.config)
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        port = args.port if args.port is not None else config.port
        env = build_dashboard_env(port, config.config_path)
        for key in _DASHBOARD_ENV_KEYS:
            if key in env:
                print(f"{key}={env[key]}")
    elif args.command == "serve":
        from .service import run_service

        logger.info("Starting prompt service on %s:%d", args.host, args.port)
        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
