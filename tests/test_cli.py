"""CLI parser and command behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from aoprompt.cli import _build_parser, main


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "generate", "my-app"])
    assert args.verbose is True
    assert args.command == "generate"
    assert args.project_id == "my-app"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["generate", "my-app", "--verbose"])
    assert args.verbose is True


def test_cli_generate_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(["generate", "my-app", "-c", "conf.yaml", "-o", "CLAUDE.orchestrator.md"])
    assert args.config == "conf.yaml"
    assert args.output == "CLAUDE.orchestrator.md"


def test_cli_generate_prints_prompt(sample_config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["generate", "my-app", "--config", str(sample_config_file)])
    out = capsys.readouterr().out
    assert out.startswith("# Orchestrator Agent — My App")
    assert "## Automated Reactions" in out


def test_cli_generate_writes_output(
    sample_config_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    target = tmp_path / "out" / "CLAUDE.orchestrator.md"
    main(["generate", "my-app", "-c", str(sample_config_file), "-o", str(target)])
    assert target.read_text(encoding="utf-8").startswith("# Orchestrator Agent — My App")
    assert "Prompt written to" in capsys.readouterr().out


def test_cli_generate_unknown_project_exits(
    sample_config_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["generate", "missing", "-c", str(sample_config_file)])
    assert exc.value.code == 1
    assert "Unknown project 'missing'" in capsys.readouterr().err


def test_cli_generate_missing_config_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["generate", "my-app", "-c", str(tmp_path)])
    assert exc.value.code == 1


def test_cli_projects_lists_ids(sample_config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    main(["projects", "-c", str(sample_config_file)])
    assert capsys.readouterr().out.splitlines() == ["my-app\tMy App\torg/my-app"]


def test_cli_dashboard_env(
    sample_config_file: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("TERMINAL_PORT", raising=False)
    monkeypatch.setenv("DIRECT_TERMINAL_PORT", "4003")
    main(["dashboard-env", "-c", str(sample_config_file), "--port", "3100"])
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        f"AO_CONFIG_PATH={sample_config_file.resolve()}",
        "PORT=3100",
        "NEXT_PUBLIC_TERMINAL_PORT=3001",
        "NEXT_PUBLIC_DIRECT_TERMINAL_PORT=4003",
    ]


def test_cli_serve_parser_defaults() -> None:
    args = _build_parser().parse_args(["serve"])
    assert args.host == "127.0.0.1"
    assert args.port == 8000
