"""FastAPI application entrypoint for aoprompt service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError, UnknownProjectError, load_config
from ..logging import get_logger
from ..models import OrchestratorConfig
from ..prompting import generate_orchestrator_prompt

ConfigLoader = Callable[[Optional[Path]], OrchestratorConfig]

_logger = get_logger("service")


class PromptRequest(BaseModel):
    project_id: str
    config_path: Optional[str] = None


class PromptResponse(BaseModel):
    project_id: str
    prompt: str


class HealthResponse(BaseModel):
    status: str


def create_app(config_loader: ConfigLoader = load_config) -> FastAPI:
    """Create the FastAPI application exposing prompt generation."""

    app = FastAPI(title="aoprompt Service", version="0.1.0")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/prompt", response_model=PromptResponse)
    async def render_prompt(payload: PromptRequest) -> PromptResponse:
        def _render() -> str:
            config_path = Path(payload.config_path) if payload.config_path else None
            config = config_loader(config_path)
            return generate_orchestrator_prompt(config, payload.project_id)

        loop = asyncio.get_running_loop()
        prompt = await loop.run_in_executor(None, _render)
        _logger.debug("Rendered prompt for %s (%d chars)", payload.project_id, len(prompt))
        return PromptResponse(project_id=payload.project_id, prompt=prompt)

    @app.exception_handler(UnknownProjectError)
    async def unknown_project_handler(_: Any, exc: UnknownProjectError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
