"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from ruleset_validator.interface.dependencies import shutdown, startup
from ruleset_validator.interface.error_handlers import register_error_handlers
from ruleset_validator.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="Ruleset Repository Validator",
        version="1.0.0",
        description=(
            "Checks out a Bazel ruleset repository and verifies it carries "
            "MODULE.bazel plus the .bcr registry templates, returning the "
            "module name declared in MODULE.bazel."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    # ── Health check (simple liveness probe) ────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
