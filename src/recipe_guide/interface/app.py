"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from recipe_guide.interface.dependencies import pipeline_ready, shutdown, startup
from recipe_guide.interface.error_handlers import register_error_handlers
from recipe_guide.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="Recipe Guide",
        version="1.0.0",
        description=(
            "Guardrailed recipe assistant: sanitizes user prompts, embeds "
            "recipe documents, and answers cooking questions grounded on "
            "the recipes supplied with each request."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    # ── Health check (simple liveness probe) ────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str | bool]:
        return {"status": "ok", "pipeline_ready": pipeline_ready()}

    return app
