"""Main entry point for the hookclip application."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, suppress

import uvicorn
from fastapi import FastAPI

from hookclip.api.deps import init_services
from hookclip.api.routes import analyses, health, jobs, render_events
from hookclip.config import Settings, settings
from hookclip.services.analysis.base import IAnalyzer
from hookclip.services.render.base import IRenderBackend

logger = logging.getLogger(__name__)


def create_app(
    cfg: Settings | None = None,
    analyzer: IAnalyzer | None = None,
    backend: IRenderBackend | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``analyzer`` and ``backend`` override the collaborators selected by
    ``cfg``; tests pass deterministic doubles here.
    """
    from hookclip import __version__

    cfg = cfg or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initialize services and the job sweeper on startup, stop them on shutdown."""
        _, orchestrator = init_services(cfg, analyzer=analyzer, backend=backend)
        sweeper = asyncio.create_task(orchestrator.run_sweeper(cfg.sweep_interval_sec))
        logger.info(
            "hookclip started (analysis=%s, render=%s, dedupe=%s)",
            cfg.analysis_backend if analyzer is None else analyzer.name,
            cfg.render_backend if backend is None else backend.name,
            cfg.dedupe_policy,
        )
        yield
        sweeper.cancel()
        with suppress(asyncio.CancelledError):
            await sweeper
        await orchestrator.aclose()

    app = FastAPI(
        title="hookclip",
        description="Viral moment analysis and clip generation",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(analyses.router)
    app.include_router(jobs.router)
    app.include_router(render_events.router)

    return app


app = create_app()


def main() -> None:
    """Run the application."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(
        "hookclip.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
