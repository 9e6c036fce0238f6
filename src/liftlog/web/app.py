"""FastAPI application for the liftlog JSON API."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

from .. import __version__
from ..db.engine import get_db_path, init_db
from .routers import exercises, logs, metrics, preferences


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    db_path = db_path or get_db_path()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create the schema on startup; it is a no-op for existing databases."""
        await init_db(db_path)
        yield

    app = FastAPI(
        title="liftlog",
        description="Personal weight-training log",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.db_path = db_path

    app.include_router(exercises.router)
    app.include_router(logs.router)
    app.include_router(metrics.router)
    app.include_router(preferences.router)

    @app.get("/")
    async def root(request: Request):
        """Redirect to the interactive API docs."""
        return RedirectResponse(url="/docs", status_code=302)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
