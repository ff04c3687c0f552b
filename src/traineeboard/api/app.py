"""FastAPI application factory.

Per the api layer boundary:
- Validates inputs, reads/mutates the store
- Returns payloads for the dashboard UI
- Forbidden: statistics and filter logic
"""

from __future__ import annotations

import threading

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from traineeboard.store.loader import create_store
from traineeboard.store.snapshot import DataStore

# Module-level store, created on first request
_store: DataStore | None = None
_store_lock = threading.Lock()


def get_store() -> DataStore:
    """Dependency to get the shared data store.

    The store is seeded on first use from the configured seed file
    (see traineeboard.store.loader).

    Returns:
        Process-wide DataStore.
    """
    global _store
    with _store_lock:
        if _store is None:
            _store = create_store()
        return _store


def create_app(store: DataStore | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        store: Store to serve. Defaults to the shared store from get_store().

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="Traineeboard API",
        description="Trainee test results, monitoring and analysis",
        version="0.1.0",
    )

    # Add CORS middleware for UI access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:4200",  # Angular dev server
            "http://127.0.0.1:4200",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routes
    from traineeboard.api.routes import analysis, monitor, results, trainees

    app.include_router(trainees.router, prefix="/api")
    app.include_router(results.router, prefix="/api")
    app.include_router(monitor.router, prefix="/api")
    app.include_router(analysis.router, prefix="/api")

    if store is not None:
        app.dependency_overrides[get_store] = lambda: store

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app


# Default app instance
app = create_app()
