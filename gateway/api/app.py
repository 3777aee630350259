"""FastAPI application factory.

Routers
-------
    /transform — fetch a page and rewrite it for an accessibility mode
    /summary   — three-bullet summary plus reading time
    /health    — liveness probe

The app holds one :class:`~gateway.llm.client.CompletionClient` on
``app.state.completion_client``.  It is immutable configuration, so sharing
it across requests introduces no cross-request state; tests swap it for a
fake the same way.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gateway.config import configure_logging
from gateway.llm.client import CompletionClient

from gateway.api.routers import summary as summary_router
from gateway.api.routers import transform as transform_router


def create_app(completion_client: CompletionClient | None = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging()

    app = FastAPI(
        title="Accessibility Gateway",
        description=(
            "Fetches third-party webpages and re-serves them simplified, "
            "translated, or dyslexia-friendly, with an injected text-to-speech "
            "and focus-mode controller."
        ),
        version="0.1.0",
    )
    app.state.completion_client = completion_client or CompletionClient()

    # The toolbar UI may be served from any origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(transform_router.router, prefix="/transform", tags=["transform"])
    app.include_router(summary_router.router, prefix="/summary", tags=["summary"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


# Module-level instance used by uvicorn:
#   uvicorn gateway.api.app:app --reload
app = create_app()
