"""Concept Search FastAPI application.

Searches vocabulary concepts by free text, code or id within a clinical
domain and resolves every match to its standard concept.  The service is
read-only: vocabulary loading and index rebuilds belong to external tooling.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from concept_search.core.config import Settings, settings as default_settings
from concept_search.routers import concept_search


def create_app(settings: Settings = default_settings) -> FastAPI:
    app = FastAPI(
        title="Concept Search",
        version="0.1.0",
        description="Domain-scoped vocabulary concept search with standard-concept resolution.",
    )

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(concept_search.router)

    return app


app = create_app()
