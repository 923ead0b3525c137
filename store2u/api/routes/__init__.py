"""API route registration."""

from fastapi import FastAPI

from store2u.api.routes import admin, catalog, system


def include_api_routes(app: FastAPI) -> None:
    """Attach all API routers to the application."""

    app.include_router(system.router)
    app.include_router(catalog.router)
    app.include_router(admin.router)
