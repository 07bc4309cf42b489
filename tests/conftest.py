"""Shared test fixtures."""

import pytest
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from cinearchive.api.routes import films, health, reference
from cinearchive.web import auth, editor, pages


@pytest.fixture
def test_app() -> FastAPI:
    """App with every router but without static files or the back-office, for API tests."""
    app = FastAPI()
    app.add_middleware(SessionMiddleware, secret_key="test-secret")
    app.include_router(health.router)
    app.include_router(films.router, prefix="/api")
    app.include_router(reference.router, prefix="/api")
    app.include_router(auth.router)
    app.include_router(editor.router)
    app.include_router(pages.router)
    return app
