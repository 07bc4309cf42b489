"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from cinearchive.admin.app import mount_admin
from cinearchive.api.routes import films, health, reference
from cinearchive.config import settings
from cinearchive.web import auth, editor, pages
from cinearchive.web.templating import STATIC_DIR

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Cinearchive",
        description="Searchable film catalogue with an admin back-office",
        version="0.1.0",
    )

    # Configure CORS for the JSON API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Site login and the back-office share one signed session cookie
    app.add_middleware(SessionMiddleware, secret_key=settings.admin_secret_key)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # Include routers; editor before pages so /movies/create is not read as a film id
    app.include_router(health.router)
    app.include_router(films.router, prefix="/api", tags=["films"])
    app.include_router(reference.router, prefix="/api", tags=["reference"])
    app.include_router(auth.router)
    app.include_router(editor.router)
    app.include_router(pages.router)

    mount_admin(app)
    logger.info("Cinearchive application configured")
    return app


app = create_app()
