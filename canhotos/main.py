import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from canhotos.core.config import get_settings
from canhotos.core.handlers import register_exception_handlers
from canhotos.core.logging import configure_logging
from canhotos.db.base import Base
from canhotos.db.session import SessionLocal, engine
from canhotos.models import Upload, User  # noqa: F401
from canhotos.routers import auth, uploads, users
from canhotos.services.bootstrap import seed_master_admin
from canhotos.services.storage import FILES_URL_PREFIX, ensure_upload_dir

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()
    app = FastAPI(title=settings.app_name, debug=settings.debug)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(uploads.router)
    app.mount(FILES_URL_PREFIX, StaticFiles(directory=ensure_upload_dir()), name="files")

    @app.on_event("startup")
    def startup() -> None:
        if settings.auto_create_tables:
            Base.metadata.create_all(bind=engine)
        if settings.seed_master_admin:
            with SessionLocal() as db:
                seed_master_admin(db, settings)
        logger.info("app_started", extra={"environment": settings.environment})

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
