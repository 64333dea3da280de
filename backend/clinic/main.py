import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .core.database import create_db_and_tables
from .core.init_db import init_db
from .core.settings import Settings, settings
from .auth.permissions import PermissionRegistry
from .auth.tokens import TokenService

from .auth.router import router as auth_router
from .users.router import router as users_router
from .patients.router import router as patients_router
from .medications.router import router as medications_router
from .treatment_options.router import router as treatment_options_router
from .treatments.router import router as treatments_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    init_db()
    logger.info("%s ready", app.title)
    yield


def create_app(app_settings: Settings = settings) -> FastAPI:
    logging.basicConfig(
        level=app_settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title=app_settings.PROJECT_NAME, lifespan=lifespan)

    # Built once, read-only afterwards; a missing secret stops startup here
    app.state.token_service = TokenService(
        app_settings.JWT_SECRET,
        algorithm=app_settings.JWT_ALGORITHM,
        expires_delta=app_settings.token_expires_delta,
    )
    app.state.permission_registry = PermissionRegistry()
    app.state.resolve_role_per_request = app_settings.RESOLVE_ROLE_PER_REQUEST

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(patients_router)
    app.include_router(medications_router)
    app.include_router(treatment_options_router)
    app.include_router(treatments_router)

    @app.get("/")
    def read_root():
        return {"message": f"Welcome to {app_settings.PROJECT_NAME}"}

    return app


app = create_app()
