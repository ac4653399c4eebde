"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gym_assistant.api.v1 import api_router
from gym_assistant.core.config import Settings, get_settings
from gym_assistant.core.exceptions import InvalidInputError, NoActiveSessionError, NotFoundError, SessionError
from gym_assistant.db.session import create_db_engine, create_session_maker, init_db
from gym_assistant.services.domain_store import DomainStore
from gym_assistant.services.library import ExerciseLibrary
from gym_assistant.services.persistence import SqlKeyValueStore
from gym_assistant.services.session_engine import SessionEngine
from gym_assistant.services.templates import TemplateManager

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_application(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup: open the local store and build the services; shutdown: drop any live workout."""
        engine = create_db_engine(settings)
        init_db(engine)
        store = DomainStore.load(SqlKeyValueStore(create_session_maker(engine)))
        library = ExerciseLibrary(store)
        templates = TemplateManager(store, library)
        app.state.store = store
        app.state.library = library
        app.state.templates = templates
        app.state.session_engine = SessionEngine(store, library, templates)
        logger.info("Store ready at %s", settings.database_path)
        yield
        app.state.session_engine.exit()
        engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    # CORS: allow everything in debug, localhost in dev, CORS_ORIGINS otherwise
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:3000", "http://127.0.0.1:3000"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NoActiveSessionError)
    async def no_active_session_handler(request: Request, exc: NoActiveSessionError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(SessionError)
    async def session_error_handler(request: Request, exc: SessionError):
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.get("/")
    def root():
        return {"status": "ok", "message": "Gym Assistant API"}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
