from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.mailadmin.api import api_router
from app.mailadmin.core.config import settings
from app.mailadmin.core.errors import setup_exception_handlers
from app.mailadmin.core.logging import configure_logging
from app.mailadmin.db.seed import init_schema, run_seed
from app.mailadmin.db.session import SessionLocal, engine
from app.mailadmin.middleware.observability import ObservabilityMiddleware
from app.mailadmin.middleware.trace import TraceIdMiddleware


def bootstrap_store() -> None:
    init_schema(engine)
    db = SessionLocal()
    try:
        run_seed(db)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(_: FastAPI):
    bootstrap_store()
    yield


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.add_middleware(TraceIdMiddleware)
    app.add_middleware(ObservabilityMiddleware)
    setup_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
