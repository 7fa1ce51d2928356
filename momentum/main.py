import importlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .deps import SessionLocal, engine
from .jobs import start_scheduler
from .persistence import SqlKeyValueStore
from .services.feedback import CompletionFeedback, log_handle
from .store import GoalStore
from . import models

logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
log = logging.getLogger(__name__)

ROUTERS = ["goals", "preferences"]

def build_store() -> GoalStore:
    # 1) create the kv table if this is a fresh DB
    models.Base.metadata.create_all(bind=engine)
    # 2) load the persisted state once
    store = GoalStore(
        SqlKeyValueStore(SessionLocal),
        settings.store_key,
        tz=settings.timezone,
        feedback=CompletionFeedback(log_handle),
        backfill_on_create=settings.backfill_on_create,
    )
    return store.load()

def _include_routers(app: FastAPI) -> None:
    for modname in ROUTERS:
        mod = importlib.import_module(f"{__package__}.routers.{modname}")
        app.include_router(mod.router)
        log.info("[routers] mounted %s", modname)

def create_app(store: GoalStore | None = None, start_jobs: bool | None = None) -> FastAPI:
    if start_jobs is None:
        start_jobs = settings.enable_scheduler

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.store = store if store is not None else build_store()
        scheduler = None
        if start_jobs:
            scheduler = start_scheduler(app.state.store)
        try:
            yield
        finally:
            if scheduler is not None:
                scheduler.shutdown(wait=False)

    app = FastAPI(title="Momentum Tracker API", version="0.1.0", lifespan=lifespan)

    # CORS (dev-friendly; tighten later)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    @app.get("/health")
    def health():
        return {"ok": True}

    _include_routers(app)
    return app

app = create_app()
