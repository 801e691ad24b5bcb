# burnnote/main.py

from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from burnnote.api import notes
from burnnote.core.note import NoteService
from burnnote.core.rate_limit import limiter
from burnnote.utils.logger import setup_logger

logger = logging.getLogger(__name__)


def build_note_service() -> NoteService:
    """Default wiring: SQL store on the configured database."""
    from burnnote.infra.postgres import SessionLocal, init_db
    from burnnote.infra.sql_store import SqlNoteStore

    init_db()
    return NoteService(SqlNoteStore(SessionLocal))


@asynccontextmanager
async def lifespan(app: FastAPI):
    if app.state.notes is None:
        app.state.notes = build_note_service()
    logger.info("Burn Note backend ready")

    yield

    app.state.notes.purger.shutdown()
    logger.info("Burn Note backend stopped")


def create_app(service: Optional[NoteService] = None) -> FastAPI:
    setup_logger()

    app = FastAPI(
        title="Burn Note Backend",
        version="1.0.0",
        description="Password-protected notes that can be read once",
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.notes = service
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Register routers
    app.include_router(notes.router, tags=["Notes"])

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


app = create_app()
