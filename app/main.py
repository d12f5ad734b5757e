import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.routers import match, ws
from app.services.game.match import get_match_service
from app.services.websocket.manager import get_connection_manager

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Grid Skirmish API")
    logger.debug("Debug mode: %s", settings.DEBUG)

    # Create the match up front so the first client sees a fresh board
    match_service = get_match_service()
    logger.info("Match ready in phase %s", match_service.state.phase.value)

    # Initialize WebSocket connection manager and start cleanup task
    connection_manager = get_connection_manager()
    await connection_manager.start_cleanup_task()
    logger.info("WebSocket connection manager initialized")

    yield

    logger.info("Shutting down Grid Skirmish API")
    await connection_manager.stop_cleanup_task()
    await connection_manager.close_all_connections()
    logger.info("WebSocket cleanup complete")


app = FastAPI(
    title="Grid Skirmish API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
logger.debug("CORS configured with origins: %s", settings.CORS_ORIGINS)

app.include_router(match.router, prefix="/api/v1")
app.include_router(ws.router, prefix="/api/v1")
logger.debug("Routers registered: /api/v1/match, /api/v1/ws")


@app.get("/")
def root():
    return {"message": "Grid Skirmish API"}


@app.get("/health")
def health():
    return {"status": "healthy"}
