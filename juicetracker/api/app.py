"""FastAPI app, CORS, and route registration."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from juicetracker.config import LOG_LEVEL, ensure_data_dir

# Configure logging in the worker process (visible with uvicorn --reload)
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(levelname)s: %(name)s: %(message)s",
)

from juicetracker.api.state import AppState, get_state

# Import routes after state to avoid circular imports
from juicetracker.api.routes import colors, entries, juices

__all__ = ["app", "AppState", "get_state"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_data_dir()
    state = get_state()
    logging.getLogger(__name__).info("Juice store at %s", state.store.path)

    yield

    state.shutdown()


app = FastAPI(
    title="Juice Tracker API",
    description="Local API behind the juice tracker list and entry form",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(juices.router, prefix="/api/juices", tags=["juices"])
app.include_router(entries.router, prefix="/api/entries", tags=["entries"])
app.include_router(colors.router, prefix="/api/colors", tags=["colors"])
