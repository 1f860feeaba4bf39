"""Customer Tracker Web Application."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tracker.core.config import settings
from tracker.core.database import create_db_and_tables, engine
from tracker.routes import checklists, customers, data, fields, preferences, templates
from tracker.services.workspace import Workspace
from tracker.store import SQLKeyValueStore

# Configure logging
log_dir = Path.home() / ".logs" / "customer_tracker"
log_dir.mkdir(parents=True, exist_ok=True)
log_file = log_dir / "latest.log"

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    filename=str(log_file),
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    logger.info("Starting Customer Tracker application")
    create_db_and_tables()
    app.state.workspace = Workspace(SQLKeyValueStore(engine))
    yield
    engine.dispose()
    logger.info("Customer Tracker application shut down")


app = FastAPI(
    title=settings.app_name,
    description="Track customers through new, in-progress and completed stages",
    version="0.1.0",
    lifespan=lifespan,
)

origins = (
    ["*"]
    if settings.allowed_origins == "*"
    else [o.strip() for o in settings.allowed_origins.split(",")]
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(customers.router)
app.include_router(fields.router)
app.include_router(templates.router)
app.include_router(checklists.router)
app.include_router(preferences.router)
app.include_router(data.router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "app": settings.app_name}
