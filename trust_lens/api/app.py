"""FastAPI application for the TrustLens service."""

import contextlib
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..infrastructure.dependencies import get_service_container
from ..infrastructure.settings import get_settings
from .endpoints import contacts, detectors, health, history, session, threats

# Configure logging
logging.basicConfig(
    level=get_settings().log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the service container and shut it down with the app."""
    container = get_service_container()
    await container.startup()

    yield  # Application runs here

    await container.shutdown()


# Create FastAPI application
app = FastAPI(
    title="TrustLens API",
    description="Scam, fraud and misinformation detection with a hosted multimodal classifier",
    version=health.VERSION,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(detectors.router)
app.include_router(session.router)
app.include_router(history.router)
app.include_router(contacts.router)
app.include_router(threats.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
