from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.chain_metrics.api.dependencies import get_engine
from app.core.chain_metrics.api.routes.activity_routes import router as activity_router
from app.core.chain_metrics.api.routes.chain_routes import router as chain_router
from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for FastAPI application."""
    logger.info("Starting Chain Metrics API")
    # reads the configuration once, before the first request
    get_engine()
    yield
    logger.info("Shutting down Chain Metrics API")


# ------------------------------------------------------------------
# FastAPI-Instanz
# ------------------------------------------------------------------
app = FastAPI(
    title="Chain Metrics API",
    description="Live metrics for L1 blockchains and Ethereum L2s",
    version="0.1.0",
    lifespan=lifespan,
)

# ------------------------------------------------------------------
# CORS-Konfiguration
# ------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ------------------------------------------------------------------
# API Routes
# ------------------------------------------------------------------
app.include_router(chain_router)
app.include_router(activity_router)


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
    )
