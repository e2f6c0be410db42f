"""
Shiprecon API - Main FastAPI Application.

Receives supplier shipment batches (from the mail parser) and confirms
the shipments with the owning stores.
"""

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from shiprecon import __version__
from shiprecon.api.dependencies import get_store_registry
from shiprecon.utils.logging import setup_logging

# Load environment variables
load_dotenv()

# Configure logging early
setup_logging("shiprecon-api")

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    registry = get_store_registry()
    logger.info(
        "Starting Shiprecon API (environment: %s, stores: %d)",
        os.getenv("GOOGLE_CLOUD_PROJECT", "local"),
        len(registry),
    )

    yield

    logger.info("Shutting down Shiprecon API")


OPENAPI_TAGS = [
    {
        "name": "shipments",
        "description": "Shipment batch reconciliation against store orders",
    },
    {
        "name": "system",
        "description": "System health and information endpoints",
    },
]

app = FastAPI(
    title="Shiprecon API",
    description=(
        "Reconciles supplier shipment notifications with store orders.\n\n"
        "Each shipment record is matched to its store order by customer PO and SKU, "
        "and a single bundled tracking update is submitted per record. "
        "Batches are always processed to the end; failures are reported per record."
    ),
    version=__version__,
    lifespan=lifespan,
    openapi_tags=OPENAPI_TAGS,
)


@app.get("/", tags=["system"], operation_id="getServiceInfo")
async def root():
    """Return basic information about the API service."""
    return {
        "service": "Shiprecon API",
        "version": __version__,
        "status": "operational",
        "description": "Shipment to store order reconciliation",
    }


@app.get("/health", tags=["system"], operation_id="healthCheck")
async def health_check():
    """Check service health status (used by Cloud Run monitoring)."""
    return {
        "status": "healthy",
        "service": "shiprecon-api",
        "environment": os.getenv("GOOGLE_CLOUD_PROJECT", "local"),
    }


# Import and include routers
from shiprecon.api.routes import shipments

app.include_router(shipments.router, prefix="/api/v1", tags=["shipments"])
