import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.router import api_router
from app.core import logging as app_logging  # Initialize logging
from app.services.medication_safety.catalog import get_catalog

logger = logging.getLogger(__name__)

app = FastAPI(
    title="MedSafety API",
    description="Medication Risk & Interaction Evaluation Engine",
    version="1.0.0"
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API Routers
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event():
    # Preload and validate the rule catalog
    catalog = get_catalog()
    logger.info("Rule catalog ready (%s)", catalog.source)


@app.get("/health")
async def health_check():
    catalog = get_catalog()
    return {
        "status": "ok",
        "service": "MedSafety",
        "catalog_source": catalog.source,
        "medication_rules": len(catalog.medication_rules),
        "interaction_rules": len(catalog.interaction_rules),
    }
