"""
Medication Risk API - single-medication risk evaluation and rule lookup.

Endpoints:
- POST /api/v1/medications/risk - Evaluate one medication against vitals and labs
- GET /api/v1/medications/rules - List catalog medication rules
- GET /api/v1/medications/rules/{generic_name} - Get one medication rule
"""

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, HTTPException

from app.schemas.medication_schema import MedicationRiskReport, MedicationRiskRequest
from app.services.medication_safety.catalog import get_catalog
from app.services.medication_safety.contraindications import check_contraindications
from app.services.medication_safety.dose_range import check_dose_range
from app.services.medication_safety.models import MedicationRule
from app.services.medication_safety.risk_engine import MedicationRiskEngine
from app.services.medication_safety.snapshots import latest_per_type

router = APIRouter()


@router.post("/risk", response_model=MedicationRiskReport)
async def evaluate_medication_risk(request: MedicationRiskRequest):
    """
    Evaluate risk for a single medication.

    Unknown medications are reported green with a "No rule found" summary.
    """
    catalog = get_catalog()
    engine = MedicationRiskEngine(catalog)

    vitals = latest_per_type(request.vitals) if request.resolve_latest else request.vitals
    labs = latest_per_type(request.labs) if request.resolve_latest else request.labs

    risk = engine.evaluate_risk(request.medication, request.patient, vitals, labs)

    contraindications = []
    if request.patient:
        contraindications = check_contraindications(
            request.medication, request.patient.conditions, catalog
        )

    return MedicationRiskReport(
        medication=request.medication,
        timestamp=datetime.now(timezone.utc).isoformat(),
        risk=risk,
        contraindications=contraindications,
        dose_check=check_dose_range(request.medication, catalog),
    )


@router.get("/rules", response_model=List[MedicationRule])
async def list_medication_rules():
    """List all medication rules in the active catalog."""
    return list(get_catalog().medication_rules)


@router.get("/rules/{generic_name}", response_model=MedicationRule)
async def get_medication_rule(generic_name: str):
    """Get the rule for one generic name (case-insensitive)."""
    rule = get_catalog().get_medication_rule(generic_name)
    if rule is None:
        raise HTTPException(
            status_code=404,
            detail=f"No rule found for {generic_name}"
        )
    return rule
