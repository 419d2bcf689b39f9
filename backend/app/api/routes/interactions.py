"""
Interaction API - drug-drug interaction detection and rule lookup.

Endpoints:
- POST /api/v1/interactions/evaluate - Evaluate a medication list
- GET /api/v1/interactions/rules - Get the interaction rule set
"""

from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, HTTPException

from app.schemas.medication_schema import InteractionCheckRequest, InteractionReport
from app.services.medication_safety.catalog import get_catalog
from app.services.medication_safety.interaction_engine import (
    InteractionEngine,
    NO_INTERACTIONS_MESSAGE,
    build_interaction_alert,
    highest_interaction_severity,
    safety_event_level,
)
from app.services.medication_safety.models import DrugClass, InteractionRule, InteractionSeverity

router = APIRouter()


@router.post("/evaluate", response_model=InteractionReport)
async def evaluate_interactions(request: InteractionCheckRequest):
    """
    Evaluate all interaction rules against the active medication list.

    Lists with fewer than two medications never produce interactions.
    """
    interactions = InteractionEngine(get_catalog()).evaluate_interactions(request.medications)

    return InteractionReport(
        timestamp=datetime.now(timezone.utc).isoformat(),
        interactions=interactions,
        interaction_count=len(interactions),
        highest_severity=highest_interaction_severity(interactions),
        safety_event_level=safety_event_level(interactions),
        alert_text=build_interaction_alert(interactions) or NO_INTERACTIONS_MESSAGE,
    )


@router.get("/rules", response_model=List[InteractionRule])
async def get_interaction_rules(
    severity: Optional[str] = None,
    medication_class: Optional[str] = None,
):
    """
    Get the interaction rule set in catalog order.

    Optional filters:
    - severity: minor/moderate/major
    - medication_class: drug class referenced by either agent (e.g. NSAID)
    """
    rules = list(get_catalog().interaction_rules)

    if severity:
        try:
            sev = InteractionSeverity(severity.lower())
        except ValueError:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid severity: {severity}. Use minor/moderate/major"
            )
        rules = [r for r in rules if r.severity == sev]

    if medication_class:
        try:
            drug_class = DrugClass(medication_class.upper())
        except ValueError:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid medication class: {medication_class}"
            )
        rules = [
            r for r in rules
            if any(agent.medication_class == drug_class for agent in r.agents)
        ]

    return rules
