"""
Patient Safety Review - runs every evaluator over a patient's medication list
and aggregates the results.

Features:
- Latest-value resolution for vitals and labs
- Per-medication risk, dose-range check and contraindications
- Cross-medication interactions
- Overall patient level (highest of medication levels and contraindication severities)
"""

import logging
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field, computed_field

from .catalog import RuleCatalog, get_catalog
from .contraindications import check_contraindications
from .dose_range import check_dose_range
from .interaction_engine import (
    InteractionEngine,
    NO_INTERACTIONS_MESSAGE,
    build_interaction_alert,
    highest_interaction_severity,
    safety_event_level,
)
from .models import (
    ContraindicationHit,
    DetectedInteraction,
    DoseRangeCheck,
    InteractionSeverity,
    LabSnapshot,
    MedicationIdentity,
    MedicationRiskResult,
    PatientSnapshot,
    RiskLevel,
    VitalSnapshot,
    max_risk_level,
)
from .risk_engine import MedicationRiskEngine
from .snapshots import latest_per_type

logger = logging.getLogger(__name__)


class MedicationSafetyEntry(BaseModel):
    """Everything evaluated for one medication."""
    medication: MedicationIdentity
    risk: MedicationRiskResult
    dose_check: DoseRangeCheck
    contraindications: List[ContraindicationHit] = Field(default_factory=list)

    @computed_field
    @property
    def level(self) -> RiskLevel:
        """Risk level raised by any contraindication hit."""
        return max_risk_level(
            [self.risk.level] + [RiskLevel(h.severity.value) for h in self.contraindications]
        )


class PatientSafetyReview(BaseModel):
    """Combined safety review for a patient."""
    patient_id: str
    overall_level: RiskLevel
    medications: List[MedicationSafetyEntry]
    interactions: List[DetectedInteraction]
    interaction_count: int
    highest_interaction_severity: Optional[InteractionSeverity] = None
    safety_event_level: str = Field(..., description="high, moderate or low")
    alert_text: str = Field(..., description="Interaction alert, or the all-clear message")


class SafetyReviewer:
    """Runs the risk, dose, contraindication and interaction checks for one patient."""

    def __init__(self, catalog: Optional[RuleCatalog] = None):
        self.catalog = catalog if catalog is not None else get_catalog()
        self.risk_engine = MedicationRiskEngine(self.catalog)
        self.interaction_engine = InteractionEngine(self.catalog)

    def review(
        self,
        patient: PatientSnapshot,
        medications: Sequence[MedicationIdentity],
        vitals: Sequence[VitalSnapshot] = (),
        labs: Sequence[LabSnapshot] = (),
    ) -> PatientSafetyReview:
        latest_vitals = latest_per_type(vitals)
        latest_labs = latest_per_type(labs)

        entries: List[MedicationSafetyEntry] = []
        for medication in medications:
            entries.append(MedicationSafetyEntry(
                medication=medication,
                risk=self.risk_engine.evaluate_risk(medication, patient, latest_vitals, latest_labs),
                dose_check=check_dose_range(medication, self.catalog),
                contraindications=check_contraindications(medication, patient.conditions, self.catalog),
            ))

        interactions = self.interaction_engine.evaluate_interactions(medications)
        overall = max_risk_level(entry.level for entry in entries)

        logger.info(
            "Safety review for patient %s: %d medications, overall=%s, interactions=%d",
            patient.id, len(entries), overall.value, len(interactions),
        )

        return PatientSafetyReview(
            patient_id=patient.id,
            overall_level=overall,
            medications=entries,
            interactions=interactions,
            interaction_count=len(interactions),
            highest_interaction_severity=highest_interaction_severity(interactions),
            safety_event_level=safety_event_level(interactions),
            alert_text=build_interaction_alert(interactions) or NO_INTERACTIONS_MESSAGE,
        )


def review_patient(
    patient: PatientSnapshot,
    medications: Sequence[MedicationIdentity],
    vitals: Sequence[VitalSnapshot] = (),
    labs: Sequence[LabSnapshot] = (),
) -> PatientSafetyReview:
    """Convenience function using the process-wide catalog."""
    return SafetyReviewer().review(patient, medications, vitals, labs)
