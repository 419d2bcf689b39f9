from pydantic import BaseModel, Field
from typing import List, Optional

from app.services.medication_safety.models import (
    ContraindicationHit,
    DetectedInteraction,
    DoseRangeCheck,
    InteractionSeverity,
    LabSnapshot,
    MedicationIdentity,
    MedicationRiskResult,
    PatientSnapshot,
    VitalSnapshot,
)


class MedicationRiskRequest(BaseModel):
    medication: MedicationIdentity
    patient: Optional[PatientSnapshot] = Field(None, description="Used for contraindication matching")
    vitals: List[VitalSnapshot] = Field(default_factory=list)
    labs: List[LabSnapshot] = Field(default_factory=list)
    resolve_latest: bool = Field(
        True,
        description="Keep only the newest value per type before evaluating; "
                    "if False, the first value of each type in the given order is used"
    )


class MedicationRiskReport(BaseModel):
    medication: MedicationIdentity
    timestamp: str
    risk: MedicationRiskResult
    contraindications: List[ContraindicationHit] = Field(default_factory=list)
    dose_check: DoseRangeCheck


class InteractionCheckRequest(BaseModel):
    medications: List[MedicationIdentity] = Field(default_factory=list, description="Active medication list")


class InteractionReport(BaseModel):
    timestamp: str
    interactions: List[DetectedInteraction]
    interaction_count: int
    highest_severity: Optional[InteractionSeverity] = None
    safety_event_level: str
    alert_text: str


class SafetyReviewRequest(BaseModel):
    patient: PatientSnapshot
    medications: List[MedicationIdentity] = Field(default_factory=list)
    vitals: List[VitalSnapshot] = Field(default_factory=list)
    labs: List[LabSnapshot] = Field(default_factory=list)
