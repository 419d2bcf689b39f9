"""
Data models for the medication safety engine.
These models describe the structured inputs the engine consumes (medications,
patient snapshots, vitals, labs), the static rule catalog, and the structured
results it hands back to callers.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Optional, Tuple
from enum import Enum
from datetime import datetime


# ============================================================================
# Enumerations
# ============================================================================

class RiskLevel(str, Enum):
    """Three-tier escalation scale for single-medication risk."""
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"

    @property
    def rank(self) -> int:
        return _RISK_LEVEL_ORDER.index(self)


_RISK_LEVEL_ORDER = [RiskLevel.GREEN, RiskLevel.YELLOW, RiskLevel.RED]


def max_risk_level(levels) -> RiskLevel:
    """Highest level in `levels`; green when empty."""
    highest = RiskLevel.GREEN
    for level in levels:
        level = RiskLevel(level)
        if level.rank > highest.rank:
            highest = level
    return highest


class ContraindicationSeverity(str, Enum):
    """Contraindications are only ever yellow or red."""
    YELLOW = "yellow"
    RED = "red"


class InteractionSeverity(str, Enum):
    """Rule-authored severity of a drug-drug interaction."""
    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"

    @property
    def rank(self) -> int:
        return {"minor": 1, "moderate": 2, "major": 3}[self.value]


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    UNKNOWN = "unknown"


class DrugClass(str, Enum):
    """Coarse pharmacological categories used by class-based interaction rules."""
    ACE_INHIBITOR = "ACE_INHIBITOR"
    ARB = "ARB"
    BETA_BLOCKER = "BETA_BLOCKER"
    CALCIUM_CHANNEL_BLOCKER = "CALCIUM_CHANNEL_BLOCKER"
    DIURETIC = "DIURETIC"
    NSAID = "NSAID"
    ANTICOAGULANT = "ANTICOAGULANT"
    ANTIPLATELET = "ANTIPLATELET"
    SSRI = "SSRI"
    SNRI = "SNRI"
    STATIN = "STATIN"
    INSULIN = "INSULIN"
    OTHER = "OTHER"


class VitalType(str, Enum):
    SYSTOLIC_BP = "systolic_bp"
    DIASTOLIC_BP = "diastolic_bp"
    HEART_RATE = "heart_rate"
    RESPIRATORY_RATE = "respiratory_rate"
    TEMPERATURE = "temperature"
    SPO2 = "spo2"
    WEIGHT = "weight"
    BMI = "bmi"
    GLUCOSE = "glucose"


class LabType(str, Enum):
    POTASSIUM = "potassium"
    CREATININE = "creatinine"
    EGFR = "egfr"
    BUN = "bun"
    ALT = "alt"
    AST = "ast"
    INR = "inr"
    HEMOGLOBIN = "hemoglobin"
    PLATELETS = "platelets"
    SODIUM = "sodium"
    A1C = "a1c"
    LDL = "ldl"
    TRIGLYCERIDES = "triglycerides"
    WBC = "wbc"
    OTHER = "other"


class FindingKind(str, Enum):
    """Whether a threshold breach crossed the warning or the danger bound."""
    WARNING = "warning"
    DANGER = "danger"


class DoseStatus(str, Enum):
    WITHIN = "within"
    BELOW = "below"
    ABOVE = "above"
    UNKNOWN = "unknown"


# ============================================================================
# Caller inputs
# ============================================================================

class MedicationIdentity(BaseModel):
    """A medication on the patient's list; generic_name is the catalog join key."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Medication identifier, unique within a patient's list")
    name: str = Field(..., description="Name as entered by the patient (brand or generic)")
    generic_name: str = Field("", description="Canonical generic name, compared lower-cased")
    dose_mg_per_day: Optional[float] = Field(None, ge=0.0, description="Total daily dose in mg")


class PatientSnapshot(BaseModel):
    """Read-only, point-in-time view of the patient assembled by the caller."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Patient identifier")
    age: int = Field(0, ge=0, description="Age in years (0 when unknown)")
    sex: Sex = Field(Sex.UNKNOWN, description="male, female, other or unknown")
    conditions: Tuple[str, ...] = Field(default_factory=tuple, description="Free-text condition list")


class Measurement(BaseModel):
    """A single recorded vital sign or lab value."""
    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="Measurement type, e.g. systolic_bp or potassium")
    value: float = Field(..., description="Numeric value")
    unit: str = Field("", description="Unit of measure")
    recorded_at: Optional[datetime] = Field(None, description="When the value was recorded")


class VitalSnapshot(Measurement):
    pass


class LabSnapshot(Measurement):
    pass


# ============================================================================
# Rule catalog
# ============================================================================

class ThresholdRule(BaseModel):
    """
    Warning/danger bounds for one vital or lab type.
    Any bound may be omitted, meaning no check in that direction.
    """
    model_config = ConfigDict(frozen=True)

    type: str = Field(..., description="Vital or lab type the bounds apply to")
    rationale: str = Field(..., description="Why this value matters on the medication")
    low_warning: Optional[float] = None
    low_danger: Optional[float] = None
    high_warning: Optional[float] = None
    high_danger: Optional[float] = None

    @property
    def type_key(self) -> str:
        """Plain string form of `type`, used for matching and messages."""
        return self.type.value if isinstance(self.type, Enum) else self.type


class VitalRule(ThresholdRule):
    type: VitalType


class LabRule(ThresholdRule):
    type: LabType


class DoseRange(BaseModel):
    """Usual adult dose range in mg/day."""
    model_config = ConfigDict(frozen=True)

    min: Optional[float] = None
    max: Optional[float] = None
    note: Optional[str] = None


class MedicationMonitoring(BaseModel):
    model_config = ConfigDict(frozen=True)

    vitals: Tuple[VitalRule, ...] = Field(default_factory=tuple)
    labs: Tuple[LabRule, ...] = Field(default_factory=tuple)


class ContraindicationRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    condition: str = Field(..., description="Condition key, e.g. pregnancy or advanced_ckd")
    description: str = Field(..., description="Why the condition is a contraindication")
    severity: ContraindicationSeverity


class MedicationRule(BaseModel):
    """Monitoring, dosing and contraindication rules for one generic medication."""
    model_config = ConfigDict(frozen=True)

    generic_name: str = Field(..., description="Generic name, e.g. lisinopril")
    display_name: str = Field(..., description="Display name, e.g. Lisinopril")
    classes: Tuple[DrugClass, ...] = Field(default_factory=tuple, description="Drug class membership")
    dose_range: Optional[DoseRange] = Field(None, description="Usual adult dose range (mg/day)")
    monitoring: MedicationMonitoring = Field(default_factory=MedicationMonitoring)
    contraindications: Tuple[ContraindicationRule, ...] = Field(default_factory=tuple)
    notes: Optional[str] = None


class AgentMatcher(BaseModel):
    """One side of an interaction rule: a specific generic name or a drug class."""
    model_config = ConfigDict(frozen=True)

    generic_name: Optional[str] = None
    medication_class: Optional[DrugClass] = None

    @model_validator(mode="after")
    def _require_one_selector(self):
        if not self.generic_name and self.medication_class is None:
            raise ValueError("AgentMatcher needs a generic_name or a medication_class")
        return self


class InteractionRule(BaseModel):
    """Pairwise interaction between two asymmetric agent slots (A, B)."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable rule identifier")
    label: str = Field(..., description="Short label, e.g. 'ACE inhibitor + NSAID'")
    severity: InteractionSeverity
    agents: Tuple[AgentMatcher, AgentMatcher] = Field(..., description="Agent slots A and B")
    summary: str
    details: str
    monitoring: Tuple[str, ...] = Field(default_factory=tuple)


# ============================================================================
# Results
# ============================================================================

class ThresholdFinding(BaseModel):
    """A single threshold breach, tagged with the bound that was crossed."""
    model_config = ConfigDict(frozen=True)

    kind: FindingKind
    type: str = Field(..., description="Vital or lab type that breached")
    value: float
    message: str = Field(..., description="Human-readable reason, e.g. 'potassium high (5.2).'")


class MedicationRiskResult(BaseModel):
    """Risk assessment for a single medication."""
    level: RiskLevel
    summary: str
    detail: str = ""
    reasons: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    findings: List[ThresholdFinding] = Field(default_factory=list, description="Structured view of reasons")


class DetectedInteraction(BaseModel):
    """An interaction rule that fired for the supplied medication list."""
    rule_id: str
    label: str
    severity: InteractionSeverity
    summary: str
    details: str
    medications_involved: List[MedicationIdentity] = Field(default_factory=list)
    monitoring: List[str] = Field(default_factory=list)


class ContraindicationHit(BaseModel):
    """A patient condition matched against a medication's contraindication."""
    medication_id: str
    generic_name: str
    condition: str = Field(..., description="Contraindication condition key from the rule")
    patient_condition: str = Field(..., description="Patient's condition text that matched")
    description: str
    severity: ContraindicationSeverity


class DoseRangeCheck(BaseModel):
    """Daily dose compared with the rule's usual adult range."""
    status: DoseStatus
    dose_mg_per_day: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    note: Optional[str] = None
