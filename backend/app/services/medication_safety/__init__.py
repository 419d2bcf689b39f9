"""
Medication Safety Service

Deterministic, rule-based evaluation of single-medication risk (from vitals
and labs) and of drug-drug interactions across a patient's medication list.
"""

from .models import (
    MedicationIdentity,
    PatientSnapshot,
    VitalSnapshot,
    LabSnapshot,
    VitalRule,
    LabRule,
    MedicationRule,
    InteractionRule,
    AgentMatcher,
    DrugClass,
    RiskLevel,
    InteractionSeverity,
    ThresholdFinding,
    MedicationRiskResult,
    DetectedInteraction,
    ContraindicationHit,
    DoseRangeCheck,
)
from .catalog import (
    RuleCatalog,
    CatalogValidationError,
    get_catalog,
    reload_catalog,
)
from .thresholds import evaluate_thresholds, threshold_reasons
from .risk_engine import MedicationRiskEngine, create_risk_engine, evaluate_risk
from .interaction_engine import InteractionEngine, create_interaction_engine, evaluate_interactions
from .contraindications import condition_matches, check_contraindications
from .dose_range import check_dose_range
from .safety_review import SafetyReviewer, PatientSafetyReview, review_patient
from .config import get_config, update_config

__all__ = [
    # Models
    'MedicationIdentity',
    'PatientSnapshot',
    'VitalSnapshot',
    'LabSnapshot',
    'VitalRule',
    'LabRule',
    'MedicationRule',
    'InteractionRule',
    'AgentMatcher',
    'DrugClass',
    'RiskLevel',
    'InteractionSeverity',
    'ThresholdFinding',
    'MedicationRiskResult',
    'DetectedInteraction',
    'ContraindicationHit',
    'DoseRangeCheck',

    # Catalog
    'RuleCatalog',
    'CatalogValidationError',
    'get_catalog',
    'reload_catalog',

    # Evaluators
    'evaluate_thresholds',
    'threshold_reasons',
    'MedicationRiskEngine',
    'create_risk_engine',
    'evaluate_risk',
    'InteractionEngine',
    'create_interaction_engine',
    'evaluate_interactions',
    'condition_matches',
    'check_contraindications',
    'check_dose_range',
    'SafetyReviewer',
    'PatientSafetyReview',
    'review_patient',

    # Config
    'get_config',
    'update_config',
]
