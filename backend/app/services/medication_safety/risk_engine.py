"""
Risk Engine - evaluates the risk of a single medication from the patient's
latest vitals and labs.

Unknown medications fail open: they are reported green with a
"No rule found" summary rather than raising.
"""

import logging
from typing import List, Optional, Sequence

from .catalog import RuleCatalog, get_catalog
from .config import get_config
from .models import (
    FindingKind,
    LabSnapshot,
    MedicationIdentity,
    MedicationRiskResult,
    MedicationRule,
    PatientSnapshot,
    RiskLevel,
    ThresholdFinding,
    VitalSnapshot,
)
from .thresholds import evaluate_thresholds, humanize_type

logger = logging.getLogger(__name__)


def derive_risk_level(findings: Sequence[ThresholdFinding]) -> RiskLevel:
    """
    green: nothing breached; yellow: any breach; red: any danger-bound breach.

    Danger findings are exactly the ones whose message reads "critically ...",
    so this matches the older rule of escalating on that word in the reason text.
    """
    if not findings:
        return RiskLevel.GREEN
    if any(f.kind == FindingKind.DANGER for f in findings):
        return RiskLevel.RED
    return RiskLevel.YELLOW


def build_suggestions(rule: MedicationRule) -> List[str]:
    """Standing monitoring guidance for a medication, shown whether or not anything breached."""
    suggestions: List[str] = []

    for vital in rule.monitoring.vitals:
        suggestions.append(f"Monitor {humanize_type(vital.type_key)} ({vital.rationale})")

    for lab in rule.monitoring.labs:
        suggestions.append(f"Check {lab.type_key.upper()} ({lab.rationale})")

    if rule.notes:
        suggestions.append(rule.notes)

    return suggestions


class MedicationRiskEngine:
    """
    Scores one medication against its catalog rule.

    The engine holds no state beyond the catalog reference; when no catalog is
    given, the process-wide catalog is resolved once per call.
    """

    def __init__(self, catalog: Optional[RuleCatalog] = None):
        self._catalog = catalog

    @property
    def catalog(self) -> RuleCatalog:
        return self._catalog if self._catalog is not None else get_catalog()

    def evaluate_risk(
        self,
        medication: MedicationIdentity,
        patient: Optional[PatientSnapshot] = None,
        latest_vitals: Sequence[VitalSnapshot] = (),
        latest_labs: Sequence[LabSnapshot] = (),
    ) -> MedicationRiskResult:
        """
        Evaluate risk for one medication.

        `patient` is accepted for call-site symmetry; conditions are handled
        by the contraindication checker, not here.
        """
        catalog = self.catalog
        rule = catalog.get_medication_rule(medication.generic_name)

        if rule is None:
            logger.debug("No rule for medication %s (generic=%r)", medication.id, medication.generic_name)
            return MedicationRiskResult(
                level=RiskLevel.GREEN,
                summary=f"No rule found for {medication.name}.",
                detail="",
                reasons=[],
                suggestions=[],
            )

        findings = evaluate_thresholds(rule.monitoring.vitals, latest_vitals)
        findings += evaluate_thresholds(rule.monitoring.labs, latest_labs)

        level = derive_risk_level(findings)

        if get_config().verbose_logging:
            logger.debug(
                "Risk for %s: level=%s findings=%d",
                rule.generic_name, level.value, len(findings),
            )

        return MedicationRiskResult(
            level=level,
            summary=f"Risk assessment for {rule.display_name}.",
            detail=rule.notes or "",
            reasons=[f.message for f in findings],
            suggestions=build_suggestions(rule),
            findings=findings,
        )


def create_risk_engine(catalog: Optional[RuleCatalog] = None) -> MedicationRiskEngine:
    """Factory function to create a MedicationRiskEngine."""
    return MedicationRiskEngine(catalog=catalog)


def evaluate_risk(
    medication: MedicationIdentity,
    patient: Optional[PatientSnapshot] = None,
    latest_vitals: Sequence[VitalSnapshot] = (),
    latest_labs: Sequence[LabSnapshot] = (),
) -> MedicationRiskResult:
    """Convenience function using the process-wide catalog."""
    return MedicationRiskEngine().evaluate_risk(medication, patient, latest_vitals, latest_labs)
