"""
Contraindication matching.

Patient conditions are free text, so matching is deliberately loose: after
trimming and lower-casing, a condition matches a rule key when either string
contains the other. This tolerates entries like "Pregnancy (2nd trimester)"
but also produces false positives such as "diabetes" against
"gestational diabetes", and a blank condition matches every key.
"""

from typing import Iterable, List, Optional

from .catalog import RuleCatalog, get_catalog
from .config import get_config
from .models import ContraindicationHit, MedicationIdentity


def normalize_condition(text: Optional[str]) -> str:
    return (text or "").strip().lower()


def condition_matches(patient_condition: str, rule_condition: str) -> bool:
    """Bidirectional substring match between a patient condition and a rule key."""
    patient = normalize_condition(patient_condition)
    rule = normalize_condition(rule_condition)

    if not patient and not get_config().blank_conditions_match:
        return False

    return patient == rule or patient in rule or rule in patient


def check_contraindications(
    medication: MedicationIdentity,
    conditions: Iterable[str],
    catalog: Optional[RuleCatalog] = None,
) -> List[ContraindicationHit]:
    """
    Cross-reference a medication's contraindications against patient conditions.
    One hit per (contraindication, matching condition), in rule order.
    """
    catalog = catalog if catalog is not None else get_catalog()
    rule = catalog.get_medication_rule(medication.generic_name)
    if rule is None:
        return []

    conditions = list(conditions)
    hits: List[ContraindicationHit] = []

    for contraindication in rule.contraindications:
        for condition in conditions:
            if condition_matches(condition, contraindication.condition):
                hits.append(ContraindicationHit(
                    medication_id=medication.id,
                    generic_name=rule.generic_name,
                    condition=contraindication.condition,
                    patient_condition=condition,
                    description=contraindication.description,
                    severity=contraindication.severity,
                ))

    return hits
