"""
Interaction Engine - detects drug-drug interactions across a patient's active
medication list.

Every interaction rule has two agent slots (A and B). A rule fires when at
least one medication matches each slot and the union of matches covers at
least two distinct medications. Results keep catalog order and are not
merged across rules: two rules covering the same pair give two records.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .catalog import RuleCatalog, get_catalog
from .models import (
    AgentMatcher,
    DetectedInteraction,
    InteractionSeverity,
    MedicationIdentity,
)

logger = logging.getLogger(__name__)


NO_INTERACTIONS_MESSAGE = (
    "I didn't find any clinically significant medication interactions in your current list."
)


class InteractionEngine:
    """Evaluates all interaction rules in a catalog against a medication list."""

    def __init__(self, catalog: Optional[RuleCatalog] = None):
        self._catalog = catalog

    @property
    def catalog(self) -> RuleCatalog:
        return self._catalog if self._catalog is not None else get_catalog()

    @staticmethod
    def medication_matches_agent(
        medication: MedicationIdentity,
        agent: AgentMatcher,
        catalog: RuleCatalog,
    ) -> bool:
        """Match by explicit generic name, else by the medication's own drug classes."""
        generic = (medication.generic_name or "").lower()

        if agent.generic_name and generic == agent.generic_name.lower():
            return True

        if agent.medication_class is not None:
            return agent.medication_class in catalog.classes_for(generic)

        return False

    def evaluate_interactions(
        self,
        medications: Sequence[MedicationIdentity],
    ) -> List[DetectedInteraction]:
        """Evaluate every interaction rule against the active medications."""
        results: List[DetectedInteraction] = []

        if not medications or len(medications) < 2:
            return results

        catalog = self.catalog

        for rule in catalog.interaction_rules:
            agent_a, agent_b = rule.agents

            group_a = [m for m in medications if self.medication_matches_agent(m, agent_a, catalog)]
            group_b = [m for m in medications if self.medication_matches_agent(m, agent_b, catalog)]

            if not group_a or not group_b:
                continue

            # Unique by id; a repeated id keeps its first position
            involved: Dict[str, MedicationIdentity] = {}
            for medication in group_a + group_b:
                involved[medication.id] = medication

            if len(involved) < 2:
                continue

            results.append(DetectedInteraction(
                rule_id=rule.id,
                label=rule.label,
                severity=rule.severity,
                summary=rule.summary,
                details=rule.details,
                medications_involved=list(involved.values()),
                monitoring=list(rule.monitoring),
            ))

        if results:
            logger.info(
                "Detected %d interaction(s) across %d medications: %s",
                len(results), len(medications), ", ".join(r.rule_id for r in results),
            )

        return results


def create_interaction_engine(catalog: Optional[RuleCatalog] = None) -> InteractionEngine:
    """Factory function to create an InteractionEngine."""
    return InteractionEngine(catalog=catalog)


def evaluate_interactions(medications: Sequence[MedicationIdentity]) -> List[DetectedInteraction]:
    """Convenience function using the process-wide catalog."""
    return InteractionEngine().evaluate_interactions(medications)


# ============================================================================
# Aggregation helpers
# ============================================================================

def highest_interaction_severity(
    interactions: Sequence[DetectedInteraction],
) -> Optional[InteractionSeverity]:
    """Most severe interaction in the list, or None when the list is empty."""
    if not interactions:
        return None
    return max((i.severity for i in interactions), key=lambda s: s.rank)


def safety_event_level(interactions: Sequence[DetectedInteraction]) -> str:
    """Timeline event level: any major -> high, any moderate -> moderate, else low."""
    if any(i.severity == InteractionSeverity.MAJOR for i in interactions):
        return "high"
    if any(i.severity == InteractionSeverity.MODERATE for i in interactions):
        return "moderate"
    return "low"


def build_interaction_alert(interactions: Sequence[DetectedInteraction]) -> Optional[str]:
    """Bullet-list alert text for detected interactions; None when there are none."""
    if not interactions:
        return None
    lines = "\n".join(f"• {i.summary} (severity: {i.severity.value})" for i in interactions)
    return f"⚠ Medication interaction detected:\n\n{lines}"
