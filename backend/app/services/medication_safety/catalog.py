"""
Rule Catalog - immutable registry of medication and interaction rules.

The catalog is built once per process from the built-in rule tables (or a
JSON override file) and is never edited in place. Reloading builds a new
catalog and swaps the module-level reference, so an evaluation that already
holds a catalog keeps seeing a consistent rule set.
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from .config import get_config
from .models import DrugClass, InteractionRule, MedicationRule, ThresholdRule

logger = logging.getLogger(__name__)


class CatalogValidationError(ValueError):
    """Raised when a catalog violates its authoring invariants."""

    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__("Invalid rule catalog: " + "; ".join(problems))


def _threshold_problems(owner: str, rule: ThresholdRule) -> List[str]:
    problems = []
    if rule.low_danger is not None and rule.low_warning is not None:
        if not rule.low_danger < rule.low_warning:
            problems.append(
                f"{owner}: {rule.type_key} low_danger ({rule.low_danger}) must be below "
                f"low_warning ({rule.low_warning})"
            )
    if rule.high_danger is not None and rule.high_warning is not None:
        if not rule.high_danger > rule.high_warning:
            problems.append(
                f"{owner}: {rule.type_key} high_danger ({rule.high_danger}) must be above "
                f"high_warning ({rule.high_warning})"
            )
    return problems


class RuleCatalog:
    """
    Read-only lookup over medication rules (by lower-cased generic name)
    and interaction rules (in authoring order).
    """

    def __init__(
        self,
        medication_rules: Iterable[MedicationRule],
        interaction_rules: Iterable[InteractionRule],
        source: str = "built-in",
    ):
        self._medication_rules: Tuple[MedicationRule, ...] = tuple(medication_rules)
        self._interaction_rules: Tuple[InteractionRule, ...] = tuple(interaction_rules)
        self.source = source

        by_generic = {}
        for rule in self._medication_rules:
            by_generic[rule.generic_name.lower()] = rule
        self._by_generic: Mapping[str, MedicationRule] = MappingProxyType(by_generic)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def builtin(cls) -> "RuleCatalog":
        """Catalog built from the rule tables shipped with the package."""
        from .interaction_rules import INTERACTION_RULES
        from .medication_rules import MEDICATION_RULES

        return cls(MEDICATION_RULES, INTERACTION_RULES, source="built-in")

    @classmethod
    def from_dict(cls, data: dict, source: str = "dict") -> "RuleCatalog":
        medications = [MedicationRule.model_validate(m) for m in data.get("medications", [])]
        interactions = [InteractionRule.model_validate(i) for i in data.get("interactions", [])]
        return cls(medications, interactions, source=source)

    @classmethod
    def from_file(cls, filepath) -> "RuleCatalog":
        """Load a catalog from a JSON file with `medications` and `interactions` lists."""
        path = Path(filepath)
        with open(path, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data, source=str(path))

    def to_dict(self) -> dict:
        return {
            "medications": [r.model_dump(mode="json") for r in self._medication_rules],
            "interactions": [r.model_dump(mode="json") for r in self._interaction_rules],
        }

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    @property
    def medication_rules(self) -> Tuple[MedicationRule, ...]:
        return self._medication_rules

    @property
    def interaction_rules(self) -> Tuple[InteractionRule, ...]:
        return self._interaction_rules

    def get_medication_rule(self, generic_name: Optional[str]) -> Optional[MedicationRule]:
        """Rule for a generic name (case-insensitive), or None."""
        if not generic_name:
            return None
        return self._by_generic.get(generic_name.lower())

    def classes_for(self, generic_name: Optional[str]) -> Tuple[DrugClass, ...]:
        """Drug classes of a medication; empty when it has no rule."""
        rule = self.get_medication_rule(generic_name)
        return rule.classes if rule else ()

    def __len__(self) -> int:
        return len(self._medication_rules)

    def __contains__(self, generic_name) -> bool:
        return self.get_medication_rule(generic_name) is not None

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def find_problems(self) -> List[str]:
        """List every authoring-invariant violation in the catalog."""
        problems: List[str] = []

        seen_generics = set()
        for rule in self._medication_rules:
            key = rule.generic_name.lower()
            if key in seen_generics:
                problems.append(f"duplicate medication rule for '{key}'")
            seen_generics.add(key)

            for threshold in (*rule.monitoring.vitals, *rule.monitoring.labs):
                problems.extend(_threshold_problems(key, threshold))

            dose = rule.dose_range
            if dose and dose.min is not None and dose.max is not None and dose.min > dose.max:
                problems.append(f"{key}: dose_range min ({dose.min}) exceeds max ({dose.max})")

        seen_ids = set()
        for interaction in self._interaction_rules:
            if interaction.id in seen_ids:
                problems.append(f"duplicate interaction rule id '{interaction.id}'")
            seen_ids.add(interaction.id)

        return problems

    def validate(self) -> "RuleCatalog":
        problems = self.find_problems()
        if problems:
            raise CatalogValidationError(problems)
        return self


def load_catalog(path: Optional[str] = None) -> RuleCatalog:
    """Build a catalog from `path`, the configured override file, or the built-in tables."""
    config = get_config()
    path = path or config.catalog_path

    if path:
        catalog = RuleCatalog.from_file(path)
    else:
        catalog = RuleCatalog.builtin()

    if config.validate_catalog_on_load:
        catalog.validate()

    logger.info(
        "Loaded rule catalog from %s (%d medications, %d interaction rules)",
        catalog.source, len(catalog.medication_rules), len(catalog.interaction_rules),
    )
    return catalog


# Global catalog instance
_catalog_instance: Optional[RuleCatalog] = None


def get_catalog() -> RuleCatalog:
    """Get the process-wide rule catalog, loading it on first use."""
    global _catalog_instance
    if _catalog_instance is None:
        _catalog_instance = load_catalog()
    return _catalog_instance


def reload_catalog(path: Optional[str] = None) -> RuleCatalog:
    """
    Build a fresh catalog and swap it in.
    The previous catalog stays intact for evaluations already holding it;
    if loading fails the current catalog is kept.
    """
    global _catalog_instance
    new_catalog = load_catalog(path)
    _catalog_instance = new_catalog
    return new_catalog
