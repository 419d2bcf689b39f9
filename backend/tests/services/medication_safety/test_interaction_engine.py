"""
Unit tests for the drug-drug interaction engine.
Tests agent matching, de-duplication, rule ordering and alert aggregation.
"""

import pytest
from app.services.medication_safety.catalog import RuleCatalog
from app.services.medication_safety.interaction_engine import (
    NO_INTERACTIONS_MESSAGE,
    InteractionEngine,
    build_interaction_alert,
    create_interaction_engine,
    evaluate_interactions,
    highest_interaction_severity,
    safety_event_level,
)
from app.services.medication_safety.models import (
    AgentMatcher,
    DetectedInteraction,
    DrugClass,
    InteractionRule,
    InteractionSeverity,
    MedicationIdentity,
    MedicationRule,
)


def med(id_, generic, name=None):
    return MedicationIdentity(id=id_, name=name or generic.title(), generic_name=generic)


LISINOPRIL = med("m1", "lisinopril")
IBUPROFEN = med("m2", "ibuprofen")
NAPROXEN = med("m3", "naproxen")
SERTRALINE = med("m4", "sertraline")
APIXABAN = med("m5", "apixaban")
ASPIRIN = med("m6", "aspirin")
METOPROLOL = med("m7", "metoprolol")


class TestInteractionEngine:
    """Test InteractionEngine against the built-in catalog."""

    @pytest.fixture
    def engine(self):
        """Create an InteractionEngine bound to the built-in catalog."""
        return create_interaction_engine(RuleCatalog.builtin())

    # ===== Preconditions =====

    def test_empty_list(self, engine):
        assert engine.evaluate_interactions([]) == []

    def test_single_medication(self, engine):
        assert engine.evaluate_interactions([SERTRALINE]) == []

    def test_unrelated_medications(self, engine):
        assert engine.evaluate_interactions([LISINOPRIL, METOPROLOL]) == []

    def test_unknown_medications(self, engine):
        meds = [med("a", "unobtainium"), med("b", "placebo")]
        assert engine.evaluate_interactions(meds) == []

    # ===== Class-based rules =====

    def test_acei_nsaid(self, engine):
        """Lisinopril + ibuprofen -> exactly acei_nsaid_kidney"""
        results = engine.evaluate_interactions([LISINOPRIL, IBUPROFEN])

        assert [r.rule_id for r in results] == ["acei_nsaid_kidney"]
        interaction = results[0]
        assert interaction.severity == InteractionSeverity.MAJOR
        assert [m.id for m in interaction.medications_involved] == ["m1", "m2"]
        assert "Serum potassium" in interaction.monitoring

    def test_argument_order_does_not_change_rules(self, engine):
        forward = engine.evaluate_interactions([LISINOPRIL, IBUPROFEN])
        backward = engine.evaluate_interactions([IBUPROFEN, LISINOPRIL])

        assert [r.rule_id for r in forward] == [r.rule_id for r in backward]

    def test_involved_medications_group_a_first(self, engine):
        """Slot A matches are listed before slot B matches"""
        results = engine.evaluate_interactions([IBUPROFEN, LISINOPRIL])
        assert [m.id for m in results[0].medications_involved] == ["m1", "m2"]

    def test_all_class_members_are_involved(self, engine):
        results = engine.evaluate_interactions([LISINOPRIL, IBUPROFEN, NAPROXEN])

        assert len(results) == 1
        assert [m.id for m in results[0].medications_involved] == ["m1", "m2", "m3"]

    def test_results_follow_catalog_order(self, engine):
        results = engine.evaluate_interactions([SERTRALINE, IBUPROFEN, APIXABAN, ASPIRIN])

        assert [r.rule_id for r in results] == [
            "anticoagulant_nsaid_bleeding",
            "anticoagulant_antiplatelet_bleeding",
            "ssri_nsaid_gi_bleed",
        ]

    def test_non_involved_medications_are_excluded(self, engine):
        results = engine.evaluate_interactions([LISINOPRIL, METOPROLOL, IBUPROFEN])
        assert [m.id for m in results[0].medications_involved] == ["m1", "m2"]

    # ===== Name-based rules =====

    def test_name_based_agent(self, engine):
        """Tramadol has no medication rule but is named by an interaction rule"""
        tramadol = med("m9", "Tramadol", name="Ultram")
        results = engine.evaluate_interactions([SERTRALINE, tramadol])

        assert [r.rule_id for r in results] == ["ssri_tramadol_serotonin"]
        assert results[0].severity == InteractionSeverity.MAJOR

    def test_matches_agent_by_name_or_class(self):
        catalog = RuleCatalog.builtin()
        match = InteractionEngine.medication_matches_agent

        assert match(IBUPROFEN, AgentMatcher(generic_name="IBUPROFEN"), catalog)
        assert match(IBUPROFEN, AgentMatcher(medication_class=DrugClass.NSAID), catalog)
        assert not match(IBUPROFEN, AgentMatcher(medication_class=DrugClass.SSRI), catalog)
        assert not match(med("z", "unknownium"), AgentMatcher(medication_class=DrugClass.NSAID), catalog)

    # ===== Invariants =====

    def test_input_list_is_not_modified(self, engine):
        meds = [IBUPROFEN, LISINOPRIL]
        engine.evaluate_interactions(meds)
        assert meds == [IBUPROFEN, LISINOPRIL]

    def test_every_result_involves_two_distinct_medications(self, engine):
        meds = [LISINOPRIL, IBUPROFEN, NAPROXEN, SERTRALINE, APIXABAN, ASPIRIN, METOPROLOL]
        results = engine.evaluate_interactions(meds)

        assert results
        for interaction in results:
            ids = [m.id for m in interaction.medications_involved]
            assert len(ids) >= 2
            assert len(ids) == len(set(ids))

    def test_evaluation_is_idempotent(self, engine):
        meds = [SERTRALINE, IBUPROFEN, APIXABAN, ASPIRIN]

        first = engine.evaluate_interactions(meds)
        second = engine.evaluate_interactions(meds)

        assert len(first) == 3
        assert [r.model_dump() for r in first] == [r.model_dump() for r in second]

    def test_module_level_function(self):
        assert [r.rule_id for r in evaluate_interactions([LISINOPRIL, IBUPROFEN])] == ["acei_nsaid_kidney"]


class TestCustomCatalog:
    """Edge cases that need a purpose-built catalog."""

    @pytest.fixture
    def catalog(self):
        rules = [
            MedicationRule(
                generic_name="combopril",
                display_name="Combopril",
                classes=[DrugClass.ACE_INHIBITOR, DrugClass.NSAID],
            ),
            MedicationRule(generic_name="ibuprofen", display_name="Ibuprofen", classes=[DrugClass.NSAID]),
            MedicationRule(generic_name="lisinopril", display_name="Lisinopril", classes=[DrugClass.ACE_INHIBITOR]),
            MedicationRule(generic_name="metoprolol", display_name="Metoprolol", classes=[DrugClass.BETA_BLOCKER]),
        ]
        interactions = [
            InteractionRule(
                id="acei_nsaid",
                label="ACE inhibitor + NSAID",
                severity="major",
                agents=[{"medication_class": "ACE_INHIBITOR"}, {"medication_class": "NSAID"}],
                summary="Kidney risk.",
                details="",
            ),
            InteractionRule(
                id="lisinopril_ibuprofen",
                label="Lisinopril + Ibuprofen",
                severity="moderate",
                agents=[{"generic_name": "lisinopril"}, {"generic_name": "ibuprofen"}],
                summary="Named pair.",
                details="",
            ),
        ]
        return RuleCatalog(rules, interactions, source="test")

    @pytest.fixture
    def engine(self, catalog):
        return InteractionEngine(catalog)

    def test_single_medication_in_both_classes_is_suppressed(self, engine):
        """One medication matching both slots does not interact with itself"""
        results = engine.evaluate_interactions([
            MedicationIdentity(id="c", name="Combopril", generic_name="combopril"),
            MedicationIdentity(id="b", name="Metoprolol", generic_name="metoprolol"),
        ])
        assert results == []

    def test_dual_class_medication_with_partner(self, engine):
        results = engine.evaluate_interactions([
            MedicationIdentity(id="c", name="Combopril", generic_name="combopril"),
            MedicationIdentity(id="i", name="Advil", generic_name="ibuprofen"),
        ])

        assert [r.rule_id for r in results] == ["acei_nsaid"]
        assert [m.id for m in results[0].medications_involved] == ["c", "i"]

    def test_overlapping_rules_are_not_merged(self, engine):
        results = engine.evaluate_interactions([
            MedicationIdentity(id="l", name="Lisinopril", generic_name="lisinopril"),
            MedicationIdentity(id="i", name="Advil", generic_name="ibuprofen"),
        ])
        assert [r.rule_id for r in results] == ["acei_nsaid", "lisinopril_ibuprofen"]

    def test_same_medication_twice_with_distinct_ids(self, engine):
        results = engine.evaluate_interactions([
            MedicationIdentity(id="c1", name="Combopril", generic_name="combopril"),
            MedicationIdentity(id="c2", name="Combopril", generic_name="combopril"),
        ])

        assert [r.rule_id for r in results] == ["acei_nsaid"]
        assert [m.id for m in results[0].medications_involved] == ["c1", "c2"]

    def test_duplicate_ids_count_once(self, engine):
        results = engine.evaluate_interactions([
            MedicationIdentity(id="same", name="Lisinopril", generic_name="lisinopril"),
            MedicationIdentity(id="same", name="Advil", generic_name="ibuprofen"),
        ])
        assert results == []


class TestAggregation:

    def _interaction(self, severity, summary="Something."):
        return DetectedInteraction(
            rule_id=f"rule_{severity}", label="x", severity=severity, summary=summary, details="",
        )

    def test_highest_severity(self):
        interactions = [self._interaction("minor"), self._interaction("major"), self._interaction("moderate")]
        assert highest_interaction_severity(interactions) == InteractionSeverity.MAJOR
        assert highest_interaction_severity([]) is None

    @pytest.mark.parametrize("severities,expected", [
        (["major", "minor"], "high"),
        (["moderate", "minor"], "moderate"),
        (["minor"], "low"),
        ([], "low"),
    ])
    def test_safety_event_level(self, severities, expected):
        interactions = [self._interaction(s) for s in severities]
        assert safety_event_level(interactions) == expected

    def test_alert_text(self):
        interactions = [
            self._interaction("major", "Kidney risk."),
            self._interaction("moderate", "Bleeding risk."),
        ]
        assert build_interaction_alert(interactions) == (
            "⚠ Medication interaction detected:\n\n"
            "• Kidney risk. (severity: major)\n"
            "• Bleeding risk. (severity: moderate)"
        )

    def test_no_alert_when_empty(self):
        assert build_interaction_alert([]) is None
        assert "didn't find any clinically significant" in NO_INTERACTIONS_MESSAGE
