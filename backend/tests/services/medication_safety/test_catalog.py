"""
Unit tests for the rule catalog: lookups, validation, file loading and reload.
"""

import json

import pytest
from pydantic import ValidationError

from app.services.medication_safety import catalog as catalog_module
from app.services.medication_safety.catalog import (
    CatalogValidationError,
    RuleCatalog,
    get_catalog,
    load_catalog,
    reload_catalog,
)
from app.services.medication_safety.config import update_config
from app.services.medication_safety.models import (
    AgentMatcher,
    DrugClass,
    InteractionRule,
    MedicationRule,
)


def bad_catalog_dict():
    return {
        "medications": [
            {
                "generic_name": "inverted",
                "display_name": "Inverted",
                "monitoring": {
                    "vitals": [{"type": "systolic_bp", "low_warning": 90, "low_danger": 100, "rationale": "x"}],
                    "labs": [{"type": "potassium", "high_warning": 5.5, "high_danger": 5.0, "rationale": "x"}],
                },
                "dose_range": {"min": 50, "max": 10},
            },
            {"generic_name": "Inverted", "display_name": "Duplicate"},
        ],
        "interactions": [],
    }


class TestRuleCatalog:

    @pytest.fixture
    def catalog(self):
        return RuleCatalog.builtin()

    def test_builtin_is_valid(self, catalog):
        assert catalog.find_problems() == []
        assert catalog.validate() is catalog

    def test_lookup_is_case_insensitive(self, catalog):
        assert catalog.get_medication_rule("LiSiNoPrIl").display_name == "Lisinopril"
        assert "Ibuprofen" in catalog
        assert "tramadol" not in catalog

    def test_lookup_of_empty_name(self, catalog):
        assert catalog.get_medication_rule("") is None
        assert catalog.get_medication_rule(None) is None

    def test_classes_for(self, catalog):
        assert DrugClass.ACE_INHIBITOR in catalog.classes_for("lisinopril")
        assert catalog.classes_for("unknownium") == ()

    def test_interaction_order(self, catalog):
        ids = [r.id for r in catalog.interaction_rules]
        assert ids[0] == "acei_nsaid_kidney"
        assert ids[-1] == "ssri_tramadol_serotonin"

    def test_catalog_is_read_only(self, catalog):
        with pytest.raises(TypeError):
            catalog._by_generic["newdrug"] = None

        rule = catalog.get_medication_rule("lisinopril")
        with pytest.raises(ValidationError):
            rule.display_name = "Changed"

        assert isinstance(catalog.medication_rules, tuple)

    def test_empty_catalog(self):
        empty = RuleCatalog([], [])
        assert len(empty) == 0
        assert empty.get_medication_rule("lisinopril") is None


class TestValidation:

    def test_problems_are_reported(self):
        catalog = RuleCatalog.from_dict(bad_catalog_dict())
        problems = catalog.find_problems()

        assert len(problems) == 4
        assert any("low_danger" in p for p in problems)
        assert any("high_danger" in p for p in problems)
        assert any("dose_range" in p for p in problems)
        assert any("duplicate medication rule" in p for p in problems)

    def test_validate_raises(self):
        catalog = RuleCatalog.from_dict(bad_catalog_dict())
        with pytest.raises(CatalogValidationError) as exc_info:
            catalog.validate()
        assert len(exc_info.value.problems) == 4

    def test_duplicate_interaction_ids(self):
        rule = InteractionRule(
            id="dup", label="x", severity="minor",
            agents=(AgentMatcher(generic_name="a"), AgentMatcher(generic_name="b")),
            summary="x", details="x",
        )
        problems = RuleCatalog([], [rule, rule]).find_problems()
        assert problems == ["duplicate interaction rule id 'dup'"]

    def test_agent_requires_a_selector(self):
        with pytest.raises(ValidationError):
            AgentMatcher()

    def test_interaction_needs_exactly_two_agents(self):
        with pytest.raises(ValidationError):
            InteractionRule(
                id="three", label="x", severity="minor",
                agents=[{"generic_name": "a"}, {"generic_name": "b"}, {"generic_name": "c"}],
                summary="x", details="x",
            )


class TestLoadingAndReload:

    def test_from_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(RuleCatalog.builtin().to_dict()))

        catalog = RuleCatalog.from_file(path)

        assert catalog.source == str(path)
        assert len(catalog) == len(RuleCatalog.builtin())
        assert catalog.get_medication_rule("lisinopril").model_dump() == (
            RuleCatalog.builtin().get_medication_rule("lisinopril").model_dump()
        )

    def test_load_validates_by_default(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(bad_catalog_dict()))

        with pytest.raises(CatalogValidationError):
            load_catalog(str(path))

    def test_load_without_validation(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(bad_catalog_dict()))
        update_config(validate_catalog_on_load=False)

        catalog = load_catalog(str(path))
        assert "inverted" in catalog

    def test_configured_catalog_path(self, tmp_path):
        path = tmp_path / "small.json"
        path.write_text(json.dumps({
            "medications": [{"generic_name": "onlyone", "display_name": "Only One"}],
        }))
        update_config(catalog_path=str(path))

        catalog = get_catalog()
        assert len(catalog) == 1
        assert catalog.interaction_rules == ()

    def test_get_catalog_is_cached(self):
        assert get_catalog() is get_catalog()

    def test_reload_swaps_reference(self, tmp_path):
        before = get_catalog()
        path = tmp_path / "small.json"
        path.write_text(json.dumps({"medications": [{"generic_name": "onlyone", "display_name": "Only One"}]}))

        after = reload_catalog(str(path))

        assert get_catalog() is after
        assert after is not before
        # The previous catalog is untouched for anyone still holding it
        assert "lisinopril" in before
        assert "lisinopril" not in after

    def test_failed_reload_keeps_current(self, tmp_path):
        before = get_catalog()
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(bad_catalog_dict()))

        with pytest.raises(CatalogValidationError):
            reload_catalog(str(path))

        assert catalog_module.get_catalog() is before

    def test_from_dict_model_types(self):
        catalog = RuleCatalog.from_dict({
            "medications": [{"generic_name": "x", "display_name": "X", "classes": ["NSAID"]}],
        })
        assert isinstance(catalog.medication_rules[0], MedicationRule)
        assert catalog.classes_for("x") == (DrugClass.NSAID,)
