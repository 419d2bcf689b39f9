#!/usr/bin/env python3
"""
Medication Safety Service Example

Demonstrates single-medication risk, interaction detection and a full
patient safety review against the built-in rule catalog.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime, timedelta, timezone

from app.services.medication_safety import (
    MedicationIdentity,
    PatientSnapshot,
    VitalSnapshot,
    LabSnapshot,
    MedicationRiskEngine,
    InteractionEngine,
    SafetyReviewer,
)
from app.services.medication_safety.interaction_engine import (
    NO_INTERACTIONS_MESSAGE,
    build_interaction_alert,
)


def example_1_single_medication_risk():
    """Example 1: Lisinopril with low blood pressure"""
    print("=" * 80)
    print("Example 1: Single Medication Risk (Lisinopril)")
    print("=" * 80)

    engine = MedicationRiskEngine()
    medication = MedicationIdentity(id="med-1", name="Zestril", generic_name="lisinopril")

    result = engine.evaluate_risk(
        medication,
        latest_vitals=[VitalSnapshot(type="systolic_bp", value=85, unit="mmHg")],
        latest_labs=[LabSnapshot(type="potassium", value=5.2, unit="mmol/L")],
    )

    print(f"\n  Level: {result.level.value}")
    print(f"  Summary: {result.summary}")
    print(f"  Reasons:")
    for reason in result.reasons:
        print(f"    - {reason}")
    print(f"  Suggestions:")
    for suggestion in result.suggestions:
        print(f"    - {suggestion}")
    print()


def example_2_interactions():
    """Example 2: Interactions across a medication list"""
    print("=" * 80)
    print("Example 2: Drug-Drug Interactions")
    print("=" * 80)

    engine = InteractionEngine()
    medications = [
        MedicationIdentity(id="med-1", name="Zestril", generic_name="lisinopril"),
        MedicationIdentity(id="med-2", name="Advil", generic_name="ibuprofen"),
        MedicationIdentity(id="med-3", name="Zoloft", generic_name="sertraline"),
    ]

    interactions = engine.evaluate_interactions(medications)

    for interaction in interactions:
        involved = ", ".join(m.name for m in interaction.medications_involved)
        print(f"\n  {interaction.label} [{interaction.severity.value}]")
        print(f"    Involved: {involved}")
        print(f"    {interaction.summary}")

    print()
    print(build_interaction_alert(interactions) or NO_INTERACTIONS_MESSAGE)
    print()


def example_3_patient_review():
    """Example 3: Full safety review with historical vitals"""
    print("=" * 80)
    print("Example 3: Patient Safety Review")
    print("=" * 80)

    now = datetime.now(timezone.utc)
    patient = PatientSnapshot(id="PATIENT_001", age=72, sex="female", conditions=("advanced_ckd",))
    medications = [
        MedicationIdentity(id="med-1", name="Eliquis", generic_name="apixaban", dose_mg_per_day=10),
        MedicationIdentity(id="med-2", name="Aleve", generic_name="naproxen", dose_mg_per_day=2000),
    ]
    labs = [
        LabSnapshot(type="hemoglobin", value=12.8, recorded_at=now - timedelta(days=30)),
        LabSnapshot(type="hemoglobin", value=10.4, recorded_at=now - timedelta(days=1)),
    ]

    review = SafetyReviewer().review(patient, medications, labs=labs)

    print(f"\n  Overall level: {review.overall_level.value}")
    for entry in review.medications:
        print(f"\n  {entry.medication.name} ({entry.medication.generic_name}) -> {entry.level.value}")
        print(f"    Dose check: {entry.dose_check.status.value}")
        for reason in entry.risk.reasons:
            print(f"    Reason: {reason}")
        for hit in entry.contraindications:
            print(f"    Contraindication: {hit.condition} ({hit.severity.value})")

    print(f"\n  Interactions: {review.interaction_count} (event level: {review.safety_event_level})")
    print()


def main():
    """Run all examples"""
    print("\n")
    print("╔" + "=" * 78 + "╗")
    print("║" + " " * 22 + "MEDICATION SAFETY SERVICE EXAMPLES" + " " * 22 + "║")
    print("╚" + "=" * 78 + "╝")
    print()

    try:
        example_1_single_medication_risk()
        example_2_interactions()
        example_3_patient_review()

        print("=" * 80)
        print("✅ All examples completed successfully!")
        print("=" * 80)
        print()

    except Exception as e:
        print(f"\n❌ Error: {e}")
        import traceback
        traceback.print_exc()


if __name__ == "__main__":
    main()
