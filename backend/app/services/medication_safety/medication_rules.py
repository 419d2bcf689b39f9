"""
Per-medication rule table.

Each entry lists the vitals and labs worth monitoring on the medication,
the usual adult dose range, condition-based contraindications and drug class
membership. Shared threshold lists are reused across medications of the same
class.
"""

from typing import List

from .models import (
    ContraindicationRule,
    DoseRange,
    DrugClass,
    LabRule,
    LabType,
    MedicationMonitoring,
    MedicationRule,
    VitalRule,
    VitalType,
)


# ============================================================================
# Shared threshold lists
# ============================================================================

BP_VITAL_RULES_FOR_HYPERTENSIVES = (
    VitalRule(
        type=VitalType.SYSTOLIC_BP,
        low_warning=100,
        low_danger=90,
        rationale="Low blood pressure on this medication can increase risk of dizziness, falls, or fainting.",
    ),
    VitalRule(
        type=VitalType.HEART_RATE,
        low_warning=55,
        low_danger=50,
        rationale="Low heart rate on this medication can increase risk of bradycardia and syncope.",
    ),
)

ACEI_LAB_RULES = (
    LabRule(
        type=LabType.POTASSIUM,
        high_warning=5.0,
        high_danger=5.5,
        rationale="Elevated potassium on ACE inhibitor increases risk of cardiac arrhythmia.",
    ),
    LabRule(
        type=LabType.CREATININE,
        high_warning=1.5,
        high_danger=2.0,
        rationale="Rising creatinine on ACE inhibitor may indicate kidney stress or acute kidney injury.",
    ),
)

ARB_LAB_RULES = (
    LabRule(
        type=LabType.POTASSIUM,
        high_warning=5.0,
        high_danger=5.5,
        rationale="Elevated potassium on ARB increases risk of cardiac arrhythmia.",
    ),
    LabRule(
        type=LabType.CREATININE,
        high_warning=1.5,
        high_danger=2.0,
        rationale="Rising creatinine on ARB may indicate kidney stress or acute kidney injury.",
    ),
)

NSAID_LAB_RULES = (
    LabRule(
        type=LabType.CREATININE,
        high_warning=1.3,
        high_danger=1.8,
        rationale="Rising creatinine on NSAID may indicate kidney injury, especially in CKD or volume depletion.",
    ),
)

ANTICOAGULANT_LAB_RULES = (
    LabRule(
        type=LabType.INR,
        high_warning=3.0,
        high_danger=4.0,
        rationale="Elevated INR on anticoagulant increases risk of bleeding.",
    ),
    LabRule(
        type=LabType.HEMOGLOBIN,
        low_warning=11.0,
        low_danger=9.0,
        rationale="Dropping hemoglobin on anticoagulant may signal occult bleeding.",
    ),
)

ANTIPLATELET_LAB_RULES = (
    LabRule(
        type=LabType.PLATELETS,
        low_warning=150,
        low_danger=100,
        rationale="Low platelet count on antiplatelet therapy raises bleeding risk.",
    ),
    LabRule(
        type=LabType.HEMOGLOBIN,
        low_warning=11.0,
        low_danger=9.0,
        rationale="Dropping hemoglobin on antiplatelet therapy may signal GI bleeding.",
    ),
)

SSRI_LAB_RULES = (
    LabRule(
        type=LabType.SODIUM,
        low_warning=135,
        low_danger=130,
        rationale="SSRIs can cause hyponatremia, particularly in older adults.",
    ),
)

ACEI_PREGNANCY_CONTRAINDICATION = ContraindicationRule(
    condition="pregnancy",
    description="ACE inhibitors are contraindicated in pregnancy.",
    severity="red",
)

ARB_PREGNANCY_CONTRAINDICATION = ContraindicationRule(
    condition="pregnancy",
    description="ARBs are contraindicated in pregnancy.",
    severity="red",
)

NSAID_CONTRAINDICATIONS = (
    ContraindicationRule(
        condition="advanced_ckd",
        description="NSAIDs can worsen kidney function in advanced chronic kidney disease.",
        severity="yellow",
    ),
    ContraindicationRule(
        condition="history_of_gi_bleed",
        description="NSAIDs increase risk of recurrent GI bleeding.",
        severity="yellow",
    ),
)


# ============================================================================
# Medication rules
# ============================================================================

MEDICATION_RULES: List[MedicationRule] = [
    MedicationRule(
        generic_name="lisinopril",
        display_name="Lisinopril",
        classes=[DrugClass.ACE_INHIBITOR, DrugClass.OTHER],
        dose_range=DoseRange(min=5, max=40, note="Typical dose range; depends on indication and renal function."),
        monitoring=MedicationMonitoring(
            vitals=BP_VITAL_RULES_FOR_HYPERTENSIVES,
            labs=ACEI_LAB_RULES,
        ),
        contraindications=[
            ACEI_PREGNANCY_CONTRAINDICATION,
            ContraindicationRule(
                condition="history_of_angioedema",
                description="History of ACE inhibitor-induced angioedema is a strong contraindication.",
                severity="red",
            ),
        ],
        notes="Monitor BP, renal function, and potassium, especially after dose changes.",
    ),
    MedicationRule(
        generic_name="enalapril",
        display_name="Enalapril",
        classes=[DrugClass.ACE_INHIBITOR],
        dose_range=DoseRange(min=2.5, max=40, note="Usually split into one or two daily doses."),
        monitoring=MedicationMonitoring(
            vitals=BP_VITAL_RULES_FOR_HYPERTENSIVES,
            labs=ACEI_LAB_RULES,
        ),
        contraindications=[
            ACEI_PREGNANCY_CONTRAINDICATION,
            ContraindicationRule(
                condition="history_of_angioedema",
                description="History of ACE inhibitor-induced angioedema is a strong contraindication.",
                severity="red",
            ),
        ],
        notes="Monitor BP, renal function, and potassium, especially after dose changes.",
    ),
    MedicationRule(
        generic_name="losartan",
        display_name="Losartan",
        classes=[DrugClass.ARB],
        dose_range=DoseRange(min=25, max=100),
        monitoring=MedicationMonitoring(
            vitals=BP_VITAL_RULES_FOR_HYPERTENSIVES[:1],
            labs=ARB_LAB_RULES,
        ),
        contraindications=[ARB_PREGNANCY_CONTRAINDICATION],
        notes="Monitor BP, renal function, and potassium after starting or changing dose.",
    ),
    MedicationRule(
        generic_name="metoprolol",
        display_name="Metoprolol",
        classes=[DrugClass.BETA_BLOCKER],
        dose_range=DoseRange(min=25, max=400, note="Dose depends on formulation and indication."),
        monitoring=MedicationMonitoring(vitals=BP_VITAL_RULES_FOR_HYPERTENSIVES),
        notes="Watch for bradycardia and hypotension; taper rather than abrupt stop when possible.",
    ),
    MedicationRule(
        generic_name="ibuprofen",
        display_name="Ibuprofen",
        classes=[DrugClass.NSAID],
        dose_range=DoseRange(max=2400, note="Short-term use recommended at lowest effective dose."),
        monitoring=MedicationMonitoring(labs=NSAID_LAB_RULES),
        contraindications=NSAID_CONTRAINDICATIONS,
        notes="Use cautiously in CKD, heart failure, or with ACEi/ARB + diuretic.",
    ),
    MedicationRule(
        generic_name="naproxen",
        display_name="Naproxen",
        classes=[DrugClass.NSAID],
        dose_range=DoseRange(max=1500, note="Short-term use recommended at lowest effective dose."),
        monitoring=MedicationMonitoring(labs=NSAID_LAB_RULES),
        contraindications=NSAID_CONTRAINDICATIONS,
        notes="Use cautiously in CKD, heart failure, or with ACEi/ARB + diuretic.",
    ),
    MedicationRule(
        generic_name="apixaban",
        display_name="Apixaban",
        classes=[DrugClass.ANTICOAGULANT],
        dose_range=DoseRange(min=5, max=20),
        monitoring=MedicationMonitoring(labs=ANTICOAGULANT_LAB_RULES),
        contraindications=[
            ContraindicationRule(
                condition="active_bleeding",
                description="Active bleeding is a strong contraindication to anticoagulant therapy.",
                severity="red",
            ),
            ContraindicationRule(
                condition="severe_hepatic_impairment",
                description="Severe liver disease may increase exposure and bleeding risk.",
                severity="yellow",
            ),
        ],
        notes="Assess bleeding risk regularly and review for drug-drug interactions.",
    ),
    MedicationRule(
        generic_name="warfarin",
        display_name="Warfarin",
        classes=[DrugClass.ANTICOAGULANT],
        dose_range=DoseRange(min=1, max=10, note="Dose is titrated to INR target."),
        monitoring=MedicationMonitoring(labs=ANTICOAGULANT_LAB_RULES),
        contraindications=[
            ContraindicationRule(
                condition="active_bleeding",
                description="Active bleeding is a strong contraindication to anticoagulant therapy.",
                severity="red",
            ),
            ContraindicationRule(
                condition="pregnancy",
                description="Warfarin crosses the placenta and is generally avoided in pregnancy.",
                severity="red",
            ),
        ],
        notes="Keep INR checks on schedule; diet and new medications change warfarin effect.",
    ),
    MedicationRule(
        generic_name="aspirin",
        display_name="Aspirin",
        classes=[DrugClass.ANTIPLATELET],
        dose_range=DoseRange(min=75, max=325, note="Antiplatelet dosing; analgesic doses are higher."),
        monitoring=MedicationMonitoring(labs=ANTIPLATELET_LAB_RULES),
        contraindications=[
            ContraindicationRule(
                condition="history_of_gi_bleed",
                description="Aspirin increases risk of recurrent GI bleeding.",
                severity="yellow",
            ),
        ],
        notes="Take with food; report black stools or unusual bruising.",
    ),
    MedicationRule(
        generic_name="clopidogrel",
        display_name="Clopidogrel",
        classes=[DrugClass.ANTIPLATELET],
        dose_range=DoseRange(min=75, max=75),
        monitoring=MedicationMonitoring(labs=ANTIPLATELET_LAB_RULES),
        contraindications=[
            ContraindicationRule(
                condition="active_bleeding",
                description="Active bleeding is a contraindication to antiplatelet therapy.",
                severity="red",
            ),
        ],
        notes="Do not stop before procedures without talking to the prescribing clinician.",
    ),
    MedicationRule(
        generic_name="sertraline",
        display_name="Sertraline",
        classes=[DrugClass.SSRI],
        notes="Monitor for mood changes, GI side effects, sexual side effects; consider sodium in older "
              "adults or those at risk of hyponatremia.",
    ),
    MedicationRule(
        generic_name="fluoxetine",
        display_name="Fluoxetine",
        classes=[DrugClass.SSRI],
        dose_range=DoseRange(min=10, max=80),
        monitoring=MedicationMonitoring(labs=SSRI_LAB_RULES),
        notes="Long half-life; effects and interactions persist for weeks after stopping.",
    ),
]
