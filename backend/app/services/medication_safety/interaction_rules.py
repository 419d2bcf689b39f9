"""
Pairwise interaction rules.

Most rules are class-based so they cover every medication of the class;
a rule may also name a specific generic medication for one of its slots.
Order here is the order interactions are reported in.
"""

from typing import List

from .models import AgentMatcher, DrugClass, InteractionRule, InteractionSeverity


KIDNEY_MONITORING = (
    "Kidney function (creatinine, eGFR)",
    "Serum potassium",
    "Blood pressure",
    "Monitor for decreased urine output or swelling",
)


INTERACTION_RULES: List[InteractionRule] = [
    InteractionRule(
        id="acei_nsaid_kidney",
        label="ACE inhibitor + NSAID",
        severity=InteractionSeverity.MAJOR,
        agents=(
            AgentMatcher(medication_class=DrugClass.ACE_INHIBITOR),
            AgentMatcher(medication_class=DrugClass.NSAID),
        ),
        summary="ACE inhibitor plus NSAID increases risk of kidney injury and high potassium.",
        details=(
            "ACE inhibitors dilate efferent arterioles and NSAIDs constrict afferent arterioles in the "
            "kidney. Together they can significantly reduce glomerular filtration, especially in volume "
            "depletion or CKD."
        ),
        monitoring=KIDNEY_MONITORING,
    ),
    InteractionRule(
        id="arb_nsaid_kidney",
        label="ARB + NSAID",
        severity=InteractionSeverity.MAJOR,
        agents=(
            AgentMatcher(medication_class=DrugClass.ARB),
            AgentMatcher(medication_class=DrugClass.NSAID),
        ),
        summary="ARB plus NSAID increases risk of kidney injury and high potassium.",
        details=(
            "ARB medications and NSAIDs both reduce renal perfusion. In combination they may cause acute "
            "kidney injury, particularly in older adults or those with CKD."
        ),
        monitoring=KIDNEY_MONITORING,
    ),
    InteractionRule(
        id="anticoagulant_nsaid_bleeding",
        label="Anticoagulant + NSAID",
        severity=InteractionSeverity.MAJOR,
        agents=(
            AgentMatcher(medication_class=DrugClass.ANTICOAGULANT),
            AgentMatcher(medication_class=DrugClass.NSAID),
        ),
        summary="Anticoagulant plus NSAID significantly increases bleeding risk.",
        details=(
            "NSAIDs impair platelet function and can cause GI mucosal injury. Combined with anticoagulants "
            "this can markedly raise the risk of GI and other bleeding."
        ),
        monitoring=(
            "Signs of bleeding (bruising, dark stools, nosebleeds)",
            "Hemoglobin / hematocrit as clinically indicated",
            "Avoid additional OTC NSAIDs without medical advice",
        ),
    ),
    InteractionRule(
        id="anticoagulant_antiplatelet_bleeding",
        label="Anticoagulant + Antiplatelet",
        severity=InteractionSeverity.MAJOR,
        agents=(
            AgentMatcher(medication_class=DrugClass.ANTICOAGULANT),
            AgentMatcher(medication_class=DrugClass.ANTIPLATELET),
        ),
        summary="Anticoagulant plus antiplatelet therapy increases major bleeding risk.",
        details=(
            "Dual pathway inhibition of coagulation and platelet aggregation reduces thrombosis risk but "
            "increases the chance of serious bleeding; usually reserved for specific indications and "
            "durations."
        ),
        monitoring=(
            "Bleeding signs (gum bleeding, bruising, dark or bloody stools)",
            "Hemoglobin / hematocrit",
            "Medication review with cardiology / primary team",
        ),
    ),
    InteractionRule(
        id="ssri_nsaid_gi_bleed",
        label="SSRI + NSAID",
        severity=InteractionSeverity.MODERATE,
        agents=(
            AgentMatcher(medication_class=DrugClass.SSRI),
            AgentMatcher(medication_class=DrugClass.NSAID),
        ),
        summary="SSRI plus NSAID increases risk of GI bleeding.",
        details=(
            "SSRIs can impair platelet serotonin uptake and reduce aggregation; NSAIDs injure GI mucosa. "
            "Together they modestly increase upper GI bleed risk, especially in older adults or those "
            "with prior ulcers."
        ),
        monitoring=(
            "Watch for black or bloody stools",
            "Consider gastroprotection if long-term combination is needed",
            "Avoid additional OTC NSAIDs when possible",
        ),
    ),
    InteractionRule(
        id="ssri_tramadol_serotonin",
        label="SSRI + Tramadol",
        severity=InteractionSeverity.MAJOR,
        agents=(
            AgentMatcher(medication_class=DrugClass.SSRI),
            AgentMatcher(generic_name="tramadol"),
        ),
        summary="SSRI plus tramadol raises the risk of serotonin syndrome and seizures.",
        details=(
            "Tramadol inhibits serotonin reuptake in addition to its opioid effect. Combined with an SSRI "
            "serotonergic activity can accumulate, and some SSRIs also block tramadol metabolism."
        ),
        monitoring=(
            "Agitation, tremor, sweating, fever or fast heart rate",
            "Seizure history before adding tramadol",
            "Review pain plan with the prescribing clinician",
        ),
    ),
]
