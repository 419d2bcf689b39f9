"""Daily dose check against the usual adult range from the rule catalog."""

from typing import Optional

from .catalog import RuleCatalog, get_catalog
from .models import DoseRangeCheck, DoseStatus, MedicationIdentity


def check_dose_range(
    medication: MedicationIdentity,
    catalog: Optional[RuleCatalog] = None,
) -> DoseRangeCheck:
    """
    Compare dose_mg_per_day with the rule's range.
    UNKNOWN when the dose, the rule, or the range is missing. Bounds are inclusive.
    """
    catalog = catalog if catalog is not None else get_catalog()
    rule = catalog.get_medication_rule(medication.generic_name)
    dose = medication.dose_mg_per_day

    if rule is None or rule.dose_range is None:
        return DoseRangeCheck(status=DoseStatus.UNKNOWN, dose_mg_per_day=dose)

    dose_range = rule.dose_range
    check = dict(
        dose_mg_per_day=dose,
        min=dose_range.min,
        max=dose_range.max,
        note=dose_range.note,
    )

    if dose is None:
        return DoseRangeCheck(status=DoseStatus.UNKNOWN, **check)
    if dose_range.min is not None and dose < dose_range.min:
        return DoseRangeCheck(status=DoseStatus.BELOW, **check)
    if dose_range.max is not None and dose > dose_range.max:
        return DoseRangeCheck(status=DoseStatus.ABOVE, **check)
    return DoseRangeCheck(status=DoseStatus.WITHIN, **check)
