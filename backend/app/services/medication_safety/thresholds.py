"""
Threshold Evaluator - compares the latest vitals or labs against a rule's
warning/danger bounds and reports each breach as a tagged finding.
"""

import math
from decimal import Decimal
from typing import List, Optional, Sequence

from .models import FindingKind, Measurement, ThresholdFinding, ThresholdRule


def format_value(value: float) -> str:
    """
    Render a measurement with shortest round-trip digits: 85, 5.2, 0.25.

    Notation follows ECMAScript Number-to-String so reason text is stable
    across clients: NaN, Infinity, plain decimals for magnitudes in
    [1e-6, 1e21), exponent form (1e-7, 1.5e+21) outside that range.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = k + exponent  # position of the decimal point

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
        text = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + text


def humanize_type(type_key: str) -> str:
    return type_key.replace("_", " ")


def _first_matching(latest_values: Sequence[Measurement], type_key: str) -> Optional[Measurement]:
    # First match wins; callers order values most relevant first.
    for measurement in latest_values:
        if measurement.type == type_key:
            return measurement
    return None


def _finding(kind: FindingKind, type_key: str, value: float, label: str) -> ThresholdFinding:
    message = f"{humanize_type(type_key)} {label} ({format_value(value)})."
    return ThresholdFinding(kind=kind, type=type_key, value=value, message=message)


def evaluate_thresholds(
    rules: Optional[Sequence[ThresholdRule]],
    latest_values: Sequence[Measurement],
) -> List[ThresholdFinding]:
    """
    Evaluate threshold rules against the latest values.

    For each rule, the first value with the same type is compared:
    - low side: danger bound first, warning only if danger did not fire
    - high side: checked independently, danger bound first
    Rules without a matching value are skipped.
    """
    if not rules:
        return []

    findings: List[ThresholdFinding] = []

    for rule in rules:
        type_key = rule.type_key
        measurement = _first_matching(latest_values, type_key)
        if measurement is None:
            continue

        value = measurement.value

        if rule.low_danger is not None and value < rule.low_danger:
            findings.append(_finding(FindingKind.DANGER, type_key, value, "critically low"))
        elif rule.low_warning is not None and value < rule.low_warning:
            findings.append(_finding(FindingKind.WARNING, type_key, value, "low"))

        if rule.high_danger is not None and value > rule.high_danger:
            findings.append(_finding(FindingKind.DANGER, type_key, value, "critically high"))
        elif rule.high_warning is not None and value > rule.high_warning:
            findings.append(_finding(FindingKind.WARNING, type_key, value, "high"))

    return findings


def threshold_reasons(
    rules: Optional[Sequence[ThresholdRule]],
    latest_values: Sequence[Measurement],
) -> List[str]:
    """Reason strings for the breaches found by evaluate_thresholds."""
    return [f.message for f in evaluate_thresholds(rules, latest_values)]
