"""
Clinician-facing text for a calculation.
Tablets are dosed in quarters, so decimal counts like "0.33" are never shown.
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from constants import TABLET_DISPLAY
from models import CalculationResult

def format_tablets(tablets: Optional[float]) -> str:
    if tablets is None or not isinstance(tablets, (int, float)):
        return ""
    if math.isnan(tablets) or math.isinf(tablets) or tablets < 0:
        return ""
    if tablets < TABLET_DISPLAY.ZERO_THRESHOLD:
        return "0"

    whole = math.floor(tablets)
    fraction = tablets - whole

    if abs(fraction) < TABLET_DISPLAY.HALF_BAND:
        return f"{whole}"
    for target, label in TABLET_DISPLAY.FRACTIONS:
        if abs(fraction - target) < TABLET_DISPLAY.HALF_BAND:
            return f"{whole} ({label})" if whole > 0 else label
    if fraction > 1 - TABLET_DISPLAY.HALF_BAND:
        return f"{whole + 1}"

    # Only reachable on a band boundary
    return str(Decimal(str(tablets)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))

def format_summary(result: Optional[CalculationResult], weight_kg: float,
                   weight_estimated: bool = False) -> str:
    """One line per fact, in the order a prescriber reads them."""
    if result is None:
        return ""

    lines = []
    if result.dose_ml is not None:
        lines.append(f"Give {result.dose_ml:.1f} mL per dose")
    elif result.dose_tablets is not None:
        lines.append(f"Give {format_tablets(result.dose_tablets)} tablet(s) per dose")
    lines.append(f"{result.single_dose_mg:.2f} mg x {result.doses_per_day}/day "
                 f"= {result.total_daily_dose_mg:.2f} mg/day")
    if result.max_daily_dose_mg is not None:
        lines.append(f"Max daily dose: {result.max_daily_dose_mg:.2f} mg")

    weight_note = " (estimated from age)" if weight_estimated else ""
    lines.append(f"Weight: {weight_kg:.1f} kg{weight_note}")

    if result.warning:
        lines.append(f"WARNING: {result.warning}")
    return "\n".join(lines)
