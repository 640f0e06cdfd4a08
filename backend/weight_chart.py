"""
Age-to-weight estimation.
Stands in for the WHO age-to-weight table when only the age is known.
"""

import logging
from constants import WEIGHT_CONSTANTS

logger = logging.getLogger(__name__)

def estimate_weight(age_years: float) -> float:
    """
    Estimates weight (kg) from age (years) with common pediatric rules of thumb.
    Returns 0 for age <= 0; the caller must treat 0 as "unresolvable".
    No clinical validation happens here.
    """
    if age_years <= 0:
        return 0.0

    # Infants: birth weight plus two monthly growth regimes
    if age_years < 1:
        months = age_years * WEIGHT_CONSTANTS.MONTHS_PER_YEAR
        early = WEIGHT_CONSTANTS.EARLY_INFANT_MONTHS
        if months <= early:
            return WEIGHT_CONSTANTS.BIRTH_WEIGHT_KG + WEIGHT_CONSTANTS.EARLY_INFANT_GAIN_KG_PER_MONTH * months
        return (WEIGHT_CONSTANTS.BIRTH_WEIGHT_KG
                + WEIGHT_CONSTANTS.EARLY_INFANT_GAIN_KG_PER_MONTH * early
                + WEIGHT_CONSTANTS.LATE_INFANT_GAIN_KG_PER_MONTH * (months - early))

    if age_years <= 6:
        slope, intercept, divisor = WEIGHT_CONSTANTS.TODDLER
        return (slope * age_years + intercept) / divisor

    if age_years <= 12:
        slope, intercept, divisor = WEIGHT_CONSTANTS.SCHOOL_AGE
        return (slope * age_years + intercept) / divisor

    # Very rough; not a clinical formula
    logger.debug(f"Age {age_years}y is past the pediatric chart, using rough fallback")
    return WEIGHT_CONSTANTS.ADOLESCENT_KG_PER_YEAR * age_years
