# safety.py
import logging
import math
from typing import Optional
from models import DosageInputError

logger = logging.getLogger(__name__)

class SafetySupervisor:
    """
    Guards used by the dosing engine.
    Numeric guards raise; clinical checks return a warning string (or None).
    """
    @staticmethod
    def require_finite(**values) -> None:
        """NaN would silently poison every derived field, so it stops here."""
        for name, value in values.items():
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise DosageInputError(f"{name} must be numeric, got {type(value)}")
            if math.isnan(value) or math.isinf(value):
                raise DosageInputError(f"{name} must be a finite number, got {value}")

    @staticmethod
    def require_doses_per_day(doses_per_day) -> None:
        if isinstance(doses_per_day, bool) or not isinstance(doses_per_day, int):
            raise DosageInputError(f"doses_per_day must be an integer, got {type(doses_per_day)}")
        if doses_per_day < 1:
            raise DosageInputError(f"doses_per_day must be at least 1, got {doses_per_day}")

    @staticmethod
    def check_max_daily_dose(total_daily_dose_mg: float,
                             max_daily_dose_mg: Optional[float]) -> Optional[str]:
        """
        Over-limit check. Strictly greater than: a total equal to the maximum is allowed.
        """
        if max_daily_dose_mg is None:
            return None
        if total_daily_dose_mg > max_daily_dose_mg:
            logger.warning(f"Total daily dose {total_daily_dose_mg:.2f} mg exceeds max {max_daily_dose_mg:.2f} mg")
            return (f"Total daily dose {total_daily_dose_mg:.2f} mg exceeds the recommended "
                    f"maximum daily dose of {max_daily_dose_mg:.2f} mg.")
        return None
