import os
import re
from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional

VERSION = "1.0.0"

class FormulationKind(Enum):
    SYRUP = "syrup"     # Liquid suspension, measured by volume
    TABLET = "tablet"   # Solid unit, counted

@dataclass(frozen=True)
class FormStrength:
    strength_mg: float
    volume_ml: Optional[float] = None  # Denominator of concentration (syrup only)

@dataclass(frozen=True)
class LocalDrugRecord:
    name: str
    dose_per_kg_per_day: float  # mg/kg/day
    aliases: List[str] = field(default_factory=list)
    category: Optional[str] = None
    max_daily_dose_per_kg: Optional[float] = None
    frequency: Optional[str] = None
    forms: Dict[FormulationKind, FormStrength] = field(default_factory=dict)

class WEIGHT_CONSTANTS:
    BIRTH_WEIGHT_KG = 3.5
    EARLY_INFANT_GAIN_KG_PER_MONTH = 0.6  # 0-6 months
    LATE_INFANT_GAIN_KG_PER_MONTH = 0.5   # 6-12 months
    EARLY_INFANT_MONTHS = 6
    MONTHS_PER_YEAR = 12

    # (age * slope + intercept) / divisor
    TODDLER = (2.0, 8.0, 1.0)      # 1-6 years
    SCHOOL_AGE = (7.0, -5.0, 2.0)  # 7-12 years
    ADOLESCENT_KG_PER_YEAR = 3.0   # >12 years: rough fallback only

class FREQUENCY_CONSTANTS:
    HOURS_PER_DAY = 24
    DEFAULT_DOSES_PER_DAY = 1  # Unparsable text never implies more than one dose

    # Checked in order, first match wins
    PHRASES = [
        (("once a day", "every 24 hours"), 1),
        (("twice a day", "every 12 hours"), 2),
        (("three times a day", "every 8 hours"), 3),
        (("four times a day", "every 6 hours"), 4),
    ]

class TABLET_DISPLAY:
    HALF_BAND = 0.125
    ZERO_THRESHOLD = 0.001
    # (target fraction, label)
    FRACTIONS = [(0.25, "1/4"), (0.5, "1/2"), (0.75, "3/4")]

# NUMBER "mg" [ "/" NUMBER "mL" ]
STRENGTH_PATTERN = re.compile(
    r"(\d+(?:\.\d+)?)\s*mg(?:\s*/\s*(\d+(?:\.\d+)?)\s*mL)?",
    re.IGNORECASE
)

class SEARCH_CONFIG:
    """Online lookup settings. No URL means offline only."""
    URL = os.getenv("PEDIADOSE_SEARCH_URL")
    TIMEOUT_SEC = float(os.getenv("PEDIADOSE_SEARCH_TIMEOUT", "10"))

class DRUG_LIBRARY:
    """
    The offline formulary.
    Used when the online lookup is unavailable. Doses are total mg/kg/day.
    """
    SPECS = [
        LocalDrugRecord(
            name="Paracetamol",
            aliases=["PCM", "Acetaminophen", "Dolo", "Crocin", "Calpol"],
            category="Antipyretic",
            dose_per_kg_per_day=60.0,
            max_daily_dose_per_kg=75.0,
            frequency="Every 6 hours",
            forms={
                FormulationKind.SYRUP: FormStrength(strength_mg=125, volume_ml=5),
                FormulationKind.TABLET: FormStrength(strength_mg=500),
            }
        ),
        LocalDrugRecord(
            name="Ibuprofen",
            aliases=["Brufen", "Advil", "Motrin"],
            category="Antipyretic",
            dose_per_kg_per_day=30.0,
            max_daily_dose_per_kg=40.0,
            frequency="Every 8 hours",
            forms={
                FormulationKind.SYRUP: FormStrength(strength_mg=100, volume_ml=5),
                FormulationKind.TABLET: FormStrength(strength_mg=200),
            }
        ),
        LocalDrugRecord(
            name="Amoxicillin",
            aliases=["Amox", "Mox", "Novamox"],
            category="Antibiotic",
            dose_per_kg_per_day=45.0,
            max_daily_dose_per_kg=90.0,
            frequency="Every 12 hours",
            forms={
                FormulationKind.SYRUP: FormStrength(strength_mg=250, volume_ml=5),
                FormulationKind.TABLET: FormStrength(strength_mg=500),
            }
        ),
        LocalDrugRecord(
            name="Azithromycin",
            aliases=["Azithro", "Azee", "Zithromax"],
            category="Antibiotic",
            dose_per_kg_per_day=10.0,
            max_daily_dose_per_kg=10.0,
            frequency="Once a day",
            forms={
                FormulationKind.SYRUP: FormStrength(strength_mg=200, volume_ml=5),
                FormulationKind.TABLET: FormStrength(strength_mg=250),
            }
        ),
        LocalDrugRecord(
            name="Cetirizine",
            aliases=["Cetzine", "Zyrtec"],
            category="Respiratory",
            dose_per_kg_per_day=0.25,
            frequency="Once a day",
            forms={
                FormulationKind.SYRUP: FormStrength(strength_mg=5, volume_ml=5),
                FormulationKind.TABLET: FormStrength(strength_mg=10),
            }
        ),
        LocalDrugRecord(
            name="Ondansetron",
            aliases=["Emeset", "Zofran"],
            category="GI",
            dose_per_kg_per_day=0.45,
            max_daily_dose_per_kg=0.6,
            frequency="Every 8 hours",
            forms={
                FormulationKind.SYRUP: FormStrength(strength_mg=2, volume_ml=5),
                FormulationKind.TABLET: FormStrength(strength_mg=4),
            }
        ),
    ]

    @staticmethod
    def search(term: str) -> List[LocalDrugRecord]:
        needle = (term or "").strip().lower()
        if not needle:
            return []
        return [
            drug for drug in DRUG_LIBRARY.SPECS
            if needle in drug.name.lower()
            or any(needle in alias.lower() for alias in drug.aliases)
        ]
