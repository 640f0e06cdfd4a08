"""
PediaDose: Data Dictionary
==========================
This module defines the inputs (patient, drug facts, formulation) and the
outputs (calculation result and its envelope) of the dosing engine.

NO LOGIC is implemented here beyond type guards. The arithmetic lives in
core_dosing.py.
"""

import math
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
from constants import VERSION, FormulationKind, FormStrength

class DosageInputError(ValueError):
    """Raised for numeric input the engine cannot do arithmetic on (NaN, inf, doses/day < 1)."""
    pass

class DataTypeError(TypeError):
    """Raised when inputs are wrong python types (str instead of float)."""
    pass

class UnresolvableWeightError(ValueError):
    """Raised by the API shell when neither weight nor age yields a positive weight."""
    pass

class DrugNotFoundError(LookupError):
    """Raised when a drug lookup returns nothing usable."""
    pass

def _check_number(name: str, value, allow_none: bool = True):
    if value is None:
        if allow_none:
            return
        raise DataTypeError(f"Field '{name}' is required")
    # bool is an int subclass but never a clinical quantity
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DataTypeError(f"Field '{name}' must be numeric, got {type(value)}")
    if math.isnan(value) or math.isinf(value):
        raise DosageInputError(f"Field '{name}' must be a finite number, got {value}")

# --- 1. ENUMS ---

class DrugSource(Enum):
    ONLINE = "online"    # LLM-backed search service
    OFFLINE = "offline"  # Local formulary

class DrugCategory(Enum):
    ANTIBIOTIC = "Antibiotic"
    ANTIPYRETIC = "Antipyretic"
    RESPIRATORY = "Respiratory"
    GI = "GI"
    OTHER = "Other"

# --- 2. INPUT LAYER (What the Doctor Enters) ---

@dataclass(frozen=True)
class PatientParameters:
    """Weight wins; age is only used to estimate a missing weight."""
    weight_kg: Optional[float] = None
    age_years: Optional[float] = None

    def __post_init__(self):
        _check_number("weight_kg", self.weight_kg)
        _check_number("age_years", self.age_years)

@dataclass(frozen=True)
class DrugReference:
    """Structured drug facts, already normalized from whichever source produced them."""
    dose_per_kg_per_day: Optional[float] = None  # MANDATORY for a result
    max_daily_dose_per_kg: Optional[float] = None
    frequency: Optional[str] = None              # Free text, e.g. "Every 12 hours"
    category: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self):
        _check_number("dose_per_kg_per_day", self.dose_per_kg_per_day)
        _check_number("max_daily_dose_per_kg", self.max_daily_dose_per_kg)

@dataclass(frozen=True)
class Formulation:
    kind: FormulationKind
    strength_mg: Optional[float] = None
    volume_ml: Optional[float] = None  # Syrup only

    def __post_init__(self):
        if not isinstance(self.kind, FormulationKind):
            raise DataTypeError(f"Formulation kind must be FormulationKind, got {type(self.kind)}")
        _check_number("strength_mg", self.strength_mg)
        _check_number("volume_ml", self.volume_ml)
        for name in ('strength_mg', 'volume_ml'):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise DosageInputError(f"{name} cannot be negative, got {value}")

@dataclass(frozen=True)
class DosageInputs:
    """
    The complete, immutable input tuple.
    Any change produces a new tuple and a total recomputation.
    """
    patient: PatientParameters
    drug: DrugReference
    formulation: Optional[Formulation] = None

    def with_changes(self, **changes) -> "DosageInputs":
        """
        Accepts either whole components (patient=..., drug=..., formulation=...)
        or individual fields of them (weight_kg=..., strength_mg=..., kind=...).
        """
        parts = {
            'patient': changes.pop('patient', self.patient),
            'drug': changes.pop('drug', self.drug),
            'formulation': changes.pop('formulation', self.formulation),
        }
        for part_name in ('patient', 'drug', 'formulation'):
            part = parts[part_name]
            if part is None:
                continue
            own = {k: changes.pop(k) for k in list(changes) if k in part.__dataclass_fields__}
            if own:
                parts[part_name] = replace(part, **own)
        if changes:
            raise DataTypeError(f"Unknown input fields: {sorted(changes)}")
        return DosageInputs(**parts)

# --- 3. DRUG INFO (Online + Offline, one tagged shape) ---

@dataclass
class DrugInfo:
    """
    Union of the online search result and the offline formulary record.
    `source` tells which fields to expect:
      ONLINE  -> `strength` display string ("125mg/5mL", "500mg") and `form`
      OFFLINE -> `forms` per-kind strength/volume records
    """
    source: DrugSource
    name: str
    dose_per_kg_per_day: Optional[float] = None
    max_daily_dose_per_kg: Optional[float] = None
    frequency: Optional[str] = None
    category: Optional[str] = None
    form: Optional[str] = None
    strength: Optional[str] = None
    forms: Dict[FormulationKind, FormStrength] = field(default_factory=dict)

# --- 4. OUTPUT LAYER ---

@dataclass(frozen=True)
class CalculationResult:
    single_dose_mg: float
    total_daily_dose_mg: float
    doses_per_day: int
    max_daily_dose_mg: Optional[float] = None
    dose_ml: Optional[float] = None       # Syrup only
    dose_tablets: Optional[float] = None  # Tablet only
    warning: Optional[str] = None

@dataclass
class AuditLog:
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    action: str = "dose_calculation"
    inputs_hash: int = 0
    model_version: str = VERSION

@dataclass
class DosageOutput:
    """Standardized response of one recomputation, for API/UI."""
    weight_kg: float             # Resolved weight (entered or estimated)
    weight_estimated: bool       # True when derived from age: show it so it can be overridden
    result: Optional[CalculationResult]
    tablet_label: str = ""
    summary: str = ""
    errors: List[str] = field(default_factory=list)
    audit_log: Optional[AuditLog] = None

    @property
    def computable(self) -> bool:
        return self.result is not None
