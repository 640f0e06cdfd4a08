# protocols.py
from dataclasses import dataclass
from typing import Optional
from constants import STRENGTH_PATTERN, FormulationKind
from models import DrugInfo, DrugReference, Formulation, DrugSource, DrugCategory

@dataclass(frozen=True)
class ParsedStrength:
    strength_mg: float
    volume_ml: Optional[float]
    kind: FormulationKind

def parse_strength(strength: Optional[str]) -> Optional[ParsedStrength]:
    """
    "125mg/5mL" -> syrup 125 mg per 5 mL; "500mg" -> tablet 500 mg.
    No "/mL" part means a tablet. Returns None if there is no "<number>mg".
    """
    if not strength:
        return None
    match = STRENGTH_PATTERN.search(strength)
    if not match:
        return None
    strength_mg = float(match.group(1))
    if match.group(2):
        return ParsedStrength(strength_mg, float(match.group(2)), FormulationKind.SYRUP)
    return ParsedStrength(strength_mg, None, FormulationKind.TABLET)

def normalize_category(category: Optional[str]) -> DrugCategory:
    if not category:
        return DrugCategory.OTHER
    text = category.strip().lower()
    for option in DrugCategory:
        if option.value.lower() == text:
            return option
    # Free-text answers like "Macrolide antibiotic" or "GI / antiemetic"
    if "antibiotic" in text or "antibacterial" in text:
        return DrugCategory.ANTIBIOTIC
    if "antipyretic" in text or "analgesic" in text or "fever" in text:
        return DrugCategory.ANTIPYRETIC
    if "respiratory" in text or "antihistamine" in text or "bronchodilator" in text:
        return DrugCategory.RESPIRATORY
    if text.startswith("gi") or "gastro" in text or "antiemetic" in text:
        return DrugCategory.GI
    return DrugCategory.OTHER

class FormulationSelector:
    @staticmethod
    def to_reference(info: DrugInfo) -> DrugReference:
        """Both sources collapse to the same DrugReference; dose/kg may still be None."""
        return DrugReference(
            dose_per_kg_per_day=info.dose_per_kg_per_day,
            max_daily_dose_per_kg=info.max_daily_dose_per_kg,
            frequency=info.frequency,
            category=info.category,
            name=info.name
        )

    @staticmethod
    def select_formulation(info: DrugInfo,
                           preferred: Optional[FormulationKind] = None) -> Optional[Formulation]:
        """
        Suggests the formulation to pre-fill.
        ONLINE:  parsed from the strength display string; its shape decides the kind.
        OFFLINE: the preferred kind if the formulary has it, else syrup, else tablet.
        """
        if info.source == DrugSource.ONLINE:
            parsed = parse_strength(info.strength)
            if parsed is None:
                return None
            return Formulation(kind=parsed.kind, strength_mg=parsed.strength_mg,
                               volume_ml=parsed.volume_ml)

        order = [FormulationKind.SYRUP, FormulationKind.TABLET]
        if preferred is not None:
            order.remove(preferred)
            order.insert(0, preferred)
        for kind in order:
            record = info.forms.get(kind)
            if record is not None:
                return Formulation(kind=kind, strength_mg=record.strength_mg,
                                   volume_ml=record.volume_ml)
        return None
