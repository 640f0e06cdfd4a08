"""
PediaDose: Core Dosing Engine
=============================
The mathematical core that turns patient weight, drug facts and a formulation
into a per-dose amount, a daily total and a measurable quantity (mL or tablets).
"""

import logging
from typing import Optional, Tuple

# Import Data Models & Enums
from models import (
    PatientParameters,
    Formulation,
    CalculationResult,
    DosageInputs,
    DosageOutput,
    AuditLog
)

from constants import FormulationKind
from frequency import doses_per_day as parse_doses_per_day
from weight_chart import estimate_weight
from safety import SafetySupervisor
from formatters import format_tablets, format_summary

logger = logging.getLogger(__name__)

class PediaDoseEngine:
    """
    The Mathematical Core.
    Every method is a pure function of its arguments; nothing is cached or mutated.
    """

    @staticmethod
    def resolve_weight(patient: PatientParameters) -> Tuple[float, bool]:
        """
        Returns (weight_kg, estimated).
        An entered positive weight always wins. Otherwise the weight is estimated
        from age and flagged so the clinician can see and override it.
        (0.0, False) means unresolvable.
        """
        if patient.weight_kg is not None and patient.weight_kg > 0:
            return float(patient.weight_kg), False
        if patient.age_years is not None:
            estimated = estimate_weight(patient.age_years)
            if estimated > 0:
                logger.info(f"Weight estimated from age {patient.age_years}y: {estimated:.1f} kg")
                return estimated, True
        return 0.0, False

    @staticmethod
    def _derive_quantity(single_dose_mg: float, formulation: Formulation) -> dict:
        """
        mL for syrup, tablet count for tablets.
        A field that cannot be derived is left out (None), never zero.
        """
        strength = formulation.strength_mg
        if formulation.kind == FormulationKind.SYRUP:
            volume = formulation.volume_ml
            if strength and volume is not None and volume > 0:
                concentration_mg_ml = strength / volume
                return {'dose_ml': single_dose_mg / concentration_mg_ml}
            return {}

        if strength:
            return {'dose_tablets': single_dose_mg / strength}
        return {}

    @staticmethod
    def compute(weight_kg: Optional[float],
                dose_per_kg_per_day: Optional[float],
                max_daily_dose_per_kg: Optional[float],
                doses_per_day: int,
                formulation: Optional[Formulation]) -> Optional[CalculationResult]:
        """
        Returns None when the dose is not computable (missing weight, dose/kg,
        formulation or strength). Raises DosageInputError only for NaN/inf or
        doses_per_day < 1.
        """
        SafetySupervisor.require_finite(
            weight_kg=weight_kg,
            dose_per_kg_per_day=dose_per_kg_per_day,
            max_daily_dose_per_kg=max_daily_dose_per_kg,
        )
        SafetySupervisor.require_doses_per_day(doses_per_day)

        # 1. Preconditions: no partial result, no zeros posing as a recommendation
        if weight_kg is None or weight_kg <= 0:
            return None
        if dose_per_kg_per_day is None or dose_per_kg_per_day <= 0:
            return None
        if formulation is None or formulation.strength_mg is None:
            return None

        # 2. Daily total and split into doses
        total_daily_dose_mg = weight_kg * dose_per_kg_per_day
        single_dose_mg = total_daily_dose_mg / doses_per_day

        # 3. Boundary check
        max_daily_dose_mg = None
        if max_daily_dose_per_kg is not None:
            max_daily_dose_mg = weight_kg * max_daily_dose_per_kg
        warning = SafetySupervisor.check_max_daily_dose(total_daily_dose_mg, max_daily_dose_mg)

        # 4. Formulation-specific quantity
        derived = PediaDoseEngine._derive_quantity(single_dose_mg, formulation)

        return CalculationResult(
            single_dose_mg=single_dose_mg,
            total_daily_dose_mg=total_daily_dose_mg,
            doses_per_day=doses_per_day,
            max_daily_dose_mg=max_daily_dose_mg,
            warning=warning,
            **derived
        )

    @staticmethod
    def calculate(inputs: DosageInputs) -> DosageOutput:
        """
        MASTER REDUCER: one full recomputation from the immutable input tuple.
        Missing data is reported in `errors`; it is never raised.
        """
        audit = AuditLog(inputs_hash=hash(inputs))
        weight_kg, estimated = PediaDoseEngine.resolve_weight(inputs.patient)

        if weight_kg <= 0:
            return DosageOutput(
                weight_kg=0.0,
                weight_estimated=False,
                result=None,
                errors=["Please provide a valid weight or age."],
                audit_log=audit
            )

        errors = []
        drug = inputs.drug
        if drug.dose_per_kg_per_day is None or drug.dose_per_kg_per_day <= 0:
            errors.append("Dose per kg is unknown for this drug; dose cannot be calculated.")
        if inputs.formulation is None or inputs.formulation.strength_mg is None:
            errors.append("Formulation strength is required.")

        result = PediaDoseEngine.compute(
            weight_kg,
            drug.dose_per_kg_per_day,
            drug.max_daily_dose_per_kg,
            parse_doses_per_day(drug.frequency),
            inputs.formulation
        )

        if result is not None:
            if inputs.formulation.kind == FormulationKind.SYRUP and result.dose_ml is None:
                errors.append("Syrup strength and volume must both be positive to calculate mL.")
            if inputs.formulation.kind == FormulationKind.TABLET and result.dose_tablets is None:
                errors.append("Tablet strength must be positive to calculate tablets.")

        return DosageOutput(
            weight_kg=weight_kg,
            weight_estimated=estimated,
            result=result,
            tablet_label=format_tablets(result.dose_tablets) if result else "",
            summary=format_summary(result, weight_kg, estimated),
            errors=errors,
            audit_log=audit
        )

