# main.py

import logging
from dataclasses import asdict
from typing import Optional, List
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Import Data Models & Logic
from models import (
    PatientParameters,
    DrugReference,
    Formulation,
    DosageInputs,
    DrugInfo,
    DosageInputError,
    DataTypeError,
    UnresolvableWeightError,
    DrugNotFoundError
)
from constants import VERSION, FormulationKind
from core_dosing import PediaDoseEngine
from protocols import FormulationSelector, normalize_category
from drug_search import lookup_drug, offline_lookup, default_client

# --- 1. CONFIGURATION & LOGGING ---
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("pediadose-api")

app = FastAPI(
    title="PediaDose API",
    version=VERSION,
    description="Weight-based pediatric drug dose calculator. \n\n"
                "**WARNING**: Decision Support Tool Only. Final responsibility lies with the treating physician.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
def read_root():
    return {"status": "active", "message": "PediaDose API is running successfully!"}

@app.get("/health")
def health_check():
    """K8s/AWS Health Probe"""
    return {"status": "active", "version": VERSION, "module": "pediadose-engine"}

# --- 2. STRICT INPUT SCHEMA (The Guardrails) ---
class PatientRequest(BaseModel):
    weight_kg: Optional[float] = Field(None, description="Weight in kg. Takes priority over age.")
    age_years: Optional[float] = Field(None, description="Age in years. Used to estimate weight if it is missing.")

class DrugRequest(BaseModel):
    name: Optional[str] = None
    dose_per_kg_per_day: Optional[float] = Field(None, description="mg/kg/day. Required for a result.")
    max_daily_dose_per_kg: Optional[float] = None
    frequency: Optional[str] = Field(None, description='e.g. "Every 12 hours"')
    category: Optional[str] = None

class FormulationRequest(BaseModel):
    kind: FormulationKind = Field(default=FormulationKind.SYRUP)
    strength_mg: Optional[float] = Field(None, ge=0, description="mg per tablet, or mg in volume_ml of syrup")
    volume_ml: Optional[float] = Field(None, ge=0, description="Syrup only: mL containing strength_mg")

class CalculateRequest(BaseModel):
    patient: PatientRequest
    drug: DrugRequest
    formulation: Optional[FormulationRequest] = None

    class Config:
        json_schema_extra = {
            "example": {
                "patient": {"weight_kg": 10.0},
                "drug": {"name": "Amoxicillin", "dose_per_kg_per_day": 45,
                         "max_daily_dose_per_kg": 90, "frequency": "Every 12 hours"},
                "formulation": {"kind": "syrup", "strength_mg": 250, "volume_ml": 5}
            }
        }

class SearchRequest(BaseModel):
    query: str = Field(..., min_length=2, description="Drug or condition")
    weight_kg: Optional[float] = None
    age_years: Optional[float] = None
    online: bool = True
    preferred_kind: Optional[FormulationKind] = None

# --- 3. EXPLICIT RESPONSE SCHEMA (The Contract) ---
class CalculationResponse(BaseModel):
    single_dose_mg: float
    total_daily_dose_mg: float
    doses_per_day: int
    max_daily_dose_mg: Optional[float] = None
    dose_ml: Optional[float] = None
    dose_tablets: Optional[float] = None
    warning: Optional[str] = None

class DosageResponse(BaseModel):
    weight_kg: float
    weight_estimated: bool
    computable: bool
    result: Optional[CalculationResponse] = None
    tablet_label: str = ""
    summary: str = ""
    errors: List[str] = []

class FormulationResponse(BaseModel):
    kind: FormulationKind
    strength_mg: Optional[float] = None
    volume_ml: Optional[float] = None

class DrugInfoResponse(BaseModel):
    source: str
    name: str
    dose_per_kg_per_day: Optional[float] = None
    max_daily_dose_per_kg: Optional[float] = None
    frequency: Optional[str] = None
    category: Optional[str] = None
    category_group: str
    strength: Optional[str] = None
    formulations: List[FormulationResponse] = []

class SearchResponse(BaseModel):
    drug: DrugInfoResponse
    reference: DrugRequest  # Ready to post back as CalculateRequest.drug
    suggested_formulation: Optional[FormulationResponse] = None

def _drug_info_response(info: DrugInfo) -> DrugInfoResponse:
    return DrugInfoResponse(
        source=info.source.value,
        name=info.name,
        dose_per_kg_per_day=info.dose_per_kg_per_day,
        max_daily_dose_per_kg=info.max_daily_dose_per_kg,
        frequency=info.frequency,
        category=info.category,
        category_group=normalize_category(info.category).value,
        strength=info.strength,
        formulations=[
            FormulationResponse(kind=kind, strength_mg=f.strength_mg, volume_ml=f.volume_ml)
            for kind, f in info.forms.items()
        ]
    )

# --- 4. ENDPOINTS ---

@app.post("/calculate", response_model=DosageResponse)
def calculate_dose(request: CalculateRequest):
    """
    One full recomputation. The UI calls this on every input change.
    """
    try:
        inputs = DosageInputs(
            patient=PatientParameters(**request.patient.model_dump()),
            drug=DrugReference(**request.drug.model_dump()),
            formulation=Formulation(**request.formulation.model_dump()) if request.formulation else None
        )
        output = PediaDoseEngine.calculate(inputs)
        if output.weight_kg <= 0:
            raise UnresolvableWeightError(output.errors[0])

        logger.info(f"Calculated dose for {request.drug.name or 'unnamed drug'}: "
                    f"weight {output.weight_kg:.1f} kg (estimated={output.weight_estimated}), "
                    f"computable={output.computable}")

        return DosageResponse(
            weight_kg=output.weight_kg,
            weight_estimated=output.weight_estimated,
            computable=output.computable,
            result=CalculationResponse(**asdict(output.result)) if output.result else None,
            tablet_label=output.tablet_label,
            summary=output.summary,
            errors=output.errors
        )

    except (DosageInputError, DataTypeError, ValueError) as e:
        logger.warning(f"Invalid Input: {str(e)}")
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logger.error(f"Internal Engine Failure: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Dosing Engine Error")

@app.post("/search", response_model=SearchResponse)
def search_drug(request: SearchRequest):
    """
    Finds drug facts (online service if configured, else local formulary) and
    suggests the formulation to pre-fill.
    """
    try:
        info = lookup_drug(
            request.query,
            weight_kg=request.weight_kg,
            age_years=request.age_years,
            client=default_client(),
            online=request.online
        )
        formulation = FormulationSelector.select_formulation(info, request.preferred_kind)
        return SearchResponse(
            drug=_drug_info_response(info),
            reference=DrugRequest(**asdict(FormulationSelector.to_reference(info))),
            suggested_formulation=FormulationResponse(**asdict(formulation)) if formulation else None
        )

    except DrugNotFoundError as e:
        logger.info(f"Drug not found for '{request.query}': {e}")
        raise HTTPException(status_code=404, detail="Drug not found")

    except Exception as e:
        logger.error(f"Drug Search Failure: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal Drug Search Error")

@app.get("/drugs", response_model=List[DrugInfoResponse])
def list_local_drugs(q: str = Query(..., min_length=1, description="Name or alias fragment")):
    """Offline formulary lookup."""
    return [_drug_info_response(info) for info in offline_lookup(q)]
