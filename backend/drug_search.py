# drug_search.py
import logging
from typing import List, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from constants import DRUG_LIBRARY, SEARCH_CONFIG, LocalDrugRecord
from models import DrugInfo, DrugSource, DrugNotFoundError

log = logging.getLogger("drug_search")

class DrugSearchPayload(BaseModel):
    """Shape returned by the online search service. Only name and dosePerKg are mandatory."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    dose_per_kg: float = Field(..., alias="dosePerKg", description="Total daily dose, mg/kg/day")
    max_daily_dose_per_kg: Optional[float] = Field(None, alias="maxDailyDosePerKg")
    frequency: Optional[str] = None
    category: Optional[str] = None
    form: Optional[str] = None
    strength: Optional[str] = Field(None, description='e.g. "125mg/5mL" or "500mg"')

def _from_record(record: LocalDrugRecord) -> DrugInfo:
    return DrugInfo(
        source=DrugSource.OFFLINE,
        name=record.name,
        dose_per_kg_per_day=record.dose_per_kg_per_day,
        max_daily_dose_per_kg=record.max_daily_dose_per_kg,
        frequency=record.frequency,
        category=record.category,
        forms=dict(record.forms)
    )

def offline_lookup(search_term: str) -> List[DrugInfo]:
    """Case-insensitive substring match on name or any alias."""
    return [_from_record(r) for r in DRUG_LIBRARY.search(search_term)]

class OnlineDrugSearch:
    def __init__(self, url: str, timeout: float = 10.0):
        self.url = url
        self.timeout = timeout

    def search(self, query: str, weight_kg: Optional[float] = None,
               age_years: Optional[float] = None) -> DrugInfo:
        """
        Connection problems propagate as requests.ConnectionError / Timeout so the
        caller can switch to offline mode. Everything else is "not found".
        """
        body = {"query": query}
        if weight_kg is not None:
            body["weightKg"] = weight_kg
        if age_years is not None:
            body["ageYears"] = age_years

        r = requests.post(self.url, json=body, timeout=self.timeout)
        try:
            r.raise_for_status()
            payload = DrugSearchPayload.model_validate(r.json())
        except requests.HTTPError as e:
            log.error(f"Drug search failed for '{query}': {e}")
            raise DrugNotFoundError(f"Search failed: {e}") from e
        except (ValueError, ValidationError) as e:
            log.error(f"Drug search returned an unusable payload for '{query}': {e}")
            raise DrugNotFoundError("Could not find the specified drug.") from e

        return DrugInfo(
            source=DrugSource.ONLINE,
            name=payload.name,
            dose_per_kg_per_day=payload.dose_per_kg,
            max_daily_dose_per_kg=payload.max_daily_dose_per_kg,
            frequency=payload.frequency,
            category=payload.category,
            form=payload.form,
            strength=payload.strength
        )

def default_client() -> Optional[OnlineDrugSearch]:
    if not SEARCH_CONFIG.URL:
        return None
    return OnlineDrugSearch(SEARCH_CONFIG.URL, timeout=SEARCH_CONFIG.TIMEOUT_SEC)

def lookup_drug(query: str, weight_kg: Optional[float] = None,
                age_years: Optional[float] = None,
                client: Optional[OnlineDrugSearch] = None,
                online: bool = True) -> DrugInfo:
    """
    Online first when a client is configured; offline formulary when offline
    or unreachable. No retries.
    """
    if online and client is not None:
        try:
            return client.search(query, weight_kg=weight_kg, age_years=age_years)
        except (requests.ConnectionError, requests.Timeout) as e:
            log.warning(f"Online search unreachable ({e}); using local data")
        except requests.RequestException as e:
            # Bad URL, redirect loop, broken body: the search itself failed
            log.error(f"Drug search request failed for '{query}': {e}")
            raise DrugNotFoundError(f"Search failed: {e}") from e

    matches = offline_lookup(query)
    if not matches:
        raise DrugNotFoundError(f"Drug not found: {query}")
    return matches[0]
