"""Schengen membership lookup (read-only, built in)."""
from fastapi import APIRouter, HTTPException
from complyeur.schemas.country import CountryResponse
from complyeur.services.schengen import schengen_countries, validate_country

router = APIRouter(prefix="/countries", tags=["countries"])


@router.get("/", response_model=list[CountryResponse])
def list_countries():
    return [CountryResponse.model_validate(c) for c in schengen_countries()]


@router.get("/{code}", response_model=CountryResponse)
def get_country(code: str):
    """Any code or name: members, microstates and known non-members resolve; anything else is 404."""
    result = validate_country(code)
    if result.country_code is None:
        raise HTTPException(status_code=404, detail="Country not found")
    return CountryResponse.model_validate(result)
