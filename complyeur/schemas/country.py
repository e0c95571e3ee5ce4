"""Schengen country schemas."""
from pydantic import BaseModel


class CountryResponse(BaseModel):
    is_schengen: bool
    country_code: str | None
    country_name: str | None
    exclusion_reason: str | None = None
    is_microstate: bool = False

    class Config:
        from_attributes = True
