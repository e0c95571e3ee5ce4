"""Module D: Schengen membership registry (which trips count toward the limit).

Membership verified against the European Commission list
(https://home-affairs.ec.europa.eu/policies/schengen-borders-and-visa/schengen-area_en).
"""
from dataclasses import dataclass

MEMBERSHIP_VERSION = "2025-01-07"

# code -> (name, member since)
SCHENGEN_MEMBERS: dict[str, tuple[str, str]] = {
    "AT": ("Austria", "1997-12-01"),
    "BE": ("Belgium", "1995-03-26"),
    "BG": ("Bulgaria", "2025-01-01"),
    "HR": ("Croatia", "2023-01-01"),
    "CZ": ("Czech Republic", "2007-12-21"),
    "DK": ("Denmark", "2001-03-25"),
    "EE": ("Estonia", "2007-12-21"),
    "FI": ("Finland", "2001-03-25"),
    "FR": ("France", "1995-03-26"),
    "DE": ("Germany", "1995-03-26"),
    "GR": ("Greece", "2000-01-01"),
    "HU": ("Hungary", "2007-12-21"),
    "IS": ("Iceland", "2001-03-25"),
    "IT": ("Italy", "1997-10-26"),
    "LV": ("Latvia", "2007-12-21"),
    "LI": ("Liechtenstein", "2011-12-19"),
    "LT": ("Lithuania", "2007-12-21"),
    "LU": ("Luxembourg", "1995-03-26"),
    "MT": ("Malta", "2007-12-21"),
    "NL": ("Netherlands", "1995-03-26"),
    "NO": ("Norway", "2001-03-25"),
    "PL": ("Poland", "2007-12-21"),
    "PT": ("Portugal", "1995-03-26"),
    "RO": ("Romania", "2025-01-01"),
    "SK": ("Slovakia", "2007-12-21"),
    "SI": ("Slovenia", "2007-12-21"),
    "ES": ("Spain", "1995-03-26"),
    "SE": ("Sweden", "2001-03-25"),
    "CH": ("Switzerland", "2008-12-12"),
}

# Open borders with a member state: border agents count these days as Schengen presence.
SCHENGEN_MICROSTATES: dict[str, tuple[str, str]] = {
    "MC": ("Monaco", "Open border with France, no passport control"),
    "VA": ("Vatican City", "Open border with Italy, no passport control"),
    "SM": ("San Marino", "Open border with Italy, no passport control"),
    "AD": ("Andorra", "Open borders with France/Spain, no passport control"),
}

EXCLUDED_COUNTRIES: dict[str, tuple[str, str]] = {
    "IE": ("Ireland", "EU member, opted out of Schengen"),
    "CY": ("Cyprus", "EU member, not yet implemented Schengen"),
    "GB": ("United Kingdom", "Not EU, not Schengen"),
}

_NAME_VARIATIONS: dict[str, str] = {
    "CZECHIA": "CZ",
    "CZECH": "CZ",
    "HOLLAND": "NL",
    "THE NETHERLANDS": "NL",
    "HELLENIC REPUBLIC": "GR",
    "SWISS CONFEDERATION": "CH",
    "REPUBLIC OF CROATIA": "HR",
    "REPUBLIC OF ESTONIA": "EE",
    "REPUBLIC OF FINLAND": "FI",
    "REPUBLIC OF LATVIA": "LV",
    "REPUBLIC OF LITHUANIA": "LT",
    "REPUBLIC OF MALTA": "MT",
    "REPUBLIC OF POLAND": "PL",
    "REPUBLIC OF SLOVENIA": "SI",
    "SLOVAK REPUBLIC": "SK",
    "KINGDOM OF BELGIUM": "BE",
    "KINGDOM OF DENMARK": "DK",
    "KINGDOM OF THE NETHERLANDS": "NL",
    "KINGDOM OF NORWAY": "NO",
    "KINGDOM OF SPAIN": "ES",
    "KINGDOM OF SWEDEN": "SE",
    "FRENCH REPUBLIC": "FR",
    "FEDERAL REPUBLIC OF GERMANY": "DE",
    "ITALIAN REPUBLIC": "IT",
    "PORTUGUESE REPUBLIC": "PT",
    "REPUBLIC OF AUSTRIA": "AT",
    "GRAND DUCHY OF LUXEMBOURG": "LU",
    "PRINCIPALITY OF LIECHTENSTEIN": "LI",
    "PRINCIPALITY OF MONACO": "MC",
    "PRINCIPALITY OF ANDORRA": "AD",
    "REPUBLIC OF SAN MARINO": "SM",
    "HOLY SEE": "VA",
    "STATE OF VATICAN CITY": "VA",
}

_EXCLUDED_NAME_VARIATIONS: dict[str, str] = {
    "REPUBLIC OF IRELAND": "IE",
    "EIRE": "IE",
    "REPUBLIC OF CYPRUS": "CY",
    "UK": "GB",
    "GREAT BRITAIN": "GB",
    "ENGLAND": "GB",
    "SCOTLAND": "GB",
    "WALES": "GB",
    "NORTHERN IRELAND": "GB",
}

SCHENGEN_COUNTRY_CODES: frozenset[str] = frozenset(SCHENGEN_MEMBERS) | frozenset(SCHENGEN_MICROSTATES)

SCHENGEN_NAME_TO_CODE: dict[str, str] = {
    **{name.upper(): code for code, (name, _) in SCHENGEN_MEMBERS.items()},
    **{name.upper(): code for code, (name, _) in SCHENGEN_MICROSTATES.items()},
    **_NAME_VARIATIONS,
}

EXCLUDED_NAME_TO_CODE: dict[str, str] = {
    **{name.upper(): code for code, (name, _) in EXCLUDED_COUNTRIES.items()},
    **_EXCLUDED_NAME_VARIATIONS,
}


@dataclass(frozen=True)
class CountryValidation:
    is_schengen: bool
    country_code: str | None = None
    country_name: str | None = None
    exclusion_reason: str | None = None
    is_microstate: bool = False


def _normalize(value: str | None) -> str:
    if not value or not isinstance(value, str):
        return ""
    return value.strip().upper()


def is_schengen_country(code_or_name: str | None) -> bool:
    """True for Schengen members and microstates, by ISO code or name. Exclusions win."""
    key = _normalize(code_or_name)
    if not key:
        return False
    if key in EXCLUDED_COUNTRIES or key in EXCLUDED_NAME_TO_CODE:
        return False
    return key in SCHENGEN_COUNTRY_CODES or key in SCHENGEN_NAME_TO_CODE


def validate_country(code_or_name: str | None) -> CountryValidation:
    key = _normalize(code_or_name)
    if not key:
        return CountryValidation(is_schengen=False)

    excluded_code = key if key in EXCLUDED_COUNTRIES else EXCLUDED_NAME_TO_CODE.get(key)
    if excluded_code:
        name, reason = EXCLUDED_COUNTRIES[excluded_code]
        return CountryValidation(
            is_schengen=False,
            country_code=excluded_code,
            country_name=name,
            exclusion_reason=reason,
        )

    code = key if key in SCHENGEN_COUNTRY_CODES else SCHENGEN_NAME_TO_CODE.get(key)
    if code is None:
        return CountryValidation(is_schengen=False)
    if code in SCHENGEN_MEMBERS:
        return CountryValidation(is_schengen=True, country_code=code, country_name=SCHENGEN_MEMBERS[code][0])
    return CountryValidation(
        is_schengen=True,
        country_code=code,
        country_name=SCHENGEN_MICROSTATES[code][0],
        is_microstate=True,
    )


def normalize_country_code(code_or_name: str | None) -> str | None:
    """ISO code for a Schengen country, None for excluded or unknown input."""
    result = validate_country(code_or_name)
    return result.country_code if result.is_schengen else None


def schengen_country_codes() -> list[str]:
    return sorted(SCHENGEN_COUNTRY_CODES)


def schengen_countries() -> list[CountryValidation]:
    """All counted countries, sorted by name (dropdowns, reference listings)."""
    countries = [validate_country(code) for code in SCHENGEN_COUNTRY_CODES]
    return sorted(countries, key=lambda c: c.country_name or "")
