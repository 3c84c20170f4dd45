"""
Lead scoring.

Additive weights over the website flag and the enrichment record. Missing
fields cost points rather than failing the lead. The total is floored at 0.
"""

import re

from lead_qualifier.schemas.enrichment import EnrichmentRecord, ScoreResult


POINTS_HAS_WEBSITE = 10

POINTS_SIZE_11_50 = 20
POINTS_SIZE_51_200 = 15
POINTS_SIZE_201_PLUS = 10

POINTS_TARGET_COUNTRY = 10
TARGET_COUNTRIES = frozenset({"US", "UK", "CA"})

PENALTY_MISSING_FIELD = -5

QUALIFICATION_THRESHOLD = 25

_DIGITS = re.compile(r"\d+")


def company_size_points(size: str | None) -> int:
    """Band the first number in the size bucket ("51-200" -> 51)."""
    if not size:
        return PENALTY_MISSING_FIELD

    match = _DIGITS.search(size)
    if match is None:
        return PENALTY_MISSING_FIELD

    lower = int(match.group())
    if lower >= 201:
        return POINTS_SIZE_201_PLUS
    if lower >= 51:
        return POINTS_SIZE_51_200
    if lower >= 11:
        return POINTS_SIZE_11_50
    return 0


def country_points(country: str | None) -> int:
    if not country:
        return PENALTY_MISSING_FIELD
    return POINTS_TARGET_COUNTRY if country.upper() in TARGET_COUNTRIES else 0


def calculate_score(has_website: bool, enrichment: EnrichmentRecord) -> ScoreResult:
    score = 0

    if has_website:
        score += POINTS_HAS_WEBSITE

    score += company_size_points(enrichment.company_size)
    score += country_points(enrichment.country)

    if not enrichment.company_name:
        score += PENALTY_MISSING_FIELD
    if not enrichment.industry:
        score += PENALTY_MISSING_FIELD

    score = max(0, score)
    return ScoreResult(score=score, qualified=score >= QUALIFICATION_THRESHOLD)
