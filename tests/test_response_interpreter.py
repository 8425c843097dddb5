"""
Unit tests for advisory response interpretation.
"""
from __future__ import annotations

import pytest

from lunch_governance.response_interpreter import (
    classify_risk,
    extract_reasons,
    interpret_response,
)
from lunch_governance.schemas import RiskLevel

NUT_REASON = "Contains nuts/peanuts - major allergen risk"
SHELLFISH_REASON = "Contains shellfish - major allergen risk"
NO_VEG_REASON = "No vegetarian/vegan options identified - inclusivity concern"


@pytest.mark.parametrize(
    "text",
    [
        "Contains TOBACCO products",
        "Hard liquor present",
        "peanut cookies",
        "Shellfish pasta",
        "Overall: High Risk",
        "This is dangerous for some guests",
    ],
)
def test_high_risk_keywords(text: str) -> None:
    assert classify_risk(text) == RiskLevel.HIGH


@pytest.mark.parametrize(
    "text",
    [
        "Medium risk overall",
        "Moderate concerns",
        "Inclusivity could be improved",
        "Watch for dietary restriction needs",
        "Possible allergen cross-contact",
    ],
)
def test_medium_risk_keywords(text: str) -> None:
    assert classify_risk(text) == RiskLevel.MEDIUM


def test_high_takes_precedence_over_medium() -> None:
    assert classify_risk("Moderate inclusivity issue, but peanut sauce is present") == RiskLevel.HIGH


def test_no_keywords_is_low() -> None:
    assert classify_risk("Looks fine to me.") == RiskLevel.LOW
    assert classify_risk("") == RiskLevel.LOW


def test_reasons_for_major_allergens() -> None:
    text = "High risk. The menu contains peanut butter cookies and shellfish pasta. A vegetarian salad is available."
    assert extract_reasons(text) == [NUT_REASON, SHELLFISH_REASON]


def test_missing_vegetarian_mention_adds_inclusivity_reason() -> None:
    assert extract_reasons("Low risk overall.") == [NO_VEG_REASON]


def test_gluten_free_does_not_trigger_gluten_reason() -> None:
    assert "Contains gluten - dietary restriction concern" not in extract_reasons("Gluten-free bread, vegan")
    assert "Contains gluten - dietary restriction concern" in extract_reasons("Contains gluten, vegan friendly")


def test_dairy_soy_egg_and_pork_topics() -> None:
    reasons = extract_reasons("Only pork mains; sides have dairy, soy sauce and egg noodles. Vegan dessert.")
    assert reasons == [
        "Contains dairy/lactose - dietary restriction concern",
        "Contains soy - allergen concern",
        "Contains eggs - allergen concern",
        "Menu may exclude religious dietary restrictions (pork-heavy)",
    ]


def test_hard_liquor_and_tobacco_topics() -> None:
    reasons = extract_reasons("Vodka cocktails and a cigarette break. Vegetarian wraps offered.")
    assert reasons == [
        "Contains tobacco products (cigars, cigarettes, vapes) - not allowed",
        "Contains hard liquor - not allowed (beer, wine, champagne are permitted)",
    ]


def test_reasons_are_unique() -> None:
    reasons = extract_reasons("peanut peanut tree nut shellfish shellfish")
    assert len(reasons) == len(set(reasons))


def test_interpret_response_combines_both() -> None:
    risk, reasons = interpret_response("Moderate: dietary restriction concerns. Vegetarian options exist.")
    assert risk == RiskLevel.MEDIUM
    assert reasons == []
