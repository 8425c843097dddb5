"""
Advisory Response Interpreter - free text -> risk level + reasons.

The advisory output is treated as an opaque classifier: it is
pattern-matched, never parsed. Classification and reason extraction are
independent; both use case-insensitive substring search.
"""

from lunch_governance.policy_rules import dedupe_reasons
from lunch_governance.schemas import RiskLevel


# Classification tiers, evaluated in order; first tier with a hit wins.
_RISK_TIERS = (
    (RiskLevel.HIGH, ("tobacco", "hard liquor", "peanut", "shellfish", "high risk", "dangerous")),
    (RiskLevel.MEDIUM, ("medium risk", "moderate", "inclusivity", "dietary restriction", "allergen")),
)


def _mentions(text_lower: str, *keywords: str) -> bool:
    return any(keyword in text_lower for keyword in keywords)


def _mentions_gluten(text: str) -> bool:
    return "gluten" in text and "gluten-free" not in text


def _mentions_pork_exclusivity(text: str) -> bool:
    return "pork" in text and "only" in text


def _lacks_vegetarian(text: str) -> bool:
    return "vegetarian" not in text and "vegan" not in text


# (predicate over lowercased text, reason) pairs; every matching topic adds its reason.
_REASON_TOPICS = (
    (lambda t: _mentions(t, "tobacco", "cigarette", "cigar", "vape", "smoking"),
     "Contains tobacco products (cigars, cigarettes, vapes) - not allowed"),
    (lambda t: _mentions(t, "vodka", "whiskey", "rum", "tequila", "gin", "brandy", "liqueur", "hard liquor"),
     "Contains hard liquor - not allowed (beer, wine, champagne are permitted)"),
    (lambda t: _mentions(t, "peanut", "tree nut"),
     "Contains nuts/peanuts - major allergen risk"),
    (lambda t: _mentions(t, "shellfish"),
     "Contains shellfish - major allergen risk"),
    (_mentions_gluten,
     "Contains gluten - dietary restriction concern"),
    (lambda t: _mentions(t, "dairy", "lactose"),
     "Contains dairy/lactose - dietary restriction concern"),
    (lambda t: _mentions(t, "soy"),
     "Contains soy - allergen concern"),
    (lambda t: _mentions(t, "egg"),
     "Contains eggs - allergen concern"),
    (_mentions_pork_exclusivity,
     "Menu may exclude religious dietary restrictions (pork-heavy)"),
    (_lacks_vegetarian,
     "No vegetarian/vegan options identified - inclusivity concern"),
)


def classify_risk(response_text: str) -> RiskLevel:
    """Map advisory text to a risk level using fixed keyword precedence."""
    text_lower = response_text.lower()
    for level, keywords in _RISK_TIERS:
        if _mentions(text_lower, *keywords):
            return level
    return RiskLevel.LOW


def extract_reasons(response_text: str) -> list[str]:
    """Collect one human-readable reason per topic mentioned in the advisory text."""
    text_lower = response_text.lower()
    reasons = [reason for matches, reason in _REASON_TOPICS if matches(text_lower)]
    return dedupe_reasons(reasons)


def interpret_response(response_text: str) -> tuple[RiskLevel, list[str]]:
    """Classify and extract reasons in one call."""
    return classify_risk(response_text), extract_reasons(response_text)
