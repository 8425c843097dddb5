"""
Deterministic Lunch Policy Rules - pure keyword enforcement, NO LLMs.

Philosophy: Same menu -> same output. The advisory service may add
commentary, but removal of non-compliant items always happens here.

Rules:
1. Prohibited substances (tobacco, nicotine products)
2. Restricted alcohol (hard liquor; beer/wine/champagne are allowed)
3. Major allergens (peanut, shellfish, tree nut)
4. Inclusivity (vegetarian option present, no pork-heavy menu)

All matching is case-insensitive substring search against the keyword
sets below, so policy changes are data changes.
"""

from dataclasses import dataclass, field
from typing import Iterable, Sequence


# ==================== KEYWORD SETS ====================

PROHIBITED_SUBSTANCE_KEYWORDS = ("tobacco", "cigarette", "cigar", "vape", "smoking", "nicotine")

RESTRICTED_ALCOHOL_KEYWORDS = (
    "vodka", "whiskey", "rum", "gin", "tequila",
    "brandy", "cognac", "bourbon", "scotch", "liqueur",
)

ALLOWED_ALCOHOL_KEYWORDS = ("beer", "wine", "champagne", "sparkling wine", "prosecco", "lager", "ale")

MAJOR_ALLERGEN_KEYWORDS = ("peanut", "shellfish", "tree nut")

VEGETARIAN_KEYWORDS = ("vegetarian", "vegan", "salad", "veggie")

PORK_KEYWORDS = ("pork", "bacon", "ham", "sausage")

OVER_CONCENTRATION_THRESHOLD = 0.5

COMPLIANT_REASON = "Menu complies with company policy"

NO_VEGETARIAN_REASON = "No vegetarian/vegan options available - consider adding plant-based choices"
PORK_HEAVY_REASON = "Menu is pork-heavy - may exclude religious dietary restrictions"


# ==================== PREDICATES ====================

def matches_any(text: str, keywords: Iterable[str]) -> bool:
    """True if any keyword occurs in text (case-insensitive)."""
    text_lower = text.lower()
    return any(keyword in text_lower for keyword in keywords)


def is_prohibited_substance(item: str) -> bool:
    return matches_any(item, PROHIBITED_SUBSTANCE_KEYWORDS)


def is_restricted_alcohol(item: str) -> bool:
    return matches_any(item, RESTRICTED_ALCOHOL_KEYWORDS)


def is_allowed_alcohol(item: str) -> bool:
    return matches_any(item, ALLOWED_ALCOHOL_KEYWORDS)


def is_major_allergen(item: str) -> bool:
    return matches_any(item, MAJOR_ALLERGEN_KEYWORDS)


def has_inclusivity_signal(menu: Sequence[str]) -> bool:
    """True if at least one item reads as a vegetarian-friendly option."""
    return any(matches_any(item, VEGETARIAN_KEYWORDS) for item in menu)


def is_over_concentrated(
    menu: Sequence[str],
    category_keywords: Iterable[str] = PORK_KEYWORDS,
    threshold: float = OVER_CONCENTRATION_THRESHOLD,
) -> bool:
    """
    True if the share of items matching the category strictly exceeds threshold.

    An empty menu is never over-concentrated.
    """
    if not menu:
        return False
    keywords = tuple(category_keywords)
    matching = sum(1 for item in menu if matches_any(item, keywords))
    return matching / len(menu) > threshold


def check_inclusivity(menu: Sequence[str]) -> list[str]:
    """Return inclusivity issues for a (sanitized) menu, empty if none."""
    issues = []
    if not has_inclusivity_signal(menu):
        issues.append(NO_VEGETARIAN_REASON)
    if is_over_concentrated(menu, PORK_KEYWORDS):
        issues.append(PORK_HEAVY_REASON)
    return issues


# ==================== SANITIZER ====================

# Evaluated in order; first match removes the item.
SANITIZER_CHECKS = (
    ("Tobacco product removed", is_prohibited_substance),
    ("Hard liquor removed", is_restricted_alcohol),
    ("Major allergen removed", is_major_allergen),
)


@dataclass(frozen=True)
class SanitizationResult:
    """Menu with violating items removed, one violation per removed item."""
    sanitized_menu: list[str] = field(default_factory=list)
    violations: list[str] = field(default_factory=list)


def sanitize_menu(menu: Sequence[str]) -> SanitizationResult:
    """
    Strip non-compliant items from the menu.

    Returns:
        SanitizationResult whose sanitized_menu is an order-preserving
        subsequence of the input, with exactly one violation reason per
        removed item (the first matching check wins).
    """
    sanitized = []
    violations = []

    for item in menu:
        for label, check in SANITIZER_CHECKS:
            if check(item):
                violations.append(f"{label}: {item}")
                break
        else:
            sanitized.append(item)

    return SanitizationResult(sanitized_menu=sanitized, violations=violations)


def dedupe_reasons(*reason_groups: Iterable[str]) -> list[str]:
    """Concatenate reason lists, dropping exact duplicates, first occurrence wins."""
    seen = set()
    merged = []
    for group in reason_groups:
        for reason in group:
            if reason not in seen:
                seen.add(reason)
                merged.append(reason)
    return merged
