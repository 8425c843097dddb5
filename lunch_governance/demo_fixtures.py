"""
Demo Fixtures - Lunch order scenarios for pipeline validation

Core scenarios:
1. Compliant order (low risk, within budget)
2. Allergen order (peanut + shellfish, high risk)
3. Tobacco order (prohibited substance, high risk)
4. Hard liquor order (restricted alcohol, approved with caution)
5. Pork-heavy order (inclusivity gap, approved with caution)
6. Beer and wine order (allowed alcohol, fully approved)
7. Over-budget order (more people than planned)

Expectations assume the default budget policy: $15 per person, planned
headcount 10 (budget $150), and no advisory service.
"""

from dataclasses import dataclass, field
from typing import Optional

from lunch_governance.schemas import RiskLevel


@dataclass(frozen=True)
class LunchOrderScenario:
    name: str
    employees: list[str]
    lunch_menu: list[str]
    expected_risk: RiskLevel
    expected_approved: bool
    expected_removed: list[str] = field(default_factory=list)
    description: Optional[str] = None


def _team(size: int) -> list[str]:
    return [f"Employee {i:02d}" for i in range(1, size + 1)]


SAFE_MENU = [
    "Grilled chicken wrap",
    "Garden salad",
    "Veggie burger",
    "Fruit platter",
    "Sparkling water",
    "Chocolate brownies",
]


def create_compliant_order() -> LunchOrderScenario:
    """
    Eight unique people (after cleanup) and six safe items.
    Expected: cost $120 of $150, low risk, fully approved.
    """
    employees = [" Alice ", "Bob", "Carol", "Dave", "Alice", "Erin", "", "Frank", "Grace", "Heidi  "]
    return LunchOrderScenario(
        name="compliant",
        employees=employees,
        lunch_menu=list(SAFE_MENU),
        expected_risk=RiskLevel.LOW,
        expected_approved=True,
        description="Clean menu with a vegetarian option, within budget",
    )


def create_allergen_order() -> LunchOrderScenario:
    """
    Twelve people and two major-allergen items.
    Expected: both items removed, high risk, rejected.
    """
    return LunchOrderScenario(
        name="allergen",
        employees=_team(12),
        lunch_menu=["Peanut butter cookies", "Shellfish pasta", "Garden salad", "Grilled chicken"],
        expected_risk=RiskLevel.HIGH,
        expected_approved=False,
        expected_removed=["Peanut butter cookies", "Shellfish pasta"],
        description="Major allergens present",
    )


def create_tobacco_order() -> LunchOrderScenario:
    return LunchOrderScenario(
        name="tobacco",
        employees=_team(5),
        lunch_menu=["Cigar tasting", "Veggie wrap", "Iced tea"],
        expected_risk=RiskLevel.HIGH,
        expected_approved=False,
        expected_removed=["Cigar tasting"],
        description="Prohibited substance on the menu",
    )


def create_hard_liquor_order() -> LunchOrderScenario:
    return LunchOrderScenario(
        name="hard_liquor",
        employees=_team(6),
        lunch_menu=["Vodka tonic", "Garden salad", "Craft beer", "Margherita pizza"],
        expected_risk=RiskLevel.MEDIUM,
        expected_approved=True,
        expected_removed=["Vodka tonic"],
        description="Hard liquor removed, beer kept",
    )


def create_pork_heavy_order() -> LunchOrderScenario:
    return LunchOrderScenario(
        name="pork_heavy",
        employees=_team(7),
        lunch_menu=["Bacon sandwich", "Pork ribs", "Sausage roll", "Garden salad"],
        expected_risk=RiskLevel.MEDIUM,
        expected_approved=True,
        description="Three of four items are pork",
    )


def create_beer_and_wine_order() -> LunchOrderScenario:
    return LunchOrderScenario(
        name="beer_and_wine",
        employees=_team(10),
        lunch_menu=["Craft beer", "House red wine", "Vegetarian lasagna", "Caesar salad"],
        expected_risk=RiskLevel.LOW,
        expected_approved=True,
        description="Allowed alcohol only, exactly on budget",
    )


def create_over_budget_order() -> LunchOrderScenario:
    return LunchOrderScenario(
        name="over_budget",
        employees=_team(14),
        lunch_menu=list(SAFE_MENU),
        expected_risk=RiskLevel.LOW,
        expected_approved=False,
        description="Safe menu, fourteen people against a ten-person budget",
    )


DEMO_FIXTURES = {
    "compliant": create_compliant_order,
    "allergen": create_allergen_order,
    "tobacco": create_tobacco_order,
    "hard_liquor": create_hard_liquor_order,
    "pork_heavy": create_pork_heavy_order,
    "beer_and_wine": create_beer_and_wine_order,
    "over_budget": create_over_budget_order,
}


def get_demo_fixture(name: str) -> LunchOrderScenario:
    """
    Get a demo fixture by name.

    Raises:
        ValueError if name not found
    """
    if name not in DEMO_FIXTURES:
        available = ", ".join(DEMO_FIXTURES.keys())
        raise ValueError(f"Unknown fixture '{name}'. Available: {available}")

    return DEMO_FIXTURES[name]()


def get_all_fixtures() -> dict[str, LunchOrderScenario]:
    """Get all demo fixtures as a dictionary."""
    return {name: factory() for name, factory in DEMO_FIXTURES.items()}
