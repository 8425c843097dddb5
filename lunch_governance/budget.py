"""
Budget Evaluator - finance stage of the pipeline.

The lunch budget is a fixed policy figure (planned headcount x per-person
rate). It does not follow the submitted headcount, so a larger group than
planned goes over budget.
"""

from dataclasses import dataclass

from lunch_governance.config import Settings
from lunch_governance.schemas import BudgetResult


@dataclass(frozen=True)
class BudgetPolicy:
    per_person_rate: float
    planned_headcount: int

    @property
    def budget_limit(self) -> float:
        return self.planned_headcount * self.per_person_rate

    @classmethod
    def from_settings(cls, settings: Settings) -> "BudgetPolicy":
        return cls(
            per_person_rate=settings.budget_per_person,
            planned_headcount=settings.planned_headcount,
        )


def evaluate_budget(headcount: int, policy: BudgetPolicy) -> BudgetResult:
    """Cost the order and compare it with the policy budget."""
    total_cost = headcount * policy.per_person_rate
    budget_limit = policy.budget_limit
    return BudgetResult(
        total_cost=total_cost,
        budget=budget_limit,
        within_budget=total_cost <= budget_limit,
        cost_per_person=policy.per_person_rate,
    )
