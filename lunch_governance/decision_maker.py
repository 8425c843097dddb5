"""
Decision Maker - manager stage of the pipeline.

Precedence (first match wins):
1. high risk    -> rejected (health/safety)
2. over budget  -> rejected (budget)
3. medium risk  -> approved with caution
4. otherwise    -> fully approved
"""

from lunch_governance.schemas import AssessmentResult, BudgetResult, ManagerDecision, RiskLevel


def format_money(amount: float) -> str:
    """$120 for whole amounts, $120.50 otherwise."""
    if float(amount).is_integer():
        return f"${int(amount)}"
    return f"${amount:.2f}"


def make_decision(assessment: AssessmentResult, budget: BudgetResult) -> ManagerDecision:
    reasons = ", ".join(assessment.reasons)

    if assessment.risk_level == RiskLevel.HIGH:
        return ManagerDecision(
            approved=False,
            message=f"BLOCKED: High risk level detected in lunch menu. Reasons: {reasons}",
            final_decision="Lunch order rejected due to high health/safety risk",
        )

    if not budget.within_budget:
        return ManagerDecision(
            approved=False,
            message=(
                f"BLOCKED: Budget exceeded. Total cost: {format_money(budget.total_cost)}, "
                f"Budget: {format_money(budget.budget)}"
            ),
            final_decision="Lunch order rejected due to budget constraints",
        )

    if assessment.risk_level == RiskLevel.MEDIUM:
        return ManagerDecision(
            approved=True,
            message=f"APPROVED with caution: Medium risk detected. {reasons}. Please review sanitized menu.",
            final_decision="Lunch order approved with caution - please review the sanitized menu",
        )

    return ManagerDecision(
        approved=True,
        message=(
            f"APPROVED: All checks passed. Cost: {format_money(budget.total_cost)} "
            f"within budget of {format_money(budget.budget)}"
        ),
        final_decision="Lunch order fully approved",
    )
