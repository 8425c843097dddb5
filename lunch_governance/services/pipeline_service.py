"""
Pipeline Service - Orchestrator for the lunch order review pipeline.

Execution order (strict):
  1. Employee  - participant normalization   (normalizer.normalize_participants)
  2. HR        - menu risk assessment        (risk_assessor.assess_menu, may await advisory)
  3. Finance   - budget evaluation           (budget.evaluate_budget)
  4. Manager   - final decision              (decision_maker.make_decision)

The orchestrator only threads stage outputs into the next stage and
aggregates them. Each call builds a fresh PipelineResult; nothing is cached
between runs.
"""

import logging
import uuid
from typing import Optional, Sequence

from lunch_governance.advisory_client import AdvisoryClient
from lunch_governance.budget import BudgetPolicy, evaluate_budget
from lunch_governance.decision_maker import make_decision
from lunch_governance.normalizer import normalize_participants
from lunch_governance.risk_assessor import assess_menu
from lunch_governance.schemas import NormalizedParticipants, PipelineResult

logger = logging.getLogger(__name__)


def create_request_id() -> str:
    """Generate unique request ID for tracking."""
    return str(uuid.uuid4())


async def run_pipeline(
    employees: Sequence[str],
    lunch_menu: Sequence[str],
    budget_policy: BudgetPolicy,
    advisory_client: Optional[AdvisoryClient] = None,
    request_id: Optional[str] = None,
) -> PipelineResult:
    """
    Run all four stages for one lunch order.

    Args:
        employees:       Raw participant identifiers
        lunch_menu:      Raw menu items
        budget_policy:   Per-person rate and planned headcount
        advisory_client: Optional advisory client (None -> rule-based HR stage)
        request_id:      Correlation id for logs (generated if omitted)
    """
    request_id = request_id or create_request_id()

    # ── Step 1: Employee ─────────────────────────────────────────────────
    employee_result = NormalizedParticipants(
        normalized_employees=normalize_participants(employees)
    )
    logger.info(
        f"[{request_id}] Step 1 complete: {len(employee_result.normalized_employees)} participants "
        f"(from {len(employees)} submitted)"
    )

    # ── Step 2: HR ───────────────────────────────────────────────────────
    hr_result = await assess_menu(lunch_menu, advisory_client=advisory_client, request_id=request_id)
    logger.info(
        f"[{request_id}] Step 2 complete: risk={hr_result.risk_level.value} "
        f"kept {len(hr_result.sanitized_menu)}/{len(lunch_menu)} items "
        f"(advisory={'yes' if hr_result.used_advisory else 'no'})"
    )

    # ── Step 3: Finance ──────────────────────────────────────────────────
    finance_result = evaluate_budget(len(employee_result.normalized_employees), budget_policy)
    logger.info(
        f"[{request_id}] Step 3 complete: total={finance_result.total_cost} "
        f"budget={finance_result.budget} within_budget={finance_result.within_budget}"
    )

    # ── Step 4: Manager ──────────────────────────────────────────────────
    manager_result = make_decision(hr_result, finance_result)
    logger.info(f"[{request_id}] Step 4 complete: approved={manager_result.approved}")

    return PipelineResult(
        employee=employee_result,
        hr=hr_result,
        finance=finance_result,
        manager=manager_result,
    )
