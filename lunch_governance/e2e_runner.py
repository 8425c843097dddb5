"""
End-to-End Test Runner - Pipeline Stability Validation

Runs every demo scenario through the full pipeline with the rule-based
HR stage (no advisory service) and checks:

Invariants (MUST NEVER fail):
- Sanitized menu is an order-preserving subsequence of the submitted menu
- Every removed item has exactly one violation reason
- High risk is never approved
- No advisory thread/run ids without an advisory service
- Reason list is never empty

Usage:
    python -m lunch_governance.e2e_runner
"""

import asyncio
import sys
from typing import Optional

from lunch_governance.budget import BudgetPolicy
from lunch_governance.config import DEFAULT_BUDGET_PER_PERSON, DEFAULT_PLANNED_HEADCOUNT
from lunch_governance.demo_fixtures import LunchOrderScenario, get_all_fixtures
from lunch_governance.policy_rules import is_allowed_alcohol, is_restricted_alcohol
from lunch_governance.schemas import PipelineResult, RiskLevel
from lunch_governance.services.pipeline_service import run_pipeline


class InvariantViolation(Exception):
    """Critical invariant violated - pipeline unstable."""
    pass


def _is_subsequence(candidate: list[str], source: list[str]) -> bool:
    remaining = iter(source)
    return all(item in remaining for item in candidate)


class E2EValidator:
    """End-to-end validation for the lunch review pipeline."""

    def __init__(self, budget_policy: Optional[BudgetPolicy] = None):
        self.budget_policy = budget_policy or BudgetPolicy(
            per_person_rate=DEFAULT_BUDGET_PER_PERSON,
            planned_headcount=DEFAULT_PLANNED_HEADCOUNT,
        )
        self.results = []
        self.passed = 0
        self.failed = 0

    def _record(self, check: str, scenario: str, status: str, details: str) -> None:
        self.results.append({"check": check, "scenario": scenario, "status": status, "details": details})
        if status == "PASS":
            self.passed += 1
        else:
            self.failed += 1

    def validate_sanitization(self, scenario: LunchOrderScenario, result: PipelineResult) -> None:
        """
        INVARIANT: sanitized menu is a subsequence and each removal has one reason.
        """
        sanitized = result.hr.sanitized_menu
        if not _is_subsequence(sanitized, scenario.lunch_menu):
            raise InvariantViolation(
                f"[{scenario.name}] Sanitized menu {sanitized} is not a subsequence of the input"
            )

        removed = [item for item in scenario.lunch_menu if item not in sanitized]
        for item in removed:
            mentions = [r for r in result.hr.reasons if r.endswith(f": {item}")]
            if len(mentions) != 1:
                raise InvariantViolation(
                    f"[{scenario.name}] Removed item '{item}' has {len(mentions)} violation reasons"
                )

        kept_allowed = [item for item in sanitized if is_allowed_alcohol(item)]
        if any(is_restricted_alcohol(item) for item in sanitized):
            raise InvariantViolation(f"[{scenario.name}] Restricted alcohol survived sanitization")

        self._record(
            "sanitization", scenario.name, "PASS",
            f"Removed: {len(removed)}, kept: {len(sanitized)}, allowed alcohol kept: {len(kept_allowed)}"
        )

    def validate_decision(self, scenario: LunchOrderScenario, result: PipelineResult) -> None:
        """
        INVARIANT: high risk never approved; fallback carries no advisory ids.
        """
        if result.hr.risk_level == RiskLevel.HIGH and result.manager.approved:
            raise InvariantViolation(f"[{scenario.name}] High-risk order was approved")

        if result.hr.thread_id is not None or result.hr.run_id is not None:
            raise InvariantViolation(f"[{scenario.name}] Advisory ids present without advisory service")

        if not result.hr.reasons:
            raise InvariantViolation(f"[{scenario.name}] Empty reason list")

        self._record(
            "decision_invariants", scenario.name, "PASS",
            f"risk={result.hr.risk_level.value}, approved={result.manager.approved}"
        )

    def validate_scenario_specific(self, scenario: LunchOrderScenario, result: PipelineResult) -> None:
        """Ensure fixtures behave as documented."""
        problems = []
        if result.hr.risk_level != scenario.expected_risk:
            problems.append(f"risk {result.hr.risk_level.value} != {scenario.expected_risk.value}")
        if result.manager.approved != scenario.expected_approved:
            problems.append(f"approved {result.manager.approved} != {scenario.expected_approved}")
        missing_removals = [item for item in scenario.expected_removed if item in result.hr.sanitized_menu]
        if missing_removals:
            problems.append(f"not removed: {missing_removals}")

        if problems:
            self._record(f"scenario_{scenario.name}", scenario.name, "FAIL", "; ".join(problems))
        else:
            self._record(
                f"scenario_{scenario.name}", scenario.name, "PASS",
                f"Decision: {result.manager.final_decision}"
            )

    async def run_e2e_test(self, scenario: LunchOrderScenario) -> PipelineResult:
        """Run one scenario through the pipeline and validate it."""
        result = await run_pipeline(
            employees=scenario.employees,
            lunch_menu=scenario.lunch_menu,
            budget_policy=self.budget_policy,
            advisory_client=None,
            request_id=f"e2e_{scenario.name}",
        )
        try:
            self.validate_sanitization(scenario, result)
            self.validate_decision(scenario, result)
        except InvariantViolation as e:
            self._record("invariant", scenario.name, "CRITICAL_FAIL", str(e))
            raise
        self.validate_scenario_specific(scenario, result)
        return result

    async def run_all_scenarios(self) -> dict:
        """Run all demo scenarios and collect results."""
        results = {}
        for name, scenario in get_all_fixtures().items():
            try:
                results[name] = await self.run_e2e_test(scenario)
            except InvariantViolation as e:
                results[name] = {"scenario": name, "status": "CRITICAL_FAIL", "error": str(e)}
        return results

    def print_summary(self) -> bool:
        """Print validation summary. Returns True when every check passed."""
        print("\n" + "=" * 80)
        print("VALIDATION SUMMARY")
        print("=" * 80)

        total = self.passed + self.failed
        print(f"\nTotal checks: {total}")
        print(f"Passed: {self.passed}")
        print(f"Failed: {self.failed}")

        for r in self.results:
            if r["status"] != "PASS":
                print(f"  - [{r['scenario']}] {r['check']} {r['status']}: {r['details']}")

        print("\n" + "=" * 80)
        return self.failed == 0


async def main() -> int:
    validator = E2EValidator()
    await validator.run_all_scenarios()
    return 0 if validator.print_summary() else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
