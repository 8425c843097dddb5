"""
Risk Assessor - hybrid advisory + rule-based menu assessment (HR stage).

Flow:
1. Ask the advisory client for an opinion (optional, never trusted alone)
2a. Advisory answered: risk from the interpreted text, reasons merged from
    the advisory text, the sanitizer and the inclusivity checks
2b. Advisory unavailable: rule-only assessment
3. Sanitization always runs on the raw menu

Both branches yield a complete AssessmentResult. The only visible
difference is thread_id/run_id, which are set only on the advisory branch.
"""

import logging
from typing import Optional, Sequence

from lunch_governance.advisory_client import (
    AdvisoryClient,
    AdvisoryOutcome,
    AdvisorySuccess,
    AdvisoryUnavailable,
)
from lunch_governance.policy_rules import (
    COMPLIANT_REASON,
    check_inclusivity,
    dedupe_reasons,
    is_major_allergen,
    is_prohibited_substance,
    is_restricted_alcohol,
    sanitize_menu,
)
from lunch_governance.response_interpreter import interpret_response
from lunch_governance.schemas import AssessmentResult, RiskLevel

logger = logging.getLogger(__name__)


def _reasons_or_compliant(reasons: list[str]) -> list[str]:
    return reasons if reasons else [COMPLIANT_REASON]


def classify_menu_risk(menu: Sequence[str], inclusivity_issues: Sequence[str]) -> RiskLevel:
    """
    Rule-only risk level.

    high:   any raw item is a prohibited substance or a major allergen
    medium: any raw item is restricted alcohol, or inclusivity issues exist
    low:    otherwise
    """
    if any(is_prohibited_substance(item) or is_major_allergen(item) for item in menu):
        return RiskLevel.HIGH
    if any(is_restricted_alcohol(item) for item in menu) or inclusivity_issues:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def rule_based_assessment(menu: Sequence[str]) -> AssessmentResult:
    """Deterministic fallback used whenever the advisory path is unavailable."""
    sanitization = sanitize_menu(menu)
    inclusivity_issues = check_inclusivity(sanitization.sanitized_menu)
    reasons = dedupe_reasons(sanitization.violations, inclusivity_issues)

    return AssessmentResult(
        sanitized_menu=sanitization.sanitized_menu,
        risk_level=classify_menu_risk(menu, inclusivity_issues),
        reasons=_reasons_or_compliant(reasons),
    )


def advisory_assessment(menu: Sequence[str], advisory: AdvisorySuccess) -> AssessmentResult:
    """Combine an advisory answer with the deterministic sanitizer."""
    risk_level, advisory_reasons = interpret_response(advisory.response_text)
    sanitization = sanitize_menu(menu)
    inclusivity_issues = check_inclusivity(sanitization.sanitized_menu)
    reasons = dedupe_reasons(advisory_reasons, sanitization.violations, inclusivity_issues)

    return AssessmentResult(
        sanitized_menu=sanitization.sanitized_menu,
        risk_level=risk_level,
        reasons=_reasons_or_compliant(reasons),
        thread_id=advisory.thread_id,
        run_id=advisory.run_id,
    )


async def assess_menu(
    menu: Sequence[str],
    advisory_client: Optional[AdvisoryClient] = None,
    request_id: str = "-",
) -> AssessmentResult:
    """
    Assess a raw lunch menu. Never raises for advisory problems.

    Args:
        menu: Raw menu items as submitted
        advisory_client: Optional advisory client (None means rules only)
        request_id: Identifier used to correlate log lines

    Returns:
        AssessmentResult (thread_id/run_id present only if advisory was used)
    """
    menu = list(menu)

    if advisory_client is None:
        logger.info(f"[{request_id}] No advisory client - using rule-based assessment")
        return rule_based_assessment(menu)

    try:
        advisory = await advisory_client.consult(menu, request_id=request_id)
    except Exception as e:
        logger.error(f"[{request_id}] Advisory client raised: {e}", exc_info=True)
        advisory = AdvisoryUnavailable(AdvisoryOutcome.FAILED, str(e))

    if isinstance(advisory, AdvisorySuccess):
        result = advisory_assessment(menu, advisory)
        logger.info(
            f"[{request_id}] Advisory assessment complete "
            f"(risk={result.risk_level.value}, reasons={len(result.reasons)}, run={advisory.run_id})"
        )
        return result

    logger.warning(
        f"[{request_id}] Advisory unavailable ({advisory.outcome.value}: {advisory.detail}) "
        f"- using rule-based assessment"
    )
    result = rule_based_assessment(menu)
    logger.info(f"[{request_id}] Rule-based assessment complete (risk={result.risk_level.value})")
    return result
