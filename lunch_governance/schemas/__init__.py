"""
lunch_governance/schemas - schema package.

Domain models (stage results) live in domain.py; inbound request bodies
live in requests.py. Re-exported here so callers can write
`from lunch_governance.schemas import AssessmentResult`.
"""

from lunch_governance.schemas.domain import (
    RiskLevel,
    NormalizedParticipants,
    AssessmentResult,
    BudgetResult,
    ManagerDecision,
    PipelineResult,
)
from lunch_governance.schemas.requests import PipelineRunRequest

__all__ = [
    "RiskLevel",
    "NormalizedParticipants",
    "AssessmentResult",
    "BudgetResult",
    "ManagerDecision",
    "PipelineResult",
    "PipelineRunRequest",
]
