"""
Lunch Order Governance - Pydantic v2 domain models.

One model per pipeline stage result plus the aggregate PipelineResult.
Field names are snake_case in Python and camelCase on the wire
(serialize with by_alias=True). All models are frozen: a stage result is
never mutated after the stage returns it.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RiskLevel(str, Enum):
    """Three-level risk classification, ordered low < medium < high."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def severity(self) -> int:
        return _RISK_SEVERITY[self]

    def __lt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.severity >= other.severity


_RISK_SEVERITY = {RiskLevel.LOW: 0, RiskLevel.MEDIUM: 1, RiskLevel.HIGH: 2}


class StageModel(BaseModel):
    """Base for stage results: immutable, populated by field name or alias."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class NormalizedParticipants(StageModel):
    """Employee stage: cleaned participant list."""
    normalized_employees: list[str] = Field(
        default_factory=list,
        alias="normalizedEmployees",
        description="Trimmed, non-empty, unique identifiers in first-seen order"
    )


class AssessmentResult(StageModel):
    """HR stage: sanitized menu, risk level and the reasons behind it."""
    sanitized_menu: list[str] = Field(default_factory=list, alias="sanitizedMenu")
    risk_level: RiskLevel = Field(..., alias="riskLevel")
    reasons: list[str] = Field(default_factory=list)
    thread_id: Optional[str] = Field(
        None,
        alias="threadId",
        description="Advisory conversation thread; present only when the advisory path completed"
    )
    run_id: Optional[str] = Field(
        None,
        alias="runId",
        description="Advisory run; present only when the advisory path completed"
    )

    @property
    def used_advisory(self) -> bool:
        return self.thread_id is not None and self.run_id is not None


class BudgetResult(StageModel):
    """Finance stage: cost of the order against the fixed lunch budget."""
    total_cost: float = Field(..., ge=0.0, alias="totalCost")
    budget: float = Field(..., ge=0.0)
    within_budget: bool = Field(..., alias="withinBudget")
    cost_per_person: float = Field(..., gt=0.0, alias="costPerPerson")


class ManagerDecision(StageModel):
    """Manager stage: final approve/reject outcome."""
    approved: bool
    message: str
    final_decision: str = Field(..., alias="finalDecision")


class PipelineResult(StageModel):
    """Aggregate of all four stage results for one pipeline invocation."""
    employee: NormalizedParticipants
    hr: AssessmentResult
    finance: BudgetResult
    manager: ManagerDecision
