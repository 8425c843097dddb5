"""
lunch_governance/schemas/requests.py - Inbound request models.

These are the only models routers should accept from HTTP clients.
"""

from pydantic import BaseModel, ConfigDict, Field


class PipelineRunRequest(BaseModel):
    """
    POST /api/pipeline/run - evaluate a proposed group lunch order.

    Both lists are mandatory. Entries are taken as-is; cleaning happens in
    the pipeline (participant normalization, menu sanitization).
    """
    model_config = ConfigDict(populate_by_name=True)

    employees: list[str] = Field(
        ...,
        description="Participant identifiers, possibly with whitespace and duplicates",
        examples=[[" Alice ", "Bob", "Alice"]],
    )

    lunch_menu: list[str] = Field(
        ...,
        alias="lunchMenu",
        description="Proposed menu items as free-text labels",
        examples=[["Grilled chicken", "Garden salad", "Peanut butter cookies"]],
    )
