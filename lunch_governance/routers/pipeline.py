"""
Pipeline Router - POST /api/pipeline/run

Runs the full review pipeline synchronously and returns the aggregated
stage results. Request validation problems are reported as HTTP 400 with
the field that is missing or malformed.
"""

import logging

from fastapi import APIRouter, Request

from lunch_governance.schemas import PipelineResult, PipelineRunRequest
from lunch_governance.services.pipeline_service import create_request_id, run_pipeline

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["pipeline"],
)


@router.post(
    "/pipeline/run",
    response_model=PipelineResult,
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def run_lunch_pipeline(body: PipelineRunRequest, request: Request):
    """
    POST /api/pipeline/run - evaluate a proposed lunch order.

    Request body:
    ```json
    {
        "employees": [" Alice ", "Bob", "Alice"],
        "lunchMenu": ["Garden salad", "Peanut butter cookies"]
    }
    ```

    Response: employee / hr / finance / manager stage results. threadId and
    runId appear under hr only when the advisory service answered.
    """
    request_id = create_request_id()
    logger.info(
        f"[{request_id}] Received pipeline request "
        f"({len(body.employees)} employees, {len(body.lunch_menu)} menu items)"
    )

    state = request.app.state
    return await run_pipeline(
        employees=body.employees,
        lunch_menu=body.lunch_menu,
        budget_policy=state.budget_policy,
        advisory_client=state.advisory_client,
        request_id=request_id,
    )
