from __future__ import annotations

from fastapi import APIRouter, Depends, status

from xdeployment.api.deps import get_runner
from xdeployment.function.models import RunFunctionRequest, RunFunctionResponse
from xdeployment.function.runner import FunctionRunner

router = APIRouter()


@router.post(
    "/run-function",
    response_model=RunFunctionResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def run_function(
    payload: RunFunctionRequest,
    runner: FunctionRunner = Depends(get_runner),  # noqa: B008
) -> RunFunctionResponse:
    """Run the composition for one request. Failures are reported inside the response."""
    return runner.run_function(payload)
