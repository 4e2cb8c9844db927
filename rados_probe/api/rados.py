from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from rados_probe.models.rados import ProbeResult, Thresholds
from rados_probe.services import preflight, rados_monitor

router = APIRouter()


@router.get(
    "/latency",
    response_model=ProbeResult,
    summary="Pool write latency",
)
def rados_latency(
    pool: str = Query(..., min_length=1, description="Pool to benchmark"),
    warning: Optional[int] = Query(None, description="Warning threshold in ms"),
    critical: Optional[int] = Query(None, description="Critical threshold in ms"),
) -> ProbeResult:
    """
    Run a rados bench write probe against the given pool and return the
    evaluated result, the same one the check_rados_latency plugin prints.

    If the host cannot run the probe (not root, rados or timeout missing),
    a HTTP 503 Service Unavailable is returned with the reason in detail.
    The request blocks for the length of the benchmark.
    """
    try:
        preflight.run_preflight()
    except preflight.PreflightError as exc:
        raise HTTPException(
            status_code=503,
            detail=str(exc),
        ) from exc

    return rados_monitor.get_rados_latency(
        pool,
        Thresholds(warning=warning, critical=critical),
    )
