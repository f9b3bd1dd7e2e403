"""
Health check endpoint for monitoring and orchestration.

Reports uptime and whether the control plane answers. Used by container
health checks and load balancers.
"""

import time
from datetime import datetime
from typing import Any

import httpx
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from inspectweb.control_plane.client import ControlPlaneClient, get_control_plane

router = APIRouter(tags=["health"])

# Set in lifespan
_app_start_time: datetime | None = None


def set_app_start_time(start_time: datetime) -> None:
    """Called by lifespan to track when app started."""
    global _app_start_time
    _app_start_time = start_time


def get_uptime_seconds() -> int:
    """Calculate seconds since app start."""
    if _app_start_time is None:
        return 0
    return int((datetime.now() - _app_start_time).total_seconds())


async def check_control_plane(control_plane: ControlPlaneClient) -> dict[str, Any]:
    """
    Probe the control plane's /health.

    Returns: {"status": "ok"|"down", "response_time_ms": N, "error": str (if down)}
    """
    start = time.time()
    try:
        response = await control_plane.ping()
    except httpx.HTTPError as e:
        return {
            "status": "down",
            "response_time_ms": int((time.time() - start) * 1000),
            "error": type(e).__name__,
        }

    response_time_ms = int((time.time() - start) * 1000)
    if not response.is_success:
        return {
            "status": "down",
            "response_time_ms": response_time_ms,
            "error": f"HTTP {response.status_code}",
        }
    return {"status": "ok", "response_time_ms": response_time_ms}


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Returns 200 with status 'degraded' when the control plane is unreachable.",
)
async def health_check(
    control_plane: ControlPlaneClient = Depends(get_control_plane),
) -> JSONResponse:
    """
    Example response (degraded):
        {
            "status": "degraded",
            "uptime_seconds": 3600,
            "checks": {
                "control_plane": {"status": "down", "response_time_ms": 30000, "error": "ReadTimeout"}
            }
        }
    """
    control_plane_check = await check_control_plane(control_plane)
    overall_status = "ok" if control_plane_check["status"] == "ok" else "degraded"

    return JSONResponse(
        content={
            "status": overall_status,
            "uptime_seconds": get_uptime_seconds(),
            "checks": {"control_plane": control_plane_check},
        },
        status_code=status.HTTP_200_OK,
    )
