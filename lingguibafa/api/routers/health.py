"""Basic service health endpoints."""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


@router.get(
    "/healthz",
    summary="Service readiness probe",
    response_model=dict[str, str],
)
async def health_check() -> dict[str, str]:
    return {"status": "ok"}


__all__ = ["router"]
