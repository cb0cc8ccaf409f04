"""
Health Check Route — GET /health
"""

from __future__ import annotations

from fastapi import APIRouter

from compliance_gate.config import settings

router = APIRouter()


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "fail_on": settings.fail_on,
        "report_sink": settings.report_sink,
        "version": "1.0.0",
    }
