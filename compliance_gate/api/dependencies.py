"""
FastAPI Dependencies — Shared singletons injected via Depends().
"""

from __future__ import annotations

from functools import lru_cache

from compliance_gate.config import Settings, settings
from compliance_gate.reporting.sinks import ReportingSink, build_reporting_sink


def get_settings() -> Settings:
    return settings


@lru_cache
def get_reporting_sink() -> ReportingSink:
    """Shared server-side report sink singleton."""
    return build_reporting_sink(settings)
