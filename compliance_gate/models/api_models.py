"""
Evaluate Request/Response Models — API contract schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from compliance_gate.models.evaluation_models import EvaluationResult
from compliance_gate.models.report_models import ReportMessage


class EvaluateRequest(BaseModel):
    """Request body for /evaluate: results already produced by a rule engine."""

    ruleset: str = Field(default="default", description="Rule set name shown in the digest")
    fail_on: str | None = Field(
        default=None, description="INFO, WARN or FAIL. Defaults to the server setting."
    )
    results: list[EvaluationResult] = Field(default_factory=list)


class EvaluateResponse(BaseModel):
    """Gate decision plus everything that was sent to the report sink."""

    passed: bool
    fail_on: str
    failing_result_ids: list[str] = Field(default_factory=list)
    digest: str | None = None
    messages: list[ReportMessage] = Field(default_factory=list)
