"""
Compliance Gate — POST /evaluate endpoint.

Accepts results already produced by a rule engine, gates them against the
requested (or configured) threshold, and returns the decision together with
every message that was reported.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from compliance_gate.api.dependencies import get_reporting_sink, get_settings
from compliance_gate.config import Settings
from compliance_gate.core.compliance_checker import ComplianceChecker
from compliance_gate.core.rule_engine import StaticRulesetEngine
from compliance_gate.errors import ConfigurationError, ReportDeliveryError
from compliance_gate.models.api_models import EvaluateRequest, EvaluateResponse
from compliance_gate.models.evaluation_models import PolicyEvaluation
from compliance_gate.reporting.sinks import (
    FanoutReportingSink,
    InMemoryReportingSink,
    ReportingSink,
)

logger = logging.getLogger("compliance_gate.api")
router = APIRouter()


@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate(
    req: EvaluateRequest,
    config: Settings = Depends(get_settings),
    server_sink: ReportingSink = Depends(get_reporting_sink),
):
    """Gate a precomputed policy evaluation."""
    try:
        evaluation = PolicyEvaluation(results=tuple(req.results))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=[err["msg"] for err in e.errors()])

    collected = InMemoryReportingSink()
    try:
        checker = ComplianceChecker(
            ruleset_description=req.ruleset,
            rule_engine=StaticRulesetEngine(evaluation),
            sink=FanoutReportingSink(collected, server_sink),
            fail_on=req.fail_on if req.fail_on is not None else config.fail_on,
        )
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        outcome = checker.execute(evaluation)
    except ReportDeliveryError as e:
        logger.warning(f"Report sink delivery incomplete: {e}")
        outcome = e.outcome

    return EvaluateResponse(
        passed=outcome.passed,
        fail_on=outcome.fail_on.value,
        failing_result_ids=outcome.failing_result_ids,
        digest=outcome.digest,
        messages=collected.messages,
    )
