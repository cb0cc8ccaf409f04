"""
Reporting Data Models — Sink message kinds, messages and the pass outcome.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from compliance_gate.models.evaluation_models import EvaluationResult, Severity


class MessageType(str, Enum):
    RULE_ENGINE = "RULE_ENGINE"
    PROCESSING_FAILURE = "PROCESSING_FAILURE"


class ReportMessage(BaseModel):
    """A single message handed to a reporting sink."""

    message_type: MessageType
    text: str


class Outcome(BaseModel):
    """Result of one evaluation pass, returned to the caller."""

    passed: bool
    fail_on: Severity
    failing_results: tuple[EvaluationResult, ...] = Field(
        default_factory=tuple,
        description="Results at or above the threshold, sorted by id. Empty on pass.",
    )
    digest: str | None = Field(
        default=None, description="Bounded failure summary. None on pass."
    )

    model_config = {"frozen": True}

    @property
    def failed(self) -> bool:
        return not self.passed

    @property
    def failing_result_ids(self) -> list[str]:
        return [r.id for r in self.failing_results]
