"""
Evaluation Data Models — Severity, rule results and the policy evaluation.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from compliance_gate.errors import ConfigurationError
from compliance_gate.models.artifact_models import Artifact


class Severity(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    FAIL = "FAIL"

    @property
    def rank(self) -> int:
        return SEVERITY_RANKS[self]

    def at_least(self, threshold: Severity) -> bool:
        """True if this severity meets or exceeds the threshold."""
        return self.rank >= threshold.rank

    @classmethod
    def from_value(cls, value: str) -> Severity:
        """Resolve an exact severity name, raising ConfigurationError otherwise."""
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ConfigurationError(
                f"Unknown severity '{value}'. Expected one of: {allowed}"
            ) from None


SEVERITY_RANKS: dict[Severity, int] = {
    Severity.INFO: 0,
    Severity.WARN: 1,
    Severity.FAIL: 2,
}


class EvaluationResult(BaseModel):
    """One rule's verdict over the inspected artifacts."""

    id: str = Field(..., min_length=1, description="Rule identifier, unique within a run")
    description: str = Field(..., description="Human-readable explanation of the violation")
    severity: Severity
    failed_artifacts: tuple[Artifact, ...] = Field(
        default_factory=tuple,
        description="Artifacts flagged by the rule, in canonical order",
    )

    model_config = {"frozen": True}

    @property
    def is_inert(self) -> bool:
        return not self.failed_artifacts


class PolicyEvaluation(BaseModel):
    """All results produced by one rule-engine invocation."""

    results: tuple[EvaluationResult, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _unique_ids(self) -> PolicyEvaluation:
        seen: set[str] = set()
        for result in self.results:
            if result.id in seen:
                raise ValueError(f"Duplicate evaluation result id: {result.id}")
            seen.add(result.id)
        return self
