"""
Workflow Hand-off Models — What a checker passes on to the surrounding workflow.
"""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, Field

from compliance_gate.models.artifact_models import Artifact
from compliance_gate.models.evaluation_models import EvaluationResult


class WorkflowStepResult(BaseModel):
    """Artifacts flowing out of a workflow step plus any fail-causing results."""

    artifacts: list[Artifact] = Field(default_factory=list)
    fail_causing_results: dict[str, list[EvaluationResult]] = Field(
        default_factory=dict,
        description="Step name -> results that made that step fail",
    )

    def add_fail_causing_results(
        self, step_name: str, results: Iterable[EvaluationResult]
    ) -> None:
        self.fail_causing_results.setdefault(step_name, []).extend(results)

    @property
    def has_failures(self) -> bool:
        return any(self.fail_causing_results.values())
