"""
Rule Engine — Runs registered compliance rules over a set of artifacts.

Rules are supplied by the caller; this package ships none. Each rule check
returns exactly one EvaluationResult. A rule that raises aborts the whole
evaluation: no partial PolicyEvaluation is ever produced.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol, Sequence

from compliance_gate.models.artifact_models import Artifact
from compliance_gate.models.evaluation_models import EvaluationResult, PolicyEvaluation

logger = logging.getLogger("compliance_gate.rules")

# Type for a rule check function
RuleCheckFn = Callable[[Sequence[Artifact]], EvaluationResult]


class PolicyEngine(Protocol):
    def evaluate(self, artifacts: Sequence[Artifact]) -> PolicyEvaluation: ...


class RulesetEngine:
    """
    Registry-driven rule engine.

    Runs every registered check against the full artifact collection, in
    registry order.
    """

    def __init__(self, rules: dict[str, RuleCheckFn] | None = None) -> None:
        self.rules = rules or {}

    def evaluate(self, artifacts: Sequence[Artifact]) -> PolicyEvaluation:
        """
        Run all rules against the artifacts.

        Args:
            artifacts: Artifacts to check.

        Returns:
            PolicyEvaluation with one result per rule.

        Raises:
            Whatever a rule check raises, unchanged.
        """
        start = time.monotonic()
        results = [check_fn(artifacts) for check_fn in self.rules.values()]
        elapsed = (time.monotonic() - start) * 1000
        logger.debug(
            f"Ran {len(self.rules)} rules over {len(artifacts)} artifacts in {elapsed:.1f}ms"
        )
        return PolicyEvaluation(results=tuple(results))


class StaticRulesetEngine:
    """Returns an evaluation computed elsewhere, ignoring the artifacts."""

    def __init__(self, evaluation: PolicyEvaluation) -> None:
        self.evaluation = evaluation

    def evaluate(self, artifacts: Sequence[Artifact]) -> PolicyEvaluation:
        return self.evaluation
