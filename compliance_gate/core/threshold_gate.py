"""
Threshold Gate — Decides whether a pass fails under the configured severity.

The failing set is the union of every bucket whose severity ranks at or above
the threshold. Lowering the threshold can only grow the failing set.
"""

from __future__ import annotations

from dataclasses import dataclass

from compliance_gate.core.aggregator import SeverityBuckets
from compliance_gate.models.evaluation_models import EvaluationResult, Severity


@dataclass(frozen=True)
class GateDecision:
    fail_on: Severity
    failing_results: tuple[EvaluationResult, ...]

    @property
    def failed(self) -> bool:
        return bool(self.failing_results)


def failing_results(
    buckets: SeverityBuckets,
    threshold: Severity,
) -> tuple[EvaluationResult, ...]:
    """Collect results from all buckets at or above threshold, sorted by id."""
    selected: list[EvaluationResult] = []
    for severity in Severity:
        if severity.at_least(threshold):
            selected.extend(buckets.get(severity))
    return tuple(sorted(selected, key=lambda r: r.id))


def apply_threshold(buckets: SeverityBuckets, threshold: Severity) -> GateDecision:
    """Gate the buckets against the threshold."""
    return GateDecision(
        fail_on=threshold,
        failing_results=failing_results(buckets, threshold),
    )
