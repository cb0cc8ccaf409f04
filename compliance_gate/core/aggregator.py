"""
Aggregator — Partitions evaluation results into per-severity buckets.

Results that flagged no artifacts are inert and never enter a bucket.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from compliance_gate.models.evaluation_models import (
    EvaluationResult,
    PolicyEvaluation,
    Severity,
)


@dataclass(frozen=True)
class SeverityBuckets:
    """Active results keyed by severity, each bucket sorted by result id."""

    buckets: dict[Severity, tuple[EvaluationResult, ...]] = field(default_factory=dict)

    def get(self, severity: Severity) -> tuple[EvaluationResult, ...]:
        return self.buckets.get(severity, ())

    def counts(self) -> dict[str, int]:
        return {s.value: len(self.get(s)) for s in Severity}


def aggregate(evaluation: PolicyEvaluation) -> SeverityBuckets:
    """Partition the evaluation's active results by severity."""
    partition: dict[Severity, list[EvaluationResult]] = {s: [] for s in Severity}
    for result in evaluation.results:
        if result.is_inert:
            continue
        partition[result.severity].append(result)

    return SeverityBuckets(
        buckets={
            severity: tuple(sorted(results, key=lambda r: r.id))
            for severity, results in partition.items()
        }
    )
