"""
Reporter — Emits one message per (result, flagged artifact) pair.

Every active result of the full evaluation is reported, whatever the gate
decides. Results go out ascending by id; artifacts in the order the result
lists them. A sink failure is recorded and the next message is still sent.
"""

from __future__ import annotations

import logging

from compliance_gate.core.labels import canonical_label
from compliance_gate.errors import DeliveryFailure
from compliance_gate.models.artifact_models import ArtifactLike
from compliance_gate.models.evaluation_models import EvaluationResult, PolicyEvaluation
from compliance_gate.models.report_models import MessageType
from compliance_gate.reporting.sinks import ReportingSink

logger = logging.getLogger("compliance_gate.reporter")


def format_violation(result: EvaluationResult, artifact: ArtifactLike) -> str:
    return (
        f"{result.id} ({result.severity.value}): "
        f"{canonical_label(artifact)} : {result.description}"
    )


class Reporter:
    """Forwards messages to a sink exactly once each, recording refusals."""

    def __init__(self, sink: ReportingSink) -> None:
        self.sink = sink
        self.failures: list[DeliveryFailure] = []

    def emit(self, message_type: MessageType, text: str) -> None:
        try:
            self.sink.add(message_type, text)
        except Exception as e:
            logger.error(
                f"Reporting sink rejected {message_type.value} message: "
                f"{type(e).__name__}: {e}"
            )
            self.failures.append(DeliveryFailure(message_type, text, e))

    def report_results(self, evaluation: PolicyEvaluation) -> int:
        """Emit per-violation messages for the whole evaluation. Returns the number attempted."""
        emitted = 0
        for result in sorted(evaluation.results, key=lambda r: r.id):
            for artifact in result.failed_artifacts:
                self.emit(MessageType.RULE_ENGINE, format_violation(result, artifact))
                emitted += 1
        return emitted

    def report_failure(self, digest: str) -> None:
        self.emit(MessageType.PROCESSING_FAILURE, digest)
