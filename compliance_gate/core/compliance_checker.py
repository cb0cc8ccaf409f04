"""
Compliance Checker — Runs one evaluation pass end to end.

Pipeline:
1. Ask the rule engine for a PolicyEvaluation
2. Aggregate active results into severity buckets
3. Gate the buckets against the fail_on threshold
4. Report every (result, artifact) pair to the sink
5. If the gate failed, build the bounded digest and report it too
6. Return the Outcome

The checker keeps no per-pass state: each call returns its own Outcome, so
one instance can serve concurrent callers as long as the sink can.
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from compliance_gate.config import FAIL_ON_KEY, Settings, settings, severity_from_config
from compliance_gate.core.aggregator import aggregate
from compliance_gate.core.reporter import Reporter
from compliance_gate.core.rule_engine import PolicyEngine
from compliance_gate.core.summary import format_digest, message_prefix
from compliance_gate.core.threshold_gate import apply_threshold
from compliance_gate.errors import ReportDeliveryError
from compliance_gate.models.artifact_models import Artifact
from compliance_gate.models.evaluation_models import PolicyEvaluation, Severity
from compliance_gate.models.report_models import Outcome
from compliance_gate.models.workflow_models import WorkflowStepResult
from compliance_gate.reporting.sinks import ReportingSink, build_reporting_sink

logger = logging.getLogger("compliance_gate.checker")


class ComplianceChecker:
    """Evaluates a rule set and escalates violations at or above fail_on."""

    def __init__(
        self,
        ruleset_description: str,
        rule_engine: PolicyEngine,
        sink: ReportingSink,
        fail_on: Severity | str = Severity.FAIL,
        name: str | None = None,
    ) -> None:
        self.ruleset_description = ruleset_description
        self.rule_engine = rule_engine
        self.sink = sink
        self.fail_on = (
            fail_on if isinstance(fail_on, Severity) else Severity.from_value(fail_on)
        )
        self.name = name or f"compliance-checker[{ruleset_description}]"

    @classmethod
    def from_settings(
        cls,
        rule_engine: PolicyEngine,
        sink: ReportingSink | None = None,
        config: Settings | None = None,
    ) -> ComplianceChecker:
        """Build a checker from application settings. Raises ConfigurationError on a bad fail_on."""
        config = config or settings
        return cls(
            ruleset_description=config.ruleset_description,
            rule_engine=rule_engine,
            sink=sink or build_reporting_sink(config),
            fail_on=config.fail_on_severity,
        )

    def configure(self, config_map: Mapping[str, str]) -> None:
        """Apply a workflow config map. Only the failOn key is recognised."""
        self.fail_on = severity_from_config(FAIL_ON_KEY, config_map, Severity.FAIL)
        logger.debug(f"{self.name}: fail_on={self.fail_on.value}")

    def evaluate(self, artifacts: Sequence[Artifact]) -> Outcome:
        """Evaluate the rule set over the artifacts and gate the results."""
        logger.info(f"Evaluate compliance rule set: {self.ruleset_description}")
        evaluation = self.rule_engine.evaluate(artifacts)
        logger.info("Rule evaluation done")
        return self.execute(evaluation)

    def execute(self, evaluation: PolicyEvaluation) -> Outcome:
        """
        Gate and report an already computed evaluation.

        Raises:
            ReportDeliveryError: if the sink refused any message. Every message
                is still attempted and the outcome is attached to the error.
        """
        buckets = aggregate(evaluation)
        logger.info(f"Check evaluation results... {buckets.counts()}")

        decision = apply_threshold(buckets, self.fail_on)

        reporter = Reporter(self.sink)
        reporter.report_results(evaluation)

        digest: str | None = None
        if decision.failed:
            digest = format_digest(
                message_prefix(self.ruleset_description), decision.failing_results
            )
            reporter.report_failure(digest)
            logger.info(digest)

        outcome = Outcome(
            passed=not decision.failed,
            fail_on=self.fail_on,
            failing_results=decision.failing_results,
            digest=digest,
        )
        logger.info(
            f"Check evaluation results... done. "
            f"{'failed' if outcome.failed else 'passed'} "
            f"({len(outcome.failing_results)} fail causing results)"
        )

        if reporter.failures:
            raise ReportDeliveryError(reporter.failures, outcome)
        return outcome

    def process(self, artifacts: Sequence[Artifact]) -> tuple[list[Artifact], Outcome]:
        """Workflow step entry: evaluate, then pass the artifacts through unchanged."""
        outcome = self.evaluate(artifacts)
        return list(artifacts), outcome

    def post_process_result(
        self, result: WorkflowStepResult, outcome: Outcome
    ) -> WorkflowStepResult:
        """Record this step's fail-causing results on the workflow result."""
        if outcome.failed:
            result.add_fail_causing_results(self.name, outcome.failing_results)
        return result
