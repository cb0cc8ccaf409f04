"""
Tests for the Compliance Checker — full evaluation passes.
"""

import pytest

from compliance_gate.config import Settings
from compliance_gate.core.compliance_checker import ComplianceChecker
from compliance_gate.core.rule_engine import RulesetEngine, StaticRulesetEngine
from compliance_gate.errors import ConfigurationError, ReportDeliveryError
from compliance_gate.models.evaluation_models import PolicyEvaluation, Severity
from compliance_gate.models.report_models import MessageType
from compliance_gate.models.workflow_models import WorkflowStepResult
from compliance_gate.reporting.sinks import InMemoryReportingSink


def _checker(results, fail_on=Severity.FAIL, sink=None):
    evaluation = PolicyEvaluation(results=tuple(results))
    return ComplianceChecker(
        ruleset_description="licenses",
        rule_engine=StaticRulesetEngine(evaluation),
        sink=sink if sink is not None else InMemoryReportingSink(),
        fail_on=fail_on,
    )


@pytest.fixture
def fail_and_warn(make_artifact, make_result):
    return [
        make_result("R1", Severity.FAIL, [make_artifact("a")]),
        make_result("R2", Severity.WARN, [make_artifact("b")]),
    ]


def test_default_threshold_fails_only_on_fail(fail_and_warn, label):
    checker = _checker(fail_and_warn)
    outcome = checker.evaluate([])

    assert outcome.failed
    assert outcome.failing_result_ids == ["R1"]
    assert label("a") in outcome.digest
    assert label("b") not in outcome.digest


def test_warn_threshold_includes_warn(fail_and_warn, label):
    outcome = _checker(fail_and_warn, fail_on="WARN").evaluate([])

    assert outcome.failing_result_ids == ["R1", "R2"]
    assert outcome.digest.index(label("a")) < outcome.digest.index(label("b"))


def test_info_threshold_skips_inert_results(make_artifact, make_result):
    results = [
        make_result("R1", Severity.INFO, []),
        make_result("R2", Severity.WARN, [make_artifact("b")]),
    ]
    sink = InMemoryReportingSink()
    outcome = _checker(results, fail_on=Severity.INFO, sink=sink).evaluate([])

    assert outcome.failing_result_ids == ["R2"]
    assert "R1 violated" not in outcome.digest
    assert all(not m.text.startswith("R1 ") for m in sink.messages)


def test_pass_still_reports_but_emits_no_digest(make_artifact, make_result, label):
    sink = InMemoryReportingSink()
    outcome = _checker(
        [make_result("R1", Severity.WARN, [make_artifact("a")])], sink=sink
    ).evaluate([])

    assert outcome.passed
    assert outcome.failing_results == ()
    assert outcome.digest is None
    assert sink.of_type(MessageType.RULE_ENGINE) == [f"R1 (WARN): {label('a')} : R1 violated"]
    assert sink.of_type(MessageType.PROCESSING_FAILURE) == []


def test_failure_digest_sent_after_violation_messages(fail_and_warn):
    sink = InMemoryReportingSink()
    outcome = _checker(fail_and_warn, sink=sink).evaluate([])

    kinds = [m.message_type for m in sink.messages]
    assert kinds == [MessageType.RULE_ENGINE, MessageType.RULE_ENGINE, MessageType.PROCESSING_FAILURE]
    assert sink.messages[-1].text == outcome.digest
    assert outcome.digest.startswith("Rule engine=[licenses] failed evaluation. Due to:")


def test_reordered_input_gives_identical_output(make_artifact, make_result):
    results = [
        make_result(f"R{i}", Severity.FAIL, [make_artifact(f"a{i % 4}"), make_artifact("z")])
        for i in range(7)
    ]
    sink_a, sink_b = InMemoryReportingSink(), InMemoryReportingSink()
    outcome_a = _checker(results, sink=sink_a).evaluate([])
    outcome_b = _checker(list(reversed(results)), sink=sink_b).evaluate([])

    assert sink_a.messages == sink_b.messages
    assert outcome_a.digest == outcome_b.digest
    assert outcome_a.failing_result_ids == outcome_b.failing_result_ids


def test_bad_threshold_rejected_before_evaluation():
    with pytest.raises(ConfigurationError):
        _checker([], fail_on="CRITICAL")


def test_configure_reads_fail_on_key(fail_and_warn):
    checker = _checker(fail_and_warn)
    checker.configure({"failOn": "WARN", "unrelated": "x"})
    assert checker.fail_on is Severity.WARN

    checker.configure({})
    assert checker.fail_on is Severity.FAIL

    with pytest.raises(ConfigurationError):
        checker.configure({"failOn": "fail"})


def test_upstream_error_propagates_without_reporting(make_artifact):
    def broken_rule(artifacts):
        raise RuntimeError("license database unreachable")

    sink = InMemoryReportingSink()
    checker = ComplianceChecker(
        ruleset_description="licenses",
        rule_engine=RulesetEngine({"broken": broken_rule}),
        sink=sink,
    )
    with pytest.raises(RuntimeError, match="license database unreachable"):
        checker.evaluate([make_artifact("a")])
    assert sink.messages == []


def test_rules_receive_the_artifacts(make_artifact, make_result):
    seen = []

    def forbidden_names(artifacts):
        seen.extend(artifacts)
        flagged = [a for a in artifacts if a.coordinates[0].name == "bad"]
        return make_result("forbidden", Severity.FAIL, flagged)

    artifacts = [make_artifact("good"), make_artifact("bad")]
    checker = ComplianceChecker("names", RulesetEngine({"forbidden": forbidden_names}), InMemoryReportingSink())
    outcome = checker.evaluate(artifacts)

    assert seen == artifacts
    assert outcome.failing_result_ids == ["forbidden"]


def test_sink_errors_raised_after_full_pass(fail_and_warn):
    class RefusingSink:
        def __init__(self):
            self.attempts = 0

        def add(self, message_type, text):
            self.attempts += 1
            raise OSError("disk full")

    sink = RefusingSink()
    with pytest.raises(ReportDeliveryError) as excinfo:
        _checker(fail_and_warn, sink=sink).evaluate([])

    assert sink.attempts == 3
    assert len(excinfo.value.failures) == 3
    assert excinfo.value.outcome.failing_result_ids == ["R1"]


def test_process_passes_artifacts_through(make_artifact, fail_and_warn):
    artifacts = [make_artifact("a"), make_artifact("b")]
    passed_on, outcome = _checker(fail_and_warn).process(artifacts)
    assert passed_on == artifacts
    assert outcome.failed


def test_post_process_records_failing_results(fail_and_warn):
    checker = _checker(fail_and_warn)
    outcome = checker.evaluate([])
    result = checker.post_process_result(WorkflowStepResult(), outcome)

    assert result.has_failures
    assert [r.id for r in result.fail_causing_results[checker.name]] == ["R1"]


def test_post_process_leaves_passing_result_untouched(make_artifact, make_result):
    checker = _checker([make_result("R1", Severity.INFO, [make_artifact("a")])])
    result = checker.post_process_result(WorkflowStepResult(), checker.evaluate([]))
    assert result.fail_causing_results == {}
    assert not result.has_failures


def test_from_settings(monkeypatch, fail_and_warn):
    monkeypatch.setenv("FAIL_ON", "WARN")
    monkeypatch.setenv("RULESET_DESCRIPTION", "export-control")
    monkeypatch.setenv("REPORT_SINK", "memory")
    checker = ComplianceChecker.from_settings(
        StaticRulesetEngine(PolicyEvaluation(results=tuple(fail_and_warn))),
        config=Settings(_env_file=None),
    )

    assert checker.fail_on is Severity.WARN
    assert isinstance(checker.sink, InMemoryReportingSink)
    outcome = checker.evaluate([])
    assert outcome.digest.startswith("Rule engine=[export-control]")


def test_duplicate_result_ids_rejected(make_result):
    with pytest.raises(ValueError, match="Duplicate evaluation result id"):
        PolicyEvaluation(
            results=(make_result("R1", Severity.FAIL), make_result("R1", Severity.WARN))
        )
