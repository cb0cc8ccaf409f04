"""
Test fixtures shared across all Compliance Gate tests.
"""

import pytest

from compliance_gate.models.artifact_models import Artifact, Coordinate, CoordinateType
from compliance_gate.models.evaluation_models import EvaluationResult, Severity


@pytest.fixture
def make_artifact():
    """Build a Maven artifact org.acme:<name>:1.0."""
    def _make(name: str, version: str = "1.0") -> Artifact:
        return Artifact(
            coordinates=(
                Coordinate(
                    type=CoordinateType.MAVEN,
                    namespace="org.acme",
                    name=name,
                    version=version,
                ),
            ),
            filename=f"{name}-{version}.jar",
        )
    return _make


@pytest.fixture
def make_result():
    """Build an EvaluationResult; description defaults to '<id> violated'."""
    def _make(result_id, severity, artifacts=(), description=None) -> EvaluationResult:
        return EvaluationResult(
            id=result_id,
            description=description or f"{result_id} violated",
            severity=severity,
            failed_artifacts=tuple(artifacts),
        )
    return _make


@pytest.fixture
def label():
    """Canonical label of the artifacts built by make_artifact."""
    return lambda name, version="1.0": f"pkg:maven/org.acme/{name}@{version}"


@pytest.fixture
def mixed_results(make_artifact, make_result):
    """One active result per severity plus an inert FAIL result."""
    return [
        make_result("R1", Severity.FAIL, [make_artifact("a")]),
        make_result("R2", Severity.WARN, [make_artifact("b")]),
        make_result("R3", Severity.INFO, [make_artifact("c")]),
        make_result("R4", Severity.FAIL, []),
    ]
