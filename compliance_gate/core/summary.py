"""
Summary Formatter — Bounded failure digest for operator-facing display.

Built from the failing set only. Results are grouped by canonical artifact
label; at most MAX_ITEMS artifacts are shown, each with at most MAX_ITEMS
descriptions, and every cut is announced with an "... and N more" marker.
Labels and descriptions are sorted lexicographically so the text is stable
whatever order the results arrived in.

Example (tabs shown as spaces):

    Rule engine=[licenses] failed evaluation. Due to:
        - the artifact=[pkg:maven/org.acme/core@1.0] failed, due to:
            - Forbidden license GPL-3.0
            - Missing attribution notice
            - Unknown license
            - ... and 1 fail causing results more
    See generated report for details.
"""

from __future__ import annotations

from typing import Iterable

from compliance_gate.core.labels import canonical_label
from compliance_gate.models.evaluation_models import EvaluationResult

MAX_ITEMS = 3

REPORT_POINTER = "\nSee generated report for details."


def message_prefix(ruleset_description: str) -> str:
    return f"Rule engine=[{ruleset_description}] failed evaluation."


def group_by_artifact(
    results: Iterable[EvaluationResult],
) -> dict[str, list[EvaluationResult]]:
    """Index each result under the label of every artifact it flags, once per label."""
    by_label: dict[str, dict[str, EvaluationResult]] = {}
    for result in results:
        for artifact in result.failed_artifacts:
            by_label.setdefault(canonical_label(artifact), {}).setdefault(result.id, result)
    return {label: list(by_id.values()) for label, by_id in by_label.items()}


def format_artifact_block(label: str, results: list[EvaluationResult]) -> str:
    descriptions = sorted(r.description for r in results)
    block = f"\n\t- the artifact=[{label}] failed, due to:"
    for description in descriptions[:MAX_ITEMS]:
        block += f"\n\t\t- {description}"
    if len(descriptions) > MAX_ITEMS:
        block += (
            f"\n\t\t- ... and {len(descriptions) - MAX_ITEMS} fail causing results more"
        )
    return block


def format_digest(prefix: str, failing_results: Iterable[EvaluationResult]) -> str:
    grouped = group_by_artifact(failing_results)
    labels = sorted(grouped)

    body = "".join(format_artifact_block(label, grouped[label]) for label in labels[:MAX_ITEMS])
    if len(labels) > MAX_ITEMS:
        body += f"\n\t - ... and {len(labels) - MAX_ITEMS} artifacts more"

    return f"{prefix} Due to:{body}{REPORT_POINTER}"
