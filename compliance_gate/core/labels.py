"""
Canonical Artifact Labels — Prioritised lookup over the artifact protocol.

Coordinate strategies are tried in order and the first hit wins; the
artifact's generic textual representation is the fallback:
1. the preferred coordinate type (Maven by default), canonicalised
2. the first coordinate of any type, canonicalised
3. the artifact's generic textual representation
"""

from __future__ import annotations

from typing import Callable

from compliance_gate.models.artifact_models import ArtifactLike, CoordinateType

PREFERRED_COORDINATE_TYPE = CoordinateType.MAVEN

LabelStrategy = Callable[[ArtifactLike], str | None]


def _preferred_coordinate(artifact: ArtifactLike) -> str | None:
    coordinate = artifact.coordinate_for_type(PREFERRED_COORDINATE_TYPE)
    return coordinate.canonicalize() if coordinate is not None else None


def _first_coordinate(artifact: ArtifactLike) -> str | None:
    for coordinate in artifact.coordinates:
        return coordinate.canonicalize()
    return None


LABEL_STRATEGIES: list[LabelStrategy] = [
    _preferred_coordinate,
    _first_coordinate,
]


def canonical_label(artifact: ArtifactLike) -> str:
    """Return the label used to display and group an artifact in reports."""
    for strategy in LABEL_STRATEGIES:
        label = strategy(artifact)
        if label is not None:
            return label
    return artifact.pretty_print()
