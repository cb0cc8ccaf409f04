"""
Artifact Data Models — Coordinates and the artifact protocol used for labelling.

Artifacts are produced upstream and consumed read-only. The core only needs
typed coordinates and a generic textual fallback to derive a label.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, Field


class CoordinateType(str, Enum):
    """Package-manager coordinate flavours, named after their purl types."""

    MAVEN = "maven"
    NPM = "npm"
    NUGET = "nuget"
    PYPI = "pypi"
    GOLANG = "golang"
    BUNDLE = "bundle"
    GENERIC = "generic"


class Coordinate(BaseModel):
    """A typed package identifier, e.g. a Maven GAV or an npm name/version."""

    type: CoordinateType
    namespace: str = Field(default="", description="Group / scope / vendor part")
    name: str = Field(..., min_length=1)
    version: str = ""

    model_config = {"frozen": True}

    def canonicalize(self) -> str:
        """Render as a package URL: pkg:type/namespace/name@version."""
        path = f"{self.namespace}/{self.name}" if self.namespace else self.name
        purl = f"pkg:{self.type.value}/{path}"
        if self.version:
            purl += f"@{self.version}"
        return purl


@runtime_checkable
class ArtifactLike(Protocol):
    """Capabilities the core needs from an inspected artifact."""

    @property
    def coordinates(self) -> Sequence[Coordinate]: ...

    def coordinate_for_type(self, coordinate_type: CoordinateType) -> Coordinate | None: ...

    def pretty_print(self) -> str: ...


class Artifact(BaseModel):
    """An inspected artifact: its coordinates plus the file it was found in."""

    coordinates: tuple[Coordinate, ...] = Field(default_factory=tuple)
    filename: str = ""

    model_config = {"frozen": True}

    def coordinate_for_type(self, coordinate_type: CoordinateType) -> Coordinate | None:
        return next((c for c in self.coordinates if c.type == coordinate_type), None)

    def pretty_print(self) -> str:
        coords = ", ".join(c.canonicalize() for c in self.coordinates)
        return f"Artifact{{coordinates=[{coords}], filename={self.filename or '-'}}}"

    def __str__(self) -> str:
        return self.pretty_print()
