"""Models exchanged by the hybrid code synthesizer."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DiffOrigin(str, Enum):
    """Which candidate a diff block came from."""

    CLOUD = "cloud"
    LOCAL = "local"
    MERGED = "merged"


class SegmentSet(BaseModel):
    """Coarse structural regions extracted from one redacted candidate."""

    model_config = ConfigDict(frozen=True)

    imports: list[str] = Field(default_factory=list)  # literal import lines
    exports: list[str] = Field(default_factory=list)  # literal export lines
    hooks: list[str] = Field(default_factory=list)  # useState declarations, informational
    body: str = ""


class MergePolicyState(BaseModel):
    """Flags gating the body merge policy for a single synthesis call."""

    model_config = ConfigDict(frozen=True)

    has_try_catch: bool = False
    is_local_secured: bool = False


class DiffLine(BaseModel):
    """One block of a line-level diff, tagged with its originator.

    ``added`` blocks come from the local side of the synthesis and
    ``removed`` blocks only exist in the cloud candidate.
    """

    model_config = ConfigDict(frozen=True)

    value: str
    added: bool = False
    removed: bool = False
    origin: DiffOrigin = DiffOrigin.MERGED

    @model_validator(mode="after")
    def _check_origin(self) -> "DiffLine":
        if self.added and self.removed:
            raise ValueError("a diff block cannot be both added and removed")
        expected = DiffOrigin.MERGED
        if self.added:
            expected = DiffOrigin.LOCAL
        elif self.removed:
            expected = DiffOrigin.CLOUD
        if self.origin != expected:
            raise ValueError(
                f"origin '{self.origin.value}' does not match "
                f"added={self.added}, removed={self.removed}"
            )
        return self

    @classmethod
    def for_origin(cls, value: str, origin: DiffOrigin) -> "DiffLine":
        return cls(
            value=value,
            added=origin == DiffOrigin.LOCAL,
            removed=origin == DiffOrigin.CLOUD,
            origin=origin,
        )


class SynthesisResult(BaseModel):
    """Final synthesized file plus its diff against the cloud candidate."""

    model_config = ConfigDict(frozen=True)

    code: str
    diff: list[DiffLine] = Field(default_factory=list)
