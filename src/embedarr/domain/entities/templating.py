"""Error values produced by template validation and resolution.

These are plain immutable values, not exceptions: the validator and the
resolver return them inside ``Err`` and callers pick how to present them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from embedarr.domain.entities.servers import TemplateKind

PLACEHOLDER_IMDB_ID = "{imdbId}"
PLACEHOLDER_SEASON = "{season}"
PLACEHOLDER_EPISODE = "{episode}"

PLACEHOLDER_NAMES: frozenset[str] = frozenset({"imdbId", "season", "episode"})

REQUIRED_PLACEHOLDERS: dict[TemplateKind, tuple[str, ...]] = {
    "movie": (PLACEHOLDER_IMDB_ID,),
    "tv": (PLACEHOLDER_IMDB_ID, PLACEHOLDER_SEASON, PLACEHOLDER_EPISODE),
}


# ---------------------------------------------------------------------------
# Validation errors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationError:
    """Base for everything that makes a server definition unacceptable."""

    kind: ClassVar[str] = "validation_error"

    @property
    def message(self) -> str:
        return "invalid value"


@dataclass(frozen=True)
class MissingPlaceholder(ValidationError):
    token: str
    template_kind: TemplateKind

    kind: ClassVar[str] = "missing_placeholder"

    @property
    def message(self) -> str:
        label = "TV" if self.template_kind == "tv" else "movie"
        return f"{label} URL template must contain {self.token}"


@dataclass(frozen=True)
class MalformedUrl(ValidationError):
    reason: str

    kind: ClassVar[str] = "malformed_url"

    @property
    def message(self) -> str:
        return f"template is not a valid http(s) URL: {self.reason}"


@dataclass(frozen=True)
class UnknownPlaceholder(ValidationError):
    raw: str

    kind: ClassVar[str] = "unknown_placeholder"

    @property
    def message(self) -> str:
        allowed = ", ".join("{" + n + "}" for n in sorted(PLACEHOLDER_NAMES))
        return f"unknown or malformed placeholder {self.raw!r} (allowed: {allowed})"


@dataclass(frozen=True)
class BlankField(ValidationError):
    field: str

    kind: ClassVar[str] = "blank_field"

    @property
    def message(self) -> str:
        return f"{self.field} must not be blank"


@dataclass(frozen=True)
class EmptyChangeList(ValidationError):
    kind: ClassVar[str] = "empty_change_list"

    @property
    def message(self) -> str:
        return "at least one change is required"


# ---------------------------------------------------------------------------
# Resolution errors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ResolutionError:
    """Base for playback requests a server cannot turn into a URL."""

    kind: ClassVar[str] = "resolution_error"

    @property
    def message(self) -> str:
        return "cannot resolve playback URL"


@dataclass(frozen=True)
class EmptyContentId(ResolutionError):
    kind: ClassVar[str] = "empty_content_id"

    @property
    def message(self) -> str:
        return "content id must not be empty"


@dataclass(frozen=True)
class MissingRequiredField(ResolutionError):
    field: str  # "season" or "episode"

    kind: ClassVar[str] = "missing_required_field"

    @property
    def message(self) -> str:
        return f"{self.field} is required for series playback"


@dataclass(frozen=True)
class NonPositiveField(ResolutionError):
    field: str
    value: int

    kind: ClassVar[str] = "non_positive_field"

    @property
    def message(self) -> str:
        return f"{self.field} must be a positive integer, got {self.value}"


@dataclass(frozen=True)
class UnknownContentId(ResolutionError):
    """A catalog id (``tmdb:<n>``) with no IMDb id to embed."""

    content_id: str

    kind: ClassVar[str] = "unknown_content_id"

    @property
    def message(self) -> str:
        return f"no IMDb id is known for {self.content_id}"
