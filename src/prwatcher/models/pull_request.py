"""Pull Request data models for the GitHub GraphQL search integration."""

from datetime import datetime
from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from prwatcher.utils.formatting import normalize_hex_color, relative_time


GHOST_LOGIN = "Ghost"


class StatusType(str, Enum):
    """Display status of a pull request."""
    OPEN = "open"
    MERGED = "merged"
    CLOSED = "closed"
    DRAFT = "draft"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class ReviewState(str, Enum):
    """Outcome of a single review."""
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    COMMENTED = "COMMENTED"
    OTHER = "OTHER"


class ReviewDecision(str, Enum):
    """Aggregate review decision computed by GitHub."""
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    REVIEW_REQUIRED = "REVIEW_REQUIRED"

    @property
    def text(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ReviewDecision"]:
        """
        Map a raw reviewDecision string to a ReviewDecision.

        Args:
            value: Raw value from the API, possibly None

        Returns:
            Matching ReviewDecision, or None when absent or unrecognized
        """
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class User(BaseModel):
    """GitHub account attached to a pull request or review."""

    model_config = ConfigDict(frozen=True)

    login: str = Field(..., min_length=1, description="GitHub login")
    avatar_url: str = Field(default="", description="Avatar URL, empty when unknown")

    @classmethod
    def ghost(cls) -> "User":
        """Placeholder for deleted or unknown accounts."""
        return cls(login=GHOST_LOGIN, avatar_url="")


class GHLabel(BaseModel):
    """Issue label. Identity at this layer is the name."""

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = Field(default=None, description="Not provided by the GraphQL search")
    name: str = Field(..., min_length=1, description="Label name")
    color: str = Field(..., description="Hex color without leading '#', not validated")

    @property
    def rgb(self) -> Tuple[int, int, int]:
        """Display color; garbled values render black."""
        return normalize_hex_color(self.color)


class Review(BaseModel):
    """Latest review by one reviewer."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque GraphQL node id")
    author: User = Field(..., description="Reviewer")
    state: str = Field(..., description="Raw review state as returned by the API")

    @property
    def outcome(self) -> ReviewState:
        try:
            return ReviewState(self.state)
        except ValueError:
            return ReviewState.OTHER


class PullRequest(BaseModel):
    """Pull request returned by the search query."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Database id, unique within one fetch")
    number: int = Field(..., description="Pull request number, unique per repository")
    title: str = Field(..., description="Pull request title")
    state: str = Field(..., description="Pull request state (OPEN, CLOSED, MERGED)")
    html_url: str = Field(..., description="Web URL of the pull request")
    user: User = Field(..., description="Pull request author")
    created_at: datetime = Field(..., description="Creation timestamp")
    draft: Optional[bool] = Field(default=None, description="Draft flag, None means not a draft")
    labels: Tuple[GHLabel, ...] = Field(default=(), description="Labels in API order")
    review_decision: Optional[ReviewDecision] = Field(default=None, description="Aggregate review decision")
    reviews: Tuple[Review, ...] = Field(default=(), description="Latest reviews in API order")

    def age_text(self, now: Optional[datetime] = None) -> str:
        return relative_time(self.created_at, now)

    @property
    def status_type(self) -> StatusType:
        """Merged and closed win over the draft flag."""
        state = self.state.lower()
        if state == "merged":
            return StatusType.MERGED
        if state == "closed":
            return StatusType.CLOSED
        if self.draft is True:
            return StatusType.DRAFT
        return StatusType.OPEN
