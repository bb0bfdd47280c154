"""Decoding of GraphQL search responses into PullRequest models."""

import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ValidationError

from prwatcher.models.pull_request import GHLabel, PullRequest, Review, ReviewDecision, User
from prwatcher.services.errors import DecodeFailedError


logger = logging.getLogger(__name__)

# Calendar date, "T" separator, seconds, optional fraction, explicit offset
_ISO_8601_TIMESTAMP = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})", re.ASCII
)


# Wire shapes of the search response. Field names follow the GraphQL schema.

class _AuthorNode(BaseModel):
    login: str
    avatarUrl: str


class _LabelNode(BaseModel):
    name: str
    color: str


class _LabelConnection(BaseModel):
    nodes: List[_LabelNode]


class _ReviewNode(BaseModel):
    id: str
    state: str
    author: Optional[_AuthorNode] = None


class _ReviewConnection(BaseModel):
    nodes: List[_ReviewNode]


class _PullRequestNode(BaseModel):
    databaseId: int
    number: int
    title: str
    state: str
    url: str
    createdAt: str
    isDraft: Optional[bool] = None
    reviewDecision: Optional[str] = None
    author: Optional[_AuthorNode] = None
    labels: Optional[_LabelConnection] = None
    latestReviews: Optional[_ReviewConnection] = None


class _SearchResult(BaseModel):
    nodes: List[_PullRequestNode]


class _SearchData(BaseModel):
    search: _SearchResult


class _SearchEnvelope(BaseModel):
    data: _SearchData
    errors: Optional[List[Dict[str, Any]]] = None


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp with an explicit offset.

    Raises:
        ValueError: If the value is not ISO-8601 or has no timezone
    """
    if not _ISO_8601_TIMESTAMP.fullmatch(value):
        raise ValueError(f"Not an ISO-8601 timestamp with offset: {value!r}")
    normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
    return datetime.fromisoformat(normalized)


def _to_user(author: Optional[_AuthorNode]) -> User:
    if author is None:
        return User.ghost()
    return User(login=author.login, avatar_url=author.avatarUrl)


def _to_pull_request(node: _PullRequestNode) -> PullRequest:
    # Reviews without an author are dropped, unlike the PR author which becomes Ghost.
    reviews = tuple(
        Review(id=review.id, author=_to_user(review.author), state=review.state)
        for review in (node.latestReviews.nodes if node.latestReviews else [])
        if review.author is not None
    )
    labels = tuple(
        GHLabel(name=label.name, color=label.color)
        for label in (node.labels.nodes if node.labels else [])
    )

    return PullRequest(
        id=node.databaseId,
        number=node.number,
        title=node.title,
        state=node.state,
        html_url=node.url,
        user=_to_user(node.author),
        created_at=parse_timestamp(node.createdAt),
        draft=node.isDraft,
        labels=labels,
        review_decision=ReviewDecision.parse(node.reviewDecision),
        reviews=reviews,
    )


def decode_pull_requests(body: bytes) -> List[PullRequest]:
    """
    Decode a search response body into pull requests in API order.

    Args:
        body: Raw JSON response body

    Returns:
        List of PullRequest models

    Raises:
        DecodeFailedError: On malformed JSON, structural mismatch or bad timestamps
    """
    try:
        envelope = _SearchEnvelope.model_validate_json(body, strict=True)
        if envelope.errors:
            messages = [str(error.get('message', error)) for error in envelope.errors]
            logger.warning(f"GraphQL response contained errors: {messages}")
        pull_requests = [_to_pull_request(node) for node in envelope.data.search.nodes]
    except (ValidationError, ValueError) as e:
        logger.error(f"Decoding error: {e}")
        raise DecodeFailedError() from e

    logger.debug(f"Decoded {len(pull_requests)} pull requests")
    return pull_requests
