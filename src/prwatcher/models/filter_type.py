"""Pull request search filters and the GitHub search queries they map to."""

from enum import Enum


class FilterType(str, Enum):
    """Filter selection for the pull request list."""
    REVIEW_REQUESTED = "reviewRequested"
    CREATED_BY_ME = "createdByMe"
    ASSIGNED = "assigned"

    @property
    def query(self) -> str:
        """GitHub search query for this filter."""
        return _SEARCH_QUERIES[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_SEARCH_QUERIES = {
    # Open PRs where a review from me is requested
    FilterType.REVIEW_REQUESTED: "is:pr is:open review-requested:@me",
    # Open PRs I authored
    FilterType.CREATED_BY_ME: "is:pr is:open author:@me",
    # Open PRs assigned to me
    FilterType.ASSIGNED: "is:pr is:open assignee:@me",
}

_LABELS = {
    FilterType.REVIEW_REQUESTED: "Review requested",
    FilterType.CREATED_BY_ME: "Created by me",
    FilterType.ASSIGNED: "Assigned",
}


def search_query_for(filter_type: FilterType) -> str:
    """Return the literal search query string for a filter selection."""
    return FilterType(filter_type).query
