import asyncio
import logging
from typing import List, Optional

from prwatcher.models.filter_type import FilterType, search_query_for
from prwatcher.models.pull_request import PullRequest
from prwatcher.models.settings import FetchSettings
from prwatcher.services.error_classifier import classify_response
from prwatcher.services.errors import MissingCredentialError
from prwatcher.services.graphql_transport import GraphQLTransport
from prwatcher.services.response_decoder import decode_pull_requests
from prwatcher.utils.browser_launcher import open_url
from prwatcher.utils.token_store import GITHUB_TOKEN_ACCOUNT, TokenStore


logger = logging.getLogger(__name__)


class GitHubService:
    """Service for fetching pull requests from the GitHub GraphQL search API."""

    def __init__(self, transport: Optional[GraphQLTransport] = None):
        """
        Initialize the service.

        Args:
            transport: GraphQL transport, a new one with its own session if omitted
        """
        self.transport = transport or GraphQLTransport()

    def fetch_pull_requests(self, endpoint: str, token: Optional[str], filter_type: FilterType) -> List[PullRequest]:
        """
        Fetch pull requests matching a filter with one request-response cycle.

        Args:
            endpoint: GraphQL endpoint URL
            token: GitHub access token
            filter_type: Search filter selection

        Returns:
            Pull requests in API order

        Raises:
            MissingCredentialError: If the token is empty (no request is sent)
            InvalidEndpointError: If the endpoint is malformed
            TransportError: On network failure
            UnauthorizedError, RateLimitedError, ServerError: On non-200 responses
            DecodeFailedError: If the 200 body cannot be decoded
        """
        if not token or not token.strip():
            logger.warning("No GitHub token configured; skipping fetch")
            raise MissingCredentialError()

        query = search_query_for(filter_type)
        response = self.transport.send(endpoint, token, query)

        error = classify_response(response.status_code, response.headers)
        if error is not None:
            raise error

        pull_requests = decode_pull_requests(response.body)
        logger.info(f"Fetched {len(pull_requests)} pull requests for filter {FilterType(filter_type).value}")
        return pull_requests

    def fetch_for_settings(self, settings: FetchSettings, token: Optional[str]) -> List[PullRequest]:
        """Fetch using the endpoint and filter from explicit settings."""
        return self.fetch_pull_requests(settings.api_endpoint, token, settings.selected_filter)

    def fetch_with_store(self, settings: FetchSettings, token_store: TokenStore) -> List[PullRequest]:
        """Fetch using the token saved in a secret store."""
        return self.fetch_for_settings(settings, token_store.get(GITHUB_TOKEN_ACCOUNT))

    async def fetch_for_settings_async(self, settings: FetchSettings, token: Optional[str]) -> List[PullRequest]:
        """
        Run fetch_for_settings on a worker thread.

        Concurrent calls are independent and not coalesced. If the awaiting
        task is cancelled the result is discarded as a whole.
        """
        return await asyncio.to_thread(self.fetch_for_settings, settings, token)

    def open_pull_request(self, pull_request: PullRequest, settings: FetchSettings) -> bool:
        """Open a pull request in the browser selected in settings."""
        logger.info(f"Opening pull request #{pull_request.number} in {settings.selected_browser.value}")
        return open_url(pull_request.html_url, settings.selected_browser)

    def close(self) -> None:
        self.transport.close()
