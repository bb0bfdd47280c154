"""User settings that drive a fetch."""

import logging
import os
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from prwatcher.models.browser import Browser
from prwatcher.models.filter_type import FilterType


logger = logging.getLogger(__name__)

GITHUB_GRAPHQL_ENDPOINT = "https://api.github.com/graphql"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class FetchSettings(BaseModel):
    """Explicit configuration passed to the fetch service at call time."""

    model_config = ConfigDict(frozen=True)

    selected_filter: FilterType = Field(default=FilterType.REVIEW_REQUESTED, description="Active search filter")
    selected_browser: Browser = Field(default=Browser.SYSTEM_DEFAULT, description="Browser used to open PRs")
    use_enterprise: bool = Field(default=False, description="Use a GitHub Enterprise endpoint")
    enterprise_url: str = Field(default="", description="GitHub Enterprise GraphQL endpoint")

    @property
    def api_endpoint(self) -> str:
        """GraphQL endpoint to query, trimmed when enterprise mode is on."""
        if self.use_enterprise:
            return self.enterprise_url.strip()
        return GITHUB_GRAPHQL_ENDPOINT

    @classmethod
    def from_env(cls) -> "FetchSettings":
        """Build settings from PRWATCHER_* environment variables."""
        return cls(
            selected_filter=_enum_from_env('PRWATCHER_FILTER', FilterType, FilterType.REVIEW_REQUESTED),
            selected_browser=_enum_from_env('PRWATCHER_BROWSER', Browser, Browser.SYSTEM_DEFAULT),
            use_enterprise=os.getenv('PRWATCHER_USE_ENTERPRISE', '').strip().lower() in _TRUE_VALUES,
            enterprise_url=os.getenv('PRWATCHER_ENTERPRISE_URL', ''),
        )


def _enum_from_env(name: str, enum_cls, default):
    raw: Optional[str] = os.getenv(name)
    if not raw:
        return default
    try:
        return enum_cls(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name} value: {raw!r}")
        return default
