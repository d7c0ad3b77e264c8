"""
Query parameter and result page models for historical bars.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.marketdata.enums import Adjustment, DataFeed, SortOrder
from src.marketdata.model.bar import Bar


class BarsParams(BaseModel):
    """
    Optional parameters of a historical bars query.

    Unset values are left out of the query string entirely.
    """

    start: str | None = Field(default=None, description="Inclusive RFC-3339 start")
    end: str | None = Field(default=None, description="Inclusive RFC-3339 end")
    limit: int | None = Field(default=None, ge=1, le=10000)
    adjustment: Adjustment | None = None
    feed: DataFeed | None = None
    sort: SortOrder | None = None
    asof: str | None = Field(default=None, description="As-of date for symbol mapping")
    currency: str | None = None
    page_token: str | None = Field(
        default=None, description="Token from a previous BarsPage"
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_query(self) -> dict[str, Any]:
        """Serialize set parameters to upstream query values."""
        return self.model_dump(mode="json", exclude_none=True)


class BarsPage(BaseModel):
    """
    One page of historical bars.

    next_page_token is None on the last page. Callers that want more data
    pass it back through BarsParams.page_token.
    """

    bars: tuple[Bar, ...] = ()
    next_page_token: str | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def has_more(self) -> bool:
        """Check if the provider reported another page."""
        return bool(self.next_page_token)
