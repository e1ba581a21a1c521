"""Voting topics read-through from the voting spreadsheet."""

import re
from typing import Any, List, Optional

from cachetools import TTLCache

from app.config import config
from app.lib.logger import configure_logger
from app.services.integrations.sheets import GoogleSheetsApi, SheetsApiError
from app.services.reporting.exceptions import TopicsUnavailableError
from app.services.reporting.models import VotingTopic

logger = configure_logger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_CACHE_KEY = "topics"


def parse_duration(value: Any) -> Optional[int]:
    """Leading integer of a cell ("144 blocks" -> 144), None when there is none."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if value is None:
        return None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def row_to_topic(row: List[Any]) -> VotingTopic:
    """Map [Title, Duration (blocks), Category, Description]; short rows pad with None."""
    cells = list(row) + [None] * (4 - len(row))
    return VotingTopic(
        title=cells[0],
        duration_blocks=parse_duration(cells[1]),
        category=cells[2],
        description=cells[3],
    )


class VotingTopicsService:
    def __init__(
        self,
        api: Optional[GoogleSheetsApi] = None,
        range_name: Optional[str] = None,
        cache_seconds: Optional[int] = None,
    ):
        self.api = api or GoogleSheetsApi()
        self.range_name = range_name or config.sheets.topics_range
        ttl = (
            cache_seconds
            if cache_seconds is not None
            else config.reporting.topics_cache_seconds
        )
        self._cache: Optional[TTLCache] = (
            TTLCache(maxsize=1, ttl=ttl) if ttl > 0 else None
        )

    async def get_topics(self) -> List[VotingTopic]:
        """Return the topics below the header row; empty when the sheet has none.

        Raises:
            TopicsUnavailableError: If the sheet cannot be read
        """
        if self._cache is not None and _CACHE_KEY in self._cache:
            return self._cache[_CACHE_KEY]

        try:
            rows = await self.api.get_values(self.range_name)
        except SheetsApiError as e:
            logger.error(
                "Error reading Google Sheet",
                extra={"range": self.range_name, "error": str(e)},
            )
            raise TopicsUnavailableError(f"Failed to read voting topics: {e}") from e

        # First row holds the column headers
        topics = [row_to_topic(row) for row in rows[1:]]
        if topics and self._cache is not None:
            self._cache[_CACHE_KEY] = topics
        logger.debug("Voting topics loaded", extra={"count": len(topics)})
        return topics
