from typing import Any, Callable, Dict, Optional

import httpx
from loguru import logger

from dpc_rankings.config.settings import settings
from dpc_rankings.models.enums import ErrorKind
from dpc_rankings.models.rank import (
    ErrorRecord,
    RankCollection,
    RankFailure,
    RankFound,
    RankLookupResult,
    RankRecord,
)
from dpc_rankings.normalization.rank_extractor import extract
from dpc_rankings.scrapers.base_scraper import BaseScraper, ScraperError, TransportError
from dpc_rankings.scrapers.wiki_fetcher import WikiFetcher
from dpc_rankings.utils.misc_utils import names_match

NO_TEAM_AT_RANK = "No team at the given rank"
NO_TEAM_WITH_NAME = "No team with that name exists"


class RankLookupError(Exception):
    """Raised when a rank lookup cannot be answered."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.TRANSPORT):
        super().__init__(message)
        self.message = message
        self.kind = kind

    @property
    def error_record(self) -> ErrorRecord:
        return ErrorRecord(error_msg=self.message)

    def to_result(self) -> RankFailure:
        return RankFailure(kind=self.kind, message=self.message)


class RankNotFoundError(RankLookupError):
    """The rankings were fetched but nothing matched the query."""

    def __init__(self, message: str):
        super().__init__(message, kind=ErrorKind.NOT_FOUND)


def page_html(payload: Dict[str, Any]) -> str:
    """Pulls the rendered HTML out of an ``action=parse`` response."""
    try:
        html = payload["parse"]["text"]["*"]
    except (KeyError, TypeError) as e:
        raise TransportError(f"Response has no parse.text['*'] field ({e!r})") from e
    if not isinstance(html, str):
        raise TransportError(
            f"Expected page HTML as a string, got {type(html).__name__}"
        )
    return html


class RankIndex:
    """Answers ranking queries against a fresh extraction of the rankings page.

    Nothing is kept between calls: each query fetches (through the fetcher's
    own cache), extracts and scans the table again.
    """

    def __init__(
        self,
        fetcher: Optional[BaseScraper] = None,
        page: Optional[str] = None,
    ):
        self.fetcher = fetcher or WikiFetcher()
        self.page = page or settings.rankings_page

    @property
    def query_params(self) -> Dict[str, str]:
        return {"action": "parse", "format": "json", "page": self.page}

    async def fetch_all(self) -> RankCollection:
        """Fetches every team on the rankings page, ordered by standing.

        Raises:
            TransportError: the page could not be fetched or decoded.
        """
        try:
            payload = await self.fetcher.fetch_json(self.query_params)
            html = page_html(payload)
        except (ScraperError, httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching team list: {e}")
            raise TransportError(f"Error fetching team list: {e}") from e

        ranks = extract(html)
        if not ranks:
            logger.warning(f"No teams extracted from page '{self.page}'.")
        return ranks

    async def _find(
        self, predicate: Callable[[RankRecord], bool], missing_message: str
    ) -> RankRecord:
        try:
            ranks = await self.fetch_all()
        except TransportError as e:
            raise RankLookupError(
                f"Error attempting to fetch rank data\n{e}", kind=ErrorKind.TRANSPORT
            ) from e

        # First match wins; the table does not guarantee unique ranks or names
        for record in ranks:
            if predicate(record):
                return record

        logger.warning(missing_message)
        raise RankNotFoundError(missing_message)

    async def by_standing(self, rank: str) -> RankRecord:
        """Returns the team holding ``rank`` (compared as text, e.g. "1" or "T-4")."""
        return await self._find(lambda record: record.rank == rank, NO_TEAM_AT_RANK)

    async def by_team_name(self, team: str) -> RankRecord:
        """Returns the standing of ``team``, matched case-insensitively."""
        return await self._find(
            lambda record: names_match(record.team, team), NO_TEAM_WITH_NAME
        )

    async def standing_result(self, rank: str) -> RankLookupResult:
        try:
            return RankFound(record=await self.by_standing(rank))
        except RankLookupError as e:
            return e.to_result()

    async def team_result(self, team: str) -> RankLookupResult:
        try:
            return RankFound(record=await self.by_team_name(team))
        except RankLookupError as e:
            return e.to_result()

    async def close(self):
        await self.fetcher.close()
