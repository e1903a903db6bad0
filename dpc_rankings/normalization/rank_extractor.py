from typing import List, Optional

from bs4 import BeautifulSoup, Tag
from loguru import logger

from dpc_rankings.models.enums import RowHighlight
from dpc_rankings.models.rank import RankCollection, RankRecord

# The first two rows of the rankings table hold the two-level header
RANK_TABLE_OFFSET = 2
CLINCHED_COLOR_INDICATOR = "background-color:rgb(204,255,204)"
INELIGIBLE_COLOR_INDICATOR = "background-color:rgb(255,204,204)"
EXPAND_CHILD_CLASS = "expand-child"

RANK_TABLE_SELECTOR = ".wikitable"
TEAM_NAME_SELECTOR = ".team-template-text a"


def classify_highlight(style: Optional[str]) -> RowHighlight:
    """Maps a row's inline style onto its status highlight (exact match only)."""
    if style == CLINCHED_COLOR_INDICATOR:
        return RowHighlight.CLINCHED
    if style == INELIGIBLE_COLOR_INDICATOR:
        return RowHighlight.INELIGIBLE
    return RowHighlight.NONE


def _cell_text(cells: List[Tag], index: int, selector: str) -> str:
    if index >= len(cells):
        return ""
    node = cells[index].select_one(selector)
    return node.get_text() if node is not None else ""


def _is_expand_child(row: Tag) -> bool:
    return EXPAND_CHILD_CLASS in (row.get("class") or [])


def _parse_row(row: Tag) -> RankRecord:
    highlight = classify_highlight(row.get("style"))
    cells = row.select("td")
    return RankRecord(
        rank=_cell_text(cells, 0, "b"),
        team=_cell_text(cells, 1, TEAM_NAME_SELECTOR),
        score=_cell_text(cells, 2, "b"),
        is_clinched=highlight is RowHighlight.CLINCHED,
        is_ineligible=highlight is RowHighlight.INELIGIBLE,
    )


def extract(html_fragment: str) -> RankCollection:
    """Parses the team rankings table out of a rendered wiki page.

    Only the first ``.wikitable`` on the page is read. Header rows and
    ``expand-child`` detail rows are skipped; every other row becomes a
    RankRecord, in table order. Text is kept verbatim.

    Args:
        html_fragment: Rendered page HTML (``parse.text['*']`` of the API).

    Returns:
        The ordered records. Empty when no table is found.
    """
    soup = BeautifulSoup(html_fragment, "html.parser")
    table = soup.select_one(RANK_TABLE_SELECTOR)
    if table is None:
        logger.warning("No rankings table found in page HTML.")
        return []

    rows = table.select("tr")
    ranks: List[RankRecord] = []
    for row in rows[RANK_TABLE_OFFSET:]:
        if _is_expand_child(row):
            continue
        ranks.append(_parse_row(row))

    logger.debug(f"Extracted {len(ranks)} rank records from {len(rows)} table rows.")
    return ranks
