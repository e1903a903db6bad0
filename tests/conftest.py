"""
Pytest configuration and shared fixtures for the DPC rankings tests.

This file provides:
- A rendered rankings page with one row per highlight status
- The parse API payload wrapping that page
- A mocked fetcher for RankIndex tests
"""

from typing import Any, Dict
from unittest.mock import AsyncMock

import pytest

from dpc_rankings.normalization.rank_extractor import (
    CLINCHED_COLOR_INDICATOR,
    INELIGIBLE_COLOR_INDICATOR,
)
from tests.html_builders import make_expand_row, make_page, make_payload, make_row, make_table


@pytest.fixture
def standings_html() -> str:
    """Three standings rows: clinched, ineligible, unstyled - plus one detail row."""
    return make_page(
        make_table(
            [
                make_row("1", "Team Liquid", "1,740", style=CLINCHED_COLOR_INDICATOR),
                make_expand_row(),
                make_row("2", "Gaimin Gladiators", "1,520", style=INELIGIBLE_COLOR_INDICATOR),
                make_row("3", "Tundra Esports", "1,310"),
            ]
        )
    )


@pytest.fixture
def standings_payload(standings_html) -> Dict[str, Any]:
    return make_payload(standings_html)


@pytest.fixture
def mock_fetcher(standings_payload):
    """Fetcher double returning the standings payload."""
    fetcher = AsyncMock()
    fetcher.fetch_json = AsyncMock(return_value=standings_payload)
    fetcher.close = AsyncMock()
    return fetcher
