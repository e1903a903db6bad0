"""
Unit tests for the rankings table extractor.

Covers header/detail row skipping, highlight classification, first-table
selection and verbatim cell text.
"""

import pytest

from dpc_rankings.models.enums import RowHighlight
from dpc_rankings.normalization.rank_extractor import (
    CLINCHED_COLOR_INDICATOR,
    INELIGIBLE_COLOR_INDICATOR,
    classify_highlight,
    extract,
)
from tests.html_builders import make_expand_row, make_page, make_row, make_table


class TestExtract:
    """Tests for extract()"""

    def test_three_data_rows_with_each_highlight(self, standings_html):
        """2 header rows + 3 data rows + 1 detail row -> 3 records in order"""
        ranks = extract(standings_html)

        assert [r.team for r in ranks] == ["Team Liquid", "Gaimin Gladiators", "Tundra Esports"]
        assert [(r.is_clinched, r.is_ineligible) for r in ranks] == [
            (True, False),
            (False, True),
            (False, False),
        ]

    def test_fields_are_read_by_column(self, standings_html):
        first = extract(standings_html)[0]
        assert first.rank == "1"
        assert first.team == "Team Liquid"
        assert first.score == "1,740"

    def test_text_is_kept_verbatim(self):
        """Ranks and scores stay text - no numeric coercion, no trimming"""
        html = make_table([make_row("T-4", " OG ", "0850")])
        record = extract(html)[0]

        assert record.rank == "T-4"
        assert record.team == " OG "
        assert record.score == "0850"

    def test_first_two_rows_are_always_skipped(self):
        """The header offset applies even when the first rows look like data"""
        html = (
            '<table class="wikitable">'
            + make_row("1", "Header One", "0")
            + make_row("2", "Header Two", "0")
            + make_row("3", "Real Team", "10")
            + "</table>"
        )
        ranks = extract(html)

        assert len(ranks) == 1
        assert ranks[0].team == "Real Team"

    def test_expand_child_rows_never_appear(self):
        html = make_table(
            [
                make_expand_row("Team Secret"),
                make_row("1", "Team Spirit", "900"),
                make_row("2", "Team Secret", "800", classes="expand-child"),
                make_expand_row(),
            ]
        )
        ranks = extract(html)

        assert [r.team for r in ranks] == ["Team Spirit"]

    def test_expand_child_among_other_classes(self):
        html = make_table([make_row("1", "BetBoom Team", "500", classes="odd expand-child")])
        assert extract(html) == []

    def test_only_first_wikitable_is_read(self):
        page = make_page(
            make_table([make_row("1", "Team Liquid", "1000")]),
            make_table([make_row("1", "Other Table Team", "5")]),
        )
        ranks = extract(page)

        assert [r.team for r in ranks] == ["Team Liquid"]

    def test_non_wikitable_tables_are_ignored(self):
        page = make_page(
            make_table([make_row("1", "Navbox Team", "1")], classes="navbox"),
            make_table([make_row("1", "Team Liquid", "1000")]),
        )
        assert [r.team for r in extract(page)] == ["Team Liquid"]

    def test_no_table_gives_empty_collection(self):
        assert extract("<div><p>Page moved</p></div>") == []
        assert extract("") == []

    def test_missing_cells_give_empty_strings(self):
        """Rows are not dropped because a cell or descendant is missing"""
        html = make_table(
            [
                "<tr><td>1</td><td>No link</td></tr>",
                '<tr><td><b>2</b></td><td><span class="team-template-text">Plain</span></td><td>40</td></tr>',
            ]
        )
        ranks = extract(html)

        assert len(ranks) == 2
        assert (ranks[0].rank, ranks[0].team, ranks[0].score) == ("", "", "")
        assert (ranks[1].rank, ranks[1].team, ranks[1].score) == ("2", "", "")

    def test_bold_text_is_concatenated(self):
        html = make_table(
            ["<tr><td><b>1<sup>st</sup></b></td><td></td><td><b>1</b><b>2</b></td></tr>"]
        )
        record = extract(html)[0]

        assert record.rank == "1st"
        assert record.score == "1"

    def test_duplicates_are_kept(self):
        html = make_table([make_row("1", "Team A", "10"), make_row("1", "Team A", "10")])
        assert len(extract(html)) == 2


class TestClassifyHighlight:
    """Tests for classify_highlight()"""

    def test_clinched(self):
        assert classify_highlight(CLINCHED_COLOR_INDICATOR) is RowHighlight.CLINCHED

    def test_ineligible(self):
        assert classify_highlight(INELIGIBLE_COLOR_INDICATOR) is RowHighlight.INELIGIBLE

    @pytest.mark.parametrize(
        "style",
        [
            None,
            "",
            "background-color: rgb(204,255,204)",
            "background-color:rgb(204,255,204);",
            "background-color:rgb(240,240,240)",
        ],
    )
    def test_anything_else_is_none(self, style):
        """Only an exact match counts"""
        assert classify_highlight(style) is RowHighlight.NONE
