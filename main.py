import sys
import asyncio
import argparse
from typing import List, Optional

# --- Settings/Logging ---
from dpc_rankings.logging.setup import setup_logging
from dpc_rankings.config.settings import settings

setup_logging()

from loguru import logger

from dpc_rankings.lookup.rank_index import RankIndex
from dpc_rankings.models.rank import (
    RankCollection,
    RankFailure,
    RankLookupResult,
    RankRecord,
)
from dpc_rankings.scrapers.base_scraper import TransportError

from rich import print
from rich.panel import Panel
from rich.table import Table


def status_label(record: RankRecord) -> str:
    if record.is_clinched:
        return "[green]clinched[/green]"
    if record.is_ineligible:
        return "[red]ineligible[/red]"
    return ""


def render_rankings(ranks: RankCollection) -> Table:
    table = Table(title=f"DPC Rankings ({settings.rankings_page})")
    table.add_column("Rank", justify="right")
    table.add_column("Team")
    table.add_column("Points", justify="right")
    table.add_column("Status")
    for record in ranks:
        table.add_row(record.rank, record.team, record.score, status_label(record))
    return table


def render_result(result: RankLookupResult) -> Panel:
    if isinstance(result, RankFailure):
        return Panel(result.message, title=result.kind.value, border_style="red")
    record = result.record
    body = f"#{record.rank}  {record.team}  ({record.score} pts)"
    status = status_label(record)
    if status:
        body = f"{body}  {status}"
    return Panel(body, title="Standing", border_style="green")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Look up Dota Pro Circuit team rankings."
    )
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("all", help="List every ranked team (default).")
    rank_cmd = commands.add_parser("rank", help="Show the team at a given rank.")
    rank_cmd.add_argument("rank", help="Rank as shown in the table, e.g. 1")
    team_cmd = commands.add_parser("team", help="Show a team's standing.")
    team_cmd.add_argument("team", nargs="+", help="Team name (case-insensitive)")
    return parser


async def run(argv: Optional[List[str]] = None) -> int:
    """Runs one query and prints it. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    index = RankIndex()
    try:
        if args.command == "rank":
            result = await index.standing_result(args.rank)
        elif args.command == "team":
            result = await index.team_result(" ".join(args.team))
        else:
            try:
                ranks = await index.fetch_all()
            except TransportError as e:
                print(Panel(str(e), title="TRANSPORT", border_style="red"))
                return 1
            print(render_rankings(ranks))
            logger.info(f"Listed {len(ranks)} teams.")
            return 0

        print(render_result(result))
        return 1 if isinstance(result, RankFailure) else 0
    finally:
        await index.close()


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(run()))
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
