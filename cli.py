"""CLI entrypoint using Typer.

Runs the season stats pipeline from a shell or a scheduler, outside the
API server.

Example:
    $ update-season-stats --help
    $ update-season-stats update-stats 2024
"""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from core.logging import setup_logging
from core.settings import settings

console = Console()

app = typer.Typer(
    name="update-season-stats",
    help="NBA season stats and fantasy scoring",
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    """NBA season stats and fantasy scoring."""


@app.command("update-stats")
def update_stats(
    season: Annotated[
        Optional[int],
        typer.Argument(help="Season start year (e.g., 2024 for 2024-25)"),
    ] = None,
    chunk_size: Annotated[
        Optional[int],
        typer.Option("--chunk-size", "-c", min=1, help="Rows per upsert batch"),
    ] = None,
) -> None:
    """Fetch a season from BALLDONTLIE, recompute player rows and upsert them."""
    from db.base import close_db, init_db
    from pipelines import SeasonStatsPipeline

    setup_logging()

    season = season if season is not None else settings.nba_season
    console.print(f"[bold]Updating season stats for {season}-{str(season + 1)[-2:]}[/bold]")

    init_db(settings.database_url)
    try:
        result = SeasonStatsPipeline(chunk_size=chunk_size).run_sync(season)
    finally:
        close_db()

    if result.status != "success":
        console.print(f"[red]{result.message}[/red]: {escape(result.error or '')}")
        raise typer.Exit(code=1)

    console.print(
        f"[green]Upserted {result.records_processed} player rows "
        f"in {result.duration_seconds:.1f}s[/green]"
    )


if __name__ == "__main__":
    app()
