"""Unified CLI for cfb-loyalty.

Provides three subcommands:
    cfb-loyalty score  – aggregate and score one player/team from the API
    cfb-loyalty web    – run the JSON API (FastAPI + uvicorn)
    cfb-loyalty mcp    – run the MCP server (stdio or SSE transport)

Running ``cfb-loyalty`` without a subcommand defaults to ``web``.
"""

import asyncio
import datetime
import json
import logging

import click

from cfb_loyalty import __version__


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="cfb-loyalty")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """CFB Loyalty Index – transfer probability for college football athletes."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(web)


@cli.command()
@click.option(
    "--year",
    type=int,
    default=lambda: datetime.date.today().year,
    show_default="current year",
    help="Season year.",
)
@click.option("--team", default=None, help="School name (optional if --player is given).")
@click.option("--player", default=None, help="Player name; resolves the team if --team is omitted.")
@click.option("--nil", "nil_score", type=float, default=None, help="NIL strength 0–1 (1 = strong).")
@click.option(
    "--social", type=float, default=None, help="Social/quotes sentiment 0–1 (1 = unhappy)."
)
@click.option(
    "--distance", type=float, default=None, help="Miles from high school (overrides heuristic)."
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as JSON.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose logging.")
def score(
    year: int,
    team: str | None,
    player: str | None,
    nil_score: float | None,
    social: float | None,
    distance: float | None,
    as_json: bool,
    verbose: bool,
) -> None:
    """Estimate the probability that a player transfers in the next 12 months."""
    from cfb_loyalty.app import _setup_logging
    from cfb_loyalty.cfbd_api import CfbdApiError
    from cfb_loyalty.scoring.transfer_probability import compute_transfer_probability
    from cfb_loyalty.services.aggregator import (
        InputError,
        ResolutionError,
        aggregate_player_input,
    )

    _setup_logging(level=logging.DEBUG if verbose else logging.WARNING)

    if not (team or "").strip() and not (player or "").strip():
        raise click.UsageError("Provide --player, --team, or both.")

    overrides = {
        "nilScore": nil_score,
        "socialSentiment": social,
        "distanceFromHighSchoolMiles": distance,
    }

    if not as_json:
        click.echo("Fetching data from College Football Data API...", err=True)
    try:
        aggregated = asyncio.run(aggregate_player_input(year, team, player, overrides))
    except (InputError, ResolutionError, CfbdApiError) as exc:
        raise click.ClickException(str(exc)) from exc

    result = compute_transfer_probability(aggregated.signals)

    if as_json:
        click.echo(json.dumps({"input": aggregated.to_payload(), **result.model_dump()}, indent=2))
        return

    meta = aggregated.meta
    click.echo("\n--- Transfer probability ---")
    click.echo(f"Player context: {meta.playerName or '(any)'} @ {meta.team} ({meta.year})")
    probability = click.style(f"{result.probability}%", fg="cyan", bold=True)
    click.echo(f"Probability to transfer (next 12 months): {probability}")
    click.echo("\nFactor breakdown (risk 0–1, weight, contribution):")
    for name, entry in result.breakdown.items():
        click.echo(
            f"  {name}: risk={entry.risk}, weight={entry.weight}, "
            f"contribution={entry.contribution}"
        )


@cli.command()
@click.option("--host", default=None, help="Host to bind to (default: HOST or 127.0.0.1).")
@click.option("--port", type=int, default=None, help="Port to listen on (default: PORT or 3000).")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose logging.")
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Auto-reload on code changes (development only).",
)
def web(host: str | None, port: int | None, verbose: bool, reload: bool) -> None:
    """Run the JSON API (default)."""
    import uvicorn

    from cfb_loyalty.app import _setup_logging
    from cfb_loyalty.settings import settings

    host = host or settings.host
    port = port or settings.port
    log_level = "info" if verbose else "warning"
    _setup_logging(level=logging.DEBUG if verbose else logging.WARNING)

    url = f"http://{host}:{port}"
    click.echo(f"✦ cfb-loyalty running at {click.style(url, fg='cyan', bold=True)}")
    if settings.has_api_key:
        click.echo("  CFBD API key loaded.")
    else:
        click.echo(
            f"  {click.style('⚠ No CFBD_API_KEY configured – API lookups will fail.', fg='yellow')}"
        )
    click.echo("  GET  /api/score?team=...   – score from the API")
    click.echo("  POST /api/score            – score with a JSON body")
    click.echo("  Press Ctrl+C to stop.\n")

    if reload:
        uvicorn.run("cfb_loyalty.app:app", host=host, port=port, log_level=log_level, reload=True)
    else:
        from cfb_loyalty.app import app

        uvicorn.run(app, host=host, port=port, log_level=log_level)


@cli.command()
@click.option(
    "--sse",
    is_flag=True,
    default=False,
    help="Use SSE transport instead of stdio.",
)
@click.option(
    "--port",
    default=8080,
    show_default=True,
    help="Port for SSE transport.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose logging.")
def mcp(sse: bool, port: int, verbose: bool) -> None:
    """Run the MCP server."""
    from cfb_loyalty.mcp_server import mcp as mcp_server

    if verbose:
        logging.basicConfig(level=logging.INFO)
    else:
        logging.basicConfig(level=logging.WARNING)

    if sse:
        mcp_server.settings.port = port
        mcp_server.run(transport="sse")
    else:
        mcp_server.run(transport="stdio")
