"""Typer CLI entrypoint for candidate search."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Sequence

import typer
import yaml
from pydantic import ValidationError

from .adapters import ResultMappingError
from .client import SESSION_ENV_VAR, SearchRequestError
from .container import create_container
from .core.bars import score_category
from .core.query import QueryValidationError
from .core.ranking import compute_stats, effective_score, filter_by_min_score
from .logging import configure_logging
from .pipeline import OutputWriter, serialize_outcome
from .schemas import Candidate
from .schemas.config import load_config

app = typer.Typer(help="Recruiting candidate search CLI.")


@app.command()
def search(
    query: str = typer.Argument(..., help="Free-text search query."),
    limit: Optional[int] = typer.Option(None, min=1, help="Maximum number of results (default 50)."),
    enrich: bool = typer.Option(False, "--enrich", help="Fetch AI-extracted CV metadata per candidate."),
    skip_invalid: bool = typer.Option(False, "--skip-invalid", help="Skip malformed results instead of aborting."),
    output: Optional[Path] = typer.Option(None, dir_okay=False, resolve_path=True, help="Output JSON path."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    session: Optional[str] = typer.Option(None, envvar=SESSION_ENV_VAR, help="Search service session token."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    log_format: str = typer.Option("json", help="Log renderer: json or console."),
) -> None:
    """Query the CV search service and print ranked candidates."""
    settings = _load_settings(config)
    if session:
        settings.setdefault("session", {})["token"] = session
    if skip_invalid:
        settings.setdefault("mapping", {})["skip_invalid"] = True

    configure_logging(log_level, log_format)
    pipeline = create_container(settings=settings).pipeline()

    try:
        outcome = pipeline.run(query, limit=limit, enrich=enrich)
    except QueryValidationError as exc:
        raise typer.BadParameter(str(exc), param_hint="query") from exc
    except (SearchRequestError, ResultMappingError) as exc:
        typer.echo(f"Search failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    _echo_ranking(outcome.candidates)
    for message in outcome.errors:
        typer.echo(f"Skipped: {message}", err=True)

    if output:
        OutputWriter().write(
            output,
            serialize_outcome(query, outcome.candidates, outcome.stats, errors=outcome.errors),
        )
        typer.echo(f"Saved {len(outcome.candidates)} candidates to {output}.")


@app.command()
def rank(
    query: str = typer.Argument(..., help="Free-text search query."),
    results: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Saved raw results JSON path."),
    output: Optional[Path] = typer.Option(None, dir_okay=False, resolve_path=True, help="Output JSON path."),
    min_score: int = typer.Option(0, min=0, max=100, help="Drop candidates scoring below this value."),
    skip_invalid: bool = typer.Option(False, "--skip-invalid", help="Skip malformed results instead of aborting."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    log_format: str = typer.Option("json", help="Log renderer: json or console."),
) -> None:
    """Score saved search results locally and print them ranked."""
    settings = _load_settings(config)
    if skip_invalid:
        settings.setdefault("mapping", {})["skip_invalid"] = True

    configure_logging(log_level, log_format)
    container = create_container(settings=settings)

    try:
        raw = json.loads(results.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid results JSON: {exc}", param_hint="--results") from exc
    if isinstance(raw, dict):
        raw = raw.get("results", [])

    try:
        candidates, errors = container.pipeline().map(raw)
    except ResultMappingError as exc:
        typer.echo(f"Mapping failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    session = container.search_session(candidates)
    try:
        landed = session.search(query)
    except QueryValidationError as exc:
        raise typer.BadParameter(str(exc), param_hint="query") from exc
    if not landed:
        typer.echo(f"Scoring failed: {session.error}", err=True)
        raise typer.Exit(code=1)

    ranked = filter_by_min_score(session.candidates, min_score)
    _echo_ranking(ranked)
    for message in errors:
        typer.echo(f"Skipped: {message}", err=True)
    session_stats = session.stats()

    if output:
        extra: dict[str, Any] = {}
        if session_stats:
            extra = {
                "search_criteria": session_stats.search_criteria,
                "is_mock": session_stats.is_mock,
                "is_fallback": session_stats.is_fallback,
            }
        OutputWriter().write(
            output,
            serialize_outcome(query, ranked, compute_stats(ranked), errors=errors, extra=extra),
        )
        typer.echo(f"Saved {len(ranked)} candidates to {output}.")


def _load_settings(config: Path | None) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle)
    try:
        return load_config(loaded).to_settings()
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


def _echo_ranking(candidates: Sequence[Candidate]) -> None:
    if not candidates:
        typer.echo("No candidates found.")
        return
    for position, candidate in enumerate(candidates, start=1):
        score = effective_score(candidate)
        bars = "".join("#" if filled else "." for filled in candidate.match_bars)
        typer.echo(
            f"{position:>3}. [{bars}] {score:>3} {score_category(score):<9} "
            f"{candidate.display_name} | {candidate.contact.address} | {candidate.status}"
        )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
