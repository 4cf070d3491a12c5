"\"\"\"Typer CLI entrypoint for career recommendations.\"\"\""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

import typer
from pydantic import ValidationError
from rapidfuzz import process

from .config import read_config_file
from .container import RecommendationContainer, create_container
from .core import CareerProfile, Recommendation
from .errors import CatalogLoadError, InvalidInputError
from .logging import configure_logging
from .pipeline import AuditLogger
from .schemas import AppConfig

app = typer.Typer(help="Skill-based career recommendation CLI.")

_CATALOG_HELP = "Catalog YAML/JSON path (defaults to the bundled catalog)."
_CONFIG_HELP = "YAML config path."


def _bootstrap(
    config: Optional[Path],
    catalog: Optional[Path],
    log_level: str,
) -> tuple[AppConfig, RecommendationContainer]:
    configure_logging(log_level)
    try:
        app_config = read_config_file(config) if config else AppConfig()
    except (ValidationError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc

    settings: dict[str, Any] = app_config.to_settings()
    if catalog:
        settings["catalog"]["path"] = str(catalog)
    container = create_container(settings=settings)
    try:
        container.normalizer()
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc
    try:
        container.catalog()
    except CatalogLoadError as exc:
        typer.echo("Catalog is invalid:", err=True)
        for error in exc.errors:
            typer.echo(f"  - {error}", err=True)
        raise typer.Exit(code=1) from exc
    except FileNotFoundError as exc:
        typer.echo(f"Catalog not found: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    return app_config, container


def _render(position: int, rec: Recommendation) -> str:
    score = rec.score
    required_total = len(rec.career.required_skills)
    desirable_total = len(rec.career.desirable_skills)
    return (
        f"{position}. {rec.career.title} ({rec.career.id}) "
        f"score={score.value:.2f} "
        f"required={score.matched_required_count}/{required_total} "
        f"desirable={score.matched_desirable_count}/{desirable_total}"
    )


def _describe(profile: CareerProfile) -> str:
    lines = [
        f"{profile.title} ({profile.id})",
        f"category: {profile.category}",
    ]
    if profile.seniority:
        lines.append(f"seniority: {profile.seniority}")
    if profile.description:
        lines.append(f"description: {profile.description}")
    lines.append("required: " + ", ".join(s.token for s in profile.required_skills))
    if profile.desirable_skills:
        lines.append("desirable: " + ", ".join(s.token for s in profile.desirable_skills))
    return "\n".join(lines)


@app.command()
def recommend(
    skill: List[str] = typer.Option(..., "--skill", "-s", help="Candidate skill; repeat for several."),
    limit: Optional[int] = typer.Option(None, help="Maximum number of recommendations."),
    min_score: Optional[float] = typer.Option(None, help="Minimum score in [0, 1]."),
    catalog: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help=_CATALOG_HELP),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help=_CONFIG_HELP),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of text."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Rank catalog careers against the given skills."""
    _, container = _bootstrap(config, catalog, log_level)
    engine = container.engine()
    try:
        results = engine.recommend(skill, limit=limit, min_score=min_score)
    except InvalidInputError as exc:
        typer.echo(f"Invalid input: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    if as_json:
        typer.echo(json.dumps([rec.to_dict() for rec in results], ensure_ascii=False, indent=2))
        return
    if not results:
        typer.echo("No matching careers.")
        return
    for position, rec in enumerate(results, start=1):
        typer.echo(_render(position, rec))


@app.command()
def batch(
    candidates: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Candidates JSONL path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    limit: Optional[int] = typer.Option(None, help="Maximum recommendations per candidate."),
    min_score: Optional[float] = typer.Option(None, help="Minimum score in [0, 1]."),
    catalog: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help=_CATALOG_HELP),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help=_CONFIG_HELP),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
    audit_log: Optional[Path] = typer.Option(None, dir_okay=False, help="Audit log output (JSONL)."),
) -> None:
    """Recommend careers for every candidate in a JSONL file."""
    _, container = _bootstrap(config, catalog, log_level)
    pipeline = container.pipeline()
    audit_logger = AuditLogger(audit_log) if audit_log else None

    try:
        results = pipeline.run(
            candidates_ref=candidates.resolve(),
            output_path=output,
            limit=limit,
            min_score=min_score,
            audit_logger=audit_logger,
        )
    except InvalidInputError as exc:
        typer.echo(f"Invalid input: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    typer.echo(f"Processed {len(results)} candidates. Results saved to {output}.")


@app.command()
def show(
    career_id: str = typer.Argument(..., help="Career id to display."),
    skill: Optional[List[str]] = typer.Option(None, "--skill", "-s", help="Explain the match for these skills."),
    catalog: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help=_CATALOG_HELP),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help=_CONFIG_HELP),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Show one career profile, optionally with a match breakdown."""
    _, container = _bootstrap(config, catalog, log_level)
    career_catalog = container.catalog()
    profile = career_catalog.by_id(career_id)
    if profile is None:
        typer.echo(f"Unknown career id: {career_id}", err=True)
        suggestions = process.extract(career_id, career_catalog.ids(), limit=3, score_cutoff=60)
        if suggestions:
            typer.echo("Did you mean: " + ", ".join(match for match, _, _ in suggestions), err=True)
        raise typer.Exit(code=1)

    typer.echo(_describe(profile))
    if not skill:
        return
    try:
        rec = container.engine().explain(skill, career_id)
    except InvalidInputError as exc:
        typer.echo(f"Invalid input: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    if rec is None:
        raise typer.Exit(code=1)
    typer.echo(f"score: {rec.score.value:.2f}")
    for match in rec.score.matches:
        typer.echo(
            f"  {match.requirement:<9} {match.profile_skill.token} <- "
            f"{match.candidate_skill.surface} [{match.match_type.value}]"
        )
    for missing in rec.score.missing_required:
        typer.echo(f"  missing   {missing.token}")


@app.command()
def search(
    query: str = typer.Argument("", help="Free-text query over titles, categories, skills and descriptions."),
    seniority: Optional[str] = typer.Option(None, help="Only careers at this experience level."),
    catalog: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help=_CATALOG_HELP),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help=_CONFIG_HELP),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Search the catalog."""
    app_config, container = _bootstrap(config, catalog, log_level)
    matches = container.catalog().search(
        query,
        min_similarity=app_config.catalog.search_min_similarity,
    )
    if seniority:
        level = container.catalog().by_seniority(seniority)
        matches = [profile for profile in matches if profile in level]
    if not matches:
        typer.echo("No careers found.")
        return
    for profile in matches:
        typer.echo(f"{profile.id}\t{profile.title}\t{profile.category}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
