"""
Command-line interface for LeadScore
"""
import json
import sys

import click
import yaml

from core.config import settings
from core.exceptions import LeadScoreError
from core.logging import get_logger

from .defaults import default_team_document
from .engine import ScoringEngine
from .hot_reload import watch_if_enabled
from .rules_loader import FileScoringSource
from .rules_schema import load_rules_document, validate_scoring_config, validate_scoring_rule

logger = get_logger(__name__)


@click.group()
@click.version_option(version=settings.app_version)
def cli():
    """LeadScore CLI - deterministic lead scoring and rule evaluation"""
    pass


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False))
def validate(path: str):
    """Validate a scoring rules YAML file"""
    try:
        document = load_rules_document(path)
    except LeadScoreError as e:
        click.echo(f"✗ {e.message}", err=True)
        sys.exit(1)

    problems = 0
    for team_id, team in document.teams.items():
        click.echo(f"Team {team_id}: {len(team.rules)} rule(s)")
        for message in validate_scoring_config(team.config.model_dump(by_alias=True, exclude_none=True)):
            click.echo(f"  ! config {message}")
        for rule in team.rules:
            errors = validate_scoring_rule(rule)
            problems += len(errors)
            for message in errors:
                click.echo(f"  ✗ rule {rule.id}: {message}")

    if problems:
        click.echo(f"✗ {problems} rule problem(s) found in {path}", err=True)
        sys.exit(1)
    click.echo(f"✓ {path} is valid")


@cli.command()
@click.option("--team", "team_id", required=True, help="Team whose configuration to use")
@click.option(
    "--rules-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Scoring rules YAML (defaults to SCORING_RULES_PATH)",
)
@click.option("--explain", is_flag=True, help="Print a human-readable summary instead of JSON")
@click.argument("lead_file", type=click.File("r"))
def score(team_id: str, rules_file: str, explain: bool, lead_file):
    """Score the lead in LEAD_FILE (JSON, use - for stdin)"""
    try:
        lead = json.load(lead_file)
    except json.JSONDecodeError as e:
        click.echo(f"✗ Lead file is not valid JSON: {e}", err=True)
        sys.exit(1)

    try:
        source = FileScoringSource(rules_file)
        result = source.evaluate(team_id, lead, engine=ScoringEngine.from_settings())
    except LeadScoreError as e:
        click.echo(f"✗ {e.message}", err=True)
        sys.exit(1)

    if explain:
        click.echo(result.explain())
    else:
        click.echo(json.dumps(result.to_dict(), indent=2))


@cli.command()
@click.option("--team", "team_id", required=True, help="Team whose configuration to use")
@click.option(
    "--rules-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Scoring rules YAML (defaults to SCORING_RULES_PATH)",
)
def stream(team_id: str, rules_file: str):
    """Score newline-delimited JSON leads from stdin, one result per line

    With HOT_RELOAD_ENABLED the rules file is watched and edits apply to the
    leads that follow.
    """
    try:
        source = FileScoringSource(rules_file)
        source.get_config(team_id)
    except LeadScoreError as e:
        click.echo(f"✗ {e.message}", err=True)
        sys.exit(1)

    engine = ScoringEngine.from_settings()
    watcher = watch_if_enabled(source)
    try:
        for line_number, line in enumerate(click.get_text_stream("stdin"), start=1):
            if not line.strip():
                continue
            try:
                lead = json.loads(line)
            except json.JSONDecodeError as e:
                click.echo(f"! Skipping line {line_number}: not valid JSON ({e})", err=True)
                continue
            result = source.evaluate(team_id, lead, engine=engine)
            click.echo(json.dumps(result.to_dict()))
    except LeadScoreError as e:
        click.echo(f"✗ {e.message}", err=True)
        sys.exit(1)
    finally:
        if watcher is not None:
            watcher.stop()


@cli.command()
@click.option("--team", "team_id", default="default", help="Team id for the generated document")
def defaults(team_id: str):
    """Print the default team configuration as a rules document"""
    click.echo(yaml.safe_dump(default_team_document(team_id), sort_keys=False), nl=False)


if __name__ == "__main__":
    cli()
