"""Command-line interface for tickrules.

The CLI is a host for the rule engine: it is the only place that reads the
wall clock, and passes the sampled time into the pure core.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Annotated, Optional

import typer

from tickrules.config import SearchConfig
from tickrules.errors import ConfigError, RuleError
from tickrules.rule import Rule
from tickrules.search import SearchOutcome, search

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="tickrules",
    help="Cron-like schedule rules: validate, match and find next occurrences",
    add_completion=False,
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Cron-like schedule rules."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _load_rule(expression: str) -> Rule:
    try:
        return Rule.parse(expression)
    except RuleError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _parse_timestamp(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"Not an ISO-8601 timestamp: {value}")


@app.command(name="check")
def check_cmd(
    expression: Annotated[str, typer.Argument(help="5-field rule expression")],
) -> None:
    """Validate a rule expression.

    Examples:
        tickrules check "*/15 9 * * 1"
    """
    rule = _load_rule(expression)
    typer.echo(f"OK: {rule}")


@app.command(name="matches")
def matches_cmd(
    expression: Annotated[str, typer.Argument(help="5-field rule expression")],
    at: Annotated[
        Optional[str],
        typer.Option("--at", help="ISO-8601 timestamp (default: now, UTC)"),
    ] = None,
) -> None:
    """Check whether a timestamp matches a rule.

    Prints true or false and exits with 0 or 1 accordingly.
    """
    rule = _load_rule(expression)
    when = _parse_timestamp(at) if at else datetime.now(timezone.utc)

    matched = rule.matches(when)
    typer.echo("true" if matched else "false")
    if not matched:
        raise typer.Exit(1)


@app.command(name="next")
def next_cmd(
    expression: Annotated[str, typer.Argument(help="5-field rule expression")],
    after: Annotated[
        Optional[str],
        typer.Option("--from", help="ISO-8601 start timestamp (default: now, UTC)"),
    ] = None,
    count: Annotated[
        int,
        typer.Option("--count", "-n", min=1, help="Number of occurrences to list"),
    ] = 1,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List the next occurrences of a rule.

    A rule with no occurrence within the search window is reported as
    "never".

    Examples:
        tickrules next "*/25 */2 * * *" --from 2000-01-01T01:00:01 -n 5
    """
    rule = _load_rule(expression)
    current = _parse_timestamp(after) if after else datetime.now(timezone.utc)

    try:
        config = SearchConfig.from_env()
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    occurrences: list[str] = []
    outcome = SearchOutcome.FOUND
    for _ in range(count):
        result = search(rule, current, config)
        if result.at is None:
            outcome = result.outcome
            break
        occurrences.append(result.at.isoformat())
        current = result.at

    logger.debug(f"Found {len(occurrences)} occurrence(s) of '{rule}'")

    if as_json:
        payload = {
            "expression": rule.to_text(),
            "outcome": outcome.value,
            "occurrences": occurrences,
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    for occurrence in occurrences:
        typer.echo(occurrence)
    if outcome is not SearchOutcome.FOUND:
        typer.echo(f"never ({outcome.value})")


if __name__ == "__main__":
    app()
